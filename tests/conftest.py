from __future__ import annotations

import sys
import textwrap
from dataclasses import dataclass
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@dataclass(slots=True)
class Workspace:
    """Fixture payload representing a sandboxed directory of editable files."""

    root: Path

    def write(self, relative: str, content: str) -> Path:
        target = self.root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)
        return target

    def read(self, relative: str) -> str:
        with (self.root / relative).open("r", encoding="utf-8", newline="") as handle:
            return handle.read()


@pytest.fixture()
def workspace(tmp_path: Path) -> Workspace:
    """Create a workspace with a small Python module and a notes file."""

    root = tmp_path / "workspace"
    root.mkdir()
    ws = Workspace(root=root)
    ws.write(
        "src/app.py",
        textwrap.dedent(
            """
            def greet(name):
                if name:
                    return f"hello {name}"
                return "hello"
            """
        ).lstrip(),
    )
    ws.write("notes.txt", "alpha\nbeta\ngamma\n")
    return ws
