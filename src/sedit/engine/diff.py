"""Unified diff reporting for edited file content."""

from __future__ import annotations

import difflib
import logging
from dataclasses import dataclass
from typing import Protocol

LOGGER = logging.getLogger(__name__)

DEFAULT_CONTEXT_LINES = 3
NO_NEWLINE_MARKER = "\\ No newline at end of file"


def _diff_lines(text: str) -> list[str]:
    """Split on LF only, the same line boundary the engine edits on."""
    parts = text.split("\n")
    lines = [f"{part}\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


class DiffFormatter(Protocol):
    """Anything able to render a textual patch between two versions."""

    def diff(self, name: str, before: str, after: str) -> str: ...


@dataclass(slots=True)
class UnifiedDiffFormatter:
    """``difflib`` backed unified diff labelled with ``name`` on both sides."""

    context: int = DEFAULT_CONTEXT_LINES

    def diff(self, name: str, before: str, after: str) -> str:
        chunks: list[str] = []
        for line in difflib.unified_diff(
            _diff_lines(before),
            _diff_lines(after),
            fromfile=name,
            tofile=name,
            fromfiledate="",
            tofiledate="",
            n=self.context,
        ):
            if line.endswith("\n"):
                chunks.append(line)
            else:
                chunks.append(f"{line}\n{NO_NEWLINE_MARKER}\n")
        return "".join(chunks)


def render_diff(formatter: DiffFormatter, name: str, before: str, after: str) -> str:
    """Render a diff, returning a placeholder instead of raising on failure."""
    try:
        return formatter.diff(name, before, after)
    except Exception as error:  # noqa: BLE001 - diff output is best effort
        LOGGER.warning("Failed to generate diff for %s: %s", name, error, exc_info=True)
        return f"Error generating diff: {error}"


__all__ = [
    "DEFAULT_CONTEXT_LINES",
    "DiffFormatter",
    "UnifiedDiffFormatter",
    "render_diff",
]
