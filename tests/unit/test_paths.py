from __future__ import annotations

from pathlib import Path

import pytest

from sedit.tools.paths import PathResolutionError, PathResolver


def test_resolve_maps_relative_paths_under_root(tmp_path: Path) -> None:
    resolver = PathResolver(tmp_path)

    assert resolver.resolve("src/app.py") == (tmp_path / "src" / "app.py").resolve()
    assert resolver.resolve("src/../notes.txt") == (tmp_path / "notes.txt").resolve()


@pytest.mark.parametrize("candidate", ["../outside.txt", "src/../../outside.txt"])
def test_resolve_rejects_traversal(tmp_path: Path, candidate: str) -> None:
    resolver = PathResolver(tmp_path / "root")

    with pytest.raises(PathResolutionError, match="Path traversal detected"):
        resolver.resolve(candidate)


def test_resolve_rejects_absolute_paths(tmp_path: Path) -> None:
    resolver = PathResolver(tmp_path)

    with pytest.raises(PathResolutionError, match="Absolute paths are not allowed"):
        resolver.resolve(str(tmp_path / "file.txt"))


@pytest.mark.parametrize("candidate", ["", "   ", None, 42])
def test_resolve_rejects_malformed_input(tmp_path: Path, candidate: object) -> None:
    with pytest.raises(PathResolutionError):
        PathResolver(tmp_path).resolve(candidate)


def test_resolve_rejects_symlink_escape(tmp_path: Path) -> None:
    root = tmp_path / "root"
    root.mkdir()
    outside = tmp_path / "outside"
    outside.mkdir()
    (root / "link").symlink_to(outside, target_is_directory=True)

    with pytest.raises(PathResolutionError):
        PathResolver(root).resolve("link/secret.txt")


@pytest.mark.parametrize("candidate", [" notes.txt", "notes.txt ", "src/app.py\n"])
def test_resolve_rejects_surrounding_whitespace(tmp_path: Path, candidate: str) -> None:
    with pytest.raises(PathResolutionError, match="whitespace"):
        PathResolver(tmp_path).resolve(candidate)
