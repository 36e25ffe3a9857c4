"""Resolve caller-supplied relative paths inside a sandboxed workspace root."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any


class PathResolutionError(ValueError):
    """Raised when a requested path is malformed or escapes the workspace."""


@dataclass(slots=True)
class PathResolver:
    """Map relative paths onto ``root`` and refuse anything outside it."""

    root: Path

    def __post_init__(self) -> None:
        self.root = Path(self.root).resolve()

    def resolve(self, relative: Any) -> Path:
        if not isinstance(relative, str):
            raise PathResolutionError("Path must be a string.")
        if not relative.strip():
            raise PathResolutionError("Path must not be empty.")
        if relative != relative.strip():
            raise PathResolutionError(f"Path must not start or end with whitespace. Received: '{relative}'")
        path = Path(relative)
        if path.is_absolute():
            raise PathResolutionError(f"Absolute paths are not allowed. Received: '{relative}'")
        resolved = (self.root / path).resolve()
        try:
            resolved.relative_to(self.root)
        except ValueError:
            raise PathResolutionError(
                f"Path traversal detected. Attempted path '{relative}' resolved outside the workspace root "
                f"'{self.root.as_posix()}'. Access denied."
            ) from None
        return resolved


__all__ = ["PathResolutionError", "PathResolver"]
