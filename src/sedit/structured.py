"""Typed payloads exchanged between the edit engine stages."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class CharSpan:
    """Character offsets of a regex match within the whole content string."""

    start: int
    end: int


@dataclass(slots=True, frozen=True)
class LineSpan:
    """End-exclusive line indexes of a literal block match."""

    start: int
    end: int


@dataclass(slots=True)
class ChangeResult:
    """Outcome of applying a single edit request to some content."""

    content: str
    applied: bool
    error: str | None = None


@dataclass(slots=True)
class FileChangeSummary:
    """Aggregate result of applying every request aimed at one file."""

    original: str
    content: str
    applied: int = 0
    notes: tuple[str, ...] = field(default_factory=tuple)

    @property
    def changed(self) -> bool:
        return self.applied > 0

    @property
    def skipped(self) -> int:
        return len(self.notes)


__all__ = ["ChangeResult", "CharSpan", "FileChangeSummary", "LineSpan"]
