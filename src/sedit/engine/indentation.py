"""Leading-whitespace helpers shared by the locators and the applicator."""

from __future__ import annotations

import re
from typing import Pattern, Sequence

_LEADING_WHITESPACE: Pattern[str] = re.compile(r"[^\S\r\n]*")


def get_indentation(line: str | None) -> str:
    """Return the leading whitespace of ``line`` (empty for ``None``)."""
    if not line:
        return ""
    match = _LEADING_WHITESPACE.match(line)
    return match.group(0) if match else ""


def apply_indentation(content: str, indent: str) -> list[str]:
    """Prefix every line of ``content`` with ``indent``."""
    return [f"{indent}{line}" for line in content.split("\n")]


def lines_match(file_line: str | None, pattern_line: str | None, ignore_leading_whitespace: bool) -> bool:
    """Compare a file line with a pattern line.

    When ``ignore_leading_whitespace`` is set the pattern line is always
    left-stripped, while the file line is only stripped if the pattern line
    carries text. Blank pattern lines therefore still require a blank file line.
    """
    if file_line is None or pattern_line is None:
        return False
    if not ignore_leading_whitespace:
        return file_line == pattern_line
    stripped_pattern = pattern_line.lstrip()
    effective_file_line = file_line.lstrip() if stripped_pattern else file_line
    return effective_file_line == stripped_pattern


def indent_for_offset(content: str, offset: int, preserve_indentation: bool) -> str:
    """Indentation of the line containing character ``offset``."""
    if not preserve_indentation:
        return ""
    offset = max(0, min(offset, len(content)))
    line_start = content.rfind("\n", 0, offset) + 1
    line_end = content.find("\n", line_start)
    if line_end == -1:
        line_end = len(content)
    return get_indentation(content[line_start:line_end])


def indent_for_line(lines: Sequence[str], index: int, preserve_indentation: bool) -> str:
    """Indentation of ``lines[index]``, or empty when out of range."""
    if not preserve_indentation or index < 0 or index >= len(lines):
        return ""
    return get_indentation(lines[index])


def indent_for_insertion(lines: Sequence[str], index: int, preserve_indentation: bool) -> str:
    """Indentation of the line preceding insertion point ``index``."""
    if index <= 0:
        return ""
    return indent_for_line(lines, index - 1, preserve_indentation)


__all__ = [
    "apply_indentation",
    "get_indentation",
    "indent_for_insertion",
    "indent_for_line",
    "indent_for_offset",
    "lines_match",
]
