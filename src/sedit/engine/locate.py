"""Occurrence-indexed match locators for regex and literal search patterns."""

from __future__ import annotations

import re
from typing import Pattern, Sequence

from ..structured import CharSpan, LineSpan
from .indentation import lines_match


def compile_search_pattern(pattern: str) -> Pattern[str]:
    """Compile ``pattern`` for regex mode; raises ``re.error`` on bad syntax."""
    return re.compile(pattern)


def find_nth_regex_match(content: str, pattern: Pattern[str], occurrence: int) -> CharSpan | None:
    """Return the character span of the ``occurrence``-th match of ``pattern``.

    Matches are counted from the start of ``content``. A zero-width match
    moves the scan cursor forward by one character so the scan always ends.
    """
    if occurrence < 1:
        return None
    found = 0
    position = 0
    while position <= len(content):
        match = pattern.search(content, position)
        if match is None:
            break
        found += 1
        if found == occurrence:
            return CharSpan(start=match.start(), end=match.end())
        if match.end() == match.start():
            position = match.end() + 1
        else:
            position = match.end()
    return None


def find_nth_literal_match(
    lines: Sequence[str],
    pattern_lines: Sequence[str],
    *,
    start_index: int,
    ignore_leading_whitespace: bool,
    occurrence: int,
) -> LineSpan | None:
    """Return the line span of the ``occurrence``-th block equal to ``pattern_lines``.

    Candidate blocks start no earlier than ``start_index``.
    """
    if occurrence < 1 or not pattern_lines:
        return None
    width = len(pattern_lines)
    found = 0
    for index in range(max(0, start_index), len(lines) - width + 1):
        block = lines[index : index + width]
        if all(
            lines_match(file_line, pattern_line, ignore_leading_whitespace)
            for file_line, pattern_line in zip(block, pattern_lines)
        ):
            found += 1
            if found == occurrence:
                return LineSpan(start=index, end=index + width)
    return None


__all__ = ["compile_search_pattern", "find_nth_literal_match", "find_nth_regex_match"]
