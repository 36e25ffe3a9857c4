"""Apply one edit request to file content without touching the filesystem."""

from __future__ import annotations

import re

from ..schema import EditRequest
from ..structured import ChangeResult
from .indentation import apply_indentation, indent_for_insertion, indent_for_line, indent_for_offset
from .locate import compile_search_pattern, find_nth_literal_match, find_nth_regex_match

INVALID_SHAPE_MESSAGE = "Invalid change operation: requires search_pattern or replace_content."


def apply_change(content: str, request: EditRequest) -> ChangeResult:
    """Dispatch ``request`` to insertion, regex or literal handling.

    The returned ``content`` equals the input whenever ``applied`` is false.
    """
    start_line = request.start_line
    if not isinstance(start_line, int) or start_line < 1:
        return ChangeResult(content=content, applied=False, error=f"Invalid start_line {start_line}")

    if request.is_insertion:
        if request.replace_content is None:
            if request.search_pattern is None:
                return ChangeResult(content=content, applied=False, error=INVALID_SHAPE_MESSAGE)
            return ChangeResult(content=content, applied=False, error="replace_content is required for insertion.")
        return insert_content(content, request)
    if request.use_regex:
        return replace_regex(content, request)
    return replace_literal(content, request)


def insert_content(content: str, request: EditRequest) -> ChangeResult:
    """Insert ``replace_content`` before ``start_line``, appending past the end."""
    if request.replace_content is None:
        return ChangeResult(content=content, applied=False, error="replace_content is required for insertion.")
    lines = content.split("\n")
    index = min(max(request.start_line - 1, 0), len(lines))
    indent = indent_for_insertion(lines, index, request.preserve_indentation)
    lines[index:index] = apply_indentation(request.replace_content, indent)
    return ChangeResult(content="\n".join(lines), applied=True)


def replace_literal(content: str, request: EditRequest) -> ChangeResult:
    """Replace or delete the Nth literal block found at or after ``start_line``."""
    lines = content.split("\n")
    span = find_nth_literal_match(
        lines,
        (request.search_pattern or "").split("\n"),
        start_index=request.start_line - 1,
        ignore_leading_whitespace=request.ignore_leading_whitespace,
        occurrence=request.match_occurrence,
    )
    if span is None:
        return ChangeResult(content=content, applied=False)

    if request.replace_content is None:
        replacement: list[str] = []
    else:
        indent = indent_for_line(lines, span.start, request.preserve_indentation)
        replacement = apply_indentation(request.replace_content, indent)
    lines[span.start : span.end] = replacement
    return ChangeResult(content="\n".join(lines), applied=True)


def replace_regex(content: str, request: EditRequest) -> ChangeResult:
    """Replace or delete the Nth regex match counted from the top of ``content``."""
    try:
        pattern = compile_search_pattern(request.search_pattern or "")
    except re.error as error:
        return ChangeResult(
            content=content,
            applied=False,
            error=f'Invalid regex pattern "{request.search_pattern}": {error}',
        )

    span = find_nth_regex_match(content, pattern, request.match_occurrence)
    if span is None:
        return ChangeResult(content=content, applied=False)

    if request.replace_content is None:
        replacement = ""
    else:
        indent = indent_for_offset(content, span.start, request.preserve_indentation)
        replacement = "\n".join(apply_indentation(request.replace_content, indent))
    return ChangeResult(content=content[: span.start] + replacement + content[span.end :], applied=True)


__all__ = ["apply_change", "insert_content", "replace_literal", "replace_regex"]
