"""Pure structural edit engine: locate, re-indent, rewrite and diff file text."""

from .apply import apply_change
from .diff import DiffFormatter, UnifiedDiffFormatter, render_diff
from .indentation import apply_indentation, get_indentation, lines_match
from .locate import compile_search_pattern, find_nth_literal_match, find_nth_regex_match
from .orchestrator import apply_changes, order_requests

__all__ = [
    "DiffFormatter",
    "UnifiedDiffFormatter",
    "apply_change",
    "apply_changes",
    "apply_indentation",
    "compile_search_pattern",
    "find_nth_literal_match",
    "find_nth_regex_match",
    "get_indentation",
    "lines_match",
    "order_requests",
    "render_diff",
]
