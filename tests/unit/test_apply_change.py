from __future__ import annotations

from sedit.engine.apply import INVALID_SHAPE_MESSAGE, apply_change
from sedit.schema import EditRequest


def _request(**fields) -> EditRequest:
    fields.setdefault("path", "file.txt")
    return EditRequest(**fields)


def test_insertion_before_first_line() -> None:
    result = apply_change("line1\nline2", _request(start_line=1, replace_content="NEW"))

    assert result.applied
    assert result.content == "NEW\nline1\nline2"


def test_insertion_before_second_line() -> None:
    result = apply_change("line1\nline2", _request(start_line=2, replace_content="NEW"))

    assert result.content == "line1\nNEW\nline2"


def test_insertion_past_the_end_appends() -> None:
    result = apply_change("a\nb", _request(start_line=10, replace_content="NEW"))

    assert result.applied
    assert result.content == "a\nb\nNEW"


def test_insertion_inherits_indentation_of_preceding_line() -> None:
    content = "def f():\n    x = 1\n"

    indented = apply_change(content, _request(start_line=3, replace_content="y = 2\nz = 3"))
    plain = apply_change(content, _request(start_line=3, replace_content="y = 2", preserve_indentation=False))

    assert indented.content == "def f():\n    x = 1\n    y = 2\n    z = 3\n"
    assert plain.content == "def f():\n    x = 1\ny = 2\n"


def test_literal_replacement_targets_second_occurrence() -> None:
    request = _request(search_pattern="foo", start_line=1, match_occurrence=2, replace_content="baz")

    result = apply_change("foo\nbar\nfoo\nbar", request)

    assert result.applied
    assert result.content == "foo\nbar\nbaz\nbar"


def test_literal_search_uses_start_line_as_lower_bound() -> None:
    request = _request(search_pattern="foo", start_line=2, replace_content="baz")

    result = apply_change("foo\nbar\nfoo\nbar", request)

    assert result.content == "foo\nbar\nbaz\nbar"


def test_literal_replacement_preserves_indentation() -> None:
    request = _request(search_pattern="    pass", start_line=1, replace_content="stop", preserve_indentation=True)

    result = apply_change("  if x:\n    pass", request)

    assert result.content == "  if x:\n    stop"


def test_literal_multi_line_replacement_reindents_each_line() -> None:
    content = "class A:\n    def f(self):\n        return 1\n"
    request = _request(search_pattern="return 1", start_line=1, replace_content="value = 1\nreturn value")

    result = apply_change(content, request)

    assert result.content == "class A:\n    def f(self):\n        value = 1\n        return value\n"


def test_literal_deletion_removes_matched_block() -> None:
    result = apply_change("a\nb\nc\nd", _request(search_pattern="b\nc", start_line=1))

    assert result.applied
    assert result.content == "a\nd"


def test_literal_match_requires_exact_whitespace_when_not_ignored() -> None:
    request = _request(search_pattern="foo", start_line=1, replace_content="bar", ignore_leading_whitespace=False)

    result = apply_change("  foo", request)

    assert not result.applied
    assert result.error is None
    assert result.content == "  foo"


def test_regex_deletion_of_second_occurrence() -> None:
    request = _request(search_pattern=r"\d+", start_line=1, use_regex=True, match_occurrence=2)

    result = apply_change("abc123def456", request)

    assert result.applied
    assert result.content == "abc123def"


def test_regex_mode_treats_start_line_as_advisory() -> None:
    request = _request(search_pattern=r"\d+", start_line=5, use_regex=True, replace_content="X")

    result = apply_change("abc123def456", request)

    assert result.content == "abcXdef456"


def test_regex_replacement_uses_indentation_of_matched_line() -> None:
    content = "def f():\n    return 1\n"
    request = _request(
        search_pattern=r"(?m)^\s*return \d",
        start_line=1,
        use_regex=True,
        replace_content="value = 2\nreturn value",
    )

    result = apply_change(content, request)

    assert result.content == "def f():\n    value = 2\n    return value\n"


def test_occurrence_beyond_available_matches_is_not_applied() -> None:
    literal = apply_change("foo\nbar", _request(search_pattern="foo", start_line=1, match_occurrence=3, replace_content="x"))
    regex = apply_change(
        "foo\nbar",
        _request(search_pattern="o", start_line=1, use_regex=True, match_occurrence=3, replace_content="x"),
    )

    assert not literal.applied and literal.error is None and literal.content == "foo\nbar"
    assert not regex.applied and regex.error is None and regex.content == "foo\nbar"


def test_invalid_regex_reports_error_without_changes() -> None:
    request = _request(search_pattern="(", start_line=1, use_regex=True, replace_content="x")

    result = apply_change("content", request)

    assert not result.applied
    assert result.content == "content"
    assert result.error is not None
    assert result.error.startswith('Invalid regex pattern "("')


def test_invalid_shape_is_reported_not_ignored() -> None:
    request = EditRequest.model_construct(path="file.txt", start_line=1)

    result = apply_change("content", request)

    assert not result.applied
    assert result.error == INVALID_SHAPE_MESSAGE


def test_empty_pattern_without_content_requires_replace_content() -> None:
    request = _request(search_pattern="", start_line=1)

    result = apply_change("content", request)

    assert not result.applied
    assert result.error == "replace_content is required for insertion."


def test_start_line_below_one_is_rejected() -> None:
    request = EditRequest.model_construct(path="file.txt", start_line=0, replace_content="x")

    result = apply_change("content", request)

    assert not result.applied
    assert result.error == "Invalid start_line 0"


def test_empty_pattern_with_content_is_an_insertion() -> None:
    request = _request(search_pattern="", start_line=2, replace_content="NEW")

    result = apply_change("line1\nline2", request)

    assert request.is_insertion
    assert result.applied
    assert result.content == "line1\nNEW\nline2"
