"""Order and apply every edit request aimed at a single file."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from ..schema import EditRequest
from ..structured import FileChangeSummary
from .apply import apply_change

LOGGER = logging.getLogger(__name__)


def order_requests(requests: Iterable[EditRequest]) -> list[EditRequest]:
    """Sort requests bottom-up by ``start_line``.

    Applying the lowest edits first keeps every ``start_line`` anchor, authored
    against the original file, pointing at unshifted lines. Requests sharing an
    anchor keep their submitted order.
    """
    return sorted(requests, key=lambda request: request.start_line, reverse=True)


def apply_changes(content: str, requests: Sequence[EditRequest], *, label: str | None = None) -> FileChangeSummary:
    """Apply ``requests`` sequentially to ``content``.

    Requests that fail or do not match are logged and recorded as notes; they
    never abort the remaining requests. Overlapping edit regions are not
    detected.
    """
    name = label or "<content>"
    current = content
    applied = 0
    notes: list[str] = []

    for request in order_requests(requests):
        result = apply_change(current, request)
        if result.error:
            LOGGER.warning("Skipping change for %s due to error: %s", name, result.error)
            notes.append(result.error)
            continue
        if not result.applied:
            note = (
                f"Search pattern not found (occurrence {request.match_occurrence}) "
                f"starting near line {request.start_line}."
            )
            LOGGER.warning("%s Skipping change in %s.", note, name)
            notes.append(note)
            continue
        current = result.content
        applied += 1

    return FileChangeSummary(original=content, content=current, applied=applied, notes=tuple(notes))


__all__ = ["apply_changes", "order_requests"]
