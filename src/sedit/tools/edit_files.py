"""Batch handler that drives the edit engine once per distinct file path."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

from pydantic import ValidationError

from ..engine.diff import DiffFormatter, UnifiedDiffFormatter, render_diff
from ..engine.orchestrator import apply_changes
from ..schema import EditBatch, EditBatchResult, EditRequest, EditStatus, FileEditOutcome
from .files import (
    EditFileNotFoundError,
    FileAccessError,
    FileStore,
    LocalFileStore,
    detect_newline,
    normalise_line_endings,
    restore_line_endings,
)
from .paths import PathResolutionError, PathResolver

LOGGER = logging.getLogger(__name__)
TELEMETRY_LOGGER = logging.getLogger("sedit.telemetry")


def _serialise_event_value(value: Any) -> Any:
    """Convert telemetry payload values into JSON-friendly representations."""
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, Path):
        return value.as_posix()
    if isinstance(value, (list, tuple, set)):
        return [_serialise_event_value(item) for item in value]
    if isinstance(value, Mapping):
        return {str(key): _serialise_event_value(child) for key, child in value.items()}
    return str(value)


def _emit_edit_event(event: str, **fields: Any) -> None:
    """Log a structured telemetry event for a processed file."""
    payload = {"event": event, "timestamp": datetime.now(timezone.utc).isoformat()}
    for key, value in fields.items():
        payload[key] = _serialise_event_value(value)
    TELEMETRY_LOGGER.info(json.dumps(payload, separators=(",", ":"), ensure_ascii=True))


def coerce_batch(payload: EditBatch | Mapping[str, Any]) -> EditBatch:
    """Validate ``payload`` into an :class:`EditBatch`."""
    if isinstance(payload, EditBatch):
        return payload
    try:
        return EditBatch.model_validate(payload)
    except ValidationError as error:
        raise ValueError(f"Invalid arguments for edit batch: {error}") from error


def group_requests(requests: Iterable[EditRequest]) -> dict[str, list[EditRequest]]:
    """Group requests by path, keeping first-appearance order of paths."""
    grouped: dict[str, list[EditRequest]] = {}
    for request in requests:
        grouped.setdefault(request.path, []).append(request)
    return grouped


def _success_message(path: str, *, dry_run: bool, skipped: int) -> str:
    if dry_run:
        message = f"File {path} changes calculated (dry run)."
    else:
        message = f"File {path} modified successfully."
    if skipped:
        message = f"{message} {skipped} change(s) skipped."
    return message


def _filesystem_failure(path: str, error: FileAccessError) -> str:
    if isinstance(error, EditFileNotFoundError):
        return f"File not found: {path}"
    if error.code:
        return f"Filesystem error ({error.code}) processing {path}."
    return f"Failed to process file {path}: {error}"


def edit_file(
    path: str,
    requests: Sequence[EditRequest],
    *,
    resolver: PathResolver,
    store: FileStore,
    dry_run: bool = False,
    output_diff: bool = True,
    formatter: DiffFormatter | None = None,
) -> FileEditOutcome:
    """Read, edit, diff and (unless ``dry_run``) write a single file."""
    outcome = FileEditOutcome(path=path)
    try:
        target = resolver.resolve(path)
        raw = store.read_text(target)
    except PathResolutionError as error:
        outcome.status = EditStatus.FAILED
        outcome.message = str(error)
        _emit_edit_event("file_edit_failed", path=path, stage="resolve", error=str(error))
        return outcome
    except FileAccessError as error:
        outcome.status = EditStatus.FAILED
        outcome.message = _filesystem_failure(path, error)
        _emit_edit_event(
            "file_edit_failed",
            path=path,
            stage="read",
            error=str(error),
            code=error.code,
            details=error.details,
        )
        return outcome

    newline = detect_newline(raw)
    original = normalise_line_endings(raw)
    summary = apply_changes(original, requests, label=path)

    if not summary.changed:
        outcome.message = f"No applicable changes found or made for {path}."
        _emit_edit_event("file_edit_skipped", path=path, requests=len(requests), notes=summary.notes)
        return outcome

    diff = None
    if output_diff:
        diff = render_diff(formatter or UnifiedDiffFormatter(), path, summary.original, summary.content)

    if not dry_run:
        try:
            store.write_text(target, restore_line_endings(raw, summary.content, newline))
        except FileAccessError as error:
            outcome.status = EditStatus.FAILED
            outcome.message = _filesystem_failure(path, error)
            _emit_edit_event(
                "file_edit_failed",
                path=path,
                stage="write",
                error=str(error),
                code=error.code,
                details=error.details,
            )
            return outcome

    outcome.status = EditStatus.SUCCESS
    outcome.message = _success_message(path, dry_run=dry_run, skipped=summary.skipped)
    outcome.diff = diff
    _emit_edit_event(
        "file_edit_succeeded",
        path=path,
        applied=summary.applied,
        skipped=summary.skipped,
        dry_run=dry_run,
    )
    return outcome


def edit_files(
    batch: EditBatch | Mapping[str, Any],
    *,
    resolver: PathResolver,
    store: FileStore | None = None,
    formatter: DiffFormatter | None = None,
) -> EditBatchResult:
    """Apply every change in ``batch``, one outcome per distinct path.

    A failure in one file never prevents the remaining files from being
    processed.
    """
    validated = coerce_batch(batch)
    file_store = store or LocalFileStore()
    result = EditBatchResult()

    for path, requests in group_requests(validated.changes).items():
        try:
            outcome = edit_file(
                path,
                requests,
                resolver=resolver,
                store=file_store,
                dry_run=validated.dry_run,
                output_diff=validated.output_diff,
                formatter=formatter,
            )
        except Exception as error:  # noqa: BLE001 - isolate unexpected failures per file
            LOGGER.exception("Error processing %s", path)
            outcome = FileEditOutcome(
                path=path,
                status=EditStatus.FAILED,
                message=f"Unexpected error processing {path}: {error}",
            )
            _emit_edit_event("file_edit_failed", path=path, stage="unexpected", error=str(error))
        result.results.append(outcome)

    return result


__all__ = ["coerce_batch", "edit_file", "edit_files", "group_requests"]
