"""Request and outcome records validated at the edit batch boundary."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RecordModel(BaseModel):
    """Base Pydantic model with strict field handling."""

    model_config = ConfigDict(extra="forbid", frozen=False)


class EditStatus(str, Enum):
    """Per-file processing outcome."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


class EditRequest(RecordModel):
    """Single insertion, replacement or deletion scoped to one file."""

    path: str = Field(min_length=1)
    search_pattern: Optional[str] = None
    start_line: int = Field(ge=1)
    replace_content: Optional[str] = None
    use_regex: bool = False
    ignore_leading_whitespace: bool = True
    preserve_indentation: bool = True
    match_occurrence: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def _require_pattern_or_content(self) -> "EditRequest":
        if self.search_pattern is None and self.replace_content is None:
            raise ValueError("Either 'search_pattern' or 'replace_content' must be provided for a change operation.")
        return self

    @property
    def is_insertion(self) -> bool:
        return not self.search_pattern


class EditBatch(RecordModel):
    """Flat list of edit requests plus batch-wide switches."""

    changes: List[EditRequest] = Field(min_length=1)
    dry_run: bool = False
    output_diff: bool = True


class FileEditOutcome(RecordModel):
    """Result reported for one distinct path of a batch."""

    path: str
    status: EditStatus = EditStatus.SKIPPED
    message: Optional[str] = None
    diff: Optional[str] = None


class EditBatchResult(RecordModel):
    """Ordered outcomes for every path mentioned in a batch."""

    results: List[FileEditOutcome] = Field(default_factory=list)

    def _with_status(self, status: EditStatus) -> List[FileEditOutcome]:
        return [outcome for outcome in self.results if outcome.status == status]

    @property
    def succeeded(self) -> List[FileEditOutcome]:
        return self._with_status(EditStatus.SUCCESS)

    @property
    def skipped(self) -> List[FileEditOutcome]:
        return self._with_status(EditStatus.SKIPPED)

    @property
    def failed(self) -> List[FileEditOutcome]:
        return self._with_status(EditStatus.FAILED)


__all__ = [
    "EditBatch",
    "EditBatchResult",
    "EditRequest",
    "EditStatus",
    "FileEditOutcome",
    "RecordModel",
]
