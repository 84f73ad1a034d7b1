"""Progress events emitted while a pull request is being validated."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from prgate.linter.models import Issue, PrMeta, ValidationReport


class EventType(str, Enum):
    init = "init"
    pr_info = "pr_info"
    total_files = "total_files"
    file_checked = "file_checked"
    issue_found = "issue_found"
    complete = "complete"
    error = "error"


class ValidationEvent(BaseModel):
    """One line of the validation stream.

    Only the fields relevant to ``type`` are set; unset fields are left out of
    the serialized event.
    """

    type: EventType
    message: str | None = None
    pr: PrMeta | None = None
    count: int | None = None
    file: str | None = None
    issues: list[Issue] | None = None
    report: ValidationReport | None = None

    @property
    def is_terminal(self) -> bool:
        return self.type in (EventType.complete, EventType.error)

    def to_ndjson(self) -> str:
        return self.model_dump_json(exclude_none=True) + "\n"
