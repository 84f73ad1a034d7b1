"""Data models for diff linting results."""

from __future__ import annotations

from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

UNKNOWN_LINE = "unknown"

LineNumber = Union[int, Literal["unknown"]]


class CheckKind(str, Enum):
    assertions_framework = "assertions-framework"
    assertions_no_ts = "assertions-no-ts"
    gestures_framework = "gestures-framework"
    getter_type = "getter-type"
    fixtures_framework = "fixtures-framework"
    matchers_framework = "matchers-framework"
    test_withfixtures = "test-withfixtures"
    fixture_utils_framework = "fixture-utils-framework"


class Issue(BaseModel):
    """A single rule violation found on an added line."""

    model_config = ConfigDict(frozen=True)

    file: str
    line: LineNumber = UNKNOWN_LINE
    snippet: str
    check_kind: CheckKind


class FileDiff(BaseModel):
    """A changed file as listed by the PR source."""

    model_config = ConfigDict(extra="ignore")

    filename: str
    patch: str | None = None
    status: str = "modified"


class PrMeta(BaseModel):
    title: str = ""
    url: str = ""
    author: str = ""


class ValidationReport(BaseModel):
    """Complete result of validating one pull request."""

    pr: PrMeta = Field(default_factory=PrMeta)
    issues: list[Issue] = Field(default_factory=list)
    checked_files: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def files_checked_count(self) -> int:
        return len(self.checked_files)

    def add_file(self, filename: str, issues: list[Issue]) -> None:
        """Record a checked file and the issues found in it."""
        self.checked_files.append(filename)
        self.issues.extend(issues)
