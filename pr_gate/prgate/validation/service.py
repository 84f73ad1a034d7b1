"""Fetches a pull request and lints every changed file."""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncGenerator

from prgate.errors import PrGateError
from prgate.github.base import PullRequestSource
from prgate.github.pr_url import parse_pr_url
from prgate.linter.engine import DiffRuleEngine
from prgate.linter.models import FileDiff, Issue, ValidationReport
from prgate.validation.events import EventType, ValidationEvent

logger = logging.getLogger(__name__)


class ValidationService:
    """Runs the diff rule engine over a pull request.

    ``validate`` assembles the whole report before returning; ``stream`` yields
    progress events as each file is checked. Both check files one by one, in
    the order the PR source lists them.
    """

    def __init__(
        self,
        source: PullRequestSource,
        engine: DiffRuleEngine,
        file_delay: float = 0.0,
    ) -> None:
        self._source = source
        self._engine = engine
        self._file_delay = file_delay

    @property
    def engine(self) -> DiffRuleEngine:
        return self._engine

    def _check(self, file: FileDiff, report: ValidationReport) -> list[Issue]:
        issues = self._engine.check_file(file)
        report.add_file(file.filename, issues)
        return issues

    async def validate(self, pr_url: str) -> ValidationReport:
        """Validate a pull request and return the complete report.

        Raises InvalidPrUrl before any fetch, PrFetchFailure if GitHub fails.
        """
        ref = parse_pr_url(pr_url)
        pr = await self._source.get_pull_request(ref)
        files = await self._source.list_files(ref)

        report = ValidationReport(pr=pr)
        for file in files:
            self._check(file, report)

        logger.info(
            "Validated %s: %d file(s), %d issue(s)",
            ref.slug,
            report.files_checked_count,
            len(report.issues),
        )
        return report

    async def stream(self, pr_url: str) -> AsyncGenerator[ValidationEvent, None]:
        """Validate a pull request, yielding progress events.

        Ends with exactly one terminal event: ``complete`` carrying the full
        report, or ``error``. Events already yielded are never retracted.
        """
        try:
            ref = parse_pr_url(pr_url)
            yield ValidationEvent(type=EventType.init, message="Starting PR validation...")

            pr = await self._source.get_pull_request(ref)
            yield ValidationEvent(type=EventType.pr_info, pr=pr)

            files = await self._source.list_files(ref)
            yield ValidationEvent(type=EventType.total_files, count=len(files))

            report = ValidationReport(pr=pr)
            for file in files:
                issues = self._check(file, report)
                yield ValidationEvent(type=EventType.file_checked, file=file.filename)
                if issues:
                    yield ValidationEvent(
                        type=EventType.issue_found, file=file.filename, issues=issues,
                    )
                await asyncio.sleep(self._file_delay)

            logger.info(
                "Streamed validation of %s: %d file(s), %d issue(s)",
                ref.slug,
                report.files_checked_count,
                len(report.issues),
            )
            yield ValidationEvent(type=EventType.complete, report=report)

        except PrGateError as e:
            logger.warning("Validation of %s failed: %s", pr_url, e)
            yield ValidationEvent(type=EventType.error, message=str(e))
        except Exception as e:
            logger.exception("Unexpected error while validating %s", pr_url)
            yield ValidationEvent(
                type=EventType.error,
                message=str(e) or "An error occurred during validation",
            )
