"""Tests for the validation service."""

from __future__ import annotations

import pytest

from prgate.errors import InvalidPrUrl, PrFetchFailure
from prgate.github.base import PullRequestSource
from prgate.github.pr_url import PrRef
from prgate.linter.engine import DiffRuleEngine
from prgate.linter.models import CheckKind, FileDiff, PrMeta
from prgate.validation.events import EventType, ValidationEvent
from prgate.validation.service import ValidationService

PR_URL = "https://github.com/acme/app/pull/42"

BAD_IMPORT = "@@ -1,1 +1,2 @@\n line\n+import Matchers from '../utils/Matchers';"
GOOD_IMPORT = "@@ -1,1 +1,2 @@\n line\n+import Matchers from '../framework/Matchers';"


class MockPrSource(PullRequestSource):
    def __init__(
        self,
        files: list[FileDiff] | None = None,
        fail_on_files: Exception | None = None,
    ) -> None:
        self.files = files or []
        self.fail_on_files = fail_on_files
        self.refs: list[PrRef] = []

    async def get_pull_request(self, ref: PrRef) -> PrMeta:
        self.refs.append(ref)
        return PrMeta(title="Migrate specs", url=PR_URL, author="octocat")

    async def list_files(self, ref: PrRef) -> list[FileDiff]:
        if self.fail_on_files:
            raise self.fail_on_files
        return self.files

    async def health_check(self) -> bool:
        return True


def _files() -> list[FileDiff]:
    return [
        FileDiff(filename="e2e/pages/a.ts", patch=BAD_IMPORT),
        FileDiff(filename="e2e/logo.png", status="added"),
        FileDiff(filename="e2e/pages/b.ts", patch=GOOD_IMPORT),
    ]


def _service(source: PullRequestSource) -> ValidationService:
    return ValidationService(source, DiffRuleEngine())


class TestValidate:
    @pytest.mark.asyncio
    async def test_report(self) -> None:
        source = MockPrSource(_files())
        report = await _service(source).validate(PR_URL)

        assert report.pr.title == "Migrate specs"
        assert report.checked_files == ["e2e/pages/a.ts", "e2e/logo.png", "e2e/pages/b.ts"]
        assert report.files_checked_count == 3
        assert [(i.file, i.line, i.check_kind) for i in report.issues] == [
            ("e2e/pages/a.ts", 2, CheckKind.matchers_framework),
        ]
        assert source.refs == [PrRef(owner="acme", repo="app", pull_number=42)]

    @pytest.mark.asyncio
    async def test_every_issue_belongs_to_a_checked_file(self) -> None:
        report = await _service(MockPrSource(_files())).validate(PR_URL)
        assert {i.file for i in report.issues} <= set(report.checked_files)

    @pytest.mark.asyncio
    async def test_invalid_url_fetches_nothing(self) -> None:
        source = MockPrSource(_files())
        with pytest.raises(InvalidPrUrl):
            await _service(source).validate("https://github.com/acme/app")
        assert source.refs == []

    @pytest.mark.asyncio
    async def test_fetch_failure_propagates(self) -> None:
        source = MockPrSource(fail_on_files=PrFetchFailure("GitHub API error (404)", 404))
        with pytest.raises(PrFetchFailure):
            await _service(source).validate(PR_URL)


class TestStream:
    @pytest.mark.asyncio
    async def test_event_sequence(self) -> None:
        events = [e async for e in _service(MockPrSource(_files())).stream(PR_URL)]

        assert [e.type for e in events] == [
            EventType.init,
            EventType.pr_info,
            EventType.total_files,
            EventType.file_checked,
            EventType.issue_found,
            EventType.file_checked,
            EventType.file_checked,
            EventType.complete,
        ]
        assert events[1].pr.author == "octocat"
        assert events[2].count == 3
        assert events[4].file == "e2e/pages/a.ts"
        assert [i.check_kind for i in events[4].issues] == [CheckKind.matchers_framework]
        assert events[-1].is_terminal
        assert events[-1].report.files_checked_count == 3
        assert len(events[-1].report.issues) == 1

    @pytest.mark.asyncio
    async def test_stream_matches_validate(self) -> None:
        service = _service(MockPrSource(_files()))
        report = await service.validate(PR_URL)
        events = [e async for e in service.stream(PR_URL)]
        assert events[-1].report == report

    @pytest.mark.asyncio
    async def test_fetch_failure_ends_with_error(self) -> None:
        source = MockPrSource(fail_on_files=PrFetchFailure("GitHub API error (403): rate limited"))
        events = [e async for e in _service(source).stream(PR_URL)]

        assert [e.type for e in events] == [
            EventType.init,
            EventType.pr_info,
            EventType.error,
        ]
        assert events[-1].message == "GitHub API error (403): rate limited"

    @pytest.mark.asyncio
    async def test_unexpected_error_ends_with_error(self) -> None:
        source = MockPrSource(fail_on_files=RuntimeError("boom"))
        events = [e async for e in _service(source).stream(PR_URL)]
        assert events[-1].type == EventType.error
        assert events[-1].message == "boom"

    @pytest.mark.asyncio
    async def test_invalid_url(self) -> None:
        events = [e async for e in _service(MockPrSource()).stream("nope")]
        assert len(events) == 1
        assert events[0].type == EventType.error
        assert "Invalid GitHub PR URL" in events[0].message

    @pytest.mark.asyncio
    async def test_exactly_one_terminal_event(self) -> None:
        events = [e async for e in _service(MockPrSource(_files())).stream(PR_URL)]
        assert sum(e.is_terminal for e in events) == 1

    def test_ndjson_leaves_out_unset_fields(self) -> None:
        line = ValidationEvent(type=EventType.total_files, count=2).to_ndjson()
        assert line == '{"type":"total_files","count":2}\n'
