"""Diff rule engine — runs every rule against one file's patch."""

from __future__ import annotations

import logging
from typing import Iterable

from prgate.linter.config import RuleSet
from prgate.linter.diff import PatchIndex
from prgate.linter.line_rules import run_line_rules
from prgate.linter.models import FileDiff, Issue
from prgate.linter.test_blocks import check_test_blocks

logger = logging.getLogger(__name__)


class DiffRuleEngine:
    """Evaluates the migration rules against the added lines of a patch.

    The engine holds no per-file state: ``check_file`` is a pure function of
    its input and the configured rule set, so files can be checked in any
    order (or concurrently) and re-checking a file gives identical issues.
    """

    def __init__(self, rules: RuleSet | None = None) -> None:
        self._rules = rules or RuleSet()

    @property
    def rules(self) -> RuleSet:
        return self._rules

    def applies_to(self, filename: str) -> bool:
        """True if ``filename`` falls under one of the configured include paths."""
        prefixes = self._rules.include_paths
        return not prefixes or any(filename.startswith(p) for p in prefixes)

    def is_test_file(self, filename: str) -> bool:
        return any(filename.endswith(s) for s in self._rules.test_file_suffixes)

    def check_file(self, file: FileDiff) -> list[Issue]:
        """Return the issues for one changed file.

        Per-line issues come first in added-line order, followed by test block
        issues in declaration order.
        """
        if not file.patch or not self.applies_to(file.filename):
            return []

        index = PatchIndex.from_patch(file.patch)
        issues = run_line_rules(file.filename, index, self._rules)

        if self.is_test_file(file.filename):
            issues.extend(
                check_test_blocks(file.filename, index, self._rules.fixture_token)
            )

        logger.debug(
            "%s: %d added line(s), %d issue(s)",
            file.filename,
            len(index.added),
            len(issues),
        )
        return issues

    def check_files(self, files: Iterable[FileDiff]) -> list[Issue]:
        """Check several files, keeping issues in file order."""
        issues: list[Issue] = []
        for file in files:
            issues.extend(self.check_file(file))
        return issues
