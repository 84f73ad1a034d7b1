"""Diff linting engine for framework migration pull requests."""

from prgate.linter.config import ImportRule, RuleSet, load_rules
from prgate.linter.engine import DiffRuleEngine
from prgate.linter.models import (
    UNKNOWN_LINE,
    CheckKind,
    FileDiff,
    Issue,
    PrMeta,
    ValidationReport,
)

__all__ = [
    "UNKNOWN_LINE",
    "CheckKind",
    "DiffRuleEngine",
    "FileDiff",
    "ImportRule",
    "Issue",
    "PrMeta",
    "RuleSet",
    "ValidationReport",
    "load_rules",
]
