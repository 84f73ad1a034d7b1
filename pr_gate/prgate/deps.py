"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from prgate.github.base import PullRequestSource
from prgate.linter.engine import DiffRuleEngine

if TYPE_CHECKING:
    from prgate.validation.service import ValidationService

_pr_source: PullRequestSource | None = None
_rule_engine: DiffRuleEngine | None = None
_validation_service: ValidationService | None = None


def get_pr_source() -> PullRequestSource:
    """FastAPI dependency: return the shared PullRequestSource."""
    assert _pr_source is not None, "PullRequestSource not initialised"
    return _pr_source


def get_rule_engine() -> DiffRuleEngine:
    """FastAPI dependency: return the shared DiffRuleEngine."""
    assert _rule_engine is not None, "DiffRuleEngine not initialised"
    return _rule_engine


def get_validation_service() -> ValidationService:
    """FastAPI dependency: return the shared ValidationService."""
    assert _validation_service is not None, "ValidationService not initialised"
    return _validation_service
