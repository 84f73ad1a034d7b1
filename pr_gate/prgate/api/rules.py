"""Rules API — rule catalog and PR source health."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from prgate.deps import get_pr_source, get_rule_engine
from prgate.github.base import PullRequestSource
from prgate.linter.config import RULE_CATALOG, RuleInfo, RuleSet
from prgate.linter.engine import DiffRuleEngine

router = APIRouter(prefix="/api", tags=["rules"])


class RulesResponse(BaseModel):
    rules: list[RuleInfo]
    config: RuleSet


@router.get("/rules", response_model=RulesResponse)
async def list_rules(
    engine: DiffRuleEngine = Depends(get_rule_engine),
) -> RulesResponse:
    """Describe every check and the active rule configuration."""
    return RulesResponse(rules=RULE_CATALOG, config=engine.rules)


@router.get("/health/github")
async def health_check_github(
    source: PullRequestSource = Depends(get_pr_source),
) -> dict:
    """Check if the GitHub API is reachable."""
    try:
        healthy = await source.health_check()
    except Exception as e:
        return {"healthy": False, "error": str(e)}
    return {"healthy": healthy, "error": "" if healthy else "unreachable"}
