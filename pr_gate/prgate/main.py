"""FastAPI application -- PR Gate entrypoint."""

from __future__ import annotations

import json
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator

from fastapi import FastAPI

import prgate.deps as deps
from prgate.api.rules import router as rules_router
from prgate.api.validate import router as validate_router
from prgate.github.client import DEFAULT_API_URL, GitHubClient
from prgate.linter.config import load_rules
from prgate.linter.engine import DiffRuleEngine
from prgate.validation.service import ValidationService

logger = logging.getLogger(__name__)


def _load_options() -> dict[str, Any]:
    """Load service options from PRGATE_OPTIONS_PATH or env fallback."""
    opts_path = os.environ.get("PRGATE_OPTIONS_PATH", "/etc/prgate/options.json")
    if Path(opts_path).exists():
        return json.loads(Path(opts_path).read_text())
    return {
        "github_api_url": os.environ.get("GITHUB_API_URL", DEFAULT_API_URL),
        "github_token": os.environ.get("GITHUB_TOKEN", ""),
        "rules_path": os.environ.get("PRGATE_RULES_PATH", ""),
        "stream_file_delay": float(os.environ.get("PRGATE_STREAM_DELAY", "0")),
    }


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: init resources on startup, clean up on shutdown."""
    log_level = logging.DEBUG if os.environ.get("PRGATE_DEV_MODE") else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    options = _load_options()
    logger.info(
        "PR Gate starting with options: %s",
        {k: v for k, v in options.items() if "token" not in k},
    )

    rules_path = options.get("rules_path") or ""
    rules = load_rules(Path(rules_path) if rules_path else None)
    deps._rule_engine = DiffRuleEngine(rules)

    token = options.get("github_token", "")
    deps._pr_source = GitHubClient(
        base_url=options.get("github_api_url", DEFAULT_API_URL),
        token=token,
    )
    logger.info("GitHub token available: %s", bool(token))

    deps._validation_service = ValidationService(
        deps._pr_source,
        deps._rule_engine,
        file_delay=float(options.get("stream_file_delay", 0.0)),
    )

    yield

    # Shutdown
    if hasattr(deps._pr_source, "close"):
        await deps._pr_source.close()
    deps._pr_source = None
    deps._rule_engine = None
    deps._validation_service = None


app = FastAPI(
    title="PR Gate",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(validate_router)
app.include_router(rules_router)
