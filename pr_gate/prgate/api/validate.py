"""Validation API — one-shot report and incremental event stream."""

from __future__ import annotations

import logging
from typing import AsyncGenerator, AsyncIterator

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import StreamingResponse
from pydantic import AliasChoices, BaseModel, Field

from prgate.deps import get_validation_service
from prgate.errors import InvalidPrUrl, PrFetchFailure, StreamingTransportFailure
from prgate.github.pr_url import parse_pr_url
from prgate.linter.models import ValidationReport
from prgate.validation.events import ValidationEvent
from prgate.validation.service import ValidationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["validate"])


class ValidateRequest(BaseModel):
    pr_link: str = Field(
        "",
        validation_alias=AliasChoices("pr_link", "prLink"),
        description="Pull request URL, e.g. https://github.com/<owner>/<repo>/pull/<number>",
    )


def _require_link(body: ValidateRequest) -> str:
    link = body.pr_link.strip()
    if not link:
        raise HTTPException(status_code=400, detail="PR link is required")
    return link


@router.post("/validate", response_model=ValidationReport)
async def validate_pull_request(
    body: ValidateRequest,
    service: ValidationService = Depends(get_validation_service),
) -> ValidationReport:
    """Validate every changed file of a pull request and return the report."""
    link = _require_link(body)
    try:
        return await service.validate(link)
    except InvalidPrUrl as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PrFetchFailure as e:
        logger.error("PR fetch failed for %s: %s", link, e)
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error("Validation failed for %s: %s", link, e, exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


async def _ndjson_events(
    request: Request,
    events: AsyncGenerator[ValidationEvent, None],
) -> AsyncIterator[str]:
    """Serialize events one per line until a terminal event or a client disconnect."""
    try:
        async for event in events:
            if await request.is_disconnected():
                raise StreamingTransportFailure(
                    f"client disconnected before '{event.type.value}' event"
                )
            yield event.to_ndjson()
            if event.is_terminal:
                break
    except StreamingTransportFailure as e:
        logger.warning("Validation stream aborted: %s", e)
    finally:
        await events.aclose()


@router.post("/validate/stream")
async def stream_validation(
    body: ValidateRequest,
    request: Request,
    service: ValidationService = Depends(get_validation_service),
) -> StreamingResponse:
    """Validate a pull request, streaming progress as newline-delimited JSON."""
    link = _require_link(body)
    try:
        parse_pr_url(link)
    except InvalidPrUrl as e:
        raise HTTPException(status_code=400, detail=str(e))

    return StreamingResponse(
        _ndjson_events(request, service.stream(link)),
        media_type="application/x-ndjson",
        headers={"Cache-Control": "no-cache"},
    )
