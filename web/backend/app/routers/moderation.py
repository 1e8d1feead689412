"""Moderation router -- scan submitted posts and comments.

Prefix: ``/api/moderation``. The scan endpoint is also mounted at
``/functions/v1/ai-scan-content`` for clients still calling the old edge
function path. Error bodies use the ``{success, error}`` envelope instead of
FastAPI's ``detail`` so those clients keep working.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from confess.moderation.engine import ModerationEngine
from confess.moderation.errors import InputValidationError
from web.backend.app.models.api import (
    CrisisResourceResponse,
    ErrorResponse,
    PolicyResponse,
    ScanRequest,
    ScanResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["moderation"])

# ---------------------------------------------------------------------------
# Shared engine instance (policy is loaded once per process)
# ---------------------------------------------------------------------------
_engine = ModerationEngine()


def get_engine() -> ModerationEngine:
    return _engine


def set_engine(engine: ModerationEngine) -> None:
    """Swap the process-wide engine, e.g. after a policy reload."""
    global _engine
    _engine = engine


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


_SCAN_RESPONSES = {
    200: {"model": ScanResponse},
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

# Body is parsed by hand; publish its schema for client generators.
_SCAN_REQUEST_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": ScanRequest.model_json_schema()}},
    }
}


@router.post(
    "/api/moderation/scan",
    responses=_SCAN_RESPONSES,
    openapi_extra=_SCAN_REQUEST_BODY,
    summary="Scan content",
)
@router.post("/functions/v1/ai-scan-content", responses=_SCAN_RESPONSES, include_in_schema=False)
async def scan_content(request: Request):
    """Scan a post or comment and return a moderation recommendation.

    Body: ``{"content": str, "type": "post" | "comment"}``.
    """
    try:
        body = await request.json()
        if not isinstance(body, dict):
            body = {}
        report = get_engine().scan(body.get("content"), body.get("type"))
    except InputValidationError as exc:
        return _error(400, str(exc))
    except Exception:
        logger.error("Content scan failed", exc_info=True)
        return _error(500, "Internal server error")

    return {"success": True, "result": report.to_dict()}


@router.get("/api/moderation/policy", response_model=PolicyResponse)
async def get_policy():
    """Return the active moderation policy."""
    return PolicyResponse(**get_engine().config.to_dict())


@router.get("/api/moderation/crisis-resources", response_model=list[CrisisResourceResponse])
async def list_crisis_resources():
    """Support lines shown to authors of self-harm content."""
    return [
        CrisisResourceResponse(
            name=r.name,
            phone=r.phone or None,
            text=r.text or None,
            website=r.website or None,
        )
        for r in get_engine().config.crisis_resources
    ]
