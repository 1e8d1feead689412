"""Pydantic models for API request/response serialization.

These models mirror the confess.moderation dataclasses and document the
wire contract of the scan endpoint, which existing mobile clients depend on.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Scan models
# ---------------------------------------------------------------------------


class ScanRequest(BaseModel):
    """Request body for a content scan (documentation only; parsed by hand)."""

    content: str
    type: Literal["post", "comment"] = "post"


class ScanDetailsResponse(BaseModel):
    """Keyword and PII details behind a verdict."""

    keywords_found: list[str] = Field(default_factory=list)
    category: str = "unknown"
    has_pii: bool = False


class ScanResultResponse(BaseModel):
    """Mirrors confess.moderation.models.ScanReport.to_dict()."""

    status: Literal["approved", "review", "flagged", "rejected"]
    reason: str
    confidence: float = Field(ge=0.0, le=1.0)
    details: ScanDetailsResponse = Field(default_factory=ScanDetailsResponse)


class ScanResponse(BaseModel):
    """Successful scan envelope."""

    success: Literal[True] = True
    result: ScanResultResponse


class ErrorResponse(BaseModel):
    """Error envelope for 400 and 500 responses."""

    success: Literal[False] = False
    error: str


# ---------------------------------------------------------------------------
# Policy models
# ---------------------------------------------------------------------------


class PIIProfileResponse(BaseModel):
    profile: str
    types: list[str] = Field(default_factory=list)


class ThresholdsResponse(BaseModel):
    """Mirrors confess.moderation.config.Thresholds."""

    auto_reject: float
    auto_approve: float
    max_keyword_matches: int


class LimitsResponse(BaseModel):
    post: int
    comment: int


class PolicyResponse(BaseModel):
    """Mirrors confess.moderation.config.ModerationConfig."""

    name: str
    version: str
    categories: dict[str, list[str]] = Field(default_factory=dict)
    pii: PIIProfileResponse
    thresholds: ThresholdsResponse
    limits: LimitsResponse


class CrisisResourceResponse(BaseModel):
    """Mirrors confess.moderation.config.CrisisResource."""

    name: str
    phone: Optional[str] = None
    text: Optional[str] = None
    website: Optional[str] = None
