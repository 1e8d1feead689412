"""Verdict resolver — combine keyword and PII results into a decision.

A priority-ordered decision table, first matching rule wins:

1. Any PII                        -> rejected
2. Self-harm keywords             -> flagged (escalated, never auto-rejected)
3. confidence >= auto_reject      -> rejected
4. confidence >= auto_approve     -> review
5. otherwise                      -> approved
"""

from __future__ import annotations

from confess.moderation.config import Thresholds
from confess.moderation.models import (
    KeywordScanResult,
    ModerationStatus,
    ModerationVerdict,
    PIIScanResult,
)

SELF_HARM_CATEGORY = "self_harm"


def resolve(
    keywords: KeywordScanResult,
    pii: PIIScanResult,
    thresholds: Thresholds | None = None,
) -> ModerationVerdict:
    """Derive the moderation verdict for a pair of scan results."""
    thresholds = thresholds or Thresholds()

    if pii.has_pii:
        return ModerationVerdict(
            status=ModerationStatus.REJECTED,
            reason="Contains personal information",
            confidence=1.0,
        )

    if keywords.flagged and keywords.category == SELF_HARM_CATEGORY:
        return ModerationVerdict(
            status=ModerationStatus.FLAGGED,
            reason="Self-harm content detected",
            confidence=keywords.confidence,
        )

    if keywords.confidence >= thresholds.auto_reject:
        return ModerationVerdict(
            status=ModerationStatus.REJECTED,
            reason=f"High confidence violation ({keywords.category})",
            confidence=keywords.confidence,
        )

    if keywords.confidence >= thresholds.auto_approve:
        return ModerationVerdict(
            status=ModerationStatus.REVIEW,
            reason=f"Requires human review ({keywords.category})",
            confidence=keywords.confidence,
        )

    return ModerationVerdict(
        status=ModerationStatus.APPROVED,
        reason="No violations detected",
        confidence=1.0 - keywords.confidence,
    )
