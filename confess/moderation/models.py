"""Data models for the content moderation engine.

All results are immutable and built fresh per scan call. ``confidence``
values are a coarse heuristic scale in ``[0, 1]``, not a calibrated
probability; do not average them with other scores.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

UNKNOWN_CATEGORY = "unknown"


class ModerationStatus(Enum):
    """Outcome of a moderation scan."""

    APPROVED = "approved"
    REVIEW = "review"  # Queue for a human moderator
    FLAGGED = "flagged"  # Sensitive escalation (self-harm), never punitive
    REJECTED = "rejected"


class ContentType(Enum):
    """Kind of submission being scanned."""

    POST = "post"
    COMMENT = "comment"


def clamp_confidence(value: float) -> float:
    return max(0.0, min(float(value), 1.0))


@dataclass(frozen=True)
class KeywordMatch:
    """A configured (term, category) entry found in the text."""

    term: str
    category: str


@dataclass(frozen=True)
class KeywordScanResult:
    """Result of scanning text against the banned-keyword table."""

    flagged: bool
    matches: tuple[str, ...] = ()
    category: str = UNKNOWN_CATEGORY
    confidence: float = 0.0
    match_count: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "confidence", clamp_confidence(self.confidence))


@dataclass(frozen=True)
class PIIScanResult:
    """Result of scanning text with the PII detectors."""

    has_pii: bool
    types: tuple[str, ...] = ()


@dataclass(frozen=True)
class ModerationVerdict:
    """Final moderation decision for a piece of content."""

    status: ModerationStatus
    reason: str
    confidence: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "confidence", clamp_confidence(self.confidence))


@dataclass(frozen=True)
class ScanReport:
    """Verdict plus the scan results it was derived from."""

    verdict: ModerationVerdict
    keywords: KeywordScanResult
    pii: PIIScanResult
    content_type: ContentType = ContentType.POST

    def to_dict(self) -> dict[str, Any]:
        """Return the wire ``result`` object."""
        return {
            "status": self.verdict.status.value,
            "reason": self.verdict.reason,
            "confidence": self.verdict.confidence,
            "details": {
                "keywords_found": list(self.keywords.matches),
                "category": self.keywords.category,
                "has_pii": self.pii.has_pii,
            },
        }


# Statuses stored on post/comment rows: anything not decided automatically
# waits for a moderator.
_RECORD_STATUS = {
    ModerationStatus.APPROVED: "approved",
    ModerationStatus.REJECTED: "rejected",
    ModerationStatus.REVIEW: "pending",
    ModerationStatus.FLAGGED: "pending",
}


@dataclass
class ModerationRecord:
    """The moderation fields a caller persists alongside a post or comment."""

    ai_scan_status: str
    ai_scan_confidence: float
    moderation_status: str
    category: str = UNKNOWN_CATEGORY
    keywords_found: list[str] = field(default_factory=list)
    pii_types: list[str] = field(default_factory=list)

    @classmethod
    def from_report(cls, report: ScanReport) -> ModerationRecord:
        status = _RECORD_STATUS[report.verdict.status]
        return cls(
            ai_scan_status=status,
            ai_scan_confidence=report.verdict.confidence,
            moderation_status=status,
            category=report.keywords.category,
            keywords_found=list(report.keywords.matches),
            pii_types=list(report.pii.types),
        )
