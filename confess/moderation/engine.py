"""Moderation engine — validates submissions and runs the scan pipeline.

The engine holds only immutable configuration, so one instance can serve
any number of concurrent scans.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from confess.moderation.config import ModerationConfig, config_from_env
from confess.moderation.errors import InputValidationError, InternalScanError
from confess.moderation.keywords import scan_keywords
from confess.moderation.models import (
    ContentType,
    KeywordScanResult,
    ModerationVerdict,
    PIIScanResult,
    ScanReport,
)
from confess.moderation.pii import scan_pii
from confess.moderation.verdict import resolve

logger = logging.getLogger(__name__)


def parse_content_type(value: Any) -> ContentType:
    """Map a wire ``type`` value to a :class:`ContentType`.

    Anything other than ``"comment"`` is held to the post limit.
    """
    if isinstance(value, ContentType):
        return value
    if value == ContentType.COMMENT.value:
        return ContentType.COMMENT
    return ContentType.POST


def content_length(content: str) -> int:
    """Length in UTF-16 code units, as the mobile client counts it.

    Characters outside the BMP (most emoji) count as two.
    """
    return len(content.encode("utf-16-le", errors="surrogatepass")) // 2


class ModerationEngine:
    """Keyword + PII scanning and verdict resolution over one policy."""

    def __init__(self, config: Optional[ModerationConfig] = None) -> None:
        self.config = config or config_from_env()
        self._pii_patterns = self.config.pii_patterns()

    # -- individual stages ---------------------------------------------------

    def scan_keywords(self, text: str) -> KeywordScanResult:
        return scan_keywords(
            text,
            self.config.categories,
            self.config.thresholds.max_keyword_matches,
        )

    def scan_pii(self, text: str) -> PIIScanResult:
        return scan_pii(text, self._pii_patterns)

    def resolve(self, keywords: KeywordScanResult, pii: PIIScanResult) -> ModerationVerdict:
        return resolve(keywords, pii, self.config.thresholds)

    # -- public API ----------------------------------------------------------

    def validate(self, content: Any, content_type: Any = ContentType.POST) -> ContentType:
        """Check a submission and return its resolved content type.

        Raises :class:`InputValidationError` for missing or non-string
        content, or content over the type's length limit. Content is never
        truncated.
        """
        if not content or not isinstance(content, str):
            raise InputValidationError("Content is required")

        ctype = parse_content_type(content_type)
        max_length = self.config.limits.for_type(ctype)
        if content_length(content) > max_length:
            raise InputValidationError(f"Content exceeds {max_length} characters")
        return ctype

    def scan(self, content: Any, content_type: Any = ContentType.POST) -> ScanReport:
        """Validate *content* and return its full moderation report."""
        ctype = self.validate(content, content_type)

        try:
            keywords = self.scan_keywords(content)
            pii = self.scan_pii(content)
            verdict = self.resolve(keywords, pii)
        except Exception as exc:
            raise InternalScanError(f"Scan failed: {exc}") from exc

        logger.debug(
            "Scanned %s (%d chars): status=%s category=%s matches=%d pii=%s",
            ctype.value,
            len(content),
            verdict.status.value,
            keywords.category,
            keywords.match_count,
            ",".join(pii.types) or "-",
        )
        return ScanReport(verdict=verdict, keywords=keywords, pii=pii, content_type=ctype)
