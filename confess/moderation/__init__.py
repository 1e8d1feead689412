"""Content moderation — keyword scanning, PII detection and verdicts.

Every scan is a pure function of the submitted text and a
:class:`~confess.moderation.config.ModerationConfig`:

1. Keyword scanner — categorized banned terms and a confidence score
2. PII scanner — regex detectors for phone numbers, emails, SSNs and more
3. Verdict resolver — priority-ordered policy combining both results
"""

from confess.moderation.config import ModerationConfig, default_config, load_config
from confess.moderation.engine import ModerationEngine
from confess.moderation.errors import (
    ConfigError,
    InputValidationError,
    InternalScanError,
    ModerationError,
)
from confess.moderation.models import (
    ContentType,
    KeywordScanResult,
    ModerationStatus,
    ModerationVerdict,
    PIIScanResult,
    ScanReport,
)

__all__ = [
    "ConfigError",
    "ContentType",
    "InputValidationError",
    "InternalScanError",
    "KeywordScanResult",
    "ModerationConfig",
    "ModerationEngine",
    "ModerationError",
    "ModerationStatus",
    "ModerationVerdict",
    "PIIScanResult",
    "ScanReport",
    "default_config",
    "load_config",
]
