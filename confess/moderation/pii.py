"""PII scanner — regex detectors for personally identifying information.

Patterns are compiled once and only ever used through ``search()``, which
keeps no match-position state between calls, so a single pattern set can be
shared across threads.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from confess.moderation.models import PIIScanResult

# ASCII semantics for \d, \w and \b. \s is spelled out as _SPACE so that
# Unicode spaces (e.g. U+00A0 from phone keyboards) still separate tokens.
_FLAGS = re.ASCII
_SPACE_CHARS = r"\s\u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
_SPACE = f"[{_SPACE_CHARS}]"

DETECTORS: dict[str, re.Pattern[str]] = {
    "phone": re.compile(r"\b\d{3}[-.]?\d{3}[-.]?\d{4}\b", _FLAGS),
    "email": re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b", _FLAGS),
    "ssn": re.compile(r"\b\d{3}-\d{2}-\d{4}\b", _FLAGS),
    "credit_card": re.compile(
        rf"\b\d{{4}}[{_SPACE_CHARS}-]?\d{{4}}[{_SPACE_CHARS}-]?\d{{4}}[{_SPACE_CHARS}-]?\d{{4}}\b",
        _FLAGS,
    ),
    "address": re.compile(
        rf"\b\d+{_SPACE}+[A-Za-z{_SPACE_CHARS}]+{_SPACE}+"
        r"(Street|St|Avenue|Ave|Road|Rd|Boulevard|Blvd|Drive|Dr)\b",
        _FLAGS | re.IGNORECASE,
    ),
    "dorm_room": re.compile(
        rf"\b(room|rm|dorm){_SPACE}*#?{_SPACE}*\d{{3,4}}\b",
        _FLAGS | re.IGNORECASE,
    ),
}

# Named detector profiles. "minimal" trades missed address/dorm-room leaks
# for fewer false positives.
PROFILES: dict[str, tuple[str, ...]] = {
    "full": tuple(DETECTORS),
    "minimal": ("phone", "email", "ssn"),
}


@dataclass(frozen=True)
class PIIPatternSet:
    """An ordered, immutable set of named PII detectors."""

    name: str
    patterns: tuple[tuple[str, re.Pattern[str]], ...]

    @classmethod
    def for_profile(cls, profile: str) -> PIIPatternSet:
        if profile not in PROFILES:
            raise KeyError(f"Unknown PII profile '{profile}'. Must be one of: {sorted(PROFILES)}")
        return cls.from_types(PROFILES[profile], name=profile)

    @classmethod
    def from_types(cls, types, name: str = "custom") -> PIIPatternSet:
        unknown = [t for t in types if t not in DETECTORS]
        if unknown:
            raise KeyError(f"Unknown PII detector(s): {', '.join(unknown)}")
        return cls(name=name, patterns=tuple((t, DETECTORS[t]) for t in types))

    @property
    def types(self) -> list[str]:
        return [t for t, _ in self.patterns]


def scan_pii(text: str, patterns: PIIPatternSet | None = None) -> PIIScanResult:
    """Report which PII types appear anywhere in *text*.

    Each type is reported once regardless of how often it matches, in the
    pattern set's order.
    """
    patterns = patterns or PIIPatternSet.for_profile("full")
    found = tuple(t for t, pattern in patterns.patterns if pattern.search(text))
    return PIIScanResult(has_pii=bool(found), types=found)
