"""Moderation policy — keyword tables, PII profile, thresholds and limits.

Policies are plain YAML so they can be versioned and tuned without a code
change. The bundled ``default_policy.yaml`` is used unless a file is passed
explicitly or named by the ``CONFESS_POLICY_FILE`` environment variable.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

import yaml

from confess.moderation.errors import ConfigError
from confess.moderation.models import UNKNOWN_CATEGORY, ContentType
from confess.moderation.pii import DETECTORS, PROFILES, PIIPatternSet

DEFAULT_POLICY_PATH = Path(__file__).parent / "default_policy.yaml"
POLICY_ENV_VAR = "CONFESS_POLICY_FILE"


@dataclass(frozen=True)
class Thresholds:
    """Confidence cutoffs for the verdict resolver."""

    auto_reject: float = 0.9
    auto_approve: float = 0.3
    max_keyword_matches: int = 3


@dataclass(frozen=True)
class ContentLimits:
    """Maximum content length in characters, per content type."""

    post: int = 1000
    comment: int = 500

    def for_type(self, content_type: ContentType) -> int:
        if content_type == ContentType.COMMENT:
            return self.comment
        return self.post


@dataclass(frozen=True)
class CrisisResource:
    """A support line shown alongside self-harm escalations."""

    name: str
    phone: str = ""
    text: str = ""
    website: str = ""


@dataclass(frozen=True)
class ModerationConfig:
    """A complete moderation policy. Read-only once built."""

    name: str = "default"
    version: str = "1.0.0"
    # Declaration order breaks ties between equally matched categories.
    categories: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    pii_types: tuple[str, ...] = PROFILES["full"]
    pii_profile: str = "full"
    thresholds: Thresholds = field(default_factory=Thresholds)
    limits: ContentLimits = field(default_factory=ContentLimits)
    crisis_resources: tuple[CrisisResource, ...] = ()

    def __post_init__(self) -> None:
        categories = {c: tuple(terms) for c, terms in self.categories.items()}
        object.__setattr__(self, "categories", MappingProxyType(categories))
        object.__setattr__(self, "pii_types", tuple(self.pii_types))
        object.__setattr__(self, "crisis_resources", tuple(self.crisis_resources))

    def pii_patterns(self) -> PIIPatternSet:
        return PIIPatternSet.from_types(self.pii_types, name=self.pii_profile)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "categories": {c: list(terms) for c, terms in self.categories.items()},
            "pii": {"profile": self.pii_profile, "types": list(self.pii_types)},
            "thresholds": {
                "auto_reject": self.thresholds.auto_reject,
                "auto_approve": self.thresholds.auto_approve,
                "max_keyword_matches": self.thresholds.max_keyword_matches,
            },
            "limits": {"post": self.limits.post, "comment": self.limits.comment},
        }


def load_config(path: str | Path) -> ModerationConfig:
    """Load a moderation policy from a YAML file."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Policy file not found: {path}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"{path}: policy must be a mapping")
    return config_from_dict(data)


def config_from_dict(data: dict[str, Any]) -> ModerationConfig:
    """Build a :class:`ModerationConfig` from parsed policy data."""
    categories = _parse_categories(data.get("categories"))
    pii_profile, pii_types = _parse_pii(data.get("pii") or {})
    thresholds = _parse_thresholds(data.get("thresholds") or {})

    limits_data = data.get("limits") or {}
    limits = ContentLimits(
        post=limits_data.get("post", 1000),
        comment=limits_data.get("comment", 500),
    )
    for label, value in (("post", limits.post), ("comment", limits.comment)):
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            raise ConfigError(f"limits.{label} must be a positive integer, got {value!r}")

    resources = []
    for entry in data.get("crisis_resources", []) or []:
        if not isinstance(entry, dict) or not entry.get("name"):
            raise ConfigError("Each crisis resource needs a 'name'")
        resources.append(
            CrisisResource(
                name=entry["name"],
                phone=str(entry.get("phone", "")),
                text=entry.get("text", ""),
                website=entry.get("website", ""),
            )
        )

    return ModerationConfig(
        name=data.get("name", "unnamed"),
        version=str(data.get("version", "1.0.0")),
        categories=categories,
        pii_types=pii_types,
        pii_profile=pii_profile,
        thresholds=thresholds,
        limits=limits,
        crisis_resources=resources,
    )


def default_config() -> ModerationConfig:
    """Load the bundled default policy."""
    return load_config(DEFAULT_POLICY_PATH)


def config_from_env(path: Optional[str | Path] = None) -> ModerationConfig:
    """Load *path*, else ``$CONFESS_POLICY_FILE``, else the bundled policy."""
    path = path or os.environ.get(POLICY_ENV_VAR)
    return load_config(path) if path else default_config()


def _parse_categories(raw: Any) -> dict[str, tuple[str, ...]]:
    if not isinstance(raw, dict) or not raw:
        raise ConfigError("Policy must define at least one keyword category")

    categories: dict[str, tuple[str, ...]] = {}
    for category, terms in raw.items():
        if str(category) == UNKNOWN_CATEGORY:
            raise ConfigError(f"'{UNKNOWN_CATEGORY}' is reserved for scans with no matches")
        if not isinstance(terms, list):
            raise ConfigError(f"Category '{category}' must be a list of terms")
        for term in terms:
            if not isinstance(term, str) or not term.strip():
                raise ConfigError(f"Category '{category}' has an invalid term: {term!r}")
        categories[str(category)] = tuple(terms)
    return categories


def _parse_pii(raw: dict[str, Any]) -> tuple[str, tuple[str, ...]]:
    profile = raw.get("profile", "full")
    types = raw.get("types")

    if types is not None:
        if "profile" in raw:
            raise ConfigError("Set either pii.profile or pii.types, not both")
        if not isinstance(types, list):
            raise ConfigError("pii.types must be a list of detector names")
        unknown = [t for t in types if t not in DETECTORS]
        if unknown:
            raise ConfigError(
                f"Unknown PII detector(s) {unknown}. Must be among: {list(DETECTORS)}"
            )
        return "custom", tuple(types)

    if profile not in PROFILES:
        raise ConfigError(f"Unknown PII profile '{profile}'. Must be one of: {sorted(PROFILES)}")
    return profile, PROFILES[profile]


def _parse_thresholds(raw: dict[str, Any]) -> Thresholds:
    thresholds = Thresholds(
        auto_reject=raw.get("auto_reject", 0.9),
        auto_approve=raw.get("auto_approve", 0.3),
        max_keyword_matches=raw.get("max_keyword_matches", 3),
    )
    for label in ("auto_reject", "auto_approve"):
        value = getattr(thresholds, label)
        if not isinstance(value, (int, float)) or isinstance(value, bool) or not 0 <= value <= 1:
            raise ConfigError(f"thresholds.{label} must be a number in [0, 1], got {value!r}")
    if thresholds.auto_approve > thresholds.auto_reject:
        raise ConfigError("thresholds.auto_approve must not exceed thresholds.auto_reject")
    mkm = thresholds.max_keyword_matches
    if not isinstance(mkm, int) or isinstance(mkm, bool) or mkm < 1:
        raise ConfigError(f"thresholds.max_keyword_matches must be a positive integer, got {mkm!r}")
    return thresholds
