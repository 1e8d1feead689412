"""Tests for the moderation engine (validation + full scan pipeline)."""

import pytest

from confess.moderation.config import default_config
from confess.moderation.engine import ModerationEngine, content_length, parse_content_type
from confess.moderation.errors import InputValidationError, InternalScanError
from confess.moderation.models import ContentType, ModerationRecord, ModerationStatus

ENGINE = ModerationEngine(default_config())


# --- Scenarios ---


def test_clean_text_is_approved():
    report = ENGINE.scan("Had a great day at the library!")
    assert report.verdict.status == ModerationStatus.APPROVED
    assert report.verdict.confidence == 1.0
    assert report.keywords.matches == ()
    assert not report.pii.has_pii


def test_violent_keyword_goes_to_review():
    report = ENGINE.scan("I want to kill this assignment")
    assert report.keywords.matches == ("kill",)
    assert report.keywords.category == "violence"
    assert report.verdict.status == ModerationStatus.REVIEW
    assert report.verdict.confidence == pytest.approx(1 / 3)


def test_phone_number_is_rejected():
    report = ENGINE.scan("Call me at 555-123-4567")
    assert report.pii.types == ("phone",)
    assert report.verdict.status == ModerationStatus.REJECTED
    assert report.verdict.reason == "Contains personal information"


def test_self_harm_is_flagged():
    report = ENGINE.scan("I want to kill myself")
    assert report.keywords.category == "self_harm"
    assert report.verdict.status == ModerationStatus.FLAGGED
    assert report.verdict.confidence < 0.9


def test_many_keywords_are_rejected():
    report = ENGINE.scan("bring a gun and a bomb to the massacre")
    assert report.verdict.status == ModerationStatus.REJECTED
    assert report.verdict.reason == "High confidence violation (violence)"


def test_scan_is_deterministic():
    text = "Rm 214, bring the gun"
    assert ENGINE.scan(text) == ENGINE.scan(text)


# --- Validation ---


@pytest.mark.parametrize("content", [None, "", 42, ["text"]])
def test_content_is_required(content):
    with pytest.raises(InputValidationError, match="Content is required"):
        ENGINE.scan(content)


def test_post_length_limit():
    ENGINE.scan("a" * 1000, "post")
    with pytest.raises(InputValidationError, match="1000"):
        ENGINE.scan("a" * 1001, "post")


def test_comment_length_limit():
    ENGINE.scan("a" * 500, "comment")
    with pytest.raises(InputValidationError, match="500"):
        ENGINE.scan("a" * 501, "comment")


def test_emoji_count_as_two_characters():
    emoji = "\U0001F600"
    assert content_length(emoji * 3) == 6
    ENGINE.scan(emoji * 500, "post")
    with pytest.raises(InputValidationError, match="1000"):
        ENGINE.scan(emoji * 501, "post")
    ENGINE.scan(emoji * 250, "comment")
    with pytest.raises(InputValidationError, match="500"):
        ENGINE.scan(emoji * 251, "comment")


def test_unknown_type_uses_post_limit():
    report = ENGINE.scan("a" * 800, "story")
    assert report.content_type == ContentType.POST


def test_parse_content_type():
    assert parse_content_type("comment") == ContentType.COMMENT
    assert parse_content_type(None) == ContentType.POST
    assert parse_content_type(ContentType.COMMENT) == ContentType.COMMENT


def test_oversized_input_is_not_truncated():
    # PII past the limit must not be silently dropped
    text = "a" * 995 + " 555-123-4567"
    with pytest.raises(InputValidationError):
        ENGINE.scan(text)


def test_unexpected_failure_is_wrapped(monkeypatch):
    engine = ModerationEngine(default_config())

    def boom(text):
        raise TypeError("bad table")

    monkeypatch.setattr(engine, "scan_keywords", boom)
    with pytest.raises(InternalScanError):
        engine.scan("hello")


# --- Output shapes ---


def test_report_to_dict():
    result = ENGINE.scan("I want to kill this assignment").to_dict()
    assert result == {
        "status": "review",
        "reason": "Requires human review (violence)",
        "confidence": pytest.approx(1 / 3),
        "details": {
            "keywords_found": ["kill"],
            "category": "violence",
            "has_pii": False,
        },
    }


def test_moderation_record_pending_for_review():
    record = ModerationRecord.from_report(ENGINE.scan("I want to kill this assignment"))
    assert record.ai_scan_status == "pending"
    assert record.moderation_status == "pending"
    assert record.keywords_found == ["kill"]


def test_moderation_record_rejected_pii():
    record = ModerationRecord.from_report(ENGINE.scan("Call me at 555-123-4567"))
    assert record.ai_scan_status == "rejected"
    assert record.ai_scan_confidence == 1.0
    assert record.pii_types == ["phone"]
