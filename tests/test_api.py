"""Tests for the moderation HTTP endpoints."""

import pytest
from fastapi.testclient import TestClient

from confess.moderation.config import config_from_dict
from confess.moderation.engine import ModerationEngine
from web.backend.app.main import app
from web.backend.app.routers import moderation

client = TestClient(app)

SCAN_URL = "/api/moderation/scan"


def test_health():
    assert client.get("/health").json() == {"status": "healthy"}


def test_scan_clean_post():
    resp = client.post(SCAN_URL, json={"content": "Had a great day at the library!", "type": "post"})
    assert resp.status_code == 200
    assert resp.json() == {
        "success": True,
        "result": {
            "status": "approved",
            "reason": "No violations detected",
            "confidence": 1.0,
            "details": {"keywords_found": [], "category": "unknown", "has_pii": False},
        },
    }


def test_scan_review():
    resp = client.post(SCAN_URL, json={"content": "I want to kill this assignment", "type": "post"})
    result = resp.json()["result"]
    assert result["status"] == "review"
    assert result["confidence"] == pytest.approx(1 / 3)
    assert result["details"]["keywords_found"] == ["kill"]


def test_scan_pii_rejected():
    resp = client.post(SCAN_URL, json={"content": "Call me at 555-123-4567", "type": "comment"})
    result = resp.json()["result"]
    assert result["status"] == "rejected"
    assert result["reason"] == "Contains personal information"
    assert result["details"]["has_pii"] is True


def test_legacy_edge_function_path():
    resp = client.post("/functions/v1/ai-scan-content", json={"content": "I want to kill myself"})
    assert resp.status_code == 200
    assert resp.json()["result"]["status"] == "flagged"


@pytest.mark.parametrize("body", [{}, {"content": ""}, {"content": 12}, ["content"]])
def test_missing_content(body):
    resp = client.post(SCAN_URL, json=body)
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Content is required"}


def test_post_too_long():
    resp = client.post(SCAN_URL, json={"content": "a" * 1001, "type": "post"})
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Content exceeds 1000 characters"}


def test_comment_too_long():
    resp = client.post(SCAN_URL, json={"content": "a" * 501, "type": "comment"})
    assert resp.status_code == 400
    assert "500" in resp.json()["error"]


def test_malformed_json_is_internal_error():
    resp = client.post(
        SCAN_URL, content="not json", headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Internal server error"}


def test_unexpected_failure_hides_details(monkeypatch):
    def boom(content, content_type=None):
        raise RuntimeError("regex engine exploded")

    monkeypatch.setattr(moderation.get_engine(), "scan", boom)
    resp = client.post(SCAN_URL, json={"content": "hello"})
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Internal server error"}


def test_policy_endpoint():
    data = client.get("/api/moderation/policy").json()
    assert list(data["categories"])[0] == "self_harm"
    assert data["pii"]["profile"] == "full"
    assert data["thresholds"]["auto_reject"] == 0.9
    assert data["limits"] == {"post": 1000, "comment": 500}


def test_crisis_resources_endpoint():
    data = client.get("/api/moderation/crisis-resources").json()
    assert data[0]["phone"] == "988"
    assert data[1]["text"] == "Text HOME to 741741"


def test_swapped_engine():
    original = moderation.get_engine()
    moderation.set_engine(
        ModerationEngine(config_from_dict({"categories": {"spam": ["buy now"]}}))
    )
    try:
        resp = client.post(SCAN_URL, json={"content": "BUY NOW!!!"})
        assert resp.json()["result"]["details"]["category"] == "spam"
    finally:
        moderation.set_engine(original)


def test_scan_request_schema_is_published():
    spec = client.get("/openapi.json").json()
    body = spec["paths"]["/api/moderation/scan"]["post"]["requestBody"]
    schema = body["content"]["application/json"]["schema"]
    assert body["required"] is True
    assert set(schema["properties"]) == {"content", "type"}
    assert schema["required"] == ["content"]
    assert "/functions/v1/ai-scan-content" not in spec["paths"]
