"""Unit tests for provider reply parsing and shape coercion."""

from __future__ import annotations

import pytest

from app.modules.analysis.agents.sanitizer import (
    MalformedResponseError,
    find_json_object,
    parse_json_reply,
    sanitize_analysis_json,
    strip_code_fences,
)

# ---------------------------------------------------------------------------
# JSON extraction
# ---------------------------------------------------------------------------


def test_strip_code_fences() -> None:
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('  {"a": 1}  ') == '{"a": 1}'


def test_find_json_object_in_prose() -> None:
    text = 'Sure! Here you go: {"summary": "ok", "nested": {"x": 1}} Hope it helps {"b": 2}'
    assert find_json_object(text) == '{"summary": "ok", "nested": {"x": 1}}'


def test_find_json_object_ignores_braces_in_strings() -> None:
    text = '{"summary": "uses } and { inside", "tags": ["a\\"}"]} trailing'
    assert find_json_object(text) == '{"summary": "uses } and { inside", "tags": ["a\\"}"]}'


def test_find_json_object_none_when_missing_or_unbalanced() -> None:
    assert find_json_object("no json here") is None
    assert find_json_object('{"summary": "cut off') is None


def test_parse_json_reply_fenced() -> None:
    data = parse_json_reply('```json\n{"summary": "A report", "priority": "HIGH"}\n```')
    assert data == {"summary": "A report", "priority": "HIGH"}


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "",
        "   ",
        "I could not analyze this document.",
        '{"summary": "missing quote}',
        "{not: valid json}",
    ],
)
def test_parse_json_reply_malformed(raw: str | None) -> None:
    with pytest.raises(MalformedResponseError):
        parse_json_reply(raw)


# ---------------------------------------------------------------------------
# Shape coercion
# ---------------------------------------------------------------------------


def test_sanitize_maps_camel_case_to_fields() -> None:
    clean = sanitize_analysis_json({
        "summary": "  Board minutes  ",
        "suggestedCategory": "Board Meeting Minutes",
        "suggestedClassification": "INTERNAL",
        "keyTopics": ["Governance"],
        "suggestedTags": ["board"],
        "securityRisks": [],
        "readabilityScore": 0.8,
        "sentimentScore": "0.55",
        "language": "English",
        "priority": "high",
        "confidenceScore": 0.9,
        "insights": ["Circulate to trustees"],
    })

    assert clean["summary"] == "Board minutes"
    assert clean["suggested_category"] == "Board Meeting Minutes"
    assert clean["key_topics"] == ["Governance"]
    assert clean["sentiment_score"] == pytest.approx(0.55)
    assert clean["priority"] == "HIGH"
    assert clean["insights"] == ["Circulate to trustees"]


def test_sanitize_clamps_scores_and_drops_garbage() -> None:
    clean = sanitize_analysis_json({
        "readabilityScore": 7,
        "sentimentScore": -0.4,
        "confidenceScore": "very high",
        "priority": "URGENT",
        "suggestedTags": "single-tag",
        "keyTopics": ["Finance", "", None, 3],
        "securityRisks": {"not": "a list"},
    })

    assert clean["readability_score"] == 1.0
    assert clean["sentiment_score"] == 0.0
    assert clean["confidence_score"] is None
    assert clean["priority"] is None
    assert clean["suggested_tags"] == ["single-tag"]
    assert clean["key_topics"] == ["Finance", "3"]
    assert clean["security_risks"] == []
    assert clean["summary"] == ""
