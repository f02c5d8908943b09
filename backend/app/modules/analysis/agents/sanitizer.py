"""Post-processing of provider replies before Pydantic validation.

Providers answer in free text that is expected to contain one JSON object.
This module:
  1. strips markdown code fences
  2. extracts the first balanced JSON object from the text
  3. coerces the camelCase reply into the snake_case ProviderAnalysis shape
     (lists as lists of non-empty strings, scores as floats clamped to [0, 1],
     priority upper-cased and checked against LOW/MEDIUM/HIGH)
"""

from __future__ import annotations

import json
import math
from typing import Any

from app.modules.analysis.categories import PRIORITIES

# Provider JSON key -> ProviderAnalysis field
_STRING_FIELDS = {
    "summary": "summary",
    "language": "language",
}
_LIST_FIELDS = {
    "keyTopics": "key_topics",
    "suggestedTags": "suggested_tags",
    "securityRisks": "security_risks",
    "insights": "insights",
}
_SCORE_FIELDS = {
    "readabilityScore": "readability_score",
    "sentimentScore": "sentiment_score",
    "confidenceScore": "confidence_score",
}


class MalformedResponseError(ValueError):
    """The provider reply did not contain a usable JSON object."""


# ---------------------------------------------------------------------------
# Text -> dict
# ---------------------------------------------------------------------------


def strip_code_fences(raw_text: str) -> str:
    """Strip markdown code fences (```json ... ```) from an LLM response."""
    text = raw_text.strip()
    if text.startswith("```"):
        first_newline = text.find("\n")
        text = text[first_newline + 1:] if first_newline != -1 else text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def find_json_object(text: str) -> str | None:
    """Return the first balanced ``{...}`` span in *text*, or None.

    Braces inside JSON string literals are ignored.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for idx in range(start, len(text)):
        char = text[idx]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start:idx + 1]
    return None


def parse_json_reply(raw_text: str | None) -> dict[str, Any]:
    """Extract and parse the JSON object embedded in a provider reply."""
    if not raw_text or not raw_text.strip():
        raise MalformedResponseError("Empty response from provider")

    candidate = find_json_object(strip_code_fences(raw_text))
    if candidate is None:
        raise MalformedResponseError("No JSON object found in provider response")

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Invalid JSON in provider response: {e}") from e

    if not isinstance(data, dict):
        raise MalformedResponseError("Provider JSON is not an object")
    return data


# ---------------------------------------------------------------------------
# Shape coercion
# ---------------------------------------------------------------------------


def _as_string(value: Any) -> str | None:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _as_string_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    items = []
    for item in value:
        text = _as_string(item)
        if text:
            items.append(text)
    return items


def _as_score(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float)) or math.isnan(value):
        return None
    return min(1.0, max(0.0, float(value)))


def _as_priority(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    value = value.strip().upper()
    return value if value in PRIORITIES else None


def sanitize_analysis_json(data: dict[str, Any]) -> dict[str, Any]:
    """Coerce a validated provider reply into ProviderAnalysis keyword arguments.

    ``suggestedCategory`` and ``suggestedClassification`` are expected to have
    been checked by the validator already and are passed through unchanged.
    """
    clean: dict[str, Any] = {
        "suggested_category": data.get("suggestedCategory"),
        "suggested_classification": data.get("suggestedClassification"),
        "priority": _as_priority(data.get("priority")),
    }
    for key, field in _STRING_FIELDS.items():
        clean[field] = _as_string(data.get(key))
    for key, field in _LIST_FIELDS.items():
        clean[field] = _as_string_list(data.get(key))
    for key, field in _SCORE_FIELDS.items():
        clean[field] = _as_score(data.get(key))

    if clean["summary"] is None:
        clean["summary"] = ""
    return clean
