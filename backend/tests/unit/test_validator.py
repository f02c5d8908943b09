"""Unit tests for clipping provider suggestions to the fixed vocabularies."""

from __future__ import annotations

import pytest

from app.modules.analysis.agents.validator import validate_suggestions
from app.modules.analysis.categories import DOCUMENT_CATEGORIES, SECURITY_CLASSIFICATIONS


def test_unknown_category_becomes_none() -> None:
    validated = validate_suggestions({
        "suggestedCategory": "Not A Real Category",
        "suggestedClassification": "PUBLIC",
    })
    assert validated["suggestedCategory"] is None
    assert validated["suggestedClassification"] == "PUBLIC"


def test_category_match_is_case_sensitive() -> None:
    validated = validate_suggestions({"suggestedCategory": "financial documents"})
    assert validated["suggestedCategory"] is None


@pytest.mark.parametrize("category", ["Financial Documents", "Memorandums of Understanding (MOUs)"])
def test_known_category_is_kept(category: str) -> None:
    assert category in DOCUMENT_CATEGORIES
    assert validate_suggestions({"suggestedCategory": category})["suggestedCategory"] == category


@pytest.mark.parametrize("classification", SECURITY_CLASSIFICATIONS)
def test_all_five_classifications_accepted(classification: str) -> None:
    validated = validate_suggestions({"suggestedClassification": classification})
    assert validated["suggestedClassification"] == classification


@pytest.mark.parametrize("classification", ["RESTRICTED", "confidential", "", None, 3])
def test_invalid_classification_defaults_to_internal(classification: object) -> None:
    validated = validate_suggestions({"suggestedClassification": classification})
    assert validated["suggestedClassification"] == "INTERNAL"


def test_absent_fields_are_filled_with_safe_defaults() -> None:
    validated = validate_suggestions({"summary": "x"})
    assert validated["suggestedCategory"] is None
    assert validated["suggestedClassification"] == "INTERNAL"
    assert validated["summary"] == "x"


def test_input_is_not_mutated() -> None:
    raw = {"suggestedCategory": "Bogus", "suggestedClassification": "BOGUS"}
    validate_suggestions(raw)
    assert raw == {"suggestedCategory": "Bogus", "suggestedClassification": "BOGUS"}
