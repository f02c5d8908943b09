"""Clip provider suggestions to the fixed vocabularies."""

from __future__ import annotations

from typing import Any

import structlog

from app.modules.analysis.categories import (
    DEFAULT_CLASSIFICATION,
    is_valid_category,
    is_valid_classification,
)

logger = structlog.get_logger()


def validate_suggestions(analysis: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of a raw provider reply with safe category/classification.

    - ``suggestedCategory`` survives only as an exact (case-sensitive) member
      of DOCUMENT_CATEGORIES, otherwise it becomes None.
    - ``suggestedClassification`` survives only as one of the five security
      levels, otherwise it becomes INTERNAL.
    """
    validated = dict(analysis)

    category = analysis.get("suggestedCategory")
    if not is_valid_category(category):
        if category:
            logger.warning("Invalid suggested category, dropping", suggested=category)
        validated["suggestedCategory"] = None

    classification = analysis.get("suggestedClassification")
    if not is_valid_classification(classification):
        if classification:
            logger.warning(
                "Invalid suggested classification, defaulting",
                suggested=classification,
                default=DEFAULT_CLASSIFICATION,
            )
        validated["suggestedClassification"] = DEFAULT_CLASSIFICATION

    return validated
