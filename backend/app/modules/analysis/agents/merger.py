"""Consensus merge of two successful provider analyses.

This agent is PURELY PROGRAMMATIC: no LLM calls.

The merge is deterministic but not symmetric: ``a`` is the primary provider
(OpenAI), ``b`` the secondary (Gemini).

Merge Strategy:
  - Tags / topics:   ordered union (a first), de-duplicated, capped at 8 / 6
  - Security risks:  ordered union, de-duplicated, uncapped
  - Classification:  agreement wins; otherwise CONFIDENTIAL beats INTERNAL
                     beats a's value (SECRET/TOP_SECRET are not escalated)
  - Scores:          mean of both, a missing score counts as 0.5
  - Summary:         the longer one; b wins ties
  - Language:        a, else b, else English
  - Priority:        agreement wins; otherwise HIGH > MEDIUM > a's value
  - Insights:        b only
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from app.modules.analysis.agent_schemas import MergedAnalysis, ProviderAnalysis
from app.modules.analysis.categories import DEFAULT_LANGUAGE, DEFAULT_PRIORITY

logger = structlog.get_logger()

MAX_TAGS = 8
MAX_TOPICS = 6
MISSING_SCORE = 0.5


def ordered_union(*groups: Iterable[str], limit: int | None = None) -> list[str]:
    """Union preserving first-seen order, optionally truncated to *limit*."""
    seen: set[str] = set()
    merged: list[str] = []
    for group in groups:
        for item in group:
            if item not in seen:
                seen.add(item)
                merged.append(item)
    return merged[:limit] if limit is not None else merged


def _mean_score(a: float | None, b: float | None) -> float:
    left = MISSING_SCORE if a is None else a
    right = MISSING_SCORE if b is None else b
    return (left + right) / 2


def merge_classification(a: str, b: str) -> str:
    if a == b:
        return a
    if "CONFIDENTIAL" in (a, b):
        return "CONFIDENTIAL"
    if "INTERNAL" in (a, b):
        return "INTERNAL"
    # TODO: decide whether SECRET/TOP_SECRET should escalate here once the
    # full severity ordering is agreed with records management.
    return a


def merge_priority(a: str | None, b: str | None) -> str:
    if a == b:
        return a or DEFAULT_PRIORITY
    if "HIGH" in (a, b):
        return "HIGH"
    if "MEDIUM" in (a, b):
        return "MEDIUM"
    return a or DEFAULT_PRIORITY


class ConsensusMerger:
    """Combines two provider analyses into one hybrid analysis."""

    agent_name = "Merger"

    def merge(
        self,
        a: ProviderAnalysis,
        b: ProviderAnalysis,
        providers: tuple[str, str],
        method: str,
    ) -> MergedAnalysis:
        """Merge *a* (primary) with *b* (secondary).

        Args:
            a: Analysis of the primary provider.
            b: Analysis of the secondary provider.
            providers: Provider labels (model names) in (a, b) order.
            method: ``analysis_method`` label for the merged result.
        """
        classification = merge_classification(
            a.suggested_classification, b.suggested_classification
        )
        if a.suggested_classification != b.suggested_classification:
            logger.info(
                f"{self.agent_name}: classification conflict",
                a=a.suggested_classification,
                b=b.suggested_classification,
                resolved=classification,
            )

        summary = a.summary if len(a.summary) > len(b.summary) else b.summary

        merged = MergedAnalysis(
            summary=summary,
            suggested_category=a.suggested_category or b.suggested_category,
            suggested_classification=classification,
            key_topics=ordered_union(a.key_topics, b.key_topics, limit=MAX_TOPICS),
            suggested_tags=ordered_union(a.suggested_tags, b.suggested_tags, limit=MAX_TAGS),
            security_risks=ordered_union(a.security_risks, b.security_risks),
            readability_score=_mean_score(a.readability_score, b.readability_score),
            sentiment_score=_mean_score(a.sentiment_score, b.sentiment_score),
            confidence_score=_mean_score(a.confidence_score, b.confidence_score),
            language=a.language or b.language or DEFAULT_LANGUAGE,
            priority=merge_priority(a.priority, b.priority),
            insights=list(b.insights),
            analysis_method=method,
            ai_providers=list(providers),
        )

        logger.info(
            f"{self.agent_name}: hybrid analysis created",
            providers=list(providers),
            classification=merged.suggested_classification,
            priority=merged.priority,
            tags=len(merged.suggested_tags),
            topics=len(merged.key_topics),
        )
        return merged
