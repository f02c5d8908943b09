"""Assemble the final DocumentAnalysis payload.

Field by field, the provider-path value (hybrid or single provider) wins when
present; the rule-based baseline fills the rest.
"""

from __future__ import annotations

import structlog

from app.modules.analysis.agent_schemas import HybridRun, RuleBasedAnalysis
from app.modules.analysis.agents.base import ProviderAgent
from app.modules.analysis.agents.merger import ordered_union
from app.modules.analysis.categories import DEFAULT_PRIORITY
from app.modules.analysis.schemas import AnalysisRequest, DocumentAnalysis

logger = structlog.get_logger()

RULE_BASED_METHOD = "Rule-Based Intelligence"
NOT_CONFIGURED_WARNING = "AI providers are not configured; using rule-based analysis."

RISK_SENSITIVE = "Contains sensitive information requiring restricted access"
RISK_CREDENTIALS = "Filename suggests potential security credentials"
RISK_LARGE_FILE = "Large file size may contain extensive sensitive data"

CREDENTIAL_FILENAME_MARKERS = ("password", "key")


def sentiment_label(score: float) -> str:
    if score > 0.7:
        return "Very Positive"
    if score > 0.5:
        return "Positive"
    if score > 0.3:
        return "Neutral"
    return "Negative"


def _prefer(value: float | None, fallback: float) -> float:
    return fallback if value is None else value


def heuristic_security_risks(
    request: AnalysisRequest,
    baseline: RuleBasedAnalysis,
    large_file_bytes: int,
) -> list[str]:
    risks: list[str] = []
    if baseline.classification == "CONFIDENTIAL":
        risks.append(RISK_SENSITIVE)
    name = request.filename.lower()
    if any(marker in name for marker in CREDENTIAL_FILENAME_MARKERS):
        risks.append(RISK_CREDENTIALS)
    if request.file_size > large_file_bytes:
        risks.append(RISK_LARGE_FILE)
    return risks


class ResultAssembler:
    """Builds the response payload from the hybrid run and the baseline."""

    def __init__(self, large_file_bytes: int) -> None:
        self.large_file_bytes = large_file_bytes

    def assemble(
        self,
        request: AnalysisRequest,
        baseline: RuleBasedAnalysis,
        run: HybridRun,
        warnings: list[str],
    ) -> DocumentAnalysis:
        ai = run.analysis
        if ai is None:
            return self._rule_based(request, baseline, warnings)

        if ai.sentiment_score is not None:
            sentiment, label = ai.sentiment_score, sentiment_label(ai.sentiment_score)
        else:
            sentiment, label = baseline.sentiment_score, baseline.sentiment_label

        return DocumentAnalysis(
            summary=ai.summary or baseline.summary,
            suggested_tags=list(ai.suggested_tags) or self._fallback_tags(request, baseline),
            suggested_category=ai.suggested_category,
            suggested_classification=ai.suggested_classification,
            classification_confidence=_prefer(
                ai.confidence_score, baseline.classification_confidence
            ),
            content_type=baseline.file_type,
            language=ai.language or baseline.language,
            readability_score=_prefer(ai.readability_score, baseline.readability_score),
            sentiment_score=sentiment,
            sentiment_label=label,
            key_topics=list(ai.key_topics) or list(baseline.key_topics),
            security_risks=(
                list(ai.security_risks)
                or heuristic_security_risks(request, baseline, self.large_file_bytes)
            ),
            priority=ai.priority or DEFAULT_PRIORITY,
            insights=list(ai.insights),
            file_size=request.file_size,
            file_name=request.filename,
            analysis_method=ai.analysis_method,
            ai_providers=list(ai.ai_providers),
            hybrid_analysis_used=True,
            warnings=list(warnings),
        )

    def _rule_based(
        self,
        request: AnalysisRequest,
        baseline: RuleBasedAnalysis,
        warnings: list[str],
    ) -> DocumentAnalysis:
        return DocumentAnalysis(
            summary=baseline.summary,
            suggested_tags=self._fallback_tags(request, baseline),
            suggested_category=None,
            suggested_classification=baseline.classification,
            classification_confidence=baseline.classification_confidence,
            content_type=baseline.file_type,
            language=baseline.language,
            readability_score=baseline.readability_score,
            sentiment_score=baseline.sentiment_score,
            sentiment_label=baseline.sentiment_label,
            key_topics=list(baseline.key_topics),
            security_risks=heuristic_security_risks(request, baseline, self.large_file_bytes),
            priority=DEFAULT_PRIORITY,
            insights=[],
            file_size=request.file_size,
            file_name=request.filename,
            analysis_method=RULE_BASED_METHOD,
            ai_providers=[],
            hybrid_analysis_used=False,
            warnings=list(warnings),
        )

    @staticmethod
    def _fallback_tags(request: AnalysisRequest, baseline: RuleBasedAnalysis) -> list[str]:
        return ordered_union(
            [baseline.file_family, baseline.language, request.declared_category],
            baseline.key_topics[:3],
        )

    @staticmethod
    def collect_warnings(run: HybridRun, agents: tuple[ProviderAgent, ...]) -> list[str]:
        """Warnings for this request: nothing configured, or a quota hit."""
        warnings: list[str] = []
        if not any(agent.configured for agent in agents):
            warnings.append(NOT_CONFIGURED_WARNING)

        limited = {o.provider for o in run.outcomes if o.quota_limited}
        for agent in agents:
            if agent.provider in limited:
                warnings.append(agent.quota_warning)

        if warnings:
            logger.info("Analysis warnings", warnings=warnings)
        return warnings
