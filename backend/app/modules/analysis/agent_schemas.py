"""Agent contracts: Pydantic models passed between the analysis agents.

  ProviderAgent      -> Orchestrator:  ProviderOutcome (wraps ProviderAnalysis)
  Orchestrator       -> Merger:        ProviderAnalysis x2
  Merger/Orchestrator -> Assembler:    HybridRun (MergedAnalysis | None)
  RuleBasedAnalyzer  -> Assembler:     RuleBasedAnalysis
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from app.modules.analysis.categories import Classification, Priority


# ---------------------------------------------------------------------------
# Provider output (one per successful provider call)
# ---------------------------------------------------------------------------


class ProviderAnalysis(BaseModel):
    """Canonical, validated analysis returned by a single provider."""

    model_config = ConfigDict(frozen=True)

    summary: str = ""
    suggested_category: str | None = Field(
        None, description="Exact member of DOCUMENT_CATEGORIES or null"
    )
    suggested_classification: Classification = "INTERNAL"
    key_topics: list[str] = Field(default_factory=list)
    suggested_tags: list[str] = Field(default_factory=list)
    security_risks: list[str] = Field(default_factory=list)
    readability_score: float | None = Field(None, ge=0.0, le=1.0)
    sentiment_score: float | None = Field(None, ge=0.0, le=1.0)
    language: str | None = None
    priority: Priority | None = None
    confidence_score: float | None = Field(None, ge=0.0, le=1.0)
    insights: list[str] = Field(default_factory=list)


class MergedAnalysis(ProviderAnalysis):
    """Provider-path result handed to the assembler.

    Either a single provider's analysis tagged with that provider, or the
    consensus of both.
    """

    analysis_method: str
    ai_providers: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Tagged outcome of one provider call
# ---------------------------------------------------------------------------


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    NOT_CONFIGURED = "not_configured"
    COOLING_DOWN = "cooling_down"
    QUOTA_EXCEEDED = "quota_exceeded"
    TRANSIENT_ERROR = "transient_error"
    MALFORMED_RESPONSE = "malformed_response"


QUOTA_STATUSES = frozenset({OutcomeStatus.COOLING_DOWN, OutcomeStatus.QUOTA_EXCEEDED})


class ProviderOutcome(BaseModel):
    """Result of ProviderAgent.analyze(): success with an analysis, or a reason."""

    model_config = ConfigDict(frozen=True)

    provider: str
    status: OutcomeStatus
    analysis: ProviderAnalysis | None = None
    error: str | None = None
    duration_ms: int = 0

    @property
    def succeeded(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS and self.analysis is not None

    @property
    def quota_limited(self) -> bool:
        return self.status in QUOTA_STATUSES

    @classmethod
    def success(
        cls, provider: str, analysis: ProviderAnalysis, duration_ms: int = 0
    ) -> ProviderOutcome:
        return cls(
            provider=provider,
            status=OutcomeStatus.SUCCESS,
            analysis=analysis,
            duration_ms=duration_ms,
        )

    @classmethod
    def failure(
        cls,
        provider: str,
        status: OutcomeStatus,
        error: str | None = None,
        duration_ms: int = 0,
    ) -> ProviderOutcome:
        if status is OutcomeStatus.SUCCESS:
            raise ValueError("failure() requires a non-success status")
        return cls(provider=provider, status=status, error=error, duration_ms=duration_ms)


class HybridRun(BaseModel):
    """Output of the orchestrator for one request."""

    analysis: MergedAnalysis | None = None
    outcomes: list[ProviderOutcome] = Field(default_factory=list)

    @property
    def hybrid(self) -> bool:
        return self.analysis is not None and len(self.analysis.ai_providers) > 1


# ---------------------------------------------------------------------------
# Rule-based baseline
# ---------------------------------------------------------------------------


class RuleBasedAnalysis(BaseModel):
    """Deterministic, network-free analysis computed for every request."""

    model_config = ConfigDict(frozen=True)

    file_type: str
    file_family: str
    language: str
    classification: Classification
    classification_confidence: float = Field(..., ge=0.0, le=1.0)
    readability_score: float = Field(..., ge=0.0, le=1.0)
    sentiment_score: float = Field(..., ge=0.0, le=1.0)
    sentiment_label: str
    key_topics: list[str]
    summary: str
