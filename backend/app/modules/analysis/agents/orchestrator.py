"""Hybrid analysis orchestrator.

Pure Python controller: no LLM calls of its own. Fans a request out to both
provider agents concurrently and waits until both have settled:

    request -> [OpenAI agent || Gemini agent] -> outcomes
      both failed      -> no analysis (caller falls back to rules)
      one succeeded    -> that analysis, tagged with its provider
      both succeeded   -> ConsensusMerger
"""

from __future__ import annotations

import asyncio
import time

import structlog

from app.modules.analysis.agent_schemas import (
    HybridRun,
    MergedAnalysis,
    OutcomeStatus,
    ProviderOutcome,
)
from app.modules.analysis.agents.base import ProviderAgent
from app.modules.analysis.agents.merger import ConsensusMerger
from app.modules.analysis.schemas import AnalysisRequest

logger = structlog.get_logger()


class HybridOrchestrator:
    """Runs the primary and secondary provider agents side by side."""

    agent_name = "Orchestrator"

    def __init__(
        self,
        primary: ProviderAgent,
        secondary: ProviderAgent,
        merger: ConsensusMerger | None = None,
    ) -> None:
        self.primary = primary
        self.secondary = secondary
        self.merger = merger or ConsensusMerger()

    @property
    def agents(self) -> tuple[ProviderAgent, ProviderAgent]:
        return self.primary, self.secondary

    @property
    def any_configured(self) -> bool:
        return self.primary.configured or self.secondary.configured

    @property
    def hybrid_method(self) -> str:
        return f"Hybrid AI ({self.primary.display_name} + {self.secondary.display_name})"

    async def run_hybrid(self, request: AnalysisRequest) -> HybridRun:
        """Analyze *request* with both providers and combine what succeeded."""
        start = time.monotonic()
        logger.info(f"{self.agent_name}: starting hybrid analysis", file=request.filename)

        # Settle both calls independently: one side failing never touches the other.
        results = await asyncio.gather(
            self.primary.analyze(request),
            self.secondary.analyze(request),
            return_exceptions=True,
        )
        outcomes = [
            self._settle(agent, result) for agent, result in zip(self.agents, results)
        ]
        primary_outcome, secondary_outcome = outcomes

        analysis: MergedAnalysis | None = None
        if primary_outcome.succeeded and secondary_outcome.succeeded:
            analysis = self.merger.merge(
                primary_outcome.analysis,
                secondary_outcome.analysis,
                providers=(self.primary.model, self.secondary.model),
                method=self.hybrid_method,
            )
        elif primary_outcome.succeeded:
            analysis = self._single(self.primary, primary_outcome)
        elif secondary_outcome.succeeded:
            analysis = self._single(self.secondary, secondary_outcome)

        logger.info(
            f"{self.agent_name}: hybrid analysis settled",
            file=request.filename,
            outcomes={o.provider: o.status.value for o in outcomes},
            method=analysis.analysis_method if analysis else None,
            duration_ms=int((time.monotonic() - start) * 1000),
        )
        return HybridRun(analysis=analysis, outcomes=outcomes)

    def _settle(
        self, agent: ProviderAgent, result: ProviderOutcome | BaseException
    ) -> ProviderOutcome:
        if isinstance(result, BaseException):
            logger.error(
                f"{self.agent_name}: provider agent raised",
                provider=agent.provider,
                error=str(result),
            )
            return ProviderOutcome.failure(
                agent.provider, OutcomeStatus.TRANSIENT_ERROR, error=str(result)
            )
        return result

    @staticmethod
    def _single(agent: ProviderAgent, outcome: ProviderOutcome) -> MergedAnalysis:
        return MergedAnalysis(
            **outcome.analysis.model_dump(),
            analysis_method=agent.method_label,
            ai_providers=[agent.model],
        )
