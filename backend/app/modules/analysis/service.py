"""Document analysis service: the single entry point used by the router.

Always returns an analysis. Provider problems degrade the result (rule-based
fallback plus warnings) but never surface as errors.
"""

from __future__ import annotations

from functools import lru_cache

import structlog

from app.core.config import Settings, settings
from app.modules.analysis.agents.assembler import ResultAssembler
from app.modules.analysis.agents.cooldown import Clock
from app.modules.analysis.agents.orchestrator import HybridOrchestrator
from app.modules.analysis.agents.providers import build_provider_agents
from app.modules.analysis.agents.rules import RuleBasedAnalyzer
from app.modules.analysis.agent_schemas import HybridRun
from app.modules.analysis.schemas import AnalysisRequest, DocumentAnalysis, ProviderStatus

logger = structlog.get_logger()


class AnalysisService:
    """Rule-based baseline + hybrid provider analysis + assembly."""

    def __init__(
        self,
        orchestrator: HybridOrchestrator,
        rules: RuleBasedAnalyzer | None = None,
        assembler: ResultAssembler | None = None,
    ) -> None:
        self.orchestrator = orchestrator
        self.rules = rules or RuleBasedAnalyzer()
        self.assembler = assembler or ResultAssembler(settings.analysis_large_file_bytes)

    @classmethod
    def from_settings(cls, config: Settings, clock: Clock | None = None) -> AnalysisService:
        primary, secondary = build_provider_agents(config, clock=clock)
        return cls(
            orchestrator=HybridOrchestrator(primary, secondary),
            assembler=ResultAssembler(config.analysis_large_file_bytes),
        )

    async def analyze(self, request: AnalysisRequest) -> DocumentAnalysis:
        logger.info(
            "AI analysis starting",
            file=request.filename,
            category=request.declared_category,
            file_type=request.file_type_label,
        )

        baseline = self.rules.analyze(request)

        if self.orchestrator.any_configured:
            run = await self.orchestrator.run_hybrid(request)
        else:
            run = HybridRun()

        warnings = self.assembler.collect_warnings(run, self.orchestrator.agents)
        analysis = self.assembler.assemble(request, baseline, run, warnings)

        logger.info(
            "AI analysis complete",
            file=request.filename,
            method=analysis.analysis_method,
            classification=analysis.suggested_classification,
            hybrid=analysis.hybrid_analysis_used,
            warnings=len(analysis.warnings),
        )
        return analysis

    def provider_status(self) -> list[ProviderStatus]:
        return [
            ProviderStatus(
                provider=agent.provider,
                model=agent.model,
                configured=agent.configured,
                **agent.breaker.snapshot(),
            )
            for agent in self.orchestrator.agents
        ]


@lru_cache
def get_analysis_service() -> AnalysisService:
    """Process-wide service (and therefore process-wide cooldown state)."""
    return AnalysisService.from_settings(settings)
