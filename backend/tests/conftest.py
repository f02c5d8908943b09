"""Shared test fixtures for the document analysis test suite."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Callable
from typing import Any
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.modules.analysis.agents.assembler import ResultAssembler
from app.modules.analysis.agents.cooldown import CooldownBreaker
from app.modules.analysis.agents.orchestrator import HybridOrchestrator
from app.modules.analysis.agents.providers import GeminiAnalysisAgent, OpenAIAnalysisAgent
from app.modules.analysis.service import AnalysisService, get_analysis_service
from factories import COOLDOWN_S, LARGE_FILE_BYTES, FakeClock, provider_reply


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_agent(clock: FakeClock) -> Callable[..., Any]:
    """Build a real provider agent whose SDK call is replaced by an AsyncMock.

    ``reply`` may be a string (returned) or an exception (raised).
    """

    def _make(
        agent_cls: type = OpenAIAnalysisAgent,
        reply: Any = None,
        *,
        api_key: str = "test-key",
        timeout_s: float = 5.0,
    ) -> Any:
        model = "gpt-test" if agent_cls is OpenAIAnalysisAgent else "gemini-test"
        agent = agent_cls(
            api_key=api_key,
            model=model,
            breaker=CooldownBreaker(agent_cls.provider, COOLDOWN_S, clock=clock),
            timeout_s=timeout_s,
        )
        if isinstance(reply, BaseException):
            agent.complete = AsyncMock(side_effect=reply)
        else:
            agent.complete = AsyncMock(
                return_value=reply if reply is not None else provider_reply()
            )
        return agent

    return _make


@pytest.fixture
def make_service(make_agent: Callable[..., Any]) -> Callable[..., AnalysisService]:
    """Build an AnalysisService around two scripted provider agents."""

    def _make(
        openai_reply: Any = None,
        gemini_reply: Any = None,
        *,
        openai_key: str = "test-key",
        gemini_key: str = "test-key",
    ) -> AnalysisService:
        primary = make_agent(OpenAIAnalysisAgent, openai_reply, api_key=openai_key)
        secondary = make_agent(GeminiAnalysisAgent, gemini_reply, api_key=gemini_key)
        return AnalysisService(
            orchestrator=HybridOrchestrator(primary, secondary),
            assembler=ResultAssembler(LARGE_FILE_BYTES),
        )

    return _make


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client that talks directly to the FastAPI ASGI app."""
    transport = ASGITransport(app=app)  # type: ignore[arg-type]
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_analysis_service, None)
