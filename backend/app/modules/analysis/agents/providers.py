"""Concrete provider agents: OpenAI chat completions and Google Gemini.

Both use the async SDK clients, created lazily on first call so an
unconfigured provider never imports or instantiates its SDK.
"""

from __future__ import annotations

from typing import Any

import structlog

from app.core.config import Settings
from app.modules.analysis.agents.base import ProviderAgent
from app.modules.analysis.agents.cooldown import Clock, CooldownBreaker

logger = structlog.get_logger()


class OpenAIAnalysisAgent(ProviderAgent):
    """Document analysis via OpenAI chat completions."""

    agent_name = "OpenAIAnalysis"
    provider = "openai"
    display_name = "GPT"
    prompt_file = "openai_analysis.txt"
    quota_warning = (
        "OpenAI quota exceeded; GPT analysis temporarily disabled. "
        "Falling back to rule-based insights."
    )

    temperature = 0.3
    max_tokens = 800

    def _get_client(self) -> Any:
        if self._client is None:
            from openai import AsyncOpenAI

            # 429s must reach the breaker on the first attempt, so no SDK retries.
            self._client = AsyncOpenAI(
                api_key=self.api_key, timeout=self.timeout_s, max_retries=0
            )
        return self._client

    async def complete(self, prompt: str) -> str:
        client = self._get_client()
        response = await client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

        usage = response.usage
        logger.info(
            "OpenAI analysis call",
            model=self.model,
            input_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            output_tokens=getattr(usage, "completion_tokens", 0) or 0,
        )

        if not response.choices:
            return ""
        return (response.choices[0].message.content or "").strip()


class GeminiAnalysisAgent(ProviderAgent):
    """Document analysis via Google Gemini (google-genai SDK)."""

    agent_name = "GeminiAnalysis"
    provider = "google"
    display_name = "Gemini"
    prompt_file = "gemini_analysis.txt"
    quota_warning = "Google Gemini quota exceeded; hybrid analysis partially unavailable."

    temperature = 0.3

    def _get_client(self) -> Any:
        if self._client is None:
            from google import genai
            from google.genai import types as genai_types

            self._client = genai.Client(
                api_key=self.api_key,
                http_options=genai_types.HttpOptions(timeout=int(self.timeout_s * 1000)),
            )
        return self._client

    async def complete(self, prompt: str) -> str:
        from google.genai import types

        client = self._get_client()
        response = await client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(temperature=self.temperature),
        )

        usage = response.usage_metadata
        logger.info(
            "Gemini analysis call",
            model=self.model,
            input_tokens=getattr(usage, "prompt_token_count", 0) or 0,
            output_tokens=getattr(usage, "candidates_token_count", 0) or 0,
        )

        return (response.text or "").strip()


def build_provider_agents(
    settings: Settings,
    clock: Clock | None = None,
) -> tuple[OpenAIAnalysisAgent, GeminiAnalysisAgent]:
    """Create both provider agents, each with its own cooldown breaker.

    The order of the returned tuple is the merge order (OpenAI first).
    """
    breaker_kwargs: dict[str, Any] = {"window_seconds": settings.analysis_cooldown_seconds}
    if clock is not None:
        breaker_kwargs["clock"] = clock

    openai_agent = OpenAIAnalysisAgent(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        breaker=CooldownBreaker(OpenAIAnalysisAgent.provider, **breaker_kwargs),
        timeout_s=settings.analysis_provider_timeout_s,
    )
    gemini_agent = GeminiAnalysisAgent(
        api_key=settings.google_ai_api_key,
        model=settings.gemini_model,
        breaker=CooldownBreaker(GeminiAnalysisAgent.provider, **breaker_kwargs),
        timeout_s=settings.analysis_provider_timeout_s,
    )
    return openai_agent, gemini_agent
