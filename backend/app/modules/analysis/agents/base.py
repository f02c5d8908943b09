"""ProviderAgent: shared call logic for the external analysis providers.

Each concrete agent only knows how to send a prompt to its SDK and return the
reply text (``complete``). Everything else lives here:

  - configuration check (no API key -> no network call)
  - cooldown short-circuit via the provider's CooldownBreaker
  - per-call deadline
  - JSON extraction, validation and shape coercion of the reply
  - failure classification (quota -> cooldown, anything else -> transient)

``analyze`` never raises; every path ends in a ProviderOutcome.
"""

from __future__ import annotations

import asyncio
import time
from abc import ABC, abstractmethod
from pathlib import Path
from string import Template
from typing import Any

import structlog
from pydantic import ValidationError

from app.modules.analysis.agent_schemas import OutcomeStatus, ProviderAnalysis, ProviderOutcome
from app.modules.analysis.agents.cooldown import CooldownBreaker
from app.modules.analysis.agents.sanitizer import (
    MalformedResponseError,
    parse_json_reply,
    sanitize_analysis_json,
)
from app.modules.analysis.agents.validator import validate_suggestions
from app.modules.analysis.categories import DOCUMENT_CATEGORIES
from app.modules.analysis.schemas import AnalysisRequest

logger = structlog.get_logger()

# Directory where prompt templates live
_PROMPTS_DIR = Path(__file__).parent / "prompts"

# Substrings (lower-cased) that mark an error code/status/message as quota related
_QUOTA_MARKERS = ("quota", "resource_exhausted", "rate_limit_exceeded")


# ---------------------------------------------------------------------------
# Failure classification
# ---------------------------------------------------------------------------


def _mentions_quota(text: str) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in _QUOTA_MARKERS)


def _payload_mentions_quota(payload: Any, depth: int = 0) -> bool:
    """Walk an SDK error payload (dicts/lists from the provider's JSON body)."""
    if depth > 6:
        return False
    if isinstance(payload, dict):
        for key, value in payload.items():
            if key in ("quota_limit", "quotaLimit") and value:
                return True
            if key == "code" and value == 429:
                return True
            if isinstance(value, str):
                if _mentions_quota(value):
                    return True
            elif _payload_mentions_quota(value, depth + 1):
                return True
        return False
    if isinstance(payload, list):
        return any(_payload_mentions_quota(item, depth + 1) for item in payload)
    return False


def is_quota_error(error: BaseException) -> bool:
    """Return True if *error* is a provider quota or rate-limit failure.

    Works on the exception shapes of both SDKs without importing them:
      - HTTP 429 on ``status_code`` / ``status`` / ``code`` (or on ``.response``)
      - codes/statuses such as ``insufficient_quota`` or ``RESOURCE_EXHAUSTED``
      - an error body/details payload mentioning quota, ``RATE_LIMIT_EXCEEDED``
        or carrying ``quota_limit`` metadata
      - an error message containing "quota"
    """
    for candidate in (error, getattr(error, "response", None)):
        if candidate is None:
            continue
        for attr in ("status_code", "status", "code"):
            value = getattr(candidate, attr, None)
            if isinstance(value, int) and not isinstance(value, bool) and value == 429:
                return True
            if isinstance(value, str) and _mentions_quota(value):
                return True

    for attr in ("body", "details", "error_details", "errorDetails", "error"):
        if _payload_mentions_quota(getattr(error, attr, None)):
            return True

    return "quota" in str(error).lower()


# ---------------------------------------------------------------------------
# Base agent
# ---------------------------------------------------------------------------


class ProviderAgent(ABC):
    """Base class for the external analysis providers."""

    agent_name: str = "provider"
    provider: str = ""          # stable id, e.g. "openai"
    display_name: str = ""      # short human name, e.g. "GPT"
    prompt_file: str = ""       # template under prompts/
    quota_warning: str = ""     # user-facing warning when the quota was hit

    def __init__(
        self,
        api_key: str,
        model: str,
        breaker: CooldownBreaker,
        timeout_s: float,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.breaker = breaker
        self.timeout_s = timeout_s
        self._client: Any = None
        self._prompt_template = Template(self.load_prompt(self.prompt_file))

        logger.info(
            f"{self.agent_name} initialized",
            provider=self.provider,
            model=self.model,
            configured=self.configured,
        )

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    @property
    def method_label(self) -> str:
        return f"{self.display_name}-Enhanced"

    # ------------------------------------------------------------------
    # Prompt
    # ------------------------------------------------------------------

    @staticmethod
    def load_prompt(filename: str) -> str:
        """Load a prompt template from the prompts/ directory."""
        path = _PROMPTS_DIR / filename
        if not path.exists():
            raise FileNotFoundError(f"Prompt file not found: {path}")
        return path.read_text(encoding="utf-8").strip()

    def build_prompt(self, request: AnalysisRequest) -> str:
        return self._prompt_template.safe_substitute(
            filename=request.filename,
            title=request.display_title,
            category=request.declared_category,
            file_type=request.file_type_label,
            categories=", ".join(DOCUMENT_CATEGORIES),
        )

    # ------------------------------------------------------------------
    # Provider call
    # ------------------------------------------------------------------

    @abstractmethod
    async def complete(self, prompt: str) -> str:
        """Send *prompt* to the provider and return the raw reply text."""
        ...

    async def analyze(self, request: AnalysisRequest) -> ProviderOutcome:
        """Run one analysis call. Never raises."""
        if not self.configured:
            logger.info(f"{self.agent_name} not configured, skipping", provider=self.provider)
            return ProviderOutcome.failure(self.provider, OutcomeStatus.NOT_CONFIGURED)

        if self.breaker.is_cooling_down():
            self.breaker.flag_quota()
            logger.warning(
                f"Skipping {self.display_name} analysis due to cooldown",
                provider=self.provider,
                remaining_minutes=self.breaker.remaining_minutes(),
            )
            return ProviderOutcome.failure(
                self.provider,
                OutcomeStatus.COOLING_DOWN,
                error="provider cooling down after quota error",
            )

        start = time.monotonic()
        try:
            raw_text = await asyncio.wait_for(
                self.complete(self.build_prompt(request)),
                timeout=self.timeout_s,
            )
            data = parse_json_reply(raw_text)
            analysis = ProviderAnalysis.model_validate(
                sanitize_analysis_json(validate_suggestions(data))
            )
        except asyncio.TimeoutError:
            logger.error(
                f"{self.display_name} analysis timed out",
                provider=self.provider,
                file=request.filename,
                timeout_s=self.timeout_s,
            )
            return ProviderOutcome.failure(
                self.provider,
                OutcomeStatus.TRANSIENT_ERROR,
                error=f"timed out after {self.timeout_s}s",
                duration_ms=_elapsed_ms(start),
            )
        except (MalformedResponseError, ValidationError) as e:
            logger.error(
                f"{self.display_name} returned an unusable response",
                provider=self.provider,
                file=request.filename,
                error=str(e),
            )
            return ProviderOutcome.failure(
                self.provider,
                OutcomeStatus.MALFORMED_RESPONSE,
                error=str(e),
                duration_ms=_elapsed_ms(start),
            )
        except Exception as e:
            if is_quota_error(e):
                self.breaker.trip()
                logger.error(
                    f"{self.display_name} quota exceeded, applying cooldown",
                    provider=self.provider,
                    file=request.filename,
                    error=str(e),
                )
                status = OutcomeStatus.QUOTA_EXCEEDED
            else:
                logger.error(
                    f"{self.display_name} analysis error",
                    provider=self.provider,
                    file=request.filename,
                    error=str(e),
                    exc_info=True,
                )
                status = OutcomeStatus.TRANSIENT_ERROR
            return ProviderOutcome.failure(
                self.provider, status, error=str(e), duration_ms=_elapsed_ms(start)
            )

        self.breaker.record_success()
        duration_ms = _elapsed_ms(start)
        logger.info(
            f"{self.display_name} analysis successful",
            provider=self.provider,
            file=request.filename,
            classification=analysis.suggested_classification,
            category=analysis.suggested_category,
            duration_ms=duration_ms,
        )
        return ProviderOutcome.success(self.provider, analysis, duration_ms=duration_ms)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
