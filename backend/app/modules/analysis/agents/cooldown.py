"""Per-provider quota cooldown.

A provider that reports a quota/rate-limit error is suppressed for a fixed
window. There is no timer: every check compares the clock against
``cooldown_until``, so the breaker is AVAILABLE again as soon as the window
has passed.

Concurrent trips simply overwrite ``cooldown_until`` (last write wins), so no
lock is needed.
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable
from dataclasses import dataclass

import structlog

logger = structlog.get_logger()

Clock = Callable[[], float]


@dataclass
class ProviderState:
    """Mutable cooldown state of one provider."""

    cooldown_until: float = 0.0
    quota_exceeded: bool = False


class CooldownBreaker:
    """Timed suppression of one provider after a quota failure."""

    def __init__(
        self,
        provider: str,
        window_seconds: float,
        clock: Clock = time.time,
    ) -> None:
        self.provider = provider
        self.window_seconds = window_seconds
        self._clock = clock
        self.state = ProviderState()

    def is_cooling_down(self) -> bool:
        return self._clock() < self.state.cooldown_until

    def remaining_seconds(self) -> float:
        return max(0.0, self.state.cooldown_until - self._clock())

    def remaining_minutes(self) -> int:
        """Remaining window rounded up, never below 1 (for log messages)."""
        return max(1, math.ceil(self.remaining_seconds() / 60))

    def flag_quota(self) -> None:
        """Record that a request was turned away by the cooldown."""
        self.state.quota_exceeded = True

    def trip(self) -> None:
        """Start (or restart) the cooldown window from now."""
        self.state.quota_exceeded = True
        self.state.cooldown_until = self._clock() + self.window_seconds
        logger.warning(
            "Provider cooldown started",
            provider=self.provider,
            cooldown_until=self.state.cooldown_until,
            window_s=self.window_seconds,
        )

    def record_success(self) -> None:
        self.state.quota_exceeded = False

    def snapshot(self) -> dict[str, object]:
        return {
            "cooling_down": self.is_cooling_down(),
            "cooldown_remaining_s": int(math.ceil(self.remaining_seconds())),
            "quota_exceeded": self.state.quota_exceeded,
        }
