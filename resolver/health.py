"""Provider health flag with an optional re-probe policy."""

from __future__ import annotations

import enum
import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class HealthState(str, enum.Enum):
    UNCONFIGURED = "unconfigured"
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class ProviderHealth:
    """Tracks whether the remote provider may be called.

    ``UNCONFIGURED`` is terminal. ``HEALTHY`` turns ``UNHEALTHY`` on an
    authorization failure. Without a re-probe interval ``UNHEALTHY`` is
    permanent; with one, a single call is let through once the interval has
    elapsed since the last failure, and its outcome decides the next state.

    Not thread-safe on its own; the engine serializes access.
    """

    def __init__(
        self,
        configured: bool,
        reprobe_after_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._state = HealthState.HEALTHY if configured else HealthState.UNCONFIGURED
        self._reprobe_after = reprobe_after_seconds
        self._clock = clock
        self._failed_at: Optional[float] = None

    @property
    def state(self) -> HealthState:
        return self._state

    @property
    def is_configured(self) -> bool:
        return self._state is not HealthState.UNCONFIGURED

    @property
    def is_healthy(self) -> bool:
        return self._state is HealthState.HEALTHY

    def allows_call(self) -> bool:
        if self._state is HealthState.HEALTHY:
            return True
        if self._state is HealthState.UNCONFIGURED or self._reprobe_after is None:
            return False
        assert self._failed_at is not None
        return self._clock() - self._failed_at >= self._reprobe_after

    def mark_success(self) -> None:
        if self._state is HealthState.UNHEALTHY:
            logger.info("Translation provider recovered")
        if self._state is not HealthState.UNCONFIGURED:
            self._state = HealthState.HEALTHY
            self._failed_at = None

    def mark_unauthorized(self) -> None:
        self._trip()

    def mark_probe_failed(self) -> None:
        """Restart the wait window after a failed re-probe or verification."""
        self._trip()

    def _trip(self) -> None:
        if self._state is HealthState.UNCONFIGURED:
            return
        if self._state is HealthState.HEALTHY:
            if self._reprobe_after is None:
                logger.error("Translation provider disabled for the rest of the process")
            else:
                logger.error(
                    f"Translation provider disabled, next probe in {self._reprobe_after:g}s"
                )
        self._state = HealthState.UNHEALTHY
        self._failed_at = self._clock()


__all__ = ["HealthState", "ProviderHealth"]
