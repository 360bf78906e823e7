"""
Jittered request pacing.
"""

from __future__ import annotations

import asyncio
import random
from collections.abc import Awaitable, Callable

Sleeper = Callable[[float], Awaitable[None]]


class JitterRateLimiter:
    """
    Waits a uniformly random delay from a fixed interval before returning.

    One instance paces one sequential request chain. Seed it (or pass an
    explicit `random.Random`) for deterministic delays.
    """

    def __init__(
        self,
        *,
        min_seconds: float,
        max_seconds: float,
        seed: int | None = None,
        rng: random.Random | None = None,
        sleep: Sleeper | None = None,
    ) -> None:
        if min_seconds < 0 or max_seconds < 0:
            raise ValueError("Delay bounds must be non-negative.")
        if max_seconds < min_seconds:
            raise ValueError("max_seconds must be greater than or equal to min_seconds.")
        self.min_seconds = min_seconds
        self.max_seconds = max_seconds
        self._rng = rng or random.Random(seed)
        self._sleep = sleep or asyncio.sleep

    @classmethod
    def disabled(cls) -> "JitterRateLimiter":
        return cls(min_seconds=0.0, max_seconds=0.0)

    def next_delay(self) -> float:
        """
        Draw the next delay in seconds without sleeping.
        """

        if self.max_seconds == self.min_seconds:
            return self.min_seconds
        return self._rng.uniform(self.min_seconds, self.max_seconds)

    async def wait(self) -> float:
        """
        Sleep for the next delay and return it.
        """

        delay = self.next_delay()
        if delay > 0:
            await self._sleep(delay)
        return delay
