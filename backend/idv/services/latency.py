"""
Latency Simulator — Artificial network delay for the mock verification sources.
"""
import random
import time
from typing import Protocol


class LatencySimulator(Protocol):
    def pause(self, min_ms: int, max_ms: int) -> None:
        ...


class RandomLatency:
    """Sleeps for a random duration inside [min_ms, max_ms)."""

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    def pause(self, min_ms: int, max_ms: int) -> None:
        if max_ms <= 0:
            return
        delay_ms = self._rng.uniform(min_ms, max(min_ms, max_ms))
        time.sleep(delay_ms / 1000)


class NoLatency:
    """Zero-delay simulator for tests and latency-free deployments."""

    def pause(self, min_ms: int, max_ms: int) -> None:
        return None
