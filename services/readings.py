# services/readings.py
from __future__ import annotations
import random
from typing import Dict, Iterable, Optional, Protocol

from services import config


class ReadingSource(Protocol):
    """Anything that can hand out the current cumulative energy counter of a device."""

    def read(self, device_id: str) -> float: ...


class SimulatedReadingSource:
    """
    In-memory counters standing in for real meters.
    Each read advances the device counter by a random step in [0.01, max_step)
    and returns it rounded to two decimals, so readings strictly increase.
    """

    MIN_STEP = 0.01

    def __init__(
        self,
        device_ids: Iterable[str],
        start: float = config.SIMULATED_START,
        max_step: float = config.SIMULATED_MAX_STEP,
        rng: Optional[random.Random] = None,
    ):
        self._counters: Dict[str, float] = {d: float(start) for d in device_ids}
        self._max_step = max(float(max_step), self.MIN_STEP)
        self._rng = rng or random.Random()

    def read(self, device_id: str) -> float:
        current = self._counters.setdefault(device_id, float(config.SIMULATED_START))
        step = self.MIN_STEP + self._rng.random() * (self._max_step - self.MIN_STEP)
        value = round(current + step, 2)
        if value <= current:
            value = round(current + self.MIN_STEP, 2)
        self._counters[device_id] = value
        return value
