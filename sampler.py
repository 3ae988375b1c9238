"""
sampler.py — Eye-state sampling for a monitored driver session.
Defines the detector interface the session controller depends on and the
stochastic detector that stands in for a real camera pipeline.
Contains NO timer logic — one call produces one observation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import config
from utils import require


class EyeState(Enum):
    OPEN = "open"
    CLOSED = "closed"
    DROWSY = "drowsy"


class ObservationEvent(Enum):
    """Discrete events that drive alerting, separate from the displayed state."""
    DROWSY = "drowsy"
    NORMAL = "normal"


@dataclass(frozen=True)
class Observation:
    """Result of a single sampling tick."""
    eye_state: EyeState
    event: Optional[ObservationEvent] = None


class EyeStateDetector(ABC):
    """Anything that can classify the driver's eyes once per tick."""

    @abstractmethod
    def sample(self) -> Observation:
        """Produce one classified observation."""

    def tick(self) -> EyeState:
        return self.sample().eye_state


class SimulatedEyeDetector(EyeStateDetector):
    """Random eye-state process: 10% drowsy, 20% closed, 70% open.

    Args:
        rng: Uniform random source with a ``random()`` method
             (see ``utils.make_rng``). Required.
    """

    def __init__(self, rng):
        self._rng = require(rng, "rng")

    def sample(self) -> Observation:
        r = float(self._rng.random())
        state = self.classify(r)
        if state is EyeState.DROWSY:
            return Observation(state, ObservationEvent.DROWSY)
        if state is EyeState.OPEN:
            return Observation(state, ObservationEvent.NORMAL)
        return Observation(state)

    @staticmethod
    def classify(r: float) -> EyeState:
        """Map a uniform variate to an eye state using cumulative thresholds."""
        if r < config.EYE_DROWSY_THRESHOLD:
            return EyeState.DROWSY
        if r < config.EYE_CLOSED_THRESHOLD:
            return EyeState.CLOSED
        return EyeState.OPEN
