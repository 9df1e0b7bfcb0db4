from __future__ import annotations

import random
from abc import ABC, abstractmethod
from collections.abc import Sequence

from .candidate import Candidate


class SamplingStrategy(ABC):
    @abstractmethod
    def select(self, candidates: Sequence[Candidate]) -> Candidate:
        raise NotImplementedError


class UniformSampling(SamplingStrategy):
    """Pick any accepted candidate with equal probability, however old."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng: random.Random = rng or random.Random()

    def select(self, candidates: Sequence[Candidate]) -> Candidate:
        if not candidates:
            raise ValueError("candidates must be non-empty")
        return candidates[self._rng.randrange(len(candidates))]


class BestSampling(SamplingStrategy):
    """Hill-climbing: always continue from the most recent acceptance.

    Acceptance requires a strict improvement, so the newest entry is also
    the one with the smallest difference.
    """

    def select(self, candidates: Sequence[Candidate]) -> Candidate:
        if not candidates:
            raise ValueError("candidates must be non-empty")
        return candidates[-1]


def create_sampling_strategy(name: str, rng: random.Random | None = None) -> SamplingStrategy:
    if name == "uniform":
        return UniformSampling(rng)
    if name == "best":
        return BestSampling()
    raise ValueError(f"Unknown sampling strategy: {name}")
