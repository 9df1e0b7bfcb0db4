from __future__ import annotations

import math
import random

from .candidate import Candidate
from .corpus import Corpus


class Mutator:
    """Derive new candidates from corpus members by random perturbation.

    Each call samples a base candidate and applies ``steps`` independent
    add/subtract perturbations with magnitudes drawn from the open interval
    ``(-magnitude, magnitude)``. In round mode every perturbed value is
    truncated toward zero right after the step.
    """

    def __init__(
        self,
        corpus: Corpus,
        rng: random.Random | None = None,
        round_mode: bool = True,
        steps: int = 3,
        magnitude: float = 100.0,
    ) -> None:
        if steps <= 0:
            raise ValueError("steps must be positive")
        if magnitude <= 0:
            raise ValueError("magnitude must be positive")
        self.corpus: Corpus = corpus
        self.round_mode: bool = round_mode
        self.steps: int = steps
        self.magnitude: float = magnitude
        self._rng: random.Random = rng or random.Random()

    def mutate(self) -> Candidate:
        candidate = self.corpus.sample()

        for _ in range(self.steps):
            index = self._rng.randrange(len(candidate))
            delta = self._random_magnitude()
            if self._rng.randrange(2) == 0:
                value = candidate[index] + delta
            else:
                value = candidate[index] - delta

            if self.round_mode:
                fraction, _ = math.modf(value)
                value -= fraction

            candidate = candidate.with_value(index, value)

        return candidate

    def _random_magnitude(self) -> float:
        low, high = -self.magnitude, self.magnitude
        value = 0.0
        while value == 0.0 or not low < value < high:
            value = self._rng.uniform(low, high)
        return value
