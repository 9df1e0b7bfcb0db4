from __future__ import annotations

from .candidate import Candidate
from .selection import SamplingStrategy, UniformSampling


class Corpus:
    """Append-only history of accepted candidates.

    Starts with a single all-zero candidate so sampling never fails. Entries
    are never removed, reordered or deduplicated.
    """

    def __init__(self, dimension: int, strategy: SamplingStrategy | None = None) -> None:
        seed = Candidate.zeros(dimension)
        self.dimension: int = dimension
        self._candidates: list[Candidate] = [seed]
        self._strategy: SamplingStrategy = strategy or UniformSampling()

    def __len__(self) -> int:
        return len(self._candidates)

    @property
    def candidates(self) -> tuple[Candidate, ...]:
        return tuple(self._candidates)

    def sample(self) -> Candidate:
        return self._strategy.select(self._candidates)

    def accept(self, candidate: Candidate) -> None:
        if len(candidate) != self.dimension:
            raise ValueError(
                f"candidate has {len(candidate)} values, corpus expects {self.dimension}"
            )
        self._candidates.append(candidate)
