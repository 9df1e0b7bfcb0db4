from __future__ import annotations

import random

import pytest

from fuzz_core.candidate import Candidate
from fuzz_core.corpus import Corpus
from fuzz_core.mutation import Mutator
from fuzz_core.selection import BestSampling


class ScriptedRandom(random.Random):
    """Random source that replays fixed draws."""

    def __init__(self, indices: list[int], magnitudes: list[float]) -> None:
        super().__init__(0)
        self._indices = list(indices)
        self._magnitudes = list(magnitudes)
        self.uniform_calls = 0

    def randrange(self, *args: object, **kwargs: object) -> int:  # type: ignore[override]
        return self._indices.pop(0)

    def uniform(self, a: float, b: float) -> float:
        self.uniform_calls += 1
        return self._magnitudes.pop(0)


def test_round_mode_keeps_values_integral() -> None:
    corpus = Corpus(dimension=6)
    mutator = Mutator(corpus, rng=random.Random(3))

    for _ in range(500):
        candidate = mutator.mutate()
        assert all(value.is_integer() for value in candidate.values)
        corpus.accept(candidate)


def test_without_round_mode_values_can_be_fractional() -> None:
    corpus = Corpus(dimension=2)
    mutator = Mutator(corpus, rng=random.Random(3), round_mode=False)

    candidates = [mutator.mutate() for _ in range(50)]
    assert any(not value.is_integer() for c in candidates for value in c.values)


def test_mutation_touches_at_most_three_variables() -> None:
    corpus = Corpus(dimension=10, strategy=BestSampling())
    mutator = Mutator(corpus, rng=random.Random(11), round_mode=False)

    for _ in range(200):
        candidate = mutator.mutate()
        changed = [value for value in candidate.values if value != 0.0]
        assert 1 <= len(changed) <= 3


def test_mutation_never_modifies_corpus_members() -> None:
    corpus = Corpus(dimension=3)
    mutator = Mutator(corpus, rng=random.Random(5))

    for _ in range(100):
        _ = mutator.mutate()

    assert corpus.candidates == (Candidate.zeros(3),)


def test_single_step_stays_inside_magnitude() -> None:
    corpus = Corpus(dimension=1, strategy=BestSampling())
    mutator = Mutator(corpus, rng=random.Random(9), round_mode=False, steps=1, magnitude=100.0)

    for _ in range(1000):
        value = mutator.mutate().values[0]
        assert -100.0 < value < 100.0
        assert value != 0.0


def test_zero_and_endpoint_draws_are_redrawn() -> None:
    corpus = Corpus(dimension=1, strategy=BestSampling())
    # index 0, then "add"
    rng = ScriptedRandom(indices=[0, 0], magnitudes=[0.0, -100.0, 2.75])
    mutator = Mutator(corpus, rng=rng, steps=1)

    candidate = mutator.mutate()

    assert rng.uniform_calls == 3
    assert candidate.values == (2.0,)


def test_round_mode_truncates_toward_zero() -> None:
    corpus = Corpus(dimension=1, strategy=BestSampling())
    # index 0, then "subtract" 3.9 from zero
    rng = ScriptedRandom(indices=[0, 1], magnitudes=[3.9])
    mutator = Mutator(corpus, rng=rng, steps=1)

    assert mutator.mutate().values == (-3.0,)


def test_steps_may_hit_the_same_variable() -> None:
    corpus = Corpus(dimension=2, strategy=BestSampling())
    rng = ScriptedRandom(indices=[1, 0, 1, 0, 1, 1], magnitudes=[10.0, 5.0, 2.0])
    mutator = Mutator(corpus, rng=rng)

    assert mutator.mutate().values == (0.0, 13.0)


def test_same_seed_same_mutations() -> None:
    first = Mutator(Corpus(dimension=4, strategy=BestSampling()), rng=random.Random(42))
    second = Mutator(Corpus(dimension=4, strategy=BestSampling()), rng=random.Random(42))

    assert [first.mutate() for _ in range(20)] == [second.mutate() for _ in range(20)]


def test_invalid_mutator_settings() -> None:
    corpus = Corpus(dimension=1)
    with pytest.raises(ValueError):
        _ = Mutator(corpus, steps=0)
    with pytest.raises(ValueError):
        _ = Mutator(corpus, magnitude=0.0)
