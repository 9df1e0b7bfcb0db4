from __future__ import annotations

import random
import string

import pytest

from fuzz_core.candidate import Candidate, format_number, variable_names
from fuzz_core.corpus import Corpus
from fuzz_core.selection import BestSampling, UniformSampling, create_sampling_strategy


@pytest.mark.parametrize("count", range(1, 27))
def test_variable_names_follow_alphabet(count: int) -> None:
    names = variable_names(count)
    assert len(names) == count
    assert "".join(names) == string.ascii_lowercase[:count]

    candidate = Candidate.zeros(count)
    assert len(candidate) == count
    assert candidate.names == names


@pytest.mark.parametrize("count", [0, -1, 27])
def test_variable_names_rejects_out_of_range(count: int) -> None:
    with pytest.raises(ValueError):
        _ = variable_names(count)


def test_candidate_rejects_empty_values() -> None:
    with pytest.raises(ValueError):
        _ = Candidate(())


def test_with_value_returns_new_candidate() -> None:
    original = Candidate.zeros(3)
    updated = original.with_value(1, 7)

    assert original.values == (0.0, 0.0, 0.0)
    assert updated.values == (0.0, 7.0, 0.0)
    assert isinstance(updated[1], float)


def test_bindings_and_format() -> None:
    candidate = Candidate.from_values([1, -2.5, 0])

    assert candidate.bindings() == {"a": 1.0, "b": -2.5, "c": 0.0}
    assert candidate.format() == "a=1,b=-2.5,c=0"
    assert candidate.format("\n") == "a=1\nb=-2.5\nc=0"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1.0, "1"),
        (-42.0, "-42"),
        (-0.0, "0"),
        (0.5, "0.5"),
        (0.1, "0.1"),
        (1e20, "1e+20"),
        (float("inf"), "inf"),
        (float("nan"), "nan"),
    ],
)
def test_format_number(value: float, expected: str) -> None:
    assert format_number(value) == expected


def test_format_number_round_trips() -> None:
    value = 2.0 / 3.0
    assert float(format_number(value)) == value


def test_corpus_starts_with_zero_seed() -> None:
    corpus = Corpus(dimension=4)

    assert len(corpus) == 1
    assert corpus.sample() == Candidate.zeros(4)
    assert corpus.candidates == (Candidate.zeros(4),)


def test_corpus_accept_appends_in_order() -> None:
    corpus = Corpus(dimension=2)
    first = Candidate.from_values([1, 2])
    second = Candidate.from_values([1, 2])

    corpus.accept(first)
    corpus.accept(second)

    assert len(corpus) == 3
    assert corpus.candidates == (Candidate.zeros(2), first, second)
    assert corpus.candidates[-1] is second


def test_corpus_rejects_wrong_dimension() -> None:
    corpus = Corpus(dimension=2)
    with pytest.raises(ValueError):
        corpus.accept(Candidate.zeros(3))
    assert len(corpus) == 1


def test_uniform_sampling_reaches_every_member() -> None:
    corpus = Corpus(dimension=1, strategy=UniformSampling(random.Random(0)))
    for value in range(1, 5):
        corpus.accept(Candidate.from_values([value]))

    seen = {corpus.sample().values[0] for _ in range(500)}
    assert seen == {0.0, 1.0, 2.0, 3.0, 4.0}


def test_best_sampling_returns_latest() -> None:
    corpus = Corpus(dimension=1, strategy=BestSampling())
    corpus.accept(Candidate.from_values([5]))
    corpus.accept(Candidate.from_values([3]))

    assert all(corpus.sample().values == (3.0,) for _ in range(20))


def test_sampling_strategies_reject_empty_input() -> None:
    with pytest.raises(ValueError):
        _ = UniformSampling().select([])
    with pytest.raises(ValueError):
        _ = BestSampling().select([])


def test_create_sampling_strategy() -> None:
    assert isinstance(create_sampling_strategy("uniform"), UniformSampling)
    assert isinstance(create_sampling_strategy("best"), BestSampling)
    with pytest.raises(ValueError):
        _ = create_sampling_strategy("tournament")
