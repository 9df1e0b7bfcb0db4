from __future__ import annotations

import string
from collections.abc import Iterable
from dataclasses import dataclass

from .schemas import MAX_VARIABLES


def variable_names(count: int) -> tuple[str, ...]:
    """Return the positional variable names ``a``, ``b``, ... for ``count`` variables."""
    if count < 1 or count > MAX_VARIABLES:
        raise ValueError(f"number of variables must be between 1 and {MAX_VARIABLES}")
    return tuple(string.ascii_lowercase[:count])


def format_number(value: float) -> str:
    """Shortest text that parses back to exactly ``value``."""
    if value != value or value in (float("inf"), float("-inf")):
        return repr(value)
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


@dataclass(frozen=True)
class Candidate:
    """One assignment of a value to every variable.

    Candidates are values: operations that change a component return a new
    instance and the stored tuple is never modified.
    """

    values: tuple[float, ...]

    def __post_init__(self) -> None:
        _ = variable_names(len(self.values))

    @classmethod
    def zeros(cls, dimension: int) -> Candidate:
        return cls(tuple(0.0 for _ in variable_names(dimension)))

    @classmethod
    def from_values(cls, values: Iterable[float]) -> Candidate:
        return cls(tuple(float(value) for value in values))

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> float:
        return self.values[index]

    @property
    def names(self) -> tuple[str, ...]:
        return variable_names(len(self.values))

    def with_value(self, index: int, value: float) -> Candidate:
        updated = list(self.values)
        updated[index] = float(value)
        return Candidate(tuple(updated))

    def bindings(self) -> dict[str, float]:
        return dict(zip(self.names, self.values))

    def format(self, separator: str = ",") -> str:
        return separator.join(
            f"{name}={format_number(value)}" for name, value in zip(self.names, self.values)
        )
