"""Expression evaluator interface and shared types."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Protocol, Union


class Bindings(Protocol):
    """Anything that can name its values, e.g. a search candidate."""

    def bindings(self) -> dict[str, float]:
        ...


BindingsLike = Union[Bindings, Mapping[str, float]]


class ExpressionError(Exception):
    """An expression could not be compiled.

    This is a configuration error: the expression text is wrong and no amount
    of searching will fix it.
    """

    def __init__(self, expression: str, message: str) -> None:
        super().__init__(message)
        self.expression: str = expression
        self.message: str = message

    def diagnostic(self) -> str:
        return f"Error: {self.message}\nExpression: {self.expression}"


@dataclass(frozen=True)
class CompiledExpression:
    """A parsed expression bound to an ordered list of variable names."""

    source: str
    variables: Sequence[str]
    function: Callable[..., float]

    def __call__(self, values: Sequence[float]) -> float:
        return self.function(*values)


class ExpressionEvaluator(ABC):
    """Compiles expression strings and evaluates them against bindings.

    ``compile`` must raise :class:`ExpressionError` for malformed input.
    Evaluation itself never raises for numeric reasons; it follows IEEE
    semantics and yields inf or nan instead.
    """

    def __init__(self, variables: Sequence[str]) -> None:
        self.variables: tuple[str, ...] = tuple(variables)

    @abstractmethod
    def compile(self, expression: str) -> CompiledExpression:
        """Parse and validate ``expression``."""

    def evaluate(self, expression: str, bindings: BindingsLike) -> float:
        compiled = self.compile(expression)
        return compiled(self._ordered_values(bindings))

    def _ordered_values(self, bindings: BindingsLike) -> list[float]:
        mapping = bindings if isinstance(bindings, Mapping) else bindings.bindings()
        missing = [name for name in self.variables if name not in mapping]
        if missing:
            raise KeyError(f"Missing bindings for: {', '.join(missing)}")
        return [float(mapping[name]) for name in self.variables]
