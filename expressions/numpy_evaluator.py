"""NumPy float64 expression evaluator."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

import numpy as np

from .base import CompiledExpression, ExpressionEvaluator
from .parser import Node, normalize, parse_expression

logger = logging.getLogger(__name__)


def _numeric(node: Node) -> Callable[..., float]:
    """Wrap an evaluation tree so it takes and returns plain floats."""

    def evaluate(*values: float) -> float:
        arguments = tuple(np.float64(value) for value in values)
        with np.errstate(all="ignore"):
            return float(node(arguments))

    return evaluate


class NumpyEvaluator(ExpressionEvaluator):
    """Compile expressions once and evaluate them in IEEE double precision.

    Every operation is a single float64 operation in the order written, so
    rounding, overflow to inf and nan from invalid operations match what a
    C program computing the same formula would see. Compiled expressions
    are cached by source text.
    """

    def __init__(self, variables: Sequence[str]) -> None:
        super().__init__(variables)
        self._cache: dict[str, CompiledExpression] = {}

    def compile(self, expression: str) -> CompiledExpression:
        cached = self._cache.get(expression)
        if cached is not None:
            return cached

        compiled = CompiledExpression(
            source=expression,
            variables=self.variables,
            function=_numeric(parse_expression(expression, self.variables)),
        )
        self._cache[expression] = compiled
        logger.debug("Compiled %r as %r", expression, normalize(expression))
        return compiled
