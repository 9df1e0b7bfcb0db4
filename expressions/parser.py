"""
Translate expression text into a float64 evaluation tree.

The accepted language is arithmetic in the style of calculator/exprtk
expressions: ``^`` is power, a lone ``=`` and ``<>`` are comparisons, ``&``
and ``|`` are the boolean ``and``/``or``. Comparisons and boolean operators
produce 1 or 0 so they can be mixed freely with arithmetic. The text is
normalized into Python syntax, parsed with :mod:`ast`, and every node is
translated explicitly; anything outside the grammar is rejected.

Each node becomes one float64 operation, performed in the order written.
Nothing is simplified or reassociated, so ``(a + 1e20) - 1e20`` rounds
exactly as it would in C.
"""

from __future__ import annotations

import ast
import math
import operator
import re
from collections.abc import Callable, Sequence

import numpy as np

from . import policy
from .base import ExpressionError

Node = Callable[[Sequence[np.float64]], np.float64]

_LONE_EQUALS = re.compile(r"(?<![<>!=:])=(?!=)")
_AND = re.compile(r"&&?")
_OR = re.compile(r"\|\|?")

_BINARY_OPERATORS: dict[type[ast.operator], Callable[[np.float64, np.float64], np.float64]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.Pow: np.power,
    ast.Mod: np.fmod,
}

_COMPARISONS: dict[type[ast.cmpop], Callable[[np.float64, np.float64], bool]] = {
    ast.Lt: operator.lt,
    ast.LtE: operator.le,
    ast.Gt: operator.gt,
    ast.GtE: operator.ge,
    ast.Eq: operator.eq,
    ast.NotEq: operator.ne,
}

_ONE = np.float64(1.0)
_ZERO = np.float64(0.0)


def normalize(source: str) -> str:
    """Rewrite exprtk-style operators into their Python spelling."""
    text = source.strip().replace("<>", "!=").replace("^", "**")
    text = _LONE_EQUALS.sub("==", text)
    text = _AND.sub(" and ", text)
    return _OR.sub(" or ", text)


def _indicator(flag: bool) -> np.float64:
    return _ONE if flag else _ZERO


def _constant(value: float) -> Node:
    number = np.float64(value)
    return lambda values: number


def _literal_value(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf


class _Translator:
    def __init__(self, source: str, variables: Sequence[str]) -> None:
        self._source = source
        self._indices = {name: index for index, name in enumerate(variables)}

    def translate(self, node: ast.AST) -> Node:
        handler = getattr(self, f"_translate_{type(node).__name__}", None)
        if handler is None:
            self._fail(f"Unsupported syntax: {type(node).__name__}")
        return handler(node)

    def _fail(self, message: str) -> None:
        raise ExpressionError(self._source, message)

    def _translate_Expression(self, node: ast.Expression) -> Node:
        return self.translate(node.body)

    def _translate_Constant(self, node: ast.Constant) -> Node:
        value = node.value
        if isinstance(value, bool):
            return _constant(float(value))
        if isinstance(value, int):
            return _constant(_literal_value(value))
        if isinstance(value, float):
            return _constant(value)
        self._fail(f"Unsupported literal: {value!r}")

    def _translate_Name(self, node: ast.Name) -> Node:
        name = node.id
        if name in self._indices:
            index = self._indices[name]
            return lambda values: values[index]
        if name in policy.CONSTANTS:
            return _constant(policy.CONSTANTS[name])
        if name in policy.FUNCTIONS:
            self._fail(f"Function '{name}' requires arguments")
        self._fail(f"Undefined symbol: '{name}'")

    def _translate_BinOp(self, node: ast.BinOp) -> Node:
        apply = _BINARY_OPERATORS.get(type(node.op))
        if apply is None:
            self._fail(f"Unsupported operator: {type(node.op).__name__}")
        left = self.translate(node.left)
        right = self.translate(node.right)
        return lambda values: apply(left(values), right(values))

    def _translate_UnaryOp(self, node: ast.UnaryOp) -> Node:
        operand = self.translate(node.operand)
        if isinstance(node.op, ast.USub):
            return lambda values: -operand(values)
        if isinstance(node.op, ast.UAdd):
            return operand
        if isinstance(node.op, ast.Not):
            return lambda values: _indicator(operand(values) == 0)
        self._fail(f"Unsupported operator: {type(node.op).__name__}")

    def _translate_Compare(self, node: ast.Compare) -> Node:
        # a < b < c means a < b and b < c
        operands = [self.translate(node.left)] + [self.translate(item) for item in node.comparators]
        checks = []
        for op in node.ops:
            comparison = _COMPARISONS.get(type(op))
            if comparison is None:
                self._fail(f"Unsupported comparison: {type(op).__name__}")
            checks.append(comparison)

        def compare(values: Sequence[np.float64]) -> np.float64:
            results = [operand(values) for operand in operands]
            return _indicator(
                all(check(results[i], results[i + 1]) for i, check in enumerate(checks))
            )

        return compare

    def _translate_BoolOp(self, node: ast.BoolOp) -> Node:
        operands = [self.translate(value) for value in node.values]
        combine = all if isinstance(node.op, ast.And) else any
        return lambda values: _indicator(combine(operand(values) != 0 for operand in operands))

    def _translate_IfExp(self, node: ast.IfExp) -> Node:
        test = self.translate(node.test)
        body = self.translate(node.body)
        orelse = self.translate(node.orelse)
        return lambda values: body(values) if test(values) != 0 else orelse(values)

    def _translate_Call(self, node: ast.Call) -> Node:
        if not isinstance(node.func, ast.Name):
            self._fail("Only named functions can be called")
        name = node.func.id
        if name not in policy.FUNCTIONS:
            if name in self._indices:
                self._fail(f"'{name}' is a variable, not a function")
            self._fail(f"Unknown function: '{name}'")
        if node.keywords:
            self._fail(f"Function '{name}' does not take keyword arguments")
        function, min_args, max_args = policy.FUNCTIONS[name]
        count = len(node.args)
        if count < min_args or (max_args is not None and count > max_args):
            expected = str(min_args) if min_args == max_args else f"at least {min_args}"
            self._fail(f"Function '{name}' expects {expected} argument(s), got {count}")
        arguments = [self.translate(arg) for arg in node.args]
        return lambda values: np.float64(function(*(argument(values) for argument in arguments)))


def parse_expression(source: str, variables: Sequence[str]) -> Node:
    """Parse ``source`` into an evaluation tree over ``variables``.

    The returned callable takes the variable values in the order of
    ``variables`` and must run under ``np.errstate(all="ignore")`` to get
    inf and nan silently.

    Raises:
        ExpressionError: if the text is not a valid expression.
    """
    if not source.strip():
        raise ExpressionError(source, "Empty expression")
    try:
        tree = ast.parse(normalize(source), mode="eval")
    except SyntaxError as exc:
        raise ExpressionError(source, f"Syntax error: {exc.msg}") from exc

    return _Translator(source, variables).translate(tree)
