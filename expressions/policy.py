"""
Names an expression may use besides its variables.
"""

from __future__ import annotations

import sys
from collections.abc import Callable

import numpy as np


def _frac(x: np.float64) -> np.float64:
    return x - np.trunc(x)


def _clamp(low: np.float64, x: np.float64, high: np.float64) -> np.float64:
    return np.minimum(np.maximum(x, low), high)


def _sum(*args: np.float64) -> np.float64:
    # Left to right, one rounding per addition.
    total = args[0]
    for value in args[1:]:
        total = total + value
    return total


def _avg(*args: np.float64) -> np.float64:
    return _sum(*args) / np.float64(len(args))


CONSTANTS: dict[str, float] = {
    "pi": np.pi,
    "epsilon": sys.float_info.epsilon,
    "inf": np.inf,
    "true": 1.0,
    "false": 0.0,
}

# name -> (function, minimum arity, maximum arity or None for variadic)
FUNCTIONS: dict[str, tuple[Callable[..., np.float64], int, int | None]] = {
    "abs": (np.abs, 1, 1),
    "sqrt": (np.sqrt, 1, 1),
    "exp": (np.exp, 1, 1),
    "log": (np.log, 1, 1),
    "ln": (np.log, 1, 1),
    "log10": (np.log10, 1, 1),
    "log2": (np.log2, 1, 1),
    "sin": (np.sin, 1, 1),
    "cos": (np.cos, 1, 1),
    "tan": (np.tan, 1, 1),
    "asin": (np.arcsin, 1, 1),
    "acos": (np.arccos, 1, 1),
    "atan": (np.arctan, 1, 1),
    "atan2": (np.arctan2, 2, 2),
    "sinh": (np.sinh, 1, 1),
    "cosh": (np.cosh, 1, 1),
    "tanh": (np.tanh, 1, 1),
    "floor": (np.floor, 1, 1),
    "ceil": (np.ceil, 1, 1),
    "trunc": (np.trunc, 1, 1),
    "frac": (_frac, 1, 1),
    "sgn": (np.sign, 1, 1),
    "pow": (np.power, 2, 2),
    "hypot": (np.hypot, 2, 2),
    # Sign follows the dividend, like C fmod.
    "fmod": (np.fmod, 2, 2),
    "mod": (np.fmod, 2, 2),
    "min": (lambda *args: np.min(args), 1, None),
    "max": (lambda *args: np.max(args), 1, None),
    "sum": (_sum, 1, None),
    "avg": (_avg, 1, None),
    "clamp": (_clamp, 3, 3),
}
