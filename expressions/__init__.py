"""
Expressions Module

Parsing and numeric evaluation of user expressions.

This module provides:
- Abstract evaluator interface and the ExpressionError configuration error
- exprtk-style syntax (``^`` power, ``=`` equality, ``and``/``or``/``not``)
- Comparison and boolean operators that evaluate to 1.0 / 0.0
- Translation of the Python AST with a whitelist of functions and constants
- float64 evaluation with IEEE semantics (inf / nan instead of exceptions)
"""

__version__ = "0.1.0"

from .base import CompiledExpression, ExpressionError, ExpressionEvaluator
from .numpy_evaluator import NumpyEvaluator

__all__ = [
    "CompiledExpression",
    "ExpressionError",
    "ExpressionEvaluator",
    "NumpyEvaluator",
]
