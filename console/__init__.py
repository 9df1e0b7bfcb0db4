"""
Console Module

Command-line front end for the equation fuzzer.

This module provides:
- Typer CLI: EXPR1 EXPR2 [CONDITION...] plus search options
- YAML-based configuration loading and snapshots
- Progress, solution and script formatting
- Script replay to double-check a reported solution
"""

__version__ = "0.1.0"
