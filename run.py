#!/usr/bin/env python3
"""
Equation fuzzer launcher.

Usage:
  python run.py "a*a" "4"                     # find a with a*a == 4
  python run.py "a+b" "2" "a>b"               # with a guard condition
  python run.py "a/3" "b" --no-round --seed 7 # fractional search, reproducible
  python run.py --help
"""

from console.cli import app


if __name__ == "__main__":
    app()
