"""
Fuzz Core Module

Search loop, corpus, sampling and mutation for the equation fuzzer.

This module implements the randomized search for variable assignments that
make two expressions equal:
- Fixed-dimension candidates named a..z by position
- Append-only corpus seeded with the all-zero candidate
- Uniform (default) or best-only sampling from the corpus
- Add/subtract mutations, truncated to integers in round mode
- Strict-improvement acceptance and exact-zero termination
"""

__version__ = "0.1.0"

from .candidate import Candidate, format_number, variable_names
from .corpus import Corpus
from .loop import AcceptanceEvent, SearchLoop, SearchResult, Solution
from .mutation import Mutator
from .schemas import SearchConfig

__all__ = [
    "AcceptanceEvent",
    "Candidate",
    "Corpus",
    "Mutator",
    "SearchConfig",
    "SearchLoop",
    "SearchResult",
    "Solution",
    "format_number",
    "variable_names",
]
