"""Console formatting for search progress and solutions."""

from __future__ import annotations

import re

from tqdm import tqdm

from expressions import ExpressionEvaluator
from fuzz_core.candidate import format_number
from fuzz_core.loop import AcceptanceEvent, SearchResult, Solution

_ASSIGNMENT = re.compile(r"^\s*([a-z])\s*=\s*([^=].*?)\s*$")


def format_time(seconds: float) -> str:
    """Format seconds into human readable string."""
    if seconds < 60:
        return f"{seconds:.0f}s"
    elif seconds < 3600:
        mins = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{mins}m {secs}s"
    else:
        hours = int(seconds // 3600)
        mins = int((seconds % 3600) // 60)
        return f"{hours}h {mins}m"


def format_progress(event: AcceptanceEvent) -> str:
    return (
        f"N: {event.iteration} "
        f"Corp: {event.corpus_size} "
        f"Vars: {event.candidate.format()} "
        f"Res1: {format_number(event.res1)} "
        f"Res2: {format_number(event.res2)} "
        f"Diff: {format_number(event.diff)}"
    )


def to_script(solution: Solution) -> str:
    """Variable assignments, one per line, followed by the equation."""
    return f"{solution.candidate.format(chr(10))}\n{solution.equation}\n"


def format_solution(solution: Solution) -> str:
    lines = ["The solution to", "", f"    {solution.equation}", ""]
    if solution.conditions:
        lines += ["under these conditions:", ""]
        lines += [f"    {condition}" for condition in solution.conditions]
        lines.append("")
    lines += ["is:", "", f"    {solution.candidate.format()}", ""]
    lines += ["Script:", "", to_script(solution)]
    return "\n".join(lines)


def format_exhausted(result: SearchResult) -> str:
    best = "n/a" if result.best_diff is None else format_number(result.best_diff)
    return (
        f"No solution found ({result.stop_reason}) after {result.iterations} iterations, "
        f"{result.attempts} attempts in {format_time(result.elapsed_s)}. "
        f"Best diff: {best}, corpus size: {result.corpus_size}"
    )


def replay_script(script: str, evaluator: ExpressionEvaluator) -> tuple[float, float]:
    """Evaluate both sides of a solution script.

    Args:
        script: Text produced by :func:`to_script`
        evaluator: Evaluator over the same variables as the search

    Returns:
        The values of the left and right expressions

    Raises:
        ValueError: If the script has no equation line or bad assignments
    """
    bindings: dict[str, float] = {}
    equation: str | None = None
    for line in script.splitlines():
        if not line.strip():
            continue
        match = _ASSIGNMENT.match(line)
        if match is not None and equation is None:
            name, value = match.groups()
            try:
                bindings[name] = float(value)
            except ValueError as exc:
                raise ValueError(f"Invalid value for {name}: {value}") from exc
            continue
        if equation is not None:
            raise ValueError(f"Unexpected line after equation: {line}")
        equation = line.strip()

    if equation is None or " == " not in equation:
        raise ValueError("Script does not end with an 'EXPR1 == EXPR2' line")
    expr1, expr2 = equation.split(" == ", 1)
    return evaluator.evaluate(expr1, bindings), evaluator.evaluate(expr2, bindings)


class ConsoleReporter:
    """Print acceptances and the final solution without breaking progress bars."""

    def on_accept(self, event: AcceptanceEvent) -> None:
        tqdm.write(format_progress(event))

    def on_solution(self, solution: Solution) -> None:
        tqdm.write(format_solution(solution))
