"""CLI interface for running an equation search."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import typer

from console.config import build_config, load_config_data, save_config
from console.report import ConsoleReporter, format_exhausted, replay_script, to_script
from expressions import ExpressionError
from fuzz_core.candidate import format_number
from fuzz_core.loop import SearchLoop

USAGE = (
    "Usage: equation-fuzzer EXPR1 EXPR2 [CONDITIONS]\n"
    "\n"
    "The program will attempt to resolve variables such that EXPR1 == EXPR2\n"
)

EXIT_EXHAUSTED = 2
EXIT_INTERRUPTED = 130

app = typer.Typer(help="Search for variable values that make two expressions equal", add_completion=False)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def main(
    expressions: Optional[list[str]] = typer.Argument(
        None,
        help="EXPR1 EXPR2 followed by zero or more conditions that must evaluate to 1",
        show_default=False,
    ),
    variables: Optional[int] = typer.Option(None, "--variables", "-n", help="Number of variables a..z (1-26, default 6)"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for a reproducible search"),
    round_mode: Optional[bool] = typer.Option(None, "--round/--no-round", help="Truncate mutated values to integers"),
    sampling: Optional[str] = typer.Option(None, "--sampling", help="Corpus sampling: uniform or best"),
    tolerance: Optional[float] = typer.Option(None, "--tolerance", help="Accept |EXPR1 - EXPR2| <= tolerance as a solution"),
    max_iterations: Optional[int] = typer.Option(None, "--max-iterations", help="Stop after this many evaluated candidates"),
    max_attempts: Optional[int] = typer.Option(None, "--max-attempts", help="Stop after this many mutations"),
    time_limit: Optional[float] = typer.Option(None, "--time-limit", help="Stop after this many seconds"),
    progress: bool = typer.Option(False, "--progress", help="Show a progress bar"),
    verify: bool = typer.Option(False, "--verify", help="Replay the solution script and check it"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="YAML file with search settings"),
    save_config_path: Optional[Path] = typer.Option(None, "--save-config", help="Write the effective settings to YAML"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Search for variable values that make EXPR1 equal to EXPR2."""
    _configure_logging(verbose)

    data: dict[str, Any] = {}
    if config_path is not None:
        try:
            data = load_config_data(config_path)
        except (FileNotFoundError, ValueError) as e:
            typer.secho(f"❌ {e}", fg=typer.colors.RED)
            raise typer.Exit(1)

    positional = list(expressions or [])
    if len(positional) >= 2:
        data["expr1"], data["expr2"] = positional[0], positional[1]
        data["conditions"] = positional[2:]
    elif positional or "expr1" not in data or "expr2" not in data:
        typer.echo(USAGE)
        raise typer.Exit(0)

    overrides = {
        "num_variables": variables,
        "seed": seed,
        "round_mode": round_mode,
        "sampling": sampling,
        "tolerance": tolerance,
        "max_iterations": max_iterations,
        "max_attempts": max_attempts,
        "time_limit_s": time_limit,
        "show_progress": True if progress else None,
    }
    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        config = build_config(data)
    except ValueError as e:
        typer.secho(f"❌ {e}", fg=typer.colors.RED)
        raise typer.Exit(1)

    if save_config_path is not None:
        save_config(config, save_config_path)

    try:
        loop = SearchLoop(config, reporter=ConsoleReporter())
    except ExpressionError as e:
        typer.echo(e.diagnostic())
        raise typer.Exit(1)

    try:
        result = loop.run()
    except KeyboardInterrupt:
        best = "n/a" if loop.best_diff is None else format_number(loop.best_diff)
        typer.echo(f"\nInterrupted after {loop.iteration} iterations. Best diff: {best}")
        raise typer.Exit(EXIT_INTERRUPTED)

    if result.solution is None:
        typer.echo(format_exhausted(result))
        raise typer.Exit(EXIT_EXHAUSTED)

    if verify:
        res1, res2 = replay_script(to_script(result.solution), loop.evaluator)
        diff = abs(res1 - res2)
        if diff <= config.tolerance:
            typer.secho(f"✅ Script verified: Res1: {format_number(res1)} Res2: {format_number(res2)}", fg=typer.colors.GREEN)
        else:
            typer.secho(f"❌ Script replay differs by {format_number(diff)}", fg=typer.colors.RED)
            raise typer.Exit(1)


if __name__ == "__main__":
    app()
