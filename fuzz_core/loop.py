from __future__ import annotations

import logging
import math
import random
import time
from dataclasses import dataclass, field
from typing import Literal, Protocol

from tqdm import tqdm

from expressions import CompiledExpression, ExpressionEvaluator, NumpyEvaluator

from .candidate import Candidate, variable_names
from .corpus import Corpus
from .mutation import Mutator
from .schemas import SearchConfig
from .selection import create_sampling_strategy

logger = logging.getLogger(__name__)

StepStatus = Literal["rejected_by_condition", "rejected", "accepted", "solved"]


@dataclass(frozen=True)
class AcceptanceEvent:
    iteration: int
    corpus_size: int
    candidate: Candidate
    res1: float
    res2: float
    diff: float


@dataclass(frozen=True)
class Solution:
    expr1: str
    expr2: str
    conditions: tuple[str, ...]
    candidate: Candidate
    res1: float
    res2: float
    diff: float

    @property
    def equation(self) -> str:
        return f"{self.expr1} == {self.expr2}"


@dataclass
class SearchResult:
    status: Literal["solved", "exhausted"]
    solution: Solution | None
    best_diff: float | None
    iterations: int
    attempts: int
    corpus_size: int
    condition_rejections: list[int]
    elapsed_s: float
    stop_reason: str | None = None
    history: list[AcceptanceEvent] = field(default_factory=list)


class SearchReporter(Protocol):
    def on_accept(self, event: AcceptanceEvent) -> None:
        ...

    def on_solution(self, solution: Solution) -> None:
        ...


class SearchLoop:
    """Mutate, filter, evaluate and accept candidates until both sides agree.

    Every expression is compiled at construction, so a malformed expression
    raises :class:`expressions.ExpressionError` before any iteration runs.
    Without a configured budget the loop only stops on a solution.
    """

    def __init__(
        self,
        config: SearchConfig,
        evaluator: ExpressionEvaluator | None = None,
        rng: random.Random | None = None,
        reporter: SearchReporter | None = None,
    ) -> None:
        self.config: SearchConfig = config
        self.variables: tuple[str, ...] = variable_names(config.num_variables)
        self.evaluator: ExpressionEvaluator = evaluator or NumpyEvaluator(self.variables)
        if tuple(self.evaluator.variables) != self.variables:
            raise ValueError("evaluator variables do not match the configured dimension")
        self.rng: random.Random = rng or random.Random(config.seed)
        self.reporter: SearchReporter | None = reporter

        self._expr1: CompiledExpression = self.evaluator.compile(config.expr1)
        self._expr2: CompiledExpression = self.evaluator.compile(config.expr2)
        self._conditions: list[CompiledExpression] = [
            self.evaluator.compile(condition) for condition in config.conditions
        ]

        self.corpus: Corpus = Corpus(
            config.num_variables,
            create_sampling_strategy(config.sampling, self.rng),
        )
        self.mutator: Mutator = Mutator(
            self.corpus,
            rng=self.rng,
            round_mode=config.round_mode,
            steps=config.mutation_steps,
            magnitude=config.mutation_range,
        )

        self.best_diff: float | None = None
        self.iteration: int = 0
        self.attempts: int = 0
        self.condition_rejections: list[int] = [0] * len(self._conditions)
        self.history: list[AcceptanceEvent] = []
        self.solution: Solution | None = None

    def run(self) -> SearchResult:
        start = time.monotonic()
        stop_reason: str | None = None

        with tqdm(
            total=self.config.max_iterations,
            desc="Search",
            unit="it",
            leave=False,
            ncols=80,
            disable=not self.config.show_progress,
        ) as pbar:
            while self.solution is None:
                stop_reason = self._budget_exhausted(start)
                if stop_reason is not None:
                    logger.warning(
                        "Search stopped (%s) after %d iterations, best diff %s",
                        stop_reason,
                        self.iteration,
                        self.best_diff,
                    )
                    break
                status = self.step()
                if status != "rejected_by_condition":
                    pbar.update(1)
                if status != "rejected" and status != "rejected_by_condition":
                    pbar.set_postfix(best=self.best_diff, corpus=len(self.corpus))

        return SearchResult(
            status="solved" if self.solution is not None else "exhausted",
            solution=self.solution,
            best_diff=self.best_diff,
            iterations=self.iteration,
            attempts=self.attempts,
            corpus_size=len(self.corpus),
            condition_rejections=list(self.condition_rejections),
            elapsed_s=time.monotonic() - start,
            stop_reason=stop_reason,
            history=list(self.history),
        )

    def step(self) -> StepStatus:
        """Run one candidate from mutation through the acceptance decision."""
        if self.solution is not None:
            raise RuntimeError("search has already found a solution")

        candidate = self.mutator.mutate()
        self.attempts += 1
        if not self._passes_conditions(candidate):
            return "rejected_by_condition"

        res1 = self._expr1(candidate.values)
        res2 = self._expr2(candidate.values)
        self.iteration += 1
        diff = abs(res1 - res2)

        if not self._is_improvement(diff):
            return "rejected"

        self.corpus.accept(candidate)
        self.best_diff = diff
        event = AcceptanceEvent(
            iteration=self.iteration,
            corpus_size=len(self.corpus),
            candidate=candidate,
            res1=res1,
            res2=res2,
            diff=diff,
        )
        self.history.append(event)
        logger.debug("Accepted %s with diff %r at iteration %d", candidate.format(), diff, self.iteration)
        if self.reporter is not None:
            self.reporter.on_accept(event)

        if diff <= self.config.tolerance:
            self.solution = Solution(
                expr1=self.config.expr1,
                expr2=self.config.expr2,
                conditions=tuple(self.config.conditions),
                candidate=candidate,
                res1=res1,
                res2=res2,
                diff=diff,
            )
            logger.info("Solved after %d iterations (%d attempts)", self.iteration, self.attempts)
            if self.reporter is not None:
                self.reporter.on_solution(self.solution)
            return "solved"
        return "accepted"

    def _passes_conditions(self, candidate: Candidate) -> bool:
        for index, condition in enumerate(self._conditions):
            # Only an exact 1.0 counts as satisfied, not any truthy value.
            if condition(candidate.values) != 1.0:
                self.condition_rejections[index] += 1
                return False
        return True

    def _is_improvement(self, diff: float) -> bool:
        # The first evaluated candidate is accepted whatever its diff, except
        # nan: a nan best would never be beaten since nothing compares below it.
        if math.isnan(diff):
            return False
        return self.best_diff is None or diff < self.best_diff

    def _budget_exhausted(self, start: float) -> str | None:
        if self.config.max_iterations is not None and self.iteration >= self.config.max_iterations:
            return "max_iterations"
        if self.config.max_attempts is not None and self.attempts >= self.config.max_attempts:
            return "max_attempts"
        if self.config.time_limit_s is not None and time.monotonic() - start >= self.config.time_limit_s:
            return "time_limit"
        return None
