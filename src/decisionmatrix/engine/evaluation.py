"""Rule evaluation engine.

evaluate() is a pure function: it reads a PayoffMatrix, applies one of the
five decision rules, and returns a fresh EvaluationResult holding a score
and a derivation string per alternative plus the recommended row index.

Each rule has an evaluator class registered in EVALUATORS. The registry is
checked against RuleType at import time so a new rule cannot be added
without an evaluator.

Tie-break: the lowest row index achieving the extremal score wins, for
every rule.
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from decisionmatrix.engine.formatting import format_lambda, format_number, format_score
from decisionmatrix.errors import InvalidPayoffError, UnsupportedRuleError
from decisionmatrix.models.matrix import PayoffMatrix
from decisionmatrix.models.rules import Hurwicz, Rule, RuleType, parse_rule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of applying one rule to one matrix.

    scores carry full precision; use display_scores for table text.
    """

    rule: Rule
    scores: tuple[float, ...]
    derivations: tuple[str, ...]
    best_index: int

    @property
    def rule_type(self) -> RuleType:
        return self.rule.rule_type

    @property
    def best_score(self) -> float:
        return self.scores[self.best_index]

    @property
    def display_scores(self) -> tuple[str, ...]:
        return tuple(format_score(score, self.rule_type) for score in self.scores)


@runtime_checkable
class RuleEvaluator(Protocol):
    """Protocol for per-rule evaluators.

    score_rows returns one (score, derivation) pair per matrix row.
    """

    @staticmethod
    def score_rows(matrix: PayoffMatrix, rule: Rule) -> list[tuple[float, str]]:
        ...


def _join(values: Sequence[float], sep: str) -> str:
    return sep.join(format_number(v) for v in values)


def column_maxima(matrix: PayoffMatrix) -> tuple[float, ...]:
    """Best payoff achievable in each state."""
    return tuple(max(matrix.column(j)) for j in range(matrix.n_states))


def regret_matrix(matrix: PayoffMatrix) -> tuple[tuple[float, ...], ...]:
    """Regret of every cell: its column's maximum minus the cell's payoff."""
    maxima = column_maxima(matrix)
    return tuple(tuple(maxima[j] - value for j, value in enumerate(row)) for row in matrix.rows)


def row_mean(row: Sequence[float]) -> float:
    """Arithmetic mean that survives payoffs near the float limit."""
    m = len(row)
    total = sum(row)
    if math.isfinite(total):
        return total / m
    # The sum overflowed; divide first so the mean stays in range
    return sum(v / m for v in row)


def select_best(scores: Sequence[float], minimize: bool = False) -> int:
    """Index of the first maximal (or minimal) score."""
    best = 0
    for i in range(1, len(scores)):
        if minimize:
            if scores[i] < scores[best]:
                best = i
        elif scores[i] > scores[best]:
            best = i
    return best


class MaximinEvaluator:
    """Score = worst payoff of the row."""

    @staticmethod
    def score_rows(matrix: PayoffMatrix, rule: Rule) -> list[tuple[float, str]]:
        return [(min(row), f"min({_join(row, ', ')})") for row in matrix.rows]


class MaximaxEvaluator:
    """Score = best payoff of the row."""

    @staticmethod
    def score_rows(matrix: PayoffMatrix, rule: Rule) -> list[tuple[float, str]]:
        return [(max(row), f"max({_join(row, ', ')})") for row in matrix.rows]


class LaplaceEvaluator:
    """Score = arithmetic mean of the row (all states equally likely)."""

    @staticmethod
    def score_rows(matrix: PayoffMatrix, rule: Rule) -> list[tuple[float, str]]:
        m = matrix.n_states
        return [(row_mean(row), f"({_join(row, ' + ')}) / {m}") for row in matrix.rows]


class HurwiczEvaluator:
    """Score = lam * max(row) + (1 - lam) * min(row)."""

    @staticmethod
    def score_rows(matrix: PayoffMatrix, rule: Rule) -> list[tuple[float, str]]:
        if not isinstance(rule, Hurwicz):
            raise UnsupportedRuleError(f"Hurwicz evaluator cannot score rule {rule!r}")
        lam = rule.lam
        results = []
        for row in matrix.rows:
            best, worst = max(row), min(row)
            derivation = (
                f"λ·max + (1-λ)·min = "
                f"{format_lambda(lam)}·{format_number(best)} + "
                f"{format_lambda(1 - lam)}·{format_number(worst)}"
            )
            results.append((lam * best + (1 - lam) * worst, derivation))
        return results


class SavageEvaluator:
    """Score = largest regret of the row; the lowest score wins."""

    @staticmethod
    def score_rows(matrix: PayoffMatrix, rule: Rule) -> list[tuple[float, str]]:
        maxima = column_maxima(matrix)
        regrets = regret_matrix(matrix)
        results = []
        for row, regret_row in zip(matrix.rows, regrets):
            cells = ", ".join(
                f"(maxZ{j + 1}-{format_number(value)}="
                f"{format_number(maxima[j])}-{format_number(value)}={format_number(regret)})"
                for j, (value, regret) in enumerate(zip(row, regret_row))
            )
            results.append((max(regret_row), f"max(Regret: {cells})"))
        return results


# Registry of all evaluators by rule type
EVALUATORS: dict[RuleType, type[RuleEvaluator]] = {
    RuleType.MAXIMIN: MaximinEvaluator,
    RuleType.MAXIMAX: MaximaxEvaluator,
    RuleType.LAPLACE: LaplaceEvaluator,
    RuleType.HURWICZ: HurwiczEvaluator,
    RuleType.SAVAGE: SavageEvaluator,
}

_missing = set(RuleType) - set(EVALUATORS)
if _missing:
    raise RuntimeError(f"No evaluator registered for: {sorted(r.value for r in _missing)}")


def evaluate(
    matrix: PayoffMatrix | Sequence[Sequence[float]],
    rule: object,
    lam: float | None = None,
) -> EvaluationResult:
    """Evaluate a payoff matrix under a decision rule.

    This is the main entry point of the engine. It never mutates its input.

    Args:
        matrix: PayoffMatrix, or nested numeric sequences (rows of payoffs)
        rule: RuleType, rule name ("maximin", "hurwicz", ...) or rule object
        lam: Hurwicz lambda (default 0.5); ignored by other rules

    Returns:
        EvaluationResult with one score and derivation per alternative

    Raises:
        ShapeError: matrix is empty or ragged
        InvalidPayoffError: a payoff is not a finite number, or a score overflows
        UnsupportedRuleError: rule is not one of the five rules
        InvalidParameterError: Hurwicz lambda is not finite
    """
    payoffs = PayoffMatrix.from_rows(matrix)
    rule_obj = parse_rule(rule, lam)
    evaluator = EVALUATORS[rule_obj.rule_type]

    rows = evaluator.score_rows(payoffs, rule_obj)
    scores = tuple(score for score, _ in rows)
    for i, score in enumerate(scores):
        if not math.isfinite(score):
            raise InvalidPayoffError(
                f"Payoffs are too large to score: {rule_obj.rule_type.value} score for "
                f"alternative {i} overflows"
            )
    derivations = tuple(derivation for _, derivation in rows)
    best_index = select_best(scores, minimize=rule_obj.rule_type.minimizes)

    logger.debug(
        f"evaluate: rule={rule_obj.rule_type.value}, shape={payoffs.shape}, "
        f"best_index={best_index}"
    )
    return EvaluationResult(
        rule=rule_obj,
        scores=scores,
        derivations=derivations,
        best_index=best_index,
    )
