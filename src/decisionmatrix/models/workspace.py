"""Editable decision matrix workspace.

DecisionWorkspace is the mutable model behind the terminal and web front
ends. It owns the alternative and state labels, the payoff rows, the
selected rule and the Hurwicz lambda, and keeps the matrix rectangular
through every structural edit. The engine never sees this object; each
evaluation works on an immutable PayoffMatrix snapshot.

Edits that would break an invariant raise before touching state, so a
rejected edit always leaves the previous values in place.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional

from decisionmatrix.config import get_default_lambda, get_default_rule
from decisionmatrix.engine import evaluate, format_score
from decisionmatrix.errors import DecisionMatrixError, InvalidPayoffError, ShapeError
from decisionmatrix.models.matrix import PayoffMatrix
from decisionmatrix.models.rules import RuleType, coerce_lambda, parse_rule, parse_rule_type

logger = logging.getLogger(__name__)

DEFAULT_ALTERNATIVES = ["Alternative A", "Alternative B", "Alternative C"]
DEFAULT_STATES = ["State 1", "State 2", "State 3"]
DEFAULT_MATRIX = [
    [50.0, 10.0, 20.0],
    [30.0, 40.0, 10.0],
    [20.0, 60.0, 70.0],
]


def coerce_payoff(value: Any) -> float:
    """Convert a cell entry to a payoff.

    Blank text counts as 0. Numbers and numeric strings become floats.
    Anything else, and any non-finite value, raises InvalidPayoffError.
    """
    if isinstance(value, bool):
        raise InvalidPayoffError(f"Payoff must be a number, got {value!r}")
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            raise InvalidPayoffError(f"Payoff must be a number, got {value!r}") from None
    elif isinstance(value, (int, float)):
        number = float(value)
    else:
        raise InvalidPayoffError(f"Payoff must be a number, got {value!r}")
    if not math.isfinite(number):
        raise InvalidPayoffError(f"Payoff must be finite, got {value!r}")
    return number


def alternative_letters(index: int) -> str:
    """Spreadsheet-style letters for a 0-based index: A..Z, AA, AB, ..."""
    letters = ""
    n = index + 1
    while n > 0:
        n, remainder = divmod(n - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


@dataclass(frozen=True)
class ReportRow:
    """One alternative's line in a rendered evaluation."""

    index: int
    label: str
    payoffs: tuple[float, ...]
    derivation: str
    score: float
    display_score: str
    recommended: bool


@dataclass(frozen=True)
class WorkspaceReport:
    """Evaluation of a workspace, paired with its labels."""

    rule_type: RuleType
    rule_label: str
    lam: float
    states: tuple[str, ...]
    rows: tuple[ReportRow, ...]
    best_index: int

    @property
    def recommended_label(self) -> str:
        return self.rows[self.best_index].label


class DecisionWorkspace:
    """Mutable alternatives x states matrix with labels and rule selection."""

    def __init__(
        self,
        alternatives: list[str],
        states: list[str],
        rows: list[list[float]],
        rule: Optional[object] = None,
        lam: Optional[float] = None,
    ) -> None:
        if not alternatives or not states:
            raise ShapeError("Workspace needs at least one alternative and one state")
        if len(rows) != len(alternatives):
            raise ShapeError(f"Expected {len(alternatives)} rows for {len(alternatives)} alternatives, got {len(rows)}")
        for i, row in enumerate(rows):
            if len(row) != len(states):
                raise ShapeError(f"Row {i} has {len(row)} values, expected {len(states)} (one per state)")

        self.alternatives = [str(name) for name in alternatives]
        self.states = [str(name) for name in states]
        self.rows = [[coerce_payoff(value) for value in row] for row in rows]
        self.rule_type = get_default_rule() if rule is None else parse_rule_type(rule)
        self.hurwicz_lambda = get_default_lambda() if lam is None else coerce_lambda(lam)
        self._check_scorable()

    @classmethod
    def default(cls) -> "DecisionWorkspace":
        """The 3x3 example workspace shown when a front end starts."""
        return cls(
            alternatives=list(DEFAULT_ALTERNATIVES),
            states=list(DEFAULT_STATES),
            rows=[list(row) for row in DEFAULT_MATRIX],
        )

    @classmethod
    def from_dict(cls, data: dict) -> "DecisionWorkspace":
        """Rebuild a workspace from its to_dict() form.

        Cell values may be numbers or numeric strings (as submitted by a form).
        """
        return cls(
            alternatives=list(data["alternatives"]),
            states=list(data["states"]),
            rows=[list(row) for row in data["matrix"]],
            rule=data.get("rule"),
            lam=data.get("lambda"),
        )

    def to_dict(self) -> dict:
        return {
            "alternatives": list(self.alternatives),
            "states": list(self.states),
            "matrix": [list(row) for row in self.rows],
            "rule": self.rule_type.value,
            "lambda": self.hurwicz_lambda,
        }

    @property
    def n_alternatives(self) -> int:
        return len(self.alternatives)

    @property
    def n_states(self) -> int:
        return len(self.states)

    # -------------------------------------------------------------------------
    # Cell and label edits
    # -------------------------------------------------------------------------

    def set_cell(self, i: int, j: int, value: Any) -> float:
        """Set payoff (i, j) from user input and return the stored number."""
        self._check_alternative(i)
        self._check_state(j)
        try:
            number = coerce_payoff(value)
        except InvalidPayoffError:
            logger.warning(f"Rejected payoff {value!r} for cell ({i}, {j})")
            raise
        previous = self.rows[i][j]
        self.rows[i][j] = number
        try:
            self._check_scorable()
        except DecisionMatrixError:
            self.rows[i][j] = previous
            raise
        return number

    def rename_alternative(self, i: int, name: str) -> None:
        self._check_alternative(i)
        self.alternatives[i] = name

    def rename_state(self, j: int, name: str) -> None:
        self._check_state(j)
        self.states[j] = name

    # -------------------------------------------------------------------------
    # Structural edits (matrix stays rectangular)
    # -------------------------------------------------------------------------

    def add_alternative(self) -> int:
        """Append an alternative with a 0 payoff for every state; return its index."""
        self.alternatives.append(f"Alternative {alternative_letters(len(self.alternatives))}")
        self.rows.append([0.0] * self.n_states)
        return self.n_alternatives - 1

    def add_state(self) -> int:
        """Append a state with a 0 payoff for every alternative; return its index."""
        self.states.append(f"State {len(self.states) + 1}")
        for row in self.rows:
            row.append(0.0)
        return self.n_states - 1

    def remove_alternative(self, i: int) -> bool:
        """Remove alternative i. The last remaining alternative is kept."""
        self._check_alternative(i)
        if self.n_alternatives <= 1:
            return False
        del self.alternatives[i]
        del self.rows[i]
        return True

    def remove_state(self, j: int) -> bool:
        """Remove state j from every row. The last remaining state is kept."""
        self._check_state(j)
        if self.n_states <= 1:
            return False
        del self.states[j]
        for row in self.rows:
            del row[j]
        return True

    # -------------------------------------------------------------------------
    # Rule selection
    # -------------------------------------------------------------------------

    def set_rule(self, rule: object) -> RuleType:
        previous, self.rule_type = self.rule_type, parse_rule_type(rule)
        try:
            self._check_scorable()
        except DecisionMatrixError:
            self.rule_type = previous
            raise
        return self.rule_type

    def set_lambda(self, value: Any) -> float:
        previous, self.hurwicz_lambda = self.hurwicz_lambda, coerce_lambda(value)
        try:
            self._check_scorable()
        except DecisionMatrixError:
            self.hurwicz_lambda = previous
            raise
        return self.hurwicz_lambda

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def matrix(self) -> PayoffMatrix:
        """Immutable snapshot of the current payoffs."""
        return PayoffMatrix.from_rows(self.rows)

    def evaluate(self) -> WorkspaceReport:
        """Run the selected rule on a snapshot and label the result."""
        rule = parse_rule(self.rule_type, self.hurwicz_lambda)
        result = evaluate(self.matrix(), rule)
        rows = tuple(
            ReportRow(
                index=i,
                label=self.alternatives[i],
                payoffs=tuple(self.rows[i]),
                derivation=result.derivations[i],
                score=result.scores[i],
                display_score=format_score(result.scores[i], self.rule_type),
                recommended=i == result.best_index,
            )
            for i in range(self.n_alternatives)
        )
        return WorkspaceReport(
            rule_type=self.rule_type,
            rule_label=self.rule_type.label,
            lam=self.hurwicz_lambda,
            states=tuple(self.states),
            rows=rows,
            best_index=result.best_index,
        )

    def _check_alternative(self, i: int) -> None:
        if not 0 <= i < self.n_alternatives:
            raise IndexError(f"Alternative index {i} out of range (0..{self.n_alternatives - 1})")

    def _check_scorable(self) -> None:
        """Raise if the current payoffs overflow under the selected rule."""
        try:
            self.evaluate()
        except DecisionMatrixError as e:
            logger.warning(f"Workspace cannot be scored: {e}")
            raise

    def _check_state(self, j: int) -> None:
        if not 0 <= j < self.n_states:
            raise IndexError(f"State index {j} out of range (0..{self.n_states - 1})")
