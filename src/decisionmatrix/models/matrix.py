"""Payoff matrix value object.

A PayoffMatrix is the immutable input to the rule engine. Rows are
alternatives, columns are states of nature. Both are addressed purely by
position; labels live in the presentation layer.

Constraints:
- At least one row and one column
- All rows have the same length
- Every payoff is a finite number
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from numbers import Real

from decisionmatrix.errors import InvalidPayoffError, ShapeError


@dataclass(frozen=True)
class PayoffMatrix:
    """Rectangular, immutable matrix of payoffs.

    Build it with from_rows() to get shape and value validation from
    arbitrary nested sequences. The stored rows are fresh tuples, so later
    edits to the caller's lists never leak into an evaluation.
    """

    rows: tuple[tuple[float, ...], ...]

    def __post_init__(self) -> None:
        """Validate shape and payoff values."""
        if len(self.rows) == 0:
            raise ShapeError("Payoff matrix must have at least one alternative (row)")
        width = len(self.rows[0])
        if width == 0:
            raise ShapeError("Payoff matrix must have at least one state (column)")
        for i, row in enumerate(self.rows):
            if len(row) != width:
                raise ShapeError(
                    f"Payoff matrix must be rectangular: row 0 has {width} values, "
                    f"row {i} has {len(row)}"
                )
            for j, value in enumerate(row):
                if not math.isfinite(value):
                    raise InvalidPayoffError(f"Payoff at ({i}, {j}) must be finite, got {value}")

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> "PayoffMatrix":
        """Copy nested numeric sequences into a validated PayoffMatrix."""
        if isinstance(rows, PayoffMatrix):
            return rows
        if isinstance(rows, (str, bytes)) or not isinstance(rows, Sequence):
            raise ShapeError(f"Payoff matrix must be a sequence of rows, got {type(rows).__name__}")
        converted = []
        for i, row in enumerate(rows):
            if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
                raise ShapeError(f"Row {i} must be a sequence of payoffs, got {type(row).__name__}")
            converted.append(tuple(_as_payoff(value, i, j) for j, value in enumerate(row)))
        return cls(rows=tuple(converted))

    @property
    def n_alternatives(self) -> int:
        return len(self.rows)

    @property
    def n_states(self) -> int:
        return len(self.rows[0])

    @property
    def shape(self) -> tuple[int, int]:
        return (self.n_alternatives, self.n_states)

    def row(self, i: int) -> tuple[float, ...]:
        return self.rows[i]

    def column(self, j: int) -> tuple[float, ...]:
        return tuple(row[j] for row in self.rows)

    def to_lists(self) -> list[list[float]]:
        """Return a mutable deep copy of the payoffs."""
        return [list(row) for row in self.rows]


def _as_payoff(value: object, i: int, j: int) -> float:
    # bool is a Real subclass, but True/False payoffs are almost always a bug
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidPayoffError(f"Payoff at ({i}, {j}) must be a number, got {value!r}")
    return float(value)
