"""Error types raised by the decision matrix engine and workspace.

Every error derives from DecisionMatrixError, which is itself a ValueError,
so callers that only care about "bad input" can catch ValueError.

- ShapeError: matrix is empty or ragged
- UnsupportedRuleError: rule is not one of the five known rules
- InvalidParameterError: Hurwicz lambda is not a finite number
- InvalidPayoffError: a payoff cell is not a finite number, or a score overflows
"""


class DecisionMatrixError(ValueError):
    """Base class for all decision matrix input errors."""


class ShapeError(DecisionMatrixError):
    """Matrix has no rows, no columns, or rows of unequal length."""


class UnsupportedRuleError(DecisionMatrixError):
    """Rule identifier is not a recognized decision rule."""


class InvalidParameterError(DecisionMatrixError):
    """Rule parameter (Hurwicz lambda) is not a finite number."""


class InvalidPayoffError(DecisionMatrixError):
    """Payoff value is not a finite number, or payoffs are too large to score."""
