"""Number rendering for derivations and result display.

Scores are always computed at full precision; rounding happens only here,
when a score is turned into text for a table cell.
"""

import math

from decisionmatrix.models.rules import RuleType

# Rules whose scores are averages and get a fixed two-decimal display
TWO_DECIMAL_RULES = frozenset({RuleType.LAPLACE, RuleType.HURWICZ})

# Integral floats at or above this magnitude print in exponent form
INTEGER_DISPLAY_LIMIT = 1e16


def format_number(value: float) -> str:
    """Render a payoff literal the way a user typed it.

    Integral values drop the decimal point (50.0 -> "50"); everything else,
    including integral values too large to print exactly, uses the shortest
    round-trip repr (2.5 -> "2.5", 1e308 -> "1e+308").
    """
    if float(value).is_integer() and abs(value) < INTEGER_DISPLAY_LIMIT:
        return str(int(value))
    return repr(float(value))


def format_score(score: float, rule_type: RuleType) -> str:
    """Render a score for display.

    Laplace and Hurwicz scores get exactly two decimals; the others are
    raw numbers.
    """
    if rule_type in TWO_DECIMAL_RULES and math.isfinite(score):
        return f"{score:.2f}"
    return format_number(score)


def format_lambda(lam: float) -> str:
    """Render a Hurwicz weight with two decimals."""
    return f"{lam:.2f}"
