"""Decision rule definitions.

The five classical rules for decisions under uncertainty form a closed set.
Each rule is a small frozen value object carrying only the parameters it
needs; only Hurwicz has one (lambda, the optimism weight).

parse_rule() is the single entry point for turning user input (enum
members, strings from a form or an API body, or rule objects) into a rule
object. Anything it cannot map raises UnsupportedRuleError.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from decisionmatrix.errors import InvalidParameterError, UnsupportedRuleError

DEFAULT_HURWICZ_LAMBDA = 0.5


class RuleType(str, Enum):
    """All supported decision rules."""

    MAXIMIN = "maximin"
    MAXIMAX = "maximax"
    LAPLACE = "laplace"
    HURWICZ = "hurwicz"
    SAVAGE = "savage"

    @property
    def label(self) -> str:
        return RULE_LABELS[self]

    @property
    def minimizes(self) -> bool:
        """True if the best alternative has the lowest score (Savage only)."""
        return self is RuleType.SAVAGE


RULE_LABELS: dict[RuleType, str] = {
    RuleType.MAXIMIN: "Maximin",
    RuleType.MAXIMAX: "Maximax",
    RuleType.LAPLACE: "Laplace",
    RuleType.HURWICZ: "Hurwicz",
    RuleType.SAVAGE: "Savage (Minimax-Regret)",
}


@dataclass(frozen=True)
class Maximin:
    """Pessimist: pick the alternative with the best worst case."""

    rule_type: ClassVar[RuleType] = RuleType.MAXIMIN


@dataclass(frozen=True)
class Maximax:
    """Optimist: pick the alternative with the best best case."""

    rule_type: ClassVar[RuleType] = RuleType.MAXIMAX


@dataclass(frozen=True)
class Laplace:
    """Treat all states as equally likely and maximize the mean payoff."""

    rule_type: ClassVar[RuleType] = RuleType.LAPLACE


@dataclass(frozen=True)
class Hurwicz:
    """Blend best and worst case: lam * max + (1 - lam) * min.

    lam is not clamped to [0, 1]; out-of-range values give consistent if
    unusual results. Only non-finite values are rejected.
    """

    rule_type: ClassVar[RuleType] = RuleType.HURWICZ

    lam: float = DEFAULT_HURWICZ_LAMBDA

    def __post_init__(self) -> None:
        """Validate lambda is a finite real number."""
        object.__setattr__(self, "lam", coerce_lambda(self.lam))


@dataclass(frozen=True)
class Savage:
    """Minimax regret: minimize the largest shortfall against each state's best."""

    rule_type: ClassVar[RuleType] = RuleType.SAVAGE


Rule = Union[Maximin, Maximax, Laplace, Hurwicz, Savage]

RULE_CLASSES: dict[RuleType, type] = {
    RuleType.MAXIMIN: Maximin,
    RuleType.MAXIMAX: Maximax,
    RuleType.LAPLACE: Laplace,
    RuleType.HURWICZ: Hurwicz,
    RuleType.SAVAGE: Savage,
}


def coerce_lambda(value: object) -> float:
    """Convert a Hurwicz lambda to float, rejecting NaN, infinities and non-numbers."""
    if isinstance(value, bool):
        raise InvalidParameterError(f"Hurwicz lambda must be a number, got {value!r}")
    try:
        lam = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise InvalidParameterError(f"Hurwicz lambda must be a number, got {value!r}") from None
    if not math.isfinite(lam):
        raise InvalidParameterError(f"Hurwicz lambda must be finite, got {lam}")
    return lam


def parse_rule_type(value: object) -> RuleType:
    """Map an enum member or a case-insensitive rule name to a RuleType."""
    if isinstance(value, RuleType):
        return value
    if isinstance(value, str):
        try:
            return RuleType(value.strip().lower())
        except ValueError:
            pass
    raise UnsupportedRuleError(
        f"Unsupported decision rule: {value!r}. "
        f"Expected one of: {', '.join(r.value for r in RuleType)}"
    )


def parse_rule(value: object, lam: float | None = None) -> Rule:
    """Build a rule object from user input.

    Args:
        value: RuleType, rule name, or an existing rule object
        lam: Hurwicz lambda; overrides the lambda of a Hurwicz object.
            Ignored for every other rule.

    Returns:
        Frozen rule object

    Raises:
        UnsupportedRuleError: value does not name one of the five rules
        InvalidParameterError: rule is Hurwicz and lam is not finite
    """
    if isinstance(value, (Maximin, Maximax, Laplace, Savage)):
        return value
    if isinstance(value, Hurwicz):
        return value if lam is None else Hurwicz(lam=lam)

    rule_type = parse_rule_type(value)
    if rule_type is RuleType.HURWICZ:
        return Hurwicz(lam=DEFAULT_HURWICZ_LAMBDA if lam is None else lam)
    return RULE_CLASSES[rule_type]()
