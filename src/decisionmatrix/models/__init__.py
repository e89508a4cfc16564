"""Decision matrix models.

This module exports the core data structures: the immutable payoff matrix,
the decision rules, and the editable workspace used by the front ends.
"""

from .matrix import PayoffMatrix
from .rules import (
    DEFAULT_HURWICZ_LAMBDA,
    RULE_CLASSES,
    RULE_LABELS,
    Hurwicz,
    Laplace,
    Maximax,
    Maximin,
    Rule,
    RuleType,
    Savage,
    coerce_lambda,
    parse_rule,
    parse_rule_type,
)

__all__ = [
    # Matrix
    "PayoffMatrix",
    # Rules
    "RuleType",
    "Rule",
    "Maximin",
    "Maximax",
    "Laplace",
    "Hurwicz",
    "Savage",
    "RULE_CLASSES",
    "RULE_LABELS",
    "DEFAULT_HURWICZ_LAMBDA",
    # Rule functions
    "coerce_lambda",
    "parse_rule",
    "parse_rule_type",
]
