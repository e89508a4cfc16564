"""Decision matrix evaluation under uncertainty.

Evaluate a payoff matrix (alternatives x states of nature) with one of the
classical decision rules and get back per-alternative scores, derivations,
and the recommended alternative.

Usage:
    from decisionmatrix import evaluate

    result = evaluate([[50, 10, 20], [30, 40, 10], [20, 60, 70]], "savage")
    result.best_index  # 2
"""

from decisionmatrix.engine import EvaluationResult, evaluate, format_score
from decisionmatrix.errors import (
    DecisionMatrixError,
    InvalidParameterError,
    InvalidPayoffError,
    ShapeError,
    UnsupportedRuleError,
)
from decisionmatrix.models import Hurwicz, Laplace, Maximax, Maximin, PayoffMatrix, RuleType, Savage

__all__ = [
    "evaluate",
    "format_score",
    "EvaluationResult",
    "PayoffMatrix",
    "RuleType",
    "Maximin",
    "Maximax",
    "Laplace",
    "Hurwicz",
    "Savage",
    "DecisionMatrixError",
    "ShapeError",
    "UnsupportedRuleError",
    "InvalidParameterError",
    "InvalidPayoffError",
]
