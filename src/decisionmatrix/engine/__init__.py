"""Decision rule engine.

This module exports the pure evaluation function and its helpers.
"""

from .evaluation import (
    EVALUATORS,
    EvaluationResult,
    RuleEvaluator,
    column_maxima,
    evaluate,
    regret_matrix,
    select_best,
)
from .formatting import format_lambda, format_number, format_score

__all__ = [
    # Evaluation
    "EvaluationResult",
    "RuleEvaluator",
    "EVALUATORS",
    "evaluate",
    # Helpers
    "column_maxima",
    "regret_matrix",
    "select_best",
    # Formatting
    "format_lambda",
    "format_number",
    "format_score",
]
