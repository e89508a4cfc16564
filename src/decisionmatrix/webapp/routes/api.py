"""JSON API routes - stateless evaluation of a posted matrix."""

import logging

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from decisionmatrix.engine import evaluate
from decisionmatrix.errors import DecisionMatrixError
from decisionmatrix.models.rules import RULE_LABELS, Hurwicz, RuleType

from ..schemas import EvaluationRequest

logger = logging.getLogger(__name__)

bp = Blueprint("api", __name__, url_prefix="/api")


def _error(error: str, message: str, status: int = 400, **extra):
    return jsonify({"error": error, "message": message, **extra}), status


@bp.route("/rules")
def rules():
    """List the supported decision rules."""
    return jsonify([{"value": rule.value, "label": RULE_LABELS[rule]} for rule in RuleType])


@bp.route("/evaluate", methods=["POST"])
def evaluate_matrix():
    """Evaluate a matrix under one rule."""
    data = request.get_json(silent=True)
    if data is None:
        return _error("BadRequest", "Request body must be a JSON object")

    try:
        body = EvaluationRequest.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Rejected evaluation request: {e.error_count()} validation errors")
        return _error(
            "ValidationError",
            "Request body does not match the expected schema",
            details=e.errors(include_url=False, include_context=False),
        )

    limit = current_app.config["MAX_DIMENSION"]
    if len(body.matrix) > limit or any(len(row) > limit for row in body.matrix):
        logger.warning("Rejected evaluation request: matrix too large")
        return _error("ShapeError", f"At most {limit} alternatives and {limit} states are supported")

    try:
        result = evaluate(body.matrix, body.rule, body.lam)
    except DecisionMatrixError as e:
        logger.warning(f"Rejected evaluation request: {e}")
        return _error(type(e).__name__, str(e))

    return jsonify(
        {
            "rule": result.rule_type.value,
            "lambda": result.rule.lam if isinstance(result.rule, Hurwicz) else None,
            "scores": list(result.scores),
            "display_scores": list(result.display_scores),
            "derivations": list(result.derivations),
            "best_index": result.best_index,
        }
    )
