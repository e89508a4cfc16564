"""Matrix page routes - editable decision matrix as an HTML form.

The page is stateless: every submit carries the full matrix, labels, rule
and lambda as form fields. The server rebuilds a workspace from them,
applies the requested structural edit, re-evaluates and renders again.
"""

import logging

from flask import Blueprint, current_app, render_template, request

from decisionmatrix.engine import format_number
from decisionmatrix.errors import DecisionMatrixError, ShapeError
from decisionmatrix.models.rules import RULE_LABELS, RuleType
from decisionmatrix.models.workspace import DecisionWorkspace

logger = logging.getLogger(__name__)

bp = Blueprint("matrix", __name__)

RULE_OPTIONS = [(rule.value, RULE_LABELS[rule]) for rule in RuleType]


def _form_values(workspace: DecisionWorkspace) -> dict:
    """Workspace as the strings shown in the form inputs."""
    return {
        "alternatives": list(workspace.alternatives),
        "states": list(workspace.states),
        "matrix": [[format_number(v) for v in row] for row in workspace.rows],
        "rule": workspace.rule_type.value,
        "lambda": format_number(workspace.hurwicz_lambda),
    }


def _read_form(form, limit: int) -> dict:
    """Collect the raw submitted values, keyed like DecisionWorkspace.to_dict().

    Raises ShapeError when the declared size exceeds limit in either direction.
    """
    try:
        n_rows = int(form.get("rows", "0"))
        n_cols = int(form.get("cols", "0"))
    except ValueError:
        n_rows = n_cols = 0
    if n_rows > limit or n_cols > limit:
        raise ShapeError(f"At most {limit} alternatives and {limit} states are supported, got {n_rows}x{n_cols}")
    return {
        "alternatives": [form.get(f"alternative-{i}", "") for i in range(n_rows)],
        "states": [form.get(f"state-{j}", "") for j in range(n_cols)],
        "matrix": [[form.get(f"cell-{i}-{j}", "") for j in range(n_cols)] for i in range(n_rows)],
        "rule": form.get("rule", ""),
        "lambda": form.get("lambda", "").strip() or None,
    }


def _apply_action(workspace: DecisionWorkspace, action: str, limit: int) -> str | None:
    """Apply a structural edit. Returns a notice for refused edits."""
    if not action:
        return None
    if action == "add_alternative":
        if workspace.n_alternatives >= limit:
            return f"At most {limit} alternatives are supported."
        workspace.add_alternative()
        return None
    if action == "add_state":
        if workspace.n_states >= limit:
            return f"At most {limit} states are supported."
        workspace.add_state()
        return None

    name, _, index = action.partition(":")
    if name in ("remove_alternative", "remove_state") and index.isdigit():
        if name == "remove_alternative":
            if not workspace.remove_alternative(int(index)):
                return "At least one alternative is required."
        elif not workspace.remove_state(int(index)):
            return "At least one state is required."
        return None

    raise ValueError(f"Unknown action: {action!r}")


def _render(values: dict, report=None, error: str | None = None, notice: str | None = None, status: int = 200):
    return (
        render_template(
            "index.html",
            values=values,
            report=report,
            error=error,
            notice=notice,
            rule_options=RULE_OPTIONS,
            hurwicz=RuleType.HURWICZ.value,
        ),
        status,
    )


@bp.route("/", methods=["GET"])
def index():
    """Show the default example matrix."""
    workspace = DecisionWorkspace.default()
    return _render(_form_values(workspace), report=workspace.evaluate())


@bp.route("/", methods=["POST"])
def update():
    """Rebuild the workspace from the form, apply an edit and re-evaluate."""
    limit = current_app.config["MAX_DIMENSION"]
    try:
        raw = _read_form(request.form, limit)
    except ShapeError as e:
        logger.warning(f"Rejected matrix form: {e}")
        return _render(_form_values(DecisionWorkspace.default()), error=str(e), status=400)

    try:
        workspace = DecisionWorkspace.from_dict(raw)
    except DecisionMatrixError as e:
        logger.warning(f"Rejected matrix form: {e}")
        shown = dict(raw, **{"lambda": raw["lambda"] or ""})
        return _render(shown, error=str(e), status=400)

    try:
        notice = _apply_action(workspace, request.form.get("action", ""), limit)
    except (IndexError, ValueError) as e:
        logger.warning(f"Rejected matrix action: {e}")
        return _render(_form_values(workspace), report=workspace.evaluate(), error=str(e), status=400)

    return _render(_form_values(workspace), report=workspace.evaluate(), notice=notice)
