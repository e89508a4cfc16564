"""Pytest fixtures for webapp tests."""

import pytest

from decisionmatrix.webapp import create_app
from decisionmatrix.webapp.config import TestConfig


@pytest.fixture
def app():
    """Create test application."""
    app = create_app(TestConfig)
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def matrix_form():
    """Build the form fields the matrix page submits."""

    def build(workspace: dict, action: str = "") -> dict:
        form = {
            "rows": str(len(workspace["alternatives"])),
            "cols": str(len(workspace["states"])),
            "rule": workspace["rule"],
            "lambda": str(workspace.get("lambda") if workspace.get("lambda") is not None else ""),
            "action": action,
        }
        for i, name in enumerate(workspace["alternatives"]):
            form[f"alternative-{i}"] = name
        for j, name in enumerate(workspace["states"]):
            form[f"state-{j}"] = name
        for i, row in enumerate(workspace["matrix"]):
            for j, value in enumerate(row):
                form[f"cell-{i}-{j}"] = str(value)
        return form

    return build


@pytest.fixture
def example_workspace():
    """The default workspace as form-ready data."""
    return {
        "alternatives": ["Alternative A", "Alternative B", "Alternative C"],
        "states": ["State 1", "State 2", "State 3"],
        "matrix": [[50, 10, 20], [30, 40, 10], [20, 60, 70]],
        "rule": "maximin",
        "lambda": 0.5,
    }
