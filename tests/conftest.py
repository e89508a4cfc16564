"""Shared pytest fixtures and markers for all tests."""

import pytest

from decisionmatrix.models.workspace import DEFAULT_MATRIX


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "webapp: marks webapp-specific tests"
    )
    config.addinivalue_line(
        "markers", "tui: marks Textual terminal UI tests"
    )


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep configuration env vars from the developer's shell out of tests."""
    for name in (
        "DECISIONMATRIX_DEFAULT_RULE",
        "DECISIONMATRIX_HURWICZ_LAMBDA",
        "DECISIONMATRIX_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def example_matrix():
    """Provide the 3x3 example matrix as plain lists."""
    return [list(row) for row in DEFAULT_MATRIX]


@pytest.fixture
def default_workspace():
    """Provide a fresh default workspace."""
    from decisionmatrix.models.workspace import DecisionWorkspace
    return DecisionWorkspace.default()
