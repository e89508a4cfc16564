"""Tests for the JSON API routes."""

import json

import pytest

pytestmark = pytest.mark.webapp

EXAMPLE = [[50, 10, 20], [30, 40, 10], [20, 60, 70]]


def test_rules(client):
    response = client.get("/api/rules")
    assert response.status_code == 200
    assert response.get_json() == [
        {"value": "maximin", "label": "Maximin"},
        {"value": "maximax", "label": "Maximax"},
        {"value": "laplace", "label": "Laplace"},
        {"value": "hurwicz", "label": "Hurwicz"},
        {"value": "savage", "label": "Savage (Minimax-Regret)"},
    ]


@pytest.mark.parametrize(
    "rule,scores,best",
    [
        ("maximin", [10, 10, 20], 2),
        ("maximax", [50, 40, 70], 2),
        ("hurwicz", [30, 25, 45], 2),
        ("savage", [50, 60, 30], 2),
    ],
)
def test_evaluate_example(client, rule, scores, best):
    response = client.post("/api/evaluate", json={"matrix": EXAMPLE, "rule": rule})
    assert response.status_code == 200

    data = response.get_json()
    assert data["rule"] == rule
    assert data["scores"] == scores
    assert data["best_index"] == best
    assert len(data["derivations"]) == 3


def test_evaluate_laplace_display_scores(client):
    data = client.post("/api/evaluate", json={"matrix": EXAMPLE, "rule": "laplace"}).get_json()
    assert data["display_scores"] == ["26.67", "26.67", "50.00"]
    assert data["scores"][0] == pytest.approx(80 / 3)
    assert data["lambda"] is None


def test_evaluate_hurwicz_lambda(client):
    data = client.post(
        "/api/evaluate", json={"matrix": [[0, 10], [4, 6]], "rule": "hurwicz", "lambda": 0.8}
    ).get_json()
    assert data["lambda"] == 0.8
    assert data["scores"] == [8, pytest.approx(5.6)]
    assert data["best_index"] == 0
    assert data["derivations"][0] == "λ·max + (1-λ)·min = 0.80·10 + 0.20·0"


def test_ragged_matrix(client):
    response = client.post("/api/evaluate", json={"matrix": [[1, 2], [3]], "rule": "maximin"})
    assert response.status_code == 400
    assert response.get_json()["error"] == "ShapeError"


def test_empty_matrix(client):
    response = client.post("/api/evaluate", json={"matrix": [], "rule": "maximin"})
    assert response.status_code == 400
    assert response.get_json()["error"] == "ShapeError"


def test_unknown_rule(client):
    response = client.post("/api/evaluate", json={"matrix": EXAMPLE, "rule": "minimax"})
    assert response.status_code == 400
    assert response.get_json()["error"] == "UnsupportedRuleError"


def test_non_finite_lambda(client):
    response = client.post(
        "/api/evaluate",
        data='{"matrix": [[1, 2]], "rule": "hurwicz", "lambda": Infinity}',
        content_type="application/json",
    )
    assert response.status_code == 400
    assert response.get_json()["error"] == "InvalidParameterError"


def test_schema_violation(client):
    response = client.post("/api/evaluate", json={"matrix": EXAMPLE})
    assert response.status_code == 400

    data = response.get_json()
    assert data["error"] == "ValidationError"
    assert any(detail["loc"] == ["rule"] for detail in data["details"])


def test_extra_fields_rejected(client):
    response = client.post("/api/evaluate", json={"matrix": EXAMPLE, "rule": "maximin", "weights": [1]})
    assert response.status_code == 400
    assert response.get_json()["error"] == "ValidationError"


def test_non_json_body(client):
    response = client.post("/api/evaluate", data="matrix=1", content_type="text/plain")
    assert response.status_code == 400
    assert response.get_json()["error"] == "BadRequest"


@pytest.mark.parametrize(
    "body",
    [
        {"matrix": [[True, False]], "rule": "maximin"},
        {"matrix": [["5", 2]], "rule": "maximin"},
        {"matrix": [[1, 2]], "rule": "hurwicz", "lambda": True},
        {"matrix": [[1, 2]], "rule": "hurwicz", "lambda": "0.5"},
    ],
)
def test_non_numeric_json_values_rejected(client, body):
    """Booleans and numeric strings are refused like the engine refuses them."""
    response = client.post("/api/evaluate", json=body)
    assert response.status_code == 400
    assert response.get_json()["error"] == "ValidationError"


def test_integer_payoffs_accepted(client):
    response = client.post("/api/evaluate", json={"matrix": [[1, 2.5]], "rule": "maximax", "lambda": 1})
    assert response.status_code == 200
    assert response.get_json()["scores"] == [2.5]


def test_matrix_too_large(client, app):
    limit = app.config["MAX_DIMENSION"]
    response = client.post("/api/evaluate", json={"matrix": [[1]] * (limit + 1), "rule": "maximin"})
    assert response.status_code == 400
    assert response.get_json()["error"] == "ShapeError"

    response = client.post("/api/evaluate", json={"matrix": [[1] * (limit + 1)], "rule": "maximin"})
    assert response.status_code == 400


def _reject_constant(name):
    raise ValueError(f"non-standard JSON constant {name}")


def test_large_payoffs_give_standard_json(client):
    response = client.post("/api/evaluate", json={"matrix": [[1e308, 1e308]], "rule": "laplace"})
    assert response.status_code == 200

    data = json.loads(response.get_data(as_text=True), parse_constant=_reject_constant)
    assert data["scores"] == [1e308]
    assert data["derivations"] == ["(1e+308 + 1e+308) / 2"]


def test_overflowing_regret_rejected(client):
    response = client.post("/api/evaluate", json={"matrix": [[1e308], [-1e308]], "rule": "savage"})
    assert response.status_code == 400
    assert response.get_json()["error"] == "InvalidPayoffError"
