"""Tests for the matrix page routes."""

import pytest

pytestmark = pytest.mark.webapp


def test_index_loads(client):
    """Default example matrix renders with its recommendation."""
    response = client.get("/")
    assert response.status_code == 200

    html = response.get_data(as_text=True)
    assert "Decision Matrix" in html
    assert 'name="cell-2-2" value="70"' in html
    assert "min(50, 10, 20)" in html
    assert "← recommended" in html
    assert "Recommended (Maximin): <strong>Alternative C</strong>" in html


def test_index_lists_all_rules(client):
    html = client.get("/").get_data(as_text=True)
    for label in ("Maximin", "Maximax", "Laplace", "Hurwicz", "Savage (Minimax-Regret)"):
        assert label in html


def test_post_reevaluates_with_new_rule(client, matrix_form, example_workspace):
    example_workspace["rule"] = "savage"
    response = client.post("/", data=matrix_form(example_workspace))
    assert response.status_code == 200

    html = response.get_data(as_text=True)
    assert "max(Regret: (maxZ1-50=50-50=0), (maxZ2-10=60-10=50), (maxZ3-20=70-20=50))" in html
    assert "Recommended (Savage (Minimax-Regret)): <strong>Alternative C</strong>" in html


def test_post_hurwicz_shows_lambda_input(client, matrix_form, example_workspace):
    example_workspace["rule"] = "hurwicz"
    example_workspace["lambda"] = 0.25
    html = client.post("/", data=matrix_form(example_workspace)).get_data(as_text=True)
    assert 'name="lambda" value="0.25" size="6"' in html
    assert "0.25·70 + 0.75·20" in html


def test_edited_cell_changes_recommendation(client, matrix_form, example_workspace):
    example_workspace["matrix"][0] = [90, 80, 85]
    html = client.post("/", data=matrix_form(example_workspace)).get_data(as_text=True)
    assert "<strong>Alternative A</strong>" in html


def test_renamed_labels_are_kept(client, matrix_form, example_workspace):
    example_workspace["alternatives"][2] = "Open new plant"
    html = client.post("/", data=matrix_form(example_workspace)).get_data(as_text=True)
    assert "<strong>Open new plant</strong>" in html


def test_add_state(client, matrix_form, example_workspace):
    html = client.post("/", data=matrix_form(example_workspace, "add_state")).get_data(as_text=True)
    assert 'name="state-3" value="State 4"' in html
    assert 'name="cell-2-3" value="0"' in html
    assert 'name="cols" value="4"' in html


def test_add_alternative(client, matrix_form, example_workspace):
    html = client.post("/", data=matrix_form(example_workspace, "add_alternative")).get_data(as_text=True)
    assert 'name="alternative-3" value="Alternative D"' in html
    assert 'name="rows" value="4"' in html


def test_remove_alternative(client, matrix_form, example_workspace):
    html = client.post("/", data=matrix_form(example_workspace, "remove_alternative:0")).get_data(as_text=True)
    assert "Alternative A" not in html
    assert 'name="rows" value="2"' in html


def test_remove_state(client, matrix_form, example_workspace):
    html = client.post("/", data=matrix_form(example_workspace, "remove_state:2")).get_data(as_text=True)
    assert "State 3" not in html
    assert "min(50, 10)" in html


def test_remove_last_alternative_is_refused(client, matrix_form):
    workspace = {"alternatives": ["Only"], "states": ["S"], "matrix": [[1]], "rule": "maximin", "lambda": None}
    response = client.post("/", data=matrix_form(workspace, "remove_alternative:0"))
    assert response.status_code == 200
    assert "At least one alternative is required." in response.get_data(as_text=True)


def test_invalid_cell_keeps_form_and_hides_results(client, matrix_form, example_workspace):
    example_workspace["matrix"][1][1] = "forty"
    response = client.post("/", data=matrix_form(example_workspace))
    assert response.status_code == 400

    html = response.get_data(as_text=True)
    assert "Payoff must be a number" in html
    assert 'name="cell-1-1" value="forty"' in html
    assert "← recommended" not in html
    assert 'id="summary"' not in html


def test_invalid_lambda(client, matrix_form, example_workspace):
    example_workspace["rule"] = "hurwicz"
    example_workspace["lambda"] = "inf"
    response = client.post("/", data=matrix_form(example_workspace))
    assert response.status_code == 400
    assert "Hurwicz lambda must be finite" in response.get_data(as_text=True)


def test_unknown_rule(client, matrix_form, example_workspace):
    example_workspace["rule"] = "coinflip"
    response = client.post("/", data=matrix_form(example_workspace))
    assert response.status_code == 400
    assert "Unsupported decision rule" in response.get_data(as_text=True)


def test_unknown_action(client, matrix_form, example_workspace):
    response = client.post("/", data=matrix_form(example_workspace, "explode"))
    assert response.status_code == 400
    assert "Unknown action" in response.get_data(as_text=True)


def test_out_of_range_remove(client, matrix_form, example_workspace):
    response = client.post("/", data=matrix_form(example_workspace, "remove_state:9"))
    assert response.status_code == 400


def test_missing_dimensions(client):
    response = client.post("/", data={"rule": "maximin"})
    assert response.status_code == 400


def test_oversized_dimensions_rejected(client, app):
    limit = app.config["MAX_DIMENSION"]
    response = client.post("/", data={"rows": "2000", "cols": "2000", "rule": "maximin"})
    assert response.status_code == 400

    html = response.get_data(as_text=True)
    assert f"At most {limit} alternatives and {limit} states are supported" in html
    assert 'id="summary"' not in html


def test_add_beyond_limit_is_refused(client, app, matrix_form):
    limit = app.config["MAX_DIMENSION"]
    workspace = {
        "alternatives": [f"Option {i}" for i in range(limit)],
        "states": ["S"],
        "matrix": [[i] for i in range(limit)],
        "rule": "maximax",
        "lambda": None,
    }
    response = client.post("/", data=matrix_form(workspace, "add_alternative"))
    assert response.status_code == 200

    html = response.get_data(as_text=True)
    assert f"At most {limit} alternatives are supported." in html
    assert f'name="rows" value="{limit}"' in html


def test_overflowing_matrix_rejected(client, matrix_form):
    workspace = {
        "alternatives": ["Up", "Down"],
        "states": ["S"],
        "matrix": [["1e308"], ["-1e308"]],
        "rule": "savage",
        "lambda": None,
    }
    response = client.post("/", data=matrix_form(workspace))
    assert response.status_code == 400
    assert "too large to score" in response.get_data(as_text=True)
