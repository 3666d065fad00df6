"""
Test the playground API end to end.
"""

import pytest
from fastapi.testclient import TestClient

from playground import app


@pytest.fixture
def client():
    return TestClient(app)


def test_property_values_endpoint(client, people_shacl, people_data, alice):
    response = client.post("/api/property-values", json={
        "shapes": people_shacl,
        "data": people_data,
        "focus_node": str(alice),
    })
    body = response.json()

    assert response.status_code == 200
    assert body["ok"] is True
    assert body["focus_node"] == str(alice)
    assert str(alice) in body["subjects"]
    assert body["report"]["summary"]["properties"] == 7
    assert body["report"]["rows"][0]["label"] == "name"
    assert body["warnings"] == []


def test_unknown_focus_node_lists_subjects_only(client, people_shacl, people_data):
    response = client.post("/api/property-values", json={
        "shapes": people_shacl,
        "data": people_data,
        "focus_node": "http://example.org/people#nobody",
    })
    body = response.json()

    assert body["ok"] is True
    assert body["focus_node"] is None
    assert len(body["subjects"]) == 3


def test_parse_errors_are_reported_as_warnings(client, people_data):
    response = client.post("/api/property-values", json={
        "shapes": "not turtle at all .",
        "data": people_data,
        "focus_node": "http://example.org/people#bob",
    })
    body = response.json()

    assert body["ok"] is True
    assert any("Could not parse shapes" in w for w in body["warnings"])
    assert {row["type"] for row in body["report"]["rows"]} == {"data"}


def test_strict_paths_reports_error(client):
    shapes = """\
    @prefix sh: <http://www.w3.org/ns/shacl#> .
    @prefix ex: <http://example.org/test#> .
    ex:S sh:targetNode ex:a ; sh:property [ sh:path [ sh:inversePath ex:p ] ] .
    """
    data = "@prefix ex: <http://example.org/test#> . ex:a ex:q ex:b ."

    lenient = client.post("/api/property-values", json={
        "shapes": shapes, "data": data, "focus_node": "http://example.org/test#a",
    }).json()
    strict = client.post("/api/property-values", json={
        "shapes": shapes, "data": data, "focus_node": "http://example.org/test#a",
        "strict_paths": True,
    }).json()

    assert lenient["ok"] is True
    assert any("Complex sh:path" in w for w in lenient["warnings"])
    assert strict["ok"] is False
    assert strict["error"].startswith("UnsupportedPathError")


def test_examples_endpoint(client):
    body = client.get("/api/examples").json()
    assert [e["name"] for e in body["examples"]] == ["People"]
    assert "sh:targetClass" in body["examples"][0]["shapes"]


def test_index_page(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "shapeview playground" in response.text
