"""Tests for the HTTP API."""
import pytest
from fastapi.testclient import TestClient

from envelope.api.main import create_app

from conftest import door, rectangle_definition


@pytest.fixture(scope="module")
def client():
    return TestClient(create_app())


def _body(definition=None, height=2500):
    definition = definition or rectangle_definition()
    return {"perimeter": definition.model_dump(mode="json"), "storey": {"height": height}}


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_assemblies(client):
    response = client.get("/api/assemblies")
    assert response.status_code == 200
    ids = {(a["kind"], a["id"]) for a in response.json()}
    assert ("wall", "modules") in ids
    assert ("ring-beam", "double") in ids


def test_construct_perimeter(client):
    response = client.post("/api/perimeter/construct", json=_body())
    assert response.status_code == 200
    data = response.json()
    assert data["wall_count"] == 4
    assert data["error_count"] == 0
    assert data["model"]["stats"]["by_type"]["ring-beam"] == 8
    assert data["volumes"]["material_straw"] > 0


def test_construct_single_wall(client):
    definition = rectangle_definition(openings={1: [door(2000)]})
    response = client.post("/api/perimeter/walls/1/construct", json=_body(definition))
    assert response.status_code == 200
    data = response.json()
    assert data["wall_count"] == 1
    assert data["model"]["stats"]["by_type"]["header"] == 1


def test_counter_clockwise_boundary_is_422(client):
    body = _body()
    body["perimeter"]["boundary"].reverse()
    response = client.post("/api/perimeter/construct", json=body)
    assert response.status_code == 422
    assert "clockwise" in response.json()["detail"]


def test_wall_index_out_of_range_is_422(client):
    response = client.post("/api/perimeter/walls/9/construct", json=_body())
    assert response.status_code == 422


def test_negative_storey_height_is_422(client):
    response = client.post("/api/perimeter/construct", json=_body(height=-1))
    assert response.status_code == 422
