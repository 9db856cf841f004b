from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from storytram import __version__
from storytram.api.main import app


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "version": __version__}


def test_story_types(client):
    data = client.get("/api/story-frames/types").json()
    names = [t["name"] for t in data["story_types"]]
    assert sorted(names) == ["Adventure", "Brave", "Emotional", "Friendship", "Funny"]


def test_generate_is_seeded(client):
    body = {"story_type": "Brave", "seed": 7}
    first = client.post("/api/story-frames", json=body)
    second = client.post("/api/story-frames", json=body)
    assert first.status_code == 200
    data = first.json()
    assert data == second.json()
    assert 16 <= data["scene_count"] <= 20
    assert len(data["scenes"]) == data["scene_count"]
    assert data["document"].startswith("STORY TITLE\n" + data["title"])
    assert data["contract"]["time_flow"] == "continuous"


def test_camel_case_request_keys(client):
    data = client.post("/api/story-frames", json={"storyType": "Brave", "sceneCount": 99, "seed": 1}).json()
    assert data["story_type"] == "Brave"
    assert 16 <= data["scene_count"] <= 20

    snake = client.post("/api/story-frames", json={"story_type": "Brave", "seed": 1}).json()
    assert snake["document"] == data["document"]


def test_unknown_story_type_is_a_bad_request(client):
    response = client.post("/api/story-frames", json={"story_type": "Spooky"})
    assert response.status_code == 400
    assert "Spooky" in response.json()["detail"]


def test_warnings_endpoint(client):
    client.post("/api/story-frames", json={"story_type": "Spooky"})
    data = client.get("/api/story-frames/warnings", params={"limit": 5}).json()
    assert data["stats"]["by_level"]["warning"] >= 1
    assert data["warnings"][0]["source"] == "api"
