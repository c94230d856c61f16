"""Tests for the graceful-degradation routes under /api/ai and /api/generate."""

from unittest.mock import patch

import requests

from cartoon_creator.core.config import settings
from cartoon_creator.services.story_templates import MOCK_SCENES, MOCK_STORY
from helpers import mock_response


class TestSimpleStory:
    def test_requires_prompt(self, client):
        resp = client.post("/api/ai/story", json={})

        assert resp.status_code == 400

    def test_template_story_without_token(self, client):
        resp = client.post("/api/ai/story", json={"prompt": "A dragon learns to fly"})

        assert resp.status_code == 200
        story = resp.json()["story"]
        assert story.startswith("A dragon learns to fly")
        for n in range(1, 5):
            assert f"Scene {n}:" in story

    def test_huggingface_story(self, client, monkeypatch):
        monkeypatch.setattr(settings, "HUGGINGFACE_API_TOKEN", "hf_test")
        with patch("cartoon_creator.services.story_generation.requests.post") as post:
            post.return_value = mock_response(200, json_data=[{"generated_text": "A tale."}])
            resp = client.post("/api/ai/story", json={"prompt": "a dragon"})

        assert resp.json()["story"] == "A tale."

    def test_huggingface_error_uses_template(self, client, monkeypatch):
        monkeypatch.setattr(settings, "HUGGINGFACE_API_TOKEN", "hf_test")
        with patch("cartoon_creator.services.story_generation.requests.post") as post:
            post.return_value = mock_response(500, text="boom")
            resp = client.post("/api/ai/story", json={"prompt": "a dragon"})

        assert resp.status_code == 200
        assert "Scene 4:" in resp.json()["story"]


class TestSceneSuggestion:
    def test_picsum_without_unsplash_key(self, client):
        resp = client.post("/api/ai/scene", json={"prompt": "a walk in the forest", "sceneNumber": 2})

        assert resp.status_code == 200
        body = resp.json()
        assert body["description"] == "Scene 2: a walk in the forest..."
        assert body["backgroundUrl"].startswith("https://picsum.photos/seed/")
        assert body["suggestedCharacters"] == ["Chloe the Cat", "Danny the Dog", "Polly the Parrot"]

    def test_unsplash_query_from_keywords(self, client, monkeypatch):
        monkeypatch.setattr(settings, "UNSPLASH_ACCESS_KEY", "unsplash_test")
        with patch("cartoon_creator.services.scene_suggestion.requests.get") as get:
            get.return_value = mock_response(200, json_data={"urls": {"regular": "https://unsplash/img.jpg"}})
            resp = client.post("/api/ai/scene", json={"prompt": "day at the beach"})

        assert resp.json()["backgroundUrl"] == "https://unsplash/img.jpg"
        assert get.call_args.kwargs["params"]["query"] == "cartoon beach"

    def test_unsplash_failure_falls_back_to_picsum(self, client, monkeypatch):
        monkeypatch.setattr(settings, "UNSPLASH_ACCESS_KEY", "unsplash_test")
        with patch("cartoon_creator.services.scene_suggestion.requests.get") as get:
            get.side_effect = requests.ConnectionError("offline")
            resp = client.post("/api/ai/scene", json={})

        body = resp.json()
        assert body["backgroundUrl"].startswith("https://picsum.photos/")
        assert body["description"].startswith("Scene 1: cartoon scene")

    def test_unexpected_error_returns_mock_scene(self, client):
        with patch("cartoon_creator.services.scene_suggestion.scene_keywords", side_effect=RuntimeError):
            resp = client.post("/api/ai/scene", json={"sceneNumber": 3})

        body = resp.json()
        assert body["description"] == "Scene 3: A beautiful cartoon scene"
        assert body["suggestedCharacters"] == ["Hero", "Sidekick", "Villain"]


class TestCharacterAvatar:
    def test_avatar_payload(self, client):
        resp = client.post(
            "/api/ai/character",
            json={"characterName": "Bolt", "description": "a gold robot"},
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["style"] == "bottts"
        assert body["characterType"] == "cartoon"
        assert body["params"]["color"] == "fbbf24"
        assert body["imageUrl"].startswith(f"{settings.DICEBEAR_BASE_URL}/bottts/svg?")

    def test_deterministic(self, client):
        payload = {"characterName": "Rosie", "description": "a cute rabbit"}

        first = client.post("/api/ai/character", json=payload).json()
        second = client.post("/api/ai/character", json=payload).json()

        assert first["imageUrl"] == second["imageUrl"]

    def test_failure_falls_back(self, client):
        with patch("cartoon_creator.services.avatar.build_avatar", side_effect=ValueError("bad")):
            resp = client.post("/api/ai/character", json={"characterName": "Rosie"})

        body = resp.json()
        assert body["style"] == "avataaars"
        assert "seed=Rosie" in body["imageUrl"]


class TestMockRoutes:
    def test_mock_story(self, client):
        assert client.post("/api/generate/story").json()["story"] == MOCK_STORY

    def test_mock_scene_wraps_around(self, client):
        resp = client.post("/api/generate/scene", json={"sceneNumber": 6})

        body = resp.json()
        assert body["description"] == MOCK_SCENES[1]["description"]
        assert body["backgroundUrl"] == MOCK_SCENES[1]["background_url"]
