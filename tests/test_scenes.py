import base64
from unittest.mock import patch

import pytest

from cartoon_creator import models
from cartoon_creator.core.config import settings
from helpers import mock_response


def test_scene_number_defaults_to_next(client, project, scene):
    resp = client.post("/api/scenes/", json={"project_id": project.id, "description": "Second"})

    assert resp.status_code == 201
    body = resp.json()
    assert body["scene_number"] == 2
    assert body["duration"] == 5


def test_list_ordered_by_scene_number(client, project):
    for number in (3, 1, 2):
        client.post("/api/scenes/", json={"project_id": project.id, "scene_number": number})

    numbers = [s["scene_number"] for s in client.get(f"/api/scenes/project/{project.id}").json()]

    assert numbers == [1, 2, 3]


def test_update_and_get(client, scene):
    resp = client.patch(f"/api/scenes/{scene.id}", json={"duration": 8, "description": "Changed"})

    assert resp.status_code == 200
    fetched = client.get(f"/api/scenes/{scene.id}").json()
    assert fetched["duration"] == 8
    assert fetched["description"] == "Changed"


def test_duration_must_be_positive(client, scene):
    assert client.patch(f"/api/scenes/{scene.id}", json={"duration": 0}).status_code == 422


@pytest.mark.parametrize("field", ["duration", "scene_number", "animations"])
def test_null_for_required_column_is_422(client, scene, field):
    resp = client.patch(f"/api/scenes/{scene.id}", json={field: None})

    assert resp.status_code == 422
    assert client.get(f"/api/scenes/{scene.id}").json()["duration"] == 5


def test_null_clears_optional_column(client, scene):
    resp = client.patch(f"/api/scenes/{scene.id}", json={"description": None})

    assert resp.status_code == 200
    assert resp.json()["description"] is None


def test_delete_removes_placements(client, db_session, scene, character):
    db_session.add(models.SceneCharacter(scene_id=scene.id, character_id=character.id, position_x=40, position_y=50))
    db_session.commit()

    assert client.delete(f"/api/scenes/{scene.id}").status_code == 204

    db_session.expire_all()
    assert db_session.query(models.SceneCharacter).count() == 0
    assert db_session.query(models.Character).count() == 1


def test_duplicate(client, scene):
    resp = client.post(f"/api/scenes/{scene.id}/duplicate")

    assert resp.status_code == 201
    copy = resp.json()
    assert copy["scene_number"] == 2
    assert copy["description"] == "Benny wakes up (Copy)"
    assert copy["background_image_url"] == scene.background_image_url
    assert copy["duration"] == scene.duration


class TestPlacements:
    def test_add_with_defaults(self, client, scene, character):
        resp = client.post(f"/api/scenes/{scene.id}/characters", json={"character_id": character.id})

        assert resp.status_code == 201
        placement = resp.json()
        assert 30 <= placement["position_x"] < 70
        assert placement["position_y"] == 50
        assert placement["expression"] == "happy"
        assert placement["character"]["name"] == "Benny"

        listed = client.get(f"/api/scenes/project/{scene.project_id}").json()
        assert len(listed[0]["scene_characters"]) == 1

    def test_character_from_other_project_rejected(self, client, db_session, scene):
        other = models.Project(title="Other")
        db_session.add(other)
        db_session.commit()
        stranger = models.Character(project_id=other.id, name="Stranger")
        db_session.add(stranger)
        db_session.commit()

        resp = client.post(f"/api/scenes/{scene.id}/characters", json={"character_id": stranger.id})

        assert resp.status_code == 400

    def test_update_and_remove(self, client, scene, character):
        placement = client.post(
            f"/api/scenes/{scene.id}/characters",
            json={"character_id": character.id, "position_x": 10},
        ).json()

        updated = client.patch(
            f"/api/scenes/{scene.id}/characters/{placement['id']}",
            json={"position_x": 75, "expression": "surprised"},
        ).json()
        assert updated["position_x"] == 75
        assert updated["expression"] == "surprised"

        assert client.patch(
            f"/api/scenes/{scene.id}/characters/{placement['id']}",
            json={"scale": None},
        ).status_code == 422

        assert client.delete(f"/api/scenes/{scene.id}/characters/{placement['id']}").status_code == 204
        assert client.delete(f"/api/scenes/{scene.id}/characters/{placement['id']}").status_code == 404


class TestNarration:
    def test_stores_data_url(self, client, scene, monkeypatch):
        monkeypatch.setattr(settings, "GROQ_API_KEY", "gsk_test")
        with patch("cartoon_creator.services.speech.requests.post") as post:
            post.return_value = mock_response(200, content=b"RIFFwav")
            resp = client.post(f"/api/scenes/{scene.id}/audio", json={"text": "Benny wakes up."})

        assert resp.status_code == 200
        audio_url = resp.json()["audio_url"]
        assert audio_url.startswith("data:audio/wav;base64,")
        assert base64.b64decode(audio_url.split(",", 1)[1]) == b"RIFFwav"

    def test_speech_errors_propagate(self, client, scene):
        resp = client.post(f"/api/scenes/{scene.id}/audio", json={"text": ""})

        assert resp.status_code == 400
