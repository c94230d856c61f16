from cartoon_creator import models


def test_create_requires_project(client):
    resp = client.post("/api/characters/", json={"project_id": 42, "name": "Ghost"})

    assert resp.status_code == 404


def test_create_list_get(client, project):
    resp = client.post(
        "/api/characters/",
        json={"project_id": project.id, "name": "Rosie", "description": "a clever rabbit"},
    )
    assert resp.status_code == 201
    created = resp.json()
    assert created["character_type"] == "cartoon"
    assert created["is_ai_generated"] is False

    listed = client.get(f"/api/characters/project/{project.id}").json()
    assert [c["name"] for c in listed] == ["Rosie"]
    assert client.get(f"/api/characters/{created['id']}").json()["description"] == "a clever rabbit"


def test_update(client, character):
    resp = client.patch(f"/api/characters/{character.id}", json={"name": "Benny Bear"})

    assert resp.status_code == 200
    assert resp.json()["name"] == "Benny Bear"
    assert resp.json()["description"] == "a friendly bear"


def test_null_name_is_422(client, character):
    resp = client.patch(f"/api/characters/{character.id}", json={"name": None})

    assert resp.status_code == 422
    assert client.get(f"/api/characters/{character.id}").json()["name"] == "Benny"


def test_delete_removes_placements_first(client, db_session, character, scene):
    db_session.add(models.SceneCharacter(scene_id=scene.id, character_id=character.id, position_x=40, position_y=50))
    db_session.commit()

    resp = client.delete(f"/api/characters/{character.id}")

    assert resp.status_code == 204
    db_session.expire_all()
    assert db_session.query(models.SceneCharacter).count() == 0
    assert db_session.query(models.Character).count() == 0
    assert db_session.query(models.Scene).count() == 1


def test_duplicate(client, character):
    resp = client.post(f"/api/characters/{character.id}/duplicate")

    assert resp.status_code == 201
    copy = resp.json()
    assert copy["id"] != character.id
    assert copy["name"] == "Benny (Copy)"
    assert copy["image_url"] == character.image_url


def test_missing_character_is_404(client):
    assert client.get("/api/characters/123").status_code == 404
    assert client.delete("/api/characters/123").status_code == 404
