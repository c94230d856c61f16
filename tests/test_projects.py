from cartoon_creator import models


def test_create_and_get(client):
    resp = client.post("/api/projects/", json={"title": "My Cartoon", "description": "Fun"})

    assert resp.status_code == 201
    created = resp.json()
    assert created["status"] == "draft"

    fetched = client.get(f"/api/projects/{created['id']}").json()
    assert fetched["title"] == "My Cartoon"


def test_title_required(client):
    assert client.post("/api/projects/", json={"title": ""}).status_code == 422


def test_missing_project_is_404(client):
    assert client.get("/api/projects/999").status_code == 404
    assert client.patch("/api/projects/999", json={"title": "x"}).status_code == 404
    assert client.delete("/api/projects/999").status_code == 404


def test_list_most_recently_updated_first(client):
    first = client.post("/api/projects/", json={"title": "First"}).json()
    client.post("/api/projects/", json={"title": "Second"})
    client.patch(f"/api/projects/{first['id']}", json={"story_text": "edited"})

    titles = [p["title"] for p in client.get("/api/projects/").json()]

    assert titles[0] == "First"


def test_update_touches_updated_at(client, project):
    before = client.get(f"/api/projects/{project.id}").json()["updated_at"]

    resp = client.patch(f"/api/projects/{project.id}", json={"story_text": "Once upon a time"})

    assert resp.status_code == 200
    assert resp.json()["story_text"] == "Once upon a time"
    assert resp.json()["updated_at"] >= before


def test_delete_cascades(client, db_session, project, character, scene):
    db_session.add(models.SceneCharacter(scene_id=scene.id, character_id=character.id, position_x=40, position_y=50))
    db_session.add(models.AnimationExport(project_id=project.id, format="mp4"))
    db_session.commit()

    resp = client.delete(f"/api/projects/{project.id}")

    assert resp.status_code == 204
    db_session.expire_all()
    assert db_session.query(models.Project).count() == 0
    assert db_session.query(models.Scene).count() == 0
    assert db_session.query(models.Character).count() == 0
    assert db_session.query(models.SceneCharacter).count() == 0
    assert db_session.query(models.AnimationExport).count() == 0


def test_null_title_is_422(client, project):
    resp = client.patch(f"/api/projects/{project.id}", json={"title": None})

    assert resp.status_code == 422
    assert client.get(f"/api/projects/{project.id}").json()["title"] == "Benny's Big Day"


def test_null_description_is_cleared(client, project):
    resp = client.patch(f"/api/projects/{project.id}", json={"description": None})

    assert resp.status_code == 200
    assert resp.json()["description"] is None
