"""Tests for the /api/export routes (queueing, status, downloads)."""

import os
from unittest.mock import patch

import pytest

from cartoon_creator import models
from cartoon_creator.workers.tasks import render_export_task


@pytest.fixture
def queue():
    with patch("cartoon_creator.api.routes.export.render_queue") as q:
        q.enqueue.return_value.get_id.return_value = "rq-1"
        yield q


def test_enqueue_creates_pending_export(client, queue, project, scene):
    resp = client.post("/api/export/video", json={"project_id": project.id, "format": "gif"})

    assert resp.status_code == 202
    body = resp.json()
    assert body["status"] == "pending"
    assert body["format"] == "gif"
    queue.enqueue.assert_called_once_with(render_export_task, body["id"])


def test_enqueue_unknown_project(client, queue):
    resp = client.post("/api/export/video", json={"project_id": 404})

    assert resp.status_code == 404
    queue.enqueue.assert_not_called()


def test_enqueue_without_scenes(client, queue, project):
    resp = client.post("/api/export/video", json={"project_id": project.id})

    assert resp.status_code == 400


def test_enqueue_rejects_unknown_format(client, queue, project, scene):
    resp = client.post("/api/export/video", json={"project_id": project.id, "format": "avi"})

    assert resp.status_code == 422


def test_list_and_get(client, db_session, project):
    export = models.AnimationExport(project_id=project.id, format="mp4")
    db_session.add(export)
    db_session.commit()

    listed = client.get("/api/export/video", params={"projectId": project.id}).json()
    assert listed["success"] is True
    assert [e["id"] for e in listed["exports"]] == [export.id]

    assert client.get(f"/api/export/video/{export.id}").json()["status"] == "pending"
    assert client.get("/api/export/video/999").status_code == 404


def test_file_not_ready(client, db_session, project):
    export = models.AnimationExport(project_id=project.id, format="mp4")
    db_session.add(export)
    db_session.commit()

    assert client.get(f"/api/export/video/{export.id}/file").status_code == 400


def test_file_download(client, db_session, project, tmp_path):
    path = tmp_path / "out.mp4"
    path.write_bytes(b"video-bytes")
    export = models.AnimationExport(
        project_id=project.id,
        format="mp4",
        status=models.ExportStatus.completed,
        output_path=str(path),
        mime_type="video/mp4",
    )
    db_session.add(export)
    db_session.commit()

    resp = client.get(f"/api/export/video/{export.id}/file")

    assert resp.status_code == 200
    assert resp.content == b"video-bytes"
    assert resp.headers["content-type"] == "video/mp4"
    assert "benny_s_big_day_animation.mp4" in resp.headers["content-disposition"]


def test_file_missing_on_disk(client, db_session, project, tmp_path):
    export = models.AnimationExport(
        project_id=project.id,
        status=models.ExportStatus.completed,
        output_path=os.path.join(str(tmp_path), "gone.mp4"),
    )
    db_session.add(export)
    db_session.commit()

    assert client.get(f"/api/export/video/{export.id}/file").status_code == 404


class TestPlaceholderDownload:
    def test_requires_project_id(self, client):
        assert client.get("/api/export/download").status_code == 400

    def test_unknown_project(self, client):
        assert client.get("/api/export/download", params={"projectId": 77}).status_code == 404

    def test_attachment(self, client, project, scene):
        resp = client.get("/api/export/download", params={"projectId": project.id})

        assert resp.status_code == 200
        assert resp.headers["content-type"] == "video/mp4"
        disposition = resp.headers["content-disposition"]
        assert disposition.startswith('attachment; filename="benny_s_big_day-')
        assert disposition.endswith('.mp4"')
        assert b"Number of Scenes: 1" in resp.content

    def test_gif_format(self, client, project):
        resp = client.get("/api/export/download", params={"projectId": project.id, "format": "gif"})

        assert resp.headers["content-type"] == "image/gif"
        assert resp.headers["content-disposition"].endswith('.gif"')
