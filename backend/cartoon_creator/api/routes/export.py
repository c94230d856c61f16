import logging
import os
import time
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from cartoon_creator import models, schemas
from cartoon_creator.api.dependencies import get_db
from cartoon_creator.core.files import slugify_title
from cartoon_creator.core.queue import render_queue
from cartoon_creator.workers.tasks import render_export_task

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/export", tags=["export"])


def _get_export(db: Session, export_id: int) -> models.AnimationExport:
    export = db.query(models.AnimationExport).filter(models.AnimationExport.id == export_id).first()
    if not export:
        raise HTTPException(status_code=404, detail="Export not found")
    return export


@router.post("/video", response_model=schemas.AnimationExport, status_code=status.HTTP_202_ACCEPTED)
def enqueue_video_export(export_in: schemas.AnimationExportCreate, db: Session = Depends(get_db)):
    project = db.query(models.Project).filter(models.Project.id == export_in.project_id).first()
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")

    scene_count = db.query(models.Scene).filter(models.Scene.project_id == project.id).count()
    if not scene_count:
        raise HTTPException(status_code=400, detail="No scenes to export for this project")

    export = models.AnimationExport(
        project_id=project.id,
        status=models.ExportStatus.pending,
        format=export_in.format,
    )
    db.add(export)
    db.commit()
    db.refresh(export)

    job = render_queue.enqueue(render_export_task, export.id)
    logger.info("[Export] Queued export %s for project %s (rq job %s)", export.id, project.id, job.get_id())

    return export


@router.get("/video", response_model=schemas.AnimationExportList)
def list_video_exports(project_id: int = Query(..., alias="projectId"), db: Session = Depends(get_db)):
    exports = (
        db.query(models.AnimationExport)
        .filter(models.AnimationExport.project_id == project_id)
        .order_by(models.AnimationExport.created_at.desc())
        .all()
    )
    return schemas.AnimationExportList(project_id=project_id, exports=exports)


@router.get("/video/{export_id}", response_model=schemas.AnimationExport)
def get_video_export(export_id: int, db: Session = Depends(get_db)):
    return _get_export(db, export_id)


@router.get("/video/{export_id}/file")
def download_video_export(export_id: int, db: Session = Depends(get_db)):
    export = _get_export(db, export_id)

    if export.status != models.ExportStatus.completed:
        raise HTTPException(status_code=400, detail=f"Export is {export.status.value}, not completed")
    if not export.output_path or not os.path.exists(export.output_path):
        raise HTTPException(status_code=404, detail="Export file missing")

    _, extension = os.path.splitext(export.output_path)
    filename = f"{slugify_title(export.project.title)}_animation{extension}"
    return FileResponse(export.output_path, media_type=export.mime_type, filename=filename)


@router.get("/download")
def download_placeholder(
    project_id: Optional[int] = Query(None, alias="projectId"),
    format: str = "video",
    resolution: str = "720p",
    db: Session = Depends(get_db),
):
    """Placeholder file describing the project; real renders go through /export/video."""
    if project_id is None:
        raise HTTPException(status_code=400, detail="Project ID is required")

    project = db.query(models.Project).filter(models.Project.id == project_id).first()
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")

    scene_count = db.query(models.Scene).filter(models.Scene.project_id == project_id).count()

    content = (
        "Video Metadata:\n"
        f"Title: {project.title}\n"
        f"Project ID: {project_id}\n"
        f"Format: {format}\n"
        f"Resolution: {resolution}\n"
        f"Number of Scenes: {scene_count}\n"
        f"Created: {datetime.utcnow().isoformat()}\n"
        "\n"
        "This is a placeholder video file.\n"
        "Use POST /api/export/video to render the project's scenes.\n"
    ).encode()

    extension = "mp4" if format == "video" else "gif"
    filename = f"{slugify_title(project.title)}-{int(time.time() * 1000)}.{extension}"
    return Response(
        content=content,
        media_type="image/gif" if format == "gif" else "video/mp4",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
