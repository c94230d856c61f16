# cartoon_creator/workers/tasks.py

import logging

from cartoon_creator import models
from cartoon_creator.core.files import save_export_bytes
from cartoon_creator.db.session import SessionLocal
from cartoon_creator.services.video.assembler import SceneVideoAssembler

logger = logging.getLogger(__name__)


def render_export_task(export_id: int, assembler: SceneVideoAssembler = None) -> str:
    """
    Worker entry point: assemble every scene of a project into one video
    and record where the file ended up.
    """
    db = SessionLocal()

    try:
        export = db.query(models.AnimationExport).filter(models.AnimationExport.id == export_id).first()
        if not export:
            return f"export_id={export_id} not found"

        # Mark as running
        export.status = models.ExportStatus.running
        db.commit()

        project = db.query(models.Project).filter(models.Project.id == export.project_id).first()
        if not project:
            export.status = models.ExportStatus.failed
            export.error = "Project not found"
            db.commit()
            return "project not found"

        scenes = (
            db.query(models.Scene)
            .filter(models.Scene.project_id == project.id)
            .order_by(models.Scene.scene_number.asc())
            .all()
        )
        if not scenes:
            export.status = models.ExportStatus.failed
            export.error = "No scenes to export"
            db.commit()
            return "no scenes"

        assembler = assembler or SceneVideoAssembler()
        try:
            video = assembler.assemble(scenes, project.title, export.format)
            output_path = save_export_bytes(export.id, video.data, video.extension)
        except Exception as e:
            logger.error("[Export] Export %s failed: %s", export_id, e)
            export.status = models.ExportStatus.failed
            export.error = str(e)
            db.commit()
            return f"failed: {e}"

        export.status = models.ExportStatus.completed
        export.output_path = output_path
        export.mime_type = video.mime_type
        db.commit()

        logger.info(
            "[Export] Export %s completed (%s, %d bytes) at %s",
            export_id, video.strategy, len(video.data), output_path,
        )
        return f"exported project {project.id} as {video.strategy}"
    finally:
        db.close()
