import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from cartoon_creator.api.dependencies import get_db
from cartoon_creator import models, schemas

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])


def get_project_or_404(db: Session, project_id: int) -> models.Project:
    project = db.query(models.Project).filter(models.Project.id == project_id).first()
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.post("/", response_model=schemas.Project, status_code=status.HTTP_201_CREATED)
def create_project(
    project_in: schemas.ProjectCreate, db: Session = Depends(get_db)
):
    project = models.Project(
        title=project_in.title,
        description=project_in.description,
        story_text=project_in.story_text,
    )
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


@router.get("/", response_model=List[schemas.Project])
def list_projects(db: Session = Depends(get_db)):
    return (
        db.query(models.Project)
        .order_by(models.Project.updated_at.desc(), models.Project.id.desc())
        .all()
    )


@router.get("/{project_id}", response_model=schemas.Project)
def get_project(project_id: int, db: Session = Depends(get_db)):
    return get_project_or_404(db, project_id)


@router.patch("/{project_id}", response_model=schemas.Project)
def update_project(
    project_id: int, project_in: schemas.ProjectUpdate, db: Session = Depends(get_db)
):
    project = get_project_or_404(db, project_id)

    data = project_in.model_dump(exclude_unset=True)
    for field, value in data.items():
        setattr(project, field, value)

    db.add(project)
    db.commit()
    db.refresh(project)
    return project


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(project_id: int, db: Session = Depends(get_db)):
    project = get_project_or_404(db, project_id)

    scene_ids = [
        scene_id
        for (scene_id,) in db.query(models.Scene.id).filter(models.Scene.project_id == project_id)
    ]
    if scene_ids:
        (
            db.query(models.SceneCharacter)
            .filter(models.SceneCharacter.scene_id.in_(scene_ids))
            .delete(synchronize_session=False)
        )
    for model in (models.Scene, models.Character, models.AnimationExport):
        db.query(model).filter(model.project_id == project_id).delete(synchronize_session=False)

    db.delete(project)
    db.commit()
    logger.info("[Projects] Deleted project %s", project_id)
