import logging
import random
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from cartoon_creator.api.dependencies import get_db
from cartoon_creator import models, schemas
from cartoon_creator.services import speech
from cartoon_creator.services.errors import ServiceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scenes", tags=["scenes"])


def get_scene_or_404(db: Session, scene_id: int) -> models.Scene:
    scene = db.query(models.Scene).filter(models.Scene.id == scene_id).first()
    if not scene:
        raise HTTPException(status_code=404, detail="Scene not found")
    return scene


def next_scene_number(db: Session, project_id: int) -> int:
    return db.query(models.Scene).filter(models.Scene.project_id == project_id).count() + 1


def place_character(
    db: Session,
    scene: models.Scene,
    character_id: int,
    position_x: float = None,
    position_y: float = 50.0,
    scale: float = 1.0,
    expression: str = "happy",
) -> models.SceneCharacter:
    if position_x is None:
        position_x = 30 + random.random() * 40

    placement = models.SceneCharacter(
        scene_id=scene.id,
        character_id=character_id,
        position_x=position_x,
        position_y=position_y,
        scale=scale,
        expression=expression,
    )
    db.add(placement)
    return placement


@router.post("/", response_model=schemas.Scene, status_code=status.HTTP_201_CREATED)
def create_scene(scene_in: schemas.SceneCreate, db: Session = Depends(get_db)):
    project = (
        db.query(models.Project)
        .filter(models.Project.id == scene_in.project_id)
        .first()
    )
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")

    scene = models.Scene(
        project_id=scene_in.project_id,
        scene_number=scene_in.scene_number or next_scene_number(db, project.id),
        description=scene_in.description,
        background_image_url=scene_in.background_image_url,
        audio_url=scene_in.audio_url,
        duration=scene_in.duration,
        animations=scene_in.animations,
    )
    db.add(scene)
    db.commit()
    db.refresh(scene)
    return scene


@router.get("/project/{project_id}", response_model=List[schemas.Scene])
def list_scenes_for_project(project_id: int, db: Session = Depends(get_db)):
    return (
        db.query(models.Scene)
        .filter(models.Scene.project_id == project_id)
        .order_by(models.Scene.scene_number, models.Scene.id)
        .all()
    )


@router.get("/{scene_id}", response_model=schemas.Scene)
def get_scene(scene_id: int, db: Session = Depends(get_db)):
    return get_scene_or_404(db, scene_id)


@router.patch("/{scene_id}", response_model=schemas.Scene)
def update_scene(scene_id: int, scene_in: schemas.SceneUpdate, db: Session = Depends(get_db)):
    scene = get_scene_or_404(db, scene_id)

    data = scene_in.model_dump(exclude_unset=True)
    for field, value in data.items():
        setattr(scene, field, value)

    db.add(scene)
    db.commit()
    db.refresh(scene)
    return scene


@router.delete("/{scene_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_scene(scene_id: int, db: Session = Depends(get_db)):
    scene = get_scene_or_404(db, scene_id)

    (
        db.query(models.SceneCharacter)
        .filter(models.SceneCharacter.scene_id == scene.id)
        .delete(synchronize_session=False)
    )
    db.delete(scene)
    db.commit()


@router.post("/{scene_id}/duplicate", response_model=schemas.Scene, status_code=status.HTTP_201_CREATED)
def duplicate_scene(scene_id: int, db: Session = Depends(get_db)):
    scene = get_scene_or_404(db, scene_id)

    copy = models.Scene(
        project_id=scene.project_id,
        scene_number=next_scene_number(db, scene.project_id),
        description=f"{scene.description} (Copy)",
        background_image_url=scene.background_image_url,
        duration=scene.duration,
    )
    db.add(copy)
    db.commit()
    db.refresh(copy)
    return copy


@router.post("/{scene_id}/audio", response_model=schemas.Scene)
def narrate_scene(scene_id: int, payload: schemas.SceneNarrationRequest, db: Session = Depends(get_db)):
    """Synthesize narration for the scene and store it inline as a data: URL."""
    scene = get_scene_or_404(db, scene_id)

    try:
        result = speech.synthesize_speech(payload.text, speech.requested_voice(payload))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    scene.audio_url = result.as_data_url()
    db.add(scene)
    db.commit()
    db.refresh(scene)

    logger.info("[Audio] Stored %d bytes of narration on scene %s", len(result.audio), scene.id)
    return scene


# ----------------------------------------------------------------------
# Character placements
# ----------------------------------------------------------------------


def _get_placement(db: Session, scene_id: int, placement_id: int) -> models.SceneCharacter:
    placement = (
        db.query(models.SceneCharacter)
        .filter(
            models.SceneCharacter.id == placement_id,
            models.SceneCharacter.scene_id == scene_id,
        )
        .first()
    )
    if not placement:
        raise HTTPException(status_code=404, detail="Scene character not found")
    return placement


@router.post(
    "/{scene_id}/characters",
    response_model=schemas.SceneCharacter,
    status_code=status.HTTP_201_CREATED,
)
def add_character_to_scene(
    scene_id: int, placement_in: schemas.SceneCharacterCreate, db: Session = Depends(get_db)
):
    scene = get_scene_or_404(db, scene_id)

    character = (
        db.query(models.Character)
        .filter(models.Character.id == placement_in.character_id)
        .first()
    )
    if not character:
        raise HTTPException(status_code=404, detail="Character not found")
    if character.project_id != scene.project_id:
        raise HTTPException(status_code=400, detail="Character belongs to another project")

    placement = place_character(
        db,
        scene,
        character.id,
        position_x=placement_in.position_x,
        position_y=placement_in.position_y,
        scale=placement_in.scale,
        expression=placement_in.expression,
    )
    db.commit()
    db.refresh(placement)
    return placement


@router.patch("/{scene_id}/characters/{placement_id}", response_model=schemas.SceneCharacter)
def update_scene_character(
    scene_id: int,
    placement_id: int,
    placement_in: schemas.SceneCharacterUpdate,
    db: Session = Depends(get_db),
):
    placement = _get_placement(db, scene_id, placement_id)

    data = placement_in.model_dump(exclude_unset=True)
    for field, value in data.items():
        setattr(placement, field, value)

    db.add(placement)
    db.commit()
    db.refresh(placement)
    return placement


@router.delete("/{scene_id}/characters/{placement_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_character_from_scene(scene_id: int, placement_id: int, db: Session = Depends(get_db)):
    placement = _get_placement(db, scene_id, placement_id)
    db.delete(placement)
    db.commit()
