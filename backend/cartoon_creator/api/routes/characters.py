from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from cartoon_creator.api.dependencies import get_db
from cartoon_creator import models, schemas

router = APIRouter(prefix="/characters", tags=["characters"])


def get_character_or_404(db: Session, character_id: int) -> models.Character:
    character = (
        db.query(models.Character)
        .filter(models.Character.id == character_id)
        .first()
    )
    if not character:
        raise HTTPException(status_code=404, detail="Character not found")
    return character


@router.post("/", response_model=schemas.Character, status_code=status.HTTP_201_CREATED)
def create_character(
    character_in: schemas.CharacterCreate, db: Session = Depends(get_db)
):
    project = (
        db.query(models.Project)
        .filter(models.Project.id == character_in.project_id)
        .first()
    )
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")

    character = models.Character(**character_in.model_dump())
    db.add(character)
    db.commit()
    db.refresh(character)
    return character


@router.get("/project/{project_id}", response_model=List[schemas.Character])
def list_characters_for_project(
    project_id: int, db: Session = Depends(get_db)
):
    return (
        db.query(models.Character)
        .filter(models.Character.project_id == project_id)
        .order_by(models.Character.created_at, models.Character.id)
        .all()
    )


@router.get("/{character_id}", response_model=schemas.Character)
def get_character(character_id: int, db: Session = Depends(get_db)):
    return get_character_or_404(db, character_id)


@router.patch("/{character_id}", response_model=schemas.Character)
def update_character(
    character_id: int,
    character_in: schemas.CharacterUpdate,
    db: Session = Depends(get_db),
):
    character = get_character_or_404(db, character_id)

    data = character_in.model_dump(exclude_unset=True)
    for field, value in data.items():
        setattr(character, field, value)

    db.add(character)
    db.commit()
    db.refresh(character)
    return character


@router.delete("/{character_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_character(character_id: int, db: Session = Depends(get_db)):
    character = get_character_or_404(db, character_id)

    # placements go first so no scene keeps a dangling reference
    (
        db.query(models.SceneCharacter)
        .filter(models.SceneCharacter.character_id == character.id)
        .delete(synchronize_session=False)
    )
    db.delete(character)
    db.commit()


@router.post("/{character_id}/duplicate", response_model=schemas.Character, status_code=status.HTTP_201_CREATED)
def duplicate_character(character_id: int, db: Session = Depends(get_db)):
    character = get_character_or_404(db, character_id)

    copy = models.Character(
        project_id=character.project_id,
        name=f"{character.name} (Copy)",
        description=character.description,
        character_type=character.character_type,
        image_url=character.image_url,
        is_ai_generated=character.is_ai_generated,
    )
    db.add(copy)
    db.commit()
    db.refresh(copy)
    return copy
