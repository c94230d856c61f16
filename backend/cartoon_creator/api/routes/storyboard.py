import logging
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from cartoon_creator.api.dependencies import get_db, get_story_service
from cartoon_creator.api.routes.projects import get_project_or_404
from cartoon_creator.api.routes.scenes import next_scene_number, place_character
from cartoon_creator import models, schemas
from cartoon_creator.services import avatar, scene_suggestion, story_templates
from cartoon_creator.services.errors import ServiceError
from cartoon_creator.services.story_generation import StoryGenerationService
from cartoon_creator.services.story_parser import parse_story

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["storyboard"])

DEFAULT_ANIMATIONS = [{"type": "fadeIn", "duration": 1}]
MAX_SEEDED_CHARACTERS = 3


def _avatar_url(name: str, description: str) -> str:
    try:
        return avatar.build_avatar(name, description).image_url
    except Exception as e:
        logger.warning("[Avatar] Falling back to default avatar for %r: %s", name, e)
        return avatar.fallback_avatar_url(name)


def _scene_description(parsed_scene) -> str:
    parts = [p for p in (parsed_scene.title, parsed_scene.action) if p]
    description = " - ".join(parts)
    if parsed_scene.dialogue:
        description = f"{description}\n{parsed_scene.dialogue}" if description else parsed_scene.dialogue
    return description


@router.post("/{project_id}/story/generate", response_model=schemas.ProjectStoryGenerateResponse)
def generate_project_story(
    project_id: int,
    payload: schemas.ProjectStoryGenerateRequest,
    db: Session = Depends(get_db),
    service: StoryGenerationService = Depends(get_story_service),
):
    project = get_project_or_404(db, project_id)

    prompt = (payload.prompt or project.story_text or "").strip()
    if not prompt:
        raise HTTPException(status_code=400, detail="Please enter a story prompt")

    model = None
    used_fallback = False

    if payload.structured:
        try:
            generated = service.generate(
                prompt,
                genre=payload.genre,
                age_group=payload.age_group,
                length=payload.length,
            )
            story, model = generated.text, generated.model
        except ServiceError as e:
            logger.warning("[Story] Generation failed for project %s, using fallback: %s", project_id, e.message)
            story = story_templates.editor_fallback_story(prompt)
            used_fallback = True
    else:
        story = service.generate_simple(prompt)

    project.story_text = story
    db.add(project)
    db.commit()
    db.refresh(project)

    return schemas.ProjectStoryGenerateResponse(
        project=project, story=story, model=model, used_fallback=used_fallback
    )


@router.post("/{project_id}/story/apply", response_model=schemas.StoryApplyResponse)
def apply_project_story(
    project_id: int,
    payload: schemas.StoryApplyRequest,
    db: Session = Depends(get_db),
):
    """
    Turn the project's story text into a storyboard: one character per cast
    entry (with an avatar) and one scene per parsed scene, with the scene's
    named characters placed on it.
    """
    project = get_project_or_404(db, project_id)
    if not project.story_text or not project.story_text.strip():
        raise HTTPException(status_code=400, detail="Project has no story to apply")

    parsed, used_fallback = parse_story(project.story_text)

    # 1. Optionally wipe existing scenes (and their placements)
    if payload.overwrite_existing:
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
            (
                db.query(models.Scene)
                .filter(models.Scene.id.in_(scene_ids))
                .delete(synchronize_session=False)
            )
        db.flush()

    # 2. Cast, reusing characters that already exist by name
    cast: Dict[str, models.Character] = {
        c.name.lower(): c
        for c in db.query(models.Character).filter(models.Character.project_id == project_id)
    }
    created_names = []

    def ensure_character(name: str, description: str = "") -> models.Character:
        key = name.lower()
        if key not in cast:
            character = models.Character(
                project_id=project_id,
                name=name,
                description=description or None,
                character_type="cartoon",
                image_url=_avatar_url(name, description),
                is_ai_generated=True,
            )
            db.add(character)
            db.flush()
            cast[key] = character
            created_names.append(name)
        return cast[key]

    for parsed_character in parsed.characters:
        ensure_character(parsed_character.name, parsed_character.description)

    # 3. Scenes, with their characters spread evenly across the frame
    first_number = next_scene_number(db, project_id)
    for offset, parsed_scene in enumerate(parsed.scenes):
        scene_number = first_number + offset
        background = scene_suggestion.fetch_unsplash_background(
            f"cartoon {parsed_scene.location}" if parsed_scene.location else "cartoon landscape"
        ) or scene_suggestion.picsum_url(f"{project_id}-{scene_number}")

        scene = models.Scene(
            project_id=project_id,
            scene_number=scene_number,
            description=_scene_description(parsed_scene),
            background_image_url=background,
            duration=payload.scene_duration,
            animations=list(DEFAULT_ANIMATIONS),
        )
        db.add(scene)
        db.flush()

        names = [n for n in parsed_scene.characters if n]
        for i, name in enumerate(names):
            character = ensure_character(name)
            place_character(db, scene, character.id, position_x=(i + 1) * 100 / (len(names) + 1))

    if parsed.summary and not project.description:
        project.description = parsed.summary
    db.commit()

    logger.info(
        "[Story] Applied story to project %s: %d characters, %d scenes (fallback parser: %s)",
        project_id, len(created_names), len(parsed.scenes), used_fallback,
    )

    return schemas.StoryApplyResponse(
        project_id=project_id,
        title=parsed.title or project.title,
        characters_created=len(created_names),
        scenes_created=len(parsed.scenes),
        used_fallback_parser=used_fallback,
        character_names=created_names,
    )


@router.post(
    "/{project_id}/scenes/generate",
    response_model=schemas.Scene,
    status_code=status.HTTP_201_CREATED,
)
def generate_project_scene(
    project_id: int,
    payload: schemas.SceneGenerateRequest,
    db: Session = Depends(get_db),
):
    project = get_project_or_404(db, project_id)

    scene_number = next_scene_number(db, project_id)
    prompt = payload.prompt or project.story_text or "cartoon scene"

    try:
        suggestion = scene_suggestion.suggest_scene(prompt, scene_number)
    except Exception as e:
        logger.error("[Scene] Suggestion failed, using fallback scene: %s", e)
        suggestion = scene_suggestion.fallback_scene(scene_number)

    scene = models.Scene(
        project_id=project_id,
        scene_number=scene_number,
        description=suggestion.description,
        background_image_url=suggestion.background_url,
        duration=5,
        animations=list(DEFAULT_ANIMATIONS),
    )
    db.add(scene)

    has_characters = (
        db.query(models.Character).filter(models.Character.project_id == project_id).count() > 0
    )
    if not has_characters:
        for name in suggestion.suggested_characters[:MAX_SEEDED_CHARACTERS]:
            db.add(
                models.Character(
                    project_id=project_id,
                    name=name,
                    character_type="cartoon",
                    image_url=avatar.fallback_avatar_url(name),
                )
            )

    db.commit()
    db.refresh(scene)
    return scene


@router.post(
    "/{project_id}/characters/generate",
    response_model=schemas.Character,
    status_code=status.HTTP_201_CREATED,
)
def generate_project_character(
    project_id: int,
    payload: schemas.CharacterGenerateRequest,
    db: Session = Depends(get_db),
):
    project = get_project_or_404(db, project_id)

    description = payload.description or project.story_text or ""

    character = models.Character(
        project_id=project_id,
        name=payload.name,
        description=description or f"A cartoon character named {payload.name}",
        character_type="cartoon",
        image_url=_avatar_url(payload.name, description),
        is_ai_generated=True,
    )
    db.add(character)
    db.commit()
    db.refresh(character)
    return character
