import logging

from fastapi import APIRouter, Depends

from cartoon_creator import schemas
from cartoon_creator.api.dependencies import error_response, get_story_service
from cartoon_creator.services import avatar, scene_suggestion
from cartoon_creator.services.errors import InvalidRequestError
from cartoon_creator.services.story_generation import StoryGenerationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/story", response_model=schemas.SimpleStoryResponse)
def simple_story(
    payload: schemas.SimpleStoryRequest,
    service: StoryGenerationService = Depends(get_story_service),
):
    if not payload.prompt:
        return error_response(InvalidRequestError("Prompt is required"))

    return schemas.SimpleStoryResponse(story=service.generate_simple(payload.prompt))


@router.post("/scene", response_model=schemas.SceneSuggestionResponse)
def suggest_scene(payload: schemas.SceneSuggestionRequest):
    try:
        suggestion = scene_suggestion.suggest_scene(payload.prompt, payload.scene_number)
    except Exception as e:
        logger.error("[Scene] Scene generation error, returning mock scene: %s", e)
        suggestion = scene_suggestion.fallback_scene(payload.scene_number)

    return schemas.SceneSuggestionResponse(
        description=suggestion.description,
        background_url=suggestion.background_url,
        suggested_characters=suggestion.suggested_characters,
    )


@router.post("/character", response_model=schemas.AvatarResponse)
def generate_character(payload: schemas.AvatarRequest):
    name = payload.character_name or ""
    description = payload.description or ""

    try:
        result = avatar.build_avatar(name, description)
    except Exception as e:
        logger.error("[Avatar] Avatar generation failed, using fallback: %s", e)
        return schemas.AvatarResponse(
            name=name or "Character",
            description=description,
            image_url=avatar.fallback_avatar_url(name),
            character_type="cartoon",
            style=avatar.DEFAULT_STYLE,
            note="Fallback avatar",
        )

    return schemas.AvatarResponse(
        name=name,
        description=description,
        image_url=result.image_url,
        character_type="cartoon",
        style=result.style,
        params=result.params,
        note=f"Generated with DiceBear {result.style} style",
    )
