from typing import Optional

from fastapi import APIRouter

from cartoon_creator import schemas
from cartoon_creator.services import story_templates

router = APIRouter(prefix="/generate", tags=["generate"])


@router.post("/story", response_model=schemas.SimpleStoryResponse)
def mock_story():
    return schemas.SimpleStoryResponse(story=story_templates.MOCK_STORY)


@router.post("/scene", response_model=schemas.MockSceneResponse)
def mock_scene(payload: Optional[schemas.MockSceneRequest] = None):
    scene_number = payload.scene_number if payload else 1
    return schemas.MockSceneResponse(**story_templates.mock_scene(scene_number))
