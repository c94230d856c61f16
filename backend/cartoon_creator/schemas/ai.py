from typing import Dict, List, Optional

from .common import CamelModel


class SceneSuggestionRequest(CamelModel):
    prompt: str = "cartoon scene"
    scene_number: int = 1
    location: Optional[str] = None
    story_title: Optional[str] = None


class SceneSuggestionResponse(CamelModel):
    description: str
    background_url: str
    suggested_characters: List[str]


class AvatarRequest(CamelModel):
    character_name: Optional[str] = None
    description: Optional[str] = None


class AvatarResponse(CamelModel):
    success: bool = True
    name: str
    description: str
    image_url: str
    character_type: str
    style: str
    params: Dict[str, str] = {}
    note: str


class MockSceneRequest(CamelModel):
    project_id: Optional[int] = None
    scene_number: int = 1
    story: Optional[str] = None


class MockSceneResponse(CamelModel):
    description: str
    background_url: str
