from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from .common import CamelModel
from .project import Project

StoryLength = Literal["short", "medium", "long"]


class StoryRequest(CamelModel):
    # validated by the route so a blank prompt maps to 400, not 422
    prompt: Optional[str] = None
    genre: str = "fantasy"
    age_group: str = "children"
    length: StoryLength = "medium"


class StoryResponse(CamelModel):
    success: bool = True
    story: str
    format: str = "structured"
    model: str
    length: int
    timestamp: datetime


class SimpleStoryRequest(CamelModel):
    prompt: Optional[str] = None


class SimpleStoryResponse(CamelModel):
    story: str


class ProjectStoryGenerateRequest(BaseModel):
    # defaults to the project's current story_text
    prompt: Optional[str] = None
    structured: bool = False
    genre: str = "fantasy"
    age_group: str = "children"
    length: StoryLength = "medium"


class ProjectStoryGenerateResponse(BaseModel):
    project: Project
    story: str
    model: Optional[str] = None
    used_fallback: bool = False


class StoryApplyRequest(BaseModel):
    overwrite_existing: bool = True
    scene_duration: int = Field(5, ge=1)


class StoryApplyResponse(BaseModel):
    project_id: int
    title: str
    characters_created: int
    scenes_created: int
    used_fallback_parser: bool = False
    character_names: List[str] = []
