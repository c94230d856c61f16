from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional

from .scene_character import SceneCharacter


class SceneBase(BaseModel):
    description: Optional[str] = None
    background_image_url: Optional[str] = None
    audio_url: Optional[str] = None
    duration: int = Field(5, ge=1)
    animations: List[Dict[str, Any]] = Field(default_factory=list)


class SceneCreate(SceneBase):
    project_id: int
    # appended after the last scene when omitted
    scene_number: Optional[int] = Field(None, ge=1)


class SceneUpdate(BaseModel):
    scene_number: Optional[int] = Field(None, ge=1)
    description: Optional[str] = None
    background_image_url: Optional[str] = None
    audio_url: Optional[str] = None
    duration: Optional[int] = Field(None, ge=1)
    animations: Optional[List[Dict[str, Any]]] = None

    @field_validator("scene_number", "duration", "animations")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class SceneNarrationRequest(BaseModel):
    text: str
    voice: Optional[str] = None


class SceneGenerateRequest(BaseModel):
    prompt: Optional[str] = None


class Scene(SceneBase):
    id: int
    project_id: int
    scene_number: int
    animations: Optional[List[Dict[str, Any]]] = None
    created_at: datetime
    updated_at: datetime

    scene_characters: List[SceneCharacter] = []

    class Config:
        from_attributes = True
