from pydantic import BaseModel, Field, field_validator
from typing import Optional

from .character import Character


class SceneCharacterCreate(BaseModel):
    character_id: int
    # random x in [30, 70) when omitted
    position_x: Optional[float] = Field(None, ge=0, le=100)
    position_y: float = Field(50.0, ge=0, le=100)
    scale: float = Field(1.0, gt=0)
    expression: str = "happy"


class SceneCharacterUpdate(BaseModel):
    position_x: Optional[float] = Field(None, ge=0, le=100)
    position_y: Optional[float] = Field(None, ge=0, le=100)
    scale: Optional[float] = Field(None, gt=0)
    expression: Optional[str] = None

    @field_validator("position_x", "position_y", "scale", "expression")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class SceneCharacter(BaseModel):
    id: int
    scene_id: int
    character_id: int
    position_x: float
    position_y: float
    scale: float
    expression: str
    character: Optional[Character] = None

    class Config:
        from_attributes = True
