from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from typing import Optional


class CharacterBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    character_type: str = "cartoon"
    image_url: Optional[str] = None


class CharacterCreate(CharacterBase):
    project_id: int
    is_ai_generated: bool = False


class CharacterUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    character_type: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("name", "character_type")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class CharacterGenerateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    # falls back to the project's story text when omitted
    description: Optional[str] = None


class Character(CharacterBase):
    id: int
    project_id: int
    is_ai_generated: bool = False
    created_at: datetime

    class Config:
        from_attributes = True
