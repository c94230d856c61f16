from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel

from cartoon_creator.models.animation_export import ExportStatus


class AnimationExportCreate(BaseModel):
    project_id: int
    format: Literal["mp4", "gif"] = "mp4"


class AnimationExport(BaseModel):
    id: int
    project_id: int
    status: ExportStatus
    format: str
    output_path: Optional[str] = None
    mime_type: Optional[str] = None
    error: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AnimationExportList(BaseModel):
    success: bool = True
    project_id: int
    exports: List[AnimationExport]
