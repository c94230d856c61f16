from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class SpeechRequest(BaseModel):
    text: Optional[str] = None
    voice: Optional[str] = None
    response_format: str = "wav"


class SpeechResponse(BaseModel):
    success: bool = True
    audio: str  # base64
    format: str
    voice: str
    text_length: int
    audio_size: int
    timestamp: datetime
