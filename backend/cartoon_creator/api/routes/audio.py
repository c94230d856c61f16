import logging
from datetime import datetime

from fastapi import APIRouter

from cartoon_creator import schemas
from cartoon_creator.api.dependencies import error_response
from cartoon_creator.core.config import settings
from cartoon_creator.services import speech
from cartoon_creator.services.errors import ServiceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/audio", tags=["audio"])


@router.post("/speech", response_model=schemas.SpeechResponse)
def generate_speech(payload: schemas.SpeechRequest):
    try:
        result = speech.synthesize_speech(payload.text, speech.requested_voice(payload), payload.response_format)
    except ServiceError as e:
        return error_response(e)

    return schemas.SpeechResponse(
        audio=result.as_base64(),
        format=result.format,
        voice=result.voice,
        text_length=len(payload.text),
        audio_size=len(result.audio),
        timestamp=datetime.utcnow(),
    )


@router.get("/speech")
def speech_health():
    configured = bool(settings.GROQ_API_KEY)
    return {
        "status": "healthy" if configured else "misconfigured",
        "service": "Groq Text-to-Speech",
        "apiKeyConfigured": configured,
        "model": settings.GROQ_TTS_MODEL,
        "availableVoices": speech.AVAILABLE_VOICES,
        "supportedFormats": speech.SUPPORTED_FORMATS,
        "maxTextLength": speech.MAX_TEXT_LENGTH,
        "timestamp": datetime.utcnow().isoformat(),
    }
