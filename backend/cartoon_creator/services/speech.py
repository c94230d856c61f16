import base64
import logging
from dataclasses import dataclass
from typing import Optional

import requests

from cartoon_creator.core.config import settings
from cartoon_creator.services.errors import (
    ConfigurationError,
    InvalidRequestError,
    UpstreamServiceError,
)

logger = logging.getLogger(__name__)

AVAILABLE_VOICES = ["Fritz-PlayAI"]
SUPPORTED_FORMATS = ["wav"]
MAX_TEXT_LENGTH = 5000


@dataclass
class SpeechResult:
    audio: bytes
    format: str
    voice: str

    def as_base64(self) -> str:
        return base64.b64encode(self.audio).decode()

    def as_data_url(self) -> str:
        return f"data:audio/{self.format};base64,{self.as_base64()}"


def speech_url() -> str:
    return f"{settings.GROQ_BASE_URL}/audio/speech"


def requested_voice(payload) -> Optional[str]:
    """The configured voice when the request omits one, otherwise exactly what was sent."""
    if "voice" not in payload.model_fields_set:
        return settings.GROQ_TTS_VOICE
    return payload.voice


def validate_speech_request(text: Optional[str], voice: Optional[str]) -> str:
    if not text or not text.strip():
        raise InvalidRequestError("Text is required for audio generation")

    if len(text) > MAX_TEXT_LENGTH:
        raise InvalidRequestError(f"Text is too long. Maximum {MAX_TEXT_LENGTH} characters.")

    if voice not in AVAILABLE_VOICES:
        raise InvalidRequestError(f"Invalid voice. Available voices: {', '.join(AVAILABLE_VOICES)}")

    return voice


def synthesize_speech(text: Optional[str], voice: Optional[str], response_format: str = "wav") -> SpeechResult:
    voice = validate_speech_request(text, voice)

    if not settings.GROQ_API_KEY:
        raise ConfigurationError("GROQ_API_KEY is not configured")

    logger.info("[Audio] Generating audio for text: %r", text[:50])

    try:
        resp = requests.post(
            speech_url(),
            headers={
                "Authorization": f"Bearer {settings.GROQ_API_KEY}",
                "Content-Type": "application/json",
            },
            json={
                "model": settings.GROQ_TTS_MODEL,
                "input": text.strip(),
                "voice": voice,
                "response_format": response_format,
            },
            timeout=settings.HTTP_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        raise UpstreamServiceError("Failed to generate audio", status_code=500, details=str(e))

    if resp.status_code != 200:
        error_text = resp.text
        logger.error("[Audio] Groq Audio API error: %s", error_text)

        message = "Failed to generate audio"
        if resp.status_code == 401:
            message = "Invalid API key - check your GROQ_API_KEY"
        elif resp.status_code == 429:
            message = "Rate limit exceeded"
        elif resp.status_code == 400:
            message = f"Invalid request: {error_text}"

        raise UpstreamServiceError(message, status_code=resp.status_code, details=error_text)

    logger.info("[Audio] Audio generated successfully (%d bytes)", len(resp.content))
    return SpeechResult(audio=resp.content, format=response_format, voice=voice)
