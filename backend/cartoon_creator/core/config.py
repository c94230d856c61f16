import os
from typing import Optional

from pydantic_settings import BaseSettings

from dotenv import load_dotenv
load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "CartoonCreator API"
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    # For local dev you can use sqlite:
    # SQLALCHEMY_DATABASE_URI: str = "sqlite:///./cartoon_creator.db"
    SQLALCHEMY_DATABASE_URI: str = os.getenv(
        "DATABASE_URL", "sqlite:///./cartoon_creator.db"
    )
    REDIS_URL: str = "redis://localhost:6379"

    # Groq exposes an OpenAI-compatible API
    GROQ_API_KEY: Optional[str] = None
    GROQ_BASE_URL: str = "https://api.groq.com/openai/v1"
    GROQ_STORY_MODEL: str = "llama-3.1-8b-instant"
    GROQ_TTS_MODEL: str = "playai-tts"
    GROQ_TTS_VOICE: str = "Fritz-PlayAI"

    HUGGINGFACE_API_TOKEN: Optional[str] = None
    HUGGINGFACE_API_URL: str = "https://api-inference.huggingface.co/models"
    HUGGINGFACE_MODEL: str = "gpt2"

    UNSPLASH_ACCESS_KEY: Optional[str] = None
    DICEBEAR_BASE_URL: str = "https://api.dicebear.com/9.x"

    RATE_LIMIT_MAX_REQUESTS: int = 30
    RATE_LIMIT_WINDOW_SECONDS: int = 60
    RATE_LIMIT_BACKEND: str = "memory"  # memory | redis

    MEDIA_ROOT: str = "media"
    FFMPEG_BINARY: str = "ffmpeg"
    FFPROBE_BINARY: str = "ffprobe"
    HTTP_TIMEOUT_SECONDS: float = 30.0

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
