from datetime import datetime
from functools import lru_cache
from typing import Generator

from fastapi import Request
from fastapi.responses import JSONResponse

from cartoon_creator.core.config import settings
from cartoon_creator.db.session import SessionLocal
from cartoon_creator.services.errors import ServiceError
from cartoon_creator.services.rate_limit import build_rate_limiter
from cartoon_creator.services.story_generation import StoryGenerationService


def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


@lru_cache
def get_story_rate_limiter():
    return build_rate_limiter(settings)


def get_story_service() -> StoryGenerationService:
    return StoryGenerationService()


def error_response(error: ServiceError) -> JSONResponse:
    """JSON body used by the AI and audio routes for failures."""
    content = {
        "success": False,
        "error": error.message,
        "details": error.details,
        "timestamp": datetime.utcnow().isoformat(),
    }
    if error.instructions:
        content["instructions"] = error.instructions
    return JSONResponse(status_code=error.status_code, content=content)
