import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Request

from cartoon_creator import schemas
from cartoon_creator.api.dependencies import (
    error_response,
    get_client_ip,
    get_story_rate_limiter,
    get_story_service,
)
from cartoon_creator.core.config import settings
from cartoon_creator.services.errors import InvalidRequestError, ServiceError
from cartoon_creator.services.story_generation import StoryGenerationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/story", tags=["story"])


@router.post("", response_model=schemas.StoryResponse, response_model_by_alias=False)
def generate_story(
    payload: schemas.StoryRequest,
    request: Request,
    rate_limiter=Depends(get_story_rate_limiter),
    service: StoryGenerationService = Depends(get_story_service),
):
    if not payload.prompt or not payload.prompt.strip():
        return error_response(InvalidRequestError("Story prompt is required"))

    client_ip = get_client_ip(request)
    if not rate_limiter.check(client_ip):
        logger.warning("[Story] Rate limit exceeded for %s", client_ip)
        return error_response(
            ServiceError(
                "Rate limit exceeded",
                status_code=429,
                details=(
                    f"Too many requests. Limit is {settings.RATE_LIMIT_MAX_REQUESTS} "
                    f"per {settings.RATE_LIMIT_WINDOW_SECONDS} seconds."
                ),
            )
        )

    logger.info("[Story] Generating %s %s story (%s)", payload.genre, payload.age_group, payload.length)

    try:
        generated = service.generate(
            payload.prompt,
            genre=payload.genre,
            age_group=payload.age_group,
            length=payload.length,
        )
    except ServiceError as e:
        logger.error("[Story] Generation failed: %s", e.details)
        return error_response(e)

    return schemas.StoryResponse(
        story=generated.text,
        model=generated.model,
        length=len(generated.text),
        timestamp=datetime.utcnow(),
    )


@router.get("")
def story_health():
    configured = bool(settings.GROQ_API_KEY)
    return {
        "status": "healthy" if configured else "misconfigured",
        "service": "Groq Story Generator",
        "apiKeyConfigured": configured,
        "huggingFaceConfigured": bool(settings.HUGGINGFACE_API_TOKEN),
        "rateLimit": f"{settings.RATE_LIMIT_MAX_REQUESTS} requests per {settings.RATE_LIMIT_WINDOW_SECONDS} seconds",
        "models": {
            "primary": settings.GROQ_STORY_MODEL,
            "fallback": settings.HUGGINGFACE_MODEL,
        },
        "timestamp": datetime.utcnow().isoformat(),
    }
