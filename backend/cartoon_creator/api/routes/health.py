from fastapi import APIRouter

from cartoon_creator.core.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    return {"status": "ok", "service": settings.PROJECT_NAME}
