import logging

from fastapi import FastAPI

from cartoon_creator.core.config import settings
from cartoon_creator.db.init_db import init_db
from cartoon_creator.api.routes import (
    ai,
    audio,
    characters,
    export,
    generate,
    health,
    projects,
    scenes,
    story,
    storyboard,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create DB tables on startup (for dev; later replace with Alembic)
init_db()

app = FastAPI(title=settings.PROJECT_NAME)


app.include_router(health.router, prefix=settings.API_PREFIX)
app.include_router(story.router, prefix=settings.API_PREFIX)
app.include_router(ai.router, prefix=settings.API_PREFIX)
app.include_router(generate.router, prefix=settings.API_PREFIX)
app.include_router(audio.router, prefix=settings.API_PREFIX)
app.include_router(projects.router, prefix=settings.API_PREFIX)
app.include_router(storyboard.router, prefix=settings.API_PREFIX)
app.include_router(scenes.router, prefix=settings.API_PREFIX)
app.include_router(characters.router, prefix=settings.API_PREFIX)
app.include_router(export.router, prefix=settings.API_PREFIX)
