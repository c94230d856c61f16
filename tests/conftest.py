"""Shared fixtures: in-memory database, API client, and clean settings."""

from __future__ import annotations

import os

# Must be set before cartoon_creator.core.config is imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_BACKEND"] = "memory"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cartoon_creator import models
from cartoon_creator.api.dependencies import get_db, get_story_rate_limiter
from cartoon_creator.core.config import settings
from cartoon_creator.db.base import Base
from cartoon_creator.db.init_db import init_db
from cartoon_creator.main import app
from cartoon_creator.services.rate_limit import InMemoryRateLimiter

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch, tmp_path):
    """No real API keys, media written under a temp dir."""
    monkeypatch.setattr(settings, "GROQ_API_KEY", None)
    monkeypatch.setattr(settings, "HUGGINGFACE_API_TOKEN", None)
    monkeypatch.setattr(settings, "UNSPLASH_ACCESS_KEY", None)
    monkeypatch.setattr(settings, "MEDIA_ROOT", str(tmp_path / "media"))
    yield


@pytest.fixture
def db_session():
    init_db(engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def rate_limiter():
    return InMemoryRateLimiter(max_requests=30, window_seconds=60)


@pytest.fixture
def client(db_session, rate_limiter):
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_story_rate_limiter] = lambda: rate_limiter
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def project(db_session):
    p = models.Project(title="Benny's Big Day", description="A bear goes exploring")
    db_session.add(p)
    db_session.commit()
    db_session.refresh(p)
    return p


@pytest.fixture
def character(db_session, project):
    c = models.Character(
        project_id=project.id,
        name="Benny",
        description="a friendly bear",
        image_url="https://api.dicebear.com/9.x/avataaars/svg?seed=Benny",
    )
    db_session.add(c)
    db_session.commit()
    db_session.refresh(c)
    return c


@pytest.fixture
def scene(db_session, project):
    s = models.Scene(
        project_id=project.id,
        scene_number=1,
        description="Benny wakes up",
        background_image_url="https://example.com/forest.jpg",
        duration=5,
        animations=[],
    )
    db_session.add(s)
    db_session.commit()
    db_session.refresh(s)
    return s


@pytest.fixture
def structured_story() -> str:
    return """=== STORY START ===
TITLE: Benny and the Rainbow Flowers
GENRE: fantasy
AGE GROUP: children

SUMMARY: Benny the bear and Rosie the rabbit search for magic flowers.
They learn that kindness makes them bloom.

CHARACTERS:
• Benny - a friendly brown bear who loves honey
• Rosie - a clever rabbit - always curious

SCENE 1: The Plan
LOCATION: The village square
CHARACTERS: Benny, Rosie
ACTION: Benny and Rosie meet by the fountain.
They decide to find the rainbow flowers.
DIALOGUE: Benny says: 'Let's go on an adventure!'

SCENE 2: The Woods
LOCATION: Whispering Woods
CHARACTERS: Rosie
ACTION: Rosie helps a lost bird find its nest.
DIALOGUE: Rosie says: 'There you go, little one.'

MORAL: Kindness makes good things grow.

STORY ENDING: The flowers bloomed and everyone celebrated.
=== STORY END ==="""


@pytest.fixture
def session_factory(db_session):
    """Session factory bound to the test database, for code that opens its own sessions."""
    return TestingSessionLocal
