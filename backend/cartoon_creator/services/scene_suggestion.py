import logging
import time
from dataclasses import dataclass
from typing import List, Optional

import requests

from cartoon_creator.core.config import settings

logger = logging.getLogger(__name__)

UNSPLASH_RANDOM_URL = "https://api.unsplash.com/photos/random"

CHARACTER_SETS = [
    ["Benny the Bear", "Rosie the Rabbit", "Oliver the Owl"],
    ["Max the Monkey", "Lily the Lion", "Toby the Turtle"],
    ["Chloe the Cat", "Danny the Dog", "Polly the Parrot"],
    ["Gary the Goat", "Fiona the Fox", "Henry the Hippo"],
]
FALLBACK_CHARACTERS = ["Hero", "Sidekick", "Villain"]

LOCATION_KEYWORDS = [
    ("forest", "cartoon forest"),
    ("city", "cartoon city"),
    ("beach", "cartoon beach"),
    ("house", "cartoon house interior"),
]


@dataclass
class SceneSuggestion:
    description: str
    background_url: str
    suggested_characters: List[str]


def _now_ms() -> int:
    return int(time.time() * 1000)


def scene_keywords(prompt: str) -> str:
    text = (prompt or "").lower()
    for keyword, query in LOCATION_KEYWORDS:
        if keyword in text:
            return query
    return "cartoon landscape"


def picsum_url(seed) -> str:
    return f"https://picsum.photos/seed/{seed}/800/600"


def fetch_unsplash_background(query: str) -> Optional[str]:
    """Random landscape photo for the query, or None when unavailable."""
    if not settings.UNSPLASH_ACCESS_KEY:
        return None

    try:
        resp = requests.get(
            UNSPLASH_RANDOM_URL,
            params={"query": query, "orientation": "landscape"},
            headers={"Authorization": f"Client-ID {settings.UNSPLASH_ACCESS_KEY}"},
            timeout=settings.HTTP_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        logger.warning("[Scene] Unsplash request failed, using fallback: %s", e)
        return None

    if resp.status_code != 200:
        logger.warning("[Scene] Unsplash returned %s, using fallback", resp.status_code)
        return None

    return (resp.json().get("urls") or {}).get("regular") or None


def suggest_scene(prompt: str, scene_number: int) -> SceneSuggestion:
    keywords = scene_keywords(prompt)
    description = f"Scene {scene_number}: {prompt[:100]}..."

    background_url = fetch_unsplash_background(keywords)
    if not background_url:
        background_url = picsum_url(_now_ms() + scene_number)

    return SceneSuggestion(
        description=description,
        background_url=background_url,
        suggested_characters=list(CHARACTER_SETS[scene_number % len(CHARACTER_SETS)]),
    )


def fallback_scene(scene_number: int) -> SceneSuggestion:
    return SceneSuggestion(
        description=f"Scene {scene_number}: A beautiful cartoon scene",
        background_url=f"https://picsum.photos/800/600?random={_now_ms()}",
        suggested_characters=list(FALLBACK_CHARACTERS),
    )
