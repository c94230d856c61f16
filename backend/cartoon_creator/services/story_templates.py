"""Canned stories and scenes used when no AI provider answers."""

import random

MOCK_STORY = """Once upon a time, in a colorful cartoon village, lived a friendly bear named Benny and a clever rabbit named Rosie. They decided to go on an adventure to find the magical rainbow flowers that only bloom when someone does a kind deed.

Scene 1: Benny and Rosie meet in the village square. They discuss their plan to find the rainbow flowers.
Scene 2: They journey through the Whispering Woods, helping a lost bird find its nest.
Scene 3: They discover the rainbow flowers blooming because of their kind deed.
Scene 4: Return to the village and share the flowers with everyone."""

MOCK_SCENES = [
    {
        "description": "Benny and Rosie meet in the village square",
        "background_url": "https://images.unsplash.com/photo-1578662996442-48f60103fc96?w=800&h=600&fit=crop",
    },
    {
        "description": "Whispering Woods with magical trees",
        "background_url": "https://images.unsplash.com/photo-1448375240586-882707db888b?w=800&h=600&fit=crop",
    },
    {
        "description": "Rainbow flower garden",
        "background_url": "https://images.unsplash.com/photo-1506905925346-21bda4d32df4?w=800&h=600&fit=crop",
    },
    {
        "description": "Village celebration",
        "background_url": "https://images.unsplash.com/photo-1533174072545-7a4b6ad7a6c3?w=800&h=600&fit=crop",
    },
]

TEMPLATE_CHARACTERS = ["friendly bear", "clever rabbit", "wise owl", "playful squirrel"]
TEMPLATE_SETTINGS = ["magical forest", "colorful village", "enchanted garden", "mysterious mountain"]
TEMPLATE_CONFLICTS = ["lost treasure", "missing friend", "broken rainbow", "dark cloud"]


def mock_scene(scene_number: int) -> dict:
    return MOCK_SCENES[(scene_number - 1) % len(MOCK_SCENES)]


def outline_story(prompt: str) -> str:
    """Used when the text model answers with nothing usable."""
    return f"""Once upon a time, {prompt}.

Scene 1: Introduction of characters
Scene 2: The adventure begins
Scene 3: Overcoming challenges
Scene 4: Happy ending with lessons learned"""


def random_template_story(prompt: str, rng: random.Random = None) -> str:
    rng = rng or random
    character = rng.choice(TEMPLATE_CHARACTERS)
    setting = rng.choice(TEMPLATE_SETTINGS)
    conflict = rng.choice(TEMPLATE_CONFLICTS)

    return f"""{prompt or 'In a wonderful world'}, there lived a {character} in the {setting}.
One day, they discovered a {conflict} and decided to help.

Scene 1: Meet {character} in the {setting}
Scene 2: Discover the problem: {conflict}
Scene 3: Journey to find a solution with friends
Scene 4: Success! Everyone celebrates and learns about friendship"""


def editor_fallback_story(prompt: str) -> str:
    return f"""Once upon a time in Cartoonland, {prompt}. The characters went on an adventure and learned valuable lessons about friendship and teamwork.

Scene 1: Introduction of main characters
Scene 2: The adventure begins
Scene 3: Facing challenges together
Scene 4: Happy ending with lessons learned"""
