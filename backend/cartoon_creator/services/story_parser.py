"""Turn raw LLM story text into a ParsedStory.

Two strategies:

* ``parse_story_text`` understands the ``=== STORY START ===`` template the
  story prompt asks for (TITLE / SUMMARY / CHARACTERS / SCENE n blocks).
* ``parse_simple_story`` scrapes free-form text and synthesizes scenes.

``parse_story`` runs the first and falls back to the second when the text
has no recognizable ``SCENE n:`` blocks.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

STORY_START = "=== STORY START ==="
STORY_END = "=== STORY END ==="

SCENE_MARKER = re.compile(r"^SCENE (\d+):\s*(.*)")
SIMPLE_SCENE_MARKER = re.compile(r"^(scene|chapter|part) \d+:", re.IGNORECASE)

# Prefixes that end a multi-line ACTION / DIALOGUE / SUMMARY value
SECTION_PREFIXES = (
    "TITLE:",
    "GENRE:",
    "AGE GROUP:",
    "SUMMARY:",
    "CHARACTERS:",
    "SCENE",
    "LOCATION:",
    "ACTION:",
    "DIALOGUE:",
    "MORAL:",
    "STORY ENDING:",
)
BULLETS = ("•", "*")

MAX_SIMPLE_SCENES = 5
SIMPLE_ACTION_CHARS = 100


@dataclass
class ParsedCharacter:
    name: str
    description: str


@dataclass
class ParsedScene:
    scene_number: int
    title: str
    location: str = ""
    characters: List[str] = field(default_factory=list)
    action: str = ""
    dialogue: str = ""


@dataclass
class ParsedStory:
    title: str = ""
    summary: str = ""
    genre: str = ""
    age_group: str = ""
    characters: List[ParsedCharacter] = field(default_factory=list)
    scenes: List[ParsedScene] = field(default_factory=list)
    moral: str = ""
    ending: str = ""


def _value(line: str, prefix: str) -> str:
    return line[len(prefix):].strip()


def _is_section(line: str) -> bool:
    return line.startswith(SECTION_PREFIXES)


def _continuation(lines: List[str], start: int) -> Tuple[str, int]:
    """Collect lines after ``start`` until a blank line or a new section.

    Returns the joined text and the index of the last consumed line.
    """
    parts = []
    j = start + 1
    while j < len(lines):
        nxt = lines[j]
        if not nxt or _is_section(nxt):
            break
        parts.append(nxt)
        j += 1
    return " ".join(parts), j - 1


def _append(base: str, extra: str) -> str:
    if not extra:
        return base
    return f"{base} {extra}" if base else extra


def _parse_character_bullet(line: str) -> Optional[ParsedCharacter]:
    text = line[1:].strip()
    if "-" not in text:
        return None
    name, description = text.split("-", 1)
    return ParsedCharacter(name=name.strip(), description=description.strip())


def parse_story_text(story_text: str) -> ParsedStory:
    lines = [line.strip() for line in story_text.split("\n")]
    parsed = ParsedStory()
    current: Optional[ParsedScene] = None

    def close_scene():
        nonlocal current
        if current is not None:
            parsed.scenes.append(current)
            current = None

    i = 0
    while i < len(lines):
        line = lines[i]
        marker = SCENE_MARKER.match(line)

        if line in (STORY_START, STORY_END):
            pass

        elif marker:
            close_scene()
            current = ParsedScene(scene_number=int(marker.group(1)), title=marker.group(2))

        elif line.startswith("MORAL:"):
            close_scene()
            parsed.moral = _value(line, "MORAL:")

        elif line.startswith("STORY ENDING:"):
            close_scene()
            parsed.ending = _value(line, "STORY ENDING:")

        elif current is not None:
            if line.startswith("LOCATION:"):
                current.location = _value(line, "LOCATION:")
            elif line.startswith("CHARACTERS:"):
                names = _value(line, "CHARACTERS:").split(",")
                current.characters = [n.strip() for n in names if n.strip()]
            elif line.startswith("ACTION:"):
                extra, i = _continuation(lines, i)
                current.action = _append(_value(line, "ACTION:"), extra)
            elif line.startswith("DIALOGUE:"):
                extra, i = _continuation(lines, i)
                current.dialogue = _append(_value(line, "DIALOGUE:"), extra)
            elif not line and current.location and current.action:
                close_scene()

        elif line.startswith("TITLE:"):
            parsed.title = _value(line, "TITLE:")

        elif line.startswith("GENRE:"):
            parsed.genre = _value(line, "GENRE:")

        elif line.startswith("AGE GROUP:"):
            parsed.age_group = _value(line, "AGE GROUP:")

        elif line.startswith("SUMMARY:"):
            summary = _value(line, "SUMMARY:")
            j = i + 1
            while j < len(lines) and not lines[j].startswith(("CHARACTERS:", "SCENE")):
                summary = _append(summary, lines[j])
                j += 1
            parsed.summary = summary
            i = j - 1

        elif line.startswith("CHARACTERS:"):
            j = i + 1
            while j < len(lines) and not lines[j].startswith("SCENE"):
                if lines[j].startswith(BULLETS):
                    character = _parse_character_bullet(lines[j])
                    if character:
                        parsed.characters.append(character)
                j += 1
            i = j - 1

        i += 1

    close_scene()
    return parsed


def _default_scenes() -> List[ParsedScene]:
    return [
        ParsedScene(
            scene_number=1,
            title="The Beginning",
            location="A magical forest",
            characters=["Main Character"],
            action="The adventure begins in a colorful forest",
            dialogue='"What an amazing day for an adventure!"',
        ),
        ParsedScene(
            scene_number=2,
            title="The Challenge",
            location="A mysterious cave",
            characters=["Main Character", "Friend"],
            action="They face their first challenge together",
            dialogue='"We can do this if we work together!"',
        ),
    ]


def _simple_scene(number: int, content: str) -> ParsedScene:
    return ParsedScene(
        scene_number=number,
        title=f"Scene {number}",
        location="A magical place",
        characters=["Main Character", "Friend"],
        action=content[:SIMPLE_ACTION_CHARS] + "...",
    )


def parse_simple_story(story_text: str) -> ParsedStory:
    lines = [line.strip() for line in story_text.split("\n") if line.strip()]

    parsed = ParsedStory(
        title=lines[0] if lines else "Untitled Story",
        summary=" ".join(lines[1:3]) or "A wonderful story",
        genre="fantasy",
        age_group="children",
        characters=[
            ParsedCharacter(name="Main Character", description="The hero of the story"),
            ParsedCharacter(name="Friend", description="A helpful companion"),
        ],
        moral="Always be kind and brave",
        ending="And they lived happily ever after.",
    )

    content = ""
    for line in lines[2:]:
        if SIMPLE_SCENE_MARKER.match(line):
            if content and len(parsed.scenes) < MAX_SIMPLE_SCENES:
                parsed.scenes.append(_simple_scene(len(parsed.scenes) + 1, content))
                content = ""
        else:
            content += line + " "

    if content and len(parsed.scenes) < MAX_SIMPLE_SCENES:
        parsed.scenes.append(_simple_scene(len(parsed.scenes) + 1, content))

    if not parsed.scenes:
        parsed.scenes = _default_scenes()

    return parsed


def parse_story(story_text: str) -> Tuple[ParsedStory, bool]:
    """Parse structured text, falling back to the simple scraper.

    Returns the parsed story and whether the fallback was used.
    """
    parsed = parse_story_text(story_text)
    if parsed.scenes:
        return parsed, False
    return parse_simple_story(story_text), True
