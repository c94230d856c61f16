"""Character avatars via the DiceBear HTTP API.

No image is generated here: we only pick a DiceBear style from keywords in
the character description and build the query string for it. The same
name + description always yields the same URL.
"""

import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional
from urllib.parse import quote, urlencode

from cartoon_creator.core.config import settings

DEFAULT_STYLE = "avataaars"
DEFAULT_BACKGROUND = "b6e3f4,c0aede,d1d4f9"

# First match wins, so order matters.
STYLE_KEYWORDS = [
    (("robot", "cyborg"), "bottts"),
    (("pixel", "8bit"), "pixel-art"),
    (("emoji", "smiley"), "fun-emoji"),
    (("icon", "symbol"), "icons"),
    (("identicon", "github"), "identicon"),
    (("minimal", "simple"), "miniavs"),
    (("shapes", "geometric"), "shapes"),
    (("thumbs", "thumb"), "thumbs"),
    (("neutral", "professional"), "avataaars-neutral"),
    (("colorful", "vibrant"), "lorelei"),
    (("cartoon", "funny"), "micah"),
    (("sketch", "doodle"), "open-peeps"),
    (("person", "detailed"), "personas"),
    (("adventure", "explorer"), "adventurer"),
    (("cute", "sweet"), "big-ears"),
    (("smile", "happy"), "big-smile"),
    (("croodle", "monster"), "croodles"),
]

BACKGROUND_KEYWORDS = [
    (("blue background", "sky"), "93c5fd"),
    (("green background", "grass"), "86efac"),
    (("red background",), "fca5a5"),
    (("yellow background", "sun"), "fde047"),
    (("purple background",), "d8b4fe"),
    (("pink background",), "f9a8d4"),
    (("orange background",), "fdba74"),
    (("gray background", "grey background"), "d1d5db"),
    (("black background",), "000000"),
    (("white background",), "ffffff"),
]


@dataclass
class Avatar:
    image_url: str
    style: str
    params: Dict[str, str] = field(default_factory=dict)


def _has(desc: str, *keywords: str) -> bool:
    return any(k in desc for k in keywords)


def select_avatar_style(description: str) -> str:
    desc = (description or "").lower()
    for keywords, style in STYLE_KEYWORDS:
        if _has(desc, *keywords):
            return style
    return DEFAULT_STYLE


def background_color(desc: str) -> str:
    for keywords, color in BACKGROUND_KEYWORDS:
        if _has(desc, *keywords):
            return color
    return DEFAULT_BACKGROUND


def _configure_avataaars(params: Dict[str, str], desc: str):
    if "long hair" in desc:
        params["top"] = "longHair"
    elif "short hair" in desc:
        params["top"] = "shortHair"
    elif "bald" in desc:
        params["top"] = "noHair"

    hair_colors = [
        ("blonde", "f8d25c"),
        ("brown hair", "a78c5b"),
        ("black hair", "2c2c2c"),
        ("red hair", "c2560a"),
        ("blue hair", "1e40af"),
        ("green hair", "15803d"),
        ("purple hair", "7c3aed"),
        ("pink hair", "db2777"),
    ]
    for keyword, color in hair_colors:
        if keyword in desc:
            params["hairColor"] = color

    if _has(desc, "smile", "happy"):
        params["mouth"] = "smile"
    elif "sad" in desc:
        params["mouth"] = "sad"

    for keyword, eyes in (("happy", "happy"), ("sad", "sad"), ("closed", "closed"), ("wink", "wink")):
        if keyword in desc:
            params["eyes"] = eyes

    if "glasses" in desc:
        params["accessories"] = "round"
        params["accessoriesProbability"] = "100"

    if _has(desc, "beard", "mustache"):
        params["facialHair"] = "beard"


def _configure_bottts(params: Dict[str, str], desc: str):
    if "detailed" in desc:
        params["style"] = "detailed"
    if "simple" in desc:
        params["style"] = "circles"

    if _has(desc, "silver", "metal"):
        params["color"] = "d1d5db"
    elif "gold" in desc:
        params["color"] = "fbbf24"
    elif "blue" in desc:
        params["color"] = "1d4ed8"
    elif "red" in desc:
        params["color"] = "dc2626"
    elif "green" in desc:
        params["color"] = "16a34a"

    if _has(desc, "blue light", "blue eye"):
        params["lightColor"] = "3b82f6"
    elif _has(desc, "red light", "red eye"):
        params["lightColor"] = "ef4444"
    elif _has(desc, "green light", "green eye"):
        params["lightColor"] = "10b981"


def _configure_micah(params: Dict[str, str], desc: str):
    for keyword in ("happy", "sad", "surprised", "angry"):
        if keyword in desc:
            params["face"] = keyword

    if "short hair" in desc:
        params["hair"] = "short"
    if "long hair" in desc:
        params["hair"] = "long"
    if "bald" in desc:
        params["hair"] = "none"

    if "pink hair" in desc:
        params["hairColor"] = "f472b6"
    if "blue hair" in desc:
        params["hairColor"] = "60a5fa"
    if "green hair" in desc:
        params["hairColor"] = "34d399"


def _configure_lorelei(params: Dict[str, str], desc: str):
    if "long" in desc:
        params["hair"] = "long"
    if "short" in desc:
        params["hair"] = "short"
    if "bald" in desc:
        params["hair"] = "none"

    for color in ("pink", "blue", "green", "purple"):
        if color in desc:
            params["hairColor"] = color

    if "flower" in desc:
        params["accessories"] = "flower"
    if "glasses" in desc:
        params["accessories"] = "glasses"


def _configure_personas(params: Dict[str, str], desc: str):
    for clothing in ("shirt", "hoodie", "formal"):
        if clothing in desc:
            params["clothing"] = clothing

    for color in ("red", "blue", "green"):
        if f"{color} clothing" in desc:
            params["clothingColor"] = color

    if "glasses" in desc:
        params["accessories"] = "glasses"


def _configure_pixel_art(params: Dict[str, str], desc: str):
    if "short" in desc:
        params["hair"] = "short01,short02,short03"
    if "long" in desc:
        params["hair"] = "long01,long02,long03"
    if "glasses" in desc:
        params["accessories"] = "glasses01,glasses02,glasses03"


def _configure_adventurer(params: Dict[str, str], desc: str):
    if "short" in desc:
        params["hair"] = "short01,short02"
    if "long" in desc:
        params["hair"] = "long01,long02"
    if "glasses" in desc:
        params["accessories"] = "glasses"
    if "hat" in desc:
        params["hat"] = "hat01,hat02"


def _configure_big_ears(params: Dict[str, str], desc: str):
    if "happy" in desc:
        params["face"] = "smile"
    if "sad" in desc:
        params["face"] = "sad"
    if "short" in desc:
        params["hair"] = "short"
    if "long" in desc:
        params["hair"] = "long"


def _configure_open_peeps(params: Dict[str, str], desc: str):
    if "sitting" in desc:
        params["body"] = "sitting"
    if "standing" in desc:
        params["body"] = "standing"
    if "smile" in desc:
        params["face"] = "smile"
    if "sad" in desc:
        params["face"] = "sad"


STYLE_CONFIGURATORS: Dict[str, Callable[[Dict[str, str], str], None]] = {
    "avataaars": _configure_avataaars,
    "bottts": _configure_bottts,
    "micah": _configure_micah,
    "lorelei": _configure_lorelei,
    "personas": _configure_personas,
    "pixel-art": _configure_pixel_art,
    "adventurer": _configure_adventurer,
    "big-ears": _configure_big_ears,
    "open-peeps": _configure_open_peeps,
}


def build_avatar(character_name: str, description: str, now: Optional[float] = None) -> Avatar:
    style = select_avatar_style(description)
    desc = (description or "").lower()

    if character_name:
        seed = character_name
    else:
        seed = f"character-{int((now if now is not None else time.time()) * 1000)}"

    params: Dict[str, str] = {"seed": seed, "format": "svg"}
    params["backgroundColor"] = background_color(desc)

    configure = STYLE_CONFIGURATORS.get(style)
    if configure:
        configure(params, desc)

    image_url = f"{settings.DICEBEAR_BASE_URL}/{style}/svg?{urlencode(params)}"
    return Avatar(image_url=image_url, style=style, params=params)


def fallback_avatar_url(character_name: str) -> str:
    seed = quote(character_name or "Character", safe="")
    return (
        f"{settings.DICEBEAR_BASE_URL}/avataaars/svg"
        f"?seed={seed}&backgroundColor=b6e3f4&mouth=smile&eyes=happy"
    )
