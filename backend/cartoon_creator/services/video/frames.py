import io
import logging
from typing import Callable, Tuple

import requests
from PIL import Image, ImageDraw, ImageFilter, ImageFont

from cartoon_creator.core.config import settings

logger = logging.getLogger(__name__)

FRAME_WIDTH = 1280
FRAME_HEIGHT = 720

DEFAULT_BACKGROUND = "#4f46e5"
UNREACHABLE_BACKGROUND = "#667eea"
GRADIENT_START = "#4f46e5"
GRADIENT_END = "#ec4899"
CHARACTER_PLACEHOLDER = "#f59e0b"

# character box at scale 1.0
CHARACTER_WIDTH = 120
CHARACTER_HEIGHT = 180

ImageLoader = Callable[[str], Image.Image]


def load_font(size: int, bold: bool = False):
    name = "DejaVuSans-Bold.ttf" if bold else "DejaVuSans.ttf"
    try:
        return ImageFont.truetype(name, size)
    except OSError:
        return ImageFont.load_default(size=size)


def rasterizable_url(url: str) -> str:
    """DiceBear serves SVG by default; Pillow needs the PNG variant."""
    if "dicebear.com" in url and "/svg" in url:
        return url.replace("/svg", "/png", 1).replace("format=svg", "format=png")
    return url


def fetch_image(url: str) -> Image.Image:
    resp = requests.get(rasterizable_url(url), timeout=settings.HTTP_TIMEOUT_SECONDS)
    resp.raise_for_status()
    img = Image.open(io.BytesIO(resp.content))
    img.load()
    return img.convert("RGBA")


def encode_png(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.convert("RGB").save(buf, format="PNG")
    return buf.getvalue()


def gradient_canvas(start: str = GRADIENT_START, end: str = GRADIENT_END) -> Image.Image:
    size = (FRAME_WIDTH, FRAME_HEIGHT)
    # linear_gradient runs black (top) to white (bottom); rotate so it runs left to right
    mask = Image.linear_gradient("L").rotate(90).resize(size)
    return Image.composite(Image.new("RGBA", size, end), Image.new("RGBA", size, start), mask)


def character_box(position_x: float, position_y: float, scale: float) -> Tuple[int, int, int, int]:
    """Top-left corner and size of a placed character.

    Positions are percentages of the frame, y measured from the bottom edge,
    and the character is centered on that point.
    """
    width = CHARACTER_WIDTH * scale
    height = CHARACTER_HEIGHT * scale
    x = (position_x / 100) * FRAME_WIDTH - width / 2
    y = FRAME_HEIGHT - (position_y / 100) * FRAME_HEIGHT - height / 2
    return int(round(x)), int(round(y)), int(round(width)), int(round(height))


def _overlay(canvas: Image.Image, draw_fn) -> Image.Image:
    layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    draw_fn(ImageDraw.Draw(layer))
    return Image.alpha_composite(canvas, layer)


def _draw_centered(draw: ImageDraw.ImageDraw, center: Tuple[float, float], text: str, font, fill="white"):
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    x = center[0] - (right - left) / 2 - left
    y = center[1] - (bottom - top) / 2 - top
    draw.text((x, y), text, font=font, fill=fill)


def _draw_background(canvas: Image.Image, url: str, load_image: ImageLoader) -> Image.Image:
    try:
        background = load_image(url).resize(canvas.size)
    except Exception as e:
        logger.warning("[Frames] Background %s unavailable: %s", url, e)
        return Image.new("RGBA", canvas.size, UNREACHABLE_BACKGROUND)
    return Image.alpha_composite(canvas, background.convert("RGBA"))


def _draw_character(canvas: Image.Image, placement, load_image: ImageLoader) -> Image.Image:
    x, y, width, height = character_box(
        placement.position_x, placement.position_y, placement.scale or 1
    )

    try:
        sprite = load_image(placement.character.image_url).resize((max(width, 1), max(height, 1)))
    except Exception as e:
        logger.warning("[Frames] Character image unavailable, drawing placeholder: %s", e)
        draw = ImageDraw.Draw(canvas)
        draw.rectangle([x, y, x + width, y + height], fill=CHARACTER_PLACEHOLDER)
        draw.text((x + 10, y + 6), "Char", font=load_font(14), fill="white")
        return canvas

    shadow = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    ImageDraw.Draw(shadow).rectangle([x + 5, y + 5, x + 5 + width, y + 5 + height], fill=(0, 0, 0, 128))
    canvas = Image.alpha_composite(canvas, shadow.filter(ImageFilter.GaussianBlur(5)))
    canvas.paste(sprite, (x, y), sprite)
    return canvas


def render_scene_frame(scene, load_image: ImageLoader = fetch_image) -> bytes:
    canvas = Image.new("RGBA", (FRAME_WIDTH, FRAME_HEIGHT), DEFAULT_BACKGROUND)

    if scene.background_image_url:
        canvas = _draw_background(canvas, scene.background_image_url, load_image)

    for placement in getattr(scene, "scene_characters", None) or []:
        character = getattr(placement, "character", None)
        if character is not None and character.image_url:
            canvas = _draw_character(canvas, placement, load_image)

    # scene number badge
    canvas = _overlay(canvas, lambda d: d.rectangle([10, 10, 110, 50], fill=(0, 0, 0, 128)))
    ImageDraw.Draw(canvas).text((20, 18), f"Scene {scene.scene_number}", font=load_font(20), fill="white")

    if scene.audio_url:
        cx, cy = FRAME_WIDTH - 30, 30

        def indicator(d):
            d.ellipse([cx - 15, cy - 15, cx + 15, cy + 15], fill=(0, 255, 0, 128))
            d.rectangle([FRAME_WIDTH - 100, 50, FRAME_WIDTH - 10, 75], fill=(0, 0, 0, 179))

        canvas = _overlay(canvas, indicator)
        draw = ImageDraw.Draw(canvas)
        _draw_centered(draw, (cx, cy), "♪", load_font(16, bold=True))

        label = f"{scene.duration or '?'}s"
        font = load_font(12)
        left, _, right, _ = draw.textbbox((0, 0), label, font=font)
        draw.text((FRAME_WIDTH - 15 - (right - left), 56), label, font=font, fill="white")

    return encode_png(canvas)


def render_placeholder_frame(scene_number: int) -> bytes:
    canvas = gradient_canvas()
    draw = ImageDraw.Draw(canvas)
    mid_x, mid_y = FRAME_WIDTH / 2, FRAME_HEIGHT / 2
    _draw_centered(draw, (mid_x, mid_y), f"Scene {scene_number}", load_font(48, bold=True))
    _draw_centered(draw, (mid_x, mid_y + 50), "Rendering preview...", load_font(24))
    return encode_png(canvas)


def render_title_card(title: str, scene_count: int, audio_scene_count: int = 0) -> bytes:
    canvas = gradient_canvas()
    draw = ImageDraw.Draw(canvas)
    mid_x, mid_y = FRAME_WIDTH / 2, FRAME_HEIGHT / 2
    _draw_centered(draw, (mid_x, mid_y - 50), title, load_font(64, bold=True))
    _draw_centered(draw, (mid_x, mid_y + 30), f"{scene_count} Scenes", load_font(32))
    if audio_scene_count > 0:
        _draw_centered(draw, (mid_x, mid_y + 80), f"{audio_scene_count} scenes with audio", load_font(24))
    return encode_png(canvas)


def render_export_card(title: str, scene_count: int) -> bytes:
    """Static card returned when no video could be produced at all."""
    # hsl(240, 70%, 60%)
    canvas = Image.new("RGBA", (FRAME_WIDTH, FRAME_HEIGHT), "#5252e0")
    draw = ImageDraw.Draw(canvas)
    mid_x, mid_y = FRAME_WIDTH / 2, FRAME_HEIGHT / 2
    heading = load_font(48, bold=True)
    _draw_centered(draw, (mid_x, mid_y - 50), title, heading)
    _draw_centered(draw, (mid_x, mid_y + 30), f"{scene_count} scenes", heading)
    _draw_centered(draw, (mid_x, mid_y + 80), "Video Export", load_font(24))
    return encode_png(canvas)
