import os
import re
import uuid

from cartoon_creator.core.config import settings


def media_root() -> str:
    return settings.MEDIA_ROOT


def ensure_media_dirs():
    os.makedirs(media_root(), exist_ok=True)
    os.makedirs(os.path.join(media_root(), "exports"), exist_ok=True)


def slugify_title(title: str) -> str:
    """Lowercase the title and replace anything outside [a-z0-9] with '_'."""
    return re.sub(r"[^a-z0-9]", "_", (title or "").lower())


def save_export_bytes(export_id: int, data: bytes, extension: str = ".mp4") -> str:
    ensure_media_dirs()
    filename = f"{export_id}_{uuid.uuid4().hex}{extension}"
    path = os.path.join(media_root(), "exports", filename)

    with open(path, "wb") as f:
        f.write(data)

    return path
