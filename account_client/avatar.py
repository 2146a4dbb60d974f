"""Pre-upload checks for avatar images."""

from __future__ import annotations

import io
from typing import Tuple

from PIL import Image, UnidentifiedImageError

ALLOWED_TYPES = ("image/png", "image/jpeg")
MIN_WIDTH = 800
MIN_HEIGHT = 800


class AvatarPrecheckError(ValueError):
    """The image was rejected locally and should not be uploaded."""


def precheck_avatar(data: bytes, content_type: str) -> Tuple[int, int]:
    """Return the decoded ``(width, height)`` or raise :class:`AvatarPrecheckError`."""

    if content_type not in ALLOWED_TYPES:
        raise AvatarPrecheckError("Only PNG and JPG uploads are allowed.")

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
            width, height = img.size
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
        raise AvatarPrecheckError("Invalid image file.") from exc

    if width < MIN_WIDTH or height < MIN_HEIGHT:
        raise AvatarPrecheckError(f"Image must be at least {MIN_WIDTH}x{MIN_HEIGHT} px.")
    return width, height


__all__ = ["ALLOWED_TYPES", "AvatarPrecheckError", "MIN_HEIGHT", "MIN_WIDTH", "precheck_avatar"]
