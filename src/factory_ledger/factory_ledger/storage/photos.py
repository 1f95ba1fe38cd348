from __future__ import annotations

import io
import uuid
from datetime import datetime

from PIL import Image, ImageOps, UnidentifiedImageError

from ..core.constants import DEFAULT_PHOTO_MAX_SIZE, PHOTO_KEY_PREFIX
from ..core.exceptions import ValidationError


def photo_key(now: datetime) -> str:
    """Time-based blob key for a worker photo, unique within the same millisecond."""
    return f"{PHOTO_KEY_PREFIX}/{int(now.timestamp() * 1000)}_{uuid.uuid4().hex[:8]}.jpg"


def normalize_photo(data: bytes, *, max_size: int = DEFAULT_PHOTO_MAX_SIZE) -> bytes:
    """Re-encode any readable image as an RGB JPEG no larger than max_size px per side."""

    if not data:
        raise ValidationError("Photo is empty")
    try:
        img = Image.open(io.BytesIO(data))
        img = ImageOps.exif_transpose(img)
        img = img.convert("RGB")
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError):
        raise ValidationError("Photo is not a readable image")

    img.thumbnail((max_size, max_size))
    out = io.BytesIO()
    img.save(out, format="JPEG", quality=85)
    return out.getvalue()
