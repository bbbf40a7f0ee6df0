#!/usr/bin/env python3
"""
pixels.py: Decode raw image bytes into PixelGrids and encode PixelGrids back
into image bytes, using Pillow (and pillow-heif for HEIC input when installed).

Only the first frame of multi-frame formats is used. EXIF orientation is
applied on decode so the grid matches what a viewer displays.
"""

import io

try:
    from pillow_heif import register_heif_opener

    register_heif_opener()
except ImportError:
    pass

from PIL import Image, ImageOps, UnidentifiedImageError

from .errors import DecodeFailed, EncodeFailed
from .models import PixelGrid
from ..utils.log_utils import get_logger

logger = get_logger(__name__)

OUTPUT_FORMAT = "JPEG"
JPEG_QUALITY = 95


def decode(raw: bytes) -> PixelGrid:
    """
    Decode image bytes into an RGBA PixelGrid.

    Raises:
        DecodeFailed: If the bytes are empty or not a readable image.
    """
    if not raw:
        raise DecodeFailed("empty input")
    try:
        with Image.open(io.BytesIO(raw)) as img:
            img.load()
            img = ImageOps.exif_transpose(img)
            grid = PixelGrid.from_image(img)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError, SyntaxError) as err:
        logger.debug("Decode failed: %s", err)
        raise DecodeFailed(str(err) or type(err).__name__) from err
    return grid


def encode(grid: PixelGrid, fmt: str = OUTPUT_FORMAT, quality: int = JPEG_QUALITY) -> bytes:
    """
    Encode a PixelGrid into image bytes.

    Formats without alpha support (JPEG) are flattened to RGB; the canvas is
    opaque so nothing is lost.

    Raises:
        EncodeFailed: If Pillow rejects the grid or the format.
    """
    fmt = fmt.upper()
    img = grid.to_image()
    if fmt in ("JPEG", "JPG"):
        fmt = "JPEG"
        img = img.convert("RGB")
    buffer = io.BytesIO()
    try:
        if fmt in ("JPEG", "WEBP"):
            img.save(buffer, format=fmt, quality=quality)
        else:
            img.save(buffer, format=fmt)
    except (OSError, ValueError, KeyError) as err:
        raise EncodeFailed(f"cannot encode {grid.width}x{grid.height} grid as {fmt}: {err}") from err
    return buffer.getvalue()
