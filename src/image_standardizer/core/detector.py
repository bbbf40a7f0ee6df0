"""
detector.py: Locate the photographed object on a near-white backdrop.

A pixel counts as background when it is nearly transparent or when every
color channel is close to white. The detected box is the smallest
axis-aligned rectangle enclosing every other (foreground) pixel.
"""

import numpy as np

from .models import PixelGrid, Rectangle
from ..utils.log_utils import get_logger

logger = get_logger(__name__)

# Alpha at or below this is treated as transparent background.
ALPHA_BACKGROUND_THRESHOLD = 20
# R, G and B all at or above this is treated as white background.
WHITE_THRESHOLD = 252
# Rows classified per step; bounds the temporary mask memory.
BAND_ROWS = 64


def foreground_mask(pixels: np.ndarray) -> np.ndarray:
    """Return a boolean mask of foreground pixels for an (..., 4) RGBA array."""
    opaque = pixels[..., 3] > ALPHA_BACKGROUND_THRESHOLD
    white = np.all(pixels[..., :3] >= WHITE_THRESHOLD, axis=-1)
    return opaque & ~white


def detect(source: PixelGrid) -> Rectangle:
    """
    Compute the bounding box of the non-background content of `source`.

    The grid is scanned once, a band of rows at a time, keeping only the
    running min/max of x and y.

    Args:
        source: Decoded image.

    Returns:
        Rectangle with integer coordinates inside the source bounds. When no
        pixel is foreground the full image rectangle is returned.
    """
    pixels = source.as_array()
    min_x, min_y = source.width, source.height
    max_x = max_y = -1

    for top in range(0, source.height, BAND_ROWS):
        mask = foreground_mask(pixels[top:top + BAND_ROWS])
        rows = np.flatnonzero(mask.any(axis=1))
        if rows.size == 0:
            continue
        cols = np.flatnonzero(mask.any(axis=0))
        min_y = min(min_y, top + int(rows[0]))
        max_y = max(max_y, top + int(rows[-1]))
        min_x = min(min_x, int(cols[0]))
        max_x = max(max_x, int(cols[-1]))

    if max_y < 0:
        logger.debug("No foreground in %dx%d image, using full frame", source.width, source.height)
        return Rectangle(0, 0, source.width, source.height)
    return Rectangle(min_x, min_y, max_x - min_x + 1, max_y - min_y + 1)
