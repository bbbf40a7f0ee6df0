"""
compositor.py: Fit a source region into the safe zone of a white canvas.

The region is scaled uniformly (fit, never fill) so it touches the safe zone
on at least one axis, then centered inside the safe zone.
"""

from dataclasses import dataclass

from PIL import Image

from .errors import DegenerateBoundingBoxError, InfeasiblePaddingError
from .models import CanvasSpec, PixelGrid, Rectangle
from ..utils.log_utils import get_logger
from ..utils.utils import round_half_away

logger = get_logger(__name__)

BACKGROUND = (255, 255, 255, 255)

RESAMPLE_FILTER = Image.Resampling.LANCZOS


@dataclass(frozen=True)
class Placement:
    """Where and how large the source region lands on the canvas."""
    scale: float
    destination: Rectangle
    pixel_rect: Rectangle

    @property
    def scaled_width(self) -> float:
        return self.destination.width

    @property
    def scaled_height(self) -> float:
        return self.destination.height


def clamp_box(box: Rectangle, width: int, height: int) -> Rectangle:
    """Clip `box` to a width x height source; raise if nothing is left."""
    x0 = min(max(int(box.x), 0), width)
    y0 = min(max(int(box.y), 0), height)
    x1 = min(int(box.right), width)
    y1 = min(int(box.bottom), height)
    if x1 <= x0 or y1 <= y0:
        raise DegenerateBoundingBoxError(
            f"box {box.as_tuple()} has no area inside a {width}x{height} source"
        )
    return Rectangle(x0, y0, x1 - x0, y1 - y0)


def compute_placement(box: Rectangle, canvas: CanvasSpec) -> Placement:
    """
    Compute the scale factor and destination rectangle for `box` on `canvas`.

    Raises:
        InfeasiblePaddingError: If padding leaves no safe zone on an axis.
        DegenerateBoundingBoxError: If the box has zero width or height.
    """
    if not canvas.is_feasible:
        raise InfeasiblePaddingError(
            f"padding {canvas.padding} leaves no safe zone on a {canvas.width}x{canvas.height} canvas"
        )
    if box.width <= 0 or box.height <= 0:
        raise DegenerateBoundingBoxError(f"box {box.as_tuple()} has zero area")

    safe_w = canvas.safe_zone_width
    safe_h = canvas.safe_zone_height
    scale = min(safe_w / box.width, safe_h / box.height)
    scaled_w = box.width * scale
    scaled_h = box.height * scale
    dest_x = canvas.padding.left + (safe_w - scaled_w) / 2
    dest_y = canvas.padding.top + (safe_h - scaled_h) / 2

    # Round edges rather than sizes so both edges stay inside the safe zone.
    left = round_half_away(dest_x)
    top = round_half_away(dest_y)
    right = max(round_half_away(dest_x + scaled_w), left + 1)
    bottom = max(round_half_away(dest_y + scaled_h), top + 1)

    return Placement(
        scale=scale,
        destination=Rectangle(dest_x, dest_y, scaled_w, scaled_h),
        pixel_rect=Rectangle(left, top, right - left, bottom - top),
    )


def composite(source: PixelGrid, box: Rectangle, canvas: CanvasSpec) -> PixelGrid:
    """
    Copy the `box` region of `source` onto a new white canvas.

    Args:
        source: Decoded source image.
        box: Region of the source to keep, usually from detect().
        canvas: Target size and padding.

    Returns:
        A new opaque PixelGrid of exactly canvas.width x canvas.height.
    """
    box = clamp_box(box, source.width, source.height)
    placement = compute_placement(box, canvas)
    rect = placement.pixel_rect
    logger.debug(
        "Placing box %s at %s (scale %.4f)", box.as_tuple(), rect.as_tuple(), placement.scale
    )

    # Crop first so the filter never samples pixels outside the box.
    region = source.to_image().crop((box.x, box.y, box.right, box.bottom))
    region = region.resize((rect.width, rect.height), resample=RESAMPLE_FILTER)
    out = Image.new("RGBA", (canvas.width, canvas.height), BACKGROUND)
    out.alpha_composite(region, dest=(rect.x, rect.y))
    return PixelGrid.from_image(out)
