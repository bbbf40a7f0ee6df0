"""Tests for bounding-box detection."""

from __future__ import annotations

from PIL import Image

from image_standardizer.core.detector import ALPHA_BACKGROUND_THRESHOLD, BAND_ROWS, WHITE_THRESHOLD, detect
from image_standardizer.core.models import PixelGrid, Rectangle

from conftest import make_image


def test_all_white_returns_full_frame() -> None:
    grid = PixelGrid.from_image(make_image(size=(17, 9), box=None))

    assert detect(grid) == Rectangle(0, 0, 17, 9)


def test_fully_transparent_returns_full_frame() -> None:
    grid = PixelGrid.from_image(Image.new("RGBA", (12, 20), (0, 0, 0, 0)))

    assert detect(grid) == Rectangle(0, 0, 12, 20)


def test_single_dark_pixel() -> None:
    img = make_image(size=(10, 10), box=None)
    img.putpixel((3, 7), (0, 0, 0, 255))

    assert detect(PixelGrid.from_image(img)) == Rectangle(3, 7, 1, 1)


def test_rectangle_extent_is_inclusive() -> None:
    grid = PixelGrid.from_image(make_image(size=(40, 30), box=(10, 5, 12, 8)))

    box = detect(grid)

    assert box == Rectangle(10, 5, 12, 8)
    assert box.right <= grid.width and box.bottom <= grid.height


def test_near_white_pixels_are_background() -> None:
    near_white = (WHITE_THRESHOLD, WHITE_THRESHOLD, 255, 255)
    img = make_image(size=(20, 20), box=(2, 2, 5, 5), color=near_white)
    img.putpixel((15, 16), (WHITE_THRESHOLD - 1, 255, 255, 255))

    assert detect(PixelGrid.from_image(img)) == Rectangle(15, 16, 1, 1)


def test_low_alpha_pixels_are_background() -> None:
    img = make_image(size=(20, 20), box=(0, 0, 20, 20), color=(0, 0, 0, ALPHA_BACKGROUND_THRESHOLD))
    img.putpixel((4, 9), (0, 0, 0, ALPHA_BACKGROUND_THRESHOLD + 1))

    assert detect(PixelGrid.from_image(img)) == Rectangle(4, 9, 1, 1)


def test_object_touching_edges() -> None:
    img = make_image(size=(8, 6), box=None)
    img.putpixel((0, 0), (10, 10, 10, 255))
    img.putpixel((7, 5), (10, 10, 10, 255))

    assert detect(PixelGrid.from_image(img)) == Rectangle(0, 0, 8, 6)


def test_object_spanning_several_bands() -> None:
    height = BAND_ROWS * 3 + 5
    img = make_image(size=(30, height), box=None)
    img.putpixel((25, 2), (0, 0, 0, 255))
    img.putpixel((4, BAND_ROWS + 1), (0, 0, 0, 255))
    img.putpixel((11, height - 1), (0, 0, 0, 255))

    assert detect(PixelGrid.from_image(img)) == Rectangle(4, 2, 22, height - 2)
