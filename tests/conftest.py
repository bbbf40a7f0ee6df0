"""Shared fixtures: small in-memory product photos."""

from __future__ import annotations

import io
from typing import Callable, Tuple

import pytest
from PIL import Image

from image_standardizer.core.models import CanvasSpec, PaddingSpec, PixelGrid

WHITE = (255, 255, 255, 255)


def make_image(
    size: Tuple[int, int] = (40, 30),
    box: Tuple[int, int, int, int] | None = (10, 5, 12, 8),
    color: Tuple[int, int, int, int] = (20, 40, 200, 255),
    background: Tuple[int, int, int, int] = WHITE,
) -> Image.Image:
    """White RGBA image with a solid rectangle (x, y, w, h) painted on it."""
    img = Image.new("RGBA", size, background)
    if box is not None:
        x, y, w, h = box
        img.paste(color, (x, y, x + w, y + h))
    return img


def to_bytes(img: Image.Image, fmt: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def image_bytes() -> Callable[..., bytes]:
    def factory(**kwargs) -> bytes:
        return to_bytes(make_image(**kwargs))

    return factory


@pytest.fixture
def grid_from() -> Callable[[Image.Image], PixelGrid]:
    return PixelGrid.from_image


@pytest.fixture
def small_canvas() -> CanvasSpec:
    return CanvasSpec(width=100, height=80, padding=PaddingSpec(top=10, bottom=10, left=10, right=10))
