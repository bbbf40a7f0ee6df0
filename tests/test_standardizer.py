"""Tests for decode/encode and the single-image pipeline."""

from __future__ import annotations

import io

import pytest
from PIL import Image

from image_standardizer.core.errors import DecodeFailed, EncodeFailed, InfeasiblePaddingError
from image_standardizer.core.models import CanvasSpec, PaddingSpec, PixelGrid
from image_standardizer.core.pixels import decode, encode
from image_standardizer.core.standardizer import standardize, standardize_image

from conftest import make_image, to_bytes


def test_decode_returns_rgba_grid() -> None:
    raw = to_bytes(make_image(size=(40, 30)).convert("RGB"), "JPEG")

    grid = decode(raw)

    assert (grid.width, grid.height) == (40, 30)
    assert len(grid.samples) == 40 * 30 * 4


@pytest.mark.parametrize("raw", [b"", b"not an image at all", b"GIF89a"])
def test_decode_rejects_garbage(raw: bytes) -> None:
    with pytest.raises(DecodeFailed):
        decode(raw)


def test_encode_rejects_unknown_format() -> None:
    grid = PixelGrid.from_image(make_image())

    with pytest.raises(EncodeFailed):
        encode(grid, "NOT-A-FORMAT")


def test_pixel_grid_checks_buffer_length() -> None:
    with pytest.raises(ValueError):
        PixelGrid(2, 2, b"\x00" * 15)


def test_end_to_end_square_object_fills_safe_zone() -> None:
    canvas = CanvasSpec(width=2000, height=2000, padding=PaddingSpec(150, 150, 150, 150))
    raw = to_bytes(make_image(size=(500, 500), box=(100, 100, 300, 300), color=(0, 0, 0, 255)))

    result = standardize(raw, canvas)

    assert result.ok
    assert (result.image.width, result.image.height) == (2000, 2000)
    assert result.image.format == "JPEG"
    with Image.open(io.BytesIO(result.image.data)) as out:
        assert out.size == (2000, 2000)
        rgb = out.convert("RGB")
        assert max(rgb.getpixel((1000, 1000))) < 30
        assert max(rgb.getpixel((160, 160))) < 30
        assert max(rgb.getpixel((1840, 1840))) < 30
        assert min(rgb.getpixel((50, 50))) > 225
        assert min(rgb.getpixel((1950, 1000))) > 225


def test_output_size_ignores_object_size(small_canvas: CanvasSpec) -> None:
    raw = to_bytes(make_image(size=(400, 30), box=(0, 0, 400, 30)))

    image = standardize_image(raw, small_canvas)

    with Image.open(io.BytesIO(image.data)) as out:
        assert out.size == (small_canvas.width, small_canvas.height)


def test_blank_image_uses_full_frame(small_canvas: CanvasSpec) -> None:
    raw = to_bytes(make_image(size=(20, 20), box=None))

    assert standardize(raw, small_canvas).ok


def test_decode_failure_is_returned_not_raised(small_canvas: CanvasSpec) -> None:
    result = standardize(b"garbage", small_canvas)

    assert not result.ok
    assert isinstance(result.error, DecodeFailed)
    assert result.error.kind == "DecodeFailed"


def test_infeasible_padding_is_returned() -> None:
    canvas = CanvasSpec(width=100, height=100, padding=PaddingSpec(0, 0, 60, 40))

    result = standardize(to_bytes(make_image()), canvas)

    assert isinstance(result.error, InfeasiblePaddingError)



@pytest.mark.parametrize("fmt", ["PNG", "JPEG"])
def test_truncated_file_fails_to_decode(fmt: str, small_canvas: CanvasSpec) -> None:
    raw = to_bytes(Image.effect_noise((200, 200), 64).convert("RGB"), fmt)
    cut = raw[: len(raw) // 2]

    result = standardize(cut, small_canvas)

    assert not result.ok
    assert isinstance(result.error, DecodeFailed)
