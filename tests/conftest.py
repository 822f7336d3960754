"""Shared fixtures for imgcrop tests."""

from io import BytesIO

import pytest
from PIL import Image


def indexed_image(width: int, height: int) -> Image.Image:
    """Create an ``I`` mode image whose pixel (x, y) holds ``y * width + x``.

    Every pixel is unique, so the value at (0, 0) of a crop tells exactly
    which source pixel it came from.
    """
    img = Image.new("I", (width, height))
    img.putdata(list(range(width * height)))
    return img


@pytest.fixture
def make_indexed():
    return indexed_image


@pytest.fixture
def rgb_image() -> Image.Image:
    """A 64x48 RGB image with a different colour in each quadrant."""
    img = Image.new("RGB", (64, 48), color=(255, 0, 0))
    img.paste((0, 255, 0), (32, 0, 64, 24))
    img.paste((0, 0, 255), (0, 24, 32, 48))
    img.paste((255, 255, 0), (32, 24, 64, 48))
    return img


@pytest.fixture
def png_bytes(rgb_image: Image.Image) -> bytes:
    buffer = BytesIO()
    rgb_image.save(buffer, format="PNG")
    return buffer.getvalue()
