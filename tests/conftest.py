"""Shared test fixtures."""

import numpy as np
import pytest

from ascii_art.glyphs import TableGlyphRasterizer
from ascii_art.image import RasterImage


# Ink pixel counts out of 256 for a small synthetic alphabet
SIMPLE_TABLE = {"a": 0, "b": 64, "e": 64, "c": 128, "d": 256}

DIGIT_TABLE = {
    "0": 100, "1": 40, "2": 90, "3": 95, "4": 80,
    "5": 95, "6": 105, "7": 60, "8": 120, "9": 105,
}

# Every printable ASCII character, ink growing with code point
PRINTABLE_TABLE = {chr(i): 2 * (i - 32) for i in range(32, 127)}


def grey_image(width, height, value=128):
    return RasterImage.filled(width, height, value)


def art_body(content):
    """Text inside the ascii-art div of an HTML page."""
    start = content.index('<div class="ascii-art">') + len('<div class="ascii-art">')
    return content[start:content.index("</div>", start)]


def split_image(width, height):
    """Left half black, right half white."""
    pixels = np.full((height, width, 3), 255, dtype=np.uint8)
    pixels[:, :width // 2] = 0
    return RasterImage(pixels)


@pytest.fixture
def simple_rasterizer():
    return TableGlyphRasterizer(SIMPLE_TABLE)


@pytest.fixture
def digit_rasterizer():
    return TableGlyphRasterizer(DIGIT_TABLE)


@pytest.fixture
def printable_rasterizer():
    return TableGlyphRasterizer(PRINTABLE_TABLE)
