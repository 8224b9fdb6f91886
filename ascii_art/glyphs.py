"""
Glyph rasterization.

Turns a single character into a fixed-size ink bitmap. The matcher only
needs the share of ink pixels, so anything that can produce a bitmap
(a real font, or a synthetic table in tests) can back it.
"""

import logging
from typing import Dict, Optional

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .config import DEFAULT_FONT_NAME, GLYPH_SIZE
from .exceptions import InvalidCharacterEditError

logger = logging.getLogger(__name__)


def _check_char(char: str):
    if not isinstance(char, str) or len(char) != 1:
        raise InvalidCharacterEditError(f"Expected a single character, got {char!r}")


class GlyphRasterizer:
    """
    Maps one character to a size x size boolean bitmap of ink pixels.

    Subclasses implement rasterize().
    """

    def __init__(self, size: int = GLYPH_SIZE):
        self.size = size

    @property
    def pixel_count(self) -> int:
        return self.size * self.size

    def rasterize(self, char: str) -> np.ndarray:
        raise NotImplementedError

    def brightness(self, char: str) -> float:
        """Share of ink pixels in the glyph bitmap, in [0, 1]."""
        return int(np.count_nonzero(self.rasterize(char))) / self.pixel_count


class FontGlyphRasterizer(GlyphRasterizer):
    """
    Rasterizes characters with a TrueType font through Pillow.

    Each glyph is drawn white-on-black, centred in a size x size
    greyscale canvas, and thresholded at mid-grey.
    """

    # Tried in order after an explicit font path and the configured name
    FONT_CANDIDATES = [
        "cour.ttf",
        "DejaVuSansMono.ttf",
        "LiberationMono-Regular.ttf",
        "UbuntuMono-R.ttf",
        "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
        "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    ]

    INK_THRESHOLD = 127

    def __init__(
        self,
        size: int = GLYPH_SIZE,
        font_path: Optional[str] = None,
        font_name: str = DEFAULT_FONT_NAME
    ):
        """
        Initialize the rasterizer.

        Args:
            size: Side of the square glyph bitmap in pixels
            font_path: Path to a TTF font file (optional)
            font_name: Font name tried before the built-in candidates
        """
        super().__init__(size)
        self.font_path = font_path
        self.font_name = font_name
        self._font = self._load_font()
        self._cache: Dict[str, np.ndarray] = {}

    def _load_font(self):
        """Load the first available monospace font."""
        candidates = [self.font_name] + self.FONT_CANDIDATES
        if self.font_path:
            candidates.insert(0, self.font_path)

        for font_name in candidates:
            try:
                return ImageFont.truetype(font_name, self.size)
            except OSError:
                continue

        logger.warning("No TrueType font found, falling back to Pillow's default font")
        return ImageFont.load_default()

    def rasterize(self, char: str) -> np.ndarray:
        _check_char(char)

        bitmap = self._cache.get(char)
        if bitmap is None:
            canvas = Image.new("L", (self.size, self.size), 0)
            draw = ImageDraw.Draw(canvas)

            left, top, right, bottom = draw.textbbox((0, 0), char, font=self._font)
            x = (self.size - (right - left)) / 2 - left
            y = (self.size - (bottom - top)) / 2 - top
            draw.text((x, y), char, fill=255, font=self._font)

            bitmap = np.array(canvas) > self.INK_THRESHOLD
            bitmap.flags.writeable = False
            self._cache[char] = bitmap

        return bitmap


class TableGlyphRasterizer(GlyphRasterizer):
    """
    Synthetic rasterizer driven by a {char: ink pixel count} table.

    Useful wherever brightness must not depend on installed fonts.
    """

    def __init__(self, table: Dict[str, int], size: int = GLYPH_SIZE):
        super().__init__(size)
        for char, ink in table.items():
            _check_char(char)
            if not 0 <= ink <= self.pixel_count:
                raise ValueError(
                    f"Ink count for {char!r} must be in [0, {self.pixel_count}], got {ink}"
                )
        self.table = dict(table)

    def rasterize(self, char: str) -> np.ndarray:
        _check_char(char)
        if char not in self.table:
            raise InvalidCharacterEditError(f"No glyph for {char!r}")

        flat = np.zeros(self.pixel_count, dtype=bool)
        flat[:self.table[char]] = True
        return flat.reshape(self.size, self.size)
