"""
End-to-end ASCII art generation.

Ties the image tiler and the character matcher together and memoizes
the last result against the resolution, character set and image it was
produced from.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from .exceptions import EmptyCharsetError, InvalidResolutionError
from .glyphs import FontGlyphRasterizer, GlyphRasterizer
from .image import ImageTiler, RasterImage
from .matcher import BrightnessCharMatcher

logger = logging.getLogger(__name__)

CharGrid = Tuple[Tuple[str, ...], ...]


@dataclass(frozen=True)
class AsciiArtResult:
    """Character grid produced by one conversion, addressed [row][col]."""
    grid: CharGrid
    resolution: int
    charset_version: int

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def columns(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    def lines(self, separator: str = "") -> List[str]:
        return [separator.join(row) for row in self.grid]

    def __str__(self) -> str:
        return "\n".join(self.lines())


class ArtGenerator:
    """
    Converts one image to ASCII art at a mutable resolution and charset.

    Setters only record the change; the work happens on the next run().
    """

    def __init__(
        self,
        image: RasterImage,
        resolution: int,
        characters: Iterable[str],
        rasterizer: Optional[GlyphRasterizer] = None
    ):
        """
        Initialize the generator.

        Args:
            image: Source image
            resolution: Number of characters per output row
            characters: Initial character set
            rasterizer: Glyph source shared by every matcher built here
        """
        self.rasterizer = rasterizer or FontGlyphRasterizer()

        self._image = image
        self._tiler = ImageTiler(image)
        self._image_version = 0

        self._resolution = self._fit_resolution(resolution)

        self._charset = set(characters)
        self._charset_version = 0
        self._matcher: Optional[BrightnessCharMatcher] = None

        self._cache: Optional[AsciiArtResult] = None
        self._cache_key: Optional[Tuple[int, int, int]] = None

    @property
    def image(self) -> RasterImage:
        return self._image

    @property
    def resolution(self) -> int:
        return self._resolution

    @property
    def characters(self) -> Tuple[str, ...]:
        return tuple(sorted(self._charset))

    @property
    def charset_version(self) -> int:
        return self._charset_version

    @property
    def cached_result(self) -> Optional[AsciiArtResult]:
        return self._cache

    def resolution_bounds(self) -> Tuple[int, int]:
        """Smallest and largest resolution allowed for the current image."""
        width, height = self._image.width, self._image.height
        return max(1, width // height), width

    def _fit_resolution(self, resolution: int) -> int:
        """Halve, then clamp, a resolution until it fits the current image."""
        low, high = self.resolution_bounds()
        while resolution > high and resolution // 2 >= low:
            resolution //= 2
        return min(max(resolution, low), high)

    def set_resolution(self, resolution: int):
        """
        Change the number of characters per row.

        Raises:
            InvalidResolutionError: If resolution is outside resolution_bounds()
        """
        low, high = self.resolution_bounds()
        if (
            isinstance(resolution, bool)
            or not isinstance(resolution, int)
            or not low <= resolution <= high
        ):
            raise InvalidResolutionError()

        if resolution != self._resolution:
            logger.info("Resolution %d -> %d", self._resolution, resolution)
        self._resolution = resolution

    def double_resolution(self):
        self.set_resolution(self._resolution * 2)

    def halve_resolution(self):
        self.set_resolution(self._resolution // 2)

    def set_image(self, image: RasterImage):
        """
        Replace the source image.

        A resolution the new image cannot hold is brought back into
        resolution_bounds().
        """
        self._tiler = ImageTiler(image)
        self._image = image
        fitted = self._fit_resolution(self._resolution)
        if fitted != self._resolution:
            logger.info("Resolution %d -> %d to fit new image", self._resolution, fitted)
            self._resolution = fitted
        self._image_version += 1

    def set_character_set(self, characters: Iterable[str]):
        """Replace the whole character set; the matcher is rebuilt on run()."""
        self._charset = set(characters)
        self._matcher = None
        self._charset_version += 1

    def add_char(self, char: str):
        if char in self._charset:
            return
        if self._matcher is not None:
            self._matcher.add_char(char)
        self._charset.add(char)
        self._charset_version += 1

    def remove_char(self, char: str):
        if char not in self._charset:
            return
        if self._matcher is not None:
            self._matcher.remove_char(char)
        self._charset.discard(char)
        self._charset_version += 1

    def run(self) -> AsciiArtResult:
        """
        Produce the ASCII art for the current settings.

        Raises:
            EmptyCharsetError: If the character set is empty
            InvalidResolutionError: If the image cannot be tiled at the
                current resolution
        """
        key = (self._resolution, self._charset_version, self._image_version)
        if self._cache is not None and self._cache_key == key:
            logger.debug("Returning cached ASCII art for %s", key)
            return self._cache

        if not self._charset:
            raise EmptyCharsetError()

        if self._matcher is None:
            self._matcher = BrightnessCharMatcher(self._charset, self.rasterizer)

        brightness = self._tiler.tile(self._resolution)

        # Tiles often repeat brightness values (padding, flat regions)
        matched: Dict[float, str] = {}
        rows = []
        for row in brightness:
            chars = []
            for value in row:
                value = float(value)
                char = matched.get(value)
                if char is None:
                    char = matched[value] = self._matcher.nearest_char(value)
                chars.append(char)
            rows.append(tuple(chars))

        result = AsciiArtResult(
            grid=tuple(rows),
            resolution=self._resolution,
            charset_version=self._charset_version
        )
        logger.debug("Generated %dx%d ASCII art", result.columns, result.rows)

        self._cache = result
        self._cache_key = key
        return result
