"""
Image handling for the ASCII art engine.

Loads raster images with Pillow, pads them to power-of-two dimensions,
and splits the padded image into square tiles whose average luminance
drives character selection.
"""

import logging
from typing import Optional, Tuple, Union

import numpy as np
from PIL import Image

from .exceptions import InvalidImageError, InvalidResolutionError

logger = logging.getLogger(__name__)

WHITE = 255


def next_power_of_two(num: int) -> int:
    """Smallest power of two that is >= num (1 for num <= 1)."""
    if num <= 1:
        return 1
    return 1 << (num - 1).bit_length()


def padding_for(size: int) -> Tuple[int, int]:
    """
    Split the padding needed to reach the next power of two.

    Returns (leading, trailing); an odd remainder goes to the trailing edge.
    """
    total = next_power_of_two(size) - size
    leading = total // 2
    return leading, total - leading


def pad_image(pixels: np.ndarray) -> np.ndarray:
    """Pad an (H, W, 3) pixel array with white up to power-of-two sides."""
    height, width = pixels.shape[:2]
    top, bottom = padding_for(height)
    left, right = padding_for(width)

    logger.debug(
        "Padding %dx%d image: top=%d bottom=%d left=%d right=%d",
        width, height, top, bottom, left, right
    )

    padded = np.pad(
        pixels,
        ((top, bottom), (left, right), (0, 0)),
        mode="constant",
        constant_values=WHITE
    )
    padded.flags.writeable = False
    return padded


class RasterImage:
    """
    Immutable grid of RGB pixels.

    Pixels are stored as a read-only (height, width, 3) uint8 array and
    addressed [row][col].
    """

    def __init__(self, pixels: np.ndarray):
        """
        Wrap a pixel array.

        Args:
            pixels: Array of shape (height, width, 3) with values 0-255
        """
        array = np.asarray(pixels)

        if array.ndim != 3 or array.shape[2] != 3:
            raise InvalidImageError(
                f"Image must be an RGB pixel grid, got shape {array.shape}"
            )
        if array.shape[0] == 0 or array.shape[1] == 0:
            raise InvalidImageError("Image must be at least 1x1 pixels")

        self._pixels = np.array(array, dtype=np.uint8)
        self._pixels.flags.writeable = False

    @classmethod
    def from_file(cls, filepath: str) -> "RasterImage":
        """
        Load an image file as RGB.

        Raises:
            InvalidImageError: If the file is missing or cannot be decoded
        """
        try:
            with Image.open(filepath) as img:
                image = cls.from_pil(img)
        except OSError as e:
            raise InvalidImageError() from e

        logger.info("Loaded image %s (%dx%d)", filepath, image.width, image.height)
        return image

    @classmethod
    def from_pil(cls, image: Image.Image) -> "RasterImage":
        """Convert a PIL Image (any mode) to a RasterImage."""
        return cls(np.array(image.convert("RGB")))

    @classmethod
    def filled(
        cls,
        width: int,
        height: int,
        color: Union[int, Tuple[int, int, int]] = WHITE
    ) -> "RasterImage":
        """Create a single-colour image."""
        if isinstance(color, int):
            color = (color, color, color)
        pixels = np.empty((max(height, 0), max(width, 0), 3), dtype=np.uint8)
        pixels[:, :] = color
        return cls(pixels)

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    def get_pixel(self, row: int, col: int) -> Tuple[int, int, int]:
        r, g, b = self._pixels[row, col]
        return int(r), int(g), int(b)


class ImageTiler:
    """
    Splits a padded image into square tiles and measures their brightness.

    The padded image is computed once per source image. The tile grid is
    recomputed only when the requested resolution changes.
    """

    # Rec. 709 luma weights
    LUMA_WEIGHTS = np.array([0.2126, 0.7152, 0.0722])

    def __init__(self, image: RasterImage):
        if image.width <= 0 or image.height <= 0:
            raise InvalidImageError("Image must be at least 1x1 pixels")

        self.image = image
        self._padded = pad_image(image.pixels)
        self._luma: Optional[np.ndarray] = None
        self._resolution: Optional[int] = None
        self._brightness: Optional[np.ndarray] = None

    @property
    def padded(self) -> np.ndarray:
        return self._padded

    @property
    def padded_width(self) -> int:
        return self._padded.shape[1]

    @property
    def padded_height(self) -> int:
        return self._padded.shape[0]

    @property
    def resolution(self) -> Optional[int]:
        """Resolution of the last tiling, or None before the first call."""
        return self._resolution

    def block_size(self, resolution: int) -> int:
        """Side length in pixels of one tile at the given resolution."""
        return max(1, self.padded_width // resolution)

    def _luminance(self) -> np.ndarray:
        if self._luma is None:
            self._luma = self._padded.astype(np.float64) @ self.LUMA_WEIGHTS
        return self._luma

    def tile(self, resolution: int) -> np.ndarray:
        """
        Compute per-tile brightness at the given resolution.

        Args:
            resolution: Number of tile columns

        Returns:
            Read-only (rows, resolution) array of brightness values in
            [0, 1], where 0 is black and 1 is white

        Raises:
            InvalidResolutionError: If resolution is not a positive integer
                or exceeds the padded image width
        """
        if (
            isinstance(resolution, bool)
            or not isinstance(resolution, (int, np.integer))
            or resolution <= 0
        ):
            raise InvalidResolutionError(
                f"Resolution must be a positive integer, got {resolution!r}"
            )

        if resolution == self._resolution and self._brightness is not None:
            return self._brightness

        if resolution > self.padded_width:
            raise InvalidResolutionError(
                f"Resolution {resolution} exceeds padded image width {self.padded_width}"
            )

        block = self.block_size(resolution)
        rows = self.padded_height // block
        if rows == 0:
            raise InvalidResolutionError(
                f"Resolution {resolution} leaves no full tile row "
                f"in a {self.padded_height} pixel tall image"
            )

        logger.debug(
            "Tiling %dx%d padded image: %d rows x %d cols of %dpx blocks",
            self.padded_width, self.padded_height, rows, resolution, block
        )

        region = self._luminance()[:rows * block, :resolution * block]
        sums = region.reshape(rows, block, resolution, block).sum(axis=(1, 3))
        brightness = np.clip(sums / (WHITE * block * block), 0.0, 1.0)
        brightness.flags.writeable = False

        self._resolution = int(resolution)
        self._brightness = brightness
        return brightness
