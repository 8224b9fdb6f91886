"""
ASCII Art - convert images to text by glyph brightness

Splits an image into square tiles, measures each tile's luminance and
replaces it with the character whose rendered glyph is closest in
brightness. Includes:
- Power-of-two padding and memoized tiling
- An incrementally maintained brightness index of the character set
- Console and HTML output
- An interactive command shell
"""

__version__ = "1.0.0"

from .algorithm import ArtGenerator, AsciiArtResult
from .charsets import CharacterSets, parse_char_edit
from .config import Session
from .display import AsciiOutput, ConsoleAsciiOutput, HtmlAsciiOutput
from .exceptions import (
    AsciiArtError,
    EmptyCharsetError,
    InvalidCharacterEditError,
    InvalidCommandError,
    InvalidImageError,
    InvalidResolutionError,
    OutputError,
)
from .glyphs import FontGlyphRasterizer, GlyphRasterizer, TableGlyphRasterizer
from .image import ImageTiler, RasterImage, next_power_of_two, pad_image
from .matcher import BrightnessCharMatcher, BrightnessIndex
from .shell import AsciiArtShell

__all__ = [
    # Core
    "ArtGenerator",
    "AsciiArtResult",
    "BrightnessCharMatcher",
    "BrightnessIndex",
    "ImageTiler",
    "RasterImage",
    "next_power_of_two",
    "pad_image",
    # Glyphs
    "GlyphRasterizer",
    "FontGlyphRasterizer",
    "TableGlyphRasterizer",
    # Character sets
    "CharacterSets",
    "parse_char_edit",
    # Output
    "AsciiOutput",
    "ConsoleAsciiOutput",
    "HtmlAsciiOutput",
    # Shell
    "AsciiArtShell",
    "Session",
    # Errors
    "AsciiArtError",
    "EmptyCharsetError",
    "InvalidCharacterEditError",
    "InvalidCommandError",
    "InvalidImageError",
    "InvalidResolutionError",
    "OutputError",
]
