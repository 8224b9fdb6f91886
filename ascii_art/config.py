"""
Session configuration for the ASCII art shell.

Holds everything the shell mutates between commands (image, resolution,
character set, output mode) in one explicit object instead of globals.
"""

from dataclasses import dataclass, field
from typing import Optional, Set

from .image import RasterImage


DEFAULT_RESOLUTION = 128
DEFAULT_CHARSET = "0123456789"
DEFAULT_OUTPUT = "console"
DEFAULT_HTML_PATH = "out.html"
DEFAULT_FONT_NAME = "Courier New"

# Glyph bitmaps are GLYPH_SIZE x GLYPH_SIZE pixels
GLYPH_SIZE = 16

OUTPUT_MODES = ("console", "html")

# Visible printable ASCII, space included
PRINTABLE_FIRST = 32
PRINTABLE_LAST = 126


@dataclass
class Session:
    """Mutable state of one interactive shell session."""
    image_path: Optional[str] = None
    image: Optional[RasterImage] = None
    resolution: int = DEFAULT_RESOLUTION
    charset: Set[str] = field(default_factory=lambda: set(DEFAULT_CHARSET))
    output: str = DEFAULT_OUTPUT
    html_path: str = DEFAULT_HTML_PATH
    font_name: str = DEFAULT_FONT_NAME
    font_path: Optional[str] = None

    def sorted_charset(self) -> str:
        """Current characters in code point order."""
        return "".join(sorted(self.charset))
