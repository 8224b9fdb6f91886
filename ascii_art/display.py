"""
Output renderers for ASCII art grids.

A grid is any sequence of rows, each a sequence of single characters.
Renderers write it as-is; they never change its contents.
"""

import html
import logging
import sys
from typing import Sequence

from .config import DEFAULT_FONT_NAME, DEFAULT_HTML_PATH
from .exceptions import OutputError

logger = logging.getLogger(__name__)

Grid = Sequence[Sequence[str]]


class AsciiOutput:
    """Base class for grid renderers."""

    def out(self, grid: Grid):
        raise NotImplementedError


class ConsoleAsciiOutput(AsciiOutput):
    """
    Writes a grid to a text stream.

    Characters in a row are separated by single spaces, which roughly
    squares up the cells in a terminal.
    """

    def __init__(self, stream=None):
        """
        Args:
            stream: Output stream (defaults to stdout)
        """
        self.output = stream or sys.stdout

    def out(self, grid: Grid):
        for row in grid:
            self.output.write(" ".join(row) + "\n")
        self.output.flush()


class HtmlAsciiOutput(AsciiOutput):
    """
    Writes a grid as a standalone HTML page.

    Each cell holds one literal character in a fixed-width font.
    """

    def __init__(
        self,
        filepath: str = DEFAULT_HTML_PATH,
        font_name: str = DEFAULT_FONT_NAME,
        font_size: int = 8,
        title: str = "ASCII Art",
        background: str = "#ffffff",
        foreground: str = "#000000"
    ):
        """
        Args:
            filepath: Output file path
            font_name: Monospace font family
            font_size: Font size in pixels
            title: HTML page title
            background: Background color
            foreground: Text color
        """
        self.filepath = filepath
        self.font_name = font_name
        self.font_size = font_size
        self.title = title
        self.background = background
        self.foreground = foreground

    def render(self, grid: Grid) -> str:
        """Build the HTML document for a grid."""
        body = "\n".join(
            "".join(html.escape(char) for char in row) for row in grid
        )

        return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{html.escape(self.title)}</title>
    <style>
        body {{
            background-color: {self.background};
            margin: 20px;
        }}
        .ascii-art {{
            color: {self.foreground};
            font-family: '{self.font_name}', Consolas, monospace;
            font-size: {self.font_size}px;
            line-height: 1.0;
            letter-spacing: 0;
            white-space: pre;
        }}
    </style>
</head>
<body>
    <div class="ascii-art">{body}</div>
</body>
</html>
"""

    def out(self, grid: Grid):
        content = self.render(grid)
        try:
            with open(self.filepath, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise OutputError(f"Could not write {self.filepath}: {e}") from e

        logger.info("Wrote ASCII art to %s", self.filepath)
