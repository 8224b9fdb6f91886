#!/usr/bin/env python3
"""
Interactive shell for the ASCII art generator.

Reads one command per line, edits the session (image, resolution,
character set, output mode) and renders ASCII art on request. Errors are
reported and the previous state is kept.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .algorithm import ArtGenerator
from .charsets import CharacterSets, parse_char_edit
from .config import DEFAULT_RESOLUTION, OUTPUT_MODES, Session
from .display import AsciiOutput, ConsoleAsciiOutput, HtmlAsciiOutput
from .exceptions import (
    AsciiArtError,
    EmptyCharsetError,
    InvalidCommandError,
    InvalidImageError,
    InvalidResolutionError,
)
from .glyphs import FontGlyphRasterizer, GlyphRasterizer
from .image import RasterImage

logger = logging.getLogger(__name__)


class AsciiArtShell:
    """
    Command loop over one Session.

    The ArtGenerator is created with the first image and then kept in
    step with the session on every edit.
    """

    PROMPT = ">>> "

    HELP_TEXT = """
Commands:
  chars              Show the current character set
  add <c|a-z|space|all>
  remove <c|a-z|space|all>
                     Edit the character set
  res up|down        Double or halve the resolution
  image <path>       Load another image
  output console|html
                     Choose where asciiArt writes
  asciiArt           Render the current image
  help               Show this help
  exit               Quit
"""

    def __init__(
        self,
        session: Optional[Session] = None,
        rasterizer: Optional[GlyphRasterizer] = None,
        stdin=None,
        stdout=None
    ):
        """
        Initialize the shell.

        Args:
            session: Starting state (defaults to Session())
            rasterizer: Glyph source (defaults to the session's font)
            stdin: Command stream (defaults to stdin)
            stdout: Output stream (defaults to stdout)
        """
        self.session = session or Session()
        self.rasterizer = rasterizer or FontGlyphRasterizer(
            font_path=self.session.font_path,
            font_name=self.session.font_name
        )
        self.input = stdin or sys.stdin
        self.output = stdout or sys.stdout
        self.generator: Optional[ArtGenerator] = None

        if self.session.image is not None:
            self.generator = self._new_generator(self.session.image)
            self.session.resolution = self.generator.resolution

    def _new_generator(self, image: RasterImage) -> ArtGenerator:
        return ArtGenerator(
            image,
            self.session.resolution,
            self.session.charset,
            rasterizer=self.rasterizer
        )

    def _print(self, text: str):
        self.output.write(text + "\n")

    def _require_generator(self) -> ArtGenerator:
        if self.generator is None:
            raise InvalidImageError("Did not execute. No image selected.")
        return self.generator

    def run(self) -> int:
        """Read and execute commands until "exit" or end of input."""
        while True:
            self.output.write(self.PROMPT)
            self.output.flush()

            line = self.input.readline()
            if not line:
                break

            try:
                if not self.execute(line):
                    break
            except AsciiArtError as e:
                self._print(str(e))

        return 0

    def execute(self, line: str) -> bool:
        """
        Execute one command line.

        Returns:
            False if the shell should stop, True otherwise

        Raises:
            AsciiArtError: If the command is rejected
        """
        parts = line.split()
        if not parts:
            return True
        if len(parts) > 2:
            raise InvalidCommandError()

        command, arg = parts[0], (parts[1] if len(parts) == 2 else None)

        if command == "exit" and arg is None:
            return False

        handlers = {
            "chars": self._show_charset,
            "help": self._show_help,
            "asciiArt": self.render,
        }
        arg_handlers = {
            "add": self.add_chars,
            "remove": self.remove_chars,
            "res": self.change_resolution,
            "image": self.load_image,
            "output": self.change_output,
        }

        if command in handlers and arg is None:
            handlers[command]()
        elif command in arg_handlers and arg is not None:
            arg_handlers[command](arg)
        else:
            raise InvalidCommandError()

        return True

    def _show_charset(self):
        self._print(" ".join(self.session.sorted_charset()))

    def _show_help(self):
        self._print(self.HELP_TEXT.strip("\n"))

    def add_chars(self, token: str):
        for char in parse_char_edit(token, "add"):
            if self.generator is not None:
                self.generator.add_char(char)
            self.session.charset.add(char)

    def remove_chars(self, token: str):
        for char in parse_char_edit(token, "remove"):
            if self.generator is not None:
                self.generator.remove_char(char)
            self.session.charset.discard(char)

    def change_resolution(self, direction: str):
        if direction not in ("up", "down"):
            raise InvalidResolutionError(
                "Did not change resolution due to incorrect format."
            )

        generator = self._require_generator()
        if direction == "up":
            generator.double_resolution()
        else:
            generator.halve_resolution()

        self.session.resolution = generator.resolution
        self._print(f"Resolution set to {generator.resolution}.")

    def load_image(self, path: str):
        if path == self.session.image_path and self.generator is not None:
            return

        image = RasterImage.from_file(path)
        if self.generator is None:
            self.generator = self._new_generator(image)
        else:
            self.generator.set_image(image)

        self.session.image = image
        self.session.image_path = path
        self.session.resolution = self.generator.resolution

    def change_output(self, mode: str):
        if mode not in OUTPUT_MODES:
            raise InvalidCommandError(
                "Did not change output method due to incorrect format."
            )
        self.session.output = mode

    def _renderer(self) -> AsciiOutput:
        if self.session.output == "html":
            return HtmlAsciiOutput(self.session.html_path, self.session.font_name)
        return ConsoleAsciiOutput(self.output)

    def render(self):
        """Generate ASCII art and hand it to the selected renderer."""
        if not self.session.charset:
            raise EmptyCharsetError()

        result = self._require_generator().run()
        self._renderer().out(result.grid)


def _positive_int(value: str) -> int:
    """argparse type for a resolution."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="ASCII Art - Convert images to ASCII art by glyph brightness",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ascii-art cat.jpeg                  Open the shell with an image loaded
  ascii-art cat.jpeg --run            Print the art once and exit
  ascii-art cat.jpeg -r 64 -s standard --run
  ascii-art cat.jpeg -o html --html-path cat.html --run

Character Sets (use -s option):
  digits     - 0123456789 (default)
  printable  - every visible ASCII character and space
  standard   - Basic ASCII chars: .:-=+*#%@
  detailed   - Extended ASCII for better gradients
  minimal    - Simple set: .-+*#
"""
    )

    parser.add_argument(
        "image",
        nargs="?",
        help="Image file to convert"
    )
    parser.add_argument(
        "-r", "--resolution",
        type=_positive_int,
        help=f"Characters per row (default: {DEFAULT_RESOLUTION})"
    )
    parser.add_argument(
        "-s", "--charset",
        choices=CharacterSets.NAMES,
        default="digits",
        help="Starting character set"
    )
    parser.add_argument(
        "-o", "--output",
        choices=OUTPUT_MODES,
        default="console",
        help="Output method"
    )
    parser.add_argument(
        "--html-path",
        default="out.html",
        help="HTML output file (default: out.html)"
    )
    parser.add_argument(
        "--font",
        help="Path to a TTF font used to measure glyph brightness"
    )
    parser.add_argument(
        "--run",
        action="store_true",
        help="Render once and exit instead of starting the shell"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    session = Session(
        charset=set(CharacterSets.get(args.charset)),
        output=args.output,
        html_path=args.html_path,
        font_path=args.font
    )
    shell = AsciiArtShell(session)

    try:
        if args.image:
            shell.load_image(args.image)
            if args.resolution is not None:
                shell.generator.set_resolution(args.resolution)
                session.resolution = args.resolution
        elif args.resolution is not None:
            session.resolution = args.resolution

        if args.run:
            shell.render()
            return 0
    except AsciiArtError as e:
        print(e, file=sys.stderr)
        return 1

    return shell.run()


if __name__ == "__main__":
    sys.exit(main())
