"""
Error types raised by the ASCII art engine.

Every error carries the message the shell shows to the user, so callers
can report ``str(error)`` and keep their previous state.
"""


class AsciiArtError(Exception):
    """Base class for all recoverable ASCII art errors."""


class InvalidImageError(AsciiArtError):
    """The source image is zero-sized or could not be read."""

    def __init__(self, message: str = "Did not execute due to problem with image file."):
        super().__init__(message)


class InvalidResolutionError(AsciiArtError, ValueError):
    """A resolution is non-positive or falls outside the image bounds."""

    def __init__(self, message: str = "Did not change resolution due to exceeding boundaries."):
        super().__init__(message)


class EmptyCharsetError(AsciiArtError):
    """A query or run was attempted against an empty character set."""

    def __init__(self, message: str = "Did not execute. Charset is empty."):
        super().__init__(message)


class InvalidCharacterEditError(AsciiArtError, ValueError):
    """A character-set add/remove request is malformed."""

    def __init__(self, message: str = "Did not add due to incorrect format."):
        super().__init__(message)


class InvalidCommandError(AsciiArtError):
    """The shell received an unknown command or the wrong number of arguments."""

    def __init__(self, message: str = "Did not execute due to incorrect command."):
        super().__init__(message)


class OutputError(AsciiArtError):
    """An output renderer failed to write its result."""
