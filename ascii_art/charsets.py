"""
Character set presets and edit requests.

Edit requests are what the shell accepts after "add" or "remove": a single
character, "space", "all", or an inclusive range such as "a-z".
"""

from typing import List

from .config import DEFAULT_CHARSET, PRINTABLE_FIRST, PRINTABLE_LAST
from .exceptions import InvalidCharacterEditError


class CharacterSets:
    """Predefined character sets."""

    DIGITS = DEFAULT_CHARSET

    # Every visible printable ASCII character, plus space
    PRINTABLE = "".join(chr(i) for i in range(PRINTABLE_FIRST, PRINTABLE_LAST + 1))

    # Standard ASCII characters ordered by perceived density (light to dark)
    STANDARD = " .:-=+*#%@"

    # More detailed character set for better gradients
    DETAILED = " .'`^\",:;Il!i><~+_-?][}{1)(|\\/tfjrxnuvczXYUJCLQ0OZmwqpdbkhao*#MW&8%B@$"

    # Simple/minimal set
    MINIMAL = " .-+*#"

    NAMES = ("digits", "printable", "standard", "detailed", "minimal")

    @classmethod
    def get(cls, name: str) -> str:
        """Look up a preset by name (case-insensitive)."""
        if name.lower() not in cls.NAMES:
            raise KeyError(f"Unknown character set: {name}")
        return getattr(cls, name.upper())


def parse_char_edit(token: str, action: str = "add") -> List[str]:
    """
    Expand an add/remove argument into individual characters.

    Args:
        token: Single character, "space", "all" or a range like "a-z"
        action: Verb used in the error message

    Returns:
        Characters in ascending code point order

    Raises:
        InvalidCharacterEditError: If the token matches none of the forms
    """
    if token == "all":
        return list(CharacterSets.PRINTABLE)
    if token == "space":
        return [" "]
    if len(token) == 1:
        if action == "remove" and not PRINTABLE_FIRST <= ord(token) <= PRINTABLE_LAST:
            raise InvalidCharacterEditError(f"Did not {action} due to incorrect format.")
        return [token]
    if len(token) == 3 and token[1] == "-":
        start, end = sorted((ord(token[0]), ord(token[2])))
        return [chr(i) for i in range(start, end + 1)]

    raise InvalidCharacterEditError(f"Did not {action} due to incorrect format.")
