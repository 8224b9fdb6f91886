"""
Brightness-to-character matching.

Keeps the live character set indexed twice: by raw glyph brightness and by
brightness rescaled to [0, 1] against the current min/max of the set.
Tile brightness is matched against the rescaled index.
"""

import bisect
import logging
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Set

from .exceptions import EmptyCharsetError
from .glyphs import FontGlyphRasterizer, GlyphRasterizer

logger = logging.getLogger(__name__)


class BrightnessIndex:
    """Ordered mapping of brightness -> set of characters sharing it."""

    def __init__(self):
        self._keys: List[float] = []
        self._buckets: Dict[float, Set[str]] = {}

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: float) -> bool:
        return key in self._buckets

    def __iter__(self) -> Iterator[float]:
        return iter(self._keys)

    def first(self) -> float:
        return self._keys[0]

    def last(self) -> float:
        return self._keys[-1]

    def bucket(self, key: float) -> FrozenSet[str]:
        return frozenset(self._buckets[key])

    def items(self):
        for key in self._keys:
            yield key, self._buckets[key]

    def add(self, key: float, char: str):
        bucket = self._buckets.get(key)
        if bucket is None:
            bisect.insort(self._keys, key)
            bucket = self._buckets[key] = set()
        bucket.add(char)

    def discard(self, key: float, char: str) -> bool:
        """
        Remove char from the bucket at key.

        Returns True if the bucket became empty and its key was dropped.
        """
        bucket = self._buckets.get(key)
        if bucket is None:
            return False

        bucket.discard(char)
        if bucket:
            return False

        del self._buckets[key]
        self._keys.pop(bisect.bisect_left(self._keys, key))
        return True

    def floor(self, value: float) -> Optional[float]:
        """Greatest key <= value."""
        i = bisect.bisect_right(self._keys, value)
        return self._keys[i - 1] if i > 0 else None

    def ceiling(self, value: float) -> Optional[float]:
        """Least key >= value."""
        i = bisect.bisect_left(self._keys, value)
        return self._keys[i] if i < len(self._keys) else None

    def characters(self) -> FrozenSet[str]:
        result: Set[str] = set()
        for bucket in self._buckets.values():
            result |= bucket
        return frozenset(result)

    def to_dict(self) -> Dict[float, FrozenSet[str]]:
        return {key: frozenset(bucket) for key, bucket in self.items()}


class BrightnessCharMatcher:
    """
    Finds the character whose glyph brightness is closest to a tile's.

    Adding a character that widens the brightness range, or removing the
    last character at either end of it, rebuilds the normalized index.
    Any other edit touches a single normalized bucket.
    """

    def __init__(
        self,
        characters: Iterable[str],
        rasterizer: Optional[GlyphRasterizer] = None
    ):
        """
        Build the index for an initial character set.

        Args:
            characters: Characters to match against
            rasterizer: Glyph source (defaults to a font rasterizer)

        Raises:
            EmptyCharsetError: If no characters are given
        """
        chars = set(characters)
        if not chars:
            raise EmptyCharsetError()

        self.rasterizer = rasterizer or FontGlyphRasterizer()
        self._raw = BrightnessIndex()
        self._normalized = BrightnessIndex()
        self._min: Optional[float] = None
        self._max: Optional[float] = None

        for char in chars:
            brightness = self.char_brightness(char)
            self._raw.add(brightness, char)
            if self._min is None or brightness < self._min:
                self._min = brightness
            if self._max is None or brightness > self._max:
                self._max = brightness

        self._normalize_all()

    def __len__(self) -> int:
        return len(self.characters)

    def __contains__(self, char: str) -> bool:
        return char in self.characters

    @property
    def characters(self) -> FrozenSet[str]:
        return self._raw.characters()

    @property
    def min_brightness(self) -> Optional[float]:
        """Lowest raw brightness in the set, None when empty."""
        return self._min

    @property
    def max_brightness(self) -> Optional[float]:
        """Highest raw brightness in the set, None when empty."""
        return self._max

    @property
    def is_empty(self) -> bool:
        return self._min is None

    def raw_index(self) -> Dict[float, FrozenSet[str]]:
        return self._raw.to_dict()

    def normalized_index(self) -> Dict[float, FrozenSet[str]]:
        return self._normalized.to_dict()

    def char_brightness(self, char: str) -> float:
        """Raw brightness of a character's glyph."""
        return self.rasterizer.brightness(char)

    def _normalize(self, brightness: float) -> float:
        if self._max == self._min:
            return 0.0
        return (brightness - self._min) / (self._max - self._min)

    def _update_min_max(self):
        if len(self._raw) == 0:
            self._min = self._max = None
        else:
            self._min = self._raw.first()
            self._max = self._raw.last()

    def _normalize_all(self):
        logger.debug("Rebuilding normalized index over %d brightness levels", len(self._raw))
        normalized = BrightnessIndex()
        for brightness, chars in self._raw.items():
            key = self._normalize(brightness)
            for char in chars:
                normalized.add(key, char)
        self._normalized = normalized

    def nearest_char(self, brightness: float) -> str:
        """
        Character whose normalized brightness is closest to the given one.

        The darker neighbour wins only if strictly closer; ties go to the
        brighter one. Within a bucket the lowest code point wins.

        Raises:
            EmptyCharsetError: If the set is currently empty
        """
        if self.is_empty:
            raise EmptyCharsetError()

        floor = self._normalized.floor(brightness)
        ceiling = self._normalized.ceiling(brightness)

        if floor is None:
            key = ceiling
        elif ceiling is None:
            key = floor
        elif abs(floor - brightness) < abs(ceiling - brightness):
            key = floor
        else:
            key = ceiling

        return min(self._normalized.bucket(key))

    def add_char(self, char: str):
        """Add a character to the set."""
        brightness = self.char_brightness(char)
        self._raw.add(brightness, char)

        if self.is_empty or brightness > self._max or brightness < self._min:
            self._update_min_max()
            self._normalize_all()
        else:
            self._normalized.add(self._normalize(brightness), char)

    def remove_char(self, char: str):
        """Remove a character from the set; unknown characters are ignored."""
        if self.is_empty:
            return

        brightness = self.char_brightness(char)
        self._normalized.discard(self._normalize(brightness), char)
        dropped = self._raw.discard(brightness, char)

        if dropped and brightness in (self._min, self._max):
            self._update_min_max()
            self._normalize_all()
