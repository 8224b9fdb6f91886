"""Tests for the brightness index and character matcher."""

import pytest

from ascii_art.exceptions import EmptyCharsetError, InvalidCharacterEditError
from ascii_art.glyphs import TableGlyphRasterizer
from ascii_art.matcher import BrightnessCharMatcher, BrightnessIndex
from tests.conftest import SIMPLE_TABLE


def make_matcher(chars, rasterizer):
    return BrightnessCharMatcher(chars, rasterizer)


def count_rebuilds(matcher, monkeypatch):
    calls = []
    rebuild = matcher._normalize_all

    def spy():
        calls.append(1)
        rebuild()

    monkeypatch.setattr(matcher, "_normalize_all", spy)
    return calls


def snapshot(matcher):
    return (
        matcher.raw_index(),
        matcher.normalized_index(),
        matcher.min_brightness,
        matcher.max_brightness,
    )


# BrightnessIndex

def test_index_keeps_keys_sorted_and_drops_empty_buckets():
    index = BrightnessIndex()
    index.add(0.5, "c")
    index.add(0.1, "a")
    index.add(0.5, "b")

    assert list(index) == [0.1, 0.5]
    assert index.bucket(0.5) == {"b", "c"}

    assert index.discard(0.5, "c") is False
    assert index.discard(0.5, "b") is True
    assert list(index) == [0.1]
    assert index.discard(0.9, "z") is False


def test_index_floor_and_ceiling():
    index = BrightnessIndex()
    for key in (0.0, 0.5, 1.0):
        index.add(key, "x")

    assert index.floor(0.7) == 0.5
    assert index.ceiling(0.7) == 1.0
    assert index.floor(0.5) == index.ceiling(0.5) == 0.5
    assert index.floor(-0.1) is None
    assert index.ceiling(1.1) is None


# Construction

def test_empty_charset_is_rejected(simple_rasterizer):
    with pytest.raises(EmptyCharsetError):
        make_matcher([], simple_rasterizer)


def test_raw_and_normalized_indices(simple_rasterizer):
    matcher = make_matcher("abcde", simple_rasterizer)

    assert matcher.raw_index() == {
        0.0: {"a"}, 0.25: {"b", "e"}, 0.5: {"c"}, 1.0: {"d"},
    }
    assert matcher.normalized_index() == matcher.raw_index()
    assert matcher.min_brightness == 0.0
    assert matcher.max_brightness == 1.0


def test_normalization_spans_unit_interval(simple_rasterizer):
    matcher = make_matcher("bcd", simple_rasterizer)
    normalized = matcher.normalized_index()

    assert min(normalized) == 0.0
    assert max(normalized) == 1.0
    assert normalized[0.0] == {"b"}
    assert normalized[1.0] == {"d"}
    assert all(0.0 <= key <= 1.0 for key in normalized)
    assert [k for k, v in normalized.items() if v == {"c"}] == [pytest.approx(1 / 3)]


def test_single_brightness_collapses_to_zero(simple_rasterizer):
    matcher = make_matcher("be", simple_rasterizer)

    assert matcher.normalized_index() == {0.0: {"b", "e"}}
    assert matcher.nearest_char(0.9) == "b"


def test_unknown_glyph_is_reported():
    rasterizer = TableGlyphRasterizer({"a": 1})
    with pytest.raises(InvalidCharacterEditError):
        make_matcher("ab", rasterizer)


# nearest_char

@pytest.mark.parametrize("brightness,expected", [
    (0.0, "a"),
    (0.1, "a"),
    (0.125, "b"),  # tie between 0 and 0.25 goes up
    (0.25, "b"),   # lowest code point in {b, e}
    (0.74, "c"),
    (0.75, "d"),   # tie between 0.5 and 1.0 goes up
    (1.0, "d"),
    (-0.5, "a"),
    (1.5, "d"),
])
def test_nearest_char(simple_rasterizer, brightness, expected):
    matcher = make_matcher("abcde", simple_rasterizer)
    assert matcher.nearest_char(brightness) == expected


def test_nearest_char_ignores_insertion_order(simple_rasterizer):
    assert make_matcher(["e", "b"], simple_rasterizer).nearest_char(0.5) == "b"
    assert make_matcher(["b", "e"], simple_rasterizer).nearest_char(0.5) == "b"


def test_nearest_char_is_deterministic(simple_rasterizer):
    matcher = make_matcher("abcde", simple_rasterizer)
    results = {matcher.nearest_char(0.3) for _ in range(20)}
    assert results == {"b"}


# add_char

def test_add_inside_range_updates_one_bucket(simple_rasterizer, monkeypatch):
    matcher = make_matcher("ad", simple_rasterizer)
    rebuilds = count_rebuilds(matcher, monkeypatch)

    matcher.add_char("c")

    assert rebuilds == []
    assert matcher.normalized_index() == {0.0: {"a"}, 0.5: {"c"}, 1.0: {"d"}}
    assert matcher.nearest_char(0.45) == "c"


def test_add_into_existing_bucket(simple_rasterizer, monkeypatch):
    matcher = make_matcher("abd", simple_rasterizer)
    rebuilds = count_rebuilds(matcher, monkeypatch)

    matcher.add_char("e")

    assert rebuilds == []
    assert matcher.normalized_index()[0.25] == {"b", "e"}


def test_add_outside_range_rebuilds(simple_rasterizer, monkeypatch):
    matcher = make_matcher("bc", simple_rasterizer)
    rebuilds = count_rebuilds(matcher, monkeypatch)

    matcher.add_char("a")
    matcher.add_char("d")

    assert len(rebuilds) == 2
    assert matcher.min_brightness == 0.0
    assert matcher.max_brightness == 1.0
    assert matcher.normalized_index() == {
        0.0: {"a"}, 0.25: {"b"}, 0.5: {"c"}, 1.0: {"d"},
    }


def test_add_existing_char_is_idempotent(simple_rasterizer):
    matcher = make_matcher("abc", simple_rasterizer)
    before = snapshot(matcher)
    matcher.add_char("b")
    assert snapshot(matcher) == before


# remove_char

def test_remove_inside_range_does_not_rebuild(simple_rasterizer, monkeypatch):
    matcher = make_matcher("acd", simple_rasterizer)
    rebuilds = count_rebuilds(matcher, monkeypatch)

    matcher.remove_char("c")

    assert rebuilds == []
    assert matcher.normalized_index() == {0.0: {"a"}, 1.0: {"d"}}
    assert matcher.raw_index() == {0.0: {"a"}, 1.0: {"d"}}


def test_remove_boundary_rebuilds(simple_rasterizer, monkeypatch):
    matcher = make_matcher("abcd", simple_rasterizer)
    rebuilds = count_rebuilds(matcher, monkeypatch)

    matcher.remove_char("a")

    assert len(rebuilds) == 1
    assert matcher.min_brightness == 0.25
    normalized = matcher.normalized_index()
    assert normalized[0.0] == {"b"}
    assert normalized[1.0] == {"d"}
    assert matcher.nearest_char(0.0) == "b"


def test_remove_from_shared_bucket_keeps_boundary(simple_rasterizer, monkeypatch):
    matcher = make_matcher("bde", simple_rasterizer)
    rebuilds = count_rebuilds(matcher, monkeypatch)

    matcher.remove_char("b")

    assert rebuilds == []
    assert matcher.min_brightness == 0.25
    assert matcher.normalized_index() == {0.0: {"e"}, 1.0: {"d"}}


def test_remove_unknown_char_is_ignored(simple_rasterizer):
    matcher = make_matcher("ad", simple_rasterizer)
    before = snapshot(matcher)
    matcher.remove_char("c")
    assert snapshot(matcher) == before


def test_removing_everything_empties_the_matcher(simple_rasterizer):
    matcher = make_matcher("ab", simple_rasterizer)

    matcher.remove_char("a")
    matcher.remove_char("b")

    assert matcher.is_empty
    assert matcher.min_brightness is None
    assert matcher.max_brightness is None
    assert matcher.raw_index() == {}
    assert matcher.normalized_index() == {}
    with pytest.raises(EmptyCharsetError):
        matcher.nearest_char(0.5)

    # Removing from an empty matcher is harmless
    matcher.remove_char("a")

    matcher.add_char("c")
    assert matcher.nearest_char(0.9) == "c"
    assert matcher.normalized_index() == {0.0: {"c"}}


@pytest.mark.parametrize("char", ["a", "c", "d", "e"])
def test_add_then_remove_restores_state(simple_rasterizer, char):
    start = "".join(c for c in "bcd" if c != char) or "b"
    matcher = make_matcher(start, simple_rasterizer)
    before = snapshot(matcher)

    matcher.add_char(char)
    matcher.remove_char(char)

    assert snapshot(matcher) == before


def test_both_indices_hold_the_same_characters(simple_rasterizer):
    matcher = make_matcher("abcde", simple_rasterizer)
    for char in "bad":
        matcher.remove_char(char)
        raw = set().union(*matcher.raw_index().values())
        normalized = set().union(*matcher.normalized_index().values())
        assert raw == normalized == set(matcher.characters)

    for char in SIMPLE_TABLE:
        matcher.add_char(char)
    assert matcher.characters == set(SIMPLE_TABLE)
    assert len(matcher) == 5
    assert "e" in matcher
