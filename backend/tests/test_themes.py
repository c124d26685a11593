"""
Tests for theme lookup and intensity buckets
"""
import pytest

from habittrack.utils.themes import get_theme, intensity_level, is_known_theme, primary_color


def test_get_theme_is_case_insensitive():
    assert get_theme("GREEN")["name"] == "Green"


def test_unknown_theme_falls_back_to_blue():
    assert get_theme("teal") == get_theme("blue")
    assert get_theme(None) == get_theme("blue")
    assert primary_color() == "#3b82f6"


def test_is_known_theme():
    assert is_known_theme("Indigo")
    assert not is_known_theme("teal")


@pytest.mark.parametrize("value,level", [
    (None, 0), (-1, 0), (0, 0), (1, 1), (5, 1), (6, 2), (10, 2), (11, 3), (20, 3), (21, 4), (500, 4),
])
def test_intensity_level(value, level):
    assert intensity_level(value) == level


def test_every_theme_has_five_shades():
    for name in ("blue", "green", "purple", "orange", "pink", "indigo"):
        assert len(get_theme(name)["intensity"]) == 5
