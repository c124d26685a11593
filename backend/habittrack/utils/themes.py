"""
Theme helpers - palette lookup and heatmap intensity buckets
"""
from typing import Any, Dict, Optional

from habittrack.core.constants import DEFAULT_THEME, HABIT_THEMES, INTENSITY_THRESHOLDS


def get_theme(theme_name: Optional[str] = None) -> Dict[str, Any]:
    """
    Look up a theme palette, falling back to the default theme

    Args:
        theme_name: Theme key such as 'green' (case-insensitive)

    Returns:
        Theme dict with name, primary_color and intensity shades
    """
    key = (theme_name or DEFAULT_THEME).lower()
    return HABIT_THEMES.get(key, HABIT_THEMES[DEFAULT_THEME])


def is_known_theme(theme_name: str) -> bool:
    return theme_name.lower() in HABIT_THEMES


def primary_color(theme_name: Optional[str] = None) -> str:
    return get_theme(theme_name)["primary_color"]


def intensity_level(value: Optional[int]) -> int:
    """
    Bucket a check-in value into a heatmap intensity level

    0 reps -> 0, 1-5 -> 1, 6-10 -> 2, 11-20 -> 3, more than 20 -> 4
    """
    if not value or value <= 0:
        return 0
    for level, upper in enumerate(INTENSITY_THRESHOLDS, start=1):
        if value <= upper:
            return level
    return len(INTENSITY_THRESHOLDS) + 1
