"""
Static tables shared across the application
"""

WEEK_STARTS = ("sunday", "monday")

DEFAULT_THEME = "blue"

# Intensity buckets map a check-in value to a heatmap shade (0-4)
HABIT_THEMES = {
    "blue": {
        "name": "Blue",
        "primary_color": "#3b82f6",
        "intensity": ["#f3f4f6", "#bfdbfe", "#93c5fd", "#60a5fa", "#3b82f6"],
    },
    "green": {
        "name": "Green",
        "primary_color": "#22c55e",
        "intensity": ["#f3f4f6", "#bbf7d0", "#86efac", "#4ade80", "#22c55e"],
    },
    "purple": {
        "name": "Purple",
        "primary_color": "#a855f7",
        "intensity": ["#f3f4f6", "#e9d5ff", "#d8b4fe", "#c084fc", "#a855f7"],
    },
    "orange": {
        "name": "Orange",
        "primary_color": "#f97316",
        "intensity": ["#f3f4f6", "#fed7aa", "#fdba74", "#fb923c", "#f97316"],
    },
    "pink": {
        "name": "Pink",
        "primary_color": "#ec4899",
        "intensity": ["#f3f4f6", "#fbcfe8", "#f9a8d4", "#f472b6", "#ec4899"],
    },
    "indigo": {
        "name": "Indigo",
        "primary_color": "#6366f1",
        "intensity": ["#f3f4f6", "#c7d2fe", "#a5b4fc", "#818cf8", "#6366f1"],
    },
}

# Upper bound (inclusive) of each non-zero intensity bucket
INTENSITY_THRESHOLDS = (5, 10, 20)

NOTE_MAX_LENGTH = 250

EXPORT_VERSION = 1
EXPORT_FILE_EXTENSION = ".habittrack"
EXPORT_FILE_PREFIX = "habit-tracker-backup-"
