"""
Habits module - Check-in store and derived statistics
"""
from . import repository
from . import store
from . import stats
from . import calendar

# Export commonly used names for convenience
from .store import HabitStore, day_key, is_empty_check_in

from .repository import (
    StateRepository,
    InMemoryRepository,
    JsonFileRepository,
    empty_state
)

from .stats import (
    completed_dates,
    total_completions,
    days_tracked,
    completion_rate,
    longest_streak,
    current_streak,
    habit_stats
)

from .calendar import build_calendar, recent_days

__all__ = [
    # Modules
    'repository',
    'store',
    'stats',
    'calendar',

    # Store
    'HabitStore',
    'day_key',
    'is_empty_check_in',

    # Persistence
    'StateRepository',
    'InMemoryRepository',
    'JsonFileRepository',
    'empty_state',

    # Statistics
    'completed_dates',
    'total_completions',
    'days_tracked',
    'completion_rate',
    'longest_streak',
    'current_streak',
    'habit_stats',

    # Calendar
    'build_calendar',
    'recent_days'
]
