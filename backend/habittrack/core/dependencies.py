"""
Dependency injection for the shared store and clock
"""
from datetime import date
from typing import Callable

from fastapi import Request

from habittrack.services.habits.store import HabitStore


def get_store(request: Request) -> HabitStore:
    """HabitStore held by the running application"""
    return request.app.state.store


def get_today(request: Request) -> date:
    """Reference day for statistics and future-day checks"""
    today_provider: Callable[[], date] = request.app.state.today_provider
    return today_provider()


def get_tz(request: Request):
    """Timezone used to read habit createdAt instants"""
    return request.app.state.tz
