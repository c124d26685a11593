"""
Shared fixtures: a store with a fixed clock and a test client around it
"""
from datetime import date, datetime, timedelta
import itertools

import pytest
import pytz
from fastapi.testclient import TestClient

from habittrack.main import create_app
from habittrack.services.habits import HabitStore, InMemoryRepository

FIXED_NOW = datetime(2024, 1, 10, 12, 0, 0, tzinfo=pytz.utc)
TODAY = date(2024, 1, 10)


class FakeClock:
    """Callable clock that only moves when told to"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(FIXED_NOW)


@pytest.fixture
def repository():
    return InMemoryRepository()


@pytest.fixture
def store(repository, clock):
    counter = itertools.count(1)
    return HabitStore(repository=repository, clock=clock, id_factory=lambda: f"habit-{next(counter)}")


@pytest.fixture
def client(store):
    app = create_app(store=store, today_provider=lambda: TODAY, tz=pytz.utc)
    with TestClient(app) as test_client:
        yield test_client
