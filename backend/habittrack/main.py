"""
FastAPI Application Entry Point
"""
from contextlib import asynccontextmanager
from datetime import date
from typing import Callable, Optional
import logging

from fastapi import FastAPI

from habittrack import __version__
from habittrack.core.config import settings
from habittrack.routes import checkins, data, habits, health
from habittrack.services.habits import HabitStore, JsonFileRepository
from habittrack.utils.timezone import get_local_today_date, get_local_tz

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

# Silence noisy third-party loggers
logging.getLogger('httpx').setLevel(logging.WARNING)
logging.getLogger('httpcore').setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


def create_app(
    store: Optional[HabitStore] = None,
    today_provider: Optional[Callable[[], date]] = None,
    tz=None
) -> FastAPI:
    """
    Build the application

    Args:
        store: HabitStore to serve; when omitted one is loaded from
            HABITTRACK_DATA_FILE at startup
        today_provider: Callable returning the reference day
        tz: Timezone for reading createdAt instants

    Returns:
        Configured FastAPI app
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        FastAPI lifespan context manager for startup/shutdown events
        """
        # Startup
        if getattr(app.state, "store", None) is None:
            app.state.store = HabitStore(repository=JsonFileRepository(settings.DATA_FILE))
            logger.info(f"✓ Habit data loaded from {settings.DATA_FILE}")

        yield

        # Shutdown
        logger.info("✓ Habit tracker stopped")

    app = FastAPI(
        title="Habit Tracker API",
        version=__version__,
        lifespan=lifespan
    )

    app.state.store = store
    app.state.today_provider = today_provider or get_local_today_date
    app.state.tz = tz or get_local_tz()

    # Register routes
    app.include_router(health.router)
    app.include_router(habits.router)
    app.include_router(checkins.router)
    app.include_router(data.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("habittrack.main:app", host="127.0.0.1", port=8000)
