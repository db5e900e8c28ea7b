"""FastAPI application for TriPlan."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.deps import get_sync_scheduler, get_workout_feed
from .api.exception_handlers import register_exception_handlers
from .api.routes import activities, calendar, checkins, custom_workouts, profile, races, schedule, sessions, stats
from .config import get_settings
from .utils.log_sanitizer import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level, secrets=[settings.intervals_icu_api_key])
    logger.info(f"Starting TriPlan v{__version__}")
    logger.info(f"Data file: {settings.data_file}")

    if not settings.intervals_icu_configured:
        logger.warning("intervals.icu not configured. Activity sync will be unavailable.")

    scheduler = get_sync_scheduler()
    try:
        scheduler.start()
    except Exception as e:
        logger.warning(f"Failed to start sync scheduler: {e}")

    yield

    # Shutdown
    logger.info("Shutting down TriPlan")
    scheduler.stop()
    feed = get_workout_feed()
    if feed is not None:
        await feed.close()


app = FastAPI(
    title="TriPlan API",
    description="32-week triathlon training plan tracker",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(profile.router, prefix="/api/v1/athlete", tags=["athlete"])
app.include_router(sessions.router, prefix="/api/v1/sessions", tags=["sessions"])
app.include_router(schedule.router, prefix="/api/v1/schedule-overrides", tags=["schedule"])
app.include_router(calendar.router, prefix="/api/v1/plan", tags=["plan"])
app.include_router(activities.router, prefix="/api/v1/activities", tags=["activities"])
app.include_router(checkins.router, prefix="/api/v1/checkins", tags=["checkins"])
app.include_router(races.router, prefix="/api/v1/races", tags=["races"])
app.include_router(custom_workouts.router, prefix="/api/v1/custom-workouts", tags=["custom-workouts"])
app.include_router(stats.router, prefix="/api/v1/stats", tags=["stats"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "TriPlan API",
        "version": __version__,
        "status": "healthy",
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
