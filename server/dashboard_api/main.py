"""Decision Journal API - FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .dependencies import get_reminder_scheduler
from .routes import decisions, summary, insights, schedule, preferences, notifications

settings = get_settings()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    scheduler = None
    if settings.start_reminder_scheduler:
        scheduler = get_reminder_scheduler()
        scheduler.start(interval_hours=settings.reminder_check_interval_hours)
    yield
    if scheduler:
        scheduler.stop()


app = FastAPI(
    title="Decision Journal API",
    description="Journal decisions with their emotions and get weekly summaries and insights",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

# Include routers
app.include_router(decisions.router)
app.include_router(summary.router)
app.include_router(insights.router)
app.include_router(schedule.router)
app.include_router(preferences.router)
app.include_router(notifications.router)


@app.get("/health")
async def health_check():
    """Health check endpoint for the API."""
    return {"status": "healthy", "service": "decision-journal-api"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "server.dashboard_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
