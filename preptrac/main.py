"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from preptrac.api import (
    auth,
    categories,
    dashboard,
    events,
    household,
    items,
    locations,
    notifications,
    settings as settings_api,
)
from preptrac.config import get_settings

settings = get_settings()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info(f"PrepTrac API starting ({settings.environment})")
    yield
    logger.info("PrepTrac API shutting down")


app = FastAPI(
    title="PrepTrac API",
    description="Self-hosted preparedness inventory tracker",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register routers
app.include_router(auth.router)
app.include_router(categories.router)
app.include_router(locations.router)
app.include_router(items.router)
app.include_router(events.router)
app.include_router(household.router)
app.include_router(dashboard.router)
app.include_router(settings_api.router)
app.include_router(notifications.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
