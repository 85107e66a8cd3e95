import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .routers import (
    dashboard_router,
    stats_router,
    shifts_router,
    pages_router,
    reports_router,
    users_router,
)
from .services.watchlist import init_watchlist_store

settings = get_settings()

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the watchlist once at startup."""
    init_watchlist_store(settings)
    logger.info(f"Serving analytics from {settings.analytics_source}")
    yield


app = FastAPI(
    title="Chat Analytics API",
    description="Date-filtered analytics over the exported chat and comment data",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(dashboard_router, prefix="/api")
app.include_router(stats_router, prefix="/api")
app.include_router(shifts_router, prefix="/api")
app.include_router(pages_router, prefix="/api")
app.include_router(reports_router, prefix="/api")
app.include_router(users_router, prefix="/api")


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


def run():
    """Start the API server."""
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
