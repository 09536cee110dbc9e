"""
DeskMap - Main Application Entry Point
Office directory with floor-plan maps and employee pins
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from deskmap.config import get_settings
from deskmap.database import init_db
from deskmap.errors import register_error_handlers
from deskmap.routers import (
    employees_router,
    health_router,
    locations_router,
    maps_router,
    search_router,
    uploads_router,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info(f"🚀 Starting {settings.app_name}...")

    await init_db()
    logger.info("✅ Database initialized")

    if settings.disable_auth:
        logger.warning("⚠️ Authentication is DISABLED - every request acts as an admin")
    else:
        logger.info("🔐 Bearer token authentication enabled")

    yield

    logger.info(f"👋 Shutting down {settings.app_name}...")


app = FastAPI(
    title=settings.app_name,
    description="Office directory: floor-plan maps and where each employee sits",
    version="0.1.0",
    lifespan=lifespan
)

# CORS middleware for frontend communication
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include routers
app.include_router(health_router, prefix="/api")
app.include_router(maps_router, prefix="/api")
app.include_router(employees_router, prefix="/api")
app.include_router(locations_router, prefix="/api")
app.include_router(search_router, prefix="/api")
app.include_router(uploads_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/api/health"
    }
