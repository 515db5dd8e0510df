"""FastAPI application for the transit information service."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from . import __version__
from .config import get_settings
from .dependencies import get_admin_sessions, get_repository
from .routes.admin import router as admin_router
from .routes.comments import router as comments_router
from .routes.map import router as map_router
from .routes.notifications import router as notifications_router
from .routes.obstructions import router as obstructions_router
from .routes.transit_routes import router as routes_router

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting transit service...")

    repository = get_repository()
    logger.info(f"Store ready with {len(repository.list_routes())} routes")

    if settings.maps_configured:
        logger.info(f"Google Maps configured with map id {settings.google_map_id}")
    else:
        logger.warning("GOOGLE_MAPS_API_KEY is not set; map endpoints will report a configuration error")

    # Start background cleanup of idle admin sessions
    admin_sessions = get_admin_sessions()
    await admin_sessions.start_cleanup_task()

    yield

    logger.info("Shutting down transit service...")
    await admin_sessions.stop_cleanup_task()


app = FastAPI(
    title="Transit Flow API",
    description="Bus route status, road obstructions and traffic comments for Tacna",
    version=__version__,
    lifespan=lifespan
)

# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Update with your frontend URL in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(obstructions_router, prefix="/api", tags=["Obstructions"])
app.include_router(comments_router, prefix="/api", tags=["Comments"])
app.include_router(routes_router, prefix="/api", tags=["Routes"])
app.include_router(map_router, prefix="/api", tags=["Map"])
app.include_router(admin_router, prefix="/api", tags=["Admin"])
app.include_router(notifications_router, prefix="/api", tags=["Notifications"])


@app.get("/health")
def healthcheck():
    return {
        "status": "ok",
        "version": __version__,
        "maps_configured": settings.maps_configured,
    }


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "service": "Transit Flow API",
        "version": __version__,
        "endpoints": {
            "health": "/health",
            "obstructions": "/api/obstructions",
            "comments": "/api/comments",
            "routes": "/api/routes",
            "map": "/api/map/config",
            "admin": "/api/admin/sessions",
            "stream": "/api/notifications/stream",
            "docs": "/docs"
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "transit_flow.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
