"""Main FastAPI application for the Arena Backend."""

from contextlib import asynccontextmanager
from typing import Any, Dict

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.core import ServiceException, get_global_settings
from app.core.database import db_manager
from app.core.logging import setup_logging
from app.core.rate_limiter import limiter
from app.features.challenges.router import router as challenges_router
from app.features.jobs import shutdown_scheduler, start_scheduler
from app.features.matches.router import router as matches_router
from app.features.players.router import router as players_router
from app.features.rankings.router import router as rankings_router
from app.features.venues.router import router as venues_router
from app.middleware import RequestLoggingMiddleware

settings = get_global_settings()
setup_logging(settings.log_level)
logger = structlog.get_logger(__name__)


async def _start_scheduler_safely() -> None:
    """Start job scheduler with error handling."""
    try:
        scheduler = await start_scheduler()
        if scheduler:
            logger.info("Job scheduler started")
    except Exception as e:
        logger.error(
            "Failed to start job scheduler",
            error=str(e),
            error_type=type(e).__name__,
        )
        # Don't fail startup if scheduler fails


async def _shutdown_scheduler_safely() -> None:
    """Shutdown job scheduler with error handling."""
    try:
        await shutdown_scheduler()
    except Exception as e:
        logger.error(
            "Error during scheduler shutdown",
            error=str(e),
            error_type=type(e).__name__,
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting up Arena Backend application")
    await _start_scheduler_safely()
    yield
    logger.info("Shutting down Arena Backend application")
    await _shutdown_scheduler_safely()
    await db_manager.close()


# OpenAPI tags metadata
tags_metadata = [
    {
        "name": "matches",
        "description": "1-on-1 match lifecycle: challenge, ready, score, agree or dispute.",
    },
    {
        "name": "challenges",
        "description": "Solo skill challenge attempts and their rewards.",
    },
    {
        "name": "venues",
        "description": "Geofenced venue check-in, heartbeats and active players.",
    },
    {
        "name": "rankings",
        "description": "Venue, city and country leaderboards.",
    },
    {
        "name": "players",
        "description": "Player progression stats.",
    },
    {
        "name": "health",
        "description": "Health check and system status endpoints.",
    },
]

app = FastAPI(
    title="Arena - Competitive Progression Service",
    description="""
    Location-based sports competition backend.

    ## Features

    * **Matches**: Challenge players at a venue and settle results by mutual agreement
    * **Challenges**: Earn XP and RP from solo skill challenges
    * **Presence**: Check in at venues within a geofence
    * **Rankings**: Tie-aware leaderboards per venue, city and country

    ## Authentication

    All endpoints except the health check require a bearer token whose
    subject is the player id.
    """,
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
    debug=settings.debug,
)

# Configure rate limiter for FastAPI app
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]


@app.exception_handler(ServiceException)
async def service_exception_handler(
    request: Request, exc: ServiceException
) -> JSONResponse:
    """Map domain exceptions to HTTP responses with a machine readable reason."""
    if exc.status_code >= 500:
        logger.error(
            "Unhandled service failure",
            error_type=type(exc).__name__,
            error_message=str(exc),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "error": exc.error_code,
                "message": "Internal server error",
            },
        )

    content: Dict[str, Any] = {
        "success": False,
        "error": exc.error_code,
        "message": exc.message,
    }
    for key, value in exc.context.items():
        if key not in ("service", "operation"):
            content.setdefault(key, value)
    return JSONResponse(status_code=exc.status_code, content=content)


app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(matches_router, prefix="/api/v1")
app.include_router(challenges_router, prefix="/api/v1")
app.include_router(venues_router, prefix="/api/v1")
app.include_router(rankings_router, prefix="/api/v1")
app.include_router(players_router, prefix="/api/v1")


@app.get("/health", tags=["health"])
async def health_check() -> Dict[str, Any]:
    """
    Health check endpoint.

    Used by monitoring tools and load balancers to check the service is up.
    """
    return {
        "status": "healthy",
        "message": "Application is running",
        "version": "0.1.0",
        "debug": settings.debug,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
