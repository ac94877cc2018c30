"""Main FastAPI application for the Player Registry Backend."""

from contextlib import asynccontextmanager
from typing import Any, Dict

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core import db_manager, get_global_settings
from app.core.exceptions import ClientInputError, NotFoundError
from app.core.logging import setup_logging
from app.features.players import players_router

settings = get_global_settings()
setup_logging(settings.log_level)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting up Player Registry application")
    if settings.auto_create_tables:
        await db_manager.create_tables()
        logger.info("Database tables ensured")
    yield
    logger.info("Shutting down Player Registry application")
    await db_manager.close()


# OpenAPI tags metadata
tags_metadata = [
    {
        "name": "players",
        "description": "Create, update, delete and search game characters.",
    },
    {
        "name": "health",
        "description": "Health check and system status endpoints.",
    },
]

# Create FastAPI application
app = FastAPI(
    title="Player Registry Service",
    description="""
    Registry of game characters.

    ## Features

    * **Players**: Create, read, partially update and delete characters
    * **Search**: Filter by name, title, race, profession, birthday, ban status,
      experience and level, sorted by one key and paginated
    * **Progression**: Level and experience to next level are derived from
      experience on every write
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
    debug=settings.debug,
)


@app.exception_handler(ClientInputError)
async def client_input_error_handler(
    request: Request, exc: ClientInputError
) -> JSONResponse:
    """Map rejected input to 400."""
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(NotFoundError)
async def not_found_error_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Map missing records to 404."""
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Undecodable requests (bad id, unknown enum value) are client input errors too."""
    logger.debug("request_rejected", path=request.url.path, errors=str(exc.errors()))
    return JSONResponse(
        status_code=400,
        content={"detail": "Malformed request", "errors": jsonable_encoder(exc.errors())},
    )


# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(players_router, prefix="/rest", tags=["players"])


@app.get("/health", tags=["health"])
async def health_check() -> Dict[str, Any]:
    """
    Health check endpoint.

    Returns the health status of the application including:
    - Overall health status
    - Application version
    - Debug mode status
    """
    return {
        "status": "healthy",
        "message": "Application is running",
        "version": "1.0.0",
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
