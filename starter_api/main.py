"""
REST API main application.
Entry point for the FastAPI REST server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from starter_api.models import Base
from starter_api.routers import users_router
from starter_shared.config.logging import setup_logging, rest_api_logger as logger
from starter_shared.config.settings import settings
from starter_shared.infrastructure.correlation import CorrelationIdMiddleware
from starter_shared.infrastructure.db import engine
from starter_shared.utils.exceptions import EntityNotFoundError, PageNotFoundError


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and shutdown.
    """
    # Initialize logging
    setup_logging()

    # Startup
    logger.info("Starting REST API", port=settings.rest_api_port, env=settings.environment)

    if settings.create_tables_on_startup:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created/verified")

    yield

    # Shutdown
    logger.info("Shutting down REST API")


# Create FastAPI application
app = FastAPI(
    title="CRUD Starter REST API",
    description="Generic CRUD layer with a user resource",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(CorrelationIdMiddleware)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(EntityNotFoundError)
async def entity_not_found_handler(request: Request, exc: EntityNotFoundError) -> Response:
    """Unknown ids answer an empty 404."""
    return Response(status_code=status.HTTP_404_NOT_FOUND)


@app.exception_handler(PageNotFoundError)
async def page_not_found_handler(request: Request, exc: PageNotFoundError) -> Response:
    """Pages past the end answer 404 with the localized message."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError) -> Response:
    """Constraint violations the duplicate check did not catch answer 409."""
    logger.warning("Integrity error", path=request.url.path, error=str(exc.orig))
    return Response(status_code=status.HTTP_409_CONFLICT)


# =============================================================================
# Health Check
# =============================================================================


@app.get(f"{settings.api_prefix}/health")
def health_check():
    """Basic health check endpoint."""
    return {"status": "ok"}


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(users_router, prefix=settings.api_prefix)


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "starter_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=True,
    )
