"""FastAPI Application - Main entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from aribe.config.settings import get_settings
from aribe.core.errors import CollaboratorError, InvalidTransitionError, NotFoundError
from aribe.core.templates import get_template
from aribe.handlers.appointments import router as appointments_router
from aribe.handlers.auth import router as auth_router
from aribe.handlers.stats import router as stats_router
from aribe.handlers.trips import router as trips_router
from aribe.services.observability import (
    get_current_trace_id,
    instrument_fastapi,
    setup_tracing,
)
from aribe.utils.logger import get_logger, setup_logging

# Initialize settings early
settings = get_settings()

# Setup logging
setup_logging(settings.log_level)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Handles startup and shutdown events.
    """
    logger.info(
        "application_starting",
        environment=settings.app_env,
        port=settings.api_port,
        timezone=settings.shop_timezone,
    )

    setup_tracing()

    yield

    logger.info("application_shutting_down")


app = FastAPI(
    title="Aribé Motos - Agendamentos",
    description="Agendamento de retiradas e viagens entre lojas",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.is_development else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

instrument_fastapi(app)

app.include_router(auth_router)
app.include_router(appointments_router)
app.include_router(trips_router)
app.include_router(stats_router)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Unknown id -> 404."""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"success": False, "message": get_template("not_found")},
    )


@app.exception_handler(InvalidTransitionError)
async def invalid_transition_handler(
    request: Request, exc: InvalidTransitionError
) -> JSONResponse:
    """Status change outside the allowed transitions -> 409."""
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"success": False, "message": exc.message},
    )


@app.exception_handler(CollaboratorError)
async def collaborator_error_handler(
    request: Request, exc: CollaboratorError
) -> JSONResponse:
    """Store or identity failure -> 503; the caller decides whether to retry."""
    logger.error(
        "collaborator_failure",
        path=request.url.path,
        operation=exc.operation,
        error=exc.message,
        trace_id=get_current_trace_id() or "unknown",
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"success": False, "message": get_template("error")},
    )


@app.get("/")
async def root() -> dict:
    """Root endpoint.

    Returns:
        Welcome message.
    """
    return {
        "message": "Aribé Motos - Agendamentos",
        "version": "1.0.0",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        Health status with environment info.
    """
    return {
        "status": "healthy",
        "environment": settings.app_env,
        "version": "1.0.0",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "aribe.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
    )
