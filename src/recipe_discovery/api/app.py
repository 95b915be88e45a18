"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from recipe_discovery.api.admin import router as admin_router
from recipe_discovery.api.routes import router as discovery_router
from recipe_discovery.app_logging import configure_logging
from recipe_discovery.containers import AppContainer
from recipe_discovery.domain.errors import (
    AccessDeniedError,
    InvalidCriteriaError,
    NotFoundError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        if state_container.settings.scheduler_enabled:
            state_container.scheduler.start()
        else:
            logger.info("Scheduler disabled; periodic jobs will not run")
        yield
        state_container.scheduler.shutdown()

    app = FastAPI(title="Recipe Discovery", lifespan=lifespan)
    app.state.container = container

    app.include_router(discovery_router)
    app.include_router(admin_router)

    @app.exception_handler(NotFoundError)
    async def not_found(_request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(AccessDeniedError)
    async def access_denied(_request: Request, exc: AccessDeniedError) -> JSONResponse:
        logger.warning("Access denied: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)}
        )

    @app.exception_handler(InvalidCriteriaError)
    async def invalid_criteria(
        _request: Request, exc: InvalidCriteriaError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
