"""Main module for the AgriBooks API and reminder engine."""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from agribooks import __version__, config
from agribooks.container import Container, init_container
from agribooks.core import AgribooksError, ErrorMapper
from agribooks.db.sessions import init_db
from agribooks.logging_config import setup_logging
from agribooks.routers import (admin_router, alerts_router, categories_router,
                               reminders_router, transactions_router)

logger = logging.getLogger(__name__)

_error_mapper = ErrorMapper()


def create_app(container: Container | None = None, *, start_scheduler: bool = True) -> FastAPI:
    """Build the FastAPI app around a wired container.

    Args:
        container: Pre-configured container (tests pass one with overridden
            providers); a fresh one is created otherwise.
        start_scheduler: Run the periodic reminder sweeps for the app's lifetime.
    """
    if container is None:
        container = init_container()
    else:
        container.wire()

    @asynccontextmanager
    async def lifespan(fastapi_app: FastAPI):
        """Create tables and start the scheduler; drain both background paths on shutdown."""
        init_db(container.engine())
        scheduler = container.scheduler()
        if start_scheduler:
            scheduler.start()

        yield

        await scheduler.stop()
        container.notifications().close()
        logger.info("Background reminder processing stopped")

    app = FastAPI(
        title="AgriBooks API",
        description="Bookkeeping backend with threshold and due-date reminders",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = container

    @app.exception_handler(AgribooksError)
    async def handle_domain_error(request: Request, exc: AgribooksError) -> JSONResponse:
        status_code, detail, code = _error_mapper.to_http(exc)
        log = logger.warning if status_code < 500 else logger.error
        log(
            "Request error: %s",
            detail,
            extra={"method": request.method, "path": request.url.path, "status_code": status_code},
        )
        return JSONResponse(status_code=status_code, content={"error": detail, "code": code})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        status_code, detail, code = _error_mapper.to_http(exc)
        logger.error(
            "Unhandled error: %s",
            exc,
            exc_info=exc,
            extra={"method": request.method, "path": request.url.path, "status_code": status_code},
        )
        return JSONResponse(status_code=status_code, content={"error": detail, "code": code})

    app.include_router(reminders_router)
    app.include_router(alerts_router)
    app.include_router(categories_router)
    app.include_router(transactions_router)
    app.include_router(admin_router)

    @app.get("/api/health")
    def health() -> JSONResponse:
        """Return health check status, including database connectivity."""
        try:
            with container.engine().connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception as e:  # pylint: disable=broad-except
            logger.error("Health check failed: database connection error: %s", e)
            return JSONResponse(
                status_code=503,
                content={"status": "error", "database": "disconnected"},
            )
        return JSONResponse(content={"status": "ok", "database": "connected"})

    return app


def run():
    """Run the server (uvicorn). Use for `start`."""
    setup_logging(config.LOG_LEVEL, structured=config.LOG_FORMAT == "json")
    uvicorn.run(create_app(), host=config.API_HOST, port=config.API_PORT)
