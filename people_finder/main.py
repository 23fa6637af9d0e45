"""FastAPI application for People Finder."""

import logging
import sys
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from .api import (
    health_router,
    metrics_router,
    records_router,
    search_router,
    transfer_router,
)
from .config import Settings, get_settings
from .core.directory import PeopleDirectory
from .core.engine import SearchEngine
from .models.response import ErrorResponse
from .store.record_store import RecordStore

settings = get_settings()


def configure_logging(config: Settings) -> None:
    """
    Route structlog through the stdlib logger at the configured level.

    Debug mode renders human-readable lines; otherwise every event is one
    JSON object.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=config.log_level.upper(),
    )

    renderer = (
        structlog.dev.ConsoleRenderer() if config.debug
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


configure_logging(settings)
logger = structlog.get_logger()


def create_directory(config: Settings = settings) -> PeopleDirectory:
    """Build the record store, search engine and directory from settings."""
    store = RecordStore(config.store_path)
    engine = SearchEngine(
        threshold=config.match_threshold,
        min_match_length=config.min_match_length
    )
    return PeopleDirectory(store, engine)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load the collection on startup and keep its directory on app state."""
    logger.info("service_starting", version=settings.app_version)

    try:
        app.state.directory = create_directory()
    except Exception as e:
        logger.error("collection_load_failed", store_path=settings.store_path, error=str(e))
        raise

    logger.info(
        "collection_loaded",
        store_path=settings.store_path,
        total_records=len(app.state.directory.records)
    )

    yield

    logger.info("service_stopped")


async def log_requests(request: Request, call_next) -> Response:
    """Log every request with its status and timing."""
    start_time = time.time()
    response = await call_next(request)
    process_time_ms = round((time.time() - start_time) * 1000, 2)

    response.headers["X-Process-Time-Ms"] = str(process_time_ms)
    logger.info(
        "request_completed",
        method=request.method,
        path=request.url.path,
        query=request.url.query or None,
        status_code=response.status_code,
        process_time_ms=process_time_ms,
        client_ip=request.client.host if request.client else None
    )
    return response


async def unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
    """Log the failure and answer with an ErrorResponse body."""
    logger.error(
        "request_failed",
        method=request.method,
        path=request.url.path,
        error=str(exc),
        exc_info=True
    )

    body = ErrorResponse(
        error="Internal Server Error",
        message="An unexpected error occurred",
        details={"exception": str(exc)} if settings.debug else None
    )
    return JSONResponse(status_code=500, content=body.model_dump(mode="json"))


def create_app() -> FastAPI:
    """Assemble the application: middleware, error handling and routers."""
    application = FastAPI(
        title=settings.app_name,
        description="Fuzzy search over a personal collection of people met",
        version=settings.app_version,
        lifespan=lifespan
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(GZipMiddleware, minimum_size=1000)
    application.middleware("http")(log_requests)
    application.add_exception_handler(Exception, unhandled_exception)

    for router in (records_router, search_router, transfer_router, health_router, metrics_router):
        application.include_router(router)

    return application


app = create_app()


@app.get("/", summary="Service information")
async def root() -> dict:
    """Name, version and where to look next."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Fuzzy search over a personal collection of people met",
        "docs_url": "/docs",
        "health_url": "/api/v1/health",
        "status": "running"
    }


@app.get("/api", summary="API information")
async def api_info() -> dict:
    """
    Endpoint map and search tuning.

    Clients read ``search.debounce_ms`` to decide how long to wait after the
    last keystroke before querying.
    """
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "endpoints": {
            "records": "/api/v1/records",
            "record": "/api/v1/records/{record_id}",
            "search": "/api/v1/search?q={query}",
            "export": "/api/v1/export",
            "import": "/api/v1/import?mode=merge|newIds",
            "health": "/api/v1/health",
            "metrics": "/api/v1/metrics"
        },
        "search": {
            "match_threshold": settings.match_threshold,
            "min_match_length": settings.min_match_length,
            "max_query_length": settings.max_query_length,
            "debounce_ms": settings.search_debounce_ms
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "people_finder.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
        log_level=settings.log_level.lower()
    )
