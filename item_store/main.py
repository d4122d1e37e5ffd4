"""
FastAPI application entry point.
Challenge: Mount routes, metrics, error mapping and logging in one place.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from item_store.api.v1.router import api_router
from item_store.config import get_settings
from item_store.core.errors import ItemStoreError
from item_store.db.session import engine

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: logging. Shutdown: dispose the engine's pool."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(
        "%s starting (translator=%s, source_language=%s)",
        settings.app_name,
        settings.translator_backend,
        settings.source_language,
    )
    yield
    await engine.dispose()


async def item_store_error_handler(request: Request, exc: ItemStoreError) -> JSONResponse:
    """Typed service errors → status code + {"detail": message}."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Item store with an on-demand, per-item translation cache.",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS for frontend/API consumers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ItemStoreError, item_store_error_handler)

    # Prometheus metrics at /metrics (cache hit/miss and write tier counters)
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    app.include_router(api_router, prefix="/api")
    return app


app = create_app()
