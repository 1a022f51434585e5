"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, docqa.api, docqa.observability, docqa.configs
System role: Application initialization and configuration
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docqa.api import api_router
from docqa.api.deps import ServiceCache
from docqa.api.errors import register_exception_handlers
from docqa.boundary.db import create_tables
from docqa.configs import get_settings
from docqa.observability.logger import configure_logging
from docqa.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Creates tables on startup; releases pooled connections and flushes
    traces on shutdown.
    """
    cache: ServiceCache = app.state.service_cache
    configure_logging(cache.settings.log_level)
    logger.info("Application startup: logging configured")

    try:
        await create_tables(cache.engine)
        logger.info(
            "Application startup complete",
            extra={
                "environment": cache.settings.environment,
                "vector_store": cache.settings.vector_store.store_type,
            },
        )
    except Exception as e:
        logger.exception("Failed to initialize application resources", extra={"error": str(e)})
        raise

    yield

    logger.info("Application shutdown")
    await cache.aclose()


def create_app(service_cache: ServiceCache | None = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        service_cache: Prebuilt container (tests); built from settings if None

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title="DocQA API",
        description="Chat with your documents: upload, embed, retrieve and answer",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.service_cache = service_cache or ServiceCache(get_settings())

    register_exception_handlers(app)

    # Added first = last to execute
    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["x-sources", "x-message-index", "X-Correlation-ID"],
    )

    app.include_router(api_router, prefix="/api/v1")

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "docqa.main:create_app",
        factory=True,
        host="localhost",
        port=8082,
        reload=True,
    )
