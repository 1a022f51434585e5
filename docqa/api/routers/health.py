"""
Health check API endpoints.

Routes: GET /health, GET /health/vector-store

Dependencies: docqa.boundary.vdb
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from docqa.api.deps import ServiceCache, get_service_cache
from docqa.core.exceptions import DocQAError

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/vector-store", response_model=HealthResponse)
async def health_check_vector_store(cache: ServiceCache = Depends(get_service_cache)):
    """Vector store health check."""
    store = cache.vector_store
    try:
        await run_in_threadpool(store.ping)
    except DocQAError as e:
        logger.warning(f"{__name__}:health_check_vector_store - {e}")
        return JSONResponse(
            status_code=503,
            content=HealthResponse(status="unhealthy", message=e.message).model_dump(),
        )
    return HealthResponse(status="healthy", message=f"Vector store accessible ({store.kind.value})")
