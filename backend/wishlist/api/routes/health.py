"""
Health Check API Routes

Liveness, readiness against the document store, and Prometheus metrics.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from wishlist.api.deps import WishlistServiceDep
from wishlist.core.observability import get_logger

logger = get_logger(__name__)
router = APIRouter()


@router.get("/health", summary="Liveness probe")
async def get_health_status() -> JSONResponse:
    return JSONResponse(
        content={
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    )


@router.get("/health/ready", summary="Readiness probe")
async def get_readiness(service: WishlistServiceDep) -> JSONResponse:
    """Report ready only when the document store answers a ping."""
    store_ok = await service.ping_store()
    if not store_ok:
        logger.warning("Readiness check failed", component="document_store")

    return JSONResponse(
        content={
            "status": "healthy" if store_ok else "unhealthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": {"document_store": "up" if store_ok else "down"},
        },
        status_code=200 if store_ok else 503,
    )


@router.get("/metrics", include_in_schema=False)
async def get_metrics() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
