"""
Wishlist Service application factory.

``create_app`` wires settings, the document store adapter and the
application service explicitly; nothing is looked up from a global
registry at request time.
"""

import time
import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware

from wishlist import __version__
from wishlist.api.errors import register_exception_handlers
from wishlist.api.main import api_router
from wishlist.api.routes import health
from wishlist.application.services import WishlistApplicationService
from wishlist.core.config import Settings
from wishlist.core.config import settings as default_settings
from wishlist.core.observability import (
    REQUEST_COUNT,
    REQUEST_DURATION,
    get_logger,
    set_correlation_id,
    setup_structured_logging,
)
from wishlist.domain.wishlist.repositories import WishlistRepository
from wishlist.infrastructure.database.mongo import (
    create_mongo_client,
    get_wishlist_collection,
)
from wishlist.infrastructure.database.repositories import (
    InMemoryWishlistRepository,
    MongoWishlistRepository,
)

logger = get_logger(__name__)


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """Middleware for request observability and metrics collection."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = set_correlation_id(
            request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        )

        start_time = time.perf_counter()
        method = request.method
        path = request.url.path

        logger.info("Request started", method=method, path=path)

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.perf_counter() - start_time
            endpoint = getattr(request.scope.get("route"), "path", path)
            REQUEST_COUNT.labels(method=method, endpoint=endpoint, status="500").inc()
            REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(duration)
            logger.error(
                "Request failed",
                method=method,
                path=path,
                duration_seconds=duration,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        duration = time.perf_counter() - start_time
        # Route templates keep metric label cardinality bounded
        route = request.scope.get("route")
        endpoint = getattr(route, "path", path)
        REQUEST_COUNT.labels(
            method=method, endpoint=endpoint, status=str(response.status_code)
        ).inc()
        REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(duration)

        response.headers["X-Correlation-ID"] = correlation_id
        logger.info(
            "Request completed",
            method=method,
            path=path,
            status_code=response.status_code,
            duration_seconds=duration,
        )
        return response


def _build_lifespan(settings: Settings, repository: WishlistRepository | None):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Starting application initialization")
        mongo_client = None

        store = repository
        if store is None:
            if settings.STORE_BACKEND == "memory":
                store = InMemoryWishlistRepository()
            else:
                mongo_client = create_mongo_client(settings)
                store = MongoWishlistRepository(
                    get_wishlist_collection(mongo_client, settings)
                )
                await store.ensure_indexes()

        app.state.wishlist_service = WishlistApplicationService(
            store, settings.policy()
        )
        logger.info(
            "Application started successfully",
            project_name=settings.PROJECT_NAME,
            environment=settings.ENVIRONMENT,
            api_version=settings.API_V1_STR,
            store_backend=type(store).__name__,
        )

        try:
            yield
        finally:
            logger.info("Shutting down application")
            if mongo_client is not None:
                mongo_client.close()

    return lifespan


def create_app(
    settings: Settings | None = None,
    repository: WishlistRepository | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Service settings; defaults to values from the environment
        repository: Store adapter to use instead of the configured backend

    Returns:
        Configured FastAPI application
    """
    settings = settings or default_settings
    setup_structured_logging(settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Microservice for managing customer wishlists in an e-commerce platform.",
        version=__version__,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=_build_lifespan(settings, repository),
    )

    if settings.all_cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.all_cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.add_middleware(ObservabilityMiddleware)

    register_exception_handlers(app)
    app.include_router(health.router, tags=["health"])
    app.include_router(api_router, prefix=settings.API_V1_STR)
    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(create_app(), host="0.0.0.0", port=8080)
