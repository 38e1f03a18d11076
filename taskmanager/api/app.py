# This file builds the FastAPI application and registers all API routers.
# It exists so startup behavior, middleware, and error handling are configured in one place.
# Startup creates the shared connection pool and ensures the schema before any request is served.
# A schema failure at startup propagates and stops the server; shutdown releases every pooled connection.

from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import RequestResponseEndpoint

from taskmanager.api.api_config import get_api_config
from taskmanager.api.db_access import DatabaseClient
from taskmanager.api.dependencies import get_database_client
from taskmanager.api.error_handlers import register_error_handlers
from taskmanager.api.routers.health import router as health_router
from taskmanager.api.routers.index import router as index_router
from taskmanager.api.routers.tasks import router as tasks_router
from taskmanager.api.routers.users import router as users_router
from taskmanager.common.ddl import apply_task_ddl
from taskmanager.common.logging import configure_logging

logger = logging.getLogger(__name__)

API_HTTP_REQUESTS_TOTAL = Counter(
    "api_http_requests_total",
    "Total number of HTTP requests processed by the API.",
    ["method", "path", "status_code"],
)
API_HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "api_http_request_duration_seconds",
    "API request duration in seconds.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
API_HTTP_INFLIGHT_REQUESTS = Gauge(
    "api_http_inflight_requests",
    "Number of API requests currently being processed.",
    ["method"],
)


def _route_label(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


def _database_client(app: FastAPI) -> DatabaseClient:
    factory = app.dependency_overrides.get(get_database_client, get_database_client)
    return factory()


def create_app() -> FastAPI:
    """Create configured FastAPI application instance."""

    configure_logging()
    config = get_api_config()

    app = FastAPI(
        title=config.api_name,
        description="Task management API: users, their tasks, and a database-backed health check.",
        version=config.app_version,
        openapi_tags=[
            {"name": "health", "description": "Service liveness including a database round trip."},
            {"name": "users", "description": "List and create users."},
            {"name": "tasks", "description": "List, create, update, and delete tasks."},
        ],
    )

    if config.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        method_label = request.method
        started = time.perf_counter()
        status_code = 500
        API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label).inc()
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            duration_ms = (time.perf_counter() - started) * 1000.0

            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"
            return response
        finally:
            path_label = _route_label(request)
            API_HTTP_REQUESTS_TOTAL.labels(
                method=method_label,
                path=path_label,
                status_code=str(status_code),
            ).inc()
            API_HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method_label,
                path=path_label,
            ).observe(time.perf_counter() - started)
            API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label).dec()

    if config.enable_metrics:

        @app.get("/metrics", include_in_schema=False)
        def metrics() -> Response:
            return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.on_event("startup")
    def ensure_schema() -> None:
        db = _database_client(app)
        apply_task_ddl(db)
        logger.info("%s ready (environment=%s)", config.api_name, config.environment)

    @app.on_event("shutdown")
    def release_pool() -> None:
        _database_client(app).dispose()
        logger.info("Database connection pool released")

    register_error_handlers(app)

    app.include_router(index_router)
    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(tasks_router)

    return app
