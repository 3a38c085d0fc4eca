"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from user_api.api.http.app_data import ApplicationDependencies
from user_api.api.http.controllers.user import UserController
from user_api.api.http.exception_handlers import register_exception_handlers
from user_api.api.http.response import error_response
from user_api.api.http.routers import health
from user_api.api.http.routers.users import build_user_router
from user_api.core.services.database.db_session import DbSessionService
from user_api.core.services.user_service import UserService
from user_api.runtime.config.config_data import ConfigData

API_PREFIX = "/api/v1"


def create_app(
    config: ConfigData, database_service: DbSessionService | None = None
) -> FastAPI:
    """Build the application around an explicit configuration.

    A ready ``database_service`` can be handed in (the entry point and tests
    do); otherwise one is created from ``config.database``.
    """
    environment = config.app.environment
    if database_service is None:
        database_service = DbSessionService(config.database, environment)

    deps = ApplicationDependencies(
        database_service=database_service,
        user_service=UserService(database_service),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting up application in {} environment", environment)
        try:
            yield
        finally:
            logger.info("Shutting down application")
            deps.database_service.dispose()

    is_production = environment == "production"
    app = FastAPI(
        title=config.app.name,
        version=config.app.version,
        description="User management REST API",
        lifespan=lifespan,
        docs_url=None if is_production else "/swagger",
        redoc_url=None,
        openapi_url=None if is_production else "/swagger/doc.json",
    )
    app.state.app_dependencies = deps

    # --- CORS configuration ---
    cors = config.app.cors
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors.origins,
        allow_credentials=cors.allow_credentials,
        allow_methods=cors.allow_methods,
        allow_headers=cors.allow_headers,
    )

    # --- Request logging middleware ---
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        client_ip = request.client.host if request.client else "unknown"

        base_ctx = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "client_ip": client_ip,
            "user_agent": request.headers.get("user-agent", "unknown"),
        }

        start = time.perf_counter()

        # Everything that logs within this block inherits base_ctx
        with logger.contextualize(**base_ctx):
            try:
                response = await call_next(request)
            except Exception as exc:
                duration_ms = (time.perf_counter() - start) * 1000
                logger.bind(
                    status_code=500,
                    duration_ms=round(duration_ms, 1),
                    error_type=type(exc).__name__,
                ).exception("request.error")
                response = error_response(500, "Internal server error")
                response.headers["X-Request-ID"] = request_id
                return response

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

    register_exception_handlers(app)

    # --- Router registration ---
    api = APIRouter(prefix=API_PREFIX)
    api.include_router(build_user_router(UserController(deps.user_service)))
    app.include_router(api)
    app.include_router(health.router)

    return app
