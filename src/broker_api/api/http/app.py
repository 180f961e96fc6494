"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from src.broker_api.api.http.app_data import ApplicationDependencies
from src.broker_api.api.http.errors import register_exception_handlers
from src.broker_api.api.http.routers.health import router as health_router
from src.broker_api.api.http.routers.service import (
    order_status_router,
    product_router,
    violation_router,
)
from src.broker_api.api.utils.app_startup import configure_logging
from src.broker_api.core.procedures import verify_procedures
from src.broker_api.core.services import Database, PooledDatabase
from src.broker_api.runtime.config.config_data import ConfigData
from src.broker_api.runtime.context import get_config


# --- Security middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, environment: str = "development"):
        super().__init__(app)
        self.environment = environment

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        # HSTS only in prod
        if self.environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        return response


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

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
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"error": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )


# --- Lifecycle hooks ---
def startup(config: ConfigData, database: Database | None = None) -> ApplicationDependencies:
    """Build application-wide dependencies; any failure aborts startup.

    Args:
        config: Configuration the pooled database is built from
        database: Pre-built database (tests inject a mock here)

    Raises:
        ConfigurationError: If procedures or the connection string are invalid
        DatabaseError: If the initial health check fails
    """
    logger.info("Starting up application in {} environment", config.app.environment)
    verify_procedures()

    owned = database is None
    if database is None:
        database = PooledDatabase(config)

    try:
        database.health_check()
    except Exception:
        logger.critical("Database health check failed at startup; refusing to serve")
        if owned:
            database.close()
        raise

    logger.info("Database connection established.")
    return ApplicationDependencies(database=database)


def shutdown(app_dependencies: ApplicationDependencies) -> None:
    logger.info("Shutting down application")
    app_dependencies.database.close()


def create_app(database: Database | None = None) -> FastAPI:
    """Create the API application.

    The database is an explicit dependency: pass one in, or leave it out and a
    pooled connection is created from configuration when the app starts.
    """
    config = get_config()
    configure_logging(config)
    is_production = config.app.environment == "production"

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.app_dependencies = startup(config, database)
        try:
            yield
        finally:
            shutdown(app.state.app_dependencies)

    app = FastAPI(
        title="Broker Retailer API",
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )

    app.add_middleware(SecurityHeadersMiddleware, environment=config.app.environment)

    # --- CORS configuration ---
    if is_production and "*" in config.app.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
    )
    app.middleware("http")(log_requests)

    register_exception_handlers(app)

    # --- Router registration ---
    app.include_router(health_router)
    app.include_router(product_router)
    app.include_router(violation_router)
    app.include_router(order_status_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,  # We handle access logging in middleware
    )
