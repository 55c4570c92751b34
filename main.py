# ============================================================================
# EXAMPLE SERVICE - MAIN APPLICATION
# ============================================================================
# STATUS: Example - FastAPI application exposing dependency health
# PURPOSE: Show how a service wires checks into its status endpoint
# CREATED: 18 OCT 2026
# ============================================================================
"""
Example Service

FastAPI application that registers a handful of dependency checks and
mounts the status endpoint.

Checks:
- some-custom-check-fail: always fails (skip_on_err, so only degrades)
- some-custom-check-success: always passes
- http-check: HEALTH_EXAMPLE_URL (default http://example.com, skip_on_err)
- postgres-check: only when HEALTH_POSTGRES_DSN is set (skip_on_err)
- rabbit-aliveness-check: only when HEALTH_RABBITMQ_URL is set (skip_on_err)
- mysql-check: only when HEALTH_MYSQL_URL is set (skip_on_err)
- mongodb-check: only when HEALTH_MONGO_URI is set (skip_on_err)
- redis-check: only when HEALTH_REDIS_URL is set (skip_on_err)

Run from a checkout (main.py is not part of the installed package):
    pip install -e ".[example]"
    uvicorn main:app --host 0.0.0.0 --port 3000
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from health.__version__ import __version__, BUILD_DATE
from health.config import get_settings
from health.logging import configure_logging, get_logger
from health import HealthChecker
from health.checks import (
    http_check,
    mongo_check,
    mysql_check,
    postgres_check,
    rabbitmq_aliveness_check,
    redis_check,
)

configure_logging(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    json_output=os.environ.get("LOG_FORMAT", "").lower() == "json",
)
logger = get_logger(__name__)


def build_checker() -> HealthChecker:
    """Create the checker and register the example checks."""
    settings = get_settings()
    checker = HealthChecker.from_settings(settings)

    async def failing_check():
        raise RuntimeError("failed during custom health check")

    checker.register(
        name="some-custom-check-fail",
        check=failing_check,
        timeout_seconds=5.0,
        skip_on_err=True,
    )

    checker.register(
        name="some-custom-check-success",
        check=lambda: None,
    )

    checker.register(
        name="http-check",
        check=http_check(os.environ.get("HEALTH_EXAMPLE_URL", "http://example.com")),
        timeout_seconds=5.0,
        skip_on_err=True,
    )

    postgres_dsn = os.environ.get("HEALTH_POSTGRES_DSN")
    if postgres_dsn:
        checker.register(
            name="postgres-check",
            check=postgres_check(postgres_dsn),
            timeout_seconds=5.0,
            skip_on_err=True,
        )

    rabbitmq_url = os.environ.get("HEALTH_RABBITMQ_URL")
    if rabbitmq_url:
        checker.register(
            name="rabbit-aliveness-check",
            check=rabbitmq_aliveness_check(rabbitmq_url),
            timeout_seconds=5.0,
            skip_on_err=True,
        )

    mysql_url = os.environ.get("HEALTH_MYSQL_URL")
    if mysql_url:
        checker.register(
            name="mysql-check",
            check=mysql_check(mysql_url),
            timeout_seconds=5.0,
            skip_on_err=True,
        )

    mongo_uri = os.environ.get("HEALTH_MONGO_URI")
    if mongo_uri:
        checker.register(
            name="mongodb-check",
            check=mongo_check(mongo_uri),
            timeout_seconds=5.0,
            skip_on_err=True,
        )

    redis_url = os.environ.get("HEALTH_REDIS_URL")
    if redis_url:
        checker.register(
            name="redis-check",
            check=redis_check(redis_url),
            timeout_seconds=5.0,
            skip_on_err=True,
        )

    return checker


def create_app() -> FastAPI:
    """Build the example application."""
    settings = get_settings()
    checker = build_checker()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        checker.close()
        logger.info("Health check threads released")

    app = FastAPI(
        title="Dependency Health Example",
        description="Aggregated dependency health checks",
        version=__version__,
        lifespan=lifespan,
    )
    app.include_router(checker.router(path=settings.path))

    logger.info(
        f"Health checks initialized ({len(checker.registry)} checks registered, "
        f"path={settings.path})"
    )

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "service": "Dependency Health Example",
            "version": __version__,
            "build_date": BUILD_DATE,
            "health": settings.path,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "3000")),
    )
