# ============================================================================
# HEALTH CHECK ROUTER
# ============================================================================
# STATUS: Core - FastAPI health check endpoints
# PURPOSE: Expose the aggregated status report over HTTP
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Router

FastAPI router exposing the aggregated status of a registry.

Endpoints:
    GET <path>   - Full status (default path: /status)
                   Runs every registered check on each request and returns
                   {status, timestamp, failures, system, component?}.

    GET /livez   - Liveness probe (is the process alive?)
                   Instant, no dependency checks.

Response Codes:
    200 - OK or Partially Available
    503 - Unavailable (service unavailable)
"""

import logging
from typing import Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from health.aggregator import measure
from health.core import Component, HealthStatus
from health.executor import HealthCheckExecutor
from health.registry import HealthCheckRegistry
from health.schemas import LivenessResponse, StatusResponse
from health.__version__ import __version__, BUILD_DATE

logger = logging.getLogger(__name__)


def create_health_router(
    registry: HealthCheckRegistry,
    executor: Optional[HealthCheckExecutor] = None,
    component: Optional[Component] = None,
    path: str = "/status",
    include_liveness: bool = True,
) -> APIRouter:
    """
    Build the health router for a registry.

    Args:
        registry: Checks to run on each request
        executor: Executor to run them with (default settings if None)
        component: Optional service descriptor included in the body
        path: Route of the status endpoint
        include_liveness: Also mount GET /livez

    Returns:
        APIRouter ready for app.include_router()
    """
    if not path.startswith("/"):
        raise ValueError(f"Health path must start with '/': {path!r}")

    executor = executor or HealthCheckExecutor()
    router = APIRouter(tags=["Health"])

    # ========================================================================
    # STATUS
    # ========================================================================

    @router.get(
        path,
        response_model=StatusResponse,
        responses={503: {"model": StatusResponse, "description": "Unavailable"}},
    )
    async def health_status():
        """
        Aggregated dependency status.

        Runs all registered checks and returns the combined judgment.

        Returns:
            200: All checks ok, or only skippable checks failing
            503: A non-skippable check is failing
        """
        report = await measure(registry, executor=executor, component=component)

        if report.status == HealthStatus.UNAVAILABLE:
            logger.warning(
                f"Health status Unavailable: {', '.join(report.failures)}"
            )

        body = StatusResponse.from_report(report).to_body()
        return JSONResponse(status_code=report.http_status_code, content=body)

    # ========================================================================
    # LIVENESS PROBE
    # ========================================================================

    if include_liveness:
        @router.get("/livez", response_model=LivenessResponse)
        async def liveness_probe():
            """
            Liveness probe.

            Returns 200 while the process is able to serve requests.
            No dependency checks are run.
            """
            return {"status": "alive", "version": __version__, "build_date": BUILD_DATE}

    return router


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "create_health_router",
]
