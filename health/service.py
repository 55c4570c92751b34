# ============================================================================
# HEALTH CHECKER
# ============================================================================
# STATUS: Core - Facade over registry, executor, and router
# PURPOSE: Single object a service builds at startup and passes around
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Checker

Bundles one registry, one executor and the component descriptor.

Lifecycle:
    1. Build at startup (HealthChecker(...) or from_settings())
    2. Register checks
    3. Mount router(); the first call seals the registry
    4. Each request runs a fresh measure()
    5. close() at shutdown

Usage:
    checker = HealthChecker(component=Component("orders-api", "1.4.2"))
    checker.register(name="db", check=postgres_check(dsn), skip_on_err=True)
    checker.register(name="payments", check=http_check(payments_url))

    app.include_router(checker.router())
"""

import logging
from typing import Optional

from fastapi import APIRouter

from health.config import HealthSettings
from health.aggregator import measure
from health.core import AggregatedReport, CheckConfig, CheckFunc, Component
from health.executor import HealthCheckExecutor
from health.registry import HealthCheckRegistry
from health.router import create_health_router

logger = logging.getLogger(__name__)


class HealthChecker:
    """
    Health check facade for one service.

    Owns its registry; there is no process-wide instance.
    """

    def __init__(
        self,
        component: Optional[Component] = None,
        max_concurrent: Optional[int] = None,
        overall_timeout: Optional[float] = None,
        registry: Optional[HealthCheckRegistry] = None,
        default_timeout: Optional[float] = None,
    ):
        """
        Initialize checker.

        Args:
            component: Service name/version reported in the status body
            max_concurrent: Max checks running at once
            overall_timeout: Max total run time (None = no limit)
            registry: Existing registry (a new one if None)
            default_timeout: Timeout for checks registered by keyword
                without their own
        """
        self.component = component
        self.registry = registry if registry is not None else HealthCheckRegistry()
        self.executor = HealthCheckExecutor(
            max_concurrent=max_concurrent,
            overall_timeout=overall_timeout,
        )
        self.default_timeout = default_timeout

    @classmethod
    def from_settings(cls, settings: HealthSettings) -> "HealthChecker":
        """Create from HealthSettings (see health.config)."""
        component = None
        if settings.component_name:
            component = Component(
                name=settings.component_name,
                version=settings.component_version,
            )
        return cls(
            component=component,
            max_concurrent=settings.max_concurrent,
            overall_timeout=settings.overall_timeout_seconds,
            default_timeout=settings.default_timeout_seconds,
        )

    def register(
        self,
        config: Optional[CheckConfig] = None,
        *,
        name: Optional[str] = None,
        check: Optional[CheckFunc] = None,
        timeout_seconds: Optional[float] = None,
        skip_on_err: Optional[bool] = None,
    ) -> CheckConfig:
        """
        Register a check, either as a CheckConfig or by keyword.

        Keyword fields cannot be combined with a CheckConfig.

        Example:
            checker.register(CheckConfig(name="cache", check=ping))
            checker.register(name="cache", check=ping, skip_on_err=True)
        """
        if config is None:
            if timeout_seconds is None:
                timeout_seconds = self.default_timeout
            kwargs = {"timeout_seconds": timeout_seconds} if timeout_seconds is not None else {}
            config = CheckConfig(
                name=name or "",
                check=check,
                skip_on_err=bool(skip_on_err),
                **kwargs,
            )
        else:
            given = [
                field_name
                for field_name, value in (
                    ("name", name),
                    ("check", check),
                    ("timeout_seconds", timeout_seconds),
                    ("skip_on_err", skip_on_err),
                )
                if value is not None
            ]
            if given:
                raise TypeError(
                    f"Pass either a CheckConfig or keyword fields, not both "
                    f"(got {', '.join(given)})"
                )

        return self.registry.register(config)

    def close(self) -> None:
        """Release the executor's sync check threads (call at shutdown)."""
        self.executor.shutdown()

    async def measure(self) -> AggregatedReport:
        """Run every check and return the aggregated report."""
        return await measure(
            self.registry,
            executor=self.executor,
            component=self.component,
        )

    def router(self, path: str = "/status", include_liveness: bool = True) -> APIRouter:
        """
        Build the FastAPI router and seal the registry.

        Args:
            path: Route of the status endpoint
            include_liveness: Also mount GET /livez
        """
        if not self.registry.is_initialized:
            self.registry.mark_initialized()

        return create_health_router(
            self.registry,
            executor=self.executor,
            component=self.component,
            path=path,
            include_liveness=include_liveness,
        )


__all__ = [
    "HealthChecker",
]
