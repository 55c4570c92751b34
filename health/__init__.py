# ============================================================================
# HEALTH CHECK MODULE
# ============================================================================
# STATUS: Core - Dependency health check aggregation
# PURPOSE: Run named dependency checks and serve one aggregated status
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Module

Dependency health checks for a service:
- GET /status: Runs every registered check, returns the combined status
- GET /livez: Process alive (instant, no dependency checks)

Architecture:
- CheckConfig: Named check function with timeout and skip_on_err flag
- HealthCheckRegistry: Registration with duplicate/validation errors
- HealthCheckExecutor: Parallel execution with per-check timeouts
- aggregate/measure: OK / Partially Available / Unavailable reduction
- create_health_router: FastAPI endpoint (200, or 503 when Unavailable)
- HealthChecker: Facade bundling all of the above

Support modules:
- health.config: HealthSettings from HEALTH_* / SERVICE_* env vars
- health.logging: Context-aware structured logging
- health.observability: OpenTelemetry spans

Usage:
    from health import HealthChecker, Component
    from health.checks import http_check

    checker = HealthChecker(component=Component("orders-api", "1.4.2"))
    checker.register(name="payments", check=http_check(url), skip_on_err=True)

    app.include_router(checker.router())
"""

from health.core import (
    TIMEOUT_MESSAGE,
    AggregatedReport,
    CheckConfig,
    CheckFailedError,
    CheckResult,
    CheckStatus,
    Component,
    HealthStatus,
    SystemInfo,
)
from health.registry import (
    CheckValidationError,
    DuplicateCheckError,
    HealthCheckError,
    HealthCheckRegistry,
    RegistryLockedError,
)
from health.executor import HealthCheckExecutor
from health.aggregator import aggregate, measure
from health.system import collect_system_info
from health.router import create_health_router
from health.service import HealthChecker

__all__ = [
    # Core types
    "TIMEOUT_MESSAGE",
    "AggregatedReport",
    "CheckConfig",
    "CheckFailedError",
    "CheckResult",
    "CheckStatus",
    "Component",
    "HealthStatus",
    "SystemInfo",
    # Registry
    "HealthCheckError",
    "CheckValidationError",
    "DuplicateCheckError",
    "RegistryLockedError",
    "HealthCheckRegistry",
    # Executor / aggregation
    "HealthCheckExecutor",
    "aggregate",
    "measure",
    "collect_system_info",
    # HTTP
    "create_health_router",
    "HealthChecker",
]
