# ============================================================================
# HEALTH CHECK AGGREGATOR
# ============================================================================
# STATUS: Core - Status reduction
# PURPOSE: Reduce per-check results into one aggregated report
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Aggregator

Reduction rule (worst wins):
- Every result ok                          -> OK
- Every failing result has skip_on_err     -> Partially Available
- Any failing result without skip_on_err   -> Unavailable

The failures map carries the error text of every non-ok result,
whatever its skip flag.
"""

import logging
import time
from typing import Dict, Mapping, Optional

from health.core import (
    AggregatedReport,
    CheckResult,
    Component,
    HealthStatus,
    SystemInfo,
)
from health.executor import HealthCheckExecutor
from health.registry import HealthCheckRegistry
from health.system import collect_system_info

logger = logging.getLogger(__name__)


def status_for_result(result: CheckResult) -> HealthStatus:
    """Contribution of one check to the overall status."""
    if result.is_ok:
        return HealthStatus.OK
    if result.skip_on_err:
        return HealthStatus.PARTIALLY_AVAILABLE
    return HealthStatus.UNAVAILABLE


def aggregate(
    results: Mapping[str, CheckResult],
    system: SystemInfo,
    component: Optional[Component] = None,
    total_duration_ms: float = 0.0,
) -> AggregatedReport:
    """
    Build the aggregated report for one run.

    Args:
        results: Check results keyed by name (registration order)
        system: Process metrics snapshot
        component: Optional service descriptor
        total_duration_ms: Wall time of the run

    Returns:
        AggregatedReport
    """
    status = HealthStatus.aggregate([status_for_result(r) for r in results.values()])

    failures: Dict[str, str] = {
        name: result.error or result.status.value
        for name, result in results.items()
        if not result.is_ok
    }

    if failures:
        logger.debug(f"Aggregated status {status.value}: {len(failures)} failing checks")

    return AggregatedReport(
        status=status,
        failures=failures,
        system=system,
        checks=dict(results),
        component=component,
        total_duration_ms=total_duration_ms,
    )


async def measure(
    registry: HealthCheckRegistry,
    executor: Optional[HealthCheckExecutor] = None,
    component: Optional[Component] = None,
) -> AggregatedReport:
    """
    Run every registered check and aggregate the outcome.

    A fresh run happens on every call; nothing is cached.
    """
    executor = executor or HealthCheckExecutor()
    start_time = time.monotonic()

    results = await executor.execute(registry)

    total_duration_ms = (time.monotonic() - start_time) * 1000
    return aggregate(
        results,
        system=collect_system_info(),
        component=component,
        total_duration_ms=total_duration_ms,
    )


__all__ = [
    "aggregate",
    "measure",
    "status_for_result",
]
