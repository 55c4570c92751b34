# ============================================================================
# HEALTH CHECK EXECUTOR
# ============================================================================
# STATUS: Core - Parallel health check execution
# PURPOSE: Run every registered check concurrently with per-check timeouts
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Executor

Executes health checks with:
- One asyncio task per check, all started together
- Per-check timeouts (the clock starts once a concurrency slot is acquired
  and, for sync checks, once a worker thread picks the check up)
- A dedicated thread pool for sync checks
- Bounded parallelism (max_concurrent)
- Optional overall timeout; unfinished checks are recorded as timed out
- Join barrier: results are returned only when every check has finished

Failures never escape the executor. A check that raises, returns an
exception, or outlives its timeout becomes a CheckResult carrying the
error text.

Cancelling the task that awaits execute() cancels every in-flight check
before the cancellation propagates.
"""

import asyncio
import inspect
import os
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Awaitable, Dict, List, Optional

from health.logging import ComponentType, get_logger, log_context
from health.observability import mark_span_error, start_span
from health.core import CheckConfig, CheckResult, describe_error
from health.registry import HealthCheckRegistry

logger = get_logger(__name__, ComponentType.EXECUTOR)


class HealthCheckExecutor:
    """
    Executes registered checks in parallel with timeouts.

    The executor holds no per-run state; one instance can serve
    concurrent requests.
    """

    def __init__(
        self,
        max_concurrent: Optional[int] = None,
        overall_timeout: Optional[float] = None,
        max_threads: Optional[int] = None,
    ):
        """
        Initialize executor.

        Args:
            max_concurrent: Max checks running at once (default: CPU count)
            overall_timeout: Max total execution time (None = no limit)
            max_threads: Worker threads for sync checks (default: max_concurrent)
        """
        if max_concurrent is None:
            max_concurrent = os.cpu_count() or 1
        if max_concurrent < 1:
            raise ValueError(f"max_concurrent must be >= 1 (got {max_concurrent})")
        if overall_timeout is not None and overall_timeout <= 0:
            raise ValueError(f"overall_timeout must be positive (got {overall_timeout})")
        if max_threads is None:
            max_threads = max_concurrent
        if max_threads < 1:
            raise ValueError(f"max_threads must be >= 1 (got {max_threads})")

        self.max_concurrent = max_concurrent
        self.overall_timeout = overall_timeout
        self.max_threads = max_threads
        # Sync checks never share the loop's default executor
        self._thread_pool = ThreadPoolExecutor(
            max_workers=max_threads,
            thread_name_prefix="health-check",
        )

    def shutdown(self) -> None:
        """Release the sync check threads; checks still running are abandoned."""
        self._thread_pool.shutdown(wait=False, cancel_futures=True)

    async def execute(self, registry: HealthCheckRegistry) -> Dict[str, CheckResult]:
        """
        Execute all registered checks.

        Args:
            registry: Registry holding the checks to run

        Returns:
            Mapping of check name to result, in registration order
        """
        checks = registry.list()
        if not checks:
            return {}

        with start_span(
            "health.measure",
            {"health.checks_count": len(checks)},
        ) as span:
            results = await self._execute_checks(checks)

            failed = [r.name for r in results.values() if not r.is_ok]
            span.set_attribute("health.failed_count", len(failed))
            if failed:
                mark_span_error(span, f"Failed checks: {', '.join(failed)}")

        return results

    async def execute_single(
        self,
        registry: HealthCheckRegistry,
        name: str,
    ) -> Optional[CheckResult]:
        """Execute a single check by name."""
        config = registry.get(name)
        if config is None:
            return None

        return await self._execute_check(config)

    async def _execute_checks(
        self,
        checks: List[CheckConfig],
    ) -> Dict[str, CheckResult]:
        """Fan out one task per check and wait for all of them."""
        start_time = time.monotonic()
        semaphore = asyncio.Semaphore(self.max_concurrent)

        async def run_with_semaphore(config: CheckConfig) -> CheckResult:
            async with semaphore:
                return await self._execute_check(config)

        tasks: Dict[asyncio.Task, CheckConfig] = {
            asyncio.create_task(
                run_with_semaphore(config),
                name=f"health-check:{config.name}",
            ): config
            for config in checks
        }

        try:
            done, pending = await asyncio.wait(
                tasks,
                timeout=self.overall_timeout,
                return_when=asyncio.ALL_COMPLETED,
            )
        except asyncio.CancelledError:
            logger.warning(f"Health check run cancelled ({len(tasks)} checks)")
            await self._cancel(list(tasks))
            raise

        results: Dict[str, CheckResult] = {}

        for task in done:
            config = tasks[task]
            if task.cancelled():
                results[config.name] = CheckResult.timeout(config)
                continue
            error = task.exception()
            if error is not None:
                logger.error(f"Health check {config.name} crashed: {error}")
                results[config.name] = CheckResult.from_exception(config, error)
            else:
                results[config.name] = task.result()

        if pending:
            logger.warning(
                f"Health check overall timeout ({self.overall_timeout}s) exceeded, "
                f"cancelling {len(pending)} checks"
            )
            await self._cancel(list(pending))
            elapsed_ms = (time.monotonic() - start_time) * 1000
            for task in pending:
                config = tasks[task]
                results[config.name] = CheckResult.timeout(config, elapsed_ms)

        return {config.name: results[config.name] for config in checks}

    @staticmethod
    async def _cancel(tasks: List[asyncio.Task]) -> None:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def _execute_check(self, config: CheckConfig) -> CheckResult:
        """Execute a single check with timeout."""
        start_time = time.monotonic()

        with log_context(check_name=config.name, operation="check"), start_span(
            f"health.check.{config.name}",
            {
                "health.check.name": config.name,
                "health.check.timeout_seconds": config.timeout_seconds,
                "health.check.skip_on_err": config.skip_on_err,
            },
        ) as span:
            try:
                outcome = await self._invoke(config)
            except asyncio.TimeoutError:
                duration_ms = (time.monotonic() - start_time) * 1000
                logger.warning(
                    f"Health check {config.name} timed out after {config.timeout_seconds}s"
                )
                result = CheckResult.timeout(config, duration_ms)
            else:
                duration_ms = (time.monotonic() - start_time) * 1000
                if isinstance(outcome, BaseException):
                    logger.warning(f"Health check {config.name} failed: {describe_error(outcome)}")
                    result = CheckResult.from_exception(config, outcome, duration_ms)
                else:
                    logger.debug(f"Health check {config.name}: ok ({duration_ms:.1f}ms)")
                    result = CheckResult.ok(config, duration_ms)

            span.set_attribute("health.check.status", result.status.value)
            if result.error:
                mark_span_error(span, result.error)

        return result

    async def _invoke(self, config: CheckConfig) -> Any:
        """
        Call a check under its timeout and return its outcome.

        Exceptions raised by the check are returned rather than raised so
        that a TimeoutError from inside a check is not confused with the
        check's own deadline.

        Sync checks run on the executor's own thread pool. Their clock
        starts when a worker thread picks them up, so a pool still busy
        with abandoned checks delays a healthy check instead of failing it.

        Raises:
            asyncio.TimeoutError: The check outlived timeout_seconds
        """
        check = config.check
        if inspect.iscoroutinefunction(check) or inspect.iscoroutinefunction(
            getattr(check, "__call__", None)
        ):
            return await asyncio.wait_for(
                _settle(check()),
                timeout=config.timeout_seconds,
            )

        loop = asyncio.get_running_loop()
        started = asyncio.Event()

        def run() -> Any:
            if loop.is_closed():
                return None
            loop.call_soon_threadsafe(started.set)
            try:
                return check()
            except Exception as e:
                return e

        future = loop.run_in_executor(self._thread_pool, run)
        try:
            await started.wait()
        except asyncio.CancelledError:
            future.cancel()
            raise

        started_at = time.monotonic()
        outcome = await asyncio.wait_for(future, timeout=config.timeout_seconds)
        if inspect.isawaitable(outcome):
            remaining = config.timeout_seconds - (time.monotonic() - started_at)
            outcome = await asyncio.wait_for(_settle(outcome), timeout=max(remaining, 0))
        return outcome


async def _settle(awaitable: Awaitable[Any]) -> Any:
    """Await a check's outcome, returning any exception it raises."""
    try:
        outcome = await awaitable
        if inspect.isawaitable(outcome):
            outcome = await outcome
        return outcome
    except Exception as e:
        return e


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "HealthCheckExecutor",
]
