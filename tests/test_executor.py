# ============================================================================
# HEALTH CHECK EXECUTOR TESTS
# ============================================================================
# STATUS: Tests - Fan-out/fan-in, timeouts, cancellation
# PURPOSE: Verify HealthCheckExecutor outcomes and concurrency limits
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Executor Tests

Uses short real timeouts with asyncio.sleep-based checks. Hanging sync
checks block on a threading.Event that each test releases before exiting.

Run with:
    pytest tests/test_executor.py -v
"""

import asyncio
import threading
import time

import pytest

from health.core import TIMEOUT_MESSAGE, CheckConfig, CheckStatus
from health.executor import HealthCheckExecutor
from health.registry import HealthCheckRegistry


# ============================================================================
# HELPERS
# ============================================================================

async def _ok():
    return None


async def _hang():
    await asyncio.sleep(30)


def _registry(*configs):
    registry = HealthCheckRegistry()
    for config in configs:
        registry.register(config)
    return registry


def _run(executor, registry):
    return asyncio.run(executor.execute(registry))


# ============================================================================
# OUTCOMES
# ============================================================================

class TestOutcomes:
    """Tests for ok / failed / timeout classification."""

    def test_empty_registry_returns_empty_results(self):
        results = _run(HealthCheckExecutor(), HealthCheckRegistry())
        assert results == {}

    def test_async_check_ok(self):
        registry = _registry(CheckConfig(name="db", check=_ok))

        results = _run(HealthCheckExecutor(), registry)

        assert results["db"].status == CheckStatus.OK
        assert results["db"].error is None
        assert results["db"].duration_ms >= 0

    def test_raised_exception_is_failure(self):
        async def broken():
            raise ConnectionError("connection refused")

        registry = _registry(CheckConfig(name="db", check=broken))

        results = _run(HealthCheckExecutor(), registry)

        assert results["db"].status == CheckStatus.FAILED
        assert results["db"].error == "connection refused"

    def test_returned_exception_is_failure(self):
        async def returns_error():
            return ConnectionError("no route to host")

        registry = _registry(CheckConfig(name="db", check=returns_error))

        results = _run(HealthCheckExecutor(), registry)

        assert results["db"].status == CheckStatus.FAILED
        assert results["db"].error == "no route to host"

    def test_empty_error_message_uses_class_name(self):
        async def broken():
            raise RuntimeError()

        registry = _registry(CheckConfig(name="db", check=broken))

        results = _run(HealthCheckExecutor(), registry)

        assert results["db"].error == "RuntimeError"

    def test_sync_check_runs(self):
        calls = []

        def sync_ok():
            calls.append(1)

        def sync_fail():
            raise ValueError("bad response")

        registry = _registry(
            CheckConfig(name="ok", check=sync_ok),
            CheckConfig(name="bad", check=sync_fail),
        )

        results = _run(HealthCheckExecutor(), registry)

        assert calls == [1]
        assert results["ok"].status == CheckStatus.OK
        assert results["bad"].status == CheckStatus.FAILED
        assert results["bad"].error == "bad response"

    def test_hanging_check_times_out(self):
        registry = _registry(CheckConfig(name="slow", check=_hang, timeout_seconds=0.05))

        start = time.monotonic()
        results = _run(HealthCheckExecutor(), registry)
        elapsed = time.monotonic() - start

        assert results["slow"].status == CheckStatus.TIMEOUT
        assert results["slow"].error == TIMEOUT_MESSAGE
        assert elapsed < 5

    def test_timeout_error_raised_by_check_is_failure(self):
        async def socket_timeout():
            raise TimeoutError("read timed out")

        registry = _registry(
            CheckConfig(name="db", check=socket_timeout, timeout_seconds=5.0)
        )

        results = _run(HealthCheckExecutor(), registry)

        assert results["db"].status == CheckStatus.FAILED
        assert results["db"].error == "read timed out"

    def test_skip_flag_copied_to_result(self):
        registry = _registry(
            CheckConfig(name="a", check=_ok, skip_on_err=True),
            CheckConfig(name="b", check=_ok),
        )

        results = _run(HealthCheckExecutor(), registry)

        assert results["a"].skip_on_err is True
        assert results["b"].skip_on_err is False

    def test_results_in_registration_order(self):
        async def delayed(seconds):
            await asyncio.sleep(seconds)

        registry = _registry(
            CheckConfig(name="slowest", check=lambda: delayed(0.06)),
            CheckConfig(name="fast", check=_ok),
            CheckConfig(name="mid", check=lambda: delayed(0.03)),
        )

        results = _run(HealthCheckExecutor(), registry)

        assert list(results) == ["slowest", "fast", "mid"]
        assert all(r.status == CheckStatus.OK for r in results.values())

    def test_one_result_per_registered_check(self):
        async def broken():
            raise RuntimeError("down")

        registry = _registry(
            CheckConfig(name="a", check=_ok),
            CheckConfig(name="b", check=broken),
            CheckConfig(name="c", check=_hang, timeout_seconds=0.05),
        )

        results = _run(HealthCheckExecutor(), registry)

        assert set(results) == set(registry.names())


# ============================================================================
# CONCURRENCY
# ============================================================================

class TestConcurrency:
    """Tests for parallel execution and the concurrency limit."""

    def test_checks_run_in_parallel(self):
        async def sleepy():
            await asyncio.sleep(0.2)

        registry = _registry(
            *[CheckConfig(name=f"c{i}", check=sleepy) for i in range(5)]
        )

        start = time.monotonic()
        results = _run(HealthCheckExecutor(max_concurrent=5), registry)
        elapsed = time.monotonic() - start

        assert len(results) == 5
        # Sequential execution would take ~1s
        assert elapsed < 0.8

    def test_max_concurrent_bounds_parallelism(self):
        running = 0
        peak = 0

        async def tracked():
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0.02)
            running -= 1

        registry = _registry(
            *[CheckConfig(name=f"c{i}", check=tracked) for i in range(6)]
        )

        results = _run(HealthCheckExecutor(max_concurrent=2), registry)

        assert len(results) == 6
        assert peak == 2

    def test_timeout_starts_after_slot_acquired(self):
        async def sleepy():
            await asyncio.sleep(0.15)

        registry = _registry(
            CheckConfig(name="first", check=sleepy, timeout_seconds=0.35),
            CheckConfig(name="second", check=sleepy, timeout_seconds=0.35),
            CheckConfig(name="third", check=sleepy, timeout_seconds=0.35),
        )

        results = _run(HealthCheckExecutor(max_concurrent=1), registry)

        assert all(r.status == CheckStatus.OK for r in results.values())

    def test_invalid_max_concurrent(self):
        with pytest.raises(ValueError):
            HealthCheckExecutor(max_concurrent=0)

    def test_invalid_overall_timeout(self):
        with pytest.raises(ValueError):
            HealthCheckExecutor(overall_timeout=0)

    def test_invalid_max_threads(self):
        with pytest.raises(ValueError):
            HealthCheckExecutor(max_threads=0)


# ============================================================================
# OVERALL TIMEOUT / CANCELLATION
# ============================================================================

class TestCancellation:
    """Tests for overall timeout and parent cancellation."""

    def test_overall_timeout_preserves_completed_results(self):
        async def broken():
            raise RuntimeError("down")

        registry = _registry(
            CheckConfig(name="fast", check=_ok),
            CheckConfig(name="broken", check=broken),
            CheckConfig(name="slow", check=_hang, timeout_seconds=30),
        )

        start = time.monotonic()
        results = _run(HealthCheckExecutor(overall_timeout=0.1), registry)
        elapsed = time.monotonic() - start

        assert elapsed < 5
        assert results["fast"].status == CheckStatus.OK
        assert results["broken"].status == CheckStatus.FAILED
        assert results["slow"].status == CheckStatus.TIMEOUT
        assert results["slow"].error == TIMEOUT_MESSAGE

    def test_parent_cancellation_reaches_checks(self):
        async def scenario():
            started = asyncio.Event()
            cancelled = asyncio.Event()

            async def slow():
                started.set()
                try:
                    await asyncio.sleep(30)
                except asyncio.CancelledError:
                    cancelled.set()
                    raise

            registry = _registry(CheckConfig(name="slow", check=slow, timeout_seconds=30))
            run = asyncio.create_task(HealthCheckExecutor().execute(registry))

            await started.wait()
            run.cancel()

            with pytest.raises(asyncio.CancelledError):
                await run

            return cancelled.is_set()

        assert asyncio.run(scenario()) is True


# ============================================================================
# SINGLE CHECK
# ============================================================================

class TestExecuteSingle:
    """Tests for execute_single()."""

    def test_runs_named_check(self):
        registry = _registry(
            CheckConfig(name="a", check=_ok),
            CheckConfig(name="b", check=_hang, timeout_seconds=0.05),
        )

        result = asyncio.run(HealthCheckExecutor().execute_single(registry, "a"))

        assert result.name == "a"
        assert result.status == CheckStatus.OK

    def test_unknown_name_returns_none(self):
        result = asyncio.run(
            HealthCheckExecutor().execute_single(HealthCheckRegistry(), "missing")
        )
        assert result is None


# ============================================================================
# SYNC CHECK THREADS
# ============================================================================

class TestSyncCheckThreads:
    """Tests for the executor's own thread pool."""

    def test_sync_checks_use_dedicated_threads(self):
        seen = []

        def sync_ok():
            seen.append(threading.current_thread().name)

        executor = HealthCheckExecutor()
        try:
            _run(executor, _registry(CheckConfig(name="sync", check=sync_ok)))
        finally:
            executor.shutdown()

        assert seen[0].startswith("health-check")

    def test_sync_timeout_error_is_failure(self):
        def raises_timeout():
            raise TimeoutError("read timed out")

        registry = _registry(CheckConfig(name="db", check=raises_timeout))

        results = _run(HealthCheckExecutor(), registry)

        assert results["db"].status == CheckStatus.FAILED
        assert results["db"].error == "read timed out"

    def test_stuck_threads_do_not_fail_healthy_sync_check(self):
        release = threading.Event()
        calls = []

        def stuck():
            release.wait(5)

        def healthy():
            calls.append(1)

        executor = HealthCheckExecutor(max_concurrent=4, max_threads=2)
        try:
            stuck_results = _run(executor, _registry(
                CheckConfig(name="stuck-1", check=stuck, timeout_seconds=0.05),
                CheckConfig(name="stuck-2", check=stuck, timeout_seconds=0.05),
            ))

            async def scenario():
                # Both workers are still busy; free them after the healthy
                # check's own timeout would already have expired
                asyncio.get_running_loop().call_later(0.3, release.set)
                return await executor.execute(_registry(
                    CheckConfig(name="healthy", check=healthy, timeout_seconds=0.1),
                ))

            results = asyncio.run(scenario())
        finally:
            release.set()
            executor.shutdown()

        assert all(r.status == CheckStatus.TIMEOUT for r in stuck_results.values())
        assert results["healthy"].status == CheckStatus.OK
        assert calls == [1]

    def test_stuck_threads_leave_default_executor_free(self):
        release = threading.Event()

        def stuck():
            release.wait(5)

        executor = HealthCheckExecutor(max_concurrent=8, max_threads=8)

        async def scenario():
            await executor.execute(_registry(*[
                CheckConfig(name=f"stuck-{i}", check=stuck, timeout_seconds=0.05)
                for i in range(8)
            ]))
            loop = asyncio.get_running_loop()
            return await asyncio.wait_for(
                loop.run_in_executor(None, lambda: "free"),
                timeout=1.0,
            )

        try:
            assert asyncio.run(scenario()) == "free"
        finally:
            release.set()
            executor.shutdown()
