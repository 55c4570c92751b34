# ============================================================================
# HEALTH CHECK CORE TYPES
# ============================================================================
# STATUS: Core - Check configuration, results, and report types
# PURPOSE: Shared value types for registry, executor, aggregator, router
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Core Types

Defines check configuration and result types.

Status Hierarchy (worst wins):
- OK: Every check passed
- Partially Available: Only checks marked skip_on_err failed
- Unavailable: At least one check without skip_on_err failed

Check functions:
    A check is a zero-argument callable, either ``async def`` or plain.
    It fails by raising an exception or by returning an exception
    instance. Any other return value means the dependency is reachable.
"""

from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union
from dataclasses import dataclass, field
from datetime import datetime, timezone

from health.config import DEFAULT_CHECK_TIMEOUT_SECONDS


# Failure text recorded for a check that outlived its timeout
TIMEOUT_MESSAGE = "Timeout during health check"

CheckFunc = Callable[[], Union[Any, Awaitable[Any]]]


class CheckFailedError(Exception):
    """Raised by built-in checks when a dependency is unreachable."""
    pass


class HealthStatus(str, Enum):
    """Aggregated health status values."""
    OK = "OK"
    PARTIALLY_AVAILABLE = "Partially Available"
    UNAVAILABLE = "Unavailable"

    @property
    def severity(self) -> int:
        return {
            HealthStatus.OK: 0,
            HealthStatus.PARTIALLY_AVAILABLE: 1,
            HealthStatus.UNAVAILABLE: 2,
        }[self]

    def __lt__(self, other: "HealthStatus") -> bool:
        """Enable comparison for 'worst wins' aggregation."""
        return self.severity < other.severity

    @classmethod
    def aggregate(cls, statuses: List["HealthStatus"]) -> "HealthStatus":
        """Aggregate multiple statuses (worst wins)."""
        if not statuses:
            return cls.OK
        return max(statuses, key=lambda s: s.severity)

    @property
    def http_status_code(self) -> int:
        """HTTP code for the status endpoint."""
        if self is HealthStatus.UNAVAILABLE:
            return 503
        return 200


class CheckStatus(str, Enum):
    """Outcome of a single check."""
    OK = "ok"
    FAILED = "failed"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class CheckConfig:
    """
    Configuration of one named dependency check.

    Attributes:
        name: Unique identifier for the check
        check: Zero-argument callable (sync or async) probing the dependency
        timeout_seconds: Max execution time before the check times out
        skip_on_err: If True, failure degrades the status to
            Partially Available instead of Unavailable

    Example:
        CheckConfig(
            name="postgres",
            check=postgres_check(dsn),
            timeout_seconds=5.0,
            skip_on_err=True,
        )
    """
    name: str
    check: Optional[CheckFunc]
    timeout_seconds: float = DEFAULT_CHECK_TIMEOUT_SECONDS
    skip_on_err: bool = False


@dataclass
class CheckResult:
    """Result from a single check run."""
    name: str
    status: CheckStatus
    error: Optional[str] = None
    duration_ms: float = 0.0
    skip_on_err: bool = False

    @property
    def is_ok(self) -> bool:
        return self.status == CheckStatus.OK

    @classmethod
    def ok(cls, config: CheckConfig, duration_ms: float = 0.0) -> "CheckResult":
        """Create passing result."""
        return cls(
            name=config.name,
            status=CheckStatus.OK,
            duration_ms=duration_ms,
            skip_on_err=config.skip_on_err,
        )

    @classmethod
    def failed(
        cls,
        config: CheckConfig,
        error: str,
        duration_ms: float = 0.0,
    ) -> "CheckResult":
        """Create failed result."""
        return cls(
            name=config.name,
            status=CheckStatus.FAILED,
            error=error,
            duration_ms=duration_ms,
            skip_on_err=config.skip_on_err,
        )

    @classmethod
    def timeout(cls, config: CheckConfig, duration_ms: float = 0.0) -> "CheckResult":
        """Create timed-out result."""
        return cls(
            name=config.name,
            status=CheckStatus.TIMEOUT,
            error=TIMEOUT_MESSAGE,
            duration_ms=duration_ms,
            skip_on_err=config.skip_on_err,
        )

    @classmethod
    def from_exception(
        cls,
        config: CheckConfig,
        e: BaseException,
        duration_ms: float = 0.0,
    ) -> "CheckResult":
        """Create failed result from exception."""
        return cls.failed(config, describe_error(e), duration_ms)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response."""
        result = {
            "status": self.status.value,
            "duration_ms": round(self.duration_ms, 2),
        }
        if self.error:
            result["error"] = self.error
        return result


def describe_error(e: BaseException) -> str:
    """Error text for a failed check (class name when the message is empty)."""
    message = str(e)
    return message if message else type(e).__name__


@dataclass(frozen=True)
class Component:
    """Service that owns the health endpoint."""
    name: str
    version: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "version": self.version}


@dataclass
class SystemInfo:
    """Process metrics captured alongside a report."""
    version: str
    threads_count: int
    tasks_count: int
    alloc_bytes: int
    total_alloc_bytes: int
    heap_objects_count: int
    gc_collections: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "threads_count": self.threads_count,
            "tasks_count": self.tasks_count,
            "alloc_bytes": self.alloc_bytes,
            "total_alloc_bytes": self.total_alloc_bytes,
            "heap_objects_count": self.heap_objects_count,
            "gc_collections": self.gc_collections,
        }


@dataclass
class AggregatedReport:
    """Aggregated result from one run of every registered check."""
    status: HealthStatus
    failures: Dict[str, str]
    system: SystemInfo
    checks: Dict[str, CheckResult] = field(default_factory=dict)
    component: Optional[Component] = None
    total_duration_ms: float = 0.0
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def http_status_code(self) -> int:
        return self.status.http_status_code

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the status endpoint body.

        Shape: {status, timestamp, failures, system, component?}
        """
        body: Dict[str, Any] = {
            "status": self.status.value,
            "timestamp": self.timestamp.isoformat().replace("+00:00", "Z"),
            "failures": dict(self.failures),
            "system": self.system.to_dict(),
        }
        if self.component is not None:
            body["component"] = self.component.to_dict()
        return body
