# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for health endpoint, timeouts, concurrency
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides sensible defaults for the health check endpoint.
These can be overridden via environment variables.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from health.__version__ import __version__


# Per-check timeout applied when a check does not set its own
DEFAULT_CHECK_TIMEOUT_SECONDS = 2.0


def _optional_float(value: Optional[str]) -> Optional[float]:
    """Parse an optional float env value ('' and None mean unset)."""
    if value is None or value.strip() == "":
        return None
    return float(value)


@dataclass(frozen=True)
class HealthSettings:
    """
    Settings for the health check endpoint.

    Controls where the endpoint is mounted, how long checks may run,
    and how the reporting service identifies itself.
    """
    # Endpoint
    path: str = "/status"

    # Timeouts (seconds)
    default_timeout_seconds: float = DEFAULT_CHECK_TIMEOUT_SECONDS
    overall_timeout_seconds: Optional[float] = None  # None = wait for every check

    # Concurrency
    max_concurrent: int = field(default_factory=lambda: os.cpu_count() or 1)

    # Component info (reported in the status body)
    component_name: Optional[str] = None
    component_version: str = __version__

    @classmethod
    def from_env(cls) -> "HealthSettings":
        """Create from environment variables."""
        return cls(
            path=os.getenv("HEALTH_PATH", "/status"),
            default_timeout_seconds=float(
                os.getenv("HEALTH_CHECK_TIMEOUT", DEFAULT_CHECK_TIMEOUT_SECONDS)
            ),
            overall_timeout_seconds=_optional_float(os.getenv("HEALTH_OVERALL_TIMEOUT")),
            max_concurrent=int(os.getenv("HEALTH_MAX_CONCURRENT", os.cpu_count() or 1)),
            component_name=os.getenv("SERVICE_NAME") or None,
            component_version=os.getenv("SERVICE_VERSION", __version__),
        )


# ============================================================================
# GLOBAL SETTINGS INSTANCE
# ============================================================================

_settings: Optional[HealthSettings] = None


def get_settings() -> HealthSettings:
    """Get global settings instance."""
    global _settings
    if _settings is None:
        _settings = HealthSettings.from_env()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "DEFAULT_CHECK_TIMEOUT_SECONDS",
    "HealthSettings",
    "get_settings",
    "reset_settings",
]
