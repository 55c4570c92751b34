# ============================================================================
# HEALTH CHECK REGISTRY
# ============================================================================
# STATUS: Core - Check registration and lookup
# PURPOSE: Hold named check configurations for the executor
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Registry

Holds the named checks a service exposes on its status endpoint.

Design:
- Explicitly constructed at startup and passed to the executor/router
- Fail-fast on duplicate names and incomplete configs
- Registration order is preserved (deterministic output)
- Sealed with mark_initialized() once startup completes; read-only after

Usage:
    registry = HealthCheckRegistry()
    registry.register(CheckConfig(name="db", check=postgres_check(dsn)))
    registry.mark_initialized()

    for config in registry.list():
        ...
"""

import logging
from typing import Dict, List, Optional

from health.core import CheckConfig

logger = logging.getLogger(__name__)


# ============================================================================
# EXCEPTIONS
# ============================================================================

class HealthCheckError(Exception):
    """Base exception for health check registration errors."""
    pass


class CheckValidationError(HealthCheckError):
    """Raised when a check config is incomplete or invalid."""
    def __init__(self, message: str, check_name: Optional[str] = None):
        self.check_name = check_name
        super().__init__(message)


class DuplicateCheckError(HealthCheckError):
    """Raised when a check name is already registered."""
    def __init__(self, check_name: str):
        self.check_name = check_name
        super().__init__(f"Health check already registered: {check_name}")


class RegistryLockedError(HealthCheckError):
    """Raised when the registry is modified after initialization."""
    def __init__(self, check_name: str):
        self.check_name = check_name
        super().__init__(
            f"Health check registry is initialized; cannot modify '{check_name}'"
        )


# ============================================================================
# REGISTRY
# ============================================================================

class HealthCheckRegistry:
    """
    Registry of named health checks.

    Checks are kept in registration order. Names are unique.
    """

    def __init__(self):
        self._checks: Dict[str, CheckConfig] = {}
        self._initialized = False

    def register(self, config: CheckConfig) -> CheckConfig:
        """
        Register a check.

        Args:
            config: Check configuration

        Returns:
            The registered config

        Raises:
            CheckValidationError: Name empty, check missing, or bad timeout
            DuplicateCheckError: Name already registered
            RegistryLockedError: Registry already initialized
        """
        self._validate(config)

        if self._initialized:
            raise RegistryLockedError(config.name)

        if config.name in self._checks:
            raise DuplicateCheckError(config.name)

        self._checks[config.name] = config
        logger.debug(
            f"Registered health check: {config.name} "
            f"(timeout={config.timeout_seconds}s, skip_on_err={config.skip_on_err})"
        )
        return config

    @staticmethod
    def _validate(config: CheckConfig) -> None:
        if not isinstance(config.name, str):
            raise CheckValidationError(
                f"Health check name must be a string (got {type(config.name).__name__})"
            )
        if not config.name.strip():
            raise CheckValidationError(
                "Health check must have a name to be registered"
            )
        if config.check is None:
            raise CheckValidationError(
                f"Health check '{config.name}' has no check function",
                check_name=config.name,
            )
        if not callable(config.check):
            raise CheckValidationError(
                f"Health check '{config.name}' check function is not callable",
                check_name=config.name,
            )
        timeout = config.timeout_seconds
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            raise CheckValidationError(
                f"Health check '{config.name}' timeout must be a number "
                f"(got {type(timeout).__name__})",
                check_name=config.name,
            )
        if timeout <= 0:
            raise CheckValidationError(
                f"Health check '{config.name}' timeout must be positive "
                f"(got {config.timeout_seconds})",
                check_name=config.name,
            )

    def unregister(self, name: str) -> bool:
        """
        Remove a check by name.

        Returns:
            True if check was removed
        """
        if self._initialized:
            raise RegistryLockedError(name)
        if name in self._checks:
            del self._checks[name]
            return True
        return False

    def get(self, name: str) -> Optional[CheckConfig]:
        """Get check config by name."""
        return self._checks.get(name)

    def list(self) -> List[CheckConfig]:
        """Get all registered checks in registration order."""
        return list(self._checks.values())

    def names(self) -> List[str]:
        return list(self._checks.keys())

    @property
    def is_initialized(self) -> bool:
        """Check if registry has been sealed after startup."""
        return self._initialized

    def mark_initialized(self) -> None:
        """Seal the registry; further registration raises RegistryLockedError."""
        self._initialized = True
        logger.info(f"Health check registry initialized ({len(self)} checks)")

    def __len__(self) -> int:
        return len(self._checks)

    def __contains__(self, name: str) -> bool:
        return name in self._checks


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "HealthCheckError",
    "CheckValidationError",
    "DuplicateCheckError",
    "RegistryLockedError",
    "HealthCheckRegistry",
]
