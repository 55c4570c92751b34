# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the health endpoint.
"""

from health.config.defaults import (
    DEFAULT_CHECK_TIMEOUT_SECONDS,
    HealthSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "DEFAULT_CHECK_TIMEOUT_SECONDS",
    "HealthSettings",
    "get_settings",
    "reset_settings",
]
