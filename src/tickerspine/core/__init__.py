"""
Core primitives shared by the audit engine.

- errors: typed error hierarchy (construction, usage, registry, config)
- logging: structlog configuration and context helpers
- settings: pydantic-settings configuration (``TICKERSPINE_*``)
- protocols: read-side repository contracts
- timestamps: epoch-millisecond helpers
"""

from tickerspine.core.errors import (
    CategoryIndexError,
    ConfigError,
    DuplicateRegistrationError,
    ErrorCategory,
    ErrorContext,
    NotRegisteredError,
    PluginValidationError,
    TargetedModeNotSupportedError,
    TickerSpineError,
)
from tickerspine.core.logging import LogContext, configure_logging, get_logger
from tickerspine.core.settings import AuditSettings, get_settings, reset_settings

__all__ = [
    # Errors
    "ErrorCategory",
    "ErrorContext",
    "TickerSpineError",
    "PluginValidationError",
    "TargetedModeNotSupportedError",
    "CategoryIndexError",
    "DuplicateRegistrationError",
    "NotRegisteredError",
    "ConfigError",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # Settings
    "AuditSettings",
    "get_settings",
    "reset_settings",
]
