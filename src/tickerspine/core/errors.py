"""
Structured error types for the ticker audit engine.

The engine separates three kinds of failure:

- **Construction errors:** a check with an empty id or title. Caught by
  ``validate()`` and fatal to registration.
- **Usage errors:** a non-empty target list passed to a globally-scoped
  check, a category index outside 0..7, or a registry lookup that misses.
- **Data findings:** not errors at all. A ``FAIL`` AuditResult is the
  successful output of a check that found an inconsistency.

Only the first two are modelled here. They always propagate to the caller;
nothing in the engine downgrades them to a finding.

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                     TickerSpineError                         │
        │               (category, context, cause)                     │
        ├─────────────────────────────────────────────────────────────┤
        │                                                              │
        │  PluginValidationError        TargetedModeNotSupportedError  │
        │  (VALIDATION, ValueError)     (USAGE, ValueError)            │
        │                                                              │
        │  CategoryIndexError           DuplicateRegistrationError     │
        │  (USAGE, IndexError)          (REGISTRY, ValueError)         │
        │                                                              │
        │  NotRegisteredError           ConfigError                    │
        │  (REGISTRY, LookupError)      (CONFIG)                       │
        └─────────────────────────────────────────────────────────────┘

Examples:
    >>> error = TargetedModeNotSupportedError("Trade risk", plugin_id="trade-risk")
    >>> str(error)
    'Trade risk audit does not support targeted mode'
    >>> error.to_dict()["category"]
    'USAGE'

Tags:
    error-handling, exception-hierarchy, error-context, tickerspine
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and logging."""

    VALIDATION = "VALIDATION"  # Malformed check definitions
    USAGE = "USAGE"  # Caller passed something the engine rejects
    REGISTRY = "REGISTRY"  # Duplicate or missing registrations
    CONFIG = "CONFIG"  # Invalid settings
    INTERNAL = "INTERNAL"  # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Typed fields cover the identifiers the engine deals with; anything else
    goes in ``metadata``. ``to_dict()`` drops unset fields so log lines stay
    short.

    Attributes:
        plugin_id: Audit plugin the error concerns
        section_id: Remediation section the error concerns
        targets: Target list passed by the caller
        index: Offending category index
        metadata: Additional key-value pairs
    """

    plugin_id: str | None = None
    section_id: str | None = None
    targets: Sequence[str] | None = None
    index: int | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        for key in ["plugin_id", "section_id", "targets", "index"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = list(value) if key == "targets" else value
        if self.metadata:
            result.update(self.metadata)
        return result


class TickerSpineError(Exception):
    """
    Base exception for all engine errors.

    Subclasses set ``default_category``; every instance carries an
    ``ErrorContext`` and an optional chained ``cause``.

    Examples:
        >>> error = TickerSpineError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(plugin_id="alerts").context.plugin_id
        'alerts'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> TickerSpineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise NotRegisteredError("...").with_context(section_id="alerts")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONSTRUCTION ERRORS
# =============================================================================


class PluginValidationError(TickerSpineError, ValueError):
    """An audit plugin failed its construction-time sanity check."""

    default_category = ErrorCategory.VALIDATION

    def __init__(self, message: str, *, plugin_id: str | None = None, cause: Exception | None = None):
        super().__init__(message, context=ErrorContext(plugin_id=plugin_id), cause=cause)


# =============================================================================
# USAGE ERRORS
# =============================================================================


class TargetedModeNotSupportedError(TickerSpineError, ValueError):
    """A non-empty target list was passed to a globally-scoped check."""

    default_category = ErrorCategory.USAGE

    def __init__(self, title: str, *, plugin_id: str | None = None, targets: Sequence[str] | None = None):
        super().__init__(
            f"{title} audit does not support targeted mode",
            context=ErrorContext(plugin_id=plugin_id, targets=targets),
        )


class CategoryIndexError(TickerSpineError, IndexError):
    """A category index outside the fixed range was requested."""

    default_category = ErrorCategory.USAGE

    def __init__(self, index: int, size: int):
        super().__init__(
            f"Category list for index {index} not found (valid range 0..{size - 1})",
            context=ErrorContext(index=index),
        )
        self.index = index


# =============================================================================
# REGISTRY ERRORS
# =============================================================================


class DuplicateRegistrationError(TickerSpineError, ValueError):
    """An identifier (or section order) is already registered."""

    default_category = ErrorCategory.REGISTRY


class NotRegisteredError(TickerSpineError, LookupError):
    """An identifier was looked up but never registered."""

    default_category = ErrorCategory.REGISTRY


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(TickerSpineError):
    """Settings could not be loaded or failed validation."""

    default_category = ErrorCategory.CONFIG


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "TickerSpineError",
    "PluginValidationError",
    "TargetedModeNotSupportedError",
    "CategoryIndexError",
    "DuplicateRegistrationError",
    "NotRegisteredError",
    "ConfigError",
]
