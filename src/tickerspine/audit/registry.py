"""
Audit and remediation-section registries.

Two injectable id → object lookups: ``AuditRegistry`` holds the checks an
orchestrator runs, ``SectionRegistry`` holds the remediation handlers a UI
dispatches findings to. Both fail loudly.

Manifesto:
    A silently shadowed handler means the wrong remediation runs against a
    finding; a silent miss means a finding is never shown. So:

    - registering an id twice raises ``DuplicateRegistrationError``
    - ``must_get`` on an unknown id raises ``NotRegisteredError``
    - ``get`` is the explicit "maybe" lookup and returns ``None``

    There is no module-level default instance. Build a registry, pass it
    to whoever needs it, throw it away in the test teardown.

Architecture:
    ::

        AuditRegistry
          ├── register(plugin)       validate() + duplicate-id guard
          ├── must_get(id) / get(id)
          ├── list()                 registration order
          └── ids()

        SectionRegistry
          ├── register_section(section)    duplicate id / order guard
          ├── must_get_section(id) / get_section(id)
          ├── list_sections()              registration order
          └── list_sections_ordered()      ascending ``order``

Tags:
    registry, audit, remediation, fail-loud, tickerspine
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from tickerspine.audit.base import AuditPlugin
from tickerspine.audit.models import AuditResult
from tickerspine.core.errors import (
    DuplicateRegistrationError,
    ErrorContext,
    NotRegisteredError,
    PluginValidationError,
)
from tickerspine.core.logging import get_logger

logger = get_logger(__name__)


class AuditRegistry:
    """Injectable audit-plugin registry.

    Example:
        >>> registry = AuditRegistry()
        >>> registry.register(DuplicatePairIdsCheck(pairs))
        >>> registry.must_get("duplicate-pair-ids").title
        'Duplicate PairIds'
    """

    def __init__(self) -> None:
        self._plugins: dict[str, AuditPlugin] = {}

    def register(self, plugin: AuditPlugin) -> None:
        """Validate and register a plugin.

        Raises:
            PluginValidationError: If ``plugin.validate()`` fails
            DuplicateRegistrationError: If the id is already registered
        """
        try:
            plugin.validate()
        except PluginValidationError as e:
            raise PluginValidationError(
                f"Invalid audit plugin '{plugin.id}': {e.message}", plugin_id=plugin.id or None, cause=e
            ) from e

        if plugin.id in self._plugins:
            raise DuplicateRegistrationError(
                f"Duplicate audit id: {plugin.id}",
                context=ErrorContext(plugin_id=plugin.id),
            )
        self._plugins[plugin.id] = plugin
        logger.debug("audit_plugin_registered", plugin_id=plugin.id, title=plugin.title)

    def must_get(self, plugin_id: str) -> AuditPlugin:
        if plugin_id not in self._plugins:
            raise NotRegisteredError(
                f"Audit plugin '{plugin_id}' not found in registry. Available: {self.ids() or 'none'}",
                context=ErrorContext(plugin_id=plugin_id),
            )
        return self._plugins[plugin_id]

    def get(self, plugin_id: str) -> AuditPlugin | None:
        return self._plugins.get(plugin_id)

    def has(self, plugin_id: str) -> bool:
        return plugin_id in self._plugins

    def list(self) -> list[AuditPlugin]:
        return list(self._plugins.values())

    def ids(self) -> list[str]:
        return list(self._plugins)

    def __len__(self) -> int:
        return len(self._plugins)

    def __contains__(self, plugin_id: object) -> bool:
        return plugin_id in self._plugins


@runtime_checkable
class AuditSection(Protocol):
    """Remediation handler for one check's findings.

    ``order`` positions the section in the UI; ``handle`` receives the
    findings of the check whose id equals ``id``.
    """

    id: str
    order: int

    def handle(self, results: Sequence[AuditResult]) -> Any: ...


class SectionRegistry:
    """Injectable remediation-section registry."""

    def __init__(self) -> None:
        self._sections: dict[str, AuditSection] = {}

    def register_section(self, section: AuditSection) -> None:
        """Register a section.

        Raises:
            DuplicateRegistrationError: If the id, or the display order,
                is already taken
        """
        if section.id in self._sections:
            raise DuplicateRegistrationError(
                f"Duplicate section id: {section.id}",
                context=ErrorContext(section_id=section.id),
            )
        for existing in self._sections.values():
            if existing.order == section.order:
                raise DuplicateRegistrationError(
                    f"Duplicate section order {section.order}: '{section.id}' conflicts with '{existing.id}'",
                    context=ErrorContext(section_id=section.id, metadata={"order": section.order}),
                )
        self._sections[section.id] = section
        logger.debug("audit_section_registered", section_id=section.id, order=section.order)

    def must_get_section(self, section_id: str) -> AuditSection:
        if section_id not in self._sections:
            raise NotRegisteredError(
                f"Section '{section_id}' not found in registry",
                context=ErrorContext(section_id=section_id),
            )
        return self._sections[section_id]

    def get_section(self, section_id: str) -> AuditSection | None:
        return self._sections.get(section_id)

    def list_sections(self) -> list[AuditSection]:
        return list(self._sections.values())

    def list_sections_ordered(self) -> list[AuditSection]:
        return sorted(self._sections.values(), key=lambda s: s.order)

    def __len__(self) -> int:
        return len(self._sections)


__all__ = ["AuditRegistry", "AuditSection", "SectionRegistry"]
