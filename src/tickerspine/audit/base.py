"""
Audit plugin contract.

Every check is an ``AuditPlugin``: a stable kebab-case ``id``, a human
``title``, a construction-time ``validate()`` and an async ``run()``.

Manifesto:
    An orchestrator should be able to run fifteen unrelated checks without
    knowing anything about them. The contract is deliberately small:

    - **id / title:** identify the check in reports and registries
    - **validate():** construction sanity only, never a data check
    - **run(targets):** full scan when ``targets`` is empty or absent

    Checks that need the whole collection to answer correctly (duplicate
    groups, orphans) are *global*. Handing them a non-empty target list is
    a caller error: they raise instead of returning a partial PASS.

Architecture:
    ::

        AuditPlugin (ABC)
          ├── id, title              class attributes
          ├── supports_targets       False → global check
          ├── validate()             raises PluginValidationError
          ├── run(targets=None)      async → list[AuditResult]
          └── _require_full_scan()   raises TargetedModeNotSupportedError

    ``run()`` is a coroutine because some repository reads suspend (broker
    orders). Checks never suspend on their own account.

Guardrails:
    ❌ DON'T: Return an empty list when a global check receives targets
    ✅ DO: Call ``self._require_full_scan(targets)`` first

    ❌ DON'T: Cache repository reads between runs
    ✅ DO: Read the repositories fresh on every ``run()``

Tags:
    audit, plugin, contract, abc, tickerspine
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import ClassVar

from tickerspine.audit.models import AuditResult
from tickerspine.core.errors import PluginValidationError, TargetedModeNotSupportedError


class AuditPlugin(ABC):
    """Base class for audit checks."""

    id: ClassVar[str] = ""
    title: ClassVar[str] = ""
    supports_targets: ClassVar[bool] = True

    def validate(self) -> None:
        """Raise ``PluginValidationError`` when ``id`` or ``title`` is empty."""
        if not self.id or not self.id.strip():
            raise PluginValidationError("Audit plugin id must be a non-empty string", plugin_id=self.id or None)
        if not self.title or not self.title.strip():
            raise PluginValidationError("Audit plugin title must be a non-empty string", plugin_id=self.id)

    @abstractmethod
    async def run(self, targets: Sequence[str] | None = None) -> list[AuditResult]:
        """Scan the repositories and return FAIL findings only."""

    def _require_full_scan(self, targets: Sequence[str] | None) -> None:
        if targets:
            raise TargetedModeNotSupportedError(self.title, plugin_id=self.id, targets=targets)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


__all__ = ["AuditPlugin"]
