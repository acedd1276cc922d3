# switchboard/domain/ports/settings_port.py
"""
Domain-layer interface for the key/value settings store.

Components read two kinds of keys through it: ``"<id>-enabled"`` once at
construction, and ``"display-<kind>-hotkeys"`` when their affordance is
rendered.
"""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SettingsPort(Protocol):

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key``, or ``default`` when unset."""
        ...
