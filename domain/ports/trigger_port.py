# switchboard/domain/ports/trigger_port.py
"""
Capability interface for anything the dispatch router can trigger.

Every component satisfies it through ``SwitchboardBaseComponent``; concrete
kinds supply the behaviour by overriding ``_trigger_impl``.
"""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TriggerablePort(Protocol):

    @property
    def trigger_name(self) -> str:
        """Name inbound trigger events use to address this component."""
        ...

    async def trigger(self) -> Any:
        """Run the component's trigger behaviour once it is ready."""
        ...
