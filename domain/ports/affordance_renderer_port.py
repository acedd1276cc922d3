# switchboard/domain/ports/affordance_renderer_port.py
"""
Domain-layer interface for the UI affordance renderer.

The renderer turns an ``AffordanceSpec`` (display name, icon, optional hotkey
label, element id) plus a click callback into a control, attaches it to its
host surface and returns it. Rendering may suspend.
"""
from __future__ import annotations

import typing as _t
from typing import Any, Awaitable, Callable, Protocol, runtime_checkable

if _t.TYPE_CHECKING:  # pragma: no cover
    from signals.base import AffordanceSpec

ClickCallback = Callable[[], Awaitable[Any]]


@runtime_checkable
class AffordanceRendererPort(Protocol):

    async def render(self, spec: "AffordanceSpec", on_click: ClickCallback) -> Any:
        """Build the control for ``spec``, attach it and return it."""
        ...
