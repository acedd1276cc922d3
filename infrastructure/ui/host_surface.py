# switchboard/infrastructure/ui/host_surface.py
from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from domain.ports.affordance_renderer_port import AffordanceRendererPort, ClickCallback
from signals.base import AffordanceSpec

logger = logging.getLogger(__name__)


@dataclass
class RenderedAffordance:
    """A clickable control attached to a ``HostSurface``."""
    spec: AffordanceSpec
    markup: str
    on_click: ClickCallback = field(repr=False)
    click_count: int = 0

    @property
    def element_id(self) -> str:
        return self.spec.element_id

    async def click(self) -> Any:
        self.click_count += 1
        logger.debug("Affordance '%s' clicked (%d)", self.element_id, self.click_count)
        return await self.on_click()


class HostSurface:
    """Ordered container of rendered affordances, keyed by element id."""

    def __init__(self, name: str = 'header') -> None:
        self.name = name
        self._elements: Dict[str, RenderedAffordance] = {}

    def append(self, element: RenderedAffordance) -> None:
        if element.element_id in self._elements:
            raise ValueError(f"Element '{element.element_id}' is already attached to surface '{self.name}'")
        self._elements[element.element_id] = element

    def get(self, element_id: str) -> Optional[RenderedAffordance]:
        return self._elements.get(element_id)

    @property
    def elements(self) -> List[RenderedAffordance]:
        return list(self._elements.values())

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, element_id: str) -> bool:
        return element_id in self._elements


class HostSurfaceRenderer(AffordanceRendererPort):
    """Renders affordances as small markup snippets and appends them to a ``HostSurface``."""

    def __init__(self, surface: Optional[HostSurface] = None) -> None:
        self.surface = surface if surface is not None else HostSurface()

    @staticmethod
    def render_markup(spec: AffordanceSpec) -> str:
        markup = (
            '<div class="infos">'
            f'<span class="icon">{html.escape(spec.icon)}</span>'
            f'<span class="name">{html.escape(spec.display_name)}</span>'
            '</div>'
        )
        if spec.hotkey_label:
            markup += f'<div class="hotkey">{html.escape(spec.hotkey_label)}</div>'
        return markup

    async def render(self, spec: AffordanceSpec, on_click: ClickCallback) -> RenderedAffordance:
        element = RenderedAffordance(spec=spec, markup=self.render_markup(spec), on_click=on_click)
        self.surface.append(element)
        logger.info("Rendered affordance '%s' on surface '%s'", spec.element_id, self.surface.name)
        return element
