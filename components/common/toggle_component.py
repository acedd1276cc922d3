# switchboard/components/common/toggle_component.py
from __future__ import annotations
import logging
from typing import Any

from core.base_component import SwitchboardBaseComponent
from domain.context import ExecutionContext

logger = logging.getLogger(__name__)


class ToggleComponent(SwitchboardBaseComponent):
    """
    Component with an open/closed state, flipped by every trigger.

    The state lives in ``data['active']``; it starts closed.
    """

    async def _initialize_impl(self, context: ExecutionContext) -> None:
        self.data.setdefault('active', False)

    @property
    def active(self) -> bool:
        return bool(self.data.get('active', False))

    async def _trigger_impl(self) -> Any:
        self.data['active'] = not self.active
        logger.info("Component '%s' is now %s", self.component_id, 'open' if self.active else 'closed')
        return self.active
