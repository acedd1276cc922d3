# switchboard/components/common/callback_component.py
from __future__ import annotations
import inspect
import logging
from typing import Any, Callable, Optional

from core.base_component import SwitchboardBaseComponent

logger = logging.getLogger(__name__)


class CallbackComponent(SwitchboardBaseComponent):
    """Component whose trigger runs a supplied callable (plain or async) with the component as argument."""

    def __init__(self, display_name: str, callback: Optional[Callable[['CallbackComponent'], Any]] = None, **kwargs: Any):
        super().__init__(display_name, **kwargs)
        self._callback = callback
        self.trigger_count = 0

    async def _trigger_impl(self) -> Any:
        self.trigger_count += 1
        if self._callback is None:
            logger.debug("CallbackComponent '%s' triggered without a callback", self.component_id)
            return None
        result = self._callback(self)
        if inspect.isawaitable(result):
            result = await result
        return result
