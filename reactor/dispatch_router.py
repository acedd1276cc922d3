from __future__ import annotations
import logging
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError

from bootstrap.bootstrap_helper._exceptions import DispatchSetupFailure
from core.lifecycle import ComponentState
from core.registry import ComponentRegistry
from domain.ports.trigger_channel_port import TriggerChannelPort
from signals.base import HotkeyMessage

logger = logging.getLogger(__name__)


class DispatchRouter:
    """
    Routes inbound hotkey messages to the component whose trigger name matches.

    A matching component that is not ready yet is triggered once it becomes
    ready. Components that were never started (not in the required set) or
    that failed to initialize are ignored.
    """

    def __init__(self, registry: ComponentRegistry) -> None:
        self.registry = registry
        self._channel: Optional[TriggerChannelPort] = None
        logger.debug('DispatchRouter created')

    @property
    def is_active(self) -> bool:
        return self._channel is not None

    def activate(self, channel: TriggerChannelPort) -> None:
        if self._channel is not None:
            logger.debug('DispatchRouter already active; ignoring second activation')
            return
        try:
            channel.subscribe(self.handle_message)
        except Exception as exc:
            raise DispatchSetupFailure(
                f'An error occurred while subscribing to the trigger channel: {exc}', phase='dispatch_activation'
            ) from exc
        self._channel = channel
        logger.info('DispatchRouter listening for hotkeys (%d component(s) registered)', len(self.registry))

    async def handle_message(self, message: Union[HotkeyMessage, Mapping[str, Any]]) -> List[str]:
        if not isinstance(message, HotkeyMessage):
            try:
                message = HotkeyMessage.model_validate(message)
            except ValidationError as exc:
                logger.warning('Dropping malformed trigger message %r: %s', message, exc)
                return []
        if not message.is_hotkey_pressed:
            logger.debug("Ignoring message with command '%s'", message.command)
            return []
        return await self.handle_trigger(message.name)

    async def handle_trigger(self, event_name: str) -> List[str]:
        triggered: List[str] = []
        for component in self.registry.get_all():
            if component.trigger_name != event_name:
                continue
            if component.state is ComponentState.UNSTARTED:
                logger.debug("Trigger '%s' matches '%s', which was never started; ignoring", event_name, component.component_id)
                continue
            if component.state is ComponentState.FAILED:
                logger.warning("Trigger '%s' matches '%s', which failed to initialize; ignoring", event_name, component.component_id)
                continue
            try:
                await component.trigger()
                triggered.append(component.component_id)
            except Exception as exc:
                logger.exception("Component '%s' failed while handling trigger '%s': %s", component.component_id, event_name, exc)

        if not triggered:
            logger.debug("No ready component matched trigger '%s'", event_name)
        return triggered
