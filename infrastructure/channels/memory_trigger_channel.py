# switchboard/infrastructure/channels/memory_trigger_channel.py
from __future__ import annotations

import inspect
import logging
from typing import Any, List, Mapping

from domain.ports.trigger_channel_port import MessageHandler, TriggerChannelPort

logger = logging.getLogger(__name__)


class MemoryTriggerChannel(TriggerChannelPort):
    """
    In-process inbound channel.

    ``deliver`` hands a message to every subscriber in subscription order and
    awaits coroutine handlers. A closed channel refuses new subscriptions.
    """

    def __init__(self, channel_id: str = 'trigger_channel_memory') -> None:
        self.channel_id = channel_id
        self._handlers: List[MessageHandler] = []
        self._closed = False
        self._delivered = 0

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    @property
    def delivered_count(self) -> int:
        return self._delivered

    def close(self) -> None:
        self._closed = True
        logger.info("[%s] closed", self.channel_id)

    def subscribe(self, handler: MessageHandler) -> None:
        if self._closed:
            raise ConnectionError(f"Trigger channel '{self.channel_id}' is closed")
        self._handlers.append(handler)
        logger.debug("[%s] subscribed %s", self.channel_id, getattr(handler, '__qualname__', handler))

    async def deliver(self, message: Mapping[str, Any]) -> None:
        self._delivered += 1
        for handler in tuple(self._handlers):
            result = handler(message)
            if inspect.isawaitable(result):
                await result

    async def press(self, trigger_name: str) -> None:
        await self.deliver({'command': 'hotkey-pressed', 'name': trigger_name})
