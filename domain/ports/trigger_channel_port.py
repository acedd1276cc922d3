# switchboard/domain/ports/trigger_channel_port.py
"""
Domain-layer interface for the inbound trigger channel.

The channel delivers externally-originated messages shaped like
``{"command": "hotkey-pressed", "name": "trigger-<id>"}`` to every subscribed
handler. Handlers may be plain functions or coroutine functions.
"""
from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

MessageHandler = Callable[[Any], Any]


@runtime_checkable
class TriggerChannelPort(Protocol):

    def subscribe(self, handler: MessageHandler) -> None:
        """Register ``handler`` for every future message. May raise if the channel is unavailable."""
        ...
