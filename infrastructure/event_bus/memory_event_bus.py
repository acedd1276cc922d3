# switchboard/infrastructure/event_bus/memory_event_bus.py
from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, Dict, List, Set, Tuple

from domain.ports.event_bus_port import EventBusPort

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Any]


@dataclass(slots=True)
class PublishedEvent:
    ts: float
    event_name: str
    payload: Any


class MemoryEventBus(EventBusPort):
    """
    In-process event bus used for readiness broadcasts.

    Inside a running loop ``publish`` schedules delivery as a task and returns
    at once; ``drain()`` waits for those tasks. Without a loop delivery runs to
    completion before ``publish`` returns. A handler that raises is logged and
    does not prevent delivery to the others.
    """

    def __init__(self, component_id: str = "event_bus_memory", max_history: int = 1000) -> None:
        self.component_id = component_id
        self._handlers: Dict[str, List[Handler]] = defaultdict(list)
        self._history: Deque[PublishedEvent] = deque(maxlen=max_history)
        self._in_flight: Set[asyncio.Task] = set()
        self._published = 0
        logger.info("[%s] ready (history limit %d)", self.component_id, max_history)

    def subscribe(self, event_name: str, handler: Handler) -> None:
        self._handlers[event_name].append(handler)
        logger.debug('[%s] "%s" now has %d handler(s)', self.component_id, event_name, len(self._handlers[event_name]))

    def unsubscribe(self, event_name: str, handler: Handler) -> None:
        handlers = self._handlers.get(event_name)
        if handlers and handler in handlers:
            handlers.remove(handler)
            logger.debug('[%s] removed a handler from "%s"', self.component_id, event_name)

    def publish(self, event_name: str, payload: Any | None = None) -> None:
        self._published += 1
        self._history.append(PublishedEvent(time.time(), event_name, payload))
        handlers = tuple(self._handlers.get(event_name, ()))
        logger.debug('[%s] publish "%s" -> %d handler(s)', self.component_id, event_name, len(handlers))
        if not handlers:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self._deliver(event_name, payload, handlers))
            return

        task = loop.create_task(self._deliver(event_name, payload, handlers), name=f'deliver_{event_name}')
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _deliver(self, event_name: str, payload: Any, handlers: Tuple[Handler, ...]) -> None:
        pending = []
        for handler in handlers:
            try:
                outcome = handler(payload)
            except Exception as exc:
                logger.exception('[%s] handler %s failed on "%s": %s',
                                 self.component_id, getattr(handler, '__qualname__', handler), event_name, exc)
                continue
            if inspect.isawaitable(outcome):
                pending.append(outcome)

        for outcome in await asyncio.gather(*pending, return_exceptions=True):
            if isinstance(outcome, Exception):
                logger.error('[%s] async handler failed on "%s": %s', self.component_id, event_name, outcome)

    async def drain(self) -> None:
        """Wait until every delivery scheduled so far has finished."""
        while self._in_flight:
            await asyncio.gather(*tuple(self._in_flight), return_exceptions=True)

    def history(self) -> List[PublishedEvent]:
        return list(self._history)

    def get_stats(self) -> Dict[str, Any]:
        return {
            'published': self._published,
            'subscribers': {name: len(hs) for name, hs in self._handlers.items() if hs},
            'history_size': len(self._history),
            'pending_dispatches': len(self._in_flight),
        }
