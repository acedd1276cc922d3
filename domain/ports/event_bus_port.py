# switchboard/domain/ports/event_bus_port.py

"""Event bus interface used to broadcast component readiness."""

from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class EventBusPort(Protocol):
    """Interface for event publishing and subscription."""

    def publish(self, event_type: str, payload: Any) -> None:
        """
        Publish an event to subscribers.

        Args:
            event_type: Name of the event, e.g. ``"Widget.clock-ready"``
            payload: Event data
        """
        ...

    def subscribe(self, event_type: str, handler: Callable[[Any], None]) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: Name of the event
            handler: Function (or coroutine function) to call when the event occurs
        """
        ...

    def unsubscribe(self, event_type: str, handler: Callable[[Any], None]) -> None:
        ...
