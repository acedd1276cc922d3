import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Type, Union, TYPE_CHECKING

from core.lifecycle import ComponentRegistryMissingError, DuplicateIdentifierError
from domain.ports.event_bus_port import EventBusPort

if TYPE_CHECKING:
    from core.base_component import SwitchboardBaseComponent

logger = logging.getLogger(__name__)

KindFilter = Union[str, Type[Any], None]


class ComponentRegistry:
    """
    Registry owning every component instance of one Switchboard runtime.

    Components are keyed by their identifier (``"<Kind>.<slug>"``). Enumeration
    is most-recently-registered first: later registrations are the overriding,
    higher-priority ones.
    """

    def __init__(self, event_bus: Optional[EventBusPort] = None):
        self._components: Dict[str, 'SwitchboardBaseComponent'] = {}
        self._event_bus = event_bus
        logger.info("ComponentRegistry initialized")

    def register(self, component: 'SwitchboardBaseComponent') -> None:
        """
        Register a component under its identifier.

        Raises ``DuplicateIdentifierError`` when the identifier is taken; the
        first registration is kept untouched.
        """
        component_id = component.component_id
        if component_id in self._components:
            logger.error(
                f"Refusing to register '{component_id}' ({type(component).__name__}): identifier already held by "
                f"{type(self._components[component_id]).__name__}"
            )
            raise DuplicateIdentifierError(component_id)

        self._components[component_id] = component

        if self._event_bus:
            try:
                self._event_bus.publish('COMPONENT_REGISTERED', {
                    'component_id': component_id,
                    'component_type': type(component).__name__,
                    'kind': component.metadata.kind,
                    'timestamp': datetime.now(timezone.utc).isoformat()
                })
            except Exception as e:
                logger.warning(f"Failed to publish registration event: {e}")

        logger.info(f"Registered component '{component_id}' ({type(component).__name__}, enabled={component.enabled})")

    def get_by_id(self, component_id: str) -> Optional['SwitchboardBaseComponent']:
        """Return the component or ``None``; absence is an expected answer for undeclared dependencies."""
        return self._components.get(component_id)

    def get(self, component_id: str) -> 'SwitchboardBaseComponent':
        if component_id in self._components:
            return self._components[component_id]

        available = list(self._components.keys())
        if len(available) > 20:
            available = available[:20] + [f"... and {len(available) - 20} more"]
        raise ComponentRegistryMissingError(component_id, available_components=available)

    def get_all(self, kind: KindFilter = None, ids_only: bool = False) -> List[Any]:
        """
        All components, most-recently-registered first.

        ``kind`` narrows the result: a class keeps instances of that class
        (subclasses included), a string keeps components whose metadata kind
        equals it. With ``ids_only`` identifiers are returned instead of
        instances.
        """
        components = list(reversed(self._components.values()))
        if isinstance(kind, type):
            components = [c for c in components if isinstance(c, kind)]
        elif kind is not None:
            components = [c for c in components if c.metadata.kind == kind]

        if ids_only:
            return [c.component_id for c in components]
        return components

    def list_components(self) -> List[str]:
        """All registered identifiers in registration order."""
        return list(self._components.keys())

    def has_component(self, component_id: str) -> bool:
        return component_id in self._components

    def __len__(self) -> int:
        return len(self._components)

    def __contains__(self, component_id: str) -> bool:
        return self.has_component(component_id)

    def __repr__(self) -> str:
        return f'ComponentRegistry(components={len(self._components)})'
