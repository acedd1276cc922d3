from __future__ import annotations
import logging
from copy import deepcopy
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TYPE_CHECKING
from domain.ports.affordance_renderer_port import AffordanceRendererPort
from domain.ports.event_bus_port import EventBusPort
from domain.ports.settings_port import SettingsPort
if TYPE_CHECKING:
    from core.registry import ComponentRegistry

LoggerAdapter = Any


class ExecutionContext:
    def __init__(self, *,
                 run_id: str,
                 component_registry: Optional['ComponentRegistry'] = None,
                 settings: Optional[SettingsPort] = None,
                 renderer: Optional[AffordanceRendererPort] = None,
                 event_bus: Optional[EventBusPort] = None,
                 readiness_timeout: Optional[float] = None,
                 component_id: Optional[str] = None,
                 timestamp: Optional[datetime] = None,
                 metadata: Optional[Dict[str, Any]] = None,
                 logger: Optional[LoggerAdapter] = None) -> None:
        self.run_id: str = run_id
        self.component_registry: Optional['ComponentRegistry'] = component_registry
        self.settings: Optional[SettingsPort] = settings
        self.renderer: Optional[AffordanceRendererPort] = renderer
        self.event_bus: Optional[EventBusPort] = event_bus
        self.readiness_timeout: Optional[float] = readiness_timeout
        self.component_id: Optional[str] = component_id
        self.timestamp: datetime = timestamp or datetime.now(timezone.utc)
        self.metadata: Dict[str, Any] = metadata or {}
        self.logger: Optional[LoggerAdapter] = logger

    def get_setting(self, key: str, default: Any = None) -> Any:
        if self.settings is None:
            return default
        return self.settings.get(key, default)

    def with_component_scope(self, component_id: str) -> 'ExecutionContext':
        return self._clone(component_id=component_id, logger=logging.getLogger(f'switchboard.{component_id}'))

    def with_metadata(self, **updates) -> 'ExecutionContext':
        new_meta = {**self.metadata, **updates}
        return self._clone(metadata=new_meta)

    def _clone(self, **overrides) -> 'ExecutionContext':
        params = {
            'run_id': self.run_id,
            'component_registry': self.component_registry,
            'settings': self.settings,
            'renderer': self.renderer,
            'event_bus': self.event_bus,
            'readiness_timeout': self.readiness_timeout,
            'component_id': self.component_id,
            'timestamp': self.timestamp,
            'metadata': deepcopy(self.metadata),
            'logger': self.logger,
        }
        params.update(overrides)
        return ExecutionContext(**params)

    def __repr__(self) -> str:
        return f'ExecutionContext(run_id={self.run_id!r}, component_id={self.component_id!r}, readiness_timeout={self.readiness_timeout!r})'
