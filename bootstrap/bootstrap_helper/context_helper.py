# switchboard/bootstrap/bootstrap_helper/context_helper.py
from __future__ import annotations
import logging
from typing import Any, Dict, Final, Optional, TYPE_CHECKING
from domain.context import ExecutionContext
from domain.ports.affordance_renderer_port import AffordanceRendererPort
from domain.ports.event_bus_port import EventBusPort
from domain.ports.settings_port import SettingsPort
if TYPE_CHECKING:
    from core.registry import ComponentRegistry
__all__: Final = ['build_execution_context', 'build_component_init_context']
logger = logging.getLogger(__name__)


def build_execution_context(*, run_id: str, registry: 'ComponentRegistry', settings: Optional[SettingsPort] = None,
                            renderer: Optional[AffordanceRendererPort] = None, event_bus: Optional[EventBusPort] = None,
                            readiness_timeout: Optional[float] = None,
                            metadata: Optional[Dict[str, Any]] = None) -> ExecutionContext:
    logger.debug("Building execution context (run_id=%s, timeout=%s)", run_id, readiness_timeout)
    return ExecutionContext(
        run_id=run_id,
        component_registry=registry,
        settings=settings,
        renderer=renderer,
        event_bus=event_bus,
        readiness_timeout=readiness_timeout,
        metadata=metadata or {},
        logger=logger,
    )


def build_component_init_context(*, component_id: str, base_context: ExecutionContext) -> ExecutionContext:
    return base_context.with_component_scope(component_id).with_metadata(initialization_step=True)
