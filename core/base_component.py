# core/base_component.py
from __future__ import annotations
import asyncio
import inspect
import logging
from abc import ABC
from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, Iterable, Optional

from bootstrap.bootstrap_helper._exceptions import BootstrapError, RenderingFailure
from core.lifecycle import ComponentMetadata, ComponentState
from core.readiness import ReadinessSignal
from domain.context import ExecutionContext
from domain.ports.settings_port import SettingsPort
from signals.base import AffordanceSpec, ComponentReadySignal

logger = logging.getLogger(__name__)


class SwitchboardBaseComponent(ABC):
    """
    Base class of every component managed by a ``ComponentRegistry``.

    The component kind is the class name unless a subclass sets ``kind``.
    ``enabled`` is read once from the settings store at construction.
    Subclasses customise ``_initialize_impl`` and ``_trigger_impl``.
    """

    kind: ClassVar[Optional[str]] = None

    def __init__(self, display_name: str, *, slug: Optional[str] = None, icon: str = '', hotkey: str = '',
                 dependencies: Iterable[str] = (), settings: Optional[SettingsPort] = None,
                 description: str = ''):
        self._metadata = ComponentMetadata.build(
            self.kind or type(self).__name__,
            display_name,
            slug=slug,
            icon=icon,
            hotkey=hotkey,
            dependencies=dependencies,
            description=description,
        )
        enabled = bool(settings.get(self._metadata.enabled_key, False)) if settings is not None else False
        self._enabled: bool = enabled
        self._displayed: bool = enabled
        self._is_ready: bool = False
        self._state: ComponentState = ComponentState.UNSTARTED
        self._readiness = ReadinessSignal(self._metadata.id)
        self._initialization_timestamp: Optional[datetime] = None
        self.affordance: Any = None
        self.data: Dict[str, Any] = {}
        logger.debug(f"Component '{self.component_id}' instantiated (enabled={enabled})")

    @property
    def metadata(self) -> ComponentMetadata:
        return self._metadata

    @property
    def component_id(self) -> str:
        return self._metadata.id

    @property
    def dependencies(self) -> tuple:
        return self._metadata.dependencies

    @property
    def trigger_name(self) -> str:
        return self._metadata.trigger_name

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def displayed(self) -> bool:
        return self._displayed

    def hide(self) -> None:
        """Never render an affordance for this component."""
        self._displayed = False

    @property
    def is_ready(self) -> bool:
        return self._is_ready

    @property
    def state(self) -> ComponentState:
        return self._state

    @property
    def readiness(self) -> ReadinessSignal:
        return self._readiness

    @property
    def initialization_timestamp(self) -> Optional[datetime]:
        return self._initialization_timestamp

    def _set_state(self, new_state: ComponentState) -> None:
        logger.debug(f"Component '{self.component_id}' {self._state.value} -> {new_state.value}")
        self._state = new_state

    async def initialize(self, context: ExecutionContext) -> None:
        """
        Drive this component from Unstarted to Ready.

        Waits for every resolvable dependency, runs ``_initialize_impl``,
        renders the affordance when displayed, then marks the component ready
        and broadcasts it. On failure the component ends Failed, its waiters
        are released with an error, and the exception propagates.
        """
        component_logger = context.logger or logger
        if self._state is not ComponentState.UNSTARTED:
            component_logger.warning(f"Component '{self.component_id}' already started ({self._state.value}); waiting for its readiness instead.")
            await self.wait_until_ready()
            return

        if context.component_registry is None:
            raise BootstrapError('ComponentRegistry missing in ExecutionContext', component_id=self.component_id, phase='initialization')

        self._set_state(ComponentState.WAITING_ON_DEPENDENCIES)
        try:
            await self.wait_for_dependencies(context)
            self._set_state(ComponentState.RENDERING)
            await self._initialize_impl(context)
            if self._displayed:
                await self.generate_affordance(context)
        except BaseException as e:
            self._set_state(ComponentState.FAILED)
            self._readiness.fail(e)
            if isinstance(e, Exception):
                component_logger.error(f"An error occurred while trying to initialize component '{self.component_id}': {e}")
            raise

        self._mark_ready(context)
        component_logger.info(f"Component '{self.component_id}' initialized successfully")

    async def _initialize_impl(self, context: ExecutionContext) -> None:
        # Default implementation, can be overridden by subclasses
        pass

    async def wait_for_dependencies(self, context: ExecutionContext) -> None:
        registry = context.component_registry
        waits = []
        for dependency_id in self.dependencies:
            dependency = registry.get_by_id(dependency_id)
            if dependency is None:
                logger.debug(f"Component '{self.component_id}' skips unregistered dependency '{dependency_id}'")
                continue
            waits.append(dependency.wait_until_ready(context.readiness_timeout, waiter_id=self.component_id))
        if waits:
            await asyncio.gather(*waits)

    async def wait_until_ready(self, timeout: Optional[float] = None, *, waiter_id: Optional[str] = None) -> None:
        if self._is_ready:
            return
        await self._readiness.wait(timeout, waiter_id=waiter_id)

    def build_affordance_spec(self, context: ExecutionContext) -> AffordanceSpec:
        show_hotkey = context.get_setting(self._metadata.hotkey_display_key, False) is True
        return AffordanceSpec(
            element_id=self._metadata.element_id,
            component_id=self.component_id,
            display_name=self._metadata.display_name,
            icon=self._metadata.icon,
            hotkey_label=self._metadata.hotkey if show_hotkey and self._metadata.hotkey else None,
        )

    async def generate_affordance(self, context: ExecutionContext) -> Any:
        if context.renderer is None:
            logger.warning(f"Component '{self.component_id}' is displayed but no affordance renderer is configured; skipping.")
            return None
        try:
            spec = self.build_affordance_spec(context)
            self.affordance = await context.renderer.render(spec, self.trigger)
        except Exception as e:
            raise RenderingFailure(
                f"An error occurred while generating the affordance of component {self.component_id}: {e}",
                component_id=self.component_id,
                phase='rendering',
            ) from e
        return self.affordance

    def _mark_ready(self, context: ExecutionContext) -> None:
        # Flag, signal and broadcast happen without a suspension point in between.
        self._is_ready = True
        self._initialization_timestamp = datetime.now(timezone.utc)
        self._set_state(ComponentState.READY)
        self._readiness.fire()
        if context.event_bus is not None:
            payload = ComponentReadySignal(component_id=self.component_id, kind=self._metadata.kind, displayed=self._displayed)
            try:
                context.event_bus.publish(self._metadata.ready_event_name, payload)
            except Exception as e:
                logger.warning(f"Failed to publish readiness of '{self.component_id}': {e}")

    async def trigger(self) -> Any:
        if not self._is_ready:
            await self.wait_until_ready()
        result = self._trigger_impl()
        if inspect.isawaitable(result):
            result = await result
        return result

    async def _trigger_impl(self) -> Any:
        logger.warning(f"The {self.component_id} is currently using the default _trigger_impl() method, please override it.")
        return None

    def describe(self) -> Dict[str, Any]:
        return {
            **self._metadata.to_dict(),
            'enabled': self._enabled,
            'displayed': self._displayed,
            'ready': self._is_ready,
            'state': self._state.value,
        }

    def __repr__(self) -> str:
        return f'{type(self).__name__}(id={self.component_id!r}, state={self._state.value})'

