from __future__ import annotations
import logging
import time
from datetime import datetime, timezone
from typing import Dict, List, Optional

from bootstrap.bootstrap_helper.context_helper import build_execution_context
from bootstrap.config.bootstrap_config import BootstrapConfig
from bootstrap.context.bootstrap_context import BootstrapContext
from bootstrap.dependency_resolver import DependencyResolver
from bootstrap.exceptions import BootstrapError, ComponentInitializationError
from bootstrap.phases import (
    BootstrapPhase, ComponentInitializationPhase, DependencyResolutionPhase, DispatchActivationPhase, PhaseResult,
)
from bootstrap.result_builder import BootstrapResult
from core.base_component import SwitchboardBaseComponent
from core.registry import ComponentRegistry
from domain.ports.affordance_renderer_port import AffordanceRendererPort
from domain.ports.event_bus_port import EventBusPort
from domain.ports.settings_port import SettingsPort
from domain.ports.trigger_channel_port import TriggerChannelPort
from reactor.dispatch_router import DispatchRouter

logger = logging.getLogger(__name__)


class LifecycleManager:
    """
    Brings the required components of one registry up, then activates dispatch.

    ``init()`` runs three phases in order: dependency resolution, concurrent
    component initialization, dispatch activation. Activation never starts
    before every required component has finished initializing.
    """

    def __init__(self, registry: ComponentRegistry, *, settings: Optional[SettingsPort] = None,
                 renderer: Optional[AffordanceRendererPort] = None, trigger_channel: Optional[TriggerChannelPort] = None,
                 event_bus: Optional[EventBusPort] = None, config: Optional[BootstrapConfig] = None,
                 router: Optional[DispatchRouter] = None):
        self.registry = registry
        self.config = config or BootstrapConfig()
        self.trigger_channel = trigger_channel
        self.router = router or DispatchRouter(registry)
        self.resolver = DependencyResolver(registry)
        self.run_id = f"switchboard_run_{datetime.now(timezone.utc).strftime('%Y%m%d%H%M%S%f')}"
        self.execution_context = build_execution_context(
            run_id=self.run_id,
            registry=registry,
            settings=settings,
            renderer=renderer,
            event_bus=event_bus,
            readiness_timeout=self.config.readiness_timeout,
        )
        self._context: Optional[BootstrapContext] = None
        self._result: Optional[BootstrapResult] = None

    @property
    def is_started(self) -> bool:
        return self._context is not None

    @property
    def last_result(self) -> Optional[BootstrapResult]:
        return self._result

    @property
    def required_components(self) -> List[SwitchboardBaseComponent]:
        return list(self._context.required_components) if self._context else []

    async def init(self) -> BootstrapResult:
        if self._context is not None:
            raise BootstrapError('LifecycleManager.init() may only run once', phase='lifecycle')

        logger.info('=== Switchboard component startup ===')
        logger.info(f'Run ID: {self.run_id}')
        for layer in self.config.config_paths:
            logger.info(f'Config layer: {layer}')
        start = time.perf_counter()

        context = BootstrapContext(
            config=self.config,
            run_id=self.run_id,
            registry=self.registry,
            execution_context=self.execution_context,
            resolver=self.resolver,
            router=self.router,
            trigger_channel=self.trigger_channel,
        )
        self._context = context
        logger.info(f'Effective Strict Mode: {context.strict_mode}')

        phase_results: Dict[str, PhaseResult] = {}

        resolution_phase = DependencyResolutionPhase()
        resolution = await self._run_phase(resolution_phase, context, phase_results)
        if not resolution.success:
            raise self._phase_error(resolution, resolution_phase.label)

        initialization_phase = ComponentInitializationPhase()
        initialization = await self._run_phase(initialization_phase, context, phase_results)
        if not initialization.success:
            if initialization.exception is not None:
                raise self._phase_error(initialization, initialization_phase.label)
            if context.strict_mode:
                self._result = self._build_result(context, phase_results, start)
                error = ComponentInitializationError(
                    f'{len(context.failed_components)} required component(s) failed to initialize; dispatch not activated',
                    failed_components=context.failed_components,
                    phase=initialization_phase.label,
                )
                error.result = self._result
                raise error
            logger.warning(f'Continuing in non-strict mode despite failed components: {context.failed_components}')

        activation_phase = DispatchActivationPhase()
        activation = await self._run_phase(activation_phase, context, phase_results)
        if not activation.success:
            raise self._phase_error(activation, activation_phase.label)

        self._result = self._build_result(context, phase_results, start)
        logger.info(f'=== Switchboard startup complete: {self._result.get_summary()} ===')
        return self._result

    async def wait_for_ready(self, component_id: str, timeout: Optional[float] = None) -> SwitchboardBaseComponent:
        """
        Wait until ``component_id`` is ready and return it.

        Returns at once when it already is. Raises ``ComponentRegistryMissingError``
        for an unknown id, ``DependencyFailedError`` if the component failed and
        ``DependencyTimeoutError`` when ``timeout`` elapses.
        """
        component = self.registry.get(component_id)
        await component.wait_until_ready(timeout)
        return component

    async def _run_phase(self, phase: BootstrapPhase, context: BootstrapContext,
                         phase_results: Dict[str, PhaseResult]) -> PhaseResult:
        logger.info(f'Executing Phase: {phase.phase_name}')
        result = await phase.execute_with_hooks(context)
        phase_results[phase.phase_name] = result
        return result

    @staticmethod
    def _phase_error(result: PhaseResult, phase: str) -> BaseException:
        if result.exception is not None:
            return result.exception
        return BootstrapError(f'{result.message}: {result.errors}', phase=phase)

    def _build_result(self, context: BootstrapContext, phase_results: Dict[str, PhaseResult], start: float) -> BootstrapResult:
        return BootstrapResult(
            run_id=self.run_id,
            required_components=[c.component_id for c in context.required_components],
            component_results=dict(context.component_results),
            phase_results=dict(phase_results),
            dispatch_active=self.router.is_active,
            bootstrap_duration=time.perf_counter() - start,
            dependency_cycles=context.dependency_cycles,
        )
