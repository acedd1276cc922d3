from __future__ import annotations
import asyncio
import logging
import time
from typing import Any, List

from .base_phase import BootstrapPhase, PhaseResult
from bootstrap.bootstrap_helper.context_helper import build_component_init_context
from core.results import ComponentInitResult

logger = logging.getLogger(__name__)

class ComponentInitializationPhase(BootstrapPhase):
    """
    Component Initialization Phase - starts every required component's
    initialization concurrently. Each component waits only on its own
    dependencies; a failing component does not abort its siblings.
    """

    label = 'initialization'

    async def execute(self, context) -> PhaseResult:
        components = list(context.required_components)
        logger.info(f'Executing Component Initialization Phase - Initializing {len(components)} required component(s)')

        initialization_stats = {
            'components_requiring_init': len(components),
            'successfully_initialized': 0,
            'initialization_failed': 0,
        }

        if not components:
            return PhaseResult.success_result(message='No components to initialize', metadata=initialization_stats)

        tasks = [
            asyncio.create_task(self._initialize_single_component_safe(component, context), name=f'init_{component.component_id}')
            for component in components
        ]
        results: List[ComponentInitResult] = await asyncio.gather(*tasks)

        errors = []
        for result in results:
            context.component_results[result.component_id] = result
            if result.success:
                initialization_stats['successfully_initialized'] += 1
            else:
                initialization_stats['initialization_failed'] += 1
                errors.append(f'Failed to initialize component {result.component_id}: {result.message}')

        initialization_stats['results'] = [r.to_dict() for r in results]
        message = (
            f'Component initialization complete - {initialization_stats["successfully_initialized"]}/'
            f'{initialization_stats["components_requiring_init"]} components ready'
        )
        if errors:
            return PhaseResult.failure_result(message=message, errors=errors, metadata=initialization_stats)
        return PhaseResult.success_result(message=message, metadata=initialization_stats)

    async def _initialize_single_component_safe(self, component: Any, context) -> ComponentInitResult:
        """Initialize one component and turn its outcome into a ComponentInitResult."""
        init_context = build_component_init_context(component_id=component.component_id, base_context=context.execution_context)
        start = time.perf_counter()
        try:
            await component.initialize(init_context)
        except Exception as e:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.warning(f'✗ Component {component.component_id} failed after {duration_ms:.1f}ms: {e}')
            return ComponentInitResult.failed(component.component_id, e, duration_ms)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.debug(f'✓ Component {component.component_id} ready in {duration_ms:.1f}ms')
        return ComponentInitResult.ready(component.component_id, duration_ms)
