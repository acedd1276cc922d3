from __future__ import annotations
import logging

from .base_phase import BootstrapPhase, PhaseResult
from bootstrap.exceptions import DependencyCycleError

logger = logging.getLogger(__name__)

class DependencyResolutionPhase(BootstrapPhase):
    """
    Dependency Resolution Phase - computes the required set: every enabled
    component plus everything it transitively depends on.
    """

    label = 'dependency_resolution'

    async def execute(self, context) -> PhaseResult:
        logger.info('Executing Dependency Resolution Phase - Computing required components')

        required = context.resolver.resolve_required()
        context.required_components = required

        warnings = []
        cycles = context.resolver.find_cycles(required)
        context.dependency_cycles = cycles
        for cycle in cycles:
            warnings.append(f"Dependency cycle among required components: {' -> '.join(cycle)}")

        if cycles and context.config.reject_dependency_cycles:
            raise DependencyCycleError(f'{len(cycles)} dependency cycle(s) found in the required set', cycles)

        required_ids = [c.component_id for c in required]
        enabled_count = sum(1 for c in required if c.enabled)
        return PhaseResult.success_result(
            message=f'{len(required)} required component(s) resolved',
            warnings=warnings,
            metadata={
                'required_components': required_ids,
                'enabled_components': enabled_count,
                'dependency_only_components': len(required) - enabled_count,
                'cycles': cycles,
            }
        )
