from __future__ import annotations
import logging
import time

from .base_phase import BootstrapPhase, PhaseResult

logger = logging.getLogger(__name__)

class DispatchActivationPhase(BootstrapPhase):
    """
    Dispatch Activation Phase - subscribes the dispatch router to the inbound
    trigger channel. Runs only once the initialization batch has finished.
    """

    label = 'dispatch_activation'

    def should_skip_phase(self, context) -> tuple[bool, str]:
        if context.trigger_channel is None:
            return True, 'no trigger channel configured'
        return False, ''

    async def execute(self, context) -> PhaseResult:
        unfinished = [c.component_id for c in context.required_components if not c.state.is_terminal]
        if unfinished:
            raise RuntimeError(f'Dispatch activation attempted before initialization finished: {unfinished}')

        start = time.perf_counter()
        context.router.activate(context.trigger_channel)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f'DispatchRouter.activate() time = {elapsed_ms:.1f}ms')

        warnings = []
        if context.failed_components:
            warnings.append(f'Dispatch active while {len(context.failed_components)} component(s) failed: {context.failed_components}')
        return PhaseResult.success_result(
            message='Dispatch router listening for hotkeys',
            warnings=warnings,
            metadata={'activation_ms': elapsed_ms}
        )
