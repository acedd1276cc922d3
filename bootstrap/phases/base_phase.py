"""
Base Phase - shared contract of the three LifecycleManager phases.

A phase reads and fills the ``BootstrapContext``; ``execute_with_hooks`` is
what the manager calls. It never raises: an exception escaping ``execute``
becomes a failed ``PhaseResult`` that carries it, and the manager decides
whether to re-raise.
"""
from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from bootstrap.bootstrap_helper._exceptions import BootstrapError

logger = logging.getLogger(__name__)


@dataclass
class PhaseResult:
    success: bool
    message: str
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    exception: Optional[BaseException] = field(default=None, repr=False)
    duration_ms: float = 0.0

    @classmethod
    def success_result(cls, message: str, warnings: Optional[List[str]] = None,
                       metadata: Optional[Dict[str, Any]] = None) -> 'PhaseResult':
        return cls(True, message, warnings=list(warnings or []), metadata=dict(metadata or {}))

    @classmethod
    def failure_result(cls, message: str, errors: List[str], warnings: Optional[List[str]] = None,
                       metadata: Optional[Dict[str, Any]] = None,
                       exception: Optional[BaseException] = None) -> 'PhaseResult':
        return cls(False, message, errors=list(errors), warnings=list(warnings or []),
                   metadata=dict(metadata or {}), exception=exception)

    @property
    def skipped(self) -> bool:
        return bool(self.metadata.get('skipped'))


class BootstrapPhase(ABC):
    """
    One step of bringing a registry's required components up.

    ``label`` is the short phase name carried by errors raised from the
    phase; ``phase_name`` (the class name) keys the phase in results.
    """

    label: str = 'bootstrap'
    required_context_attrs: Tuple[str, ...] = ('config', 'run_id', 'registry')

    def __init__(self) -> None:
        self.phase_name = type(self).__name__
        self.logger = logging.getLogger(f'bootstrap.{self.label}')

    @abstractmethod
    async def execute(self, context) -> PhaseResult:
        ...

    def should_skip_phase(self, context) -> Tuple[bool, str]:
        return False, ''

    def validate_context(self, context) -> None:
        missing = [attr for attr in self.required_context_attrs if getattr(context, attr, None) is None]
        if missing:
            raise BootstrapError(f'BootstrapContext is missing {", ".join(missing)}', phase=self.label)

    async def pre_execute(self, context) -> None:
        self.logger.debug('Starting phase %s (run %s)', self.phase_name, context.run_id)

    async def post_execute(self, context, result: PhaseResult) -> None:
        if result.success:
            self.logger.info(f'✓ {self.phase_name} - {result.message} ({result.duration_ms:.1f}ms)')
        else:
            self.logger.error(f'✗ {self.phase_name} - {result.message} ({result.duration_ms:.1f}ms)')
            for error in result.errors:
                self.logger.error(f'  Error: {error}')
        for warning in result.warnings:
            self.logger.warning(f'  Warning: {warning}')

    async def execute_with_hooks(self, context) -> PhaseResult:
        start = time.perf_counter()
        try:
            self.validate_context(context)
            skip, reason = self.should_skip_phase(context)
            if skip:
                self.logger.info(f'Skipping {self.phase_name}: {reason}')
                return PhaseResult.success_result(f'Phase skipped: {reason}', metadata={'skipped': True, 'skip_reason': reason})

            await self.pre_execute(context)
            result = await self.execute(context)
        except Exception as e:
            self.logger.error(f'Unexpected error in {self.phase_name}: {e}', exc_info=True)
            result = PhaseResult.failure_result(
                f'{self.phase_name} failed with {type(e).__name__}',
                errors=[str(e)],
                metadata={'phase': self.label},
                exception=e,
            )

        result.duration_ms = (time.perf_counter() - start) * 1000
        await self.post_execute(context, result)
        return result
