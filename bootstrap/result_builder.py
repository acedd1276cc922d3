"""
Bootstrap result for Switchboard.

Collects what one LifecycleManager.init() run produced: the required set,
each component's initialization outcome and each phase's result.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bootstrap.phases.base_phase import PhaseResult
from core.results import ComponentInitResult

logger = logging.getLogger(__name__)


class BootstrapResult:
    """
    Result of one LifecycleManager.init() run.

    ``success`` is the aggregate: a single failed component fails the whole
    batch even though its siblings reached Ready.
    """

    def __init__(
        self,
        run_id: str,
        required_components: List[str],
        component_results: Dict[str, ComponentInitResult],
        phase_results: Dict[str, PhaseResult],
        dispatch_active: bool,
        bootstrap_duration: Optional[float] = None,
        dependency_cycles: Optional[List[List[str]]] = None,
    ):
        self.run_id = run_id
        self.required_components = required_components
        self.component_results = component_results
        self.phase_results = phase_results
        self.dispatch_active = dispatch_active
        self.bootstrap_duration = bootstrap_duration
        self.dependency_cycles = dependency_cycles or []
        self.creation_time = datetime.now(timezone.utc)

        logger.info(f"BootstrapResult created for run_id: {run_id}")

    @property
    def success(self) -> bool:
        return all(r.success for r in self.phase_results.values()) and not self.failed_components

    @property
    def failed_components(self) -> List[str]:
        return [cid for cid, result in self.component_results.items() if not result.success]

    @property
    def ready_components(self) -> List[str]:
        return [cid for cid, result in self.component_results.items() if result.success]

    def get_summary(self) -> Dict[str, Any]:
        return {
            'run_id': self.run_id,
            'success': self.success,
            'required_components': len(self.required_components),
            'ready_components': len(self.ready_components),
            'failed_components': self.failed_components,
            'dependency_cycles': self.dependency_cycles,
            'dispatch_active': self.dispatch_active,
            'bootstrap_duration': self.bootstrap_duration,
            'creation_time': self.creation_time.isoformat(),
        }

    def __repr__(self) -> str:
        return (
            f"BootstrapResult(run_id='{self.run_id}', success={self.success}, "
            f"required={len(self.required_components)}, failed={len(self.failed_components)})"
        )
