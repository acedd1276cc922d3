from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from bootstrap.config.bootstrap_config import BootstrapConfig
from core.registry import ComponentRegistry
from core.results import ComponentInitResult
from domain.context import ExecutionContext
from domain.ports.trigger_channel_port import TriggerChannelPort

if TYPE_CHECKING:
    from bootstrap.dependency_resolver import DependencyResolver
    from core.base_component import SwitchboardBaseComponent
    from reactor.dispatch_router import DispatchRouter


@dataclass
class BootstrapContext:
    """Shared state handed from phase to phase during one LifecycleManager.init() run."""
    config: BootstrapConfig
    run_id: str
    registry: ComponentRegistry
    execution_context: ExecutionContext
    resolver: 'DependencyResolver'
    router: 'DispatchRouter'
    trigger_channel: Optional[TriggerChannelPort] = None
    required_components: List['SwitchboardBaseComponent'] = field(default_factory=list)
    dependency_cycles: List[List[str]] = field(default_factory=list)
    component_results: Dict[str, ComponentInitResult] = field(default_factory=dict)

    @property
    def strict_mode(self) -> bool:
        """Use effective strict mode from BootstrapConfig"""
        return self.config.effective_strict_mode

    @property
    def failed_components(self) -> List[str]:
        return [cid for cid, result in self.component_results.items() if not result.success]

    def summary(self) -> Dict[str, Any]:
        return {
            'run_id': self.run_id,
            'required': [c.component_id for c in self.required_components],
            'failed': self.failed_components,
            'cycles': self.dependency_cycles,
            'dispatch_active': self.router.is_active,
        }
