from .base_phase import BootstrapPhase, PhaseResult
from .dependency_resolution_phase import DependencyResolutionPhase
from .initialization_phase import ComponentInitializationPhase
from .dispatch_activation_phase import DispatchActivationPhase

__all__ = [
    'BootstrapPhase', 'PhaseResult',
    'DependencyResolutionPhase', 'ComponentInitializationPhase', 'DispatchActivationPhase',
]
