"""
Exception classes for the Switchboard bootstrap system.

This module defines the errors raised while resolving, initializing and
activating components, so callers can tell a failed render from a failed
dependency or a broken trigger channel.
"""

from typing import List, Optional

__all__ = [
    'BootstrapError', 'ComponentInitializationError', 'RenderingFailure', 'DependencyResolutionError',
    'DependencyFailedError', 'DependencyTimeoutError', 'DependencyCycleError', 'DispatchSetupFailure',
    'ConfigurationError',
]


class BootstrapError(RuntimeError):
    """
    Base exception for all bootstrap-related errors.

    Carries the component and phase the failure belongs to, when known.
    """

    def __init__(self, message: str, component_id: Optional[str] = None, phase: Optional[str] = None):
        super().__init__(message)
        self.component_id = component_id
        self.phase = phase

    def __str__(self) -> str:
        base_msg = super().__str__()

        context_parts = []
        if self.phase:
            context_parts.append(f"phase={self.phase}")
        if self.component_id:
            context_parts.append(f"component={self.component_id}")

        if context_parts:
            return f"{base_msg} ({', '.join(context_parts)})"
        return base_msg


class ComponentInitializationError(BootstrapError):
    """
    Raised when one or more required components failed to reach Ready.

    ``failed_components`` lists the ids of every component whose
    initialization ended in the Failed state.
    """

    def __init__(self, message: str, failed_components: Optional[List[str]] = None, phase: Optional[str] = None):
        super().__init__(message, phase=phase)
        self.failed_components = failed_components or []

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.failed_components:
            return f"{base_msg}\nFailed components:\n  - " + "\n  - ".join(self.failed_components)
        return base_msg


class RenderingFailure(BootstrapError):
    """Raised when a component's on-screen affordance could not be generated."""
    pass


class DependencyResolutionError(BootstrapError):
    """
    Base for errors about a component's declared dependencies.

    ``dependency_id`` names the dependency involved.
    """

    def __init__(self, message: str, component_id: Optional[str] = None, dependency_id: Optional[str] = None,
                 phase: Optional[str] = None):
        super().__init__(message, component_id=component_id, phase=phase)
        self.dependency_id = dependency_id


class DependencyFailedError(DependencyResolutionError):
    """Raised to a waiter when the dependency it waits on ended in the Failed state."""
    pass


class DependencyTimeoutError(DependencyResolutionError):
    """Raised when a dependency did not become ready within the configured timeout."""
    pass


class DependencyCycleError(DependencyResolutionError):
    """Raised when cycle rejection is enabled and the required set contains a dependency cycle."""

    def __init__(self, message: str, cycles: List[List[str]]):
        super().__init__(message, phase='dependency_resolution')
        self.cycles = cycles

    def __str__(self) -> str:
        base_msg = super().__str__()
        rendered = [' -> '.join(cycle) for cycle in self.cycles]
        return f"{base_msg}\nCycles:\n  - " + "\n  - ".join(rendered) if rendered else base_msg


class DispatchSetupFailure(BootstrapError):
    """
    Raised when the dispatch router cannot subscribe to the inbound trigger channel.

    Fatal to startup: without the subscription no trigger can ever be delivered.
    """
    pass


class ConfigurationError(BootstrapError):
    """
    Raised when configuration loading or validation fails.

    This includes unreadable files, a non-mapping top level and values
    rejected by the settings model.
    """
    pass
