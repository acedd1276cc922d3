# switchboard/bootstrap/__init__.py
from __future__ import annotations

# Only exceptions are imported eagerly: core modules depend on them, and the
# lifecycle manager depends on core. Import the manager from
# ``bootstrap.lifecycle_manager``.
from .exceptions import *  # noqa: F401,F403

__version__ = '0.3.0'
__description__ = 'Switchboard component bootstrap'

__all__ = [
    'BootstrapError', 'ComponentInitializationError', 'RenderingFailure', 'DependencyResolutionError',
    'DependencyFailedError', 'DependencyTimeoutError', 'DependencyCycleError', 'DispatchSetupFailure',
    'ConfigurationError', '__version__', '__description__',
]
