# bootstrap/config/__init__.py
"""
Bootstrap Configuration Module

Handles loading of the runtime configuration consumed by the LifecycleManager.
"""

from configs.config_loader import ConfigLoader, SwitchboardSettings
from .bootstrap_config import BootstrapConfig

__all__ = ['BootstrapConfig', 'ConfigLoader', 'SwitchboardSettings']
