from .config_loader import DEFAULT_CONFIG, ConfigLoader, SwitchboardSettings

__all__ = ['DEFAULT_CONFIG', 'ConfigLoader', 'SwitchboardSettings']
