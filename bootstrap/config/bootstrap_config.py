from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from configs.config_loader import ConfigLoader, SwitchboardSettings


@dataclass
class BootstrapConfig:
    """Configuration for one LifecycleManager run."""
    config_paths: List[Path] = field(default_factory=list)
    global_app_config: Optional[Dict[str, Any]] = None
    initial_strict_mode_param: bool = True
    readiness_timeout: Optional[float] = None
    reject_dependency_cycles: bool = False

    @property
    def effective_strict_mode(self) -> bool:
        """Get effective strict mode from config hierarchy."""
        if self.global_app_config and 'bootstrap_strict_mode' in self.global_app_config:
            return bool(self.global_app_config['bootstrap_strict_mode'])
        return self.initial_strict_mode_param

    @classmethod
    def from_params(cls, config_paths: Optional[List[str | Path]] = None, **kwargs) -> 'BootstrapConfig':
        """Create BootstrapConfig from keyword parameters."""
        return cls(
            config_paths=[Path(p) for p in config_paths or []],
            global_app_config=kwargs.get('global_app_config'),
            initial_strict_mode_param=kwargs.get('strict_mode', True),
            readiness_timeout=kwargs.get('readiness_timeout'),
            reject_dependency_cycles=kwargs.get('reject_dependency_cycles', False),
        )

    @classmethod
    def from_settings(cls, settings: SwitchboardSettings, config_paths: Optional[List[str | Path]] = None) -> 'BootstrapConfig':
        return cls(
            config_paths=[Path(p) for p in config_paths or []],
            global_app_config=settings.model_dump(),
            initial_strict_mode_param=settings.bootstrap_strict_mode,
            readiness_timeout=settings.readiness_timeout_seconds,
            reject_dependency_cycles=settings.reject_dependency_cycles,
        )

    @classmethod
    def from_files(cls, config_paths: List[str | Path]) -> 'BootstrapConfig':
        settings = ConfigLoader().load_settings(config_paths)
        return cls.from_settings(settings, config_paths)
