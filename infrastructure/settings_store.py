# switchboard/infrastructure/settings_store.py
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set

from configs.config_loader import ConfigLoader, SwitchboardSettings

logger = logging.getLogger(__name__)


class SettingsStore:
    """
    In-memory key/value settings store satisfying ``SettingsPort``.

    Values come from configuration (plain values, or ``{'value': ..., 'description': ...}``
    mappings) and from ``register_setting`` defaults; configured values win.
    """

    def __init__(self, config: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, Any] = {}
        self._descriptions: Dict[str, str] = {}
        self._registered: Set[str] = set()

        if config:
            for key, value in config.items():
                if isinstance(value, dict) and 'value' in value:
                    self._values[key] = value['value']
                    if 'description' in value:
                        self._descriptions[key] = str(value['description'])
                else:
                    self._values[key] = value

        logger.info(f"SettingsStore initialized with {len(self._values)} value(s) from config.")

    @classmethod
    def from_settings(cls, settings: SwitchboardSettings) -> 'SettingsStore':
        """Store seeded with the ``settings`` map of a loaded configuration."""
        return cls(settings.settings)

    @classmethod
    def from_files(cls, config_paths: Iterable[str | Path]) -> 'SettingsStore':
        return cls.from_settings(ConfigLoader().load_settings(config_paths))

    def register_setting(self, key: str, default_value: Any = None, description: Optional[str] = None) -> None:
        self._registered.add(key)
        if key not in self._values:
            self._values[key] = default_value
        if description:
            self._descriptions[key] = description
        logger.debug(f"Registered setting: {key} (default: {default_value!r})")

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._values:
            return self._values[key]
        logger.debug(f"Unset setting: {key}, using default: {default!r}")
        return default

    def is_enabled(self, key: str) -> bool:
        return self.get(key, False) is True

    def set(self, key: str, value: Any) -> None:
        if key not in self._registered and key not in self._values:
            logger.debug(f"Setting unregistered key: {key}")
        self._values[key] = value
        logger.info(f"Setting {key} set to {value!r}")

    def get_all(self) -> Dict[str, Any]:
        return dict(self._values)

    def get_description(self, key: str) -> Optional[str]:
        return self._descriptions.get(key)

    def get_registered_settings(self) -> List[Dict[str, Any]]:
        result = []
        for key in sorted(self._registered):
            info = {"key": key, "value": self._values.get(key)}
            if key in self._descriptions:
                info["description"] = self._descriptions[key]
            result.append(info)
        return result

    def __contains__(self, key: str) -> bool:
        return key in self._values
