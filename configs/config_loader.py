from __future__ import annotations
import copy
import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Final, Iterable, Mapping, Optional, Sequence

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from bootstrap.bootstrap_helper._exceptions import ConfigurationError
from configs.config_utils import ConfigMerger

__all__: Sequence[str] = ('ConfigLoader', 'DEFAULT_CONFIG', 'SwitchboardSettings')
logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    'bootstrap_strict_mode': True,
    'readiness_timeout_seconds': None,
    'reject_dependency_cycles': False,
    'settings': {},
}

_RE_ENV_DEFAULT: Final[re.Pattern[str]] = re.compile(r'\$\{([A-Za-z_][A-Za-z0-9_]*):?-(.*?)\}')


def _interpolate_env(value: str) -> str:
    if not isinstance(value, str):
        return value

    def _repl(match: re.Match[str]) -> str:
        var, default = (match.group(1), match.group(2))
        return os.getenv(var, default)

    before = value
    value = _RE_ENV_DEFAULT.sub(_repl, value)
    value = os.path.expandvars(value)

    if before != value:
        logger.debug("Env expand: '%s' → '%s'", before, value)
    elif '${' in before:
        logger.warning("Unresolved env var in '%s'", before)

    return value


def _expand_tree(node: Any) -> Any:
    if isinstance(node, dict):
        return {k: _expand_tree(v) for k, v in node.items()}
    if isinstance(node, list):
        return [_expand_tree(v) for v in node]
    if isinstance(node, str):
        return _interpolate_env(node)
    return node


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding='utf-8')
    except FileNotFoundError:
        raise ConfigurationError(f'Config file not found: {path}', phase='configuration')
    except OSError as exc:
        raise ConfigurationError(f'Failed to read {path}: {exc}', phase='configuration') from exc

    try:
        if path.suffix.lower() == '.json':
            data = json.loads(text) or {}
        else:
            data = yaml.safe_load(text) or {}
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f'Failed to parse {path}: {exc}', phase='configuration') from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f'{path} does not contain a top-level mapping', phase='configuration')
    return data


class SwitchboardSettings(BaseModel):
    """Validated runtime configuration."""
    model_config = ConfigDict(extra='ignore')

    bootstrap_strict_mode: bool = Field(True, description='Fail init() when any required component fails.')
    readiness_timeout_seconds: Optional[float] = Field(
        None, gt=0, description='Bound on each dependency wait; None waits forever.'
    )
    reject_dependency_cycles: bool = Field(False, description='Refuse to start when the required set contains a cycle.')
    settings: Dict[str, Any] = Field(default_factory=dict, description='Initial values of the settings store.')


class ConfigLoader:
    """
    Loads configuration layers (YAML or JSON) over ``DEFAULT_CONFIG``.

    Later layers win; ``${VAR:-default}`` placeholders in string values are
    expanded from the environment after merging.
    """

    def load(self, paths: Iterable[str | Path] = (), provided_config: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        cfg: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        for path in paths:
            path = Path(path)
            cfg = ConfigMerger.merge(cfg, _load_yaml(path), str(path))
            logger.info('Merged config layer: %s', path)
        if provided_config:
            cfg = ConfigMerger.merge(cfg, dict(provided_config), 'provided_config')
        cfg = _expand_tree(cfg)
        logger.debug('Resolved config keys: %s', list(cfg))
        return cfg

    def load_settings(self, paths: Iterable[str | Path] = (), provided_config: Optional[Mapping[str, Any]] = None) -> SwitchboardSettings:
        cfg = self.load(paths, provided_config)
        try:
            settings = SwitchboardSettings.model_validate(cfg)
        except ValidationError as exc:
            raise ConfigurationError(f'Invalid configuration: {exc}', phase='configuration') from exc
        logger.info('✓ Configuration loaded (strict_mode=%s, readiness_timeout=%s)',
                    settings.bootstrap_strict_mode, settings.readiness_timeout_seconds)
        return settings
