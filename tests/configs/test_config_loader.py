from pathlib import Path

import pytest

from bootstrap.config import BootstrapConfig
from bootstrap.exceptions import ConfigurationError
from configs import DEFAULT_CONFIG, ConfigLoader
from configs.config_utils import ConfigMerger, merge_configs
from conftest import Widget
from infrastructure.settings_store import SettingsStore

DEFAULT_YAML = Path(__file__).resolve().parents[2] / 'configs' / 'default' / 'switchboard.yaml'


def write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding='utf-8')
    return path


def test_merge_is_recursive_and_non_destructive():
    base = {'settings': {'a': 1, 'b': 2}, 'flag': True}
    override = {'settings': {'b': 3}, 'flag': False}

    merged = ConfigMerger.merge(base, override)

    assert merged == {'settings': {'a': 1, 'b': 3}, 'flag': False}
    assert base == {'settings': {'a': 1, 'b': 2}, 'flag': True}


def test_merge_configs_applies_overrides_in_order():
    assert merge_configs({'x': 1}, {'x': 2}, {'x': 3, 'y': 4}) == {'x': 3, 'y': 4}


def test_defaults_without_layers():
    assert ConfigLoader().load() == DEFAULT_CONFIG


def test_layers_merge_over_defaults(tmp_path):
    first = write(tmp_path, 'base.yaml', 'readiness_timeout_seconds: 5\nsettings:\n  Widget.a-enabled: true\n')
    second = write(tmp_path, 'local.json', '{"settings": {"Widget.b-enabled": true}}')

    settings = ConfigLoader().load_settings([first, second], provided_config={'bootstrap_strict_mode': False})

    assert settings.readiness_timeout_seconds == 5
    assert settings.bootstrap_strict_mode is False
    assert settings.settings == {'Widget.a-enabled': True, 'Widget.b-enabled': True}


def test_env_placeholders_are_expanded(tmp_path, monkeypatch):
    path = write(tmp_path, 'env.yaml', 'bootstrap_strict_mode: ${SB_STRICT:-true}\nsettings:\n  label: ${SB_LABEL:-plain}\n')
    monkeypatch.setenv('SB_STRICT', 'false')
    monkeypatch.delenv('SB_LABEL', raising=False)

    settings = ConfigLoader().load_settings([path])

    assert settings.bootstrap_strict_mode is False
    assert settings.settings['label'] == 'plain'


def test_shipped_default_config_loads(monkeypatch):
    monkeypatch.delenv('SWITCHBOARD_STRICT_MODE', raising=False)

    settings = ConfigLoader().load_settings([DEFAULT_YAML])

    assert settings.bootstrap_strict_mode is True
    assert settings.readiness_timeout_seconds is None
    assert settings.settings['display-Widget-hotkeys'] is True


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match='not found'):
        ConfigLoader().load([tmp_path / 'nope.yaml'])


def test_unparsable_file(tmp_path):
    path = write(tmp_path, 'broken.yaml', 'settings: [unclosed\n')
    with pytest.raises(ConfigurationError, match='Failed to parse'):
        ConfigLoader().load([path])


def test_top_level_must_be_mapping(tmp_path):
    path = write(tmp_path, 'list.yaml', '- a\n- b\n')
    with pytest.raises(ConfigurationError, match='top-level mapping'):
        ConfigLoader().load([path])


def test_invalid_values_are_rejected(tmp_path):
    path = write(tmp_path, 'bad.yaml', 'readiness_timeout_seconds: -1\n')
    with pytest.raises(ConfigurationError, match='Invalid configuration'):
        ConfigLoader().load_settings([path])


def test_bootstrap_config_from_files(tmp_path):
    path = write(tmp_path, 'run.yaml', 'bootstrap_strict_mode: false\nreadiness_timeout_seconds: 2.5\nreject_dependency_cycles: true\n')

    config = BootstrapConfig.from_files([path])

    assert config.effective_strict_mode is False
    assert config.readiness_timeout == 2.5
    assert config.reject_dependency_cycles is True
    assert config.config_paths == [path]


def test_bootstrap_config_from_params():
    config = BootstrapConfig.from_params(strict_mode=False, readiness_timeout=1.0)

    assert config.effective_strict_mode is False
    assert config.readiness_timeout == 1.0
    assert config.config_paths == []


def test_settings_store_seeded_from_config_file(tmp_path):
    path = write(tmp_path, 'store.yaml', 'settings:\n  Widget.a-enabled: true\n  display-Widget-hotkeys: false\n')

    store = SettingsStore.from_files([path])

    assert Widget('a', settings=store).enabled
    assert not Widget('b', settings=store).enabled
    assert store.get('display-Widget-hotkeys') is False


def test_shipped_default_config_reaches_settings_store(monkeypatch):
    monkeypatch.delenv('SWITCHBOARD_STRICT_MODE', raising=False)

    store = SettingsStore.from_settings(ConfigLoader().load_settings([DEFAULT_YAML]))

    assert store.is_enabled('display-Widget-hotkeys')
