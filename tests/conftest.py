import asyncio
import logging
import sys
from pathlib import Path

import pytest

def setup_path():
    project_root = Path(__file__).resolve().parent.parent
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))

setup_path()

from core.base_component import SwitchboardBaseComponent
from core.registry import ComponentRegistry
from infrastructure.channels import MemoryTriggerChannel
from infrastructure.event_bus import MemoryEventBus
from infrastructure.settings_store import SettingsStore
from infrastructure.ui import HostSurface, HostSurfaceRenderer


class Widget(SwitchboardBaseComponent):
    """Test component recording the order in which instances become ready."""

    def __init__(self, display_name, *, log=None, fail_with=None, delay=0.0, **kwargs):
        super().__init__(display_name, **kwargs)
        self.log = log if log is not None else []
        self.fail_with = fail_with
        self.delay = delay
        self.triggered = 0

    async def _initialize_impl(self, context):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_with is not None:
            raise self.fail_with
        self.log.append(self.component_id)

    async def _trigger_impl(self):
        self.triggered += 1
        return self.triggered


class Panel(Widget):
    kind = 'Panel'


@pytest.fixture
def settings():
    return SettingsStore({'display-Widget-hotkeys': True})


@pytest.fixture
def registry():
    return ComponentRegistry()


@pytest.fixture
def surface():
    return HostSurface()


@pytest.fixture
def renderer(surface):
    return HostSurfaceRenderer(surface)


@pytest.fixture
def channel():
    return MemoryTriggerChannel()


@pytest.fixture
def event_bus():
    return MemoryEventBus()


@pytest.fixture(autouse=True)
def _debug_logging(caplog):
    caplog.set_level(logging.DEBUG)
