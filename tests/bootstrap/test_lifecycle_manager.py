import asyncio
import logging

import pytest

from bootstrap.config import BootstrapConfig
from bootstrap.exceptions import (
    BootstrapError, ComponentInitializationError, DependencyCycleError, DependencyFailedError,
    DependencyTimeoutError, DispatchSetupFailure,
)
from bootstrap.lifecycle_manager import LifecycleManager
from conftest import Widget
from core.lifecycle import ComponentRegistryMissingError, ComponentState
from infrastructure.channels import MemoryTriggerChannel
from infrastructure.settings_store import SettingsStore
from infrastructure.ui import HostSurfaceRenderer


class RecordingChannel(MemoryTriggerChannel):
    """Remembers the state of every registered component at subscription time."""

    def __init__(self, registry):
        super().__init__()
        self.registry = registry
        self.states_at_subscribe = None

    def subscribe(self, handler):
        self.states_at_subscribe = {c.component_id: c.state for c in self.registry.get_all()}
        super().subscribe(handler)


class ReadinessCheckingRenderer(HostSurfaceRenderer):
    """Records, for every render, whether the component's dependencies were ready."""

    def __init__(self, registry):
        super().__init__()
        self.registry = registry
        self.renders = []

    async def render(self, spec, on_click):
        component = self.registry.get(spec.component_id)
        deps_ready = {dep_id: self.registry.get(dep_id).is_ready for dep_id in component.dependencies}
        self.renders.append((spec.element_id, deps_ready))
        return await super().render(spec, on_click)


def enable(*ids, **extra):
    values = {f'{cid}-enabled': True for cid in ids}
    values.update(extra)
    return SettingsStore(values)


@pytest.mark.asyncio
async def test_dependencies_initialize_before_dependents(registry, renderer, surface, channel):
    # 1. Setup: A -> B -> C, only A enabled
    log = []
    store = enable('Widget.A')
    registry.register(Widget('A', dependencies=['Widget.B'], log=log, settings=store))
    registry.register(Widget('B', dependencies=['Widget.C'], log=log, settings=store))
    registry.register(Widget('C', log=log, settings=store, delay=0.01))
    manager = LifecycleManager(registry, settings=store, renderer=renderer, trigger_channel=channel)

    # 2. Execute
    result = await manager.init()

    # 3. Assert
    assert log == ['Widget.C', 'Widget.B', 'Widget.A']
    assert result.success
    assert result.dispatch_active
    assert sorted(result.ready_components) == ['Widget.A', 'Widget.B', 'Widget.C']
    assert [e.element_id for e in surface.elements] == ['Widget.A-button']
    assert channel.subscriber_count == 1
    logging.info('✅ Dependency ordering verified: %s', log)


@pytest.mark.asyncio
async def test_components_outside_required_set_stay_unstarted(registry):
    store = enable('Widget.A')
    registry.register(Widget('A', settings=store))
    registry.register(Widget('idle', settings=store))

    await LifecycleManager(registry, settings=store).init()

    assert registry.get('Widget.A').state is ComponentState.READY
    assert registry.get('Widget.idle').state is ComponentState.UNSTARTED


@pytest.mark.asyncio
async def test_unregistered_dependency_does_not_block(registry):
    store = enable('Widget.A')
    registry.register(Widget('A', dependencies=['Widget.ghost'], settings=store))

    result = await asyncio.wait_for(LifecycleManager(registry, settings=store).init(), timeout=1)

    assert result.success
    assert registry.get('Widget.A').is_ready


@pytest.mark.asyncio
async def test_dispatch_activates_only_after_every_component_finished(registry):
    store = enable('Widget.A', 'Widget.slow')
    registry.register(Widget('A', settings=store))
    registry.register(Widget('slow', settings=store, delay=0.02))
    channel = RecordingChannel(registry)

    await LifecycleManager(registry, settings=store, trigger_channel=channel).init()

    assert channel.states_at_subscribe == {
        'Widget.slow': ComponentState.READY,
        'Widget.A': ComponentState.READY,
    }


@pytest.mark.asyncio
async def test_strict_mode_failure_raises_and_skips_dispatch(registry, channel):
    # B fails, A depends on B, D is unrelated
    store = enable('Widget.A', 'Widget.D')
    registry.register(Widget('A', dependencies=['Widget.B'], settings=store))
    registry.register(Widget('B', fail_with=RuntimeError('cannot reach backend'), settings=store))
    registry.register(Widget('D', settings=store))
    manager = LifecycleManager(registry, settings=store, trigger_channel=channel)

    with pytest.raises(ComponentInitializationError) as exc_info:
        await manager.init()

    error = exc_info.value
    assert sorted(error.failed_components) == ['Widget.A', 'Widget.B']
    assert error.result.ready_components == ['Widget.D']
    assert not error.result.success
    assert manager.last_result is error.result
    assert not manager.router.is_active
    assert channel.subscriber_count == 0
    assert registry.get('Widget.D').is_ready
    assert registry.get('Widget.A').state is ComponentState.FAILED
    assert isinstance(error.result.component_results['Widget.A'].error, DependencyFailedError)


@pytest.mark.asyncio
async def test_non_strict_mode_activates_dispatch_despite_failures(registry, channel):
    store = enable('Widget.A', 'Widget.D')
    registry.register(Widget('A', fail_with=ValueError('bad config'), settings=store))
    registry.register(Widget('D', settings=store))
    config = BootstrapConfig(initial_strict_mode_param=False)
    manager = LifecycleManager(registry, settings=store, trigger_channel=channel, config=config)

    result = await manager.init()

    assert not result.success
    assert result.failed_components == ['Widget.A']
    assert result.dispatch_active

    await channel.press('trigger-Widget.A')
    await channel.press('trigger-Widget.D')
    assert registry.get('Widget.A').triggered == 0
    assert registry.get('Widget.D').triggered == 1


@pytest.mark.asyncio
async def test_strict_mode_can_come_from_app_config(registry):
    store = enable('Widget.A')
    registry.register(Widget('A', fail_with=RuntimeError('x'), settings=store))
    config = BootstrapConfig(global_app_config={'bootstrap_strict_mode': False})

    result = await LifecycleManager(registry, settings=store, config=config).init()

    assert result.failed_components == ['Widget.A']


@pytest.mark.asyncio
async def test_init_runs_only_once(registry):
    manager = LifecycleManager(registry)
    await manager.init()

    with pytest.raises(BootstrapError):
        await manager.init()


@pytest.mark.asyncio
async def test_empty_registry_starts_cleanly(registry, channel):
    result = await LifecycleManager(registry, trigger_channel=channel).init()

    assert result.success
    assert result.required_components == []
    assert result.dispatch_active


@pytest.mark.asyncio
async def test_no_trigger_channel_skips_activation(registry):
    store = enable('Widget.A')
    registry.register(Widget('A', settings=store))

    result = await LifecycleManager(registry, settings=store).init()

    assert result.success
    assert not result.dispatch_active
    assert result.phase_results['DispatchActivationPhase'].metadata['skipped'] is True


@pytest.mark.asyncio
async def test_closed_channel_is_fatal(registry):
    store = enable('Widget.A')
    registry.register(Widget('A', settings=store))
    channel = MemoryTriggerChannel()
    channel.close()

    with pytest.raises(DispatchSetupFailure):
        await LifecycleManager(registry, settings=store, trigger_channel=channel).init()

    assert registry.get('Widget.A').is_ready


@pytest.mark.asyncio
async def test_wait_for_ready_returns_component(registry):
    store = enable('Widget.A')
    registry.register(Widget('A', settings=store, delay=0.01))
    manager = LifecycleManager(registry, settings=store)

    waiter = asyncio.create_task(manager.wait_for_ready('Widget.A'))
    await manager.init()

    assert await waiter is registry.get('Widget.A')
    # Already ready: returns at once.
    assert await asyncio.wait_for(manager.wait_for_ready('Widget.A'), timeout=1) is registry.get('Widget.A')


@pytest.mark.asyncio
async def test_wait_for_ready_unknown_component(registry):
    manager = LifecycleManager(registry)

    with pytest.raises(ComponentRegistryMissingError):
        await manager.wait_for_ready('Widget.nope')


@pytest.mark.asyncio
async def test_wait_for_ready_times_out_for_component_never_started(registry):
    registry.register(Widget('idle'))
    manager = LifecycleManager(registry)
    await manager.init()

    with pytest.raises(DependencyTimeoutError):
        await manager.wait_for_ready('Widget.idle', timeout=0.01)


@pytest.mark.asyncio
async def test_ready_events_are_published(registry, event_bus):
    store = enable('Widget.A')
    registry.register(Widget('A', dependencies=['Widget.B'], settings=store))
    registry.register(Widget('B', settings=store))

    await LifecycleManager(registry, settings=store, event_bus=event_bus).init()

    names = [event.event_name for event in event_bus.history()]
    assert names == ['Widget.B-ready', 'Widget.A-ready']


@pytest.mark.asyncio
async def test_rejected_dependency_cycle(registry):
    store = enable('Widget.A')
    registry.register(Widget('A', dependencies=['Widget.B'], settings=store))
    registry.register(Widget('B', dependencies=['Widget.A'], settings=store))
    config = BootstrapConfig(reject_dependency_cycles=True)

    with pytest.raises(DependencyCycleError) as exc_info:
        await LifecycleManager(registry, settings=store, config=config).init()

    assert len(exc_info.value.cycles) == 1
    assert registry.get('Widget.A').state is ComponentState.UNSTARTED


@pytest.mark.asyncio
async def test_dependency_cycle_with_timeout_fails_instead_of_hanging(registry):
    store = enable('Widget.A')
    registry.register(Widget('A', dependencies=['Widget.B'], settings=store))
    registry.register(Widget('B', dependencies=['Widget.A'], settings=store))
    config = BootstrapConfig(readiness_timeout=0.02)

    with pytest.raises(ComponentInitializationError) as exc_info:
        await asyncio.wait_for(LifecycleManager(registry, settings=store, config=config).init(), timeout=2)

    assert sorted(exc_info.value.failed_components) == ['Widget.A', 'Widget.B']
    assert exc_info.value.result.dependency_cycles
    errors = [r.error for r in exc_info.value.result.component_results.values()]
    assert any(isinstance(e, DependencyTimeoutError) for e in errors)


@pytest.mark.asyncio
async def test_affordance_rendered_only_after_dependencies_ready(registry):
    # C <- B <- A, all enabled and displayed; C is slow
    store = enable('Widget.A', 'Widget.B', 'Widget.C')
    registry.register(Widget('A', dependencies=['Widget.B'], settings=store))
    registry.register(Widget('B', dependencies=['Widget.C'], settings=store))
    registry.register(Widget('C', settings=store, delay=0.01))
    renderer = ReadinessCheckingRenderer(registry)

    await LifecycleManager(registry, settings=store, renderer=renderer).init()

    assert [element_id for element_id, _ in renderer.renders] == ['Widget.C-button', 'Widget.B-button', 'Widget.A-button']
    assert renderer.renders[1][1] == {'Widget.C': True}
    assert renderer.renders[2][1] == {'Widget.B': True}
    assert [e.element_id for e in renderer.surface.elements] == ['Widget.C-button', 'Widget.B-button', 'Widget.A-button']


@pytest.mark.asyncio
async def test_config_layers_are_logged(registry, tmp_path, caplog):
    path = tmp_path / 'run.yaml'
    path.write_text('bootstrap_strict_mode: true\n', encoding='utf-8')
    config = BootstrapConfig.from_files([path])

    with caplog.at_level(logging.INFO):
        await LifecycleManager(registry, config=config).init()

    assert f'Config layer: {path}' in caplog.text
