from .affordance_renderer_port import AffordanceRendererPort, ClickCallback
from .event_bus_port import EventBusPort
from .settings_port import SettingsPort
from .trigger_channel_port import MessageHandler, TriggerChannelPort
from .trigger_port import TriggerablePort

__all__ = [
    'AffordanceRendererPort', 'ClickCallback', 'EventBusPort', 'SettingsPort',
    'MessageHandler', 'TriggerChannelPort', 'TriggerablePort',
]
