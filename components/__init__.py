from .common.callback_component import CallbackComponent
from .common.toggle_component import ToggleComponent

__all__ = ['CallbackComponent', 'ToggleComponent']
