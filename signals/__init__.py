# switchboard/signals/__init__.py
from __future__ import annotations

from .base import HOTKEY_PRESSED, AffordanceSpec, ComponentReadySignal, HotkeyMessage

__all__ = ['HOTKEY_PRESSED', 'AffordanceSpec', 'ComponentReadySignal', 'HotkeyMessage']
