#  switchboard/signals/base.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

HOTKEY_PRESSED = 'hotkey-pressed'


class HotkeyMessage(BaseModel):
    """
    Inbound message delivered by the trigger channel.

    Accepts arbitrary extra fields so channels may attach their own metadata.
    """
    model_config = ConfigDict(extra="allow", frozen=True)

    command: str = Field(..., description="Message kind; only 'hotkey-pressed' is routed.")
    name: str = Field(default='', description="Trigger name, e.g. 'trigger-Widget.clock'.")

    @property
    def is_hotkey_pressed(self) -> bool:
        return self.command == HOTKEY_PRESSED


class AffordanceSpec(BaseModel):
    """Everything the renderer needs to build one component's on-screen control."""
    model_config = ConfigDict(frozen=True)

    element_id: str = Field(..., description="Stable element id, '<component id>-button'.")
    component_id: str
    display_name: str
    icon: str = ''
    hotkey_label: Optional[str] = Field(
        default=None,
        description="Hotkey label to show, or None when hotkey display is turned off for the component kind.",
    )

    @field_validator('element_id')
    @classmethod
    def _validate_element_id(cls, v: str) -> str:
        if not v.endswith('-button'):
            raise ValueError(f"element_id must end with '-button', got {v!r}")
        return v


class ComponentReadySignal(BaseModel):
    """Payload published on the event bus under '<component id>-ready'."""
    model_config = ConfigDict(frozen=True)

    component_id: str
    kind: str
    displayed: bool = False
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @property
    def event_name(self) -> str:
        return f'{self.component_id}-ready'

    @field_serializer('timestamp')
    def _serialize_timestamp(self, ts: datetime) -> str:
        return ts.isoformat()
