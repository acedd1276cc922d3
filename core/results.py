import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from core.lifecycle import ComponentState

logger = logging.getLogger(__name__)


@dataclass
class ComponentInitResult:
    """Outcome of one component's initialization."""
    success: bool
    component_id: str
    state: ComponentState
    message: str = ""
    error: Optional[BaseException] = None
    duration_ms: float = 0.0
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        if not isinstance(self.success, bool):
            raise TypeError("success must be a boolean")
        if not isinstance(self.component_id, str):
            raise TypeError("component_id must be a string")
        if self.success and self.error is not None:
            raise ValueError("a successful result cannot carry an error")

    @classmethod
    def ready(cls, component_id: str, duration_ms: float = 0.0) -> 'ComponentInitResult':
        return cls(success=True, component_id=component_id, state=ComponentState.READY,
                   message='Component ready', duration_ms=duration_ms)

    @classmethod
    def failed(cls, component_id: str, error: BaseException, duration_ms: float = 0.0) -> 'ComponentInitResult':
        return cls(success=False, component_id=component_id, state=ComponentState.FAILED,
                   message=f'{type(error).__name__}: {error}', error=error, duration_ms=duration_ms)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'component_id': self.component_id,
            'state': self.state.value,
            'message': self.message,
            'error_type': type(self.error).__name__ if self.error is not None else None,
            'duration_ms': round(self.duration_ms, 3),
            'timestamp': self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        status = "✓" if self.success else "✗"
        return f"{status} {self.component_id}: {self.message} ({self.duration_ms:.1f}ms)"
