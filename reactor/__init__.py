# reactor/__init__.py
from __future__ import annotations

from .dispatch_router import DispatchRouter

__all__: list[str] = ["DispatchRouter"]
