"""
Single-fire readiness notification.

A ``ReadinessSignal`` is owned by one component and fires exactly once, either
as *ready* or as *failed*. Any number of coroutines may wait on it before,
during or after the transition; each waiter is released exactly once.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from bootstrap.bootstrap_helper._exceptions import DependencyFailedError, DependencyTimeoutError

logger = logging.getLogger(__name__)


class ReadinessSignal:
    def __init__(self, component_id: str) -> None:
        self.component_id = component_id
        self._event = asyncio.Event()
        self._error: Optional[BaseException] = None

    @property
    def is_fired(self) -> bool:
        return self._event.is_set()

    @property
    def is_ready(self) -> bool:
        return self._event.is_set() and self._error is None

    @property
    def error(self) -> Optional[BaseException]:
        return self._error

    def fire(self) -> None:
        if self._event.is_set():
            logger.warning("Readiness of '%s' already signalled; ignoring second fire()", self.component_id)
            return
        self._event.set()

    def fail(self, error: BaseException) -> None:
        if self._event.is_set():
            logger.warning("Readiness of '%s' already signalled; ignoring fail(%r)", self.component_id, error)
            return
        self._error = error
        self._event.set()

    async def wait(self, timeout: Optional[float] = None, *, waiter_id: Optional[str] = None) -> None:
        """
        Wait until the signal fires.

        Returns immediately when already ready. Raises ``DependencyFailedError``
        when the owner failed, and ``DependencyTimeoutError`` when ``timeout``
        seconds elapse first.
        """
        if not self._event.is_set():
            if timeout is None:
                await self._event.wait()
            else:
                try:
                    await asyncio.wait_for(self._event.wait(), timeout)
                except asyncio.TimeoutError as exc:
                    raise DependencyTimeoutError(
                        f"Timed out after {timeout:.2f}s waiting for '{self.component_id}' to be ready",
                        component_id=waiter_id,
                        dependency_id=self.component_id,
                    ) from exc
        if self._error is not None:
            raise DependencyFailedError(
                f"Dependency '{self.component_id}' failed to initialize: {self._error}",
                component_id=waiter_id,
                dependency_id=self.component_id,
            ) from self._error

    def __repr__(self) -> str:
        state = 'failed' if self._error is not None else ('ready' if self._event.is_set() else 'pending')
        return f'ReadinessSignal({self.component_id!r}, {state})'
