"""Debounce primitive built on the running asyncio loop."""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable, Set

from typeahead.logging import logger


class Debouncer:
    """Collapse bursts of calls into one delayed call with the latest arguments.

    Every call replaces the scheduled invocation, so only the last call of a
    burst reaches ``action`` once ``delay_ms`` has passed without another
    call. Coroutine results are run as tasks; nothing is returned to callers.
    """

    def __init__(
        self,
        action: Callable[..., Any],
        delay_ms: int,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms must not be negative")
        self._action = action
        self.delay_ms = delay_ms
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        loop = self._loop or asyncio.get_running_loop()
        self.cancel()
        self._handle = loop.call_later(self.delay_ms / 1000, self._fire, args, kwargs)

    def cancel(self) -> None:
        """Drop the scheduled invocation, if any."""

        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, args: tuple, kwargs: dict) -> None:
        self._handle = None
        try:
            result = self._action(*args, **kwargs)
        except Exception:
            logger.exception("debounced_action_failed", action=_action_name(self._action))
            return

        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "debounced_action_failed",
                action=_action_name(self._action),
                error=str(exc),
                exception_type=exc.__class__.__name__,
            )


def debounce(action: Callable[..., Any], delay_ms: int) -> Debouncer:
    """Wrap ``action`` so bursts of calls run it once, ``delay_ms`` after the last."""

    return Debouncer(action, delay_ms)


def _action_name(action: Callable[..., Any]) -> str:
    return getattr(action, "__qualname__", None) or repr(action)


__all__ = ["Debouncer", "debounce"]
