"""Minimal synchronous observer used by the store and view models."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable, Dict, List

from typeahead.logging import logger

Handler = Callable[..., Any]
Unsubscribe = Callable[[], None]


class EventEmitter:
    """Map of event kind to handlers, called in subscription order.

    A handler that raises is logged and skipped so one faulty subscriber
    cannot stop the others from seeing the event.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[Handler]] = defaultdict(list)

    def subscribe(self, kind: str, handler: Handler) -> Unsubscribe:
        self._handlers[kind].append(handler)

        def unsubscribe() -> None:
            handlers = self._handlers.get(kind)
            if handlers and handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def emit(self, kind: str, *args: Any) -> None:
        # Copy so handlers may unsubscribe while being notified.
        for handler in list(self._handlers.get(kind, ())):
            try:
                handler(*args)
            except Exception:
                logger.exception("event_handler_failed", event_kind=kind)

    def handler_count(self, kind: str) -> int:
        return len(self._handlers.get(kind, ()))


__all__ = ["EventEmitter", "Handler", "Unsubscribe"]
