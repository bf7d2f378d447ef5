"""Title-unique selection history kept in insertion order."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Dict, Tuple

from typeahead.domain.models import HistoryEntry
from typeahead.logging import logger
from typeahead.utils.datetime import utc_now
from typeahead.utils.events import EventEmitter, Unsubscribe

CHANGED = "changed"


class HistoryStore:
    """Ordered set of selected titles.

    Re-adding a title is rejected rather than promoted: the existing entry
    keeps both its position and its timestamp. Subscribers to ``changed``
    receive the new entry tuple after every mutating ``add``/``remove``.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._clock = clock
        # dicts keep insertion order, which doubles as the display order.
        self._entries: Dict[str, HistoryEntry] = {}
        self._events = EventEmitter()

    def add(self, title: str) -> HistoryEntry | None:
        if title in self._entries:
            logger.warning("history_duplicate_rejected", title=title)
            return None

        entry = HistoryEntry(title=title, created_at=self._clock())
        self._entries[title] = entry
        logger.debug("history_entry_added", title=title, size=len(self._entries))
        self._events.emit(CHANGED, self.list())
        return entry

    def remove(self, title: str) -> None:
        if self._entries.pop(title, None) is None:
            return
        logger.debug("history_entry_removed", title=title, size=len(self._entries))
        self._events.emit(CHANGED, self.list())

    def list(self) -> Tuple[HistoryEntry, ...]:
        return tuple(self._entries.values())

    def subscribe(
        self, kind: str, handler: Callable[[Tuple[HistoryEntry, ...]], object]
    ) -> Unsubscribe:
        if kind != CHANGED:
            raise ValueError(f"Unknown history event: {kind}")
        return self._events.subscribe(kind, handler)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, title: object) -> bool:
        return title in self._entries


__all__ = ["CHANGED", "HistoryStore"]
