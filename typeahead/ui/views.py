"""Headless view models for the search input, result list and history list.

They hold what a renderer needs (items, visibility) and turn user
interactions into events. Rendering itself is left to ``render``
subscribers, e.g. the console printer in ``typeahead.main``.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence, Tuple

from typeahead.domain.models import HistoryEntry, ResultSet
from typeahead.logging import logger
from typeahead.utils.datetime import format_timestamp
from typeahead.utils.events import EventEmitter, Unsubscribe


class TermInput:
    """Raw, undebounced text input with focus state."""

    def __init__(self) -> None:
        self.value = ""
        self.focused = False
        self._events = EventEmitter()

    def on_change(self, handler: Callable[[str], Any]) -> Unsubscribe:
        return self._events.subscribe("change", handler)

    def on_focus_change(self, handler: Callable[[bool], Any]) -> Unsubscribe:
        return self._events.subscribe("focus", handler)

    def change(self, value: str) -> None:
        self.value = value
        self._events.emit("change", value)

    def focus(self) -> None:
        self.focused = True
        self._events.emit("focus", True)

    def blur(self) -> None:
        self.focused = False
        self._events.emit("focus", False)


class ResultsList:
    def __init__(self) -> None:
        self.items: ResultSet = ()
        self.visible = False
        self._events = EventEmitter()

    def set(self, results: ResultSet) -> None:
        self.items = tuple(results)
        self._events.emit("render", self)

    def empty(self) -> None:
        self.items = ()
        self._events.emit("render", self)

    def toggle(self, visible: bool) -> None:
        self.visible = bool(visible)
        self._events.emit("render", self)

    def on_select(self, handler: Callable[[str], Any]) -> Unsubscribe:
        return self._events.subscribe("select", handler)

    def on_render(self, handler: Callable[["ResultsList"], Any]) -> Unsubscribe:
        return self._events.subscribe("render", handler)

    def select(self, title: str) -> bool:
        """Select a displayed result; titles not on screen are ignored."""

        if title not in self.items:
            logger.debug("result_selection_ignored", title=title)
            return False
        self._events.emit("select", title)
        return True

    def select_index(self, index: int) -> bool:
        if not 0 <= index < len(self.items):
            logger.debug("result_selection_ignored", index=index)
            return False
        return self.select(self.items[index])


class HistoryList:
    def __init__(self) -> None:
        self.entries: Tuple[HistoryEntry, ...] = ()
        self.visible = False
        self._events = EventEmitter()

    def refresh(self, entries: Sequence[HistoryEntry]) -> None:
        self.entries = tuple(entries)
        self._events.emit("render", self)

    def toggle(self, visible: bool) -> None:
        self.visible = bool(visible)
        self._events.emit("render", self)

    def on_remove(self, handler: Callable[[str], Any]) -> Unsubscribe:
        return self._events.subscribe("remove", handler)

    def on_reuse(self, handler: Callable[[str], Any]) -> Unsubscribe:
        return self._events.subscribe("reuse", handler)

    def on_render(self, handler: Callable[["HistoryList"], Any]) -> Unsubscribe:
        return self._events.subscribe("render", handler)

    def request_remove(self, title: str) -> None:
        self._events.emit("remove", title)

    def request_reuse(self, title: str) -> None:
        self._events.emit("reuse", title)

    def lines(self) -> list[str]:
        return [f"{entry.title} ({format_timestamp(entry.created_at)})" for entry in self.entries]


__all__ = ["HistoryList", "ResultsList", "TermInput"]
