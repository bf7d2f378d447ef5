"""Collaborator interfaces consumed or driven by the search core."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Mapping, Protocol, Sequence

from typeahead.domain.models import HistoryEntry, ResultSet

RawRecord = Mapping[str, Any]
Unsubscribe = Callable[[], None]


class SearchProvider(Protocol):
    """Answers a search term with raw catalog records.

    The session runs each call inside its own task; cancelling that task is
    the transport cancellation signal.
    """

    def search(self, term: str) -> Awaitable[Sequence[RawRecord]]: ...


class InputSource(Protocol):
    value: str

    def on_change(self, handler: Callable[[str], Any]) -> Unsubscribe: ...

    def on_focus_change(self, handler: Callable[[bool], Any]) -> Unsubscribe: ...


class ResultsView(Protocol):
    def set(self, results: ResultSet) -> None: ...

    def empty(self) -> None: ...

    def toggle(self, visible: bool) -> None: ...

    def on_select(self, handler: Callable[[str], Any]) -> Unsubscribe: ...


class HistoryView(Protocol):
    def refresh(self, entries: Sequence[HistoryEntry]) -> None: ...

    def toggle(self, visible: bool) -> None: ...

    def on_remove(self, handler: Callable[[str], Any]) -> Unsubscribe: ...

    def on_reuse(self, handler: Callable[[str], Any]) -> Unsubscribe: ...


__all__ = [
    "HistoryView",
    "InputSource",
    "RawRecord",
    "ResultsView",
    "SearchProvider",
    "Unsubscribe",
]
