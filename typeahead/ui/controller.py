"""Wire the input, search session, result list and history together."""

from __future__ import annotations

from typing import List, Tuple

from typeahead.config import TypeaheadSettings, get_settings
from typeahead.domain.models import HistoryEntry
from typeahead.domain.ports import HistoryView, InputSource, ResultsView, SearchProvider, Unsubscribe
from typeahead.logging import logger
from typeahead.services.debounce import Debouncer
from typeahead.services.history import CHANGED, HistoryStore
from typeahead.services.session import ErrorCallback, SearchSession
from typeahead.ui.views import HistoryList, ResultsList, TermInput


class TypeaheadWidget:
    """Top-level wiring of one search box.

    - input changes are debounced into ``SearchSession.start``
    - input focus shows or hides the result list
    - selecting a result adds it to the history
    - history changes refresh the history view, hidden while empty
    - history "reuse" clicks search for that title again, skipping the debounce
    """

    def __init__(
        self,
        provider: SearchProvider,
        *,
        settings: TypeaheadSettings | None = None,
        input_source: InputSource | None = None,
        results_view: ResultsView | None = None,
        history_view: HistoryView | None = None,
        history: HistoryStore | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.input = input_source if input_source is not None else TermInput()
        self.results = results_view if results_view is not None else ResultsList()
        self.history_view = history_view if history_view is not None else HistoryList()
        self.history = history if history is not None else HistoryStore()
        self.session = SearchSession(
            provider,
            self.results,
            settings=self.settings.search,
            on_error=on_error,
        )
        self.debouncer = Debouncer(self.session.start, self.settings.search.debounce_ms)
        self._subscriptions: List[Unsubscribe] = [
            self.input.on_change(self.debouncer),
            self.input.on_focus_change(self.results.toggle),
            self.results.on_select(self.history.add),
            self.history.subscribe(CHANGED, self._sync_history),
            self.history_view.on_remove(self.history.remove),
            self.history_view.on_reuse(self._reuse),
        ]
        self._sync_history(self.history.list())

    def close(self) -> None:
        self.debouncer.cancel()
        self.session.close()
        while self._subscriptions:
            self._subscriptions.pop()()

    def _sync_history(self, entries: Tuple[HistoryEntry, ...]) -> None:
        self.history_view.refresh(entries)
        self.history_view.toggle(len(entries) > 0)

    def _reuse(self, title: str) -> None:
        logger.debug("history_entry_reused", title=title)
        self.debouncer.cancel()
        self.input.value = title
        self.session.start(title)


__all__ = ["TypeaheadWidget"]
