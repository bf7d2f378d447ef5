"""Lifecycle of the single in-flight catalog query behind the search input."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Sequence

from typeahead.config import SearchSettings
from typeahead.domain.models import RequestStatus, ResultSet, SearchRequest, SessionState
from typeahead.domain.ports import RawRecord, ResultsView, SearchProvider
from typeahead.logging import logger
from typeahead.services.exceptions import ProviderError
from typeahead.services.formatter import ResultFormatter

ErrorCallback = Callable[[ProviderError], Any]


class SearchSession:
    """Owns at most one pending provider request at a time.

    ``start`` supersedes whatever is in flight: the old request is cancelled
    and its outcome, should the transport still deliver one, is dropped by
    comparing it against the current request before anything is displayed.
    Provider errors go to ``on_error`` and never touch the displayed results.
    """

    def __init__(
        self,
        provider: SearchProvider,
        results_view: ResultsView,
        *,
        settings: SearchSettings | None = None,
        formatter: Callable[[Sequence[RawRecord]], ResultSet] | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self._provider = provider
        self._results_view = results_view
        self._settings = settings or SearchSettings()
        self._formatter = formatter or ResultFormatter(self._settings)
        self._on_error = on_error
        self._generation = 0
        self._current: SearchRequest | None = None

    @property
    def state(self) -> SessionState:
        if self._current is not None and self._current.is_pending:
            return SessionState.PENDING
        return SessionState.IDLE

    @property
    def current(self) -> SearchRequest | None:
        return self._current

    @property
    def min_term_length(self) -> int:
        return self._settings.min_term_length

    def start(self, term: str | None) -> SearchRequest | None:
        term = term or ""
        self._cancel_current()

        if len(term) < self._settings.min_term_length:
            logger.debug("search_term_too_short", length=len(term))
            self._results_view.empty()
            return None

        self._generation += 1
        request = SearchRequest(term=term, generation=self._generation)
        self._current = request
        request.task = asyncio.get_running_loop().create_task(self._run(request))
        logger.debug("search_started", term=term, generation=request.generation)
        return request

    def close(self) -> None:
        """Cancel the pending request, if any."""

        self._cancel_current()

    async def wait(self) -> None:
        """Wait until the current request's task has finished."""

        request = self._current
        if request is None or request.task is None:
            return
        await asyncio.gather(request.task, return_exceptions=True)

    def _cancel_current(self) -> None:
        request = self._current
        if request is None or not request.is_pending:
            return
        request.cancel()
        logger.debug("search_cancelled", term=request.term, generation=request.generation)

    async def _run(self, request: SearchRequest) -> None:
        try:
            records = await self._provider.search(request.term)
        except asyncio.CancelledError:
            if request.is_pending:
                request.status = RequestStatus.CANCELLED
            raise
        except Exception as exc:
            self._settle_error(request, exc)
            return
        self._settle_success(request, records)

    def _accepts(self, request: SearchRequest) -> bool:
        if request is self._current and request.is_pending:
            return True
        logger.debug(
            "stale_response_discarded",
            term=request.term,
            generation=request.generation,
            status=request.status.value,
        )
        return False

    def _settle_success(self, request: SearchRequest, records: Sequence[RawRecord]) -> None:
        if not self._accepts(request):
            return
        request.status = RequestStatus.SETTLED
        try:
            results = self._formatter(records)
        except Exception as exc:
            self._report(request, exc)
            return
        logger.debug(
            "search_settled",
            term=request.term,
            generation=request.generation,
            results=len(results),
        )
        try:
            self._results_view.set(results)
        except Exception:
            logger.exception(
                "search_results_render_failed",
                term=request.term,
                generation=request.generation,
            )

    def _settle_error(self, request: SearchRequest, exc: Exception) -> None:
        if not self._accepts(request):
            return
        request.status = RequestStatus.SETTLED
        self._report(request, exc)

    def _report(self, request: SearchRequest, exc: Exception) -> None:
        if isinstance(exc, ProviderError):
            error = exc
        else:
            error = ProviderError(f"Search for {request.term!r} failed: {exc}", term=request.term)
            error.__cause__ = exc
        logger.error(
            "search_failed",
            term=request.term,
            generation=request.generation,
            error=str(error),
            exception_type=exc.__class__.__name__,
        )
        if self._on_error is None:
            return
        try:
            self._on_error(error)
        except Exception:
            logger.exception("search_error_callback_failed", term=request.term)


__all__ = ["SearchSession"]
