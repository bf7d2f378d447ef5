"""Search session supersession, stale-response and error handling."""

from __future__ import annotations

import asyncio

import pytest

from typeahead.config import SearchSettings
from typeahead.domain.models import RequestStatus, SessionState
from typeahead.services import session as session_module
from typeahead.services.exceptions import ProviderError
from typeahead.services.session import SearchSession

from conftest import tracks


def _session(provider, view, **kwargs) -> SearchSession:
    return SearchSession(provider, view, settings=SearchSettings(), **kwargs)


@pytest.mark.asyncio
@pytest.mark.parametrize("term", ["", "a", "ab", None])
async def test_short_terms_clear_results_without_provider(provider, results_view, term):
    session = _session(provider, results_view)

    assert session.start(term) is None
    await asyncio.sleep(0)

    assert provider.calls == []
    assert results_view.calls == [("empty", None)]
    assert session.state is SessionState.IDLE


@pytest.mark.asyncio
async def test_successful_search_displays_formatted_results(provider, results_view):
    session = _session(provider, results_view)

    request = session.start("abc")
    assert session.state is SessionState.PENDING
    await asyncio.sleep(0)
    provider.resolve(0, tracks(7))
    await session.wait()

    assert provider.calls == ["abc"]
    assert results_view.items == ("A - T1", "A - T2", "A - T3", "A - T4", "A - T5")
    assert request.status is RequestStatus.SETTLED
    assert session.state is SessionState.IDLE


@pytest.mark.asyncio
async def test_new_start_cancels_previous_request(provider, results_view):
    session = _session(provider, results_view)

    first = session.start("abc")
    await asyncio.sleep(0)
    second = session.start("abcd")

    assert first.status is RequestStatus.CANCELLED
    assert second.status is RequestStatus.PENDING
    assert second.generation == first.generation + 1
    assert session.current is second

    await asyncio.sleep(0)
    assert first.task.cancelled()
    assert provider.futures[0].cancelled()

    provider.resolve(1, tracks(1, artist="B"))
    await session.wait()
    assert results_view.items == ("B - T1",)


@pytest.mark.asyncio
async def test_late_response_from_superseded_request_is_discarded(
    stubborn_provider, results_view, monkeypatch, recording_logger
):
    monkeypatch.setattr(session_module, "logger", recording_logger)
    session = _session(stubborn_provider, results_view)

    stale = session.start("abc")
    await asyncio.sleep(0)
    session.start("abcd")
    await asyncio.sleep(0)

    stubborn_provider.resolve(1, tracks(2, artist="New"))
    await session.wait()
    stubborn_provider.resolve(0, tracks(2, artist="Old"))
    await asyncio.gather(stale.task, return_exceptions=True)

    assert stubborn_provider.cancel_signals == 1
    assert results_view.items == ("New - T1", "New - T2")
    assert [call for call, _ in results_view.calls] == ["set"]
    assert stale.status is RequestStatus.CANCELLED
    assert "stale_response_discarded" in recording_logger.events("debug")


@pytest.mark.asyncio
async def test_short_term_cancels_pending_request(stubborn_provider, results_view):
    session = _session(stubborn_provider, results_view)

    pending = session.start("abc")
    await asyncio.sleep(0)
    session.start("ab")

    assert pending.status is RequestStatus.CANCELLED
    assert session.state is SessionState.IDLE
    assert stubborn_provider.calls == ["abc"]

    stubborn_provider.resolve(0, tracks(3))
    await asyncio.gather(pending.task, return_exceptions=True)
    assert results_view.calls == [("empty", None)]


@pytest.mark.asyncio
async def test_provider_error_keeps_displayed_results(provider, results_view):
    errors: list[ProviderError] = []
    session = _session(provider, results_view, on_error=errors.append)

    session.start("abc")
    await asyncio.sleep(0)
    provider.resolve(0, tracks(2))
    await session.wait()

    failing = session.start("abcd")
    await asyncio.sleep(0)
    provider.fail(1, RuntimeError("offline"))
    await session.wait()

    assert results_view.items == ("A - T1", "A - T2")
    assert [call for call, _ in results_view.calls] == ["set"]
    assert len(errors) == 1
    assert errors[0].term == "abcd"
    assert isinstance(errors[0].__cause__, RuntimeError)
    assert failing.status is RequestStatus.SETTLED


@pytest.mark.asyncio
async def test_provider_error_instance_is_forwarded_as_is(provider, results_view):
    errors: list[ProviderError] = []
    session = _session(provider, results_view, on_error=errors.append)
    original = ProviderError("catalog down", term="abc")

    session.start("abc")
    await asyncio.sleep(0)
    provider.fail(0, original)
    await session.wait()

    assert errors == [original]


@pytest.mark.asyncio
async def test_error_for_superseded_request_is_ignored(stubborn_provider, results_view):
    errors: list[ProviderError] = []
    session = _session(stubborn_provider, results_view, on_error=errors.append)

    stale = session.start("abc")
    await asyncio.sleep(0)
    session.start("abcd")
    await asyncio.sleep(0)

    stubborn_provider.fail(0, RuntimeError("late failure"))
    await asyncio.gather(stale.task, return_exceptions=True)

    assert errors == []
    assert results_view.calls == []
    assert session.state is SessionState.PENDING
    session.close()
    await session.wait()


@pytest.mark.asyncio
async def test_failing_error_callback_does_not_escape(provider, results_view, monkeypatch, recording_logger):
    monkeypatch.setattr(session_module, "logger", recording_logger)

    def on_error(error: ProviderError) -> None:
        raise RuntimeError("handler bug")

    session = _session(provider, results_view, on_error=on_error)
    request = session.start("abc")
    await asyncio.sleep(0)
    provider.fail(0, RuntimeError("offline"))
    await session.wait()

    assert request.task.exception() is None
    assert recording_logger.events("exception") == ["search_error_callback_failed"]


@pytest.mark.asyncio
async def test_malformed_records_are_reported_as_errors(provider, results_view):
    errors: list[ProviderError] = []
    session = _session(provider, results_view, on_error=errors.append)

    session.start("abc")
    await asyncio.sleep(0)
    provider.resolve(0, [42])
    await session.wait()

    assert len(errors) == 1
    assert results_view.calls == []


@pytest.mark.asyncio
async def test_close_cancels_pending_request(provider, results_view):
    session = _session(provider, results_view)

    request = session.start("abc")
    await asyncio.sleep(0)
    session.close()
    await session.wait()

    assert request.status is RequestStatus.CANCELLED
    assert session.state is SessionState.IDLE
    assert results_view.calls == []


@pytest.mark.asyncio
async def test_only_one_request_is_pending_at_a_time(provider, results_view):
    session = _session(provider, results_view)

    requests = [session.start(term) for term in ("abc", "abcd", "abcde")]
    await asyncio.sleep(0)

    assert [r.status for r in requests] == [
        RequestStatus.CANCELLED,
        RequestStatus.CANCELLED,
        RequestStatus.PENDING,
    ]
    assert [r.generation for r in requests] == [1, 2, 3]
    session.close()
    await session.wait()


@pytest.mark.asyncio
async def test_failing_results_view_does_not_escape(provider, results_view, monkeypatch, recording_logger):
    monkeypatch.setattr(session_module, "logger", recording_logger)

    def broken_set(results) -> None:
        raise RuntimeError("render bug")

    monkeypatch.setattr(results_view, "set", broken_set)
    session = _session(provider, results_view)

    request = session.start("abc")
    await asyncio.sleep(0)
    provider.resolve(0, tracks(2))
    await session.wait()

    assert request.task.exception() is None
    assert request.status is RequestStatus.SETTLED
    assert recording_logger.events("exception") == ["search_results_render_failed"]
