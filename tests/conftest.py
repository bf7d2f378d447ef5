"""Shared pytest fixtures and fakes for the search core tests."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest


class RecordingLogger:
    """Stand-in for the structlog logger that keeps every call."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict[str, Any]]] = []

    def _record(self, level: str):
        def log(event: str, **kwargs: Any) -> None:
            self.records.append((level, event, kwargs))

        return log

    def __getattr__(self, level: str):
        if level in {"debug", "info", "warning", "error", "exception"}:
            return self._record(level)
        raise AttributeError(level)

    def events(self, level: str | None = None) -> list[str]:
        return [event for lvl, event, _ in self.records if level is None or lvl == level]


class FakeProvider:
    """Provider whose answers are released by the test."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.futures: list[asyncio.Future] = []

    async def search(self, term: str):
        self.calls.append(term)
        future = asyncio.get_running_loop().create_future()
        self.futures.append(future)
        return await future

    def resolve(self, index: int, records) -> None:
        if not self.futures[index].done():
            self.futures[index].set_result(records)

    def fail(self, index: int, exc: Exception) -> None:
        if not self.futures[index].done():
            self.futures[index].set_exception(exc)


class StubbornProvider(FakeProvider):
    """Transport that ignores cancellation and delivers late anyway."""

    def __init__(self) -> None:
        super().__init__()
        self.cancel_signals = 0

    async def search(self, term: str):
        self.calls.append(term)
        future = asyncio.get_running_loop().create_future()
        self.futures.append(future)
        while True:
            try:
                return await asyncio.shield(future)
            except asyncio.CancelledError:
                self.cancel_signals += 1


class RecordingResultsView:
    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.items: tuple[str, ...] = ()
        self.visible = False

    def set(self, results) -> None:
        self.items = tuple(results)
        self.calls.append(("set", self.items))

    def empty(self) -> None:
        self.items = ()
        self.calls.append(("empty", None))

    def toggle(self, visible: bool) -> None:
        self.visible = visible
        self.calls.append(("toggle", visible))

    def on_select(self, handler):
        return lambda: None


def tracks(count: int, artist: str = "A") -> list[dict[str, str]]:
    return [{"artistName": artist, "trackName": f"T{i}"} for i in range(1, count + 1)]


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def stubborn_provider() -> StubbornProvider:
    return StubbornProvider()


@pytest.fixture
def results_view() -> RecordingResultsView:
    return RecordingResultsView()


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()
