"""Turn raw catalog records into the bounded list shown under the input."""

from __future__ import annotations

from itertools import islice
from typing import Any, Iterable, Mapping

from typeahead.config import SearchSettings
from typeahead.domain.models import ResultSet

SEPARATOR = " - "


def format_record(record: Mapping[str, Any], primary_field: str, secondary_field: str) -> str:
    primary = record.get(primary_field)
    secondary = record.get(secondary_field)
    return f"{'' if primary is None else primary}{SEPARATOR}{'' if secondary is None else secondary}"


def format_results(
    records: Iterable[Mapping[str, Any]],
    max_results: int,
    *,
    primary_field: str = "artistName",
    secondary_field: str = "trackName",
) -> ResultSet:
    """Render the first ``max_results`` records in provider order.

    The input is only iterated, never modified; fewer records than the cap
    simply yield a shorter tuple.
    """

    if max_results < 0:
        raise ValueError("max_results must not be negative")
    return tuple(
        format_record(record, primary_field, secondary_field)
        for record in islice(records, max_results)
    )


class ResultFormatter:
    """``format_results`` bound to the configured fields and cap."""

    def __init__(self, settings: SearchSettings | None = None) -> None:
        self._settings = settings or SearchSettings()

    @property
    def max_results(self) -> int:
        return self._settings.max_results

    def __call__(self, records: Iterable[Mapping[str, Any]]) -> ResultSet:
        return format_results(
            records,
            self._settings.max_results,
            primary_field=self._settings.primary_field,
            secondary_field=self._settings.secondary_field,
        )


__all__ = ["ResultFormatter", "format_record", "format_results"]
