"""iTunes Search API provider."""

from __future__ import annotations

from typing import Any

import httpx

from typeahead.config import ProviderSettings
from typeahead.logging import logger
from typeahead.services.exceptions import ProviderError
from typeahead.utils.retry import retry_async


class ITunesSearchProvider:
    """Look up music tracks by free-text term.

    Only transport errors and 5xx responses are retried; the caller cancels
    an in-flight lookup by cancelling the task awaiting ``search``.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: ProviderSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or ProviderSettings()

    @property
    def search_url(self) -> str:
        return f"{str(self._settings.base_url).rstrip('/')}/search"

    async def search(self, term: str) -> list[dict[str, Any]]:
        params = {
            "term": term,
            "media": self._settings.media,
            "entity": self._settings.entity,
        }

        async def _request():
            response = await self._client.get(
                self.search_url,
                params=params,
                timeout=self._settings.request_timeout_seconds,
            )
            if response.status_code >= 500:
                response.raise_for_status()
            return response

        try:
            response = await retry_async(
                _request,
                max_attempts=self._settings.max_attempts,
                base_delay=self._settings.retry_base_delay,
                retry_on=(httpx.RequestError, httpx.HTTPStatusError),
                logger=logger,
                operation_name="itunes_search",
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            detail = exc.response.text[:500] if exc.response is not None else str(exc)
            status_code = exc.response.status_code if exc.response is not None else "unknown"
            raise ProviderError(
                f"iTunes search failed ({status_code}): {detail}", term=term
            ) from exc
        except httpx.RequestError as exc:
            raise ProviderError(f"iTunes search failed: {exc}", term=term) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderError("iTunes returned a non-JSON response.", term=term) from exc

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            raise ProviderError("iTunes response is missing 'results'.", term=term)
        return [item for item in results if isinstance(item, dict)]


__all__ = ["ITunesSearchProvider"]
