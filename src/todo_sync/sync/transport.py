# src/todo_sync/sync/transport.py

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.models import Entry, entries_from_payload, entries_to_payload
from ..errors import PullFailure, PushFailure

logger = logging.getLogger(__name__)

TASKS_PATH = "/tasks"


def _make_timeout(timeout_s: float) -> httpx.Timeout:
    t = max(0.5, float(timeout_s))
    return httpx.Timeout(connect=min(t, 5.0), read=t, write=t, pool=t)


class HttpTransport:
    """
    GET/POST of the whole entries list against `{base_url}/tasks`.

    No retries: the sync controller treats every failure as final.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = base_url.rstrip("/") + TASKS_PATH
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=_make_timeout(timeout_seconds))

    @property
    def url(self) -> str:
        return self._url

    async def fetch_entries(self) -> list[Entry]:
        try:
            resp = await self._client.get(self._url, headers={"Accept": "application/json"})
        except httpx.HTTPError as e:
            raise PullFailure(f"GET {self._url} failed: {e.__class__.__name__}") from e

        if not resp.is_success:
            raise PullFailure(f"GET {self._url} returned {resp.status_code}", status_code=resp.status_code)

        try:
            data: Any = resp.json()
            return entries_from_payload(data)
        except ValueError as e:
            raise PullFailure(
                f"GET {self._url} returned an undecodable body", status_code=resp.status_code
            ) from e

    async def push_entries(self, entries: list[Entry]) -> None:
        payload = entries_to_payload(entries)
        try:
            resp = await self._client.post(
                self._url,
                json=payload,
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            raise PushFailure(f"POST {self._url} failed: {e.__class__.__name__}") from e

        if not resp.is_success:
            raise PushFailure(f"POST {self._url} returned {resp.status_code}", status_code=resp.status_code)

        logger.debug("Pushed %d entries to %s status=%s", len(payload), self._url, resp.status_code)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
