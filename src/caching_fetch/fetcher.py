from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import httpx

from .cache import CacheStore, default_store
from .config import Config, resolve_timeout
from .errors import InvalidJsonError, MalformedResponseError, TransportError
from .people import Person, filter_people
from .stream import decode_full

logger = logging.getLogger(__name__)


class FetchCoordinator:
    """Fetch-or-reuse front end for the single cache slot.

    Concurrent callers that find the slot empty share one network request:
    the first caller starts it and every later caller awaits the same task
    until it settles. The in-flight handle belongs to the slot, not to a URL.
    """

    def __init__(
        self,
        store: CacheStore | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
        config: Config | None = None,
    ):
        self._store = store if store is not None else default_store
        self._transport = transport
        self._timeout = timeout
        self._config = config
        self._in_flight: asyncio.Task[list[Person]] | None = None
        self._last_response_source: str = "uninitialized"

    @property
    def store(self) -> CacheStore:
        return self._store

    @property
    def last_response_source(self) -> str:
        return self._last_response_source

    @property
    def in_flight(self) -> bool:
        return self._in_flight is not None

    async def fetch_or_reuse(self, url: str) -> list[Person]:
        if not self._store.is_empty():
            logger.debug("Serving %d cached people for %s", len(self._store), url)
            self._last_response_source = "cache"
            return self._store.get()

        task = self._in_flight
        if task is None:
            task = asyncio.get_running_loop().create_task(self._fetch(url))
            self._in_flight = task
            task.add_done_callback(_retrieve_exception)
            self._last_response_source = "network"
        else:
            logger.debug("Joining in-flight fetch for %s", url)
            self._last_response_source = "coalesced"

        # One waiter being cancelled must not abort the fetch for the others.
        return list(await asyncio.shield(task))

    async def preload(self, url: str) -> None:
        await self.fetch_or_reuse(url)

    async def _fetch(self, url: str) -> list[Person]:
        try:
            text = await self._read_body(url)
            people = filter_people(self._parse(text, url))
            self._store.replace(people)
            logger.info("Cached %d people from %s", len(people), url)
            return people
        finally:
            self._in_flight = None

    async def _read_body(self, url: str) -> str:
        try:
            timeout = resolve_timeout(self._timeout, self._config)
        except ValueError as exc:
            raise TransportError(f"Cannot fetch {url}: {exc}") from exc

        async with httpx.AsyncClient(transport=self._transport, timeout=timeout) as client:
            try:
                async with client.stream("GET", url) as response:
                    try:
                        response.raise_for_status()
                    except httpx.HTTPStatusError as e:
                        raise TransportError(
                            f"Error fetching {url}: {e.response.status_code}"
                        ) from e
                    text = await decode_full(response.aiter_bytes())
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                raise TransportError(f"No response received from {url}: {exc}") from exc

        if not text.strip():
            raise TransportError(f"Response from {url} carried no body")
        return text

    @staticmethod
    def _parse(text: str, url: str) -> list[Any]:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise InvalidJsonError(f"Response from {url} is not valid JSON: {exc}") from exc
        if not isinstance(payload, list):
            raise MalformedResponseError(
                f"Response from {url} is not in the proper format (array), "
                f"got {type(payload).__name__}"
            )
        return payload


def _retrieve_exception(task: asyncio.Task) -> None:
    # Marks the failure as retrieved even when every waiter was cancelled.
    if not task.cancelled():
        task.exception()


default_coordinator = FetchCoordinator()
