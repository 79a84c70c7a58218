"""Module-level entry points backed by the process-wide cache slot.

A server process calls ``preload_caching_fetch`` before rendering, then
``serialize_cache`` to embed the cache in its output. The client process calls
``initialize_cache`` with that text before its consumers bind, so
``fetch_or_reuse`` and ``use_caching_fetch`` are served without a request.
"""

from __future__ import annotations

import logging

from .binding import CachingFetchBinding, use_caching_fetch
from .fetcher import default_coordinator
from .people import Person

logger = logging.getLogger(__name__)

__all__ = [
    "fetch_or_reuse",
    "initialize_cache",
    "preload",
    "preload_caching_fetch",
    "serialize_cache",
    "use_caching_fetch",
    "wipe_cache",
    "CachingFetchBinding",
]


async def fetch_or_reuse(url: str) -> list[Person]:
    return await default_coordinator.fetch_or_reuse(url)


async def preload_caching_fetch(url: str) -> None:
    logger.info("Preloading cache from %s", url)
    await default_coordinator.preload(url)


preload = preload_caching_fetch


def serialize_cache() -> str:
    return default_coordinator.store.serialize()


def initialize_cache(serialized_cache: str) -> None:
    default_coordinator.store.deserialize(serialized_cache)
    logger.info("Cache initialized with %d people", len(default_coordinator.store))


def wipe_cache() -> None:
    default_coordinator.store.clear()
    logger.info("Cache wiped")
