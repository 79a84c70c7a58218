from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Annotated

from .errors import CachingFetchError
from .fetcher import FetchCoordinator, default_coordinator
from .people import Person

logger = logging.getLogger(__name__)


class FetchState(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    is_loading: Annotated[bool, Field(description="True while this consumer waits on a fetch")]
    data: Annotated[list[Any], Field(description="People currently held by the cache")]
    error: Annotated[
        Optional[Exception],
        Field(description="Failure of this consumer's own fetch, if any"),
    ] = None

    def to_dict(self) -> dict[str, Any]:
        return {"isLoading": self.is_loading, "data": self.data, "error": self.error}


class CachingFetchBinding:
    """Per-consumer view of the shared cache.

    Each binding owns its loading flag and error, while ``data`` follows the
    one shared slot: a change made through any binding, a hydration or a wipe
    is visible to every mounted binding.
    """

    def __init__(self, url: str, coordinator: FetchCoordinator | None = None):
        self.url = url
        self._coordinator = coordinator or default_coordinator
        store = self._coordinator.store
        self._preloaded = not store.is_empty()
        self._data: list[Person] = store.get()
        # Populated slot means the first render can happen without a loading state.
        self._is_loading = not self._preloaded
        self._error: Exception | None = None
        self._task: asyncio.Task[None] | None = None
        self._unsubscribe = None

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def data(self) -> list[Person]:
        return self._data

    @property
    def error(self) -> Exception | None:
        return self._error

    @property
    def mounted(self) -> bool:
        return self._unsubscribe is not None

    @property
    def state(self) -> FetchState:
        return FetchState(
            is_loading=self._is_loading, data=list(self._data), error=self._error
        )

    def mount(self) -> CachingFetchBinding:
        if self.mounted:
            return self
        loop = None if self._preloaded else asyncio.get_running_loop()
        self._unsubscribe = self._coordinator.store.subscribe(self._on_store_change)
        if loop is not None and self._task is None:
            self._task = loop.create_task(self._load())
        return self

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def wait(self) -> FetchState:
        """Wait for this binding's own fetch, if one was started, and return its state."""
        if self._task is not None:
            await self._task
        return self.state

    async def _load(self) -> None:
        try:
            people = await self._coordinator.fetch_or_reuse(self.url)
        except CachingFetchError as exc:
            logger.warning("Fetching %s failed: %s", self.url, exc)
            self._error = exc
        else:
            self._data = people
        finally:
            self._is_loading = False

    def _on_store_change(self, records: list[Person]) -> None:
        self._data = records


def use_caching_fetch(
    url: str, coordinator: FetchCoordinator | None = None
) -> CachingFetchBinding:
    return CachingFetchBinding(url, coordinator).mount()
