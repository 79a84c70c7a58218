from __future__ import annotations

import json
import logging
from typing import Any, Callable, Iterable, Protocol, runtime_checkable

from .errors import InvalidJsonError, MalformedResponseError
from .people import Person

logger = logging.getLogger(__name__)


@runtime_checkable
class CacheListener(Protocol):
    """Callback notified with the slot contents after every change."""

    def __call__(self, records: list[Person]) -> None: ...


class CacheStore:
    """Process-wide single slot holding the current list of people.

    The slot is not keyed by URL: whatever was stored first is served to every
    caller until it is cleared.
    """

    def __init__(self, records: Iterable[Person] = ()):
        self._records: tuple[Any, ...] = tuple(records)
        self._listeners: list[CacheListener] = []

    def get(self) -> list[Person]:
        return list(self._records)

    def is_empty(self) -> bool:
        return not self._records

    def replace(self, records: Iterable[Person]) -> None:
        """Swap the whole slot for ``records`` in one step."""
        self._swap(tuple(records))

    def clear(self) -> None:
        self._swap(())

    def serialize(self) -> str:
        return json.dumps(list(self._records), separators=(",", ":"), ensure_ascii=False)

    def deserialize(self, text: str) -> None:
        """Install a serialized slot verbatim; entries are not re-validated."""
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise InvalidJsonError(f"Serialized cache is not valid JSON: {exc}") from exc
        if not isinstance(payload, list):
            raise MalformedResponseError(
                f"Serialized cache must be a JSON array, got {type(payload).__name__}"
            )
        self._swap(tuple(payload))

    def subscribe(self, listener: CacheListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _swap(self, records: tuple[Any, ...]) -> None:
        self._records = records
        for listener in list(self._listeners):
            try:
                listener(list(records))
            except Exception:
                logger.exception("Cache listener %r failed", listener)

    def __len__(self) -> int:
        return len(self._records)


default_store = CacheStore()
