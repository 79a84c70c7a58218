from __future__ import annotations


class CachingFetchError(RuntimeError):
    """Base class for failures of a single fetch attempt or cache handoff."""


class TransportError(CachingFetchError):
    """No usable response body could be obtained from the network."""


class MalformedResponseError(CachingFetchError):
    """The decoded payload is not a JSON array."""


class InvalidJsonError(MalformedResponseError):
    """The decoded payload is not JSON at all."""
