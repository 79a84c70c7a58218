import httpx
import pytest

from caching_fetch.api import wipe_cache


@pytest.fixture(autouse=True)
def isolate_cache(monkeypatch):
    """Start every test with an empty process-wide cache and no env overrides."""
    monkeypatch.delenv("CACHING_FETCH_URL", raising=False)
    monkeypatch.delenv("CACHING_FETCH_TIMEOUT", raising=False)
    wipe_cache()
    yield
    wipe_cache()


@pytest.fixture
def people():
    return [
        {
            "first": "Ann",
            "last": "Lee",
            "email": "ann@example.com",
            "address": "1 Main St",
            "created": "2024-01-02T03:04:05Z",
            "balance": "$1,024.00",
        },
        {
            "first": "Zoë",
            "last": "Brandt",
            "email": "zoe@example.com",
            "address": "22 Elm Rd",
            "created": "2023-11-30T12:00:00Z",
            "balance": "$17.50",
        },
    ]


@pytest.fixture
def mock_network(monkeypatch):
    """Route the fetcher's httpx clients through a MockTransport handler."""
    real_client = httpx.AsyncClient

    def install(handler):
        transport = httpx.MockTransport(handler)

        def client_factory(*args, **kwargs):
            kwargs["transport"] = transport
            return real_client(*args, **kwargs)

        monkeypatch.setattr("caching_fetch.fetcher.httpx.AsyncClient", client_factory)

    return install
