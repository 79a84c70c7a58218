from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Config:
    people_url_default: str = "https://randomapi.com/api/people"
    people_url_env: str = "CACHING_FETCH_URL"
    request_timeout_default: float | None = None
    request_timeout_env: str = "CACHING_FETCH_TIMEOUT"


def resolve_url(url: str | None = None, config: Config | None = None) -> str:
    cfg = config or Config()
    return url or os.environ.get(cfg.people_url_env, cfg.people_url_default)


def resolve_timeout(
    timeout: float | None = None, config: Config | None = None
) -> float | None:
    """Return the request timeout in seconds, or None for no timeout."""
    if timeout is not None:
        return timeout
    cfg = config or Config()
    raw = os.environ.get(cfg.request_timeout_env)
    if raw is None or not raw.strip():
        return cfg.request_timeout_default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(
            f"{cfg.request_timeout_env} must be a number of seconds, got {raw!r}"
        ) from exc
    if value <= 0:
        raise ValueError(f"{cfg.request_timeout_env} must be positive, got {value}")
    return value
