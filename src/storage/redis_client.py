"""Redis client used for the session denylist, plus its health check."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional, Tuple

from redis import Redis
from redis.exceptions import RedisError

from src.core.config import get_settings


@lru_cache(maxsize=1)
def get_client() -> Redis:
    settings = get_settings()
    # Every page checks the denylist, so a dead Redis must fail fast.
    return Redis.from_url(
        settings.redis_url,
        decode_responses=True,
        socket_timeout=settings.redis_socket_timeout_seconds,
        socket_connect_timeout=settings.redis_socket_timeout_seconds,
    )


def test_connection() -> Tuple[bool, Optional[str]]:
    try:
        get_client().ping()
    except RedisError as exc:
        return False, str(exc)
    return True, None
