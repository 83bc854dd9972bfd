"""Redis-backed denylist for signed-out access tokens."""

from __future__ import annotations

import time

from redis import Redis

from src.storage.redis_client import get_client


REVOKED_KEY_PREFIX = "auth:revoked:"


class TokenRevocationStore:
    def __init__(self, client: Redis) -> None:
        self._client = client

    @staticmethod
    def _key(token_id: str) -> str:
        return f"{REVOKED_KEY_PREFIX}{token_id}"

    def revoke(self, token_id: str, *, expires_at: int) -> None:
        # Entries only need to outlive the token itself.
        ttl = max(int(expires_at - time.time()), 1)
        self._client.set(self._key(token_id), "1", ex=ttl)

    def is_revoked(self, token_id: str) -> bool:
        return bool(self._client.exists(self._key(token_id)))


def get_revocation_store() -> TokenRevocationStore:
    return TokenRevocationStore(get_client())
