"""Password hashing for user accounts (PBKDF2-SHA256)."""

from __future__ import annotations

import base64
import hashlib
import hmac
import os
from typing import Optional, Tuple


PBKDF2_ALGORITHM = "pbkdf2_sha256"
PBKDF2_ROUNDS = 260_000


def _split_hash(encoded_hash: str) -> Optional[Tuple[int, bytes, bytes]]:
    try:
        algorithm, rounds_str, salt_b64, digest_b64 = encoded_hash.split("$", 3)
        if algorithm != PBKDF2_ALGORITHM:
            return None
        return (
            int(rounds_str),
            base64.b64decode(salt_b64.encode("ascii")),
            base64.b64decode(digest_b64.encode("ascii")),
        )
    except (ValueError, TypeError):
        return None


def hash_password(password: str, *, rounds: int = PBKDF2_ROUNDS) -> str:
    """Hash password with PBKDF2-SHA256 and a random salt."""

    salt = os.urandom(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
    salt_b64 = base64.b64encode(salt).decode("ascii")
    digest_b64 = base64.b64encode(digest).decode("ascii")
    return f"{PBKDF2_ALGORITHM}${rounds}${salt_b64}${digest_b64}"


def verify_password(password: str, encoded_hash: str) -> bool:
    parts = _split_hash(encoded_hash)
    if parts is None:
        return False

    rounds, salt, expected = parts
    observed = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
    return hmac.compare_digest(observed, expected)


def needs_rehash(encoded_hash: str) -> bool:
    """True when a stored hash was produced with fewer rounds than today's default."""

    parts = _split_hash(encoded_hash)
    return parts is None or parts[0] < PBKDF2_ROUNDS
