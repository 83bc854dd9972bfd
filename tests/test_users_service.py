from __future__ import annotations

import pytest
from fastapi import HTTPException

from src.core.errors import GatewayError
from src.storage.db import build_session_factory, create_db_engine
from src.storage.models import User
from src.storage.security import PBKDF2_ROUNDS, hash_password, needs_rehash, verify_password
from src.users.service import authenticate_user, register_user


def test_password_hash_round_trip() -> None:
    encoded = hash_password("supersecret123")

    assert encoded.startswith(f"pbkdf2_sha256${PBKDF2_ROUNDS}$")
    assert verify_password("supersecret123", encoded) is True
    assert verify_password("wrong-password", encoded) is False
    assert needs_rehash(encoded) is False


@pytest.mark.parametrize("encoded", ["", "md5$1$abc$def", "pbkdf2_sha256$many$abc$def"])
def test_malformed_hashes_never_verify(encoded: str) -> None:
    assert verify_password("anything", encoded) is False
    assert needs_rehash(encoded) is True


def test_register_normalizes_email_and_rejects_duplicates(session_factory) -> None:
    with session_factory() as session:
        user = register_user(session, email="  Jane@Example.COM ", password="supersecret123")
        assert user.email == "jane@example.com"

        with pytest.raises(HTTPException) as exc_info:
            register_user(session, email="jane@example.com", password="another-secret")
        assert exc_info.value.status_code == 409


def test_authenticate_upgrades_weak_hash(session_factory, user) -> None:
    with session_factory() as session:
        stored = session.get(User, user.id)
        stored.password_hash = hash_password("supersecret123", rounds=1_000)
        session.commit()

    with session_factory() as session:
        authenticated = authenticate_user(session, email="OWNER@freelance.io", password="supersecret123")
        assert authenticated.id == user.id

    with session_factory() as session:
        assert needs_rehash(session.get(User, user.id).password_hash) is False


def test_authenticate_rejects_bad_password(session_factory, user) -> None:
    with session_factory() as session:
        with pytest.raises(HTTPException) as exc_info:
            authenticate_user(session, email=user.email, password="not-the-password")
        assert exc_info.value.status_code == 401


def test_register_race_on_same_email_is_conflict(session_factory, user, monkeypatch) -> None:
    with session_factory() as session:
        # The pre-check misses the row another request committed first.
        monkeypatch.setattr(session, "scalar", lambda statement: None)

        with pytest.raises(HTTPException) as exc_info:
            register_user(session, email=user.email, password="another-secret")
        assert exc_info.value.status_code == 409
        assert exc_info.value.detail == "Email already registered"


def test_storage_failure_is_reported_as_gateway_error(tmp_path) -> None:
    engine = create_db_engine(f"sqlite+pysqlite:///{tmp_path / 'missing' / 'users.sqlite'}")
    broken = build_session_factory(engine)

    with broken() as session:
        with pytest.raises(GatewayError):
            register_user(session, email="fresh@freelance.io", password="supersecret123")
    with broken() as session:
        with pytest.raises(GatewayError):
            authenticate_user(session, email="fresh@freelance.io", password="supersecret123")
