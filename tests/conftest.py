from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Dict, Optional
import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

os.environ.setdefault("ENV", "development")
os.environ.setdefault("SECRET_KEY", "freelance-flow-test-secret-key-0123456789")

from src.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

import src.api.main as api_main  # noqa: E402
from src.auth.jwt import AuthContext, create_access_token, decode_access_token  # noqa: E402
from src.auth.revocation import TokenRevocationStore, get_revocation_store  # noqa: E402
from src.gateway.session import SessionGateway  # noqa: E402
from src.storage.db import Base, build_session_factory, create_db_engine, get_session_factory, load_models  # noqa: E402
from src.storage.models import User  # noqa: E402
from src.storage.security import hash_password  # noqa: E402


class FakeRedis:
    def __init__(self) -> None:
        self._store: Dict[str, str] = {}
        self.ttls: Dict[str, Optional[int]] = {}

    def set(self, key: str, value: str, nx: bool = False, ex: int | None = None):
        if nx and key in self._store:
            return False
        self._store[key] = str(value)
        self.ttls[key] = ex
        return True

    def get(self, key: str):
        return self._store.get(key)

    def delete(self, key: str):
        return 1 if self._store.pop(key, None) is not None else 0

    def exists(self, key: str):
        return 1 if key in self._store else 0


def sqlite_session_factory(database_path: Path) -> sessionmaker:
    load_models()
    engine = create_db_engine(f"sqlite+pysqlite:///{database_path}")
    Base.metadata.create_all(engine)
    return build_session_factory(engine)


def create_user(session_factory: sessionmaker, email: str, password: str = "supersecret123") -> User:
    user = User(id=str(uuid.uuid4()), email=email, password_hash=hash_password(password))
    with session_factory() as session:
        session.add(user)
        session.commit()
    return user


def auth_context_for(user: User) -> AuthContext:
    token, _expires_in = create_access_token(user_id=user.id, email=user.email)
    return decode_access_token(token)


@pytest.fixture
def session_factory(tmp_path: Path) -> sessionmaker:
    return sqlite_session_factory(tmp_path / "freelance_flow.sqlite")


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def revocations(fake_redis: FakeRedis) -> TokenRevocationStore:
    return TokenRevocationStore(fake_redis)


@pytest.fixture
def user(session_factory: sessionmaker) -> User:
    return create_user(session_factory, "owner@freelance.io")


@pytest.fixture
def gateway(session_factory: sessionmaker, user: User, revocations: TokenRevocationStore) -> SessionGateway:
    return SessionGateway(session_factory=session_factory, auth=auth_context_for(user), revocations=revocations)


@pytest.fixture
def anonymous_gateway(session_factory: sessionmaker, revocations: TokenRevocationStore) -> SessionGateway:
    return SessionGateway(session_factory=session_factory, auth=None, revocations=revocations)


@dataclass
class AppTestContext:
    client: TestClient
    session_factory: sessionmaker
    fake_redis: FakeRedis
    user: User
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}

    def sign_in_cookie(self) -> None:
        self.client.cookies.set(get_settings().auth_cookie_name, self.token)


@pytest.fixture
def app_context(session_factory: sessionmaker, fake_redis: FakeRedis, user: User):
    api_main.app.dependency_overrides[get_session_factory] = lambda: session_factory
    api_main.app.dependency_overrides[get_revocation_store] = lambda: TokenRevocationStore(fake_redis)
    try:
        token, _expires_in = create_access_token(user_id=user.id, email=user.email)
        yield AppTestContext(
            client=TestClient(api_main.app),
            session_factory=session_factory,
            fake_redis=fake_redis,
            user=user,
            token=token,
        )
    finally:
        api_main.app.dependency_overrides.clear()
