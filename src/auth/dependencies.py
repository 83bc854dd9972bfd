"""FastAPI dependencies for auth and gateway construction."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import sessionmaker

from src.auth.jwt import AuthContext
from src.auth.middleware import AUTH_CONTEXT_KEY
from src.auth.revocation import TokenRevocationStore, get_revocation_store
from src.gateway.session import SessionGateway
from src.storage.db import get_session_factory
from src.storage.models import User


def get_optional_auth_context(request: Request) -> Optional[AuthContext]:
    return getattr(request.state, AUTH_CONTEXT_KEY, None)


def get_gateway(
    auth: Optional[AuthContext] = Depends(get_optional_auth_context),
    session_factory: sessionmaker = Depends(get_session_factory),
    revocations: TokenRevocationStore = Depends(get_revocation_store),
) -> SessionGateway:
    return SessionGateway(session_factory=session_factory, auth=auth, revocations=revocations)


def require_user(gateway: SessionGateway = Depends(get_gateway)) -> User:
    user = gateway.get_current_user()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return user
