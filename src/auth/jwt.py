"""JWT issue/verify primitives for user sessions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import uuid

import jwt
from fastapi import HTTPException, status

from src.core.config import get_settings


@dataclass(frozen=True)
class AuthContext:
    user_id: str
    email: str
    token_id: str
    expires_at: int


def create_access_token(*, user_id: str, email: str) -> tuple[str, int]:
    settings = get_settings()
    expires_in = settings.access_token_exp_minutes * 60
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "email": email,
        "jti": str(uuid.uuid4()),
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=expires_in)).timestamp()),
    }
    token = jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)
    return token, expires_in


def decode_access_token(token: str) -> AuthContext:
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
        return AuthContext(
            user_id=str(payload["sub"]),
            email=str(payload.get("email", "")),
            token_id=str(payload["jti"]),
            expires_at=int(payload["exp"]),
        )
    except Exception as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        ) from exc
