"""Authentication middleware helpers."""

from __future__ import annotations

from typing import Optional

from fastapi import Request

from src.auth.jwt import AuthContext, decode_access_token
from src.core.config import get_settings


AUTH_CONTEXT_KEY = "auth_context"


def _extract_bearer_token(request: Request) -> Optional[str]:
    authorization = request.headers.get("authorization")
    if not authorization:
        return None

    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


def _extract_cookie_token(request: Request) -> Optional[str]:
    value = request.cookies.get(get_settings().auth_cookie_name)
    if not value:
        return None
    return value.strip() or None


def resolve_request_auth_context(request: Request) -> Optional[AuthContext]:
    token = _extract_bearer_token(request) or _extract_cookie_token(request)
    if not token:
        return None

    try:
        return decode_access_token(token)
    except Exception:
        return None
