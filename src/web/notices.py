"""Transient notifications shown on rendered pages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

from fastapi.responses import RedirectResponse

from src.clients.registry import ADDED_MESSAGE


@dataclass(frozen=True)
class Notification:
    level: str
    message: str


def success(message: str) -> Notification:
    return Notification(level="success", message=message)


def error(message: str) -> Notification:
    return Notification(level="error", message=message)


# Codes carried across a redirect in the ``notice`` query parameter.
NOTICES: dict[str, Notification] = {
    "client_added": success(ADDED_MESSAGE),
    "logged_out": success("Logged out successfully"),
    "logout_failed": error("Error logging out"),
    "signed_up": success("Account created. Please sign in."),
    "login_required": error("Please log in to continue"),
}


def notice_from_code(code: Optional[str]) -> Optional[Notification]:
    if not code:
        return None
    return NOTICES.get(code)


def redirect_with_notice(url: str, code: Optional[str] = None) -> RedirectResponse:
    if code is not None and code not in NOTICES:
        raise ValueError(f"Unknown notice code: {code}")
    target = f"{url}?{urlencode({'notice': code})}" if code else url
    return RedirectResponse(target, status_code=303)
