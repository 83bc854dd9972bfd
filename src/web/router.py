"""Server-rendered pages: landing, auth, dashboard, generate, clients, stats."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import RedirectResponse, Response
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
from sqlalchemy.orm import Session

from src.analytics.aggregates import load_dashboard, load_stats
from src.auth.dependencies import get_gateway
from src.auth.jwt import create_access_token
from src.clients.registry import FETCH_FAILED_MESSAGE, add_client, list_clients, status_presentation
from src.core.config import get_settings
from src.core.errors import AppError, GatewayError, NotAuthenticatedError, ValidationFailed
from src.core.logger import get_logger
from src.gateway.session import SessionGateway
from src.navigation.menu import build_navigation, parse_sidebar_state, safe_return_path, toggled_sidebar_state
from src.proposals.composer import GENERATED_MESSAGE, SAVED_MESSAGE, compose_proposal, save_proposal
from src.schemas.auth import RegisterRequest
from src.storage.db import get_session
from src.storage.models import ClientStatus, Tone, User
from src.users.service import authenticate_user, register_user
from src.web.notices import Notification, error, notice_from_code, redirect_with_notice, success


logger = get_logger("freelance_flow.web")

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

router = APIRouter(tags=["pages"])

FEATURES = (
    {
        "icon": "file-text",
        "title": "AI-Powered Proposals",
        "description": "Generate professional proposals tailored to each job description with customizable tones",
    },
    {
        "icon": "users",
        "title": "Client Management",
        "description": "Track and organize all your clients across different platforms in one place",
    },
    {
        "icon": "bar-chart-3",
        "title": "Performance Analytics",
        "description": "Visualize your success rate with detailed statistics and insights",
    },
)

TONE_CHOICES = [(tone.value, tone.value.capitalize()) for tone in Tone]
STATUS_CHOICES = [(status.value, status.value.capitalize()) for status in ClientStatus]


@dataclass(frozen=True)
class PageSession:
    """Who is looking at a page.

    ``backend_error`` is set when the session backend could not answer. The
    visitor is then neither confirmed nor rejected, so pages render with the
    error shown instead of sending them to the sign-in form.
    """

    user: Optional[User] = None
    backend_error: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.user is not None or self.backend_error is not None

    def notifications(self) -> list[Notification]:
        return [error(self.backend_error)] if self.backend_error else []


def get_page_session(gateway: SessionGateway = Depends(get_gateway)) -> PageSession:
    try:
        return PageSession(user=gateway.get_current_user())
    except GatewayError as exc:
        logger.warning("page_user_lookup_failed", error=exc.message)
        return PageSession(backend_error=exc.message)


def _render(
    request: Request,
    template: str,
    context: dict[str, Any],
    *,
    notifications: Iterable[Notification] = (),
    status_code: int = 200,
) -> Response:
    settings = get_settings()
    collapsed = parse_sidebar_state(request.cookies.get(settings.sidebar_cookie_name))
    shown = list(notifications)
    from_query = notice_from_code(request.query_params.get("notice"))
    if from_query is not None:
        shown.insert(0, from_query)

    payload = {
        "navigation": build_navigation(request.url.path, collapsed),
        "notifications": shown,
        **context,
    }
    return templates.TemplateResponse(request, template, payload, status_code=status_code)


def _login_redirect() -> RedirectResponse:
    return redirect_with_notice("/auth", "login_required")


# Landing and auth


@router.get("/", include_in_schema=False)
def landing_page(request: Request, gateway: SessionGateway = Depends(get_gateway)) -> Response:
    try:
        has_session = gateway.get_session()
    except GatewayError as exc:
        logger.warning("landing_session_check_failed", error=exc.message)
        has_session = False

    if has_session:
        return RedirectResponse("/dashboard", status_code=303)
    return _render(request, "landing.html", {"features": FEATURES})


@router.get("/auth", include_in_schema=False)
def auth_page(request: Request) -> Response:
    return _render(request, "auth.html", {"email": ""})


def _auth_form_error(request: Request, email: str, message: str, status_code: int) -> Response:
    return _render(request, "auth.html", {"email": email}, notifications=[error(message)], status_code=status_code)


@router.post("/auth/signin", include_in_schema=False)
def sign_in(
    request: Request,
    email: str = Form(default=""),
    password: str = Form(default=""),
    session: Session = Depends(get_session),
) -> Response:
    try:
        user = authenticate_user(session, email=email, password=password)
    except HTTPException as exc:
        return _auth_form_error(request, email, str(exc.detail), exc.status_code)
    except AppError as exc:
        return _auth_form_error(request, email, exc.message, exc.status_code)

    settings = get_settings()
    token, expires_in = create_access_token(user_id=user.id, email=user.email)
    response = RedirectResponse("/dashboard", status_code=303)
    response.set_cookie(
        settings.auth_cookie_name,
        token,
        max_age=expires_in,
        httponly=True,
        samesite="lax",
        secure=settings.auth_cookie_secure,
    )
    logger.info("signed_in", user_id=user.id)
    return response


@router.post("/auth/signup", include_in_schema=False)
def sign_up(
    request: Request,
    email: str = Form(default=""),
    password: str = Form(default=""),
    session: Session = Depends(get_session),
) -> Response:
    try:
        payload = RegisterRequest(email=email, password=password)
        register_user(session, email=payload.email, password=payload.password)
    except ValidationError:
        message = "Enter a valid email and a password of at least 8 characters"
        return _auth_form_error(request, email, message, 422)
    except HTTPException as exc:
        return _auth_form_error(request, email, str(exc.detail), exc.status_code)
    except AppError as exc:
        return _auth_form_error(request, email, exc.message, exc.status_code)
    return redirect_with_notice("/auth", "signed_up")


# Navigation shell actions


@router.post("/logout", include_in_schema=False)
def logout(
    next_path: str = Form(default="/dashboard", alias="next"),
    gateway: SessionGateway = Depends(get_gateway),
) -> Response:
    try:
        gateway.sign_out()
    except NotAuthenticatedError:
        # Missing or expired session: already signed out, only the cookie is left.
        logger.info("logout_without_session")
    except AppError as exc:
        logger.warning("logout_failed", error=exc.message)
        return redirect_with_notice(safe_return_path(next_path), "logout_failed")

    response = redirect_with_notice("/auth", "logged_out")
    response.delete_cookie(get_settings().auth_cookie_name)
    return response


@router.post("/sidebar/toggle", include_in_schema=False)
def toggle_sidebar(request: Request, next_path: str = Form(default="/dashboard", alias="next")) -> Response:
    settings = get_settings()
    state = toggled_sidebar_state(request.cookies.get(settings.sidebar_cookie_name))
    response = RedirectResponse(safe_return_path(next_path), status_code=303)
    response.set_cookie(settings.sidebar_cookie_name, state, max_age=365 * 24 * 3600, samesite="lax")
    return response


# Dashboard and stats


@router.get("/dashboard", include_in_schema=False)
async def dashboard_page(
    request: Request,
    gateway: SessionGateway = Depends(get_gateway),
    page: PageSession = Depends(get_page_session),
) -> Response:
    if not page.allowed:
        return _login_redirect()
    view = await load_dashboard(gateway)
    return _render(
        request,
        "dashboard.html",
        {"view": view, "user": page.user},
        notifications=page.notifications(),
    )


@router.get("/stats", include_in_schema=False)
async def stats_page(
    request: Request,
    gateway: SessionGateway = Depends(get_gateway),
    page: PageSession = Depends(get_page_session),
) -> Response:
    if not page.allowed:
        return _login_redirect()
    view = await load_stats(gateway)
    return _render(
        request,
        "stats.html",
        {"view": view, "user": page.user},
        notifications=page.notifications(),
    )


# Proposal composer


def _generate_context(*, job_description: str, tone: str, content: str, user: Optional[User]) -> dict[str, Any]:
    return {
        "job_description": job_description,
        "tone": tone,
        "content": content,
        "tones": TONE_CHOICES,
        "user": user,
    }


@router.get("/generate", include_in_schema=False)
def generate_page(request: Request, page: PageSession = Depends(get_page_session)) -> Response:
    if not page.allowed:
        return _login_redirect()
    context = _generate_context(job_description="", tone=Tone.PROFESSIONAL.value, content="", user=page.user)
    return _render(request, "generate.html", context, notifications=page.notifications())


@router.post("/generate", include_in_schema=False)
def generate_action(
    request: Request,
    action: str = Form(default="generate"),
    job_description: str = Form(default=""),
    tone: str = Form(default=Tone.PROFESSIONAL.value),
    content: str = Form(default=""),
    gateway: SessionGateway = Depends(get_gateway),
    page: PageSession = Depends(get_page_session),
) -> Response:
    if not page.allowed:
        return _login_redirect()

    if tone not in {choice for choice, _label in TONE_CHOICES}:
        context = _generate_context(
            job_description=job_description, tone=Tone.PROFESSIONAL.value, content=content, user=page.user
        )
        return _render(request, "generate.html", context, notifications=[error("Please select a tone")], status_code=422)

    notifications: list[Notification]
    status_code = 200
    try:
        if action == "save":
            save_proposal(gateway, content=content, tone=tone, job_description=job_description)
            notifications = [success(SAVED_MESSAGE)]
        else:
            content = compose_proposal(job_description, tone)
            notifications = [success(GENERATED_MESSAGE), *page.notifications()]
    except AppError as exc:
        notifications = [error(exc.message)]
        status_code = exc.status_code

    context = _generate_context(job_description=job_description, tone=tone, content=content, user=page.user)
    return _render(request, "generate.html", context, notifications=notifications, status_code=status_code)


# Client registry


def _client_rows(gateway: SessionGateway) -> tuple[list[dict[str, Any]], list[Notification]]:
    try:
        clients = list_clients(gateway)
    except GatewayError:
        return [], [error(FETCH_FAILED_MESSAGE)]

    rows = [
        {
            "id": client.id,
            "name": client.name,
            "platform": client.platform,
            "date": client.date.strftime("%b %d, %Y"),
            "presentation": status_presentation(client.status),
        }
        for client in clients
    ]
    return rows, []


def _clients_context(
    rows: list[dict[str, Any]],
    *,
    user: Optional[User],
    dialog_open: bool,
    form: Optional[dict[str, str]] = None,
) -> dict[str, Any]:
    return {
        "clients": rows,
        "dialog_open": dialog_open,
        "form": form or {"name": "", "platform": "", "status": ClientStatus.PENDING.value},
        "statuses": STATUS_CHOICES,
        "user": user,
    }


@router.get("/clients", include_in_schema=False)
def clients_page(
    request: Request,
    gateway: SessionGateway = Depends(get_gateway),
    page: PageSession = Depends(get_page_session),
) -> Response:
    if not page.allowed:
        return _login_redirect()
    rows, notifications = _client_rows(gateway)
    dialog_open = request.query_params.get("dialog") == "open"
    return _render(
        request,
        "clients.html",
        _clients_context(rows, user=page.user, dialog_open=dialog_open),
        notifications=[*page.notifications(), *notifications],
    )


@router.post("/clients", include_in_schema=False)
def add_client_action(
    request: Request,
    name: str = Form(default=""),
    platform: str = Form(default=""),
    status: str = Form(default=ClientStatus.PENDING.value),
    gateway: SessionGateway = Depends(get_gateway),
    page: PageSession = Depends(get_page_session),
) -> Response:
    if not page.allowed:
        return _login_redirect()

    form = {"name": name, "platform": platform, "status": status}
    try:
        if status not in {choice for choice, _label in STATUS_CHOICES}:
            raise ValidationFailed("Please select a status")
        add_client(gateway, name=name, platform=platform, status=status)
    except AppError as exc:
        rows, notifications = _client_rows(gateway)
        return _render(
            request,
            "clients.html",
            _clients_context(rows, user=page.user, dialog_open=True, form=form),
            notifications=[error(exc.message), *notifications],
            status_code=exc.status_code,
        )
    return redirect_with_notice("/clients", "client_added")
