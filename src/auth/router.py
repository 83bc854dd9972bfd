"""Authentication API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.auth.dependencies import get_gateway, require_user
from src.auth.jwt import create_access_token
from src.gateway.session import SessionGateway
from src.schemas.auth import (
    LoginRequest,
    LogoutResponse,
    RegisterRequest,
    SessionResponse,
    TokenResponse,
    UserResponse,
)
from src.storage.db import get_session
from src.storage.models import User
from src.users.service import authenticate_user, register_user


router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=201)
def register(payload: RegisterRequest, session: Session = Depends(get_session)) -> UserResponse:
    user = register_user(session, email=payload.email, password=payload.password)
    return UserResponse(id=user.id, email=user.email)


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, session: Session = Depends(get_session)) -> TokenResponse:
    user = authenticate_user(session, email=payload.email, password=payload.password)
    token, expires_in = create_access_token(user_id=user.id, email=user.email)
    return TokenResponse(access_token=token, expires_in=expires_in, user_id=user.id)


@router.post("/logout", response_model=LogoutResponse)
def logout(gateway: SessionGateway = Depends(get_gateway)) -> LogoutResponse:
    gateway.sign_out()
    return LogoutResponse(signed_out=True, message="Logged out successfully")


@router.get("/session", response_model=SessionResponse)
def session_status(gateway: SessionGateway = Depends(get_gateway)) -> SessionResponse:
    return SessionResponse(authenticated=gateway.get_session())


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(require_user)) -> UserResponse:
    return UserResponse(id=user.id, email=user.email)
