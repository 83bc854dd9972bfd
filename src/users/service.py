"""User registration and credential checks."""

from __future__ import annotations

import uuid

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.errors import GatewayError
from src.core.logger import get_logger
from src.storage.models import User
from src.storage.security import hash_password, needs_rehash, verify_password


logger = get_logger("freelance_flow.users")


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _email_taken() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="Email already registered",
    )


def register_user(session: Session, *, email: str, password: str) -> User:
    normalized = _normalize_email(email)
    try:
        existing = session.scalar(select(User).where(User.email == normalized))
        if existing is not None:
            raise _email_taken()

        user = User(id=str(uuid.uuid4()), email=normalized, password_hash=hash_password(password))
        session.add(user)
        session.commit()
    except IntegrityError as exc:
        # Lost a race with a concurrent sign-up for the same address.
        session.rollback()
        raise _email_taken() from exc
    except SQLAlchemyError as exc:
        session.rollback()
        logger.warning("user_registration_failed", error=str(exc))
        raise GatewayError() from exc

    logger.info("user_registered", user_id=user.id)
    return user


def authenticate_user(session: Session, *, email: str, password: str) -> User:
    try:
        user = session.scalar(
            select(User).where(User.email == _normalize_email(email), User.is_active.is_(True))
        )
        if user is None or not verify_password(password, user.password_hash):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

        if needs_rehash(user.password_hash):
            user.password_hash = hash_password(password)
            session.commit()
            logger.info("password_rehashed", user_id=user.id)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.warning("user_authentication_failed", error=str(exc))
        raise GatewayError() from exc
    return user
