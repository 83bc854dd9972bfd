"""Session gateway: the single seam between views and the storage/auth backend.

Every read issued through the gateway is scoped to the current user, and
every insert is stamped with the current user's id. Views receive a gateway
instance explicitly instead of looking up ambient session state, which keeps
the data-loading functions testable against a fake backend.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from redis.exceptions import RedisError
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from src.auth.jwt import AuthContext
from src.auth.revocation import TokenRevocationStore
from src.core.errors import GatewayError, NotAuthenticatedError
from src.core.logger import get_logger
from src.storage.db import Base
from src.storage.models import Client, Proposal, User


logger = get_logger("freelance_flow.gateway")

SCOPED_TABLES: dict[str, type[Base]] = {
    "clients": Client,
    "proposals": Proposal,
}

OWNER_COLUMN = "user_id"


@dataclass(frozen=True)
class RowFilter:
    column: str
    value: Any
    op: str = "eq"


def eq(column: str, value: Any) -> RowFilter:
    return RowFilter(column=column, value=value, op="eq")


def gte(column: str, value: Any) -> RowFilter:
    return RowFilter(column=column, value=value, op="gte")


@dataclass(frozen=True)
class Ordering:
    column: str
    descending: bool = True


def _resolve_model(table: str) -> type[Base]:
    model = SCOPED_TABLES.get(table)
    if model is None:
        raise ValueError(f"Unknown scoped table: {table}")
    return model


def _resolve_column(model: type[Base], column: str):
    attribute = model.__table__.columns.get(column)
    if attribute is None:
        raise ValueError(f"Unknown column {column!r} on {model.__tablename__}")
    return getattr(model, column)


def _build_condition(model: type[Base], row_filter: RowFilter):
    column = _resolve_column(model, row_filter.column)
    if row_filter.op == "eq":
        return column == row_filter.value
    if row_filter.op == "gte":
        return column >= row_filter.value
    raise ValueError(f"Unsupported filter operator: {row_filter.op}")


class SessionGateway:
    """Per-request facade over the session factory and the revocation store."""

    def __init__(
        self,
        session_factory: sessionmaker,
        auth: Optional[AuthContext],
        revocations: TokenRevocationStore,
    ) -> None:
        self._session_factory = session_factory
        self._auth = auth
        self._revocations = revocations

    @property
    def auth(self) -> Optional[AuthContext]:
        return self._auth

    def _is_revoked(self, auth: AuthContext) -> bool:
        try:
            return self._revocations.is_revoked(auth.token_id)
        except RedisError as exc:
            logger.warning("session_revocation_lookup_failed", error=str(exc))
            raise GatewayError("Session backend unavailable") from exc

    def get_current_user(self) -> Optional[User]:
        """Return the signed-in user, or None when there is no valid session."""

        auth = self._auth
        if auth is None or self._is_revoked(auth):
            return None
        try:
            with self._session_factory() as session:
                user = session.scalar(
                    select(User).where(User.id == auth.user_id, User.is_active.is_(True))
                )
        except SQLAlchemyError as exc:
            logger.warning("current_user_lookup_failed", error=str(exc))
            raise GatewayError() from exc
        return user

    def get_session(self) -> bool:
        return self.get_current_user() is not None

    def sign_out(self) -> None:
        if self._auth is None:
            raise NotAuthenticatedError()
        try:
            self._revocations.revoke(self._auth.token_id, expires_at=self._auth.expires_at)
        except RedisError as exc:
            logger.warning("sign_out_failed", error=str(exc))
            raise GatewayError("Error logging out") from exc
        logger.info("signed_out", user_id=self._auth.user_id)

    def _require_user_id(self) -> str:
        # A revoked token no longer owns any rows.
        auth = self._auth
        if auth is None or self._is_revoked(auth):
            raise NotAuthenticatedError()
        return auth.user_id

    def _scoped_conditions(self, model: type[Base], filters: Sequence[RowFilter]) -> list:
        user_id = self._require_user_id()
        conditions = [getattr(model, OWNER_COLUMN) == user_id]
        conditions.extend(_build_condition(model, row_filter) for row_filter in filters)
        return conditions

    def query_rows(
        self,
        table: str,
        filters: Sequence[RowFilter] = (),
        ordering: Optional[Ordering] = None,
    ) -> list[Any]:
        model = _resolve_model(table)
        statement = select(model).where(*self._scoped_conditions(model, filters))
        if ordering is not None:
            column = _resolve_column(model, ordering.column)
            statement = statement.order_by(column.desc() if ordering.descending else column.asc())

        try:
            with self._session_factory() as session:
                return list(session.scalars(statement).all())
        except SQLAlchemyError as exc:
            logger.warning("query_rows_failed", table=table, error=str(exc))
            raise GatewayError() from exc

    def count_rows(self, table: str, filters: Sequence[RowFilter] = ()) -> int:
        model = _resolve_model(table)
        statement = select(func.count()).select_from(model).where(*self._scoped_conditions(model, filters))

        try:
            with self._session_factory() as session:
                return int(session.scalar(statement) or 0)
        except SQLAlchemyError as exc:
            logger.warning("count_rows_failed", table=table, error=str(exc))
            raise GatewayError() from exc

    def insert_row(self, table: str, record: Mapping[str, Any]) -> Any:
        model = _resolve_model(table)
        user_id = self._require_user_id()
        for column in record:
            _resolve_column(model, column)

        values = dict(record)
        values[OWNER_COLUMN] = user_id
        row = model(**values)
        try:
            with self._session_factory() as session:
                session.add(row)
                session.commit()
        except SQLAlchemyError as exc:
            logger.warning("insert_row_failed", table=table, error=str(exc))
            raise GatewayError() from exc
        return row
