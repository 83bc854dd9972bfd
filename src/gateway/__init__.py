"""User-scoped session and storage gateway."""

from src.gateway.session import Ordering, RowFilter, SessionGateway, eq, gte

__all__ = ["Ordering", "RowFilter", "SessionGateway", "eq", "gte"]
