"""Application error taxonomy shared by the API and the HTML pages."""

from __future__ import annotations


class AppError(RuntimeError):
    """Base error carrying a user-facing message and an HTTP status."""

    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(AppError):
    """A required field is blank; nothing was written."""

    status_code = 422
    default_message = "Please fill in all fields"


class NotAuthenticatedError(AppError):
    """A scoped action was attempted without a current user."""

    status_code = 401
    default_message = "Authentication required"


class GatewayError(AppError):
    """Storage or session backend failed in transport."""

    status_code = 503
    default_message = "Backend unavailable"
