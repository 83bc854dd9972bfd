"""Client records: creation, listing and status presentation."""

from __future__ import annotations

from dataclasses import dataclass

from src.core.errors import GatewayError, NotAuthenticatedError, ValidationFailed
from src.core.logger import get_logger
from src.core.metrics import record_client_added
from src.gateway.session import Ordering, SessionGateway
from src.storage.models import Client, ClientStatus


logger = get_logger("freelance_flow.clients")

MISSING_FIELDS_MESSAGE = "Please fill in all fields"
LOGIN_REQUIRED_MESSAGE = "Please log in to add clients"
ADD_FAILED_MESSAGE = "Error adding client"
ADDED_MESSAGE = "Client added successfully!"
FETCH_FAILED_MESSAGE = "Error fetching clients"


@dataclass(frozen=True)
class StatusPresentation:
    tone: str
    css_class: str
    label: str


_STATUS_TONES: dict[str, tuple[str, str]] = {
    ClientStatus.REPLIED.value: ("positive", "status-positive"),
    ClientStatus.PENDING.value: ("caution", "status-caution"),
    ClientStatus.REJECTED.value: ("negative", "status-negative"),
}
_FALLBACK_TONE = ("neutral", "status-neutral")


def status_presentation(status: str) -> StatusPresentation:
    tone, css_class = _STATUS_TONES.get(status, _FALLBACK_TONE)
    label = status[:1].upper() + status[1:] if status else "Unknown"
    return StatusPresentation(tone=tone, css_class=css_class, label=label)


def list_clients(gateway: SessionGateway) -> list[Client]:
    """Return the current user's clients, most recent first."""

    return gateway.query_rows("clients", ordering=Ordering("date", descending=True))


def add_client(
    gateway: SessionGateway,
    *,
    name: str,
    platform: str,
    status: ClientStatus | str = ClientStatus.PENDING,
) -> Client:
    if not (name or "").strip() or not (platform or "").strip():
        raise ValidationFailed(MISSING_FIELDS_MESSAGE)

    status_value = ClientStatus(status).value
    if gateway.get_current_user() is None:
        raise NotAuthenticatedError(LOGIN_REQUIRED_MESSAGE)

    try:
        client = gateway.insert_row(
            "clients",
            {
                "name": name.strip(),
                "platform": platform.strip(),
                "status": status_value,
            },
        )
    except GatewayError as exc:
        raise GatewayError(ADD_FAILED_MESSAGE) from exc

    record_client_added(status=status_value)
    logger.info("client_added", client_id=client.id, status=status_value)
    return client
