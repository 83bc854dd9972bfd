"""Client registry API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from src.auth.dependencies import get_gateway, require_user
from src.clients.registry import ADDED_MESSAGE, add_client, list_clients, status_presentation
from src.gateway.session import SessionGateway
from src.schemas.clients import (
    ClientCreateRequest,
    ClientCreateResponse,
    ClientPresentation,
    ClientResponse,
)
from src.storage.models import Client, User


router = APIRouter(prefix="/api/clients", tags=["clients"])


def _to_response(client: Client) -> ClientResponse:
    presentation = status_presentation(client.status)
    return ClientResponse(
        id=client.id,
        name=client.name,
        platform=client.platform,
        status=client.status,
        date=client.date,
        presentation=ClientPresentation(
            tone=presentation.tone,
            css_class=presentation.css_class,
            label=presentation.label,
        ),
    )


@router.get("", response_model=list[ClientResponse])
def list_clients_endpoint(
    gateway: SessionGateway = Depends(get_gateway),
    _user: User = Depends(require_user),
) -> list[ClientResponse]:
    return [_to_response(client) for client in list_clients(gateway)]


@router.post("", response_model=ClientCreateResponse, status_code=201)
def add_client_endpoint(
    payload: ClientCreateRequest,
    gateway: SessionGateway = Depends(get_gateway),
) -> ClientCreateResponse:
    client = add_client(gateway, name=payload.name, platform=payload.platform, status=payload.status)
    return ClientCreateResponse(client=_to_response(client), message=ADDED_MESSAGE)
