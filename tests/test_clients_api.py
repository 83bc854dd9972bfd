from __future__ import annotations

from sqlalchemy import func, select

from src.storage.models import Client


def _client_count(session_factory) -> int:
    with session_factory() as session:
        return int(session.scalar(select(func.count()).select_from(Client)) or 0)


def test_list_requires_session(app_context) -> None:
    assert app_context.client.get("/api/clients").status_code == 401


def test_add_and_list_clients(app_context) -> None:
    client = app_context.client

    created = client.post(
        "/api/clients",
        json={"name": "  Acme Corp ", "platform": "Upwork", "status": "replied"},
        headers=app_context.headers,
    )
    assert created.status_code == 201
    payload = created.json()
    assert payload["message"] == "Client added successfully!"
    assert payload["client"]["name"] == "Acme Corp"
    assert payload["client"]["presentation"] == {
        "tone": "positive",
        "css_class": "status-positive",
        "label": "Replied",
    }

    listed = client.get("/api/clients", headers=app_context.headers)
    assert listed.status_code == 200
    assert [item["name"] for item in listed.json()] == ["Acme Corp"]


def test_status_defaults_to_pending(app_context) -> None:
    created = app_context.client.post(
        "/api/clients",
        json={"name": "Jane", "platform": "Fiverr"},
        headers=app_context.headers,
    )
    assert created.status_code == 201
    assert created.json()["client"]["status"] == "pending"


def test_blank_fields_are_rejected_without_insert(app_context) -> None:
    response = app_context.client.post(
        "/api/clients",
        json={"name": "Jane", "platform": "   "},
        headers=app_context.headers,
    )
    assert response.status_code == 422
    assert response.json() == {"detail": "Please fill in all fields"}
    assert _client_count(app_context.session_factory) == 0


def test_add_without_session_is_rejected(app_context) -> None:
    response = app_context.client.post("/api/clients", json={"name": "Jane", "platform": "Fiverr"})
    assert response.status_code == 401
    assert response.json() == {"detail": "Please log in to add clients"}
    assert _client_count(app_context.session_factory) == 0
