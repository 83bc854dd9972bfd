from __future__ import annotations


def _add_client(app_context, name: str, status: str) -> None:
    response = app_context.client.post(
        "/api/clients",
        json={"name": name, "platform": "Upwork", "status": status},
        headers=app_context.headers,
    )
    assert response.status_code == 201


def test_dashboard_requires_session(app_context) -> None:
    assert app_context.client.get("/api/dashboard").status_code == 401
    assert app_context.client.get("/api/stats").status_code == 401


def test_dashboard_reports_counts(app_context) -> None:
    client = app_context.client
    client.post(
        "/api/proposals",
        json={"content": "text", "tone": "professional", "job_description": "Build"},
        headers=app_context.headers,
    )
    _add_client(app_context, "A", "pending")
    _add_client(app_context, "B", "replied")

    response = client.get("/api/dashboard", headers=app_context.headers)

    assert response.status_code == 200
    payload = response.json()
    values = {tile["key"]: tile["value"] for tile in payload["tiles"]}
    assert values == {
        "total_proposals": 1,
        "total_clients": 2,
        "pending_clients": 1,
        "recent_proposals": 1,
    }
    assert payload["degraded"] is False
    assert len(payload["quick_actions"]) == 2


def test_stats_reports_chart_data(app_context) -> None:
    _add_client(app_context, "A", "pending")
    _add_client(app_context, "B", "rejected")

    response = app_context.client.get("/api/stats", headers=app_context.headers)

    assert response.status_code == 200
    payload = response.json()
    assert payload["counts"] == {"total_proposals": 0, "replied": 0, "pending": 1, "rejected": 1}
    assert [item["label"] for item in payload["pie_chart"]] == ["Replied: 0%", "Pending: 50%", "Rejected: 50%"]
    assert [bar["value"] for bar in payload["bar_chart"]] == [0, 0, 1, 1]
    assert payload["unavailable"] == []


def test_stats_for_new_user_has_empty_pie(app_context) -> None:
    response = app_context.client.get("/api/stats", headers=app_context.headers)
    assert response.json()["pie_chart"] == []
