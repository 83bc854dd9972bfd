from __future__ import annotations

import pytest

from src.navigation.menu import (
    build_navigation,
    parse_sidebar_state,
    safe_return_path,
    toggled_sidebar_state,
)


@pytest.mark.parametrize("path", ["/dashboard", "/generate", "/clients", "/stats"])
def test_exactly_one_item_is_active_on_each_page(path: str) -> None:
    navigation = build_navigation(path)

    active = [item.url for item in navigation.items if item.active]
    assert active == [path]


def test_menu_order_and_titles() -> None:
    navigation = build_navigation("/dashboard")
    assert [item.title for item in navigation.items] == ["Dashboard", "Generate Proposal", "Clients", "Stats"]
    assert navigation.title == "Freelance Flow"


def test_unknown_path_highlights_nothing() -> None:
    navigation = build_navigation("/settings")
    assert not any(item.active for item in navigation.items)


def test_trailing_slash_and_query_are_ignored() -> None:
    navigation = build_navigation("/clients/?dialog=open")
    assert [item.url for item in navigation.items if item.active] == ["/clients"]


def test_collapsed_sidebar_hides_labels_and_title() -> None:
    navigation = build_navigation("/stats", collapsed=True)

    assert navigation.collapsed is True
    assert navigation.show_title is False
    assert all(item.show_label is False for item in navigation.items)
    assert all(item.icon for item in navigation.items)


def test_sidebar_state_round_trip() -> None:
    assert parse_sidebar_state(None) is False
    assert parse_sidebar_state("collapsed") is True
    assert toggled_sidebar_state(None) == "collapsed"
    assert toggled_sidebar_state("collapsed") == "expanded"


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/clients", "/clients"),
        ("/stats/", "/stats"),
        ("https://evil.example/", "/dashboard"),
        ("//evil.example", "/dashboard"),
        (None, "/dashboard"),
    ],
)
def test_safe_return_path_only_allows_menu_urls(path, expected: str) -> None:
    assert safe_return_path(path) == expected


def test_navigation_endpoint(app_context) -> None:
    response = app_context.client.get("/api/navigation", params={"path": "/clients", "collapsed": "true"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["collapsed"] is True
    assert [item["url"] for item in payload["items"] if item["active"]] == ["/clients"]
