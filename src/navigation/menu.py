"""Side navigation menu model."""

from __future__ import annotations

from dataclasses import dataclass


APP_TITLE = "Freelance Flow"
COLLAPSED = "collapsed"
EXPANDED = "expanded"


@dataclass(frozen=True)
class MenuEntry:
    title: str
    url: str
    icon: str


@dataclass(frozen=True)
class MenuItem:
    title: str
    url: str
    icon: str
    active: bool
    show_label: bool


@dataclass(frozen=True)
class Navigation:
    title: str
    collapsed: bool
    items: list[MenuItem]
    show_title: bool


MENU_ENTRIES = (
    MenuEntry(title="Dashboard", url="/dashboard", icon="layout-dashboard"),
    MenuEntry(title="Generate Proposal", url="/generate", icon="file-text"),
    MenuEntry(title="Clients", url="/clients", icon="users"),
    MenuEntry(title="Stats", url="/stats", icon="bar-chart-3"),
)

MENU_URLS = frozenset(entry.url for entry in MENU_ENTRIES)


def _normalize_path(path: str) -> str:
    normalized = (path or "/").split("?", 1)[0].rstrip("/")
    return normalized or "/"


def build_navigation(current_path: str, collapsed: bool = False) -> Navigation:
    current = _normalize_path(current_path)
    items = [
        MenuItem(
            title=entry.title,
            url=entry.url,
            icon=entry.icon,
            active=entry.url == current,
            show_label=not collapsed,
        )
        for entry in MENU_ENTRIES
    ]
    return Navigation(title=APP_TITLE, collapsed=collapsed, items=items, show_title=not collapsed)


def parse_sidebar_state(value: str | None) -> bool:
    """Return True when the stored sidebar state is collapsed."""

    return (value or "").strip().lower() == COLLAPSED


def toggled_sidebar_state(value: str | None) -> str:
    return EXPANDED if parse_sidebar_state(value) else COLLAPSED


def safe_return_path(path: str | None, default: str = "/dashboard") -> str:
    normalized = _normalize_path(path or "")
    return normalized if normalized in MENU_URLS else default
