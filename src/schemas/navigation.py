"""Pydantic schemas for the navigation endpoint."""

from __future__ import annotations

from pydantic import BaseModel


class MenuItemResponse(BaseModel):
    title: str
    url: str
    icon: str
    active: bool
    show_label: bool


class NavigationResponse(BaseModel):
    title: str
    collapsed: bool
    items: list[MenuItemResponse]
    show_title: bool
