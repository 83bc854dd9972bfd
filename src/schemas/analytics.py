"""Pydantic schemas for dashboard and stats endpoints."""

from __future__ import annotations

from pydantic import BaseModel


class TileResponse(BaseModel):
    key: str
    title: str
    value: int
    description: str
    available: bool


class QuickActionResponse(BaseModel):
    title: str
    url: str
    description: str


class DashboardResponse(BaseModel):
    tiles: list[TileResponse]
    quick_actions: list[QuickActionResponse]
    degraded: bool


class BarDatumResponse(BaseModel):
    name: str
    value: int
    height_pct: float


class PieSliceResponse(BaseModel):
    name: str
    value: int
    percent: int
    label: str
    color: str
    path: str


class StatusCardResponse(BaseModel):
    status: str
    title: str
    value: int
    description: str
    available: bool


class StatsResponse(BaseModel):
    counts: dict[str, int]
    bar_chart: list[BarDatumResponse]
    pie_chart: list[PieSliceResponse]
    status_cards: list[StatusCardResponse]
    degraded: bool
    unavailable: list[str]
