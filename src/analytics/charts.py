"""Chart data for the stats page: bar heights and SVG pie slices."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Sequence


PIE_CENTER = 150.0
PIE_RADIUS = 100.0
STATUS_COLORS = ("hsl(142, 76%, 36%)", "hsl(48, 96%, 53%)", "hsl(0, 84%, 60%)")


@dataclass(frozen=True)
class BarDatum:
    name: str
    value: int
    height_pct: float


@dataclass(frozen=True)
class PieSlice:
    name: str
    value: int
    percent: int
    label: str
    color: str
    path: str


def build_bar_chart(items: Sequence[tuple[str, int]]) -> list[BarDatum]:
    peak = max((value for _name, value in items), default=0)
    bars = []
    for name, value in items:
        height = (value / peak) * 100.0 if peak > 0 else 0.0
        bars.append(BarDatum(name=name, value=value, height_pct=round(height, 2)))
    return bars


def _point(angle: float) -> tuple[float, float]:
    return (
        PIE_CENTER + PIE_RADIUS * math.cos(angle),
        PIE_CENTER + PIE_RADIUS * math.sin(angle),
    )


def _arc_path(start: float, end: float) -> str:
    sweep = end - start
    if sweep <= 0:
        return ""
    if sweep >= 2 * math.pi - 1e-9:
        top = PIE_CENTER - PIE_RADIUS
        bottom = PIE_CENTER + PIE_RADIUS
        return (
            f"M {PIE_CENTER:.2f} {top:.2f} "
            f"A {PIE_RADIUS:.2f} {PIE_RADIUS:.2f} 0 1 1 {PIE_CENTER:.2f} {bottom:.2f} "
            f"A {PIE_RADIUS:.2f} {PIE_RADIUS:.2f} 0 1 1 {PIE_CENTER:.2f} {top:.2f} Z"
        )

    x0, y0 = _point(start)
    x1, y1 = _point(end)
    large_arc = 1 if sweep > math.pi else 0
    return (
        f"M {PIE_CENTER:.2f} {PIE_CENTER:.2f} L {x0:.2f} {y0:.2f} "
        f"A {PIE_RADIUS:.2f} {PIE_RADIUS:.2f} 0 {large_arc} 1 {x1:.2f} {y1:.2f} Z"
    )


def build_pie_chart(items: Sequence[tuple[str, int]]) -> list[PieSlice]:
    """Proportional slices starting at twelve o'clock; empty when everything is zero."""

    total = sum(value for _name, value in items)
    if total <= 0:
        return []

    slices = []
    angle = -math.pi / 2
    for index, (name, value) in enumerate(items):
        fraction = value / total
        sweep = fraction * 2 * math.pi
        percent = int(fraction * 100 + 0.5)
        slices.append(
            PieSlice(
                name=name,
                value=value,
                percent=percent,
                label=f"{name}: {percent}%",
                color=STATUS_COLORS[index % len(STATUS_COLORS)],
                path=_arc_path(angle, angle + sweep),
            )
        )
        angle += sweep
    return slices
