"""Concurrent count aggregation for the dashboard and stats views.

Each view fans out its count queries to worker threads and fans back in only
once every query has settled, so a view never renders a partial set of
numbers. A query that fails is reported as unavailable on its tile rather
than passed off as a real zero.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Optional, Sequence

from src.analytics.charts import BarDatum, PieSlice, build_bar_chart, build_pie_chart
from src.core.errors import GatewayError
from src.core.logger import get_logger
from src.core.metrics import record_count_query_failure
from src.gateway.session import RowFilter, SessionGateway, eq, gte
from src.storage.models import ClientStatus


logger = get_logger("freelance_flow.analytics")

RECENT_WINDOW = timedelta(seconds=7 * 24 * 3600)


class ViewTaskScope:
    """Owns the tasks spawned on behalf of one view instance.

    Leaving the scope cancels whatever is still running, so results that
    arrive after the view has been torn down are dropped.
    """

    def __init__(self) -> None:
        self._tasks: list[asyncio.Task] = []

    async def __aenter__(self) -> "ViewTaskScope":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        pending = [task for task in self._tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        return False

    def spawn(self, awaitable: Awaitable[Any]) -> asyncio.Task:
        task = asyncio.ensure_future(awaitable)
        self._tasks.append(task)
        return task

    async def gather(self) -> list[Any]:
        return list(await asyncio.gather(*self._tasks))


@dataclass(frozen=True)
class CountQuery:
    key: str
    table: str
    filters: tuple[RowFilter, ...] = ()


@dataclass(frozen=True)
class CountResult:
    key: str
    value: int
    available: bool


async def _run_count(gateway: SessionGateway, query: CountQuery) -> CountResult:
    try:
        value = await asyncio.to_thread(gateway.count_rows, query.table, query.filters)
    except GatewayError as exc:
        record_count_query_failure(query=query.key)
        logger.warning("count_query_failed", query=query.key, table=query.table, error=str(exc))
        return CountResult(key=query.key, value=0, available=False)
    return CountResult(key=query.key, value=value, available=True)


async def run_counts(gateway: SessionGateway, queries: Sequence[CountQuery]) -> dict[str, CountResult]:
    async with ViewTaskScope() as scope:
        for query in queries:
            scope.spawn(_run_count(gateway, query))
        results = await scope.gather()
    return {result.key: result for result in results}


@dataclass(frozen=True)
class Tile:
    key: str
    title: str
    value: int
    description: str
    available: bool


@dataclass(frozen=True)
class QuickAction:
    title: str
    url: str
    description: str


@dataclass(frozen=True)
class DashboardView:
    tiles: list[Tile]
    quick_actions: list[QuickAction]
    degraded: bool


DASHBOARD_TILES = (
    ("total_proposals", "Total Proposals", "All generated proposals"),
    ("total_clients", "Total Clients", "Active clients"),
    ("pending_clients", "Pending Clients", "Awaiting response"),
    ("recent_proposals", "This Week", "Proposals generated"),
)

QUICK_ACTIONS = (
    QuickAction(
        title="Generate Proposal",
        url="/generate",
        description="Create AI-powered proposals for your clients",
    ),
    QuickAction(
        title="Manage Clients",
        url="/clients",
        description="Track and organize your client relationships",
    ),
)


def dashboard_queries(now: datetime) -> list[CountQuery]:
    return [
        CountQuery("total_proposals", "proposals"),
        CountQuery("total_clients", "clients"),
        CountQuery("pending_clients", "clients", (eq("status", ClientStatus.PENDING.value),)),
        CountQuery("recent_proposals", "proposals", (gte("created_at", now - RECENT_WINDOW),)),
    ]


async def load_dashboard(gateway: SessionGateway, now: Optional[datetime] = None) -> DashboardView:
    now = now or datetime.now(timezone.utc)
    counts = await run_counts(gateway, dashboard_queries(now))

    tiles = [
        Tile(
            key=key,
            title=title,
            value=counts[key].value,
            description=description,
            available=counts[key].available,
        )
        for key, title, description in DASHBOARD_TILES
    ]
    return DashboardView(
        tiles=tiles,
        quick_actions=list(QUICK_ACTIONS),
        degraded=not all(result.available for result in counts.values()),
    )


@dataclass(frozen=True)
class StatusCard:
    status: str
    title: str
    value: int
    description: str
    available: bool


@dataclass(frozen=True)
class StatsView:
    counts: dict[str, int]
    bar_chart: list[BarDatum]
    pie_chart: list[PieSlice]
    status_cards: list[StatusCard]
    degraded: bool
    unavailable: list[str] = field(default_factory=list)


STATS_QUERIES = (
    CountQuery("total_proposals", "proposals"),
    CountQuery("replied", "clients", (eq("status", ClientStatus.REPLIED.value),)),
    CountQuery("pending", "clients", (eq("status", ClientStatus.PENDING.value),)),
    CountQuery("rejected", "clients", (eq("status", ClientStatus.REJECTED.value),)),
)

STATUS_CARDS = (
    (ClientStatus.REPLIED.value, "Replied", "Positive responses"),
    (ClientStatus.PENDING.value, "Pending", "Awaiting response"),
    (ClientStatus.REJECTED.value, "Rejected", "Declined proposals"),
)


async def load_stats(gateway: SessionGateway) -> StatsView:
    results = await run_counts(gateway, STATS_QUERIES)
    counts = {key: result.value for key, result in results.items()}

    status_series = [(title, counts[status]) for status, title, _description in STATUS_CARDS]
    bar_series = [("Total Proposals", counts["total_proposals"]), *status_series]

    unavailable = sorted(key for key, result in results.items() if not result.available)
    return StatsView(
        counts=counts,
        bar_chart=build_bar_chart(bar_series),
        pie_chart=build_pie_chart(status_series),
        status_cards=[
            StatusCard(
                status=status,
                title=title,
                value=counts[status],
                description=description,
                available=results[status].available,
            )
            for status, title, description in STATUS_CARDS
        ],
        degraded=bool(unavailable),
        unavailable=unavailable,
    )
