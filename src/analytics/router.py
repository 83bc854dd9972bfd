"""Dashboard and stats API routes."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends

from src.analytics.aggregates import load_dashboard, load_stats
from src.auth.dependencies import get_gateway, require_user
from src.gateway.session import SessionGateway
from src.schemas.analytics import DashboardResponse, StatsResponse
from src.storage.models import User


router = APIRouter(prefix="/api", tags=["analytics"])


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard_endpoint(
    gateway: SessionGateway = Depends(get_gateway),
    _user: User = Depends(require_user),
) -> DashboardResponse:
    view = await load_dashboard(gateway)
    return DashboardResponse.model_validate(asdict(view))


@router.get("/stats", response_model=StatsResponse)
async def stats_endpoint(
    gateway: SessionGateway = Depends(get_gateway),
    _user: User = Depends(require_user),
) -> StatsResponse:
    view = await load_stats(gateway)
    return StatsResponse.model_validate(asdict(view))
