"""Navigation API route."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Query

from src.navigation.menu import build_navigation
from src.schemas.navigation import NavigationResponse


router = APIRouter(prefix="/api", tags=["navigation"])


@router.get("/navigation", response_model=NavigationResponse)
def navigation_endpoint(
    path: str = Query(default="/dashboard", max_length=200),
    collapsed: bool = Query(default=False),
) -> NavigationResponse:
    return NavigationResponse.model_validate(asdict(build_navigation(path, collapsed)))
