"""Dashboard and stats aggregation."""

from src.analytics.aggregates import DashboardView, StatsView, ViewTaskScope, load_dashboard, load_stats

__all__ = ["DashboardView", "StatsView", "ViewTaskScope", "load_dashboard", "load_stats"]
