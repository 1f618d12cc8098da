"""Admin dashboard: statistics and chart series over the record store."""

from app.features.dashboard.routes import router
from app.features.dashboard.schemas import (
    BarCharts,
    DashboardStats,
    LineCharts,
    PieCharts,
)
from app.features.dashboard.service import DashboardService

__all__ = [
    "BarCharts",
    "DashboardService",
    "DashboardStats",
    "LineCharts",
    "PieCharts",
    "router",
]
