"""API routes for the admin dashboard.

All four endpoints are read-only and compute their payloads on request
from the record store.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.database import get_session_maker
from app.core.logging import get_logger
from app.features.dashboard.schemas import (
    BarChartsResponse,
    DashboardStatsResponse,
    LineChartsResponse,
    PieChartsResponse,
)
from app.features.dashboard.service import DashboardService

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get(
    "/stats",
    response_model=DashboardStatsResponse,
    response_model_by_alias=True,
    summary="Dashboard landing statistics",
    description="""
Headline numbers for the admin dashboard.

**Sections**:
- `categoryCount`: percentage of the catalog in each category
- `changePercent`: this calendar month versus last (revenue, product, user, order)
- `count`: this month's revenue plus all-time product, user and order totals
- `chart`: orders and revenue for the last 6 calendar months, oldest first
- `userRatio`: male/female split
- `latestTransaction`: the 4 most recent orders

A zero baseline reports `current * 100` as the change.
""",
)
async def get_dashboard_stats(
    session_maker: async_sessionmaker[AsyncSession] = Depends(get_session_maker),
) -> DashboardStatsResponse:
    """Compute dashboard statistics.

    Args:
        session_maker: Session factory for concurrent reads.

    Returns:
        Dashboard statistics envelope.
    """
    service = DashboardService(session_maker)
    stats = await service.get_stats()
    return DashboardStatsResponse(stats=stats)


@router.get(
    "/pie",
    response_model=PieChartsResponse,
    response_model_by_alias=True,
    summary="Pie chart data",
    description="""
Order fulfilment, category shares, stock availability, revenue distribution,
user age groups and the admin/customer split.
""",
)
async def get_pie_charts(
    session_maker: async_sessionmaker[AsyncSession] = Depends(get_session_maker),
) -> PieChartsResponse:
    """Compute pie chart data."""
    service = DashboardService(session_maker)
    charts = await service.get_pie_charts()
    return PieChartsResponse(charts=charts)


@router.get(
    "/bar",
    response_model=BarChartsResponse,
    response_model_by_alias=True,
    summary="Bar chart data",
    description="Monthly counts: products and users for 6 months, orders for 12.",
)
async def get_bar_charts(
    session_maker: async_sessionmaker[AsyncSession] = Depends(get_session_maker),
) -> BarChartsResponse:
    """Compute bar chart series."""
    service = DashboardService(session_maker)
    charts = await service.get_bar_charts()
    return BarChartsResponse(charts=charts)


@router.get(
    "/line",
    response_model=LineChartsResponse,
    response_model_by_alias=True,
    summary="Line chart data",
    description="Twelve-month series of users, products, discounts and revenue.",
)
async def get_line_charts(
    session_maker: async_sessionmaker[AsyncSession] = Depends(get_session_maker),
) -> LineChartsResponse:
    """Compute line chart series."""
    service = DashboardService(session_maker)
    charts = await service.get_line_charts()
    return LineChartsResponse(charts=charts)
