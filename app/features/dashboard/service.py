"""Service layer for the admin dashboard.

Assembles the stats, pie, bar and line chart payloads from the record
store. Independent reads are issued concurrently with ``asyncio.gather``;
each read runs in its own short-lived session because one AsyncSession
cannot serve overlapping queries.
"""

import asyncio
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import ColumnElement, Row, Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.config import get_settings
from app.core.logging import get_logger
from app.features.dashboard.aggregations import (
    age_groups,
    build_series,
    category_percentages,
    month_start,
    percent_change,
    revenue_distribution,
)
from app.features.dashboard.schemas import (
    AdminCustomer,
    BarCharts,
    ChangePercent,
    DashboardChart,
    DashboardStats,
    LatestTransaction,
    LineCharts,
    OrderFulfillment,
    PieCharts,
    RevenueDistribution,
    StatCounts,
    StockAvailability,
    UserRatio,
    UsersAgeGroup,
)
from app.features.records.filters import CreatedBetween
from app.features.records.models import (
    Gender,
    Order,
    OrderStatus,
    Product,
    User,
    UserRole,
    age_on,
)

logger = get_logger(__name__)

SHORT_WINDOW_MONTHS = 6
LONG_WINDOW_MONTHS = 12


class DashboardService:
    """Service computing dashboard statistics and chart series.

    All methods are async and read-only. ``today`` may be passed to pin the
    reference instant; it defaults to the current UTC time.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        """Initialize dashboard service.

        Args:
            session_maker: Factory for the per-query read sessions.
        """
        self.settings = get_settings()
        self.session_maker = session_maker

    # =========================================================================
    # Query helpers
    # =========================================================================

    async def _scalar(self, stmt: Select[Any]) -> Any:
        async with self.session_maker() as session:
            result = await session.execute(stmt)
            return result.scalar_one()

    async def _scalars(self, stmt: Select[Any]) -> list[Any]:
        async with self.session_maker() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def _rows(self, stmt: Select[Any]) -> Sequence[Row[Any]]:
        async with self.session_maker() as session:
            result = await session.execute(stmt)
            return result.all()

    async def _count(self, model: Any, *criteria: ColumnElement[bool]) -> int:
        stmt = select(func.count()).select_from(model)
        if criteria:
            stmt = stmt.where(*criteria)
        return int(await self._scalar(stmt))

    async def _count_created(self, model: Any, window: CreatedBetween) -> int:
        stmt = window.apply(select(func.count()).select_from(model), model)
        return int(await self._scalar(stmt))

    async def _revenue_created(self, window: CreatedBetween) -> float:
        stmt = window.apply(select(func.coalesce(func.sum(Order.total), 0)), Order)
        return float(await self._scalar(stmt))

    async def _categories(self) -> list[str]:
        stmt = select(Product.category).distinct().order_by(Product.category)
        return [c for c in await self._scalars(stmt) if c is not None]

    async def category_counts(self, categories: Sequence[str], total: int) -> dict[str, int]:
        """Percentage of the catalog in each category.

        Issues one count query per category concurrently and keeps the
        order of ``categories``.

        Args:
            categories: Category names.
            total: Total product count.

        Returns:
            Mapping category -> rounded percentage.
        """
        counts = await asyncio.gather(
            *(self._count(Product, Product.category == category) for category in categories)
        )
        return category_percentages(dict(zip(categories, counts, strict=True)), total)

    # =========================================================================
    # Payload assemblers
    # =========================================================================

    async def get_stats(self, today: datetime | None = None) -> DashboardStats:
        """Compute the dashboard landing page statistics.

        This month is compared with last month (calendar months). The chart
        covers the last 6 calendar months including the current one.

        Args:
            today: Reference instant (defaults to now, UTC).

        Returns:
            Dashboard statistics.
        """
        now = today or datetime.now(UTC)
        this_month = CreatedBetween(month_start(now), now)
        last_month = CreatedBetween(month_start(now, 1), month_start(now), end_inclusive=False)
        six_months = CreatedBetween(month_start(now, SHORT_WINDOW_MONTHS - 1), now)

        latest_stmt = (
            select(Order.id, Order.discount, Order.total, Order.order_items, Order.status)
            .order_by(Order.created_at.desc(), Order.id)
            .limit(self.settings.latest_transactions_limit)
        )
        six_month_stmt = six_months.apply(select(Order.created_at, Order.total), Order)

        (
            this_month_products,
            this_month_users,
            this_month_orders,
            this_month_revenue,
            last_month_products,
            last_month_users,
            last_month_orders,
            last_month_revenue,
            products_count,
            users_count,
            orders_count,
            six_month_orders,
            categories,
            female_users_count,
            latest_orders,
        ) = await asyncio.gather(
            self._count_created(Product, this_month),
            self._count_created(User, this_month),
            self._count_created(Order, this_month),
            self._revenue_created(this_month),
            self._count_created(Product, last_month),
            self._count_created(User, last_month),
            self._count_created(Order, last_month),
            self._revenue_created(last_month),
            self._count(Product),
            self._count(User),
            self._count(Order),
            self._rows(six_month_stmt),
            self._categories(),
            self._count(User, User.gender == Gender.FEMALE.value),
            self._rows(latest_stmt),
        )

        category_count = await self.category_counts(categories, products_count)

        stats = DashboardStats(
            category_count=category_count,
            change_percent=ChangePercent(
                revenue=percent_change(this_month_revenue, last_month_revenue),
                product=percent_change(this_month_products, last_month_products),
                user=percent_change(this_month_users, last_month_users),
                order=percent_change(this_month_orders, last_month_orders),
            ),
            count=StatCounts(
                revenue=this_month_revenue,
                product=products_count,
                user=users_count,
                order=orders_count,
            ),
            chart=DashboardChart(
                order=build_series(six_month_orders, SHORT_WINDOW_MONTHS, now),
                revenue=build_series(six_month_orders, SHORT_WINDOW_MONTHS, now, "total"),
            ),
            user_ratio=UserRatio(
                male=users_count - female_users_count,
                female=female_users_count,
            ),
            latest_transaction=[
                LatestTransaction(
                    id=row.id,
                    discount=row.discount or 0,
                    amount=row.total or 0,
                    quantity=len(row.order_items or []),
                    status=row.status,
                )
                for row in latest_orders
            ],
        )

        logger.info(
            "dashboard.stats_computed",
            reference=now.isoformat(),
            products=products_count,
            users=users_count,
            orders=orders_count,
            this_month_revenue=this_month_revenue,
        )

        return stats

    async def get_pie_charts(self, today: datetime | None = None) -> PieCharts:
        """Compute pie chart data over the whole record store.

        Args:
            today: Reference instant for user ages (defaults to now, UTC).

        Returns:
            Pie chart payload.
        """
        now = today or datetime.now(UTC)
        orders_stmt = select(
            Order.total, Order.discount, Order.subtotal, Order.tax, Order.shipping_charges
        )

        (
            processing,
            shipped,
            delivered,
            categories,
            products_count,
            out_of_stock,
            orders,
            dobs,
            admins,
            customers,
        ) = await asyncio.gather(
            self._count(Order, Order.status == OrderStatus.PROCESSING.value),
            self._count(Order, Order.status == OrderStatus.SHIPPED.value),
            self._count(Order, Order.status == OrderStatus.DELIVERED.value),
            self._categories(),
            self._count(Product),
            self._count(Product, Product.stock == 0),
            self._rows(orders_stmt),
            self._scalars(select(User.dob)),
            self._count(User, User.role == UserRole.ADMIN.value),
            self._count(User, User.role == UserRole.USER.value),
        )

        product_categories = await self.category_counts(categories, products_count)
        breakdown = revenue_distribution(orders)
        ages = age_groups(age_on(dob, now.date()) for dob in dobs)

        charts = PieCharts(
            order_fullfillment=OrderFulfillment(
                processing=processing,
                shipped=shipped,
                delivered=delivered,
            ),
            product_categories=product_categories,
            stock_availability=StockAvailability(
                in_stock=products_count - out_of_stock,
                out_of_stock=out_of_stock,
            ),
            revenue_distribution=RevenueDistribution(
                net_margin=breakdown.net_margin,
                discount=breakdown.discount,
                production_cost=breakdown.production_cost,
                burnt=breakdown.burnt,
                marketing_cost=breakdown.marketing_cost,
            ),
            users_age_group=UsersAgeGroup(**ages),
            admin_customer=AdminCustomer(admin=admins, customer=customers),
        )

        logger.info(
            "dashboard.pie_computed",
            products=products_count,
            orders=len(orders),
            categories=len(categories),
        )

        return charts

    async def get_bar_charts(self, today: datetime | None = None) -> BarCharts:
        """Monthly counts: 6 months of products and users, 12 of orders.

        Args:
            today: Reference instant (defaults to now, UTC).

        Returns:
            Bar chart payload.
        """
        now = today or datetime.now(UTC)
        six_months = CreatedBetween(month_start(now, SHORT_WINDOW_MONTHS - 1), now)
        twelve_months = CreatedBetween(month_start(now, LONG_WINDOW_MONTHS - 1), now)

        products, users, orders = await asyncio.gather(
            self._rows(six_months.apply(select(Product.created_at), Product)),
            self._rows(six_months.apply(select(User.created_at), User)),
            self._rows(twelve_months.apply(select(Order.created_at), Order)),
        )

        charts = BarCharts(
            users=build_series(users, SHORT_WINDOW_MONTHS, now),
            products=build_series(products, SHORT_WINDOW_MONTHS, now),
            orders=build_series(orders, LONG_WINDOW_MONTHS, now),
        )

        logger.info(
            "dashboard.bar_computed",
            products=len(products),
            users=len(users),
            orders=len(orders),
        )

        return charts

    async def get_line_charts(self, today: datetime | None = None) -> LineCharts:
        """Twelve-month series of users, products, discounts and revenue.

        Args:
            today: Reference instant (defaults to now, UTC).

        Returns:
            Line chart payload.
        """
        now = today or datetime.now(UTC)
        twelve_months = CreatedBetween(month_start(now, LONG_WINDOW_MONTHS - 1), now)

        products, users, orders = await asyncio.gather(
            self._rows(twelve_months.apply(select(Product.created_at), Product)),
            self._rows(twelve_months.apply(select(User.created_at), User)),
            self._rows(
                twelve_months.apply(
                    select(Order.created_at, Order.discount, Order.total),
                    Order,
                )
            ),
        )

        charts = LineCharts(
            users=build_series(users, LONG_WINDOW_MONTHS, now),
            products=build_series(products, LONG_WINDOW_MONTHS, now),
            discount=build_series(orders, LONG_WINDOW_MONTHS, now, "discount"),
            revenue=build_series(orders, LONG_WINDOW_MONTHS, now, "total"),
        )

        logger.info(
            "dashboard.line_computed",
            products=len(products),
            users=len(users),
            orders=len(orders),
        )

        return charts
