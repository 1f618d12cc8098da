"""Pydantic schemas for the admin dashboard endpoints.

JSON keys are camelCase and must stay byte-for-byte compatible with the
admin frontend (including the historical ``orderFullfillment`` spelling).
"""

from pydantic import Field

from app.shared.schemas import CamelModel

# =============================================================================
# /dashboard/stats
# =============================================================================


class ChangePercent(CamelModel):
    """This month versus last month, in whole percent."""

    revenue: int | float = Field(..., description="Change in order revenue.")
    product: int | float = Field(..., description="Change in products created.")
    user: int | float = Field(..., description="Change in users registered.")
    order: int | float = Field(..., description="Change in orders placed.")


class StatCounts(CamelModel):
    """Headline totals shown on the dashboard widgets."""

    revenue: float = Field(..., description="Revenue of orders placed this month.")
    product: int = Field(..., ge=0, description="Total products in the catalog.")
    user: int = Field(..., ge=0, description="Total registered users.")
    order: int = Field(..., ge=0, description="Total orders ever placed.")


class DashboardChart(CamelModel):
    """Six-month series, oldest month first."""

    order: list[int | float] = Field(..., description="Orders placed per month.")
    revenue: list[int | float] = Field(..., description="Order revenue per month.")


class UserRatio(CamelModel):
    """Gender split of registered users."""

    male: int = Field(..., ge=0)
    female: int = Field(..., ge=0)


class LatestTransaction(CamelModel):
    """Compact view of a recent order."""

    id: str = Field(..., alias="_id", description="Order id.")
    discount: float
    amount: float = Field(..., description="Order total.")
    quantity: int = Field(..., ge=0, description="Number of order lines.")
    status: str


class DashboardStats(CamelModel):
    """Everything rendered on the dashboard landing page."""

    category_count: dict[str, int] = Field(
        ...,
        description="Percentage of the catalog in each category (category order kept).",
    )
    change_percent: ChangePercent
    count: StatCounts
    chart: DashboardChart
    user_ratio: UserRatio
    latest_transaction: list[LatestTransaction]


class DashboardStatsResponse(CamelModel):
    """Response for GET /dashboard/stats."""

    success: bool = True
    stats: DashboardStats


# =============================================================================
# /dashboard/pie
# =============================================================================


class OrderFulfillment(CamelModel):
    """Orders per fulfilment status."""

    processing: int = Field(..., ge=0)
    shipped: int = Field(..., ge=0)
    delivered: int = Field(..., ge=0)


class StockAvailability(CamelModel):
    """Products with and without stock."""

    in_stock: int = Field(..., ge=0)
    out_of_stock: int = Field(..., ge=0)


class RevenueDistribution(CamelModel):
    """Decomposition of gross order income."""

    net_margin: float
    discount: float
    production_cost: float
    burnt: float
    marketing_cost: float


class UsersAgeGroup(CamelModel):
    """Users per age band (users without a date of birth are skipped)."""

    teen: int = Field(..., ge=0)
    adult: int = Field(..., ge=0)
    old: int = Field(..., ge=0)


class AdminCustomer(CamelModel):
    """Accounts per role."""

    admin: int = Field(..., ge=0)
    customer: int = Field(..., ge=0)


class PieCharts(CamelModel):
    """Data for every pie/doughnut chart."""

    order_fullfillment: OrderFulfillment
    product_categories: dict[str, int]
    stock_availability: StockAvailability
    revenue_distribution: RevenueDistribution
    users_age_group: UsersAgeGroup
    admin_customer: AdminCustomer


class PieChartsResponse(CamelModel):
    """Response for GET /dashboard/pie."""

    success: bool = True
    charts: PieCharts


# =============================================================================
# /dashboard/bar and /dashboard/line
# =============================================================================


class BarCharts(CamelModel):
    """Monthly counts: 6 months of users/products, 12 months of orders."""

    users: list[int | float]
    products: list[int | float]
    orders: list[int | float]


class BarChartsResponse(CamelModel):
    """Response for GET /dashboard/bar."""

    success: bool = True
    charts: BarCharts


class LineCharts(CamelModel):
    """Twelve-month series of counts and order sums."""

    users: list[int | float]
    products: list[int | float]
    discount: list[int | float]
    revenue: list[int | float]


class LineChartsResponse(CamelModel):
    """Response for GET /dashboard/line."""

    success: bool = True
    charts: LineCharts
