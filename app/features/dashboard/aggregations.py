"""Pure aggregation helpers behind the dashboard endpoints.

Provided:
- percent_change: relative growth between two period aggregates
- category_percentages: share of the catalog held by each category
- build_series: month-bucketed counts or sums, oldest month first
- summarize_ratings: average rating and review count
- revenue_distribution / age_groups: pie chart decompositions

CRITICAL: Every helper is total; empty inputs and zero denominators
yield zeros rather than raising.

Percentages (``whole_percent``) are whole numbers rounded away from zero,
so 0.1% reports as 1 and -37.5% as -38. Other values (rating averages,
marketing cost) round half away from zero (``round_half_up``).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, ROUND_UP, Decimal
from typing import Any

import numpy as np

# Fixed business constants for the revenue pie chart
PRODUCTION_COST_RATIO = 0.3
MARKETING_COST_PERCENT = 30

TEEN_AGE_LIMIT = 20
ADULT_AGE_LIMIT = 40


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round half away from zero.

    Python's built-in ``round`` rounds half to even, which would report a
    3.25 average as 3.2. Decimal quantisation avoids that.

    Args:
        value: Number to round.
        ndigits: Decimal places to keep.

    Returns:
        Rounded value; an int when ``ndigits`` is 0.
    """
    quantum = Decimal(1).scaleb(-ndigits)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if ndigits == 0 else float(rounded)


def whole_percent(part: float, whole: float) -> int:
    """``part / whole`` as a whole percent, rounded away from zero.

    Every dashboard percentage goes through this rule: any non-zero
    ratio stays non-zero and keeps its sign, so 0.1% reports as 1 and
    -0.1% as -1. The ratio is exact (Decimal), so 2/10 is 20 and not 21.

    Args:
        part: Numerator.
        whole: Non-zero denominator.

    Returns:
        Rounded percentage.
    """
    ratio = Decimal(str(part)) * 100 / Decimal(str(whole))
    return int(ratio.to_integral_value(rounding=ROUND_UP))


def percent_change(current: float, previous: float) -> float:
    """Relative change of ``current`` against ``previous`` in percent.

    A zero baseline is reported as ``current * 100`` so growth from nothing
    still shows up on the dashboard; ``(0, 0)`` is 0.

    Args:
        current: This period's aggregate.
        previous: Last period's aggregate.

    Returns:
        Whole-percent change (zero-baseline results are not rounded).
    """
    if previous == 0:
        return current * 100
    return whole_percent(current - previous, previous)


def category_percentages(counts: Mapping[str, int], total: int) -> dict[str, int]:
    """Share of ``total`` held by each category, in input order.

    Args:
        counts: Product count per category.
        total: Total product count.

    Returns:
        Mapping category -> rounded percentage (all 0 when total is 0).
    """
    if total <= 0:
        return {category: 0 for category in counts}
    return {category: whole_percent(count, total) for category, count in counts.items()}


def months_between(reference: date, moment: date) -> int:
    """Calendar months from ``moment``'s month to ``reference``'s month."""
    return (reference.year - moment.year) * 12 + (reference.month - moment.month)


def build_series(
    records: Iterable[Any],
    length: int,
    reference: date,
    value_property: str | None = None,
) -> list[float]:
    """Bucket records into ``length`` calendar months ending at ``reference``.

    Index 0 is the month ``length - 1`` months before ``reference``'s month
    and the last index is ``reference``'s month. Records outside the window
    (older, or dated after ``reference``) are skipped.

    Args:
        records: Objects with a ``created_at`` date/datetime.
        length: Number of monthly buckets.
        reference: Date whose month is the newest bucket.
        value_property: Attribute to sum; counts records when None. Missing
            or None values count as 0.

    Returns:
        List of ``length`` counts (ints) or sums (floats), oldest first.
    """
    if length <= 0:
        return []

    indices: list[int] = []
    weights: list[float] = []
    for record in records:
        months_ago = months_between(reference, record.created_at)
        if 0 <= months_ago < length:
            indices.append(length - 1 - months_ago)
            if value_property is not None:
                weights.append(float(getattr(record, value_property, None) or 0))

    index_array = np.asarray(indices, dtype=np.intp)
    if value_property is None:
        counts = np.bincount(index_array, minlength=length)
        return [int(c) for c in counts]

    sums = np.bincount(index_array, weights=np.asarray(weights, dtype=float), minlength=length)
    return [float(s) for s in sums]


@dataclass(frozen=True)
class RatingSummary:
    """Average rating and review count of one product.

    Attributes:
        average: Mean rating rounded to 1 decimal (0 without reviews).
        count: Number of reviews.
    """

    average: float
    count: int


def summarize_ratings(ratings: Sequence[int | float]) -> RatingSummary:
    """Average and count of a product's review ratings."""
    if not ratings:
        return RatingSummary(average=0, count=0)
    average = round_half_up(sum(ratings) / len(ratings), 1)
    return RatingSummary(average=float(average), count=len(ratings))


@dataclass(frozen=True)
class RevenueBreakdown:
    """Where gross order income goes.

    Attributes:
        net_margin: Income left after every deduction.
        discount: Coupon discounts granted.
        production_cost: 30% of order subtotals.
        burnt: Tax plus shipping charges.
        marketing_cost: 30% of gross income, rounded.
    """

    net_margin: float
    discount: float
    production_cost: float
    burnt: float
    marketing_cost: float


def revenue_distribution(orders: Iterable[Any]) -> RevenueBreakdown:
    """Decompose gross order income for the revenue pie chart.

    Args:
        orders: Objects exposing total, discount, subtotal, tax and
            shipping_charges (None counts as 0).

    Returns:
        RevenueBreakdown of all orders.
    """
    gross_income = 0.0
    discount = 0.0
    subtotal = 0.0
    burnt = 0.0
    for order in orders:
        gross_income += order.total or 0
        discount += order.discount or 0
        subtotal += order.subtotal or 0
        burnt += (order.tax or 0) + (order.shipping_charges or 0)

    production_cost = subtotal * PRODUCTION_COST_RATIO
    marketing_cost = round_half_up(gross_income * (MARKETING_COST_PERCENT / 100))
    net_margin = gross_income - discount - production_cost - burnt - marketing_cost

    return RevenueBreakdown(
        net_margin=net_margin,
        discount=discount,
        production_cost=production_cost,
        burnt=burnt,
        marketing_cost=marketing_cost,
    )


def age_groups(ages: Iterable[int | None]) -> dict[str, int]:
    """Count users per age band; unknown ages are skipped.

    Returns:
        ``{"teen": <20, "adult": 20-39, "old": >=40}`` counts.
    """
    groups = {"teen": 0, "adult": 0, "old": 0}
    for age in ages:
        if age is None:
            continue
        if age < TEEN_AGE_LIMIT:
            groups["teen"] += 1
        elif age < ADULT_AGE_LIMIT:
            groups["adult"] += 1
        else:
            groups["old"] += 1
    return groups


def month_start(moment: datetime, months_back: int = 0) -> datetime:
    """First instant of the month ``months_back`` months before ``moment``.

    Keeps ``moment``'s tzinfo.
    """
    month_index = moment.year * 12 + (moment.month - 1) - months_back
    year, month = divmod(month_index, 12)
    return moment.replace(
        year=year, month=month + 1, day=1, hour=0, minute=0, second=0, microsecond=0
    )
