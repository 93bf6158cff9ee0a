"""Reporting view model derived from a weekly category breakdown."""

from __future__ import annotations

from typing import Final, Mapping, TypedDict

from core.models import WeeklyBreakdown
from core.registry import CategoryRegistry
from visualization.theme import CategoryStyles, default_category_styles

__all__ = [
    "WEEKLY_MEAN_DIVISOR",
    "CategoryTotalRow",
    "PeriodReport",
    "active_categories",
    "period_total",
    "category_totals",
    "weekly_mean",
    "week_totals",
    "build_period_report",
]

# Months are reported as four weeks regardless of how many buckets they span.
WEEKLY_MEAN_DIVISOR: Final[int] = 4


class CategoryTotalRow(TypedDict):
    category_id: str
    code: str | None
    label: str
    color: str
    icon: str
    total: float
    share: float


class PeriodReport(TypedDict):
    active_categories: list[str]
    total: float
    weekly_mean: float
    week_totals: dict[int, float]
    category_totals: list[CategoryTotalRow]


def active_categories(weeks: Mapping[int, Mapping[str, float]]) -> list[str]:
    """Return categories with nonzero spend, in first-seen order by week."""

    seen: dict[str, None] = {}
    for week in sorted(weeks):
        for category_id, value in weeks[week].items():
            if value != 0:
                seen.setdefault(category_id, None)
    return list(seen)


def period_total(weeks: Mapping[int, Mapping[str, float]]) -> float:
    return float(sum(sum(bucket.values()) for bucket in weeks.values()))


def week_totals(weeks: Mapping[int, Mapping[str, float]]) -> dict[int, float]:
    return {week: float(sum(weeks[week].values())) for week in sorted(weeks)}


def weekly_mean(total: float) -> float:
    """Return ``total`` spread over :data:`WEEKLY_MEAN_DIVISOR` weeks.

    This is a fixed approximation: months spanning 5 or 6 week buckets are
    still divided by four.
    """

    return float(total) / WEEKLY_MEAN_DIVISOR


def category_totals(
    weeks: Mapping[int, Mapping[str, float]],
    registry: CategoryRegistry | None = None,
    styles: CategoryStyles | None = None,
) -> list[CategoryTotalRow]:
    """Return per-category totals for the period, largest first."""

    styles = styles or default_category_styles()
    totals: dict[str, float] = {}
    for week in sorted(weeks):
        for category_id, value in weeks[week].items():
            totals[category_id] = totals.get(category_id, 0.0) + float(value)

    grand_total = sum(totals.values())
    rows: list[CategoryTotalRow] = []
    # sorted() is stable, so equal totals keep first-seen order.
    for category_id, value in sorted(totals.items(), key=lambda kv: kv[1], reverse=True):
        if value == 0:
            continue
        category = registry.get(category_id) if registry is not None else None
        code = category.code if category is not None else None
        style = styles.style_for(code, category)
        rows.append(
            {
                "category_id": category_id,
                "code": code,
                "label": style.label,
                "color": style.color,
                "icon": style.icon,
                "total": value,
                "share": value / grand_total if grand_total > 0 else 0.0,
            }
        )
    return rows


def build_period_report(
    weeks: WeeklyBreakdown,
    registry: CategoryRegistry | None = None,
    styles: CategoryStyles | None = None,
) -> PeriodReport:
    """Derive totals, rankings and the weekly mean for one period.

    ``weeks`` is the output of
    :meth:`analytics.periods.PeriodAggregator.weeks_in_month` and is not
    modified.
    """

    total = period_total(weeks)
    return {
        "active_categories": active_categories(weeks),
        "total": total,
        "weekly_mean": weekly_mean(total),
        "week_totals": week_totals(weeks),
        "category_totals": category_totals(weeks, registry, styles),
    }
