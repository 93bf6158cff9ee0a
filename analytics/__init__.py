"""Classification, period bucketing and reporting helpers."""

from analytics.classification import Classifier, normalize_product_name
from analytics.periods import (
    BASE_WEEKS,
    MONTH_NAMES,
    MonthlySpend,
    PeriodAggregator,
    first_weekday_of_month,
    month_label,
    parse_issue_date,
    week_key,
    week_of_month,
)
from analytics.reporting import (
    WEEKLY_MEAN_DIVISOR,
    CategoryTotalRow,
    PeriodReport,
    active_categories,
    build_period_report,
    category_totals,
    period_total,
    week_totals,
    weekly_mean,
)

__all__ = [
    "Classifier",
    "normalize_product_name",
    "BASE_WEEKS",
    "MONTH_NAMES",
    "MonthlySpend",
    "PeriodAggregator",
    "first_weekday_of_month",
    "month_label",
    "parse_issue_date",
    "week_key",
    "week_of_month",
    "WEEKLY_MEAN_DIVISOR",
    "CategoryTotalRow",
    "PeriodReport",
    "active_categories",
    "build_period_report",
    "category_totals",
    "period_total",
    "week_totals",
    "weekly_mean",
]
