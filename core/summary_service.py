"""Assemble dashboard data for one reporting session."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Optional

from analytics.classification import Classifier
from analytics.periods import PeriodAggregator, month_label
from analytics.reporting import build_period_report
from config.settings import Settings, get_settings
from core.data_loader import category_from_record, prefix_rule_from_record, receipt_from_record
from core.logging_setup import get_logger
from core.models import Category, DashboardData, MonthKey, PrefixRule, Receipt, WeeklyBreakdown
from core.prefix_index import PrefixIndex
from core.registry import CategoryRegistry
from visualization.series import build_weekly_series
from visualization.theme import CategoryStyles

__all__ = ["prepare_dashboard_data"]

logger = get_logger("core.summary_service")


def _coerce(records: Iterable[Any], kind: type, factory: Callable[[Mapping[str, Any]], Any]) -> list:
    """Accept domain objects or raw store mappings."""

    return [record if isinstance(record, kind) else factory(record) for record in records]


def prepare_dashboard_data(
    categories: Iterable[Category | Mapping[str, Any]],
    rules: Iterable[PrefixRule | Mapping[str, Any]],
    receipts: Iterable[Receipt | Mapping[str, Any]],
    target_month: Optional[tuple[int, int] | MonthKey] = None,
    *,
    settings: Settings | None = None,
    styles: CategoryStyles | None = None,
) -> DashboardData:
    """Classify, bucket and summarise receipts for a month.

    ``target_month`` is ``(year, month_index)`` with a 0-based month. When it
    is omitted the most recent month holding receipts is selected; with no
    usable receipts the report is empty and ``selected_month`` is ``None``.
    """

    settings = settings or get_settings()

    registry = CategoryRegistry(_coerce(categories, Category, category_from_record))
    index = PrefixIndex(_coerce(rules, PrefixRule, prefix_rule_from_record), registry, settings=settings)
    receipt_list = _coerce(receipts, Receipt, receipt_from_record)

    classifier = Classifier.from_index(index, settings=settings)
    aggregator = PeriodAggregator(classifier, settings=settings)

    months = aggregator.by_month(receipt_list)
    available = [month.key.as_label_key() for month in months]

    if target_month is not None:
        selected: MonthKey | None = (
            target_month if isinstance(target_month, MonthKey) else MonthKey(*target_month)
        )
    elif months:
        selected = months[0].key
    else:
        selected = None

    if selected is None:
        weeks: WeeklyBreakdown = {}
        label = ""
    else:
        weeks = aggregator.weeks_in_month(receipt_list, selected.year, selected.month_index)
        label = f"{month_label(selected.month_index, settings.month_locale)} {selected.year}"

    report = build_period_report(weeks, registry, styles)
    chart = build_weekly_series(
        weeks,
        report["active_categories"],
        registry,
        styles,
        locale=settings.month_locale,
    )

    logger.info(
        "Prepared dashboard for %s: %d months, total %.2f",
        label or "no data",
        len(months),
        report["total"],
    )

    return {
        "months": months,
        "available_months": available,
        "selected_month": selected,
        "month_label": label,
        "weekly_breakdown": weeks,
        "report": report,
        "chart": chart,
    }
