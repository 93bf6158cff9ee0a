"""Shared data model definitions for the ReceiptSpend engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import TYPE_CHECKING, TypedDict, Union

import pandas as pd

from config.settings import DEFAULT_UNCATEGORIZED_ID

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from analytics.periods import MonthlySpend
    from analytics.reporting import PeriodReport
    from visualization.series import ChartSeries

UNCATEGORIZED = DEFAULT_UNCATEGORIZED_ID

IssueDate = Union[str, int, float, date, datetime, pd.Timestamp]

# week number -> category id -> spend
WeeklyBreakdown = dict[int, dict[str, float]]


@dataclass(frozen=True)
class Category:
    id: str
    code: str
    name: str
    color: str = ""
    icon: str = ""
    description: str = ""


@dataclass(frozen=True)
class PrefixRule:
    """Maps a leading product-name token to a category id.

    ``prefix`` is always stored upper-cased; the index enforces it.
    """

    id: str
    prefix: str
    category_id: str


@dataclass(frozen=True)
class ProductLineItem:
    name: str
    quantity: float = 0.0
    unit: str = ""
    unit_value: float = 0.0
    total_value: float = 0.0


@dataclass(frozen=True)
class Receipt:
    """A fiscal receipt borrowed read-only from the external store.

    ``issue_date`` is kept as supplied; parsing happens during aggregation so
    that a single malformed date never prevents the rest of a report.
    """

    id: str
    issue_date: IssueDate | None
    paid_value: float
    items: tuple[ProductLineItem, ...] = field(default_factory=tuple)
    access_key: str | None = None
    number: str | None = None
    establishment: str | None = None
    total_value: float | None = None


@dataclass(frozen=True, order=True)
class MonthKey:
    year: int
    month_index: int

    def as_label_key(self) -> str:
        """Return the ``YYYY-MM`` key used by month pickers."""

        return f"{self.year:04d}-{self.month_index + 1:02d}"


@dataclass(frozen=True, order=True)
class WeekKey:
    year: int
    month_index: int
    week_of_month: int


class DashboardData(TypedDict):
    months: list["MonthlySpend"]
    available_months: list[str]
    selected_month: MonthKey | None
    month_label: str
    weekly_breakdown: WeeklyBreakdown
    report: "PeriodReport"
    chart: "ChartSeries"


__all__ = [
    "UNCATEGORIZED",
    "IssueDate",
    "WeeklyBreakdown",
    "Category",
    "PrefixRule",
    "ProductLineItem",
    "Receipt",
    "MonthKey",
    "WeekKey",
    "DashboardData",
]
