"""Calendar bucketing of receipts into months and weeks of month."""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from datetime import date
from typing import Callable, Final, Iterable

import numpy as np
import pandas as pd

from config.settings import Settings, get_settings
from core.errors import DataQualityWarning, ValidationError
from core.logging_setup import get_logger
from core.models import IssueDate, MonthKey, Receipt, WeekKey, WeeklyBreakdown

__all__ = [
    "MONTH_NAMES",
    "BASE_WEEKS",
    "MonthlySpend",
    "PeriodAggregator",
    "month_label",
    "parse_issue_date",
    "first_weekday_of_month",
    "week_key",
    "week_of_month",
]

logger = get_logger("analytics.periods")

MONTH_NAMES: Final[dict[str, tuple[str, ...]]] = {
    "en": (
        "January",
        "February",
        "March",
        "April",
        "May",
        "June",
        "July",
        "August",
        "September",
        "October",
        "November",
        "December",
    ),
    "pt": (
        "Janeiro",
        "Fevereiro",
        "Março",
        "Abril",
        "Maio",
        "Junho",
        "Julho",
        "Agosto",
        "Setembro",
        "Outubro",
        "Novembro",
        "Dezembro",
    ),
}

# Weeks that always exist in a monthly breakdown; a 6th is added on demand.
BASE_WEEKS: Final[tuple[int, ...]] = (1, 2, 3, 4, 5)

_RECEIPT_COLUMNS = ["position", "date", "paid_value"]


@dataclass(frozen=True)
class MonthlySpend:
    year: int
    month_index: int
    month_label: str
    total: float
    receipts: tuple[Receipt, ...]

    @property
    def key(self) -> MonthKey:
        return MonthKey(self.year, self.month_index)


def month_label(month_index: int, locale: str = "en") -> str:
    """Return the display name of a 0-based month index."""

    _check_month_index(month_index)
    names = MONTH_NAMES.get(locale, MONTH_NAMES["en"])
    return names[month_index]


def _check_month_index(month_index: int) -> None:
    if isinstance(month_index, bool) or not isinstance(month_index, (int, np.integer)):
        raise ValidationError(f"Month index must be an integer, got {month_index!r}")
    if not 0 <= month_index <= 11:
        raise ValidationError(f"Month index must be within 0..11, got {month_index}")


def parse_issue_date(value: IssueDate | None, timezone: str | None = None) -> pd.Timestamp | None:
    """Parse a receipt issue date into a naive timestamp.

    Numbers are read as UTC epoch milliseconds. Returns ``None`` for missing
    or unparsable values. Timezone-aware values are converted into
    ``timezone`` when given; otherwise their wall-clock time is kept.
    """

    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float, np.integer, np.floating)):
            # JSON stores serialise numeric dates as epoch milliseconds.
            ts = pd.Timestamp(value, unit="ms", tz="UTC")
        else:
            ts = pd.Timestamp(value)
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        if timezone:
            ts = ts.tz_convert(timezone)
        ts = ts.tz_localize(None)
    return ts


def first_weekday_of_month(year: int, month_index: int) -> int:
    """Return the weekday of the 1st of the month with 0 meaning Sunday."""

    _check_month_index(month_index)
    # date.weekday() counts from Monday.
    return (date(year, month_index + 1, 1).weekday() + 1) % 7


def week_key(value: IssueDate, timezone: str | None = None) -> WeekKey:
    """Return the ``(year, month_index, week_of_month)`` bucket of ``value``.

    Weeks start on Sunday, so a month beginning late in the week can reach a
    6th week. ``timezone`` is applied as in :func:`parse_issue_date`.
    """

    ts = parse_issue_date(value, timezone)
    if ts is None:
        raise ValidationError(f"Unparsable date: {value!r}")
    first_weekday = first_weekday_of_month(ts.year, ts.month - 1)
    return WeekKey(ts.year, ts.month - 1, int(np.ceil((ts.day + first_weekday) / 7)))


def week_of_month(value: IssueDate, timezone: str | None = None) -> int:
    """Return the 1-based week of month containing ``value``."""

    return week_key(value, timezone).week_of_month


class PeriodAggregator:
    """Sum receipt spend per month and per week/category within a month.

    Parameters
    ----------
    classify:
        Callable mapping a product name to a category id, typically a
        :class:`analytics.classification.Classifier`.
    settings:
        Optional settings; defaults to :func:`config.get_settings`.
    """

    def __init__(self, classify: Callable[[str], str], *, settings: Settings | None = None) -> None:
        self._classify = classify
        self._settings = settings or get_settings()

    def month_label(self, month_index: int) -> str:
        return month_label(month_index, self._settings.month_locale)

    def _receipt_frame(self, receipts: Iterable[Receipt]) -> tuple[pd.DataFrame, list[Receipt]]:
        """Return a frame of parseable receipts and the receipts it indexes.

        The ``position`` column points into the returned list.
        """

        kept: list[Receipt] = []
        rows: list[dict[str, object]] = []
        for receipt in receipts:
            issued = parse_issue_date(receipt.issue_date, self._settings.timezone)
            if issued is None:
                message = (
                    f"Receipt {receipt.id!r} has an unparsable issue date "
                    f"{receipt.issue_date!r}; excluded from aggregation"
                )
                logger.warning(message)
                warnings.warn(message, DataQualityWarning, stacklevel=3)
                continue
            rows.append({"position": len(kept), "date": issued, "paid_value": float(receipt.paid_value)})
            kept.append(receipt)

        frame = pd.DataFrame(rows, columns=_RECEIPT_COLUMNS)
        if not frame.empty:
            frame["date"] = pd.to_datetime(frame["date"])
            frame["year"] = frame["date"].dt.year.astype(int)
            frame["month_index"] = frame["date"].dt.month.astype(int) - 1
        return frame, kept

    def by_month(self, receipts: Iterable[Receipt]) -> list[MonthlySpend]:
        """Group receipts per calendar month, most recent month first.

        Every receipt with a parseable issue date lands in exactly one month;
        within a month receipts keep their input order.
        """

        frame, kept = self._receipt_frame(receipts)
        if frame.empty:
            return []

        months: list[MonthlySpend] = []
        for (year, month_index), group in frame.groupby(["year", "month_index"], sort=True):
            months.append(
                MonthlySpend(
                    year=int(year),
                    month_index=int(month_index),
                    month_label=self.month_label(int(month_index)),
                    total=float(group["paid_value"].sum()),
                    receipts=tuple(kept[int(pos)] for pos in group["position"]),
                )
            )
        months.reverse()
        return months

    def available_months(self, receipts: Iterable[Receipt]) -> list[str]:
        """Return ``YYYY-MM`` keys of months holding receipts, newest first."""

        return [month.key.as_label_key() for month in self.by_month(receipts)]

    def latest_month(self, receipts: Iterable[Receipt]) -> MonthKey | None:
        frame, _ = self._receipt_frame(receipts)
        if frame.empty:
            return None
        latest = frame["date"].max()
        return MonthKey(int(latest.year), int(latest.month) - 1)

    def weeks_in_month(
        self,
        receipts: Iterable[Receipt],
        year: int,
        month_index: int,
    ) -> WeeklyBreakdown:
        """Sum item totals per week of month and category for one month.

        Buckets 1 to 5 are always present; bucket 6 is added when a receipt
        falls into it. Weeks are never clamped.
        """

        first_weekday = first_weekday_of_month(year, month_index)
        weeks: WeeklyBreakdown = {week: {} for week in BASE_WEEKS}

        frame, kept = self._receipt_frame(receipts)
        if frame.empty:
            return weeks
        frame = frame[(frame["year"] == year) & (frame["month_index"] == month_index)].copy()
        if frame.empty:
            return weeks

        frame["week"] = np.ceil((frame["date"].dt.day + first_weekday) / 7).astype(int)

        item_rows: list[dict[str, object]] = []
        for position, week in zip(frame["position"], frame["week"]):
            for item in kept[int(position)].items:
                item_rows.append(
                    {
                        "week": int(week),
                        "category_id": self._classify(item.name),
                        "total_value": float(item.total_value),
                    }
                )

        for week in sorted(set(int(w) for w in frame["week"])):
            weeks.setdefault(week, {})

        if not item_rows:
            return weeks

        items = pd.DataFrame(item_rows)
        totals = items.groupby(["week", "category_id"], sort=False)["total_value"].sum()
        for (week, category_id), value in totals.items():
            weeks[int(week)][str(category_id)] = float(value)

        logger.debug(
            "Aggregated %d items from %d receipts for %04d-%02d",
            len(item_rows),
            len(frame),
            year,
            month_index + 1,
        )
        return weeks
