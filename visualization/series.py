"""Chart-ready series for the weekly spend chart.

The output is plain data (labels plus one dataset per category) so any
charting front end can stack the bars; nothing here renders a chart.
"""

from __future__ import annotations

from typing import Mapping, Sequence, TypedDict

from core.registry import CategoryRegistry

from .theme import CategoryStyles, default_category_styles

__all__ = ["ChartDataset", "ChartSeries", "WEEK_LABELS", "build_weekly_series"]

WEEK_LABELS: Mapping[str, str] = {"en": "Week", "pt": "Semana"}


class ChartDataset(TypedDict):
    category_id: str
    label: str
    color: str
    data: list[float]


class ChartSeries(TypedDict):
    labels: list[str]
    weeks: list[int]
    datasets: list[ChartDataset]


def build_weekly_series(
    weeks: Mapping[int, Mapping[str, float]],
    categories: Sequence[str],
    registry: CategoryRegistry | None = None,
    styles: CategoryStyles | None = None,
    *,
    locale: str = "en",
) -> ChartSeries:
    """Return stacked-bar series for ``categories`` across every week bucket."""

    styles = styles or default_category_styles()
    week_numbers = sorted(weeks)
    prefix = WEEK_LABELS.get(locale, WEEK_LABELS["en"])

    datasets: list[ChartDataset] = []
    for category_id in categories:
        category = registry.get(category_id) if registry is not None else None
        style = styles.style_for(category.code if category else None, category)
        datasets.append(
            {
                "category_id": category_id,
                "label": style.label,
                "color": style.color,
                "data": [float(weeks[week].get(category_id, 0.0)) for week in week_numbers],
            }
        )

    return {
        "labels": [f"{prefix} {week}" for week in week_numbers],
        "weeks": week_numbers,
        "datasets": datasets,
    }
