"""Presentation lookups and chart-ready series for ReceiptSpend reports."""

from .series import ChartDataset, ChartSeries, build_weekly_series
from .theme import (
    DEFAULT_CATEGORY_STYLES,
    FALLBACK_CODE,
    CategoryStyle,
    CategoryStyles,
    default_category_styles,
)

__all__ = [
    "ChartDataset",
    "ChartSeries",
    "build_weekly_series",
    "CategoryStyle",
    "CategoryStyles",
    "DEFAULT_CATEGORY_STYLES",
    "FALLBACK_CODE",
    "default_category_styles",
]
