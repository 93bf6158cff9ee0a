"""Core domain package for the ReceiptSpend engine.

The dashboard assembly service lives in :mod:`core.summary_service` and is
imported from there, since it depends on :mod:`analytics`.
"""

from .data_loader import load_categories, load_json, load_prefix_rules, load_receipts, rule_to_record
from .errors import DataQualityWarning, NotFoundError, ReceiptSpendError, ValidationError
from .models import (
    UNCATEGORIZED,
    Category,
    DashboardData,
    MonthKey,
    PrefixRule,
    ProductLineItem,
    Receipt,
    WeekKey,
)
from .prefix_index import PrefixIndex
from .registry import CategoryRegistry

__all__ = [
    "UNCATEGORIZED",
    "Category",
    "DashboardData",
    "MonthKey",
    "PrefixRule",
    "ProductLineItem",
    "Receipt",
    "WeekKey",
    "CategoryRegistry",
    "PrefixIndex",
    "DataQualityWarning",
    "NotFoundError",
    "ReceiptSpendError",
    "ValidationError",
    "load_categories",
    "load_json",
    "load_prefix_rules",
    "load_receipts",
    "rule_to_record",
]
