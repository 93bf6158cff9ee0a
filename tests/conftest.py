"""Shared fixtures for the ReceiptSpend test-suite."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config.settings import Settings
from core.models import Category, ProductLineItem, Receipt
from core.registry import CategoryRegistry


@pytest.fixture()
def settings() -> Settings:
    return Settings(uncategorized_id="uncategorized", month_locale="en", timezone=None)


@pytest.fixture()
def categories() -> list[Category]:
    return [
        Category(id="cat-hort", code="HORTIFRUTI", name="Hortifruti", color="#16a34a", icon="Apple"),
        Category(id="cat-dairy", code="LATICINIOS_E_OVOS", name="Laticínios", color="#f59e0b", icon="Milk"),
        Category(id="cat-groc", code="MERCEARIA_SECA", name="Mercearia", color="#8b5cf6", icon="Package"),
        Category(id="cat-clean", code="LIMPEZA", name="Limpeza", color="#06b6d4", icon="SprayCan"),
    ]


@pytest.fixture()
def registry(categories) -> CategoryRegistry:
    return CategoryRegistry(categories)


def make_receipt(receipt_id: str, issue_date, paid_value: float, *items: tuple[str, float]) -> Receipt:
    return Receipt(
        id=receipt_id,
        issue_date=issue_date,
        paid_value=paid_value,
        items=tuple(ProductLineItem(name=name, quantity=1, unit="UN", unit_value=value, total_value=value) for name, value in items),
    )
