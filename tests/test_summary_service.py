"""Tests for dashboard assembly across the whole engine."""

from __future__ import annotations

import pytest

from config.settings import Settings
from core.errors import DataQualityWarning
from core.models import MonthKey
from core.summary_service import prepare_dashboard_data


@pytest.fixture()
def store_categories():
    return [
        {"_id": "c-hort", "codigo": "HORTIFRUTI", "nome": "Hortifruti", "cor": "#16a34a", "icone": "Apple"},
        {"_id": "c-dairy", "codigo": "LATICINIOS_E_OVOS", "nome": "Laticínios", "cor": "#f59e0b", "icone": "Milk"},
    ]


@pytest.fixture()
def store_rules():
    return [
        {"_id": "p1", "prefixo": "TOMATE", "categoria": {"_id": "c-hort", "codigo": "HORTIFRUTI"}},
        {"_id": "p2", "prefixo": "LEITE", "categoria": {"_id": "c-dairy", "codigo": "LATICINIOS_E_OVOS"}},
    ]


@pytest.fixture()
def store_receipts():
    return [
        {
            "_id": "n1",
            "dataEmissao": "2024-02-10",
            "valorPago": 20.0,
            "produtos": [{"nome": "LEITE UHT", "quantidade": 2, "unidade": "UN", "valorUnitario": 10, "valorTotal": 20}],
        },
        {
            "_id": "n2",
            "dataEmissao": "2024-03-01",
            "valorPago": 10.5,
            "produtos": [{"nome": "tomate italiano", "quantidade": 1, "unidade": "KG", "valorUnitario": 10.5, "valorTotal": 10.5}],
        },
    ]


def test_prepare_dashboard_selects_most_recent_month(store_categories, store_rules, store_receipts):
    data = prepare_dashboard_data(
        store_categories,
        store_rules,
        store_receipts,
        settings=Settings(month_locale="pt"),
    )

    assert data["available_months"] == ["2024-03", "2024-02"]
    assert data["selected_month"] == MonthKey(2024, 2)
    assert data["month_label"] == "Março 2024"
    assert data["weekly_breakdown"][1] == {"c-hort": pytest.approx(10.5)}

    report = data["report"]
    assert report["total"] == pytest.approx(10.5)
    assert report["weekly_mean"] == pytest.approx(10.5 / 4)
    assert report["active_categories"] == ["c-hort"]
    assert report["category_totals"][0]["label"] == "Hortifruti"

    chart = data["chart"]
    assert chart["labels"][0] == "Semana 1"
    assert chart["datasets"][0]["data"][0] == pytest.approx(10.5)


def test_prepare_dashboard_with_explicit_month(store_categories, store_rules, store_receipts):
    data = prepare_dashboard_data(
        store_categories,
        store_rules,
        store_receipts,
        target_month=(2024, 1),
        settings=Settings(),
    )

    assert data["month_label"] == "February 2024"
    assert data["report"]["total"] == pytest.approx(20.0)
    assert data["report"]["category_totals"][0]["category_id"] == "c-dairy"
    assert len(data["months"]) == 2
    assert data["months"][1].total == pytest.approx(20.0)


def test_prepare_dashboard_without_receipts(store_categories, store_rules):
    data = prepare_dashboard_data(store_categories, store_rules, [], settings=Settings())

    assert data["selected_month"] is None
    assert data["months"] == []
    assert data["report"]["total"] == 0.0
    assert data["chart"]["datasets"] == []


def test_prepare_dashboard_tolerates_bad_dates(store_categories, store_rules, store_receipts):
    store_receipts.append({"_id": "n3", "dataEmissao": "garbage", "valorPago": 99.0, "produtos": []})

    with pytest.warns(DataQualityWarning):
        data = prepare_dashboard_data(store_categories, store_rules, store_receipts, settings=Settings())

    assert sum(month.total for month in data["months"]) == pytest.approx(30.5)
