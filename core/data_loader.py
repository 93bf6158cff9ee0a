"""Build domain records from the JSON shapes served by the external store."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Mapping

from core.errors import ValidationError
from core.logging_setup import get_logger
from core.models import Category, PrefixRule, ProductLineItem, Receipt

__all__ = [
    "load_json",
    "load_categories",
    "load_prefix_rules",
    "load_receipts",
    "category_from_record",
    "prefix_rule_from_record",
    "receipt_from_record",
    "rule_to_record",
]

logger = get_logger("core.data_loader")


def _pick(record: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present key; contract, snake_case and store names are accepted."""

    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return default


def _require_mapping(record: Any, kind: str) -> Mapping[str, Any]:
    if not isinstance(record, Mapping):
        raise ValidationError(f"{kind} record must be a mapping, got {type(record).__name__}")
    return record


def _non_negative(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number, got {value!r}") from None
    if number != number or number < 0:
        raise ValidationError(f"{field} must be a non-negative number, got {value!r}")
    return number


def load_json(path: str | Path) -> list[Mapping[str, Any]]:
    """Read a JSON array of records exported from the store."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"JSON file not found: {path}")

    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValidationError(f"Expected a JSON array in {path}")
    return data


def category_from_record(record: Mapping[str, Any]) -> Category:
    record = _require_mapping(record, "Category")
    category_id = _pick(record, "id", "_id")
    code = _pick(record, "code", "codigo")
    if not category_id or not code:
        raise ValidationError(f"Category record requires id and code: {dict(record)!r}")
    return Category(
        id=str(category_id),
        code=str(code),
        name=str(_pick(record, "name", "nome", default=code)),
        color=str(_pick(record, "color", "cor", default="")),
        icon=str(_pick(record, "icon", "icone", default="")),
        description=str(_pick(record, "description", "descricao", default="")),
    )


def prefix_rule_from_record(record: Mapping[str, Any]) -> PrefixRule:
    """Build a rule; the category may be an id or a nested category object."""

    record = _require_mapping(record, "Prefix rule")
    rule_id = _pick(record, "id", "_id")
    prefix = _pick(record, "prefix", "prefixo")
    category_id = _pick(record, "categoryId", "category_id", "categoriaId")
    if category_id is None:
        nested = _pick(record, "category", "categoria")
        if isinstance(nested, Mapping):
            category_id = _pick(nested, "id", "_id")
        elif nested is not None:
            category_id = nested

    if not rule_id:
        raise ValidationError(f"Prefix rule record requires an id: {dict(record)!r}")
    if prefix is None or not str(prefix).strip():
        raise ValidationError(f"Prefix rule {rule_id!r} has a blank prefix")
    return PrefixRule(
        id=str(rule_id),
        prefix=str(prefix).strip().upper(),
        # A missing reference is kept as empty so the rule classifies as uncategorized.
        category_id=str(category_id) if category_id is not None else "",
    )


def _item_from_record(record: Mapping[str, Any]) -> ProductLineItem:
    record = _require_mapping(record, "Product line item")
    return ProductLineItem(
        name=str(_pick(record, "name", "nome", default="")),
        quantity=_non_negative(_pick(record, "quantity", "quantidade", default=0), "quantity"),
        unit=str(_pick(record, "unit", "unidade", default="")),
        unit_value=_non_negative(
            _pick(record, "unitValue", "unit_value", "valorUnitario", default=0), "unitValue"
        ),
        total_value=_non_negative(
            _pick(record, "totalValue", "total_value", "valorTotal", default=0), "totalValue"
        ),
    )


def receipt_from_record(record: Mapping[str, Any]) -> Receipt:
    """Build a receipt; the issue date is kept raw and parsed during aggregation."""

    record = _require_mapping(record, "Receipt")
    receipt_id = _pick(record, "id", "_id")
    if not receipt_id:
        raise ValidationError(f"Receipt record requires an id: {dict(record)!r}")

    raw_items = _pick(record, "items", "produtos", default=[])
    if not isinstance(raw_items, (list, tuple)):
        raise ValidationError(f"Receipt {receipt_id!r} items must be a list")

    total_value = _pick(record, "totalValue", "total_value", "valorTotal")
    number = _pick(record, "number", "numero")
    return Receipt(
        id=str(receipt_id),
        issue_date=_pick(record, "issueDate", "issue_date", "dataEmissao"),
        paid_value=_non_negative(_pick(record, "paidValue", "paid_value", "valorPago", default=0), "paidValue"),
        items=tuple(_item_from_record(item) for item in raw_items),
        access_key=_pick(record, "accessKey", "access_key", "chaveAcesso"),
        number=str(number) if number is not None else None,
        establishment=_pick(record, "establishment", "estabelecimento"),
        total_value=_non_negative(total_value, "totalValue") if total_value is not None else None,
    )


def load_categories(records: Iterable[Mapping[str, Any]]) -> list[Category]:
    categories = [category_from_record(record) for record in records]
    logger.debug("Loaded %d categories", len(categories))
    return categories


def load_prefix_rules(records: Iterable[Mapping[str, Any]]) -> list[PrefixRule]:
    rules = [prefix_rule_from_record(record) for record in records]
    logger.debug("Loaded %d prefix rules", len(rules))
    return rules


def load_receipts(records: Iterable[Mapping[str, Any]]) -> list[Receipt]:
    receipts = [receipt_from_record(record) for record in records]
    logger.debug("Loaded %d receipts", len(receipts))
    return receipts


def rule_to_record(rule: PrefixRule) -> dict[str, str]:
    """Serialise a rule for write-back to the external store."""

    return {"id": rule.id, "prefix": rule.prefix, "categoryId": rule.category_id}
