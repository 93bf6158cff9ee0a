"""Editable index of product-name prefixes mapped to categories."""

from __future__ import annotations

import uuid
from typing import Iterable

from config.settings import Settings, get_settings
from core.errors import NotFoundError, ValidationError
from core.logging_setup import get_logger
from core.models import PrefixRule
from core.registry import CategoryRegistry

__all__ = ["PrefixIndex", "normalize_prefix"]

logger = get_logger("core.prefix_index")


def normalize_prefix(prefix: str | None) -> str:
    """Return the stored form of ``prefix``: stripped and upper-cased."""

    if prefix is None or not str(prefix).strip():
        raise ValidationError("Prefix must be a non-empty string")
    return str(prefix).strip().upper()


class PrefixIndex:
    """Single-writer collection of :class:`PrefixRule` entries.

    Rules keep their insertion order; the classifier relies on it to break
    ties between prefixes of equal length. When bound to a registry, writes
    referencing an unknown category are rejected. Rules loaded through the
    constructor are kept even when their category is missing, so a stale
    store snapshot still loads and those rules classify as uncategorized.
    """

    def __init__(
        self,
        rules: Iterable[PrefixRule] = (),
        registry: CategoryRegistry | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        self._registry = registry
        self._settings = settings or get_settings()
        self._rules: dict[str, PrefixRule] = {}
        for rule in rules:
            if rule.id in self._rules:
                raise ValidationError(f"Duplicate prefix rule id: {rule.id!r}")
            self._rules[rule.id] = PrefixRule(
                id=rule.id,
                prefix=normalize_prefix(rule.prefix),
                category_id=rule.category_id,
            )

    @property
    def registry(self) -> CategoryRegistry | None:
        return self._registry

    def _validate_category(self, category_id: str | None) -> str:
        if category_id is None or not str(category_id).strip():
            raise ValidationError("Category reference must be non-empty")
        category_id = str(category_id).strip()
        if self._registry is not None and category_id not in self._registry:
            raise ValidationError(f"Unknown category id: {category_id!r}")
        return category_id

    def add(self, prefix: str, category_id: str, *, rule_id: str | None = None) -> PrefixRule:
        normalized = normalize_prefix(prefix)
        category_id = self._validate_category(category_id)
        rule_id = rule_id or uuid.uuid4().hex
        if rule_id in self._rules:
            raise ValidationError(f"Duplicate prefix rule id: {rule_id!r}")

        rule = PrefixRule(id=rule_id, prefix=normalized, category_id=category_id)
        self._rules[rule_id] = rule
        logger.info("Added prefix rule %s: %r -> %s", rule_id, normalized, category_id)
        return rule

    def update(self, rule_id: str, prefix: str, category_id: str) -> PrefixRule:
        if rule_id not in self._rules:
            raise NotFoundError(f"Prefix rule not found: {rule_id!r}")
        normalized = normalize_prefix(prefix)
        category_id = self._validate_category(category_id)

        rule = PrefixRule(id=rule_id, prefix=normalized, category_id=category_id)
        # Reassigning an existing key keeps its position in the dict.
        self._rules[rule_id] = rule
        logger.info("Updated prefix rule %s: %r -> %s", rule_id, normalized, category_id)
        return rule

    def remove(self, rule_id: str) -> PrefixRule:
        try:
            rule = self._rules.pop(rule_id)
        except KeyError:
            raise NotFoundError(f"Prefix rule not found: {rule_id!r}") from None
        logger.info("Removed prefix rule %s (%r)", rule_id, rule.prefix)
        return rule

    def get(self, rule_id: str) -> PrefixRule:
        try:
            return self._rules[rule_id]
        except KeyError:
            raise NotFoundError(f"Prefix rule not found: {rule_id!r}") from None

    def list(self) -> tuple[PrefixRule, ...]:
        """Return rules in insertion order."""

        return tuple(self._rules.values())

    def snapshot(self) -> tuple[PrefixRule, ...]:
        """Return an immutable copy for a classification pass."""

        return self.list()

    def sorted_rules(self) -> list[PrefixRule]:
        """Return rules alphabetically by prefix, as an editing screen lists them."""

        return sorted(self._rules.values(), key=lambda r: r.prefix)

    def rules_by_category(self) -> dict[str, list[PrefixRule]]:
        """Group rules by category id.

        Rules whose category is missing from the bound registry are grouped
        under the configured uncategorized id.
        """

        grouped: dict[str, list[PrefixRule]] = {}
        fallback = self._settings.uncategorized_id
        for rule in self._rules.values():
            key = rule.category_id
            if self._registry is not None and key not in self._registry:
                key = fallback
            grouped.setdefault(key, []).append(rule)
        return grouped

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules
