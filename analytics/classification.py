"""Longest-prefix product classification."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from config.settings import Settings, get_settings
from core.logging_setup import get_logger
from core.models import PrefixRule
from core.prefix_index import PrefixIndex
from core.registry import CategoryRegistry

__all__ = ["Classifier", "normalize_product_name"]

logger = get_logger("analytics.classification")


def normalize_product_name(name: str | None) -> str:
    """Upper-case a product name for prefix comparison."""

    if not name:
        return ""
    return str(name).upper()


class Classifier:
    """Resolve product names to category ids using a snapshot of prefix rules.

    Rules are sorted once by descending prefix length. The sort is stable, so
    among prefixes of equal length the rule inserted first wins. The matched
    rule's category must exist in ``registry`` (when given); a dangling
    reference yields the uncategorized id rather than falling through to a
    shorter rule. The category ids of ``registry`` are captured at
    construction, so a classifier built before ``registry.refresh`` keeps
    answering from the old set.
    """

    def __init__(
        self,
        rules: Iterable[PrefixRule],
        registry: CategoryRegistry | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        normalized = [
            replace(rule, prefix=rule.prefix.strip().upper())
            for rule in rules
            if rule.prefix and rule.prefix.strip()
        ]
        self._rules: tuple[PrefixRule, ...] = tuple(
            sorted(normalized, key=lambda rule: len(rule.prefix), reverse=True)
        )
        # Category ids are frozen with the rules; rebuild after a registry refresh.
        self._known_categories: frozenset[str] | None = (
            frozenset(category.id for category in registry) if registry is not None else None
        )
        self.uncategorized_id = (settings or get_settings()).uncategorized_id
        self._cache: dict[str, str] = {}

    @classmethod
    def from_index(cls, index: PrefixIndex, *, settings: Settings | None = None) -> "Classifier":
        return cls(index.snapshot(), index.registry, settings=settings)

    @property
    def rules(self) -> tuple[PrefixRule, ...]:
        return self._rules

    def match(self, product_name: str | None) -> PrefixRule | None:
        """Return the longest rule whose prefix starts ``product_name``."""

        normalized = normalize_product_name(product_name)
        for rule in self._rules:
            if normalized.startswith(rule.prefix):
                return rule
        return None

    def classify(self, product_name: str | None) -> str:
        normalized = normalize_product_name(product_name)
        cached = self._cache.get(normalized)
        if cached is not None:
            return cached

        rule = self.match(normalized)
        if rule is None:
            logger.debug("No prefix rule matches %r", normalized)
            result = self.uncategorized_id
        elif not rule.category_id or (
            self._known_categories is not None and rule.category_id not in self._known_categories
        ):
            logger.debug("Prefix %r points at unknown category %s", rule.prefix, rule.category_id)
            result = self.uncategorized_id
        else:
            result = rule.category_id

        self._cache[normalized] = result
        return result

    def __call__(self, product_name: str | None) -> str:
        return self.classify(product_name)
