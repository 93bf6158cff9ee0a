"""Category registry populated by an external loader."""

from __future__ import annotations

from typing import Iterable, Iterator

from core.errors import ValidationError
from core.logging_setup import get_logger
from core.models import Category

__all__ = ["CategoryRegistry"]

logger = get_logger("core.registry")


class CategoryRegistry:
    """Ordered, read-only view over the session's spending categories.

    The registry never deletes a category on its own; ``refresh`` replaces the
    whole collection when the caller reloads it from the external store.
    """

    def __init__(self, categories: Iterable[Category] = ()) -> None:
        self._categories: tuple[Category, ...] = ()
        self._by_id: dict[str, Category] = {}
        self._by_code: dict[str, Category] = {}
        self.refresh(categories)

    def refresh(self, categories: Iterable[Category]) -> None:
        ordered = tuple(categories)
        by_id: dict[str, Category] = {}
        by_code: dict[str, Category] = {}
        for category in ordered:
            if not category.id:
                raise ValidationError("Category id must be non-empty")
            if category.id in by_id:
                raise ValidationError(f"Duplicate category id: {category.id!r}")
            if category.code in by_code:
                raise ValidationError(f"Duplicate category code: {category.code!r}")
            by_id[category.id] = category
            by_code[category.code] = category

        self._categories = ordered
        self._by_id = by_id
        self._by_code = by_code
        logger.debug("Category registry loaded with %d categories", len(ordered))

    def list(self) -> tuple[Category, ...]:
        return self._categories

    def get(self, category_id: str) -> Category | None:
        return self._by_id.get(category_id)

    def by_code(self, code: str) -> Category | None:
        return self._by_code.get(code)

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._by_id

    def __iter__(self) -> Iterator[Category]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)
