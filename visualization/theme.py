"""Presentation metadata for spending categories.

Colours, icons and labels are owned by the presentation layer. Reporting code
only looks them up by category code through :class:`CategoryStyles`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from core.models import Category

__all__ = [
    "CategoryStyle",
    "CategoryStyles",
    "DEFAULT_CATEGORY_STYLES",
    "FALLBACK_CODE",
    "default_category_styles",
]

FALLBACK_CODE = "OUTROS"


@dataclass(frozen=True)
class CategoryStyle:
    label: str
    color: str
    icon: str


DEFAULT_CATEGORY_STYLES: Mapping[str, CategoryStyle] = {
    "ACOUGUE_E_PEIXARIA": CategoryStyle("Açougue", "#dc2626", "Beef"),
    "HORTIFRUTI": CategoryStyle("Hortifruti", "#16a34a", "Apple"),
    "LATICINIOS_E_OVOS": CategoryStyle("Laticínios", "#f59e0b", "Milk"),
    "PADARIA_E_CONFEITARIA": CategoryStyle("Padaria", "#d97706", "Croissant"),
    "MERCEARIA_SECA": CategoryStyle("Mercearia", "#8b5cf6", "Package"),
    "CONGELADOS": CategoryStyle("Congelados", "#0ea5e9", "Snowflake"),
    "BEBIDAS": CategoryStyle("Bebidas", "#ec4899", "Wine"),
    "LIMPEZA": CategoryStyle("Limpeza", "#06b6d4", "SprayCan"),
    "HIGIENE_E_BELEZA": CategoryStyle("Higiene", "#f472b6", "Sparkles"),
    "PET_SHOP": CategoryStyle("Pet Shop", "#a855f7", "PawPrint"),
    "UTILIDADES_DOMESTICAS": CategoryStyle("Utilidades", "#64748b", "Lamp"),
    FALLBACK_CODE: CategoryStyle("Outros", "#9ca3af", "ShoppingCart"),
}


class CategoryStyles:
    """Lookup of :class:`CategoryStyle` by category code.

    Codes missing from ``styles`` resolve to the category's own registry
    metadata when a category is given, otherwise to the fallback style.
    """

    def __init__(
        self,
        styles: Mapping[str, CategoryStyle] | None = None,
        *,
        fallback_code: str = FALLBACK_CODE,
    ) -> None:
        self._styles = dict(DEFAULT_CATEGORY_STYLES if styles is None else styles)
        self._fallback = self._styles.get(fallback_code, DEFAULT_CATEGORY_STYLES[FALLBACK_CODE])

    @property
    def fallback(self) -> CategoryStyle:
        return self._fallback

    def style_for(self, code: str | None, category: Category | None = None) -> CategoryStyle:
        if code is not None and code in self._styles:
            return self._styles[code]
        if category is not None:
            return CategoryStyle(
                label=category.name or category.code,
                color=category.color or self._fallback.color,
                icon=category.icon or self._fallback.icon,
            )
        return self._fallback

    def items(self):
        """Return ``(code, style)`` pairs, e.g. for rendering a legend."""

        return self._styles.items()


_DEFAULT_STYLES = CategoryStyles()


def default_category_styles() -> CategoryStyles:
    """Return the shared default lookup."""

    return _DEFAULT_STYLES
