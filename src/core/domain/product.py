"""
Product — Модель продукта фермы

Закрытый каталог из шести видов продукции (ProductKind) и
immutable Pydantic модель Product (вид + качество).
Каждый вид продукции имеет базовую цену в центах.
"""

from enum import Enum
from typing import Final, Optional

from pydantic import BaseModel, Field

from .quality import Quality


# =============================================================================
# ENUMS
# =============================================================================


class ProductKind(str, Enum):
    """Вид продукции (порядок перечисления = порядок каталога)."""

    EGG = "egg"
    MILK = "milk"
    JAM = "jam"
    WOOL = "wool"
    BREAD = "bread"
    COFFEE = "coffee"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def base_price(self) -> int:
        """Базовая цена одной единицы в центах."""
        return BASE_PRICES_CENTS[self]

    @property
    def catalogue_index(self) -> int:
        return _CATALOGUE_ORDER[self]

    @classmethod
    def from_name(cls, name: Optional[str]) -> Optional["ProductKind"]:
        """Поиск вида по имени без учёта регистра (None если не найден)."""
        if name is None:
            return None
        try:
            return cls(name.strip().lower())
        except ValueError:
            return None


# Базовые цены (центы)
BASE_PRICES_CENTS: Final[dict[ProductKind, int]] = {
    ProductKind.EGG: 50,
    ProductKind.MILK: 440,
    ProductKind.JAM: 670,
    ProductKind.WOOL: 5000,
    ProductKind.BREAD: 3670,
    ProductKind.COFFEE: 3110,
}

_CATALOGUE_ORDER = {kind: index for index, kind in enumerate(ProductKind)}


# =============================================================================
# PRODUCT MODEL
# =============================================================================


class Product(BaseModel):
    """
    Единица продукции.

    Immutable модель (frozen=True). Равенство по (kind, quality);
    поиск и списание со склада сопоставляют только kind.
    """

    kind: ProductKind = Field(..., description="Вид продукции")
    quality: Quality = Field(default=Quality.REGULAR, description="Качество")

    model_config = {"frozen": True}

    @property
    def base_price(self) -> int:
        return self.kind.base_price

    def __str__(self) -> str:
        return f"{self.kind.display_name}: {self.base_price}c *{self.quality.value}*"
