"""Inventory — склад магазина с двумя политиками.

BasicInventory:
- каждое добавление/списание ровно одной единицы
- quantity != 1 → InvalidStockRequestError (add) / FailedTransactionError (remove)

FancyInventory:
- добавление/списание quantity >= 1 единиц за одну операцию

Общий контракт:
- списание по виду продукции, любое качество, в порядке добавления (FIFO)
- отсутствие товара при списании — пустой результат, не ошибка
- kind=None при добавлении → TypeError до любой мутации
- get_all_products сохраняет порядок добавления между видами
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from src.core.domain.product import Product, ProductKind
from src.core.domain.quality import Quality
from src.core.exceptions import (
    FailedTransactionError,
    InvalidArgumentError,
    InvalidStockRequestError,
)

logger = logging.getLogger(__name__)


class Inventory(ABC):
    """Базовый склад: упорядоченный список единиц продукции."""

    def __init__(self):
        self._products: List[Product] = []

    # -------------------------------------------------------------------------
    # Контракт политики
    # -------------------------------------------------------------------------

    @abstractmethod
    def add_product(
        self,
        kind: ProductKind,
        quality: Quality = Quality.REGULAR,
        quantity: int = 1,
    ) -> None:
        """Добавить quantity единиц вида kind заданного качества."""

    @abstractmethod
    def remove_product(self, kind: ProductKind, quantity: int = 1) -> List[Product]:
        """Списать до quantity единиц вида kind (FIFO), вернуть списанное."""

    # -------------------------------------------------------------------------
    # Запросы
    # -------------------------------------------------------------------------

    def exists_product(self, kind: Optional[ProductKind]) -> bool:
        kind = self._lookup_kind(kind)
        if kind is None:
            return False
        return any(product.kind == kind for product in self._products)

    def count(self, kind: ProductKind) -> int:
        """Количество единиц вида kind на складе."""
        kind = self._lookup_kind(kind)
        return sum(1 for product in self._products if product.kind == kind)

    def get_all_products(self) -> List[Product]:
        """Все единицы в порядке добавления (копия)."""
        return list(self._products)

    def get_stocked_kinds(self) -> List[ProductKind]:
        """Виды, которые есть на складе, в порядке каталога."""
        held = {product.kind for product in self._products}
        return [kind for kind in ProductKind if kind in held]

    def __len__(self) -> int:
        return len(self._products)

    # -------------------------------------------------------------------------
    # Внутренние
    # -------------------------------------------------------------------------

    @staticmethod
    def _require_kind(kind) -> ProductKind:
        if kind is None:
            raise TypeError("product kind must not be None")
        if isinstance(kind, ProductKind):
            return kind
        try:
            return ProductKind(kind)
        except ValueError:
            raise InvalidArgumentError(f"Unknown product kind: {kind!r}") from None

    @staticmethod
    def _lookup_kind(kind) -> Optional[ProductKind]:
        """Вид продукции или None для None/неизвестного значения."""
        if isinstance(kind, ProductKind):
            return kind
        if isinstance(kind, str):
            return ProductKind.from_name(kind)
        return None

    def _append(self, kind: ProductKind, quality: Quality, quantity: int) -> None:
        self._products.extend(Product(kind=kind, quality=quality) for _ in range(quantity))
        logger.debug("Stocked %d x %s (%s)", quantity, kind.value, quality.value)

    def _take(self, kind, quantity: int) -> List[Product]:
        kind = self._lookup_kind(kind)
        if kind is None:
            return []
        removed: List[Product] = []
        kept: List[Product] = []
        for product in self._products:
            if product.kind == kind and len(removed) < quantity:
                removed.append(product)
            else:
                kept.append(product)
        self._products = kept
        if removed:
            logger.debug("Removed %d x %s", len(removed), kind.value)
        return removed


class BasicInventory(Inventory):
    """Склад без поддержки количеств: по одной единице за операцию."""

    def add_product(
        self,
        kind: ProductKind,
        quality: Quality = Quality.REGULAR,
        quantity: int = 1,
    ) -> None:
        kind = self._require_kind(kind)
        if quantity != 1:
            raise InvalidStockRequestError(
                "Current inventory is not fancy enough. Please supply products one at a time."
            )
        self._append(kind, quality, 1)

    def remove_product(self, kind: ProductKind, quantity: int = 1) -> List[Product]:
        if quantity != 1:
            raise FailedTransactionError(
                "Current inventory is not fancy enough. Please purchase products one at a time."
            )
        return self._take(kind, 1)


class FancyInventory(Inventory):
    """Склад с поддержкой количеств."""

    def add_product(
        self,
        kind: ProductKind,
        quality: Quality = Quality.REGULAR,
        quantity: int = 1,
    ) -> None:
        kind = self._require_kind(kind)
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise InvalidStockRequestError(f"Quantity must be at least 1, got {quantity!r}")
        self._append(kind, quality, quantity)

    def remove_product(self, kind: ProductKind, quantity: int = 1) -> List[Product]:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise FailedTransactionError(f"Quantity must be at least 1, got {quantity!r}")
        return self._take(kind, quantity)
