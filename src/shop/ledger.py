"""SalesLedger — журнал завершённых транзакций.

Журнал только дополняется: записанный чек не изменяется и не удаляется.
Все запросы — чистое чтение.

Правила выбора:
- highest_grossing: максимальный total, при равенстве — самый ранний
- most_sold_kind: максимум проданных единиц, при равенстве — порядок каталога
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple, Union

from src.core.domain.product import ProductKind
from src.core.exceptions import FailedTransactionError
from src.shop.transaction import Receipt, Transaction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProductStats:
    """Статистика продаж одного вида продукции."""

    kind: ProductKind
    units_sold: int
    revenue: int


@dataclass(frozen=True)
class SalesStats:
    """Сводка по всем продажам."""

    transactions: int
    units_sold: int
    gross: int
    discount_total: int
    revenue: int

    @property
    def average_discount_percent(self) -> float:
        """Средняя фактическая скидка (% от gross)."""
        if self.gross == 0:
            return 0.0
        return self.discount_total * 100.0 / self.gross


class SalesLedger:
    """Упорядоченная последовательность чеков."""

    def __init__(self):
        self._receipts: List[Receipt] = []

    def record(self, entry: Union[Receipt, Transaction]) -> Receipt:
        """Добавить завершённую транзакцию в журнал.

        Raises:
            FailedTransactionError: транзакция ещё не закрыта
        """
        if isinstance(entry, Transaction):
            if entry.receipt is None:
                raise FailedTransactionError("Only closed transactions can be recorded")
            entry = entry.receipt
        self._receipts.append(entry)
        logger.debug("Ledger entry #%d for %s", len(self._receipts), entry.customer.name)
        return entry

    def __len__(self) -> int:
        return len(self._receipts)

    def __iter__(self) -> Iterator[Receipt]:
        return iter(tuple(self._receipts))

    def get_receipts(self) -> Tuple[Receipt, ...]:
        return tuple(self._receipts)

    # -------------------------------------------------------------------------
    # Запросы
    # -------------------------------------------------------------------------

    def last_transaction(self) -> Optional[Receipt]:
        return self._receipts[-1] if self._receipts else None

    def highest_grossing(self) -> Optional[Receipt]:
        best: Optional[Receipt] = None
        for receipt in self._receipts:
            if best is None or receipt.total > best.total:
                best = receipt
        return best

    def units_by_kind(self) -> Dict[ProductKind, int]:
        """Проданные единицы по видам (только проданные виды, порядок каталога)."""
        units: Dict[ProductKind, int] = {}
        for receipt in self._receipts:
            for line in receipt.lines:
                units[line.kind] = units.get(line.kind, 0) + line.quantity
        return {kind: units[kind] for kind in ProductKind if kind in units}

    def most_sold_kind(self) -> Optional[ProductKind]:
        units = self.units_by_kind()
        if not units:
            return None
        # dict упорядочен по каталогу, max берёт первый из равных
        return max(units, key=lambda kind: units[kind])

    def total_revenue(self) -> int:
        return sum(receipt.total for receipt in self._receipts)

    def product_stats(self, kind: ProductKind) -> ProductStats:
        kind = ProductKind(kind)
        units = 0
        revenue = 0
        for receipt in self._receipts:
            for line in receipt.lines:
                if line.kind == kind:
                    units += line.quantity
                    revenue += line.total
        return ProductStats(kind=kind, units_sold=units, revenue=revenue)

    def stats(self) -> SalesStats:
        return SalesStats(
            transactions=len(self._receipts),
            units_sold=sum(receipt.units for receipt in self._receipts),
            gross=sum(receipt.subtotal for receipt in self._receipts),
            discount_total=sum(receipt.discount_total for receipt in self._receipts),
            revenue=self.total_revenue(),
        )
