"""Transaction — корзина покупателя и расчёт чека.

Жизненный цикл: OPEN → (add)* → checkout → CLOSED.
После CLOSED никакие изменения невозможны.

Режимы:
- BASIC: чек по единицам в порядке добавления
- SPECIAL_SALE: скидки по видам продукции (перекрывают общую скидку)
- CATEGORISED: чек сгруппирован по видам в порядке каталога

Добавление в корзину атомарно: либо переносится всё запрошенное
количество со склада, либо ничего.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel, Field

from src.core.domain.customer import Customer
from src.core.domain.product import Product, ProductKind
from src.core.domain.quality import Quality
from src.core.exceptions import FailedTransactionError, InvalidArgumentError
from src.core.math.pricing import (
    MAX_DISCOUNT_PERCENT,
    clamp_discount,
    discount_amount,
    format_cents,
    line_total,
)
from src.shop.inventory import Inventory

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class TransactionMode(str, Enum):
    """Тип транзакции (флаг команды start)."""

    BASIC = "basic"
    SPECIAL_SALE = "specialsale"
    CATEGORISED = "categorised"

    @classmethod
    def from_flag(cls, flag: Optional[str]) -> "TransactionMode":
        """'-specialsale' / '-categorised' / None → режим.

        Raises:
            InvalidArgumentError: неизвестный флаг
        """
        if flag is None or flag == "":
            return cls.BASIC
        try:
            return cls(flag.lstrip("-").lower())
        except ValueError:
            raise InvalidArgumentError(f"Unknown transaction type: {flag}") from None


class TransactionState(str, Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class ShopConfig:
    """Конфигурация магазина."""

    currency_symbol: str = "$"
    max_discount_percent: int = MAX_DISCOUNT_PERCENT
    receipt_width: int = 40


# =============================================================================
# RECEIPT
# =============================================================================


class ReceiptLine(BaseModel):
    """Строка чека: все единицы одного вида продукции."""

    kind: ProductKind
    qualities: tuple[Quality, ...] = Field(..., description="Качество каждой единицы")
    unit_price: int = Field(..., ge=0, description="Цена единицы (центы)")
    discount_percent: int = Field(..., ge=0, le=100)
    subtotal: int = Field(..., ge=0)
    discount: int = Field(..., ge=0)
    total: int = Field(..., ge=0)

    model_config = {"frozen": True}

    @property
    def quantity(self) -> int:
        return len(self.qualities)


class Receipt(BaseModel):
    """Итоговый чек транзакции."""

    customer: Customer
    mode: TransactionMode
    lines: tuple[ReceiptLine, ...] = ()
    subtotal: int = Field(..., ge=0)
    discount_total: int = Field(..., ge=0)
    total: int = Field(..., ge=0)

    model_config = {"frozen": True}

    @property
    def units(self) -> int:
        return sum(line.quantity for line in self.lines)

    def render(self, config: Optional[ShopConfig] = None) -> str:
        """Текстовый чек фиксированной ширины."""
        config = config or ShopConfig()
        width = config.receipt_width

        def money(cents: int) -> str:
            return format_cents(cents, config.currency_symbol)

        def row(left: str, right: str) -> str:
            return left + right.rjust(max(width - len(left), 1))

        out = ["=" * width, row("Customer:", self.customer.name)]
        if self.mode != TransactionMode.BASIC:
            out.append(row("Type:", self.mode.value))
        out.append("-" * width)

        for line in self.lines:
            name = line.kind.display_name
            if self.mode == TransactionMode.CATEGORISED:
                out.append(row(f"{name} x{line.quantity} @ {money(line.unit_price)}", money(line.subtotal)))
            else:
                for quality in line.qualities:
                    out.append(row(f"{name} *{quality.value}*", money(line.unit_price)))
            if line.discount:
                out.append(row(f"  Discount on {name} ({line.discount_percent}%)", f"-{money(line.discount)}"))

        out.append("-" * width)
        out.append(row("Subtotal:", money(self.subtotal)))
        if self.discount_total:
            out.append(row("Discount:", f"-{money(self.discount_total)}"))
        out.append(row("Total:", money(self.total)))
        out.append("=" * width)
        return "\n".join(out)


# =============================================================================
# TRANSACTION
# =============================================================================


class Transaction:
    """Транзакция продажи, привязанная к покупателю."""

    def __init__(
        self,
        customer: Customer,
        mode: TransactionMode = TransactionMode.BASIC,
        discount_percent: int = 0,
        discounts: Optional[Mapping[ProductKind, int]] = None,
        config: Optional[ShopConfig] = None,
    ):
        """
        Args:
            customer: покупатель
            mode: тип транзакции
            discount_percent: общая скидка (ограничивается [0, 100])
            discounts: скидки по видам (только SPECIAL_SALE)
            config: конфигурация магазина

        Raises:
            InvalidArgumentError: скидки по видам вне режима SPECIAL_SALE
        """
        if customer is None:
            raise InvalidArgumentError("Transaction requires a customer")
        self.config = config or ShopConfig()
        if discounts and mode != TransactionMode.SPECIAL_SALE:
            raise InvalidArgumentError("Per-product discounts require a special sale transaction")

        self._customer = customer
        self._mode = mode
        try:
            self._discount_percent = clamp_discount(discount_percent, self.config.max_discount_percent)
            self._discounts: Dict[ProductKind, int] = {
                ProductKind(kind): clamp_discount(percent, self.config.max_discount_percent)
                for kind, percent in (discounts or {}).items()
            }
        except ValueError as e:
            raise InvalidArgumentError(str(e)) from e
        self._cart: Dict[ProductKind, List[Product]] = {}
        self._state = TransactionState.OPEN
        self._receipt: Optional[Receipt] = None

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    @property
    def customer(self) -> Customer:
        return self._customer

    @property
    def mode(self) -> TransactionMode:
        return self._mode

    @property
    def state(self) -> TransactionState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state == TransactionState.OPEN

    @property
    def discount_percent(self) -> int:
        return self._discount_percent

    @property
    def receipt(self) -> Optional[Receipt]:
        """Чек (только после checkout)."""
        return self._receipt

    def get_purchases(self) -> List[Product]:
        """Все единицы в корзине в порядке добавления."""
        return [product for products in self._cart.values() for product in products]

    def quantity(self, kind: ProductKind) -> int:
        return len(self._cart.get(kind, ()))

    def discount_for(self, kind: ProductKind) -> int:
        """Действующая скидка для вида продукции."""
        return self._discounts.get(kind, self._discount_percent)

    # -------------------------------------------------------------------------
    # Операции
    # -------------------------------------------------------------------------

    def add(self, inventory: Inventory, kind: ProductKind, quantity: int = 1) -> List[Product]:
        """Перенести quantity единиц вида kind со склада в корзину.

        Raises:
            FailedTransactionError: транзакция закрыта, неверное количество
                или недостаточно товара (склад и корзина не меняются)
        """
        if not self.is_open:
            raise FailedTransactionError("Cannot add to a closed transaction")
        if kind is None:
            raise TypeError("product kind must not be None")
        try:
            kind = ProductKind(kind)
        except ValueError:
            raise InvalidArgumentError(f"Unknown product kind: {kind!r}") from None
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise FailedTransactionError(f"Quantity must be at least 1, got {quantity!r}")

        available = inventory.count(kind)
        if available < quantity:
            raise FailedTransactionError(
                f"Insufficient stock for {kind.value}: requested {quantity}, available {available}"
            )

        removed = inventory.remove_product(kind, quantity)
        self._cart.setdefault(kind, []).extend(removed)
        logger.debug("Cart of %s: +%d %s", self._customer.name, len(removed), kind.value)
        return removed

    def build_receipt(self) -> Receipt:
        """Расчёт чека по текущему содержимому корзины."""
        kinds = list(self._cart)
        if self._mode == TransactionMode.CATEGORISED:
            kinds.sort(key=lambda k: k.catalogue_index)

        lines = []
        for kind in kinds:
            products = self._cart[kind]
            if not products:
                continue
            percent = self.discount_for(kind)
            subtotal = line_total(kind.base_price, len(products))
            discount = discount_amount(subtotal, percent)
            lines.append(
                ReceiptLine(
                    kind=kind,
                    qualities=tuple(p.quality for p in products),
                    unit_price=kind.base_price,
                    discount_percent=percent,
                    subtotal=subtotal,
                    discount=discount,
                    total=subtotal - discount,
                )
            )

        subtotal = sum(line.subtotal for line in lines)
        discount_total = sum(line.discount for line in lines)
        return Receipt(
            customer=self._customer,
            mode=self._mode,
            lines=tuple(lines),
            subtotal=subtotal,
            discount_total=discount_total,
            total=subtotal - discount_total,
        )

    def checkout(self) -> Receipt:
        """Закрыть транзакцию и вернуть чек (пустая корзина → нулевой итог).

        Raises:
            FailedTransactionError: транзакция уже закрыта
        """
        if not self.is_open:
            raise FailedTransactionError("Transaction is already closed")
        receipt = self.build_receipt()
        self._receipt = receipt
        self._state = TransactionState.CLOSED
        logger.info(
            "Checkout for %s: %d units, total %s",
            self._customer.name,
            receipt.units,
            format_cents(receipt.total, self.config.currency_symbol),
        )
        return receipt
