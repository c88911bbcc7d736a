"""TransactionManager — владелец текущей транзакции.

Одновременно открыта не более одной транзакции. checkout закрывает её,
записывает чек в журнал и освобождает менеджер для следующей.
"""

import logging
from typing import List, Mapping, Optional

from src.core.domain.customer import Customer
from src.core.domain.product import Product, ProductKind
from src.core.exceptions import FailedTransactionError
from src.shop.inventory import Inventory
from src.shop.ledger import SalesLedger
from src.shop.transaction import Receipt, ShopConfig, Transaction, TransactionMode

logger = logging.getLogger(__name__)


class TransactionManager:
    """Связывает склад, текущую транзакцию и журнал продаж."""

    def __init__(
        self,
        inventory: Inventory,
        ledger: Optional[SalesLedger] = None,
        config: Optional[ShopConfig] = None,
    ):
        self.inventory = inventory
        self.ledger = ledger if ledger is not None else SalesLedger()
        self.config = config or ShopConfig()
        self._ongoing: Optional[Transaction] = None

    @property
    def ongoing(self) -> Optional[Transaction]:
        return self._ongoing

    def has_ongoing_transaction(self) -> bool:
        return self._ongoing is not None and self._ongoing.is_open

    def start(
        self,
        customer: Customer,
        mode: TransactionMode = TransactionMode.BASIC,
        discount_percent: int = 0,
        discounts: Optional[Mapping[ProductKind, int]] = None,
    ) -> Transaction:
        """Открыть транзакцию.

        Raises:
            FailedTransactionError: предыдущая транзакция ещё открыта
        """
        if self.has_ongoing_transaction():
            raise FailedTransactionError("A transaction is already in progress")
        transaction = Transaction(
            customer,
            mode=mode,
            discount_percent=discount_percent,
            discounts=discounts,
            config=self.config,
        )
        self._ongoing = transaction
        logger.info("Started %s transaction for %s", mode.value, customer.name)
        return transaction

    def add(self, kind: ProductKind, quantity: int = 1) -> List[Product]:
        """Перенести товар со склада в корзину текущей транзакции."""
        return self._require_ongoing().add(self.inventory, kind, quantity)

    def checkout(self) -> Receipt:
        """Закрыть текущую транзакцию и записать её в журнал."""
        transaction = self._require_ongoing()
        receipt = transaction.checkout()
        self.ledger.record(receipt)
        self._ongoing = None
        return receipt

    def _require_ongoing(self) -> Transaction:
        if not self.has_ongoing_transaction():
            raise FailedTransactionError("No transaction in progress")
        return self._ongoing
