"""Shop — склад, транзакции продаж и журнал."""

from .inventory import BasicInventory, FancyInventory, Inventory
from .ledger import ProductStats, SalesLedger, SalesStats
from .manager import TransactionManager
from .transaction import (
    Receipt,
    ReceiptLine,
    ShopConfig,
    Transaction,
    TransactionMode,
    TransactionState,
)

__all__ = [
    # Inventory
    "Inventory",
    "BasicInventory",
    "FancyInventory",
    # Transactions
    "Transaction",
    "TransactionMode",
    "TransactionState",
    "TransactionManager",
    "ShopConfig",
    "Receipt",
    "ReceiptLine",
    # Ledger
    "SalesLedger",
    "SalesStats",
    "ProductStats",
]
