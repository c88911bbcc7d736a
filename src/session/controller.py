"""FarmSession — командная поверхность над фермой, складом и продажами.

Каждая команда соответствует одной операции ядра и возвращает
CommandResult либо поднимает типизированную ошибку (FarmError).
execute() разбирает текстовую строку команды; run() дополнительно
превращает FarmError в неуспешный CommandResult (сессия продолжается).

Ввод покупателя и скидок приходит через порт SessionPrompt; консоль
и форматирование вывода находятся вне ядра.
"""

import logging
import shlex
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol

from src.core.domain.customer import WALK_IN_CUSTOMER, Customer
from src.core.domain.product import Product, ProductKind
from src.core.exceptions import (
    FailedTransactionError,
    FarmError,
    InvalidArgumentError,
    UnableToInteractError,
)
from src.farmgrid.grid import FarmGrid
from src.shop.inventory import Inventory
from src.shop.ledger import SalesLedger
from src.shop.manager import TransactionManager
from src.shop.transaction import ShopConfig, TransactionMode

logger = logging.getLogger(__name__)


# =============================================================================
# PORTS
# =============================================================================


class SessionPrompt(Protocol):
    """Источник данных, которые сессия запрашивает у пользователя."""

    def customer(self) -> Customer:
        """Покупатель для новой транзакции."""
        ...

    def discount(self, kind: Optional[ProductKind]) -> int:
        """Скидка в процентах: для вида (special sale) или общая (kind=None)."""
        ...


class WalkInPrompt:
    """Порт по умолчанию: случайный покупатель без скидок."""

    def customer(self) -> Customer:
        return WALK_IN_CUSTOMER

    def discount(self, kind: Optional[ProductKind]) -> int:
        return 0


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class CommandResult:
    """Результат выполнения команды."""

    command: str
    ok: bool = True
    value: Any = None
    message: str = ""


# =============================================================================
# SESSION
# =============================================================================


class FarmSession:
    """Сессия: владеет сеткой, складом, менеджером транзакций и журналом."""

    def __init__(
        self,
        grid: FarmGrid,
        inventory: Inventory,
        ledger: Optional[SalesLedger] = None,
        prompt: Optional[SessionPrompt] = None,
        config: Optional[ShopConfig] = None,
    ):
        self.grid = grid
        self.inventory = inventory
        self.config = config or ShopConfig()
        self.manager = TransactionManager(inventory, ledger, config=self.config)
        self.prompt: SessionPrompt = prompt or WalkInPrompt()

        self._handlers: Dict[str, Callable[[List[str]], CommandResult]] = {
            "place": lambda args: self.place(args[0], *self._coords(args[1:], "place")),
            "remove": lambda args: self.remove(*self._coords(args, "remove")),
            "harvest": lambda args: self.harvest(*self._coords(args, "harvest")),
            "feed": lambda args: self.feed(*self._coords(args, "feed")),
            "end-day": lambda args: self.end_day(),
            "stats": lambda args: self.stats(),
            "display": lambda args: self.display(),
            "add": self._parse_add,
            "list": lambda args: self.list_inventory(),
            "start": lambda args: self.start(args[0] if args else None),
            "checkout": lambda args: self.checkout(),
            "last": lambda args: self.last(),
            "grossing": lambda args: self.grossing(),
            "popular": lambda args: self.popular(),
            "sales-stats": lambda args: self.sales_stats(args[0] if args else None),
        }

    @property
    def ledger(self) -> SalesLedger:
        return self.manager.ledger

    # -------------------------------------------------------------------------
    # Ферма
    # -------------------------------------------------------------------------

    def place(self, symbol: str, row: int, column: int) -> CommandResult:
        if not self.grid.place(row, column, symbol):
            return CommandResult("place", ok=False, message="Invalid position or item")
        return CommandResult("place", value=self.grid.cell_stats(row, column))

    def remove(self, row: int, column: int) -> CommandResult:
        return CommandResult("remove", ok=self.grid.interact("remove", row, column))

    def harvest(self, row: int, column: int) -> CommandResult:
        """Собрать продукт и сразу положить его на склад."""
        product = self.grid.harvest(row, column)
        self.inventory.add_product(product.kind, product.quality)
        return CommandResult("harvest", value=product, message=str(product))

    def feed(self, row: int, column: int) -> CommandResult:
        if not self.grid.interact("feed", row, column):
            return CommandResult("feed", ok=False, message="Nothing to feed here")
        return CommandResult("feed")

    def end_day(self) -> CommandResult:
        return CommandResult("end-day", ok=self.grid.interact("end-day"))

    def stats(self) -> CommandResult:
        return CommandResult("stats", value=self.grid.get_stats())

    def display(self) -> CommandResult:
        return CommandResult("display", value=self.grid.display())

    # -------------------------------------------------------------------------
    # Склад и продажи
    # -------------------------------------------------------------------------

    def add(self, kind: ProductKind, quantity: int = 1) -> CommandResult:
        """Добавить товар: в корзину при открытой транзакции, иначе на склад."""
        if self.manager.has_ongoing_transaction():
            moved = self.manager.add(kind, quantity)
            return CommandResult("add", value=moved, message=f"{len(moved)} x {kind.value} added to cart")
        self.inventory.add_product(kind, quantity=quantity)
        return CommandResult("add", message=f"{quantity} x {kind.value} stocked")

    def catalogue(self) -> CommandResult:
        """Список доступных видов продукции (add -o)."""
        return CommandResult("add", value=list(ProductKind), message=", ".join(k.value for k in ProductKind))

    def list_inventory(self) -> CommandResult:
        products: List[Product] = self.inventory.get_all_products()
        return CommandResult("list", value=products, message="\n".join(str(p) for p in products))

    def start(self, flag: Optional[str] = None) -> CommandResult:
        mode = TransactionMode.from_flag(flag)
        if self.manager.has_ongoing_transaction():
            raise FailedTransactionError("A transaction is already in progress")
        customer = self.prompt.customer()
        discounts = None
        discount_percent = 0
        if mode == TransactionMode.SPECIAL_SALE:
            discounts = {kind: self.prompt.discount(kind) for kind in self.inventory.get_stocked_kinds()}
        else:
            discount_percent = self.prompt.discount(None)
        transaction = self.manager.start(
            customer, mode=mode, discount_percent=discount_percent, discounts=discounts
        )
        return CommandResult("start", value=transaction, message=f"Transaction started for {customer.name}")

    def checkout(self) -> CommandResult:
        receipt = self.manager.checkout()
        return CommandResult("checkout", value=receipt, message=receipt.render(self.config))

    # -------------------------------------------------------------------------
    # История продаж
    # -------------------------------------------------------------------------

    def last(self) -> CommandResult:
        receipt = self.ledger.last_transaction()
        if receipt is None:
            return CommandResult("last", ok=False, message="No transactions yet")
        return CommandResult("last", value=receipt, message=receipt.render(self.config))

    def grossing(self) -> CommandResult:
        receipt = self.ledger.highest_grossing()
        if receipt is None:
            return CommandResult("grossing", ok=False, message="No transactions yet")
        return CommandResult("grossing", value=receipt, message=receipt.render(self.config))

    def popular(self) -> CommandResult:
        kind = self.ledger.most_sold_kind()
        if kind is None:
            return CommandResult("popular", ok=False, message="No products sold yet")
        return CommandResult("popular", value=kind, message=kind.display_name)

    def sales_stats(self, product: Optional[str] = None) -> CommandResult:
        if product is None:
            return CommandResult("sales-stats", value=self.ledger.stats())
        kind = ProductKind.from_name(product)
        if kind is None:
            raise InvalidArgumentError(f"Unknown product: {product}")
        return CommandResult("sales-stats", value=self.ledger.product_stats(kind))

    # -------------------------------------------------------------------------
    # Разбор команд
    # -------------------------------------------------------------------------

    def execute(self, line: str) -> CommandResult:
        """Разобрать и выполнить строку команды.

        Raises:
            UnableToInteractError: неизвестная команда
            InvalidArgumentError: некорректные аргументы
            FarmError: ошибка самой операции
        """
        try:
            tokens = shlex.split(line)
        except ValueError as e:
            raise InvalidArgumentError(f"Malformed command: {e}") from e
        if not tokens:
            raise InvalidArgumentError("Empty command")

        name, args = tokens[0].lower(), tokens[1:]
        handler = self._handlers.get(name)
        if handler is None:
            raise UnableToInteractError(f"Unknown command: {name}")
        try:
            return handler(args)
        except IndexError:
            raise InvalidArgumentError(f"Missing arguments for {name}") from None

    def run(self, line: str) -> CommandResult:
        """execute(), но ошибки фермы возвращаются как неуспешный результат."""
        try:
            return self.execute(line)
        except FarmError as e:
            logger.warning("Command rejected: %r: %s", line, e)
            name = line.split()[0].lower() if line.split() else ""
            return CommandResult(name, ok=False, message=str(e))

    def _parse_add(self, args: List[str]) -> CommandResult:
        if args and args[0] == "-o":
            return self.catalogue()
        kind = ProductKind.from_name(args[0])
        if kind is None:
            raise InvalidArgumentError(f"Unknown product: {args[0]}")
        quantity = self._int(args[1], "quantity") if len(args) > 1 else 1
        return self.add(kind, quantity)

    def _coords(self, args: List[str], command: str) -> tuple[int, int]:
        if len(args) != 2:
            raise InvalidArgumentError(f"{command} expects <row> <col>")
        return self._int(args[0], "row"), self._int(args[1], "col")

    @staticmethod
    def _int(token: str, name: str) -> int:
        try:
            return int(token)
        except ValueError:
            raise InvalidArgumentError(f"{name} must be an integer, got {token!r}") from None
