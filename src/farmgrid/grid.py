"""FarmGrid — прямоугольная сетка фермы.

Сетка фиксированного размера rows x columns; каждая клетка либо пуста,
либо содержит ровно одного обитателя, совместимого с типом фермы.
Индекс клетки: row * columns + column (row-major).

Операции:
- place: посадка/размещение обитателя
- harvest: сбор продукта (качество тянется случайно)
- interact: feed / remove / end-day
- get_stats / display: описание и отрисовка
"""

import logging
from typing import Callable, Dict, List, Optional, Union

from src.core.domain.product import Product
from src.core.domain.quality import RandomQuality
from src.core.exceptions import (
    CellOccupiedError,
    IncompatibleOccupantError,
    InvalidArgumentError,
    UnableToInteractError,
)
from src.farmgrid.occupants import (
    GROUND_STATS,
    GROUND_SYMBOL,
    CellStats,
    FarmType,
    GridOccupant,
    resolve_occupant,
)

logger = logging.getLogger(__name__)


class FarmGrid:
    """Сетка фермы с обитателями одного типа (растения или животные)."""

    def __init__(
        self,
        rows: int,
        columns: int,
        farm_type: Union[FarmType, str] = FarmType.PLANT,
        random_quality: Optional[RandomQuality] = None,
    ):
        """
        Args:
            rows: число строк (> 0)
            columns: число столбцов (> 0)
            farm_type: тип фермы ("plant" или "animal")
            random_quality: генератор качества (по умолчанию RandomQuality())

        Raises:
            InvalidArgumentError: некорректные размеры или тип фермы
        """
        if isinstance(rows, bool) or not isinstance(rows, int) or rows <= 0:
            raise InvalidArgumentError(f"rows must be a positive integer, got {rows!r}")
        if isinstance(columns, bool) or not isinstance(columns, int) or columns <= 0:
            raise InvalidArgumentError(f"columns must be a positive integer, got {columns!r}")
        try:
            self._farm_type = FarmType(farm_type)
        except ValueError:
            raise InvalidArgumentError(f"Unknown farm type: {farm_type!r}") from None

        self._rows = rows
        self._columns = columns
        self._cells: List[Optional[GridOccupant]] = [None] * (rows * columns)
        self._random_quality = random_quality or RandomQuality()

        self._commands: Dict[str, Callable[[int, int], bool]] = {
            "feed": self.feed,
            "remove": self.remove,
            "end-day": lambda row, column: self.end_day(),
        }

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def farm_type(self) -> FarmType:
        return self._farm_type

    # -------------------------------------------------------------------------
    # Операции
    # -------------------------------------------------------------------------

    def place(self, row: int, column: int, symbol: str) -> bool:
        """Разместить обитателя по символу (или имени вида).

        Returns:
            False если координаты вне сетки или символ неизвестен

        Raises:
            CellOccupiedError: клетка уже занята
            IncompatibleOccupantError: вид не подходит для типа фермы
        """
        if not self.is_valid_position(row, column):
            return False
        occupant_type = resolve_occupant(symbol)
        if occupant_type is None:
            return False

        index = self._index(row, column)
        if self._cells[index] is not None:
            raise CellOccupiedError("Something is already there!")
        if occupant_type.farm_type != self._farm_type:
            raise IncompatibleOccupantError(
                f"Invalid item for this farm type! "
                f"({occupant_type.kind.value} on {self._farm_type.value} farm)"
            )

        self._cells[index] = occupant_type()
        logger.debug("Placed %s at (%d, %d)", occupant_type.kind.value, row, column)
        return True

    def harvest(self, row: int, column: int) -> Product:
        """Собрать продукт с клетки.

        Raises:
            UnableToInteractError: неверная позиция, пустая клетка,
                растение не созрело, животное не накормлено или уже собрано
        """
        if not self.is_valid_position(row, column):
            raise UnableToInteractError("Invalid position")
        occupant = self._cells[self._index(row, column)]
        if occupant is None:
            raise UnableToInteractError("Can't harvest an empty spot!")

        product = occupant.harvest(self._random_quality.draw())
        logger.info(
            "Harvested %s (%s) from %s at (%d, %d)",
            product.kind.value,
            product.quality.value,
            occupant.kind.value,
            row,
            column,
        )
        return product

    def interact(self, command: str, row: int = 0, column: int = 0) -> bool:
        """Выполнить команду взаимодействия: feed / remove / end-day.

        Raises:
            UnableToInteractError: неизвестная команда
        """
        handler = self._commands.get(command)
        if handler is None:
            raise UnableToInteractError(f"Unknown command: {command}")
        return handler(row, column)

    def feed(self, row: int, column: int) -> bool:
        """Накормить животное; False для растений, пустых и неверных клеток."""
        if not self.is_valid_position(row, column):
            return False
        occupant = self._cells[self._index(row, column)]
        if occupant is None:
            return False
        fed = occupant.feed()
        if fed:
            logger.debug("Fed %s at (%d, %d)", occupant.kind.value, row, column)
        return fed

    def remove(self, row: int, column: int) -> bool:
        """Очистить клетку (no-op для неверной позиции)."""
        if self.is_valid_position(row, column):
            self._cells[self._index(row, column)] = None
            logger.debug("Cleared cell (%d, %d)", row, column)
        return True

    def end_day(self) -> bool:
        """Конец дня: растения растут на стадию, животные сбрасывают флаги."""
        for occupant in self._cells:
            if occupant is not None:
                occupant.end_day()
        logger.debug("Day ended on %s farm %dx%d", self._farm_type.value, self._rows, self._columns)
        return True

    # -------------------------------------------------------------------------
    # Описание
    # -------------------------------------------------------------------------

    def get_stats(self) -> List[CellStats]:
        """Описания всех клеток в row-major порядке."""
        return [
            occupant.stats() if occupant is not None else GROUND_STATS
            for occupant in self._cells
        ]

    def cell_stats(self, row: int, column: int) -> CellStats:
        if not self.is_valid_position(row, column):
            raise InvalidArgumentError(f"Invalid position ({row}, {column})")
        occupant = self._cells[self._index(row, column)]
        return occupant.stats() if occupant is not None else GROUND_STATS

    def display(self) -> str:
        """Отрисовка сетки в рамке фиксированной ширины."""
        border = "-" * (self._columns * 2 + 3)
        lines = [border]
        for row in range(self._rows):
            symbols = "".join(
                self._symbol_at(row, column) + " " for column in range(self._columns)
            )
            lines.append(f"| {symbols}|")
        lines.append(border)
        return "\n".join(lines) + "\n"

    def restore_cell(self, row: int, column: int, stats: CellStats) -> None:
        """Восстановить атрибуты жизненного цикла занятой клетки.

        Raises:
            InvalidArgumentError: клетка пуста или вид не совпадает
        """
        occupant = self._cells[self._index(row, column)] if self.is_valid_position(row, column) else None
        if occupant is None or occupant.kind.value != stats.kind:
            raise InvalidArgumentError(f"No {stats.kind} at ({row}, {column}) to restore")
        occupant.restore(stats)

    # -------------------------------------------------------------------------
    # Внутренние
    # -------------------------------------------------------------------------

    def is_valid_position(self, row: int, column: int) -> bool:
        return 0 <= row < self._rows and 0 <= column < self._columns

    def _index(self, row: int, column: int) -> int:
        return row * self._columns + column

    def _symbol_at(self, row: int, column: int) -> str:
        occupant = self._cells[self._index(row, column)]
        return occupant.symbol if occupant is not None else GROUND_SYMBOL
