"""Occupants — обитатели клеток фермы (растения и животные).

Жизненный цикл каждого вида реализован полиморфно через общий интерфейс
GridOccupant: end_day / is_harvestable / harvest / feed / symbol / stats.
Сетка не различает виды обитателей; вид определяется один раз при
посадке по статической таблице символ → вид.

Растения:
- стадия роста 0..final_stage, одна стадия за день
- сбор только на финальной стадии, после сбора стадия сбрасывается в 0

Животные:
- сбор только если накормлено и ещё не собрано сегодня
- конец дня сбрасывает fed/collected
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar, Dict, Optional, Tuple, Type

from pydantic import BaseModel, Field

from src.core.domain.product import Product, ProductKind
from src.core.domain.quality import Quality
from src.core.exceptions import UnableToInteractError


# =============================================================================
# ENUMS
# =============================================================================


class FarmType(str, Enum):
    """Тип фермы (фиксируется при создании сетки)."""

    PLANT = "plant"
    ANIMAL = "animal"


class OccupantKind(str, Enum):
    """Вид обитателя клетки."""

    BERRY = "berry"
    COFFEE = "coffee"
    WHEAT = "wheat"
    CHICKEN = "chicken"
    COW = "cow"
    SHEEP = "sheep"


GROUND = "ground"
GROUND_SYMBOL = " "


# =============================================================================
# CELL STATS
# =============================================================================


class CellStats(BaseModel):
    """Описание одной клетки для stats и снапшотов.

    Для растений заполнено stage, для животных fed/collected,
    для пустой клетки kind == "ground".
    """

    kind: str = Field(..., min_length=1, description="Вид обитателя или 'ground'")
    symbol: str = Field(..., min_length=1, description="Отображаемый символ")
    stage: Optional[int] = Field(None, ge=0, description="Стадия роста (растения)")
    fed: Optional[bool] = Field(None, description="Накормлено сегодня (животные)")
    collected: Optional[bool] = Field(None, description="Собрано сегодня (животные)")

    model_config = {"frozen": True}

    @property
    def is_ground(self) -> bool:
        return self.kind == GROUND

    def describe(self) -> list[str]:
        """Строковое представление: [kind, symbol, атрибуты...]."""
        parts = [self.kind, self.symbol]
        if self.stage is not None:
            parts.append(f"Stage: {self.stage}")
        if self.fed is not None:
            parts.append(f"Fed: {str(self.fed).lower()}")
        if self.collected is not None:
            parts.append(f"Collected: {str(self.collected).lower()}")
        return parts


GROUND_STATS = CellStats(kind=GROUND, symbol=GROUND_SYMBOL)


# =============================================================================
# CAPABILITY INTERFACE
# =============================================================================


class GridOccupant(ABC):
    """Общий интерфейс обитателя клетки."""

    kind: ClassVar[OccupantKind]
    farm_type: ClassVar[FarmType]
    product_kind: ClassVar[ProductKind]
    placement_symbol: ClassVar[str]

    @abstractmethod
    def end_day(self) -> None:
        """Продвинуть состояние на следующий день."""

    @abstractmethod
    def is_harvestable(self) -> bool:
        """Готов ли обитатель к сбору."""

    @abstractmethod
    def harvest(self, quality: Quality) -> Product:
        """Собрать продукт заданного качества.

        Raises:
            UnableToInteractError: если сбор сейчас невозможен
        """

    @abstractmethod
    def feed(self) -> bool:
        """Накормить; False если обитатель не кормится."""

    @property
    @abstractmethod
    def symbol(self) -> str:
        """Текущий отображаемый символ."""

    @abstractmethod
    def stats(self) -> CellStats:
        """Описание текущего состояния."""

    @abstractmethod
    def restore(self, stats: CellStats) -> None:
        """Восстановить атрибуты жизненного цикла из описания клетки."""

    def _make_product(self, quality: Quality) -> Product:
        return Product(kind=self.product_kind, quality=quality)


# =============================================================================
# PLANTS
# =============================================================================


class Plant(GridOccupant):
    """Растение: растёт по фиксированной последовательности стадий."""

    farm_type = FarmType.PLANT
    stage_symbols: ClassVar[Tuple[str, ...]]

    def __init__(self):
        self.stage = 0

    @classmethod
    def final_stage(cls) -> int:
        return len(cls.stage_symbols) - 1

    def end_day(self) -> None:
        if self.stage < self.final_stage():
            self.stage += 1

    def is_harvestable(self) -> bool:
        return self.stage == self.final_stage()

    def harvest(self, quality: Quality) -> Product:
        if not self.is_harvestable():
            raise UnableToInteractError("Crop not fully grown!")
        self.stage = 0
        return self._make_product(quality)

    def feed(self) -> bool:
        return False

    @property
    def symbol(self) -> str:
        return self.stage_symbols[self.stage]

    def stats(self) -> CellStats:
        return CellStats(kind=self.kind.value, symbol=self.symbol, stage=self.stage)

    def restore(self, stats: CellStats) -> None:
        stage = stats.stage if stats.stage is not None else 0
        if stage > self.final_stage():
            raise ValueError(
                f"stage {stage} exceeds final stage {self.final_stage()} for {self.kind.value}"
            )
        self.stage = stage


class Berry(Plant):
    kind = OccupantKind.BERRY
    product_kind = ProductKind.JAM
    stage_symbols = (".", "o", "@")
    placement_symbol = "."


class Coffee(Plant):
    kind = OccupantKind.COFFEE
    product_kind = ProductKind.COFFEE
    stage_symbols = (":", ";", "*", "%")
    placement_symbol = ":"


class Wheat(Plant):
    kind = OccupantKind.WHEAT
    product_kind = ProductKind.BREAD
    stage_symbols = ("ἴ", "#")
    placement_symbol = "ἴ"


# =============================================================================
# ANIMALS
# =============================================================================


class Animal(GridOccupant):
    """Животное: продукт раз в день после кормления."""

    farm_type = FarmType.ANIMAL

    def __init__(self):
        self.fed = False
        self.collected = False

    def end_day(self) -> None:
        self.fed = False
        self.collected = False

    def is_harvestable(self) -> bool:
        return self.fed and not self.collected

    def harvest(self, quality: Quality) -> Product:
        if not self.fed:
            raise UnableToInteractError("Animal not fed today!")
        if self.collected:
            raise UnableToInteractError("Already collected today!")
        self.collected = True
        return self._make_product(quality)

    def feed(self) -> bool:
        self.fed = True
        return True

    @property
    def symbol(self) -> str:
        return self.placement_symbol

    def stats(self) -> CellStats:
        return CellStats(
            kind=self.kind.value, symbol=self.symbol, fed=self.fed, collected=self.collected
        )

    def restore(self, stats: CellStats) -> None:
        self.fed = bool(stats.fed)
        self.collected = bool(stats.collected)


class Chicken(Animal):
    kind = OccupantKind.CHICKEN
    product_kind = ProductKind.EGG
    placement_symbol = "৬"


class Cow(Animal):
    kind = OccupantKind.COW
    product_kind = ProductKind.MILK
    placement_symbol = "४"


class Sheep(Animal):
    kind = OccupantKind.SHEEP
    product_kind = ProductKind.WOOL
    placement_symbol = "ඔ"


# =============================================================================
# REGISTRY
# =============================================================================


OCCUPANT_TYPES: Dict[OccupantKind, Type[GridOccupant]] = {
    cls.kind: cls for cls in (Berry, Coffee, Wheat, Chicken, Cow, Sheep)
}

SYMBOL_TO_KIND: Dict[str, OccupantKind] = {
    cls.placement_symbol: kind for kind, cls in OCCUPANT_TYPES.items()
}


def resolve_occupant(token: str) -> Optional[Type[GridOccupant]]:
    """Класс обитателя по символу посадки или имени вида (None если неизвестен)."""
    if not isinstance(token, str):
        return None
    kind = SYMBOL_TO_KIND.get(token)
    if kind is None:
        try:
            kind = OccupantKind(token.strip().lower())
        except ValueError:
            return None
    return OCCUPANT_TYPES[kind]
