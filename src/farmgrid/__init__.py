"""Farm grid — движок симуляции фермы.

- Обитатели клеток с полиморфным жизненным циклом (растения/животные)
- Сетка: посадка, кормление, рост, сбор, конец дня
- Снапшоты: атомарное сохранение и загрузка
"""

from .grid import FarmGrid
from .occupants import (
    Animal,
    CellStats,
    FarmType,
    GridOccupant,
    OccupantKind,
    Plant,
    resolve_occupant,
)
from .snapshot import grid_from_snapshot, grid_to_snapshot, load_grid, save_grid

__all__ = [
    "FarmGrid",
    "FarmType",
    "OccupantKind",
    "GridOccupant",
    "Plant",
    "Animal",
    "CellStats",
    "resolve_occupant",
    "grid_to_snapshot",
    "grid_from_snapshot",
    "save_grid",
    "load_grid",
]
