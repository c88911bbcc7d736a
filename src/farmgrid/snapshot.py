"""Snapshot — сохранение и загрузка сетки фермы.

Формат: JSON документ (контракт contracts/schema/grid_snapshot.json):
- farm_type, rows, columns
- stats: полный результат FarmGrid.get_stats() в row-major порядке

Загрузка пересоздаёт сетку, повторяя place для каждой непустой клетки
в row-major порядке, и восстанавливает атрибуты жизненного цикла, так что
get_stats() совпадает с сохранённым для каждой клетки.

Запись атомарна: временный файл в том же каталоге + os.replace.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

from jsonschema import ValidationError

from src.core.contracts import validate_grid_snapshot
from src.core.domain.quality import RandomQuality
from src.core.exceptions import SnapshotFormatError
from src.farmgrid.grid import FarmGrid
from src.farmgrid.occupants import CellStats, resolve_occupant

logger = logging.getLogger(__name__)

SNAPSHOT_SCHEMA_VERSION = "1"


def grid_to_snapshot(grid: FarmGrid) -> Dict[str, Any]:
    """Снапшот сетки как JSON-совместимый dict."""
    return {
        "schema_version": SNAPSHOT_SCHEMA_VERSION,
        "farm_type": grid.farm_type.value,
        "rows": grid.rows,
        "columns": grid.columns,
        "stats": [cell.model_dump(exclude_none=True) for cell in grid.get_stats()],
    }


def grid_from_snapshot(
    data: Dict[str, Any],
    random_quality: Optional[RandomQuality] = None,
) -> FarmGrid:
    """Восстановить сетку из снапшота.

    Raises:
        SnapshotFormatError: документ не соответствует контракту или
            описывает невозможное состояние
    """
    try:
        validate_grid_snapshot(data)
    except ValidationError as e:
        raise SnapshotFormatError(f"Invalid grid snapshot: {e.message}") from e

    rows, columns = data["rows"], data["columns"]
    cells = data["stats"]
    if len(cells) != rows * columns:
        raise SnapshotFormatError(
            f"Snapshot has {len(cells)} cells, expected {rows * columns} ({rows}x{columns})"
        )

    grid = FarmGrid(rows, columns, data["farm_type"], random_quality=random_quality)
    for index, raw_cell in enumerate(cells):
        cell = CellStats(**raw_cell)
        if cell.is_ground:
            continue
        row, column = divmod(index, columns)
        occupant_type = resolve_occupant(cell.kind)
        try:
            grid.place(row, column, occupant_type.placement_symbol)
            grid.restore_cell(row, column, cell)
        except ValueError as e:
            raise SnapshotFormatError(f"Cell ({row}, {column}): {e}") from e
    return grid


def save_grid(path: Union[str, Path], grid: FarmGrid) -> Path:
    """Атомарно сохранить сетку в файл.

    Returns:
        Путь к сохранённому файлу
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = grid_to_snapshot(grid)

    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
        os.replace(tmp_name, target)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.info("Saved %s farm %dx%d to %s", grid.farm_type.value, grid.rows, grid.columns, target)
    return target


def load_grid(
    path: Union[str, Path],
    random_quality: Optional[RandomQuality] = None,
) -> FarmGrid:
    """Загрузить сетку из файла.

    Raises:
        FileNotFoundError: файла нет
        SnapshotFormatError: файл не является корректным снапшотом
    """
    source = Path(path)
    with open(source, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise SnapshotFormatError(f"Snapshot is not valid JSON: {e}") from e

    grid = grid_from_snapshot(data, random_quality=random_quality)
    logger.info("Loaded %s farm %dx%d from %s", grid.farm_type.value, grid.rows, grid.columns, source)
    return grid
