"""Тесты для снапшотов сетки и JSON Schema контракта.

Coverage:
- Валидность самой схемы
- Round-trip: get_stats() совпадает для каждой клетки
- Атомарная запись в файл
- Детекция некорректных документов
"""

import json

import pytest
from jsonschema import ValidationError

from src.core.contracts import GridSnapshotValidator, SchemaLoader, validate_grid_snapshot
from src.core.exceptions import SnapshotFormatError
from src.farmgrid import FarmGrid, FarmType, grid_from_snapshot, grid_to_snapshot, load_grid, save_grid


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def grown_plant_grid():
    grid = FarmGrid(2, 3, FarmType.PLANT)
    grid.place(0, 0, ".")
    grid.place(0, 2, ":")
    grid.place(1, 1, "ἴ")
    grid.end_day()
    grid.place(1, 2, "berry")
    grid.end_day()
    return grid


@pytest.fixture
def busy_animal_grid():
    grid = FarmGrid(2, 2, FarmType.ANIMAL)
    grid.place(0, 0, "৬")
    grid.place(0, 1, "४")
    grid.place(1, 0, "ඔ")
    grid.feed(0, 0)
    grid.feed(0, 1)
    grid.harvest(0, 1)
    return grid


# =============================================================================
# SCHEMA
# =============================================================================


class TestGridSnapshotSchema:
    """Тесты контракта grid_snapshot."""

    def test_schema_loads(self):
        schema = SchemaLoader().load_schema("grid_snapshot")
        assert schema["title"] == "grid_snapshot"

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("no_such_schema")

    def test_generated_snapshot_is_valid(self, grown_plant_grid):
        validate_grid_snapshot(grid_to_snapshot(grown_plant_grid))

    def test_missing_required_field(self, grown_plant_grid):
        data = grid_to_snapshot(grown_plant_grid)
        del data["rows"]
        with pytest.raises(ValidationError):
            validate_grid_snapshot(data)

    def test_unknown_cell_kind(self):
        data = {
            "schema_version": "1",
            "farm_type": "plant",
            "rows": 1,
            "columns": 1,
            "stats": [{"kind": "cactus", "symbol": "x"}],
        }
        assert not GridSnapshotValidator().is_valid(data)

    def test_negative_stage(self):
        data = {
            "schema_version": "1",
            "farm_type": "plant",
            "rows": 1,
            "columns": 1,
            "stats": [{"kind": "berry", "symbol": ".", "stage": -1}],
        }
        errors = list(GridSnapshotValidator().iter_errors(data))
        assert len(errors) == 1


# =============================================================================
# ROUND TRIP
# =============================================================================


class TestRoundTrip:
    """Тесты сохранения и загрузки."""

    def test_plant_grid_in_memory(self, grown_plant_grid):
        restored = grid_from_snapshot(grid_to_snapshot(grown_plant_grid))
        assert restored.get_stats() == grown_plant_grid.get_stats()
        assert restored.display() == grown_plant_grid.display()

    def test_animal_grid_in_memory(self, busy_animal_grid):
        restored = grid_from_snapshot(grid_to_snapshot(busy_animal_grid))
        assert restored.farm_type == FarmType.ANIMAL
        assert restored.get_stats() == busy_animal_grid.get_stats()

    def test_file_round_trip(self, tmp_path, grown_plant_grid):
        path = save_grid(tmp_path / "farms" / "plot.json", grown_plant_grid)
        assert path.exists()
        assert [p.name for p in path.parent.iterdir()] == ["plot.json"]

        restored = load_grid(path)
        assert (restored.rows, restored.columns) == (2, 3)
        assert restored.get_stats() == grown_plant_grid.get_stats()

    def test_file_is_readable_json(self, tmp_path, busy_animal_grid):
        path = save_grid(tmp_path / "barn.json", busy_animal_grid)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["stats"][1] == {"kind": "cow", "symbol": "४", "fed": True, "collected": True}
        assert data["stats"][3] == {"kind": "ground", "symbol": " "}

    def test_restored_grid_keeps_lifecycle(self, busy_animal_grid):
        restored = grid_from_snapshot(grid_to_snapshot(busy_animal_grid))
        assert restored.harvest(0, 0).kind.value == "egg"


# =============================================================================
# INVALID DOCUMENTS
# =============================================================================


class TestInvalidSnapshots:
    """Тесты некорректных снапшотов."""

    def test_schema_violation(self):
        with pytest.raises(SnapshotFormatError):
            grid_from_snapshot({"farm_type": "plant"})

    def test_cell_count_mismatch(self):
        data = {
            "schema_version": "1",
            "farm_type": "plant",
            "rows": 2,
            "columns": 2,
            "stats": [{"kind": "ground", "symbol": " "}],
        }
        with pytest.raises(SnapshotFormatError, match="expected 4"):
            grid_from_snapshot(data)

    def test_occupant_incompatible_with_farm_type(self):
        data = {
            "schema_version": "1",
            "farm_type": "animal",
            "rows": 1,
            "columns": 1,
            "stats": [{"kind": "berry", "symbol": ".", "stage": 0}],
        }
        with pytest.raises(SnapshotFormatError):
            grid_from_snapshot(data)

    def test_stage_beyond_final(self):
        data = {
            "schema_version": "1",
            "farm_type": "plant",
            "rows": 1,
            "columns": 1,
            "stats": [{"kind": "wheat", "symbol": "#", "stage": 5}],
        }
        with pytest.raises(SnapshotFormatError):
            grid_from_snapshot(data)

    def test_not_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("farm_type=plant", encoding="utf-8")
        with pytest.raises(SnapshotFormatError):
            load_grid(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_grid(tmp_path / "absent.json")
