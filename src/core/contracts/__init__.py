"""
Contract Validation Module

Модуль для валидации JSON контрактов (снапшоты сетки фермы).
"""

from .validators import (
    ContractValidator,
    GridSnapshotValidator,
    SchemaLoader,
    validate_grid_snapshot,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "GridSnapshotValidator",
    # Functions
    "validate_grid_snapshot",
]
