"""
Quality — Качество урожая и генератор случайного качества

Упорядоченное перечисление REGULAR < SILVER < GOLD < IRIDIUM.
Каждый сбор урожая получает независимо вытянутое качество
из взвешенного распределения (по умолчанию сильно смещено к REGULAR).
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional


# =============================================================================
# ENUMS
# =============================================================================


class Quality(str, Enum):
    """Качество продукта (по возрастанию ранга)."""

    REGULAR = "regular"
    SILVER = "silver"
    GOLD = "gold"
    IRIDIUM = "iridium"

    @property
    def rank(self) -> int:
        """Порядковый ранг (REGULAR = 0)."""
        return _RANKS[self]

    def __lt__(self, other):
        if not isinstance(other, Quality):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Quality):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Quality):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Quality):
            return NotImplemented
        return self.rank >= other.rank


_RANKS = {quality: index for index, quality in enumerate(Quality)}


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class QualityConfig:
    """Относительные веса качеств при случайном выборе.

    Веса не обязаны суммироваться в 100, важно только соотношение.
    """

    regular_weight: float = 70.0
    silver_weight: float = 20.0
    gold_weight: float = 8.0
    iridium_weight: float = 2.0

    def __post_init__(self):
        weights = self.weights()
        if any(w < 0 for w in weights):
            raise ValueError(f"Quality weights must be non-negative, got {weights}")
        if sum(weights) <= 0:
            raise ValueError("At least one quality weight must be positive")

    def weights(self) -> tuple[float, float, float, float]:
        """Веса в порядке перечисления Quality."""
        return (
            self.regular_weight,
            self.silver_weight,
            self.gold_weight,
            self.iridium_weight,
        )


# =============================================================================
# RANDOM QUALITY
# =============================================================================


class RandomQuality:
    """Генератор независимых одинаково распределённых качеств.

    Источник случайности можно передать явно (seeded random.Random
    в тестах); по умолчанию используется собственный экземпляр.
    """

    def __init__(
        self,
        config: Optional[QualityConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or QualityConfig()
        self._rng = rng or random.Random()
        self._population = list(Quality)

    def draw(self) -> Quality:
        """Вытянуть одно качество."""
        return self._rng.choices(self._population, weights=self.config.weights(), k=1)[0]
