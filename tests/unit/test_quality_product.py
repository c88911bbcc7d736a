"""Тесты для Quality, Product и Customer.

Coverage:
- Порядок качеств по рангу
- Взвешенный выбор качества (seeded random.Random)
- Каталог видов продукции и цены
- Immutability Pydantic моделей
"""

import random

import pytest
from pydantic import ValidationError

from src.core.domain import (
    BASE_PRICES_CENTS,
    WALK_IN_CUSTOMER,
    Customer,
    Product,
    ProductKind,
    Quality,
    QualityConfig,
    RandomQuality,
)


# =============================================================================
# QUALITY
# =============================================================================


class TestQuality:
    """Тесты перечисления Quality."""

    def test_ordering_by_rank(self):
        assert Quality.REGULAR < Quality.SILVER < Quality.GOLD < Quality.IRIDIUM
        assert Quality.IRIDIUM >= Quality.GOLD
        assert Quality.REGULAR <= Quality.REGULAR

    def test_sorted_uses_rank_not_value(self):
        """Строковый порядок (gold < iridium < regular < silver) не используется."""
        shuffled = [Quality.SILVER, Quality.IRIDIUM, Quality.REGULAR, Quality.GOLD]
        assert sorted(shuffled) == [Quality.REGULAR, Quality.SILVER, Quality.GOLD, Quality.IRIDIUM]

    def test_rank_values(self):
        assert [q.rank for q in Quality] == [0, 1, 2, 3]


class TestQualityConfig:
    """Тесты конфигурации весов."""

    def test_default_weights_favour_regular(self):
        weights = QualityConfig().weights()
        assert weights == (70.0, 20.0, 8.0, 2.0)
        assert weights[0] == max(weights)

    def test_negative_weight_rejected(self):
        with pytest.raises(ValueError):
            QualityConfig(silver_weight=-1.0)

    def test_all_zero_weights_rejected(self):
        with pytest.raises(ValueError):
            QualityConfig(regular_weight=0, silver_weight=0, gold_weight=0, iridium_weight=0)


class TestRandomQuality:
    """Тесты генератора качества."""

    def test_seeded_draws_are_reproducible(self):
        first = RandomQuality(rng=random.Random(42))
        second = RandomQuality(rng=random.Random(42))
        assert [first.draw() for _ in range(50)] == [second.draw() for _ in range(50)]

    def test_single_weight_always_drawn(self):
        config = QualityConfig(regular_weight=0, silver_weight=0, gold_weight=1, iridium_weight=0)
        rq = RandomQuality(config, rng=random.Random(1))
        assert {rq.draw() for _ in range(100)} == {Quality.GOLD}

    def test_distribution_close_to_weights(self):
        rq = RandomQuality(rng=random.Random(7))
        draws = [rq.draw() for _ in range(10_000)]
        regular_share = draws.count(Quality.REGULAR) / len(draws)
        assert 0.65 < regular_share < 0.75
        assert draws.count(Quality.IRIDIUM) < draws.count(Quality.GOLD)


# =============================================================================
# PRODUCT
# =============================================================================


class TestProductKind:
    """Тесты каталога продукции."""

    def test_catalogue_order(self):
        assert list(ProductKind) == [
            ProductKind.EGG,
            ProductKind.MILK,
            ProductKind.JAM,
            ProductKind.WOOL,
            ProductKind.BREAD,
            ProductKind.COFFEE,
        ]
        assert ProductKind.EGG.catalogue_index == 0
        assert ProductKind.COFFEE.catalogue_index == 5

    def test_every_kind_has_price(self):
        assert set(BASE_PRICES_CENTS) == set(ProductKind)
        assert ProductKind.EGG.base_price == 50
        assert ProductKind.WOOL.base_price == 5000

    def test_display_name(self):
        assert ProductKind.MILK.display_name == "Milk"

    @pytest.mark.parametrize("name", ["jam", "JAM", " Jam "])
    def test_from_name_case_insensitive(self, name):
        assert ProductKind.from_name(name) == ProductKind.JAM

    @pytest.mark.parametrize("name", [None, "", "honey"])
    def test_from_name_unknown(self, name):
        assert ProductKind.from_name(name) is None


class TestProduct:
    """Тесты модели Product."""

    def test_default_quality_regular(self):
        assert Product(kind=ProductKind.EGG).quality == Quality.REGULAR

    def test_equality_by_kind_and_quality(self):
        assert Product(kind=ProductKind.EGG, quality=Quality.GOLD) == Product(
            kind=ProductKind.EGG, quality=Quality.GOLD
        )
        assert Product(kind=ProductKind.EGG, quality=Quality.GOLD) != Product(
            kind=ProductKind.EGG, quality=Quality.SILVER
        )

    def test_frozen(self):
        product = Product(kind=ProductKind.EGG)
        with pytest.raises(ValidationError):
            product.quality = Quality.GOLD

    def test_price_ignores_quality(self):
        assert Product(kind=ProductKind.BREAD, quality=Quality.IRIDIUM).base_price == 3670

    def test_str(self):
        assert str(Product(kind=ProductKind.EGG)) == "Egg: 50c *regular*"

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            Product(kind="honey")


class TestCustomer:
    """Тесты ссылки на покупателя."""

    def test_defaults(self):
        customer = Customer(name="Ana")
        assert customer.phone_number == 0
        assert customer.address == ""

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            Customer(name="")

    def test_negative_phone_rejected(self):
        with pytest.raises(ValidationError):
            Customer(name="Ana", phone_number=-5)

    def test_walk_in(self):
        assert WALK_IN_CUSTOMER.name == "Walk-in"
