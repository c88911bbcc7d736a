"""
Domain models and value objects.

Contains fundamental domain entities like Quality, Product, Customer.
"""

from src.core.domain.customer import WALK_IN_CUSTOMER, Customer
from src.core.domain.product import BASE_PRICES_CENTS, Product, ProductKind
from src.core.domain.quality import Quality, QualityConfig, RandomQuality

__all__ = [
    # Quality
    "Quality",
    "QualityConfig",
    "RandomQuality",
    # Product
    "Product",
    "ProductKind",
    "BASE_PRICES_CENTS",
    # Customer
    "Customer",
    "WALK_IN_CUSTOMER",
]
