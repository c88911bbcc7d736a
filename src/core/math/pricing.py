"""
Pricing — Целочисленная арифметика цен и скидок

Все денежные величины хранятся в центах (int).
Скидки задаются целым процентом и ограничиваются диапазоном [0, 100]
в момент ввода.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Скидка никогда не выходит за [0, 100]
2. Итог никогда не отрицателен и не превышает subtotal
3. Округление детерминировано (вниз до цента)
"""

from typing import Final

MIN_DISCOUNT_PERCENT: Final[int] = 0
MAX_DISCOUNT_PERCENT: Final[int] = 100


def clamp(value: int, min_value: int | None = None, max_value: int | None = None) -> int:
    """
    Ограничение значения в заданном диапазоне.

    Examples:
        >>> clamp(5, 0, 10)
        5
        >>> clamp(-1, 0, 10)
        0
        >>> clamp(15, 0, 10)
        10
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result


def clamp_discount(percent: int, max_percent: int = MAX_DISCOUNT_PERCENT) -> int:
    """
    Нормализация процента скидки в [0, max_percent].

    Raises:
        ValueError: если percent не целое число
    """
    if isinstance(percent, bool) or not isinstance(percent, int):
        raise ValueError(f"discount percent must be an integer, got {percent!r}")
    return clamp(percent, MIN_DISCOUNT_PERCENT, clamp(max_percent, MIN_DISCOUNT_PERCENT, MAX_DISCOUNT_PERCENT))


def line_total(unit_price_cents: int, quantity: int) -> int:
    """Стоимость строки без скидки."""
    if unit_price_cents < 0:
        raise ValueError(f"unit price must be non-negative, got {unit_price_cents}")
    if quantity < 0:
        raise ValueError(f"quantity must be non-negative, got {quantity}")
    return unit_price_cents * quantity


def discount_amount(amount_cents: int, percent: int) -> int:
    """
    Размер скидки в центах (округление вниз).

    Examples:
        >>> discount_amount(1000, 25)
        250
        >>> discount_amount(999, 50)
        499
    """
    return amount_cents * clamp_discount(percent) // 100


def apply_discount(amount_cents: int, percent: int) -> int:
    """Сумма после скидки."""
    return amount_cents - discount_amount(amount_cents, percent)


def format_cents(amount_cents: int, currency_symbol: str = "$") -> str:
    """
    Форматирование центов в денежную строку.

    Examples:
        >>> format_cents(12345)
        '$123.45'
        >>> format_cents(5)
        '$0.05'
    """
    sign = "-" if amount_cents < 0 else ""
    dollars, cents = divmod(abs(amount_cents), 100)
    return f"{sign}{currency_symbol}{dollars}.{cents:02d}"
