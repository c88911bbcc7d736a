"""
Exceptions — Таксономия ошибок фермы

Все ошибки ядра наследуются от FarmError и выбрасываются
до любой мутации состояния. Ни одна из них не фатальна:
сессия сообщает об ошибке и принимает следующую команду.
"""


class FarmError(Exception):
    """Базовая ошибка ядра."""


class InvalidArgumentError(FarmError, ValueError):
    """Некорректный аргумент команды (формат координат, неизвестный символ)."""


class IncompatibleOccupantError(FarmError, ValueError):
    """Вид обитателя не соответствует типу фермы."""


class CellOccupiedError(FarmError):
    """Клетка уже занята."""


class UnableToInteractError(FarmError):
    """Взаимодействие невозможно (не созрело, не накормлено, пустая клетка, неизвестная команда)."""


class InvalidStockRequestError(FarmError):
    """Нарушение политики склада (количество != 1 для Basic)."""


class FailedTransactionError(FarmError):
    """Транзакция не может быть выполнена (нет товара, транзакция закрыта)."""


class SnapshotFormatError(FarmError, ValueError):
    """Снапшот сетки не соответствует контракту."""
