"""
Customer — Ссылка на покупателя

Адресная книга находится вне ядра; транзакции хранят только
неизменяемую ссылку на покупателя.
"""

from pydantic import BaseModel, Field


class Customer(BaseModel):
    """Покупатель, к которому привязана транзакция."""

    name: str = Field(..., min_length=1, description="Имя покупателя")
    phone_number: int = Field(default=0, ge=0, description="Телефон (0 если неизвестен)")
    address: str = Field(default="", description="Адрес доставки")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"Name: {self.name} | Phone Number: {self.phone_number} | Address: {self.address}"


WALK_IN_CUSTOMER = Customer(name="Walk-in", phone_number=0, address="")
