"""
Конфигурация приложения: валюта, состав каталога номеров, подробность логов.
"""

from decimal import Decimal
from pathlib import Path
from typing import List, Union

from pydantic import BaseModel, Field, field_validator

from .shared_kernel import RoomType


class RoomSpec(BaseModel):
    """Описание номера для заполнения каталога."""

    number: int = Field(..., gt=0)
    type: RoomType
    price: Decimal = Field(..., ge=0)


def default_rooms() -> List[RoomSpec]:
    """Тестовые данные каталога."""
    return [
        RoomSpec(number=101, type=RoomType.SINGLE, price=Decimal("100")),
        RoomSpec(number=102, type=RoomType.DOUBLE, price=Decimal("150")),
        RoomSpec(number=103, type=RoomType.SUITE, price=Decimal("250")),
        RoomSpec(number=104, type=RoomType.SINGLE, price=Decimal("100")),
        RoomSpec(number=105, type=RoomType.DOUBLE, price=Decimal("150")),
    ]


class HotelConfig(BaseModel):
    """Настройки отеля."""

    currency: str = Field(default="USD", max_length=3)
    rooms: List[RoomSpec] = Field(default_factory=default_rooms)
    verbose: bool = False

    @field_validator("rooms")
    @classmethod
    def room_numbers_unique(cls, v: List[RoomSpec]) -> List[RoomSpec]:
        numbers = [room.number for room in v]
        if len(numbers) != len(set(numbers)):
            raise ValueError("Номера комнат в каталоге должны быть уникальными")
        return v

    @classmethod
    def from_json_file(cls, file_path: Union[str, Path]) -> "HotelConfig":
        """Загружает настройки из JSON-файла."""
        raw_data = Path(file_path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw_data)
