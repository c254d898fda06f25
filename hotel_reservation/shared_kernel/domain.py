"""
Основные доменные типы и утилиты общего ядра.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Generic, Optional, TypeVar, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Общие типы идентификаторов
EntityId = UUID


def generate_id() -> UUID:
    """Генерирует новый UUID."""
    return uuid4()


# Общие утилиты
def now() -> datetime:
    """Возвращает текущую дату и время в UTC."""
    return datetime.now(timezone.utc)


def as_date(value: Union[date, datetime]) -> date:
    """Отбрасывает время суток: даты сравниваются с точностью до дня."""
    if isinstance(value, datetime):
        return value.date()
    return value


# Общие перечисления
class RoomType(str, Enum):
    """Типы номеров в отеле."""

    SINGLE = "Single"
    DOUBLE = "Double"
    SUITE = "Suite"


class ErrorCode(str, Enum):
    """Метки доменных ошибок."""

    ROOM_NOT_FOUND = "room_not_found"
    ROOM_UNAVAILABLE = "room_unavailable"
    INVALID_DATE_RANGE = "invalid_date_range"
    INVALID_RESERVATION_ID = "invalid_reservation_id"
    DUPLICATE_RESERVATION_ID = "duplicate_reservation_id"


# Общие исключения
class DomainException(Exception):
    """Базовое исключение для доменных ошибок."""

    code: Optional[ErrorCode] = None


class RoomNotFound(DomainException):
    """Номер отсутствует в каталоге."""

    code = ErrorCode.ROOM_NOT_FOUND

    def __init__(self, room_number: int):
        super().__init__(f"Номер {room_number} не найден")
        self.room_number = room_number


class RoomUnavailable(DomainException):
    """Номер уже забронирован на пересекающийся период."""

    code = ErrorCode.ROOM_UNAVAILABLE

    def __init__(self, room_number: int, check_in: date, check_out: date):
        super().__init__(
            f"Номер {room_number} недоступен на выбранные даты "
            f"({check_in.isoformat()} - {check_out.isoformat()})"
        )
        self.room_number = room_number
        self.check_in = check_in
        self.check_out = check_out


class InvalidDateRange(DomainException):
    """Дата заезда не раньше даты выезда."""

    code = ErrorCode.INVALID_DATE_RANGE

    def __init__(self, check_in: date, check_out: date):
        super().__init__(
            f"Дата выезда ({check_out}) должна быть позже даты заезда ({check_in})"
        )
        self.check_in = check_in
        self.check_out = check_out


class InvalidReservationId(DomainException):
    """Строка не является идентификатором бронирования."""

    code = ErrorCode.INVALID_RESERVATION_ID

    def __init__(self, raw_value: str):
        super().__init__(f"Некорректный формат ID бронирования: {raw_value!r}")
        self.raw_value = raw_value


class DuplicateReservationId(DomainException):
    """Генератор идентификаторов повторно выдает уже занятые ID."""

    code = ErrorCode.DUPLICATE_RESERVATION_ID

    def __init__(self, reservation_id: UUID):
        super().__init__(
            f"Не удалось получить свободный ID бронирования (последний: {reservation_id})"
        )
        self.reservation_id = reservation_id


T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Результат операции: значение либо доменная ошибка.

    Ровно одно из полей `value` и `error` несет смысл.
    """

    value: Optional[T] = None
    error: Optional[DomainException] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: DomainException) -> "Result[T]":
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def error_code(self) -> Optional[ErrorCode]:
        return self.error.code if self.error is not None else None

    def unwrap(self) -> T:
        """Возвращает значение или выбрасывает сохраненную ошибку."""
        if self.error is not None:
            raise self.error
        return self.value


class Money(BaseModel):
    """Денежная сумма с валютой."""

    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(..., ge=0, description="Сумма денег")
    currency: str = Field(
        default="USD", max_length=3, description="Код валюты (ISO 4217)"
    )

    def __mul__(self, multiplier: int) -> "Money":
        if not isinstance(multiplier, (int, Decimal)):
            raise TypeError("Множитель должен быть числом")
        if multiplier < 0:
            raise ValueError("Множитель не может быть отрицательным")
        return Money(amount=self.amount * multiplier, currency=self.currency)

    def __str__(self) -> str:
        amount = self.amount.quantize(Decimal("0.01"))
        if self.currency == "USD":
            return f"${amount}"
        return f"{amount} {self.currency}"


class DateRange(BaseModel):
    """Полуоткрытый диапазон дат [check_in, check_out)."""

    model_config = ConfigDict(frozen=True)

    check_in: date
    check_out: date

    @field_validator("check_in", "check_out", mode="before")
    @classmethod
    def drop_time_of_day(cls, v):
        return as_date(v)

    @model_validator(mode="after")
    def check_out_after_check_in(self) -> "DateRange":
        if self.check_out <= self.check_in:
            raise ValueError("Дата выезда должна быть позже даты заезда")
        return self

    @classmethod
    def create(
        cls, check_in: Union[date, datetime], check_out: Union[date, datetime]
    ) -> "DateRange":
        """Создает диапазон, сообщая о неверных датах доменной ошибкой."""
        for value in (check_in, check_out):
            if not isinstance(value, date):
                raise TypeError(
                    f"Ожидается date или datetime, получено {type(value).__name__}"
                )
        check_in, check_out = as_date(check_in), as_date(check_out)
        if check_in >= check_out:
            raise InvalidDateRange(check_in, check_out)
        return cls(check_in=check_in, check_out=check_out)

    @property
    def nights(self) -> int:
        """Количество ночей в бронировании."""
        return (self.check_out - self.check_in).days

    def overlaps(self, other: "DateRange") -> bool:
        """
        Проверяет пересечение полуоткрытых интервалов.

        Выезд в день чужого заезда пересечением не считается.
        """
        return self.check_in < other.check_out and other.check_in < self.check_out


class DomainEvent(BaseModel):
    """Базовый класс для всех доменных событий."""

    model_config = ConfigDict(frozen=True)

    event_id: UUID = Field(default_factory=uuid4)
    occurred_on: datetime = Field(default_factory=now)
    event_type: str
