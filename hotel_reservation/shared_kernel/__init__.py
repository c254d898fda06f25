"""
Общее ядро (Shared Kernel) системы бронирования отеля.

Содержит общие типы данных и утилиты, используемые в контексте бронирования
и в слое представления.
"""

from .domain import (
    DateRange,
    DomainEvent,
    # Исключения
    DomainException,
    DuplicateReservationId,
    # Базовые типы
    EntityId,
    ErrorCode,
    InvalidDateRange,
    InvalidReservationId,
    # Основные классы
    Money,
    Result,
    RoomNotFound,
    # Перечисления
    RoomType,
    RoomUnavailable,
    # Утилиты
    as_date,
    generate_id,
    now,
)

__all__ = [
    # Базовые типы
    "EntityId",
    "generate_id",
    # Основные классы
    "Money",
    "DateRange",
    "DomainEvent",
    "Result",
    # Перечисления
    "RoomType",
    "ErrorCode",
    # Исключения
    "DomainException",
    "RoomNotFound",
    "RoomUnavailable",
    "InvalidDateRange",
    "InvalidReservationId",
    "DuplicateReservationId",
    # Утилиты
    "now",
    "as_date",
]
