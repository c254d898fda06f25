"""
Общие фикстуры для тестов системы бронирования.
"""

from datetime import date
from decimal import Decimal
from typing import Any, List, Tuple

import pytest

from hotel_reservation.booking.application import GuestDTO, HotelReservationService
from hotel_reservation.booking.domain import (
    Guest,
    ReservationLedger,
    Room,
    RoomCatalog,
)
from hotel_reservation.booking.infrastructure import (
    InMemoryEventBus,
    InMemoryReservationRepository,
)
from hotel_reservation.shared_kernel import Money, RoomType


class RecordingLogger:
    """Логгер, запоминающий сообщения вместо вывода в консоль."""

    def __init__(self):
        self.records: List[Tuple[str, str, dict]] = []

    def _record(self, level: str, message: str, kwargs: Any) -> None:
        self.records.append((level, message, kwargs))

    def info(self, message: str, **kwargs) -> None:
        self._record("info", message, kwargs)

    def error(self, message: str, **kwargs) -> None:
        self._record("error", message, kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._record("warning", message, kwargs)

    def debug(self, message: str, **kwargs) -> None:
        self._record("debug", message, kwargs)

    def messages(self, level: str) -> List[str]:
        return [message for lvl, message, _ in self.records if lvl == level]


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def catalog() -> RoomCatalog:
    """Каталог из двух номеров: 101 (Single, $100) и 102 (Double, $150)."""
    return RoomCatalog(
        [
            Room(
                number=101,
                type=RoomType.SINGLE,
                price_per_night=Money(amount=Decimal("100")),
            ),
            Room(
                number=102,
                type=RoomType.DOUBLE,
                price_per_night=Money(amount=Decimal("150")),
            ),
        ]
    )


@pytest.fixture
def ledger(catalog: RoomCatalog) -> ReservationLedger:
    return ReservationLedger(catalog=catalog, repository=InMemoryReservationRepository())


@pytest.fixture
def guest() -> Guest:
    return Guest(name="Иван Иванов", email="ivan@example.com", phone="+79101234567")


@pytest.fixture
def guest_dto() -> GuestDTO:
    return GuestDTO(name="Петр Петров", email="petr@example.com", phone="+79111234567")


@pytest.fixture
def service(ledger: ReservationLedger, logger: RecordingLogger) -> HotelReservationService:
    return HotelReservationService(
        ledger=ledger, event_bus=InMemoryEventBus(logger), logger=logger
    )


@pytest.fixture
def june() -> dict:
    """Даты из примера: 1, 2, 3, 4, 5, 6, 7 июня 2024 года."""
    return {day: date(2024, 6, day) for day in range(1, 8)}
