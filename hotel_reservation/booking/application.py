"""
Прикладной слой контекста бронирования.

Содержит DTO и сервис приложения, через который слой представления
обращается к реестру бронирований и поиску свободных номеров.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from ..shared_kernel import DomainException, EntityId, InvalidReservationId, Money
from . import interfaces as ports
from .domain import AvailabilityService, Guest, Reservation, ReservationLedger, Room
from .infrastructure import ConsoleLogger, InMemoryEventBus


def parse_reservation_id(raw_value: str) -> EntityId:
    """Разбирает текстовое представление UUID бронирования."""
    try:
        return UUID(raw_value.strip())
    except (AttributeError, ValueError):
        raise InvalidReservationId(raw_value)


# DTO для входящих данных


class GuestDTO(BaseModel):
    """DTO для представления гостя."""

    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    phone: str

    def to_domain(self) -> Guest:
        return Guest(name=self.name, email=self.email, phone=self.phone)

    @classmethod
    def from_domain(cls, guest: Guest) -> "GuestDTO":
        """Создает DTO из доменной модели."""
        return cls(name=guest.name, email=guest.email, phone=guest.phone)


# DTO для исходящих данных


class RoomDTO(BaseModel):
    """DTO для представления номера."""

    model_config = ConfigDict(frozen=True)

    number: int
    type: str
    price_per_night: Decimal
    currency: str

    @classmethod
    def from_domain(cls, room: Room) -> "RoomDTO":
        """Создает DTO из доменной модели."""
        return cls(
            number=room.number,
            type=room.type.value,
            price_per_night=room.price_per_night.amount,
            currency=room.price_per_night.currency,
        )

    def __str__(self) -> str:
        price = Money(amount=self.price_per_night, currency=self.currency)
        return f"Room {self.number} - {self.type} - {price}"


class ReservationDTO(BaseModel):
    """DTO для представления бронирования."""

    model_config = ConfigDict(frozen=True)

    id: EntityId
    room_number: int
    room_type: str
    guest: GuestDTO
    check_in: date
    check_out: date
    nights: int
    total_price: Decimal
    currency: str
    created_at: str

    @classmethod
    def from_domain(cls, reservation: Reservation) -> "ReservationDTO":
        """Создает DTO из доменной модели."""
        total = reservation.total_price
        return cls(
            id=reservation.id,
            room_number=reservation.room.number,
            room_type=reservation.room.type.value,
            guest=GuestDTO.from_domain(reservation.guest),
            check_in=reservation.check_in,
            check_out=reservation.check_out,
            nights=reservation.nights,
            total_price=total.amount,
            currency=total.currency,
            created_at=reservation.created_at.isoformat(),
        )

    def __str__(self) -> str:
        return "\n".join(
            [
                f"Reservation ID: {self.id}",
                f"Guest: {self.guest.name}",
                f"Room: {self.room_number} ({self.room_type})",
                f"Check-In: {self.check_in.isoformat()}",
                f"Check-Out: {self.check_out.isoformat()}",
                f"Nights: {self.nights}",
                f"Total: {Money(amount=self.total_price, currency=self.currency)}",
            ]
        )


# Сервисы приложения


class HotelReservationService:
    """
    Сервис приложения для работы с номерами и бронированиями.

    Единственная точка входа для слоя представления. Доменные ошибки
    пробрасываются вызывающему как типизированные исключения.
    """

    def __init__(
        self,
        ledger: ReservationLedger,
        event_bus: Optional[ports.IEventBus] = None,
        logger: Optional[ports.ILogger] = None,
    ):
        """Инициализирует сервис."""
        self._ledger = ledger
        self._availability = AvailabilityService(ledger)
        self._logger = logger or ConsoleLogger()
        self._event_bus = event_bus or InMemoryEventBus(self._logger)

    @property
    def event_bus(self) -> ports.IEventBus:
        return self._event_bus

    def list_rooms(self) -> List[RoomDTO]:
        """Возвращает все номера в порядке каталога."""
        return [RoomDTO.from_domain(room) for room in self._ledger.catalog]

    def get_available_rooms(
        self, check_in: Union[date, datetime], check_out: Union[date, datetime]
    ) -> List[RoomDTO]:
        """Возвращает номера, свободные на весь период."""
        try:
            rooms = self._availability.get_available_rooms(check_in, check_out)
        except DomainException as e:
            self._logger.warning(f"Availability query rejected: {e}", code=e.code)
            raise

        self._logger.debug(
            "Availability query",
            check_in=check_in,
            check_out=check_out,
            available=[room.number for room in rooms],
        )
        return [RoomDTO.from_domain(room) for room in rooms]

    def make_reservation(
        self,
        guest: GuestDTO,
        room_number: int,
        check_in: Union[date, datetime],
        check_out: Union[date, datetime],
    ) -> ReservationDTO:
        """Создает новое бронирование."""
        result = self._ledger.make_reservation(
            guest=guest.to_domain(),
            room_number=room_number,
            check_in=check_in,
            check_out=check_out,
        )
        if not result.is_success:
            self._logger.warning(
                f"Reservation rejected: {result.error}",
                code=result.error_code,
                room_number=room_number,
            )
        reservation = result.unwrap()

        self._logger.info(
            "Reservation created",
            reservation_id=reservation.id,
            room_number=reservation.room.number,
            check_in=reservation.check_in,
            check_out=reservation.check_out,
        )
        self._publish_events()
        return ReservationDTO.from_domain(reservation)

    def cancel_reservation(self, reservation_id: Union[EntityId, str]) -> bool:
        """Отменяет бронирование. Возвращает False, если ID неизвестен."""
        if not isinstance(reservation_id, UUID):
            reservation_id = parse_reservation_id(reservation_id)

        cancelled = self._ledger.cancel_reservation(reservation_id)
        if cancelled:
            self._logger.info("Reservation cancelled", reservation_id=reservation_id)
            self._publish_events()
        else:
            self._logger.debug("Reservation not found", reservation_id=reservation_id)
        return cancelled

    def get_reservation(
        self, reservation_id: Union[EntityId, str]
    ) -> Optional[ReservationDTO]:
        """Возвращает бронирование по ID или None."""
        if not isinstance(reservation_id, UUID):
            reservation_id = parse_reservation_id(reservation_id)

        reservation = self._ledger.get_reservation(reservation_id)
        if reservation is None:
            return None
        return ReservationDTO.from_domain(reservation)

    def list_reservations(self) -> List[ReservationDTO]:
        """Возвращает активные бронирования в порядке создания."""
        return [
            ReservationDTO.from_domain(reservation)
            for reservation in self._ledger.list_reservations()
        ]

    def _publish_events(self) -> None:
        for event in self._ledger.pull_domain_events():
            self._event_bus.publish(event)
