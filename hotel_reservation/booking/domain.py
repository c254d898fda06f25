"""
Доменная модель контекста бронирования.

Содержит сущности (номер, гость, бронирование), каталог номеров,
реестр бронирований и доменный сервис проверки доступности.
"""

import threading
from contextlib import contextmanager
from datetime import date, datetime
from typing import Callable, Iterable, Iterator, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from ..shared_kernel import (
    DateRange,
    DomainEvent,
    DuplicateReservationId,
    EntityId,
    InvalidDateRange,
    Money,
    Result,
    RoomNotFound,
    RoomType,
    RoomUnavailable,
    generate_id,
    now,
)
from .interfaces import IReservationRepository

DateLike = Union[date, datetime]


class Room(BaseModel):
    """Номер в отеле."""

    model_config = ConfigDict(frozen=True)

    number: int = Field(..., gt=0)  # Номер комнаты (например, 101)
    type: RoomType
    price_per_night: Money


class Guest(BaseModel):
    """Гость отеля. Хранится только внутри бронирования."""

    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    phone: str


class ReservationMade(DomainEvent):
    """Событие создания бронирования."""

    event_type: str = "ReservationMade"
    reservation_id: EntityId
    room_number: int
    guest_name: str
    period: DateRange


class ReservationCancelled(DomainEvent):
    """Событие отмены бронирования."""

    event_type: str = "ReservationCancelled"
    reservation_id: EntityId
    room_number: int
    period: DateRange


class Reservation(BaseModel):
    """Бронирование номера в отеле."""

    model_config = ConfigDict(frozen=True)

    id: EntityId = Field(default_factory=generate_id)
    room: Room
    guest: Guest
    period: DateRange
    created_at: datetime = Field(default_factory=now)

    @property
    def check_in(self) -> date:
        return self.period.check_in

    @property
    def check_out(self) -> date:
        return self.period.check_out

    @property
    def nights(self) -> int:
        return self.period.nights

    @property
    def total_price(self) -> Money:
        """Стоимость проживания по фиксированной цене номера."""
        return self.room.price_per_night * self.nights

    @classmethod
    def create(
        cls,
        room: Room,
        guest: Guest,
        period: DateRange,
        id_factory: Callable[[], EntityId] = generate_id,
    ) -> "Reservation":
        """Создает новое бронирование со свежим идентификатором."""
        return cls(id=id_factory(), room=room, guest=guest, period=period)


class RoomCatalog:
    """Неизменяемый упорядоченный каталог номеров."""

    def __init__(self, rooms: Iterable[Room]):
        rooms = tuple(rooms)
        index = {}
        for room in rooms:
            if room.number in index:
                raise ValueError(f"Номер {room.number} уже есть в каталоге")
            index[room.number] = room
        self._rooms: Tuple[Room, ...] = rooms
        self._index = index

    @property
    def rooms(self) -> Tuple[Room, ...]:
        return self._rooms

    def get(self, room_number: int) -> Optional[Room]:
        """Возвращает номер по точному совпадению или None."""
        return self._index.get(room_number)

    def __iter__(self) -> Iterator[Room]:
        return iter(self._rooms)

    def __len__(self) -> int:
        return len(self._rooms)


class ReservationLedger:
    """
    Реестр активных бронирований.

    Проверка доступности и добавление бронирования выполняются
    под одной блокировкой, поэтому два параллельных запроса не могут
    забронировать один номер на пересекающиеся даты.
    """

    MAX_ID_ATTEMPTS = 5

    def __init__(
        self,
        catalog: RoomCatalog,
        repository: IReservationRepository,
        id_factory: Callable[[], EntityId] = generate_id,
    ):
        self._catalog = catalog
        self._repository = repository
        self._id_factory = id_factory
        self._lock = threading.RLock()
        self._domain_events: List[DomainEvent] = []

    @property
    def catalog(self) -> RoomCatalog:
        return self._catalog

    @contextmanager
    def locked(self) -> Iterator["ReservationLedger"]:
        """Удерживает блокировку реестра для согласованного чтения."""
        with self._lock:
            yield self

    def pull_domain_events(self) -> List[DomainEvent]:
        """Возвращает накопленные события и очищает очередь."""
        with self._lock:
            events = list(self._domain_events)
            self._domain_events.clear()
            return events

    def is_period_booked(self, room_number: int, period: DateRange) -> bool:
        with self._lock:
            return any(
                reservation.period.overlaps(period)
                for reservation in self._repository.find_by_room(room_number)
            )

    def is_room_booked(
        self, room_number: int, check_in: DateLike, check_out: DateLike
    ) -> bool:
        """Проверяет, пересекается ли период с активным бронированием номера."""
        return self.is_period_booked(room_number, DateRange.create(check_in, check_out))

    def make_reservation(
        self,
        guest: Guest,
        room_number: int,
        check_in: DateLike,
        check_out: DateLike,
    ) -> Result[Reservation]:
        """Создает бронирование, если номер существует и свободен."""
        try:
            period = DateRange.create(check_in, check_out)
        except InvalidDateRange as error:
            return Result.failure(error)

        room = self._catalog.get(room_number)
        if room is None:
            return Result.failure(RoomNotFound(room_number))

        with self._lock:
            if self.is_period_booked(room.number, period):
                return Result.failure(
                    RoomUnavailable(room.number, period.check_in, period.check_out)
                )

            try:
                reservation_id = self._draw_free_id()
            except DuplicateReservationId as error:
                return Result.failure(error)

            reservation = Reservation.create(
                room=room, guest=guest, period=period, id_factory=lambda: reservation_id
            )
            self._repository.add(reservation)
            self._domain_events.append(
                ReservationMade(
                    reservation_id=reservation.id,
                    room_number=room.number,
                    guest_name=guest.name,
                    period=period,
                )
            )

        return Result.success(reservation)

    def _draw_free_id(self) -> EntityId:
        """Берет у генератора ID, еще не занятый в реестре."""
        for _ in range(self.MAX_ID_ATTEMPTS):
            candidate = self._id_factory()
            if self._repository.get_by_id(candidate) is None:
                return candidate
        raise DuplicateReservationId(candidate)

    def cancel_reservation(self, reservation_id: EntityId) -> bool:
        """Удаляет бронирование. Неизвестный ID - не ошибка, а False."""
        with self._lock:
            reservation = self._repository.remove(reservation_id)
            if reservation is None:
                return False

            self._domain_events.append(
                ReservationCancelled(
                    reservation_id=reservation.id,
                    room_number=reservation.room.number,
                    period=reservation.period,
                )
            )
            return True

    def get_reservation(self, reservation_id: EntityId) -> Optional[Reservation]:
        with self._lock:
            return self._repository.get_by_id(reservation_id)

    def list_reservations(self) -> List[Reservation]:
        """Снимок активных бронирований в порядке создания."""
        with self._lock:
            return list(self._repository.list_all())


class AvailabilityService:
    """Доменный сервис для поиска свободных номеров."""

    def __init__(self, ledger: ReservationLedger):
        self._ledger = ledger

    def get_available_rooms(
        self, check_in: DateLike, check_out: DateLike
    ) -> List[Room]:
        """Возвращает свободные на период номера в порядке каталога."""
        period = DateRange.create(check_in, check_out)

        # Весь проход по каталогу видит одно состояние реестра
        with self._ledger.locked() as ledger:
            return [
                room
                for room in ledger.catalog
                if not ledger.is_period_booked(room.number, period)
            ]
