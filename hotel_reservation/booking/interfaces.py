"""
Интерфейсы (порты) для контекста бронирования.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, List, Optional, Protocol, Type, TypeVar

from ..shared_kernel import DomainEvent, EntityId

if TYPE_CHECKING:
    from .domain import Reservation

T_Event = TypeVar("T_Event", bound=DomainEvent)


class ILogger(Protocol):
    """Интерфейс для логгера."""

    def info(self, message: str, **kwargs: Any) -> None: ...
    def error(self, message: str, **kwargs: Any) -> None: ...
    def warning(self, message: str, **kwargs: Any) -> None: ...
    def debug(self, message: str, **kwargs: Any) -> None: ...


class IEventBus(Protocol):
    """Интерфейс для шины событий."""

    def publish(self, event: DomainEvent) -> None: ...
    def subscribe(
        self, event_type: Type[T_Event], handler: Callable[[T_Event], None]
    ) -> None: ...


class IReservationRepository(Protocol):
    """
    Интерфейс хранилища бронирований.

    Реализация обязана возвращать бронирования в порядке добавления.
    """

    def add(self, reservation: Reservation) -> None: ...
    def get_by_id(self, reservation_id: EntityId) -> Optional[Reservation]: ...
    def remove(self, reservation_id: EntityId) -> Optional[Reservation]: ...
    def find_by_room(self, room_number: int) -> List[Reservation]: ...
    def list_all(self) -> List[Reservation]: ...
