"""
Инфраструктурный слой контекста бронирования.

Содержит реализации портов: хранилище бронирований в памяти,
консольный логгер и шину событий.
"""

import json
import sys
from typing import Callable, Dict, List, Optional, Type

from ..shared_kernel import DomainEvent, EntityId
from . import interfaces as ports
from .domain import Reservation


class InMemoryReservationRepository(ports.IReservationRepository):
    """Реализация хранилища бронирований в памяти."""

    def __init__(self):
        # dict сохраняет порядок вставки, на нем держится порядок списка
        self._reservations: Dict[EntityId, Reservation] = {}

    def add(self, reservation: Reservation) -> None:
        if reservation.id in self._reservations:
            raise ValueError(f"Reservation with id {reservation.id} already exists")
        self._reservations[reservation.id] = reservation

    def get_by_id(self, reservation_id: EntityId) -> Optional[Reservation]:
        return self._reservations.get(reservation_id)

    def remove(self, reservation_id: EntityId) -> Optional[Reservation]:
        return self._reservations.pop(reservation_id, None)

    def find_by_room(self, room_number: int) -> List[Reservation]:
        return [
            reservation
            for reservation in self._reservations.values()
            if reservation.room.number == room_number
        ]

    def list_all(self) -> List[Reservation]:
        return list(self._reservations.values())

    def __len__(self) -> int:
        return len(self._reservations)


class ConsoleLogger(ports.ILogger):
    """Простая реализация логгера, выводящая сообщения в консоль."""

    LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40}

    def __init__(self, level: str = "INFO"):
        self.level = level.upper()
        if self.level not in self.LEVELS:
            raise ValueError(f"Unknown log level: {level}")

    def _write(self, level: str, message: str, stream, context: dict) -> None:
        if self.LEVELS[level] < self.LEVELS[self.level]:
            return
        print(f"[{level}] {message}", file=stream, flush=True)
        if context:
            print(
                "  Context:",
                json.dumps(context, default=str, indent=2, ensure_ascii=False),
                file=stream,
                flush=True,
            )

    def info(self, message: str, **kwargs) -> None:
        self._write("INFO", message, sys.stdout, kwargs)

    def error(self, message: str, **kwargs) -> None:
        self._write("ERROR", message, sys.stderr, kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._write("WARNING", message, sys.stderr, kwargs)

    def debug(self, message: str, **kwargs) -> None:
        self._write("DEBUG", message, sys.stdout, kwargs)


class InMemoryEventBus(ports.IEventBus):
    """Реализация шины событий в памяти."""

    def __init__(self, logger: Optional[ports.ILogger] = None):
        self._subscribers: Dict[Type[DomainEvent], List[Callable]] = {}
        self._logger = logger or ConsoleLogger()

    def publish(self, event: DomainEvent) -> None:
        """Публикует событие."""
        event_type = type(event)
        if event_type not in self._subscribers:
            self._logger.debug(f"No subscribers for event type {event_type.__name__}")
            return

        self._logger.debug(
            f"Publishing event: {event_type.__name__}",
            event=event.model_dump(mode="json"),
        )

        for handler in self._subscribers[event_type]:
            try:
                handler(event)
            except Exception as e:
                # Сбой подписчика не отменяет уже выполненную операцию
                self._logger.error(
                    f"Error in event handler for {event_type.__name__}",
                    error=str(e),
                    event=event.model_dump(mode="json"),
                )

    def subscribe(self, event_type: Type[DomainEvent], handler: Callable) -> None:
        """Подписывает обработчик на события указанного типа."""
        self._subscribers.setdefault(event_type, []).append(handler)
        self._logger.debug(f"Subscribed handler to {event_type.__name__} events")
