from typing import Any, Callable, Dict, Optional

from .booking.application import HotelReservationService
from .booking.domain import ReservationLedger, Room, RoomCatalog
from .booking.infrastructure import (
    ConsoleLogger,
    InMemoryEventBus,
    InMemoryReservationRepository,
)
from .booking.interfaces import ILogger
from .config import HotelConfig
from .shared_kernel import EntityId, Money, generate_id


def build_catalog(config: HotelConfig) -> RoomCatalog:
    """Создает каталог номеров из настроек."""
    return RoomCatalog(
        Room(
            number=room_spec.number,
            type=room_spec.type,
            price_per_night=Money(amount=room_spec.price, currency=config.currency),
        )
        for room_spec in config.rooms
    )


def bootstrap_app(
    config: Optional[HotelConfig] = None,
    logger: Optional[ILogger] = None,
    id_factory: Callable[[], EntityId] = generate_id,
) -> Dict[str, Any]:
    """Создает и настраивает все компоненты приложения."""
    config = config or HotelConfig()
    logger = logger or ConsoleLogger(level="DEBUG" if config.verbose else "INFO")

    # 1. Каталог и реестр принадлежат вызывающему, глобального состояния нет
    catalog = build_catalog(config)
    ledger = ReservationLedger(
        catalog=catalog,
        repository=InMemoryReservationRepository(),
        id_factory=id_factory,
    )

    # 2. Сервис приложения получает зависимости явно
    event_bus = InMemoryEventBus(logger)
    service = HotelReservationService(ledger=ledger, event_bus=event_bus, logger=logger)

    logger.debug("Hotel initialised", rooms=[room.number for room in catalog])

    return {
        "config": config,
        "catalog": catalog,
        "ledger": ledger,
        "event_bus": event_bus,
        "service": service,
    }
