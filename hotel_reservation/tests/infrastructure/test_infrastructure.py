"""
Тесты для инфраструктурного слоя: хранилище, логгер, шина событий.
"""

import uuid
from datetime import date

import pytest

from hotel_reservation.booking.domain import (
    Guest,
    Reservation,
    ReservationMade,
    RoomCatalog,
)
from hotel_reservation.booking.infrastructure import (
    ConsoleLogger,
    InMemoryEventBus,
    InMemoryReservationRepository,
)
from hotel_reservation.shared_kernel import DateRange


@pytest.fixture
def repository() -> InMemoryReservationRepository:
    return InMemoryReservationRepository()


def make_reservation(catalog: RoomCatalog, guest: Guest, room_number: int, day: int):
    return Reservation.create(
        room=catalog.get(room_number),
        guest=guest,
        period=DateRange.create(date(2024, 6, day), date(2024, 6, day + 1)),
    )


class TestInMemoryReservationRepository:
    """Тесты для хранилища бронирований в памяти."""

    def test_add_and_get(self, repository, catalog, guest):
        reservation = make_reservation(catalog, guest, 101, 1)

        repository.add(reservation)

        assert repository.get_by_id(reservation.id) == reservation
        assert repository.get_by_id(uuid.uuid4()) is None
        assert len(repository) == 1

    def test_add_duplicate_id(self, repository, catalog, guest):
        reservation = make_reservation(catalog, guest, 101, 1)
        repository.add(reservation)

        with pytest.raises(ValueError, match="already exists"):
            repository.add(reservation)

    def test_find_by_room_and_order(self, repository, catalog, guest):
        first = make_reservation(catalog, guest, 102, 3)
        second = make_reservation(catalog, guest, 101, 1)
        third = make_reservation(catalog, guest, 102, 1)
        for reservation in (first, second, third):
            repository.add(reservation)

        assert repository.find_by_room(102) == [first, third]
        assert repository.list_all() == [first, second, third]

    def test_remove(self, repository, catalog, guest):
        reservation = make_reservation(catalog, guest, 101, 1)
        repository.add(reservation)

        assert repository.remove(reservation.id) == reservation
        assert repository.remove(reservation.id) is None
        assert repository.list_all() == []


class TestConsoleLogger:
    """Тесты для консольного логгера."""

    def test_info_goes_to_stdout(self, capsys):
        ConsoleLogger().info("Reservation created", room_number=101)

        captured = capsys.readouterr()
        assert "[INFO] Reservation created" in captured.out
        assert '"room_number": 101' in captured.out

    def test_warning_goes_to_stderr(self, capsys):
        ConsoleLogger().warning("Reservation rejected")

        assert "[WARNING] Reservation rejected" in capsys.readouterr().err

    def test_debug_depends_on_level(self, capsys):
        ConsoleLogger().debug("hidden")
        ConsoleLogger(level="debug").debug("shown")

        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "[DEBUG] shown" in out

    def test_error_level_silences_info_and_warning(self, capsys):
        logger = ConsoleLogger(level="ERROR")
        logger.info("Reservation created")
        logger.warning("Reservation rejected")
        logger.error("Handler failed")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "[WARNING]" not in captured.err
        assert "[ERROR] Handler failed" in captured.err

    def test_unknown_level(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            ConsoleLogger(level="loud")


class TestInMemoryEventBus:
    """Тесты для шины событий."""

    @pytest.fixture
    def event(self) -> ReservationMade:
        return ReservationMade(
            reservation_id=uuid.uuid4(),
            room_number=101,
            guest_name="Иван",
            period=DateRange.create(date(2024, 6, 1), date(2024, 6, 2)),
        )

    def test_publish_to_subscribers(self, logger, event):
        bus = InMemoryEventBus(logger)
        received = []
        bus.subscribe(ReservationMade, received.append)

        bus.publish(event)

        assert received == [event]

    def test_publish_without_subscribers(self, logger, event):
        InMemoryEventBus(logger).publish(event)

        assert "No subscribers for event type ReservationMade" in logger.messages(
            "debug"
        )

    def test_handler_failure_is_logged(self, logger, event):
        bus = InMemoryEventBus(logger)
        received = []

        def failing_handler(_):
            raise RuntimeError("boom")

        bus.subscribe(ReservationMade, failing_handler)
        bus.subscribe(ReservationMade, received.append)

        bus.publish(event)

        assert received == [event]
        assert logger.messages("error") == [
            "Error in event handler for ReservationMade"
        ]
