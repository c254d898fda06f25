"""
Текстовый интерфейс системы бронирования.

Тонкий слой представления: читает ввод, вызывает сервис приложения
и переводит доменные ошибки в сообщения для пользователя.
"""

from pathlib import Path
from typing import Callable, Dict, List, Optional

import click

from .booking.application import GuestDTO, HotelReservationService, RoomDTO
from .booking.infrastructure import ConsoleLogger
from .bootstrap import bootstrap_app
from .config import HotelConfig
from .shared_kernel import DomainException, InvalidReservationId

DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])


class ConsoleApp:
    """Меню консольного приложения."""

    def __init__(self, service: HotelReservationService):
        self._service = service
        self._actions: Dict[str, Callable[[], None]] = {
            "1": self.view_available_rooms,
            "2": self.make_reservation,
            "3": self.cancel_reservation,
            "4": self.list_reservations,
        }

    def run(self) -> None:
        while True:
            click.echo("=== Система бронирования отеля ===")
            click.echo("1. Свободные номера")
            click.echo("2. Забронировать номер")
            click.echo("3. Отменить бронирование")
            click.echo("4. Все бронирования")
            click.echo("5. Выход")
            choice = click.prompt("Выберите пункт", default="", show_default=False)

            if choice.strip() == "5":
                return

            action = self._actions.get(choice.strip())
            if action is None:
                click.echo("Неизвестный пункт меню. Попробуйте еще раз.")
            else:
                try:
                    action()
                except DomainException as e:
                    click.echo(f"Ошибка: {e}")
            click.echo()

    def _prompt_dates(self):
        check_in = click.prompt("Дата заезда (yyyy-mm-dd)", type=DATE_TYPE)
        check_out = click.prompt("Дата выезда (yyyy-mm-dd)", type=DATE_TYPE)
        return check_in.date(), check_out.date()

    def _show_rooms(self, rooms: List[RoomDTO]) -> bool:
        if not rooms:
            click.echo("Нет свободных номеров на выбранные даты.")
            return False

        click.echo("Свободные номера:")
        for room in rooms:
            click.echo(str(room))
        return True

    def view_available_rooms(self) -> None:
        check_in, check_out = self._prompt_dates()
        self._show_rooms(self._service.get_available_rooms(check_in, check_out))

    def make_reservation(self) -> None:
        guest = GuestDTO(
            name=click.prompt("Имя гостя"),
            email=click.prompt("Email гостя"),
            phone=click.prompt("Телефон гостя"),
        )
        check_in, check_out = self._prompt_dates()

        if not self._show_rooms(self._service.get_available_rooms(check_in, check_out)):
            return

        room_number = click.prompt("Номер комнаты для бронирования", type=int)
        reservation = self._service.make_reservation(
            guest, room_number, check_in, check_out
        )
        click.echo("Бронирование успешно создано!")
        click.echo(str(reservation))

    def cancel_reservation(self) -> None:
        raw_id = click.prompt("ID бронирования для отмены")
        try:
            cancelled = self._service.cancel_reservation(raw_id)
        except InvalidReservationId:
            click.echo("Некорректный формат ID бронирования.")
            return

        if cancelled:
            click.echo("Бронирование отменено.")
        else:
            click.echo("Бронирование не найдено.")

    def list_reservations(self) -> None:
        reservations = self._service.list_reservations()
        if not reservations:
            click.echo("Бронирований нет.")
            return

        for reservation in reservations:
            click.echo(str(reservation))
            click.echo("-------------------------------------")


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON-файл с настройками отеля.",
)
@click.option("--verbose", is_flag=True, help="Выводить отладочные сообщения.")
def main(config_path: Optional[Path], verbose: bool) -> None:
    """Система бронирования номеров отеля."""
    config = HotelConfig.from_json_file(config_path) if config_path else HotelConfig()
    if verbose:
        config = config.model_copy(update={"verbose": True})

    # Без --verbose меню выводит только свои сообщения; журнал - лишь ошибки
    logger = ConsoleLogger(level="DEBUG" if config.verbose else "ERROR")
    app = bootstrap_app(config, logger=logger)
    ConsoleApp(app["service"]).run()
