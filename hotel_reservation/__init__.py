"""
Система бронирования номеров отеля.

Каталог номеров, реестр бронирований с проверкой пересечения периодов
и поиск свободных номеров на произвольный диапазон дат.
"""

from .bootstrap import bootstrap_app
from .config import HotelConfig

__all__ = [
    "bootstrap_app",
    "HotelConfig",
]
