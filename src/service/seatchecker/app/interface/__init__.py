"""Application layer interfaces (Ports)"""

from src.service.seatchecker.app.interface.i_auth_client import IAuthClient
from src.service.seatchecker.app.interface.i_basket_service import IBasketService
from src.service.seatchecker.app.interface.i_booking_resolver import IBookingResolver
from src.service.seatchecker.app.interface.i_notifier import INotifier
from src.service.seatchecker.app.interface.i_seat_map_query import ISeatMapQuery


__all__ = [
    'IAuthClient',
    'IBasketService',
    'IBookingResolver',
    'INotifier',
    'ISeatMapQuery',
]
