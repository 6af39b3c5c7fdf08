from src.service.seatchecker.domain.value_object.credentials import Credentials, SessionToken
from src.service.seatchecker.domain.value_object.seat_snapshot import SeatSnapshot
from src.service.seatchecker.domain.value_object.seat_state import SeatState
from src.service.seatchecker.domain.value_object.trip_session import TripSession


__all__ = [
    'Credentials',
    'SeatSnapshot',
    'SeatState',
    'SessionToken',
    'TripSession',
]
