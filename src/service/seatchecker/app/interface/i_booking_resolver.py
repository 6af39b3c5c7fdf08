from abc import ABC, abstractmethod

from src.service.seatchecker.domain.value_object import SessionToken, TripSession


class IBookingResolver(ABC):
    """
    Booking Resolver Interface

    Two dependent lookups:
    1. active orders -> booking id of the nearest flight
    2. booking id -> trip id + session token + journey departures
    """

    @abstractmethod
    async def resolve_booking_id(self, *, token: SessionToken) -> str:
        """
        Returns:
            bookingId of the first flight of the first active order (orders sorted ASC)

        Raises:
            ResolutionError: request failed, or no active order / flight exists
        """
        pass

    @abstractmethod
    async def resolve_trip_session(self, *, token: SessionToken, booking_id: str) -> TripSession:
        """
        Raises:
            ResolutionError: request failed or the booking payload is missing
        """
        pass
