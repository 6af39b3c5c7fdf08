from abc import ABC, abstractmethod

from src.service.seatchecker.domain.value_object import TripSession


class IBasketService(ABC):
    @abstractmethod
    async def create_basket(self, *, trip_session: TripSession) -> str:
        """
        Open a pricing basket for the trip; the seat query only works inside one.

        Returns:
            Basket id

        Raises:
            BasketError: request failed or the response carries no basket id
        """
        pass
