from abc import ABC, abstractmethod

from src.service.seatchecker.domain.value_object import SeatSnapshot


class ISeatMapQuery(ABC):
    @abstractmethod
    async def seats(self, *, basket_id: str) -> SeatSnapshot:
        """
        Raises:
            SeatQueryError: request failed or no seat availability was returned
        """
        pass

    @abstractmethod
    async def row_count(self, *, equipment_model: str) -> int:
        """
        Args:
            equipment_model: Aircraft model from the seat query (e.g. '73H')

        Raises:
            RowCountError: request failed or the seat map is empty
        """
        pass
