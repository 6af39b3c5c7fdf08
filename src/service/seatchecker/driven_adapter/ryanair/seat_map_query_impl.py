from typing import Optional

from opentelemetry import trace

from src.platform.exception.exceptions import RowCountError, SeatQueryError, UpstreamError
from src.platform.http.http_transport import HttpTransport
from src.platform.logging.loguru_io import Logger
from src.service.seatchecker.app.interface.i_seat_map_query import ISeatMapQuery
from src.service.seatchecker.domain.enum.row_count_strategy import RowCountStrategy
from src.service.seatchecker.domain.seat_state_calculator import count_rows
from src.service.seatchecker.domain.value_object import SeatSnapshot
from src.service.seatchecker.driven_adapter.ryanair.graphql_documents import (
    GET_SEATS_QUERY,
    build_graphql_body,
)
from src.service.seatchecker.driven_adapter.ryanair.ryanair_schema import (
    GraphqlResponse,
    SeatMapSchema,
    SeatsData,
)


class SeatMapQueryImpl(ISeatMapQuery):
    """
    Seat availability for the basket's flight + row count for its aircraft.

    The seat query only needs the basket; the seat map endpoint is public and
    keyed by aircraft model, so it is called with the model the seat query returned.
    """

    def __init__(
        self,
        *,
        transport: HttpTransport,
        base_url: str,
        catalog_graphql_path: str,
        seatmap_path: str,
        row_count_strategy: RowCountStrategy = RowCountStrategy.ROW_LIST_LENGTH,
        tracer: Optional[trace.Tracer] = None,
    ) -> None:
        self.transport = transport
        self.base_url = base_url
        self.catalog_graphql_path = catalog_graphql_path
        self.seatmap_path = seatmap_path
        self.row_count_strategy = RowCountStrategy(row_count_strategy)
        self.tracer = tracer or trace.NoOpTracer()

    @Logger.io
    async def seats(self, *, basket_id: str) -> SeatSnapshot:
        with self.tracer.start_as_current_span('ryanair.get_flight_info') as span:
            span.set_attribute('ryanair.basket_id', basket_id)
            body = build_graphql_body(query=GET_SEATS_QUERY, variables={'basketId': basket_id})
            try:
                response = await self.transport.post_json(
                    base_url=self.base_url,
                    path=self.catalog_graphql_path,
                    response_type=GraphqlResponse[SeatsData],
                    json_body=body,
                )
            except UpstreamError as e:
                raise SeatQueryError('failed to get seats', cause=e) from e

            availabilities = response.data.seats if response.data else None
            if not availabilities:
                raise SeatQueryError(
                    'no seat availability returned for basket'
                    + (f': {response.error_summary()}' if response.errors else '')
                )

            # TODO: seats[] holds one entry per flight of the trip; pick the entry matching
            # the tracked departure instead of the outbound one.
            availability = availabilities[0]
            span.set_attribute('ryanair.equipment_model', availability.equipment_model)
            span.set_attribute('ryanair.unavailable_seats', len(availability.unavailable_seats))
            span.add_event('Flight info retrieved successfully.')
            return SeatSnapshot(
                unavailable_seats=availability.unavailable_seats,
                equipment_model=availability.equipment_model,
            )

    @Logger.io
    async def row_count(self, *, equipment_model: str) -> int:
        with self.tracer.start_as_current_span('ryanair.get_number_of_rows') as span:
            span.set_attribute('ryanair.equipment_model', equipment_model)
            try:
                seat_maps = await self.transport.get_json(
                    base_url=self.base_url,
                    path=self.seatmap_path,
                    response_type=list[SeatMapSchema],
                    params={'aircraftModel': equipment_model},
                )
            except UpstreamError as e:
                raise RowCountError('failed to get seatmap', cause=e) from e

            if not seat_maps:
                raise RowCountError(f'empty seatmap for aircraft model {equipment_model}')

            rows = count_rows(seat_maps[0].row_numbers(), strategy=self.row_count_strategy)
            span.set_attribute('ryanair.number_of_rows', rows)
            return rows
