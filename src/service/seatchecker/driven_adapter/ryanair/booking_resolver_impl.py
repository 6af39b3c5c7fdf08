"""
Booking Resolver - active orders -> booking id -> trip session

Orders are requested with order=ASC, so items[0].flights[0] is taken as the
nearest upcoming flight. The API gives no guarantee for this; it matches what
the web app shows as "next trip".
"""

from typing import Optional

from opentelemetry import trace

from src.platform.exception.exceptions import ResolutionError, UpstreamError
from src.platform.http.http_transport import HttpTransport
from src.platform.logging.loguru_io import Logger
from src.service.seatchecker.app.interface.i_booking_resolver import IBookingResolver
from src.service.seatchecker.domain.value_object import SessionToken, TripSession
from src.service.seatchecker.driven_adapter.ryanair.graphql_documents import (
    GET_BOOKING_BY_BOOKING_ID,
    build_graphql_body,
)
from src.service.seatchecker.driven_adapter.ryanair.ryanair_schema import (
    BookingByIdData,
    GraphqlResponse,
    OrdersResponse,
)


class BookingResolverImpl(IBookingResolver):
    def __init__(
        self,
        *,
        transport: HttpTransport,
        base_url: str,
        orders_path: str,
        booking_graphql_path: str,
        tracer: Optional[trace.Tracer] = None,
    ) -> None:
        self.transport = transport
        self.base_url = base_url
        self.orders_path = orders_path
        self.booking_graphql_path = booking_graphql_path
        self.tracer = tracer or trace.NoOpTracer()

    @Logger.io
    async def resolve_booking_id(self, *, token: SessionToken) -> str:
        with self.tracer.start_as_current_span('ryanair.get_booking_id') as span:
            span.set_attribute('ryanair.customer_id', token.customer_id)
            try:
                orders = await self.transport.get_json(
                    base_url=self.base_url,
                    path=f'{self.orders_path.rstrip("/")}/{token.customer_id}',
                    response_type=OrdersResponse,
                    params={'active': 'true', 'order': 'ASC'},
                    headers={'X-Auth-Token': token.token},
                )
            except UpstreamError as e:
                raise ResolutionError('failed to get orders', cause=e) from e

            if not orders.items:
                raise ResolutionError('no active orders found for customer')
            # A single order holds one booking split into flight segments
            flights = orders.items[0].flights
            if not flights:
                raise ResolutionError('nearest active order has no flights')

            booking_id = flights[0].booking_id
            span.set_attribute('ryanair.booking_id', booking_id)
            span.add_event('Booking ID retrieved successfully.')
            return booking_id

    @Logger.io
    async def resolve_trip_session(self, *, token: SessionToken, booking_id: str) -> TripSession:
        with self.tracer.start_as_current_span('ryanair.get_trip_info') as span:
            span.set_attribute('ryanair.booking_id', booking_id)
            body = build_graphql_body(
                query=GET_BOOKING_BY_BOOKING_ID,
                variables={
                    'bookingInfo': {'bookingId': booking_id, 'surrogateId': token.customer_id},
                    'authToken': token.token,
                },
            )
            try:
                response = await self.transport.post_json(
                    base_url=self.base_url,
                    path=self.booking_graphql_path,
                    response_type=GraphqlResponse[BookingByIdData],
                    json_body=body,
                )
            except UpstreamError as e:
                raise ResolutionError('failed to get booking', cause=e) from e

            trip_info = response.data.booking if response.data else None
            if trip_info is None:
                raise ResolutionError(
                    f'booking {booking_id} not returned'
                    + (f': {response.error_summary()}' if response.errors else '')
                )

            journeys = tuple(journey.depart_utc for journey in trip_info.journeys or [])
            span.set_attribute('ryanair.trip_id', trip_info.trip_id)
            span.set_attribute('ryanair.journeys', len(journeys))
            span.add_event('Trip info retrieved successfully.')
            return TripSession(
                trip_id=trip_info.trip_id,
                session_token=trip_info.session_token,
                journeys=journeys,
            )
