from typing import Optional

from opentelemetry import trace

from src.platform.exception.exceptions import BasketError, UpstreamError
from src.platform.http.http_transport import HttpTransport
from src.platform.logging.loguru_io import Logger
from src.service.seatchecker.app.interface.i_basket_service import IBasketService
from src.service.seatchecker.domain.value_object import TripSession
from src.service.seatchecker.driven_adapter.ryanair.graphql_documents import (
    CREATE_BASKET_FOR_ACTIVE_TRIP,
    build_graphql_body,
)
from src.service.seatchecker.driven_adapter.ryanair.ryanair_schema import (
    CreateBasketData,
    GraphqlResponse,
)


class BasketServiceImpl(IBasketService):
    def __init__(
        self,
        *,
        transport: HttpTransport,
        base_url: str,
        basket_graphql_path: str,
        tracer: Optional[trace.Tracer] = None,
    ) -> None:
        self.transport = transport
        self.base_url = base_url
        self.basket_graphql_path = basket_graphql_path
        self.tracer = tracer or trace.NoOpTracer()

    @Logger.io
    async def create_basket(self, *, trip_session: TripSession) -> str:
        # NOTE: no API call to drop the basket is known; it is left to expire server-side.
        # Every check opens a new one.
        with self.tracer.start_as_current_span('ryanair.create_basket') as span:
            span.set_attribute('ryanair.trip_id', trip_session.trip_id)
            body = build_graphql_body(
                query=CREATE_BASKET_FOR_ACTIVE_TRIP,
                variables={
                    'tripId': trip_session.trip_id,
                    'sessionToken': trip_session.session_token,
                },
            )
            try:
                response = await self.transport.post_json(
                    base_url=self.base_url,
                    path=self.basket_graphql_path,
                    response_type=GraphqlResponse[CreateBasketData],
                    json_body=body,
                )
            except UpstreamError as e:
                raise BasketError('failed to create basket', cause=e) from e

            basket = response.data.basket if response.data else None
            if basket is None or not basket.id:
                raise BasketError(
                    'basket id missing in response'
                    + (f': {response.error_summary()}' if response.errors else '')
                )

            span.set_attribute('ryanair.basket_id', basket.id)
            span.add_event('Basket created successfully.')
            return basket.id
