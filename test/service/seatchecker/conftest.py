"""Seatchecker fixtures: real adapters wired to the RyanairStub chain."""

from collections.abc import AsyncIterator
from typing import Any

import httpx
import pytest
import pytest_asyncio
from ryanair_stub import (
    BASKET_GRAPHQL_PATH,
    BOOKING_GRAPHQL_PATH,
    CATALOG_GRAPHQL_PATH,
    LOGIN_PATH,
    NOW,
    NTFY_BASE_URL,
    NTFY_TOPIC,
    ORDERS_PATH,
    RYANAIR_BASE_URL,
    SEATMAP_PATH,
    RyanairStub,
)

from src.platform.http.http_transport import HttpTransport
from src.service.seatchecker.app.command.check_seats_use_case import CheckSeatsUseCase
from src.service.seatchecker.driven_adapter.notification.ntfy_notifier_impl import (
    NtfyNotifierImpl,
)
from src.service.seatchecker.driven_adapter.ryanair.auth_client_impl import AuthClientImpl
from src.service.seatchecker.driven_adapter.ryanair.basket_service_impl import BasketServiceImpl
from src.service.seatchecker.driven_adapter.ryanair.booking_resolver_impl import (
    BookingResolverImpl,
)
from src.service.seatchecker.driven_adapter.ryanair.seat_map_query_impl import SeatMapQueryImpl


@pytest.fixture
def ryanair_stub() -> RyanairStub:
    return RyanairStub()


@pytest_asyncio.fixture
async def http_transport(ryanair_stub: RyanairStub) -> AsyncIterator[HttpTransport]:
    transport = HttpTransport(
        max_retries=2,
        retry_backoff_seconds=0,
        client=httpx.AsyncClient(transport=ryanair_stub.mock_transport),
    )
    async with transport:
        yield transport


@pytest.fixture
def auth_client(http_transport: HttpTransport) -> AuthClientImpl:
    return AuthClientImpl(
        transport=http_transport, base_url=RYANAIR_BASE_URL, login_path=LOGIN_PATH
    )


@pytest.fixture
def booking_resolver(http_transport: HttpTransport) -> BookingResolverImpl:
    return BookingResolverImpl(
        transport=http_transport,
        base_url=RYANAIR_BASE_URL,
        orders_path=ORDERS_PATH,
        booking_graphql_path=BOOKING_GRAPHQL_PATH,
    )


@pytest.fixture
def basket_service(http_transport: HttpTransport) -> BasketServiceImpl:
    return BasketServiceImpl(
        transport=http_transport,
        base_url=RYANAIR_BASE_URL,
        basket_graphql_path=BASKET_GRAPHQL_PATH,
    )


@pytest.fixture
def seat_map_query(http_transport: HttpTransport) -> SeatMapQueryImpl:
    return SeatMapQueryImpl(
        transport=http_transport,
        base_url=RYANAIR_BASE_URL,
        catalog_graphql_path=CATALOG_GRAPHQL_PATH,
        seatmap_path=SEATMAP_PATH,
    )


@pytest.fixture
def notifier(http_transport: HttpTransport) -> NtfyNotifierImpl:
    return NtfyNotifierImpl(transport=http_transport, base_url=NTFY_BASE_URL)


@pytest.fixture
def check_seats_use_case(
    auth_client: AuthClientImpl,
    booking_resolver: BookingResolverImpl,
    basket_service: BasketServiceImpl,
    seat_map_query: SeatMapQueryImpl,
    notifier: NtfyNotifierImpl,
) -> CheckSeatsUseCase:
    return CheckSeatsUseCase(
        auth_client=auth_client,
        booking_resolver=booking_resolver,
        basket_service=basket_service,
        seat_map_query=seat_map_query,
        notifier=notifier,
        deadline_seconds=5,
        clock=lambda: NOW,
    )


@pytest.fixture
def invocation_event() -> dict[str, Any]:
    return {
        'ryanair_email': 'traveller@example.com',
        'ryanair_password': 'hunter2',
        'ntfy_topic': NTFY_TOPIC,
    }
