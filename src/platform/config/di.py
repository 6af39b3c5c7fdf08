"""
https://python-dependency-injector.ets-labs.org/index.html

The HTTP transport is a Singleton shared by every adapter of one check; the
driving adapter closes it and calls `reset_http_transport()` when the check is
done, so no connection pool outlives an invocation.
"""

from typing import Optional

from dependency_injector import containers, providers
import httpx

from src.platform.config.core_setting import Settings
from src.platform.http.http_transport import HttpTransport
from src.platform.observability.tracing import TracingConfig
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


TRACER_NAME = 'seatchecker'


def build_http_transport(
    *,
    config: Settings,
    tracing: TracingConfig,
    client_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> HttpTransport:
    client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.HTTP_TIMEOUT_SECONDS), transport=client_transport
    )
    tracing.instrument_httpx_client(client=client)
    return HttpTransport(
        timeout_seconds=config.HTTP_TIMEOUT_SECONDS,
        max_retries=config.HTTP_MAX_RETRIES,
        retry_backoff_seconds=config.HTTP_RETRY_BACKOFF_SECONDS,
        client=client,
    )


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Tracing (process-wide provider, setup() is called by the driving adapter)
    tracing = providers.Singleton(
        TracingConfig,
        service_name=config_service.provided.SERVICE_NAME,
        otlp_endpoint=config_service.provided.OTEL_EXPORTER_OTLP_ENDPOINT,
        enable_console=config_service.provided.OTEL_CONSOLE_EXPORT,
    )
    # Factory: a NoOp tracer handed out before setup() must not stick
    tracer = tracing.provided.get_tracer.call(name=TRACER_NAME)

    # httpx transport under the client (None = real network; overridden in tests)
    http_client_transport = providers.Object(None)

    # HTTP transport (one per invocation, see module docstring)
    http_transport = providers.Singleton(
        build_http_transport,
        config=config_service,
        tracing=tracing,
        client_transport=http_client_transport,
    )

    # Ryanair adapters
    auth_client = providers.Factory(
        AuthClientImpl,
        transport=http_transport,
        base_url=config_service.provided.RYANAIR_BASE_URL,
        login_path=config_service.provided.RYANAIR_LOGIN_PATH,
        tracer=tracer,
    )
    booking_resolver = providers.Factory(
        BookingResolverImpl,
        transport=http_transport,
        base_url=config_service.provided.RYANAIR_BASE_URL,
        orders_path=config_service.provided.RYANAIR_ORDERS_PATH,
        booking_graphql_path=config_service.provided.RYANAIR_BOOKING_GRAPHQL_PATH,
        tracer=tracer,
    )
    basket_service = providers.Factory(
        BasketServiceImpl,
        transport=http_transport,
        base_url=config_service.provided.RYANAIR_BASE_URL,
        basket_graphql_path=config_service.provided.RYANAIR_BASKET_GRAPHQL_PATH,
        tracer=tracer,
    )
    seat_map_query = providers.Factory(
        SeatMapQueryImpl,
        transport=http_transport,
        base_url=config_service.provided.RYANAIR_BASE_URL,
        catalog_graphql_path=config_service.provided.RYANAIR_CATALOG_GRAPHQL_PATH,
        seatmap_path=config_service.provided.RYANAIR_SEATMAP_PATH,
        row_count_strategy=config_service.provided.ROW_COUNT_STRATEGY,
        tracer=tracer,
    )

    # Notification
    notifier = providers.Factory(
        NtfyNotifierImpl,
        transport=http_transport,
        base_url=config_service.provided.NTFY_BASE_URL,
        tracer=tracer,
    )

    # Use case
    check_seats_use_case = providers.Factory(
        CheckSeatsUseCase,
        auth_client=auth_client,
        booking_resolver=booking_resolver,
        basket_service=basket_service,
        seat_map_query=seat_map_query,
        notifier=notifier,
        deadline_seconds=config_service.provided.CHECK_DEADLINE_SECONDS,
        tracer=tracer,
    )


container = Container()


def setup() -> TracingConfig:
    container.config_service()
    tracing = container.tracing()
    tracing.setup()
    return tracing


def reset_http_transport() -> None:
    container.http_transport.reset()


def cleanup() -> None:
    tracing = container.tracing()
    tracing.force_flush()
    tracing.shutdown()
    container.reset_singletons()
