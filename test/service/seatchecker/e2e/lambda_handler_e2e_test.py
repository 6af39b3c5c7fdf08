"""
Lambda entrypoint through the DI container, httpx transport swapped for the stub

The container builds the real adapters from settings (default Ryanair/ntfy URLs
and paths), only the transport underneath is replaced.
"""

from collections.abc import Iterator

from dependency_injector import providers
import httpx
import pytest
from ryanair_stub import EXPECTED_MESSAGE, SEATMAP_PATH, RyanairStub

from src.platform.config.di import container
from src.platform.http.http_transport import HttpTransport
from src.service.seatchecker.driving_adapter import lambda_handler
from src.service.seatchecker.driving_adapter.lambda_handler import handle_event, handler


pytestmark = pytest.mark.integration


@pytest.fixture
def stubbed_container(ryanair_stub: RyanairStub) -> Iterator[RyanairStub]:
    with container.http_client_transport.override(providers.Object(ryanair_stub.mock_transport)):
        yield ryanair_stub
    container.http_transport.reset()


class TestLambdaHandler:
    @pytest.mark.asyncio
    async def test_first_run_returns_state_for_next_invocation(
        self, stubbed_container, invocation_event
    ):
        output = await handle_event(invocation_event)

        assert output['status'] == 200
        assert output['seat_state'] == {'window': 4, 'middle': 0, 'aisle': 2}
        assert output['departure'] == '2030-06-01T05:25:00+00:00'
        assert output['ntfy_topic'] == invocation_event['ntfy_topic']
        (notification,) = stubbed_container.notifications
        assert notification.content.decode() == EXPECTED_MESSAGE

    @pytest.mark.asyncio
    async def test_second_run_with_same_state_does_not_notify(
        self, stubbed_container, invocation_event
    ):
        first = await handle_event(invocation_event)
        second = await handle_event(first)

        assert second['status'] == 200
        assert second['seat_state'] == first['seat_state']
        assert len(stubbed_container.notifications) == 1

    @pytest.mark.asyncio
    async def test_upstream_failure_echoes_previous_state(
        self, stubbed_container, invocation_event
    ):
        stubbed_container.routes[('GET', f'/{SEATMAP_PATH}')] = httpx.Response(500)
        event = invocation_event | {
            'seat_state': {'window': 1, 'middle': 2, 'aisle': 3},
            'departure': '2030-06-01T05:25:00Z',
        }

        output = await handle_event(event)

        assert output['status'] == 500
        assert 'failed to get seatmap' in output['message']
        assert output['seat_state'] == {'window': 1, 'middle': 2, 'aisle': 3}
        assert output['departure'] == '2030-06-01T05:25:00+00:00'
        assert stubbed_container.notifications == []

    @pytest.mark.asyncio
    async def test_invalid_event_is_failure_without_upstream_calls(self, stubbed_container):
        output = await handle_event({'ntfy_topic': 'seatchecker-test', 'ryanair_password': 'x'})

        assert output['status'] == 500
        assert 'invalid invocation event' in output['message']
        assert 'ryanair_password' not in output
        assert stubbed_container.requests == []

    @pytest.mark.asyncio
    async def test_bootstrap_failure_is_failure_result(
        self, stubbed_container, invocation_event, monkeypatch
    ):
        def broken_setup():
            raise RuntimeError('tracing exporter unavailable')

        monkeypatch.setattr(lambda_handler, 'setup', broken_setup)
        event = invocation_event | {'seat_state': {'window': 1, 'middle': 2, 'aisle': 3}}

        output = await handle_event(event)

        assert output['status'] == 500
        assert output['message'] == 'tracing exporter unavailable'
        assert output['seat_state'] == {'window': 1, 'middle': 2, 'aisle': 3}
        assert stubbed_container.requests == []

    @pytest.mark.asyncio
    async def test_client_close_failure_is_failure_result(
        self, stubbed_container, invocation_event, monkeypatch
    ):
        async def broken_aclose(self):
            raise RuntimeError('connection pool close failed')

        monkeypatch.setattr(HttpTransport, 'aclose', broken_aclose)

        output = await handle_event(invocation_event)

        assert output['status'] == 500
        assert output['message'] == 'connection pool close failed'
        assert output['seat_state'] is None
        assert output['departure'] is None

    def test_sync_handler_entrypoint(self, stubbed_container, invocation_event):
        output = handler(invocation_event, None)

        assert output['status'] == 200
        assert output['message'] == EXPECTED_MESSAGE
