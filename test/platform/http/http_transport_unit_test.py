"""
Unit tests for HttpTransport

Test Coverage:
1. URL building and request encoding (JSON / plain text)
2. Error split: TransportError / HttpStatusError / ResponseDecodeError
3. Retry policy: GET only, network errors and 5xx only, bounded
"""

from collections.abc import Callable
from typing import Optional

import httpx
import pytest
from pydantic import BaseModel

from src.platform.exception.exceptions import (
    HttpStatusError,
    ResponseDecodeError,
    TransportError,
    UpstreamError,
)
from src.platform.http.http_transport import HttpTransport, build_url


BASE_URL = 'https://api.example.com'


class ItemSchema(BaseModel):
    id: int
    name: str


def make_transport(
    handler: Callable[[httpx.Request], httpx.Response], *, max_retries: int = 2
) -> tuple[HttpTransport, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def recording_handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    transport = HttpTransport(
        max_retries=max_retries,
        retry_backoff_seconds=0,
        client=httpx.AsyncClient(transport=httpx.MockTransport(recording_handler)),
    )
    return transport, seen


def sequence(*responses: Optional[httpx.Response]) -> Callable[[httpx.Request], httpx.Response]:
    """Replay responses in order; None raises a connect error."""
    pending = list(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        response = pending.pop(0)
        if response is None:
            raise httpx.ConnectError('connection refused', request=request)
        return response

    return handler


@pytest.mark.unit
class TestBuildUrl:
    @pytest.mark.parametrize(
        'base_url, path, expected',
        [
            ('https://a.com', 'api/x', 'https://a.com/api/x'),
            ('https://a.com/', '/api/x', 'https://a.com/api/x'),
            ('https://a.com/base', 'x', 'https://a.com/base/x'),
            ('https://a.com', '', 'https://a.com'),
        ],
    )
    def test_joins_base_and_path(self, base_url, path, expected):
        assert build_url(base_url=base_url, path=path) == expected


@pytest.mark.unit
class TestRequestEncoding:
    @pytest.mark.asyncio
    async def test_post_json_encodes_body_and_decodes_typed_response(self):
        transport, seen = make_transport(
            lambda _: httpx.Response(200, json={'id': 7, 'name': 'seven', 'extra': True})
        )

        async with transport:
            item = await transport.post_json(
                base_url=BASE_URL,
                path='items',
                response_type=ItemSchema,
                json_body={'name': 'seven'},
            )

        assert item == ItemSchema(id=7, name='seven')
        (request,) = seen
        assert request.headers['Content-Type'] == 'application/json'
        assert request.content == b'{"name":"seven"}'

    @pytest.mark.asyncio
    async def test_get_json_into_generic_type(self):
        transport, seen = make_transport(
            lambda _: httpx.Response(200, json=[{'id': 1, 'name': 'a'}, {'id': 2, 'name': 'b'}])
        )

        async with transport:
            items = await transport.get_json(
                base_url=BASE_URL,
                path='items',
                response_type=list[ItemSchema],
                params={'page': '1'},
                headers={'X-Auth-Token': 'tok'},
            )

        assert [item.id for item in items] == [1, 2]
        assert seen[0].url.params['page'] == '1'
        assert seen[0].headers['X-Auth-Token'] == 'tok'

    @pytest.mark.asyncio
    async def test_plain_text_request_returns_raw_response(self):
        transport, seen = make_transport(lambda _: httpx.Response(200, text='ok'))

        async with transport:
            response = await transport.request(
                method='POST', base_url=BASE_URL, path='topic', content='hello'
            )

        assert response.text == 'ok'
        assert seen[0].content == b'hello'
        assert seen[0].headers['Content-Type'].startswith('text/plain')

    @pytest.mark.asyncio
    async def test_unserializable_body_is_transport_error(self):
        transport, seen = make_transport(lambda _: httpx.Response(200))

        async with transport:
            with pytest.raises(TransportError, match='marshal'):
                await transport.post_json(
                    base_url=BASE_URL, path='items', response_type=dict, json_body={'x': object()}
                )

        assert seen == []


@pytest.mark.unit
class TestErrors:
    @pytest.mark.asyncio
    async def test_non_2xx_is_http_status_error(self):
        transport, _ = make_transport(lambda _: httpx.Response(403))

        async with transport:
            with pytest.raises(HttpStatusError) as exc_info:
                await transport.get_json(base_url=BASE_URL, path='items', response_type=dict)

        assert exc_info.value.response_status_code == 403
        assert '403' in exc_info.value.message

    @pytest.mark.asyncio
    async def test_invalid_json_is_decode_error(self):
        transport, _ = make_transport(lambda _: httpx.Response(200, text='<html>maintenance'))

        async with transport:
            with pytest.raises(ResponseDecodeError):
                await transport.get_json(base_url=BASE_URL, path='items', response_type=dict)

    @pytest.mark.asyncio
    async def test_wrong_shape_is_decode_error(self):
        transport, _ = make_transport(lambda _: httpx.Response(200, json={'id': 'not-int'}))

        async with transport:
            with pytest.raises(ResponseDecodeError, match='ItemSchema'):
                await transport.get_json(base_url=BASE_URL, path='items', response_type=ItemSchema)

    @pytest.mark.asyncio
    async def test_network_failure_is_transport_error(self):
        transport, _ = make_transport(sequence(None), max_retries=0)

        async with transport:
            with pytest.raises(TransportError):
                await transport.get_json(base_url=BASE_URL, path='items', response_type=dict)

    def test_all_transport_errors_share_upstream_base(self):
        assert issubclass(TransportError, UpstreamError)
        assert issubclass(HttpStatusError, UpstreamError)
        assert issubclass(ResponseDecodeError, UpstreamError)


@pytest.mark.unit
class TestRetryPolicy:
    @pytest.mark.asyncio
    async def test_get_retries_on_5xx_then_succeeds(self):
        transport, seen = make_transport(
            sequence(httpx.Response(502), httpx.Response(200, json={'id': 1, 'name': 'a'}))
        )

        async with transport:
            item = await transport.get_json(base_url=BASE_URL, path='i', response_type=ItemSchema)

        assert item.id == 1
        assert len(seen) == 2

    @pytest.mark.asyncio
    async def test_get_retries_on_network_error(self):
        transport, seen = make_transport(sequence(None, httpx.Response(200, json={})))

        async with transport:
            assert await transport.get_json(base_url=BASE_URL, path='i', response_type=dict) == {}

        assert len(seen) == 2

    @pytest.mark.asyncio
    async def test_get_gives_up_after_max_retries(self):
        transport, seen = make_transport(lambda _: httpx.Response(503), max_retries=2)

        async with transport:
            with pytest.raises(HttpStatusError):
                await transport.get_json(base_url=BASE_URL, path='i', response_type=dict)

        assert len(seen) == 3

    @pytest.mark.asyncio
    async def test_get_does_not_retry_4xx(self):
        transport, seen = make_transport(lambda _: httpx.Response(404))

        async with transport:
            with pytest.raises(HttpStatusError):
                await transport.get_json(base_url=BASE_URL, path='i', response_type=dict)

        assert len(seen) == 1

    @pytest.mark.asyncio
    async def test_post_is_never_retried(self):
        transport, seen = make_transport(lambda _: httpx.Response(503))

        async with transport:
            with pytest.raises(HttpStatusError):
                await transport.post_json(
                    base_url=BASE_URL, path='i', response_type=dict, json_body={}
                )

        assert len(seen) == 1

    @pytest.mark.asyncio
    async def test_post_network_error_is_not_retried(self):
        transport, seen = make_transport(sequence(None, httpx.Response(200, json={})))

        async with transport:
            with pytest.raises(TransportError):
                await transport.post_json(
                    base_url=BASE_URL, path='i', response_type=dict, json_body={}
                )

        assert len(seen) == 1
