"""
Typed JSON-over-HTTP transport shared by every upstream adapter.

One request = build URL from base_url + path, encode the JSON body with orjson,
send it, reject non-2xx, decode the JSON body and validate it into the requested
type with pydantic. Errors are split so callers can tell a network failure from
an unexpected payload:

- TransportError       request never completed (DNS, connect, timeout, ...)
- HttpStatusError      server answered with a non-2xx status
- ResponseDecodeError  2xx but the body is not the expected JSON shape
"""

from functools import lru_cache
from typing import Any, Mapping, Optional, TypeVar

import anyio
import httpx
import orjson
from pydantic import TypeAdapter, ValidationError

from src.platform.exception.exceptions import HttpStatusError, ResponseDecodeError, TransportError
from src.platform.logging.loguru_io import Logger


T = TypeVar('T')

# Only safe-to-repeat methods are retried; a retried POST could open a second basket
IDEMPOTENT_METHODS = frozenset({'GET', 'HEAD', 'OPTIONS'})


@lru_cache(maxsize=64)
def _type_adapter(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_type)


def build_url(*, base_url: str, path: str) -> str:
    if not path:
        return base_url
    return f'{base_url.rstrip("/")}/{path.lstrip("/")}'


class HttpTransport:
    def __init__(
        self,
        *,
        timeout_seconds: float = 10.0,
        max_retries: int = 0,
        retry_backoff_seconds: float = 0.5,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self.retry_backoff_seconds = retry_backoff_seconds
        self.client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout_seconds))

    def build_request(
        self,
        *,
        method: str,
        base_url: str,
        path: str,
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
        json_body: Any = None,
        content: Optional[str] = None,
    ) -> httpx.Request:
        request_headers: dict[str, str] = dict(headers or {})
        body: Optional[bytes] = None
        if json_body is not None:
            try:
                body = orjson.dumps(json_body)
            except TypeError as e:
                raise TransportError(f'failed to marshal payload: {e}') from e
            request_headers.setdefault('Content-Type', 'application/json')
        elif content is not None:
            body = content.encode()
            request_headers.setdefault('Content-Type', 'text/plain; charset=utf-8')

        try:
            return self.client.build_request(
                method.upper(),
                build_url(base_url=base_url, path=path),
                params=dict(params) if params else None,
                headers=request_headers,
                content=body,
            )
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            raise TransportError(f'failed to form request: {e}') from e

    async def send(self, request: httpx.Request) -> httpx.Response:
        """Send with bounded retries for idempotent methods; raise on non-2xx."""
        attempts = 1 + (self.max_retries if request.method in IDEMPOTENT_METHODS else 0)

        for attempt in range(1, attempts + 1):
            Logger.base.debug(f'➡️ [HTTP] {request.method} {request.url} ({attempt}/{attempts})')
            try:
                response = await self.client.send(request)
            except httpx.HTTPError as e:
                if attempt >= attempts:
                    raise TransportError(
                        f'failed to execute request {request.method} {request.url}: {e!r}'
                    ) from e
                Logger.base.warning(
                    f'⚠️ [HTTP] {request.method} {request.url} failed ({e!r}), '
                    f'retry {attempt}/{attempts - 1}'
                )
            else:
                if response.is_success:
                    return response
                error = HttpStatusError(
                    f'request {request.method} {request.url} returned invalid code: '
                    f'{response.status_code}',
                    response_status_code=response.status_code,
                )
                # 4xx will not change on retry
                if response.status_code < 500 or attempt >= attempts:
                    raise error
                Logger.base.warning(f'⚠️ [HTTP] {error.message}, retry {attempt}/{attempts - 1}')

            await anyio.sleep(self.retry_backoff_seconds * 2 ** (attempt - 1))

        raise AssertionError('unreachable: retry loop always returns or raises')

    async def request(
        self,
        *,
        method: str,
        base_url: str,
        path: str,
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
        json_body: Any = None,
        content: Optional[str] = None,
    ) -> httpx.Response:
        request = self.build_request(
            method=method,
            base_url=base_url,
            path=path,
            params=params,
            headers=headers,
            json_body=json_body,
            content=content,
        )
        return await self.send(request)

    async def request_json(
        self,
        *,
        method: str,
        base_url: str,
        path: str,
        response_type: type[T],
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
        json_body: Any = None,
    ) -> T:
        response = await self.request(
            method=method,
            base_url=base_url,
            path=path,
            params=params,
            headers=headers,
            json_body=json_body,
        )
        return self.decode(response=response, response_type=response_type)

    async def get_json(
        self,
        *,
        base_url: str,
        path: str,
        response_type: type[T],
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> T:
        return await self.request_json(
            method='GET',
            base_url=base_url,
            path=path,
            response_type=response_type,
            params=params,
            headers=headers,
        )

    async def post_json(
        self,
        *,
        base_url: str,
        path: str,
        response_type: type[T],
        json_body: Any,
        headers: Optional[Mapping[str, str]] = None,
    ) -> T:
        return await self.request_json(
            method='POST',
            base_url=base_url,
            path=path,
            response_type=response_type,
            json_body=json_body,
            headers=headers,
        )

    @staticmethod
    def decode(*, response: httpx.Response, response_type: type[T]) -> T:
        try:
            payload = orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            raise ResponseDecodeError(f'failed to unmarshal JSON response: {e}') from e
        try:
            return _type_adapter(response_type).validate_python(payload)
        except ValidationError as e:
            raise ResponseDecodeError(
                f'unexpected response shape for {getattr(response_type, "__name__", response_type)}: '
                f'{e.error_count()} validation error(s), first: {e.errors()[0]["msg"]}'
            ) from e

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> 'HttpTransport':
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
