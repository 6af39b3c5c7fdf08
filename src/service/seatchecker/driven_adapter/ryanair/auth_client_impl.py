from typing import Optional

from opentelemetry import trace

from src.platform.exception.exceptions import AuthError, UpstreamError
from src.platform.http.http_transport import HttpTransport
from src.platform.logging.loguru_io import Logger
from src.service.seatchecker.app.interface.i_auth_client import IAuthClient
from src.service.seatchecker.domain.value_object import Credentials, SessionToken
from src.service.seatchecker.driven_adapter.ryanair.ryanair_schema import (
    AccountLoginRequest,
    AccountLoginResponse,
)


class AuthClientImpl(IAuthClient):
    def __init__(
        self,
        *,
        transport: HttpTransport,
        base_url: str,
        login_path: str,
        tracer: Optional[trace.Tracer] = None,
    ) -> None:
        self.transport = transport
        self.base_url = base_url
        self.login_path = login_path
        self.tracer = tracer or trace.NoOpTracer()

    @Logger.io
    async def login(self, *, credentials: Credentials) -> SessionToken:
        with self.tracer.start_as_current_span('ryanair.account_login') as span:
            body = AccountLoginRequest(email=credentials.email, password=credentials.password)
            try:
                response = await self.transport.post_json(
                    base_url=self.base_url,
                    path=self.login_path,
                    response_type=AccountLoginResponse,
                    json_body=body.model_dump(),
                )
            except UpstreamError as e:
                raise AuthError('failed to get account login', cause=e) from e

            span.set_attribute('ryanair.customer_id', response.customer_id)
            span.add_event('Account login successful.')
            return SessionToken(customer_id=response.customer_id, token=response.token)
