from typing import Optional

from opentelemetry import trace

from src.platform.exception.exceptions import NotificationError, UpstreamError
from src.platform.http.http_transport import HttpTransport
from src.platform.logging.loguru_io import Logger
from src.service.seatchecker.app.interface.i_notifier import INotifier


NTFY_TITLE = 'Seatchecker'
NTFY_TAGS = 'airplane'


class NtfyNotifierImpl(INotifier):
    """Publishes a plain-text message to an ntfy topic (POST <base>/<topic>)."""

    def __init__(
        self,
        *,
        transport: HttpTransport,
        base_url: str,
        tracer: Optional[trace.Tracer] = None,
    ) -> None:
        self.transport = transport
        self.base_url = base_url
        self.tracer = tracer or trace.NoOpTracer()

    @Logger.io
    async def notify(self, *, topic: str, message: str) -> None:
        with self.tracer.start_as_current_span('ntfy.notify') as span:
            span.set_attribute('ntfy.topic', topic)
            if not topic:
                raise NotificationError('ntfy topic is empty')
            try:
                await self.transport.request(
                    method='POST',
                    base_url=self.base_url,
                    path=topic,
                    headers={'Title': NTFY_TITLE, 'Tags': NTFY_TAGS},
                    content=message,
                )
            except UpstreamError as e:
                raise NotificationError('failed to send notification', cause=e) from e

            span.add_event('Notification sent.')
            Logger.base.info(f'📣 [Ntfy] Notified topic {topic}: {message}')
