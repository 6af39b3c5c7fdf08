"""
OpenTelemetry tracing configuration.

Provides:
- A tracer provider owned by the caller (never registered globally)
- OTLP gRPC export (Honeycomb, Jaeger, ADOT collector) and console export
- httpx client instrumentation bound to the same provider
"""

from typing import Optional

import httpx
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ALWAYS_ON


class TracingConfig:
    """
    Usage:
        # Initialize once per process (Lambda cold start / local runner start)
        tracing = TracingConfig(service_name='seatchecker', otlp_endpoint=settings.OTEL_EXPORTER_OTLP_ENDPOINT)
        tracing.setup()

        # Hand tracers to components explicitly
        tracer = tracing.get_tracer(name=__name__)

        # Lambda freezes the process after each invocation
        tracing.force_flush()
    """

    def __init__(
        self,
        *,
        service_name: str,
        otlp_endpoint: Optional[str] = None,
        enable_console: bool = False,
    ) -> None:
        self.service_name = service_name
        self.otlp_endpoint = otlp_endpoint
        self.enable_console = enable_console

        self._provider: TracerProvider | None = None

    @property
    def provider(self) -> TracerProvider | None:
        return self._provider

    def setup(self) -> None:
        """
        Build the tracer provider with the configured exporters.

        Calling it again is a no-op. Without any exporter the provider still
        records spans, it just never ships them anywhere.
        """
        if self._provider is not None:
            return

        resource = Resource(attributes={SERVICE_NAME: self.service_name})

        # ALWAYS_ON: one trace per check, volume is tiny
        self._provider = TracerProvider(resource=resource, sampler=ALWAYS_ON)

        if self.otlp_endpoint:
            otlp_exporter = OTLPSpanExporter(endpoint=self.otlp_endpoint)
            self._provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

        if self.enable_console:
            console_exporter = ConsoleSpanExporter()
            self._provider.add_span_processor(BatchSpanProcessor(console_exporter))

    def instrument_httpx_client(self, *, client: httpx.AsyncClient) -> None:
        if self._provider is None:
            return
        HTTPXClientInstrumentor.instrument_client(client, tracer_provider=self._provider)

    def get_tracer(self, *, name: str) -> trace.Tracer:
        """
        Args:
            name: Tracer name (typically __name__ of the module)

        Returns:
            Tracer from this config's provider, or a NoOp tracer before setup()
        """
        if self._provider is None:
            return trace.NoOpTracer()
        return self._provider.get_tracer(name)

    def force_flush(self, *, timeout_millis: int = 5000) -> bool:
        if self._provider is None:
            return True
        return self._provider.force_flush(timeout_millis=timeout_millis)

    def shutdown(self) -> None:
        if self._provider:
            self._provider.shutdown()
            self._provider = None
