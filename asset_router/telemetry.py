import logging
from typing import Optional, Sequence

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import ReadableSpan, TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    SpanExporter,
    SpanExportResult,
)
from prometheus_client import Info
from prometheus_fastapi_instrumentator import Instrumentator

from asset_router.config import RouterConfig

logger = logging.getLogger("uvicorn.error")

app_info = Info("asset_router_app_info", "Application Info")

_tracer_provider: Optional[TracerProvider] = None


class FilteringSpanExporter(SpanExporter):
    """
    Wrapper exporter that filters out noisy ASGI body spans from streamed
    file and proxy responses.
    """

    def __init__(self, exporter: SpanExporter):
        self.exporter = exporter

    def export(self, spans: Sequence[ReadableSpan]) -> SpanExportResult:
        filtered_spans = [
            span
            for span in spans
            if not (
                span.attributes
                and span.attributes.get("asgi.event.type") == "http.response.body"
            )
        ]
        if filtered_spans:
            return self.exporter.export(filtered_spans)
        return SpanExportResult.SUCCESS

    def shutdown(self):
        return self.exporter.shutdown()

    def force_flush(self, timeout_millis: int = 30000):
        return self.exporter.force_flush(timeout_millis)


def setup_tracing(app: FastAPI, config: RouterConfig) -> None:
    global _tracer_provider

    if _tracer_provider is None:
        _tracer_provider = TracerProvider(
            resource=Resource.create({"service.name": config.service_name})
        )
        if config.otlp_endpoint:
            otlp_exporter = OTLPSpanExporter(
                endpoint=config.otlp_endpoint,
                headers=(
                    config.otlp_headers.split(",") if config.otlp_headers else None
                ),
            )
            _tracer_provider.add_span_processor(
                BatchSpanProcessor(FilteringSpanExporter(otlp_exporter))
            )
            logger.info(f"Exporting traces to {config.otlp_endpoint}")
        trace.set_tracer_provider(_tracer_provider)

    FastAPIInstrumentor.instrument_app(app)


def setup_metrics(app: FastAPI, config: RouterConfig) -> None:
    # /metrics is served locally instead of being proxied when enabled
    if not config.metrics_enabled:
        return
    Instrumentator().instrument(app).expose(app)
    app_info.info({"app_name": config.service_name})
