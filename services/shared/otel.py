from __future__ import annotations

from typing import Any

from services.shared.runtime import get_runtime_config


def setup_otel(*, service_name: str) -> bool:
    """Install an OTLP tracer provider when FAQBOT_OTEL_ENABLED=1.

    Returns False (and leaves tracing off) when disabled or when the
    opentelemetry packages are not installed.
    """

    cfg = get_runtime_config(service_name=service_name)
    if not cfg.otel_enabled:
        return False

    try:
        from opentelemetry import trace  # type: ignore
        from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter  # type: ignore
        from opentelemetry.sdk.resources import Resource  # type: ignore
        from opentelemetry.sdk.trace import TracerProvider  # type: ignore
        from opentelemetry.sdk.trace.export import BatchSpanProcessor  # type: ignore
    except ImportError:
        return False

    provider = TracerProvider(resource=Resource.create({"service.name": cfg.otel_service_name}))

    exporter_kwargs: dict[str, Any] = {}
    if cfg.otel_exporter_otlp_endpoint:
        exporter_kwargs["endpoint"] = cfg.otel_exporter_otlp_endpoint
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(**exporter_kwargs)))

    trace.set_tracer_provider(provider)
    return True


def instrument_fastapi(app: Any, *, service_name: str) -> bool:
    if not setup_otel(service_name=service_name):
        return False
    try:
        from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor  # type: ignore
    except ImportError:
        return False

    FastAPIInstrumentor.instrument_app(app)
    return True
