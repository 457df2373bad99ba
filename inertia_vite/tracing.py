"""
OpenTelemetry Tracing — tracing.py
==================================
Provides TracingConfig, configure_tracing(), get_tracer(), and two
context-manager helpers for the instrumentation points of this package:
manifest resolution (once, at startup) and layout rendering (per request).

Without a configured TracerProvider the opentelemetry-api tracer is a no-op.

Usage:
    from inertia_vite.tracing import configure_tracing, TracingConfig
    configure_tracing(TracingConfig(enabled=True, otlp_endpoint="http://localhost:4317"))
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from opentelemetry import trace

logger = logging.getLogger("inertia_vite.tracing")

# ── Module-level singletons (reset between tests) ──────────────────────────────
_tracer = None
_provider = None


@dataclass
class TracingConfig:
    enabled: bool = False
    service_name: str = "inertia-vite"
    otlp_endpoint: Optional[str] = None   # None → ConsoleSpanExporter (dev)
    sample_rate: float = 1.0


def configure_tracing(cfg: TracingConfig) -> None:
    """Initialise the global OTEL TracerProvider. Safe to call multiple times."""
    global _tracer, _provider

    if not cfg.enabled:
        _tracer = trace.get_tracer(__name__)
        return

    try:
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
    except ImportError:
        logger.warning(
            "opentelemetry-sdk not installed. "
            "Run: pip install -e '.[tracing]'"
        )
        _tracer = trace.get_tracer(__name__)
        return

    resource = Resource.create({"service.name": cfg.service_name})
    provider = TracerProvider(resource=resource, sampler=TraceIdRatioBased(cfg.sample_rate))

    if cfg.otlp_endpoint:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
        from opentelemetry.sdk.trace.export import BatchSpanProcessor
        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=cfg.otlp_endpoint, insecure=True))
        )
        logger.info(f"OTEL tracing → {cfg.otlp_endpoint}")
    else:
        from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
        logger.info("OTEL tracing → console (dev mode)")

    trace.set_tracer_provider(provider)
    _provider = provider
    _tracer = provider.get_tracer(cfg.service_name)


def get_tracer():
    """Return the global tracer (no-op if configure_tracing() was not called)."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(__name__)
    return _tracer


# ── Context managers ───────────────────────────────────────────────────────────

@contextmanager
def traced_manifest_resolve(entry_name: str) -> Iterator:
    """Span for reading one entry out of a manifest."""
    tracer = get_tracer()
    with tracer.start_as_current_span("manifest_resolve") as span:
        span.set_attribute("manifest.entry", entry_name)
        yield span


@contextmanager
def traced_layout_render(mode: str, templated: bool) -> Iterator:
    """Span for a single layout invocation."""
    tracer = get_tracer()
    with tracer.start_as_current_span(f"layout_render:{mode}") as span:
        span.set_attribute("layout.mode", mode)
        span.set_attribute("layout.renderer", templated)
        yield span
