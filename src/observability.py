"""
Logging and tracing setup for the demo container.

Logging
───────
Plain stdlib logging to stderr. App Runner ships container stdout/stderr
to CloudWatch Logs, so no log handler beyond basicConfig is needed.

Tracing
───────
An OpenTelemetry TracerProvider with one OTLP/HTTP exporter, installed only
when OBSERVABILITY_ENABLED=true and OTEL_EXPORTER_OTLP_ENDPOINT is set:

    TracerProvider
    └── BatchSpanProcessor → OTLPSpanExporter → <endpoint>/v1/traces

Usage
─────
Call `setup_logging()` and `setup_observability()` once at process startup
(done in the FastAPI lifespan).
"""
import logging

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from src.config import config

logger = logging.getLogger(__name__)

_initialized = False


def setup_logging() -> None:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def setup_observability() -> bool:
    """
    Initialize the OTEL TracerProvider.

    Returns True when an exporter is active. Safe to call multiple times
    (no-op after the first successful call).
    """
    global _initialized
    if _initialized:
        return True

    if not config.OBSERVABILITY_ENABLED:
        logger.debug("[observability] disabled – set OBSERVABILITY_ENABLED=true to enable.")
        return False

    if not config.OTEL_EXPORTER_OTLP_ENDPOINT:
        logger.warning(
            "[observability] No exporter configured. Set OTEL_EXPORTER_OTLP_ENDPOINT."
        )
        return False

    try:
        from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
            OTLPSpanExporter,
        )
    except ImportError:
        logger.warning(
            "[observability] OTLP exporter skipped – "
            "install apprunner-demo[otlp]"
        )
        return False

    resource = Resource.create({
        "service.name": config.SERVICE_NAME,
        "service.version": config.COMMIT_SHA,
    })
    provider = TracerProvider(resource=resource)
    exporter = OTLPSpanExporter(
        endpoint=f"{config.OTEL_EXPORTER_OTLP_ENDPOINT.rstrip('/')}/v1/traces"
    )
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)

    _initialized = True
    logger.info(f"[observability] OTLP exporter → {config.OTEL_EXPORTER_OTLP_ENDPOINT}")
    return True
