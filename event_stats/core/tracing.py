from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from shared.constants import Environment

from .config import settings


def configure_tracing() -> TracerProvider:
    """Configures OpenTelemetry for the host application.

    Spans emitted by the statistics layer go through the global tracer
    provider; without this call they are no-ops.
    """
    resource = Resource.create(
        {
            "service.name": settings.otel_service_name,
            "deployment.environment": settings.app_environment,
        }
    )

    provider = TracerProvider(resource=resource)
    if not Environment.is_testing(settings.app_environment):
        otlp_exporter = OTLPSpanExporter(endpoint=settings.otel_exporter_endpoint)
        provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    trace.set_tracer_provider(provider)
    return provider


def get_tracer(name: str) -> trace.Tracer:
    return trace.get_tracer(name)
