"""Tracing hooks for outbound generator calls.

Spans are created through the OpenTelemetry API. Until an SDK and exporter
are installed and configured by the deployment (for example with
``opentelemetry-instrument``), the API hands back a no-op tracer, so calling
code never has to check whether tracing is enabled.

PII and Sensitive Data Guidance:
--------------------------------
- NEVER put prompt text or generated copy in span attributes
- Record sizes, model names and strategy names instead
- Use correlation IDs (core/error_handler.py) to link spans to log lines
"""

from __future__ import annotations

from opentelemetry import trace


def get_tracer(name: str) -> trace.Tracer:
    """Get an OpenTelemetry tracer for custom instrumentation.

    Example:
        from core.observability import get_tracer

        tracer = get_tracer(__name__)

        async def generate(prompt: str) -> str:
            with tracer.start_as_current_span("generator.chat_completion") as span:
                span.set_attribute("prompt.length", len(prompt))
                ...
    """
    return trace.get_tracer(name)
