import logging
import sys

from opentelemetry import trace

from src.core.config import settings

LOG_FORMAT = (
    "%(asctime)s %(levelname)s [%(name)s] "
    "[trace_id=%(otelTraceID)s span_id=%(otelSpanID)s] %(message)s"
)


class OtelContextFilter(logging.Filter):
    """Stamps the active OpenTelemetry trace and span ids onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            record.otelTraceID = format(span_context.trace_id, "032x")
            record.otelSpanID = format(span_context.span_id, "016x")
        else:
            record.otelTraceID = "0"
            record.otelSpanID = "0"
        return True


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger whose records carry OpenTelemetry trace context.

    Handlers are attached once per logger name so repeated calls are cheap.
    """
    base_logger = logging.getLogger(name)
    if not any(isinstance(f, OtelContextFilter) for f in base_logger.filters):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.addFilter(OtelContextFilter())
        base_logger.addHandler(handler)
        base_logger.addFilter(OtelContextFilter())
        base_logger.setLevel(settings.LOG_LEVEL.upper())
        base_logger.propagate = False
    return base_logger


logger = get_logger(settings.app_name)
