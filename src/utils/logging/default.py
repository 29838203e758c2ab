import logging

from src.utils.logging.otel_logger import get_logger


class Logger:
    """
    Request-scoped logger on top of the trace-aware base logger.

    Every record gets the request context (request id, route, client)
    merged into its ``extra`` so HTTP logs can be correlated with the
    routing logs emitted further down the stack.

    Args:
        name (str): The name of the logger instance
        request_context (dict, optional): Context merged into every record
    """

    def __init__(self, name: str, request_context: dict = None):
        self.base_logger: logging.Logger = get_logger(name)
        self.request_context = request_context or {}

    def bind(self, **context) -> "Logger":
        """Return a new logger carrying additional request context."""
        merged = dict(self.request_context)
        merged.update(context)
        return Logger(self.base_logger.name, merged)

    def _merge_extra(self, extra: dict) -> dict:
        if not extra:
            return self.request_context
        merged = dict(extra)
        merged.update(self.request_context)
        return merged

    def debug(self, message, extra=None):
        self.base_logger.debug(message, extra=self._merge_extra(extra))

    def info(self, message, extra=None):
        self.base_logger.info(message, extra=self._merge_extra(extra))

    def warning(self, message, extra=None):
        self.base_logger.warning(message, extra=self._merge_extra(extra))

    def error(self, message, extra=None):
        self.base_logger.error(message, extra=self._merge_extra(extra))
