__all__ = [
    "Logger",
    "get_logger",
    "logger",
]

from src.utils.logging.default import Logger
from src.utils.logging.otel_logger import get_logger, logger
