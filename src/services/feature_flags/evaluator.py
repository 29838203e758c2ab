"""Feature flag evaluation."""
import logging
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from opentelemetry import trace

from .feature_flag import FeatureFlag

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class FeatureFlagEvaluator(ABC):
    """Read-only feature toggle lookup."""

    @abstractmethod
    def is_enabled(self, flag: FeatureFlag) -> bool:
        pass


class SettingsFeatureFlagEvaluator(FeatureFlagEvaluator):
    """
    Evaluates flags from a static list of enabled keys (``FEATURE_FLAGS``).

    Flags not listed fall back to their default value. Each evaluation is
    recorded as a span carrying the flag key and result.
    """

    def __init__(self, enabled_keys: Optional[Iterable[str]] = None, disabled_keys: Optional[Iterable[str]] = None):
        self.enabled_keys = {key.strip().lower() for key in (enabled_keys or [])}
        self.disabled_keys = {key.strip().lower() for key in (disabled_keys or [])}

    def is_enabled(self, flag: FeatureFlag) -> bool:
        with tracer.start_as_current_span(f"FeatureFlag.Evaluate: {flag.key}") as span:
            key = flag.key.lower()
            if key in self.disabled_keys:
                result = False
            elif key in self.enabled_keys:
                result = True
            else:
                result = flag.default_value

            span.set_attribute("feature_flag.key", flag.key)
            span.set_attribute("feature_flag.default_value", flag.default_value)
            span.set_attribute("feature_flag.result", result)
            logger.debug(f"Feature flag {flag.key} evaluated to {result}")
            return result
