"""Feature flag definitions."""
from dataclasses import dataclass


@dataclass(frozen=True)
class FeatureFlag:
    """A feature toggle with its key, offline default and purpose."""

    key: str
    default_value: bool
    description: str


DOC_NOT_FOUND = FeatureFlag(
    key="doc-not-found",
    default_value=False,
    description="Emit a telemetry event when no documentation is found for a topic",
)
