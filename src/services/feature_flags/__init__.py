from .evaluator import FeatureFlagEvaluator, SettingsFeatureFlagEvaluator
from .feature_flag import DOC_NOT_FOUND, FeatureFlag

__all__ = [
    "DOC_NOT_FOUND",
    "FeatureFlag",
    "FeatureFlagEvaluator",
    "SettingsFeatureFlagEvaluator",
]
