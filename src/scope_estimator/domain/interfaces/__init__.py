"""Scope Estimator - Domain Interfaces (Protocols)."""

from .analogy import AnalogyMatcher
from .catalog import FeatureCatalog
from .feature_extractor import FeatureExtractor

__all__ = [
    "AnalogyMatcher",
    "FeatureCatalog",
    "FeatureExtractor",
]
