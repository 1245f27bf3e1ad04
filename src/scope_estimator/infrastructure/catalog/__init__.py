"""Feature catalog and analogy matching."""

from .analogy_matchers import EditDistanceMatcher, KeywordOverlapMatcher
from .feature_catalog import DEFAULT_ALIASES, DEFAULT_PRESETS, PresetFeatureCatalog

__all__ = [
    "EditDistanceMatcher",
    "KeywordOverlapMatcher",
    "DEFAULT_ALIASES",
    "DEFAULT_PRESETS",
    "PresetFeatureCatalog",
]
