"""Feature deduplication, risk derivation, PERT estimation and buffers."""

from .deduplicator import FeatureDeduplicator
from .risk_analyzer import RiskAnalyzer
from .pert_estimator import PertEstimator
from .buffer_calculator import BufferCalculator

__all__ = [
    "FeatureDeduplicator",
    "RiskAnalyzer",
    "PertEstimator",
    "BufferCalculator",
]
