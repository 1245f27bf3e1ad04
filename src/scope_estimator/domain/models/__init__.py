"""Scope Estimator - Domain Models."""

from .feature import (
    ComplexityLevel,
    FeaturePreset,
    PresetResolution,
    ResolutionSource,
    normalize_feature_name,
)
from .risk import RiskSignals, TimelinePressure
from .context import EstimateContext, DEFAULT_HOURLY_RATE
from .estimate import EstimateBreakdownLine, GeneratedEstimate, LineKind, round_hours
from .budget import BudgetInfo, BudgetRange, BudgetReconciliation, BudgetUsage, LineBudgetStatus

__all__ = [
    # Feature
    "ComplexityLevel",
    "FeaturePreset",
    "PresetResolution",
    "ResolutionSource",
    "normalize_feature_name",
    # Risk
    "RiskSignals",
    "TimelinePressure",
    # Context
    "EstimateContext",
    "DEFAULT_HOURLY_RATE",
    # Estimate
    "EstimateBreakdownLine",
    "GeneratedEstimate",
    "LineKind",
    "round_hours",
    # Budget
    "BudgetInfo",
    "BudgetRange",
    "BudgetReconciliation",
    "BudgetUsage",
    "LineBudgetStatus",
]
