"""
Scope Estimator - PERT Estimator

Three-point (PERT) expected hours per feature with complexity, timeline
and risk adjustments.
"""
import logging

from scope_estimator.domain.models import (
    ComplexityLevel,
    FeaturePreset,
    RiskSignals,
    TimelinePressure,
    round_hours,
)

logger = logging.getLogger(__name__)

# (O, M, P) multipliers
COMPLEXITY_MULTIPLIERS: dict[ComplexityLevel, tuple[float, float, float]] = {
    ComplexityLevel.LOW: (1.0, 1.0, 1.0),
    ComplexityLevel.MEDIUM: (1.2, 1.3, 1.4),
    ComplexityLevel.HIGH: (1.5, 1.7, 2.0),
}

TIMELINE_MULTIPLIERS: dict[TimelinePressure, tuple[float, float, float]] = {
    TimelinePressure.TIGHT: (1.0, 1.0, 1.5),
    TimelinePressure.NORMAL: (1.0, 1.0, 1.0),
    TimelinePressure.FLEXIBLE: (0.9, 1.0, 1.0),
}

AMBIGUITY_MULTIPLIERS = (1.0, 1.0, 1.3)
NEW_TECHNOLOGY_MULTIPLIERS = (1.0, 1.2, 1.4)
EXTERNAL_DEPENDENCY_MULTIPLIERS = (1.0, 1.0, 1.25)
LOW_AVAILABILITY_MULTIPLIERS = (1.0, 1.15, 1.0)


def _scale(
    triple: tuple[float, float, float], factors: tuple[float, float, float]
) -> tuple[float, float, float]:
    return (triple[0] * factors[0], triple[1] * factors[1], triple[2] * factors[2])


def pert_expected(optimistic: float, most_likely: float, pessimistic: float) -> float:
    """Expected value E = (O + 4M + P) / 6."""
    return (optimistic + 4 * most_likely + pessimistic) / 6


class PertEstimator:
    """
    Deterministic PERT estimator.

    Pure: identical inputs always produce identical hours.
    """

    def __init__(self, rounding_increment: float = 0.5):
        self.rounding_increment = rounding_increment

    def adjusted_triple(
        self,
        preset: FeaturePreset,
        complexity: ComplexityLevel,
        risk: RiskSignals,
    ) -> tuple[float, float, float]:
        """
        Apply complexity, timeline and risk multipliers to a preset.

        Risk multipliers compound when several apply. O is clamped to P if
        compounding inverts the interval.
        """
        triple = _scale(preset.as_triple(), COMPLEXITY_MULTIPLIERS[complexity])
        triple = _scale(triple, TIMELINE_MULTIPLIERS[risk.timeline_pressure])

        if risk.ambiguous_requirements:
            triple = _scale(triple, AMBIGUITY_MULTIPLIERS)
        if risk.new_technology:
            triple = _scale(triple, NEW_TECHNOLOGY_MULTIPLIERS)
        if risk.external_dependencies:
            triple = _scale(triple, EXTERNAL_DEPENDENCY_MULTIPLIERS)
        if risk.low_client_availability:
            triple = _scale(triple, LOW_AVAILABILITY_MULTIPLIERS)

        optimistic, most_likely, pessimistic = triple
        if optimistic > pessimistic:
            optimistic = pessimistic
        return optimistic, most_likely, pessimistic

    def estimate_feature(
        self,
        preset: FeaturePreset,
        complexity: ComplexityLevel,
        risk: RiskSignals,
    ) -> float:
        """
        Expected hours for one feature.

        Args:
            preset: Baseline three-point estimate
            complexity: Feature complexity
            risk: Project risk signals

        Returns:
            Non-negative hours rounded to the nearest increment (half up)
        """
        optimistic, most_likely, pessimistic = self.adjusted_triple(preset, complexity, risk)
        expected = pert_expected(optimistic, most_likely, pessimistic)
        hours = max(0.0, round_hours(expected, self.rounding_increment))

        logger.debug(
            f"PERT {preset.name} [{complexity.value}]: "
            f"O={optimistic:.2f} M={most_likely:.2f} P={pessimistic:.2f} -> {hours}h"
        )
        return hours
