"""
Scope Estimator - Estimate Aggregator

Builds a GeneratedEstimate from resolved features and owns the recompute
rule applied after every breakdown edit.
"""
import logging
import math
from typing import Sequence

from scope_estimator.domain.exceptions import InvalidInputError, OutOfRangeError
from scope_estimator.domain.interfaces import FeatureCatalog
from scope_estimator.domain.models import (
    DEFAULT_HOURLY_RATE,
    EstimateBreakdownLine,
    EstimateContext,
    GeneratedEstimate,
    LineKind,
)
from scope_estimator.infrastructure.estimation import BufferCalculator, PertEstimator, RiskAnalyzer

logger = logging.getLogger(__name__)


class EstimateAggregator:
    """
    Combines feature lines and buffer lines into one estimate.

    Edits are pure: they return a new estimate and never touch the input.
    """

    def __init__(
        self,
        catalog: FeatureCatalog,
        estimator: PertEstimator,
        buffer_calculator: BufferCalculator,
        risk_analyzer: RiskAnalyzer,
        default_hourly_rate: float = DEFAULT_HOURLY_RATE,
    ):
        """
        Initialize EstimateAggregator.

        Args:
            catalog: Preset lookup with analogy fallback
            estimator: PERT estimator
            buffer_calculator: Project-level buffer calculator
            risk_analyzer: Risk signal derivation
            default_hourly_rate: Rate for contexts that carry none
        """
        self.catalog = catalog
        self.estimator = estimator
        self.buffer_calculator = buffer_calculator
        self.risk_analyzer = risk_analyzer
        self.default_hourly_rate = default_hourly_rate

    def build(self, context: EstimateContext, resolved_features: Sequence[str]) -> GeneratedEstimate:
        """
        Build an estimate.

        Args:
            context: Questionnaire snapshot
            resolved_features: Deduplicated feature names, in breakdown order

        Returns:
            GeneratedEstimate with feature lines followed by buffer lines
        """
        rate = context.rate_or(self.default_hourly_rate)
        risk = self.risk_analyzer.analyze(context)

        feature_lines = []
        for name in resolved_features:
            # Unknown names are estimated from the closest preset; see catalog.resolve
            resolution = self.catalog.resolve(name)
            hours = self.estimator.estimate_feature(
                resolution.preset, context.complexity_for(name), risk
            )
            feature_lines.append(EstimateBreakdownLine.priced(name, hours, rate, LineKind.FEATURE))

        feature_hours = sum(line.hours for line in feature_lines)
        buffer_lines = [
            EstimateBreakdownLine.priced(line.feature, line.hours, rate, LineKind.BUFFER)
            for line in self.buffer_calculator.compute_buffers(
                feature_hours, risk, risk.timeline_pressure
            )
        ]

        estimate = GeneratedEstimate.from_lines(rate, feature_lines + buffer_lines)
        logger.info(
            f"Built estimate: {len(feature_lines)} features, {len(buffer_lines)} buffers, "
            f"{estimate.total_hours}h, ${estimate.total_cost:,.2f}"
        )
        return estimate

    def with_line_removed(self, estimate: GeneratedEstimate, index: int) -> GeneratedEstimate:
        """
        Return a copy of estimate without the line at index.

        Raises:
            OutOfRangeError: If index is not a valid position (negative indices included)
        """
        if index < 0 or index >= len(estimate.breakdown):
            raise OutOfRangeError(
                f"Cannot remove line {index}", index=index, length=len(estimate.breakdown)
            )

        removed = estimate.breakdown[index]
        remaining = estimate.breakdown[:index] + estimate.breakdown[index + 1:]
        updated = GeneratedEstimate.from_lines(estimate.hourly_rate, remaining)
        logger.info(f"Removed line '{removed.feature}' ({removed.hours}h) -> {updated.total_hours}h")
        return updated

    def with_line_added(self, estimate: GeneratedEstimate, feature: str, hours: float) -> GeneratedEstimate:
        """
        Return a copy of estimate with a new line appended.

        Raises:
            InvalidInputError: If hours is not a finite number > 0 or feature is blank
        """
        name = (feature or "").strip()
        if not name:
            raise InvalidInputError("Feature name cannot be empty", field_name="feature", value=feature)
        if hours is None or not math.isfinite(hours) or hours <= 0:
            raise InvalidInputError("Hours must be a finite number greater than zero", field_name="hours", value=hours)

        line = EstimateBreakdownLine.priced(name, float(hours), estimate.hourly_rate, LineKind.CUSTOM)
        updated = GeneratedEstimate.from_lines(estimate.hourly_rate, estimate.breakdown + (line,))
        logger.info(f"Added line '{name}' ({line.hours}h) -> {updated.total_hours}h")
        return updated
