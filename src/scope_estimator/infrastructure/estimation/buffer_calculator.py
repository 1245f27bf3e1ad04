"""
Scope Estimator - Buffer Calculator

Project-level buffer lines derived from aggregate feature hours.
"""
import logging

from scope_estimator.domain.models import (
    EstimateBreakdownLine,
    LineKind,
    RiskSignals,
    TimelinePressure,
    round_hours,
)
from scope_estimator.domain.models.config import BufferConfig

logger = logging.getLogger(__name__)

DISCOVERY = "Discovery & Requirements"
QA_TESTING = "QA & Testing"
PROJECT_MANAGEMENT = "Project Management"
DEPLOYMENT = "Deployment & Launch"
CONTINGENCY = "Contingency Buffer"


class BufferCalculator:
    """Computes buffer lines in fixed order: discovery, QA, PM, deployment, contingency."""

    def __init__(self, config: BufferConfig | None = None, rounding_increment: float = 0.5):
        self.config = config or BufferConfig()
        self.rounding_increment = rounding_increment

    def compute_buffers(
        self,
        feature_hours: float,
        risk: RiskSignals,
        timeline_pressure: TimelinePressure | None = None,
    ) -> list[EstimateBreakdownLine]:
        """
        Compute buffer lines (hours only, cost left at 0).

        Args:
            feature_hours: Sum of per-feature PERT hours before buffers
            risk: Project risk signals
            timeline_pressure: Schedule pressure, informational only (logged);
                defaults to risk.timeline_pressure. Buffer sizes do not depend on it.

        Returns:
            Ordered buffer lines; the aggregator attaches cost
        """
        pressure = timeline_pressure or risk.timeline_pressure

        plan: list[tuple[str, float]] = []
        if risk.ambiguous_requirements:
            plan.append((DISCOVERY, self.config.discovery_hours))
        plan.append((QA_TESTING, self.config.qa_ratio * feature_hours))
        plan.append((PROJECT_MANAGEMENT, self.config.pm_ratio * feature_hours))
        plan.append((DEPLOYMENT, self.config.deployment_hours))
        plan.append((CONTINGENCY, self.config.contingency_ratio * feature_hours))

        lines = [
            EstimateBreakdownLine(
                feature=name,
                hours=max(0.0, round_hours(hours, self.rounding_increment)),
                cost=0.0,
                kind=LineKind.BUFFER,
            )
            for name, hours in plan
        ]
        logger.debug(
            f"Buffers for {feature_hours}h ({pressure.value}): "
            + ", ".join(f"{line.feature}={line.hours}h" for line in lines)
        )
        return lines
