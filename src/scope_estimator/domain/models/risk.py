"""
Scope Estimator - Risk Domain Model

Project-level risk signals derived once per estimate context.
"""
from dataclasses import dataclass
from enum import Enum


class TimelinePressure(str, Enum):
    """Schedule pressure derived from the requested timeline."""

    TIGHT = "tight"
    NORMAL = "normal"
    FLEXIBLE = "flexible"


@dataclass(frozen=True)
class RiskSignals:
    """
    Risk flags read by the estimator and buffer calculator.

    Immutable value object.
    """

    ambiguous_requirements: bool = False
    new_technology: bool = False
    external_dependencies: bool = False
    low_client_availability: bool = False
    timeline_pressure: TimelinePressure = TimelinePressure.NORMAL

    @property
    def active_flags(self) -> list[str]:
        """Names of the boolean signals that are set."""
        flags = {
            "ambiguous_requirements": self.ambiguous_requirements,
            "new_technology": self.new_technology,
            "external_dependencies": self.external_dependencies,
            "low_client_availability": self.low_client_availability,
        }
        return [name for name, is_set in flags.items() if is_set]

    def to_dict(self) -> dict[str, bool | str]:
        """Convert to dict (for JSON serialization)."""
        return {
            "ambiguous_requirements": self.ambiguous_requirements,
            "new_technology": self.new_technology,
            "external_dependencies": self.external_dependencies,
            "low_client_availability": self.low_client_availability,
            "timeline_pressure": self.timeline_pressure.value,
        }
