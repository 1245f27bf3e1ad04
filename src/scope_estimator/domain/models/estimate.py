"""
Scope Estimator - Estimate Domain Model

Breakdown lines and the generated estimate aggregate.
"""
import math
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Any


def round_hours(value: float, increment: float = 0.5) -> float:
    """
    Round hours to the nearest increment, halves rounding up.

    Goes through Decimal on the shortest float repr so values such as
    2.25 land on 2.5 instead of drifting with binary representation.
    """
    step = Decimal(str(increment))
    steps = (Decimal(str(value)) / step).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return float(steps * step)


class LineKind(str, Enum):
    """Origin of a breakdown line."""

    FEATURE = "feature"
    BUFFER = "buffer"
    CUSTOM = "custom"


@dataclass(frozen=True)
class EstimateBreakdownLine:
    """
    One row of an estimate: a feature or a project-level buffer.

    Immutable value object. cost == hours x hourly rate of the owning estimate.
    """

    feature: str
    hours: float
    cost: float
    kind: LineKind = LineKind.FEATURE

    def __post_init__(self):
        if not self.feature or not self.feature.strip():
            raise ValueError("Breakdown line feature cannot be empty")
        if self.hours < 0:
            raise ValueError(f"Hours cannot be negative: {self.hours}")
        if self.cost < 0:
            raise ValueError(f"Cost cannot be negative: {self.cost}")

    @classmethod
    def priced(cls, feature: str, hours: float, hourly_rate: float, kind: LineKind = LineKind.FEATURE) -> "EstimateBreakdownLine":
        """Create a line whose cost is hours x hourly_rate."""
        return cls(feature=feature, hours=hours, cost=hours * hourly_rate, kind=kind)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict (for JSON serialization)."""
        return {
            "feature": self.feature,
            "hours": self.hours,
            "cost": self.cost,
            "kind": self.kind.value,
        }


@dataclass(frozen=True)
class GeneratedEstimate:
    """
    Complete generated estimate.

    Immutable aggregate root. Edits produce a new instance through
    from_lines(), which owns the recompute of totals.
    """

    hourly_rate: float
    total_hours: float
    total_cost: float
    breakdown: tuple[EstimateBreakdownLine, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.hourly_rate <= 0:
            raise ValueError(f"Hourly rate must be positive, got {self.hourly_rate}")
        if self.total_hours < 0:
            raise ValueError(f"Total hours cannot be negative: {self.total_hours}")
        if self.total_cost < 0:
            raise ValueError(f"Total cost cannot be negative: {self.total_cost}")

        if not isinstance(self.breakdown, tuple):
            object.__setattr__(self, "breakdown", tuple(self.breakdown))

        line_hours = sum(line.hours for line in self.breakdown)
        if not math.isclose(self.total_hours, line_hours, abs_tol=1e-9):
            raise ValueError(
                f"Total hours {self.total_hours} does not match breakdown sum {line_hours}"
            )
        if not math.isclose(self.total_cost, self.total_hours * self.hourly_rate, abs_tol=1e-6):
            raise ValueError(
                f"Total cost {self.total_cost} does not match "
                f"{self.total_hours} h x {self.hourly_rate}"
            )

    @property
    def line_count(self) -> int:
        return len(self.breakdown)

    @property
    def feature_lines(self) -> list[EstimateBreakdownLine]:
        """Lines that are not project-level buffers."""
        return [line for line in self.breakdown if line.kind != LineKind.BUFFER]

    @property
    def buffer_lines(self) -> list[EstimateBreakdownLine]:
        return [line for line in self.breakdown if line.kind == LineKind.BUFFER]

    @classmethod
    def from_lines(cls, hourly_rate: float, lines: list[EstimateBreakdownLine] | tuple[EstimateBreakdownLine, ...]) -> "GeneratedEstimate":
        """
        Create estimate from breakdown lines, recomputing totals.

        Args:
            hourly_rate: Positive hourly rate
            lines: Ordered breakdown lines (costs already priced at hourly_rate)

        Returns:
            GeneratedEstimate with totalHours = sum of hours and
            totalCost = totalHours x hourly_rate
        """
        lines = tuple(lines)
        total_hours = sum(line.hours for line in lines)
        return cls(
            hourly_rate=hourly_rate,
            total_hours=total_hours,
            total_cost=total_hours * hourly_rate,
            breakdown=lines,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict (storage document layout)."""
        return {
            "hourlyRate": self.hourly_rate,
            "totalHours": self.total_hours,
            "totalCost": self.total_cost,
            "breakdown": [line.to_dict() for line in self.breakdown],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GeneratedEstimate":
        """
        Create estimate from a stored document.

        Line costs and totals are recomputed from hours and hourly rate, so a
        document that drifted from the invariants is repaired on load.

        Args:
            data: Dict with keys hourlyRate, breakdown (totals are ignored)

        Returns:
            GeneratedEstimate instance

        Raises:
            ValueError: If required fields are missing or invalid
        """
        if "hourlyRate" not in data:
            raise ValueError("Estimate dict must have 'hourlyRate' field")
        rate = float(data["hourlyRate"])

        lines = []
        for item in data.get("breakdown") or []:
            kind = LineKind(item.get("kind", LineKind.FEATURE.value))
            lines.append(
                EstimateBreakdownLine.priced(
                    feature=str(item["feature"]),
                    hours=float(item["hours"]),
                    hourly_rate=rate,
                    kind=kind,
                )
            )
        return cls.from_lines(rate, lines)
