"""
Scope Estimator - Budget Domain Models

Parsed budget ranges and reconciliation results.
"""
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class BudgetRange:
    """Numeric budget interval; max is the reconciliation threshold."""

    min: float
    max: float

    def __post_init__(self):
        if self.min > self.max:
            raise ValueError(f"Budget min {self.min} exceeds max {self.max}")

    def to_dict(self) -> dict[str, float]:
        return {"min": self.min, "max": self.max}


@dataclass(frozen=True)
class BudgetInfo:
    """
    Result of parsing a budget string.

    range is None when no budget constraint applies.
    """

    range: BudgetRange | None
    is_custom: bool
    original_value: str

    @property
    def has_constraint(self) -> bool:
        return self.range is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict (for JSON serialization)."""
        return {
            "range": self.range.to_dict() if self.range else None,
            "isCustom": self.is_custom,
            "originalValue": self.original_value,
        }


@dataclass(frozen=True)
class BudgetUsage:
    """How much of the budget the lines up to an index consume."""

    used_amount: float
    remaining_amount: float
    percentage_used: float


@dataclass(frozen=True)
class LineBudgetStatus:
    """Per-line reconciliation status."""

    index: int
    feature: str
    cost: float
    cumulative_cost: float
    over_budget: bool


@dataclass(frozen=True)
class BudgetReconciliation:
    """
    Reconciliation of a breakdown against a parsed budget.

    Recomputed on demand; never persisted.
    """

    budget: BudgetInfo
    lines: tuple[LineBudgetStatus, ...] = field(default_factory=tuple)
    total_cost: float = 0.0
    total_over_budget: bool = False
    overage_amount: float = 0.0

    @property
    def first_over_budget_index(self) -> int | None:
        """Index of the first line whose running total crosses the budget."""
        for status in self.lines:
            if status.over_budget:
                return status.index
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict (for JSON serialization)."""
        return {
            "budget": self.budget.to_dict(),
            "lines": [
                {
                    "index": s.index,
                    "feature": s.feature,
                    "cost": s.cost,
                    "cumulativeCost": s.cumulative_cost,
                    "overBudget": s.over_budget,
                }
                for s in self.lines
            ],
            "totalCost": self.total_cost,
            "totalOverBudget": self.total_over_budget,
            "overageAmount": self.overage_amount,
        }
