"""Budget parsing and reconciliation."""

from .budget_parser import BudgetParser, PRESET_BUDGET_RANGES
from .budget_reconciler import BudgetReconciler, format_currency

__all__ = [
    "BudgetParser",
    "PRESET_BUDGET_RANGES",
    "BudgetReconciler",
    "format_currency",
]
