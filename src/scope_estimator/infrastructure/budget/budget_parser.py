"""
Scope Estimator - Budget Parser

Converts a free-form budget string into a comparable numeric range.
"""
import logging
import re

from scope_estimator.domain.models import BudgetInfo, BudgetRange

logger = logging.getLogger(__name__)

# Questionnaire preset labels (matched exactly after trimming, case-sensitive)
PRESET_BUDGET_RANGES: dict[str, BudgetRange] = {
    "$2,000 - $5,000": BudgetRange(2000, 5000),
    "$5,000 - $15,000": BudgetRange(5000, 15000),
    "$15,000 - $50,000": BudgetRange(15000, 50000),
}

RANGE_PATTERN = re.compile(r"\$?([\d,]+)\s*-\s*\$?([\d,]+)")
SINGLE_PATTERN = re.compile(r"\$?([\d,]+)")


def _to_number(group: str) -> float | None:
    digits = group.replace(",", "")
    if not digits:
        return None
    return float(digits)


class BudgetParser:
    """
    Budget string parser.

    Tries, first match wins: empty, preset label, range, single value.
    Never raises; an unparseable string yields range=None.
    """

    def parse(self, budget_str: str | None) -> BudgetInfo:
        """
        Parse a budget string.

        Args:
            budget_str: User-entered budget text

        Returns:
            BudgetInfo (range None means no budget constraint applies)
        """
        if budget_str is None or not budget_str.strip():
            return BudgetInfo(range=None, is_custom=False, original_value=budget_str or "")

        trimmed = budget_str.strip()

        preset = PRESET_BUDGET_RANGES.get(trimmed)
        if preset is not None:
            return BudgetInfo(range=preset, is_custom=False, original_value=trimmed)

        range_match = RANGE_PATTERN.search(trimmed)
        if range_match:
            low = _to_number(range_match.group(1))
            high = _to_number(range_match.group(2))
            if low is not None and high is not None:
                low, high = sorted((low, high))
                return BudgetInfo(range=BudgetRange(low, high), is_custom=True, original_value=trimmed)

        for single_match in SINGLE_PATTERN.finditer(trimmed):
            value = _to_number(single_match.group(1))
            if value is not None:
                return BudgetInfo(range=BudgetRange(value, value), is_custom=True, original_value=trimmed)

        logger.warning(f"Unparseable budget '{trimmed}': no budget constraint applied")
        return BudgetInfo(range=None, is_custom=True, original_value=trimmed)
