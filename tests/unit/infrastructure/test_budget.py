"""
Unit tests for budget parsing and reconciliation.
"""

import pytest

from scope_estimator.domain.exceptions import OutOfRangeError
from scope_estimator.domain.models import (
    BudgetInfo,
    BudgetRange,
    EstimateBreakdownLine,
    GeneratedEstimate,
)
from scope_estimator.infrastructure.budget import BudgetParser, BudgetReconciler, format_currency


class TestBudgetParser:
    """Test budget string parsing"""

    @pytest.fixture
    def parser(self):
        return BudgetParser()

    @pytest.mark.parametrize(
        "label,expected",
        [
            ("$2,000 - $5,000", (2000, 5000)),
            ("$5,000 - $15,000", (5000, 15000)),
            ("  $15,000 - $50,000 ", (15000, 50000)),
        ],
    )
    def test_preset_labels(self, parser, label, expected):
        info = parser.parse(label)
        assert (info.range.min, info.range.max) == expected
        assert info.is_custom is False
        assert info.original_value == label.strip()

    def test_empty(self, parser):
        info = parser.parse("")
        assert info.range is None
        assert info.is_custom is False
        assert info.original_value == ""

    def test_whitespace_only_keeps_original(self, parser):
        info = parser.parse("   ")
        assert info.range is None
        assert info.is_custom is False
        assert info.original_value == "   "

    def test_none(self, parser):
        assert parser.parse(None).range is None

    def test_custom_range(self, parser):
        info = parser.parse("$3,000-$4,500")
        assert info.range == BudgetRange(3000, 4500)
        assert info.is_custom is True

    def test_range_inside_text(self, parser):
        info = parser.parse("about $3,000 - $4,000 USD")
        assert info.range == BudgetRange(3000, 4000)
        assert info.original_value == "about $3,000 - $4,000 USD"

    def test_inverted_range_normalized(self, parser):
        assert parser.parse("5000 - 2000").range == BudgetRange(2000, 5000)

    def test_preset_is_case_and_format_sensitive(self, parser):
        """A preset written differently is still a (custom) range"""
        info = parser.parse("$2000 - $5000")
        assert info.range == BudgetRange(2000, 5000)
        assert info.is_custom is True

    def test_single_value(self, parser):
        info = parser.parse("$10,000")
        assert info.range == BudgetRange(10000, 10000)
        assert info.is_custom is True

    def test_single_without_symbol(self, parser):
        assert parser.parse("12000").range == BudgetRange(12000, 12000)

    def test_unparseable(self, parser):
        info = parser.parse("TBD")
        assert info.range is None
        assert info.is_custom is True
        assert info.original_value == "TBD"

    def test_custom_label(self, parser):
        """The questionnaire's 'Custom' option carries no number"""
        info = parser.parse("Custom")
        assert info.range is None
        assert info.is_custom is True


@pytest.fixture
def breakdown():
    return (
        EstimateBreakdownLine("Auth", 15, 1500),
        EstimateBreakdownLine("Dashboard", 20, 2000),
    )


@pytest.fixture
def starter_budget():
    return BudgetParser().parse("$2,000 - $5,000")


class TestBudgetReconciler:
    """Test cumulative and total over-budget checks"""

    @pytest.fixture
    def reconciler(self):
        return BudgetReconciler()

    def test_cumulative_cost(self, reconciler, breakdown):
        assert reconciler.cumulative_cost(breakdown, 0) == 1500
        assert reconciler.cumulative_cost(breakdown, 1) == 3500

    @pytest.mark.parametrize("index", [-1, 2, 5])
    def test_cumulative_cost_out_of_range(self, reconciler, breakdown, index):
        with pytest.raises(OutOfRangeError) as exc_info:
            reconciler.cumulative_cost(breakdown, index)
        assert exc_info.value.index == index
        assert exc_info.value.length == 2

    def test_lines_within_budget(self, reconciler, breakdown, starter_budget):
        assert reconciler.is_line_over_budget(breakdown, 0, starter_budget) is False
        assert reconciler.is_line_over_budget(breakdown, 1, starter_budget) is False

    def test_third_line_crosses_budget(self, reconciler, breakdown, starter_budget):
        extended = breakdown + (EstimateBreakdownLine("Reports", 20, 2000),)
        total = sum(line.cost for line in extended)

        assert reconciler.is_line_over_budget(extended, 2, starter_budget) is True
        assert reconciler.is_total_over_budget(total, starter_budget) is True
        assert reconciler.overage_amount(total, starter_budget) == 500

    def test_exactly_at_budget_is_not_over(self, reconciler, starter_budget):
        assert reconciler.is_total_over_budget(5000, starter_budget) is False
        assert reconciler.overage_amount(5000, starter_budget) == 0

    def test_no_budget_range(self, reconciler, breakdown):
        info = BudgetInfo(range=None, is_custom=True, original_value="TBD")
        assert reconciler.is_line_over_budget(breakdown, 1, info) is False
        assert reconciler.is_total_over_budget(1_000_000, info) is False
        assert reconciler.overage_amount(1_000_000, info) == 0

    def test_budget_usage(self, reconciler, breakdown, starter_budget):
        usage = reconciler.budget_usage(breakdown, 1, starter_budget)
        assert usage.used_amount == 3500
        assert usage.remaining_amount == 1500
        assert usage.percentage_used == pytest.approx(70.0)

    def test_budget_usage_without_range(self, reconciler, breakdown):
        usage = reconciler.budget_usage(breakdown, 1, BudgetParser().parse(""))
        assert (usage.used_amount, usage.remaining_amount, usage.percentage_used) == (0, 0, 0)

    def test_budget_usage_zero_budget(self, reconciler, breakdown):
        usage = reconciler.budget_usage(breakdown, 0, BudgetParser().parse("$0"))
        assert usage.remaining_amount == 0
        assert usage.percentage_used == 0

    def test_reconcile_report(self, reconciler, breakdown, starter_budget):
        estimate = GeneratedEstimate.from_lines(
            100, breakdown + (EstimateBreakdownLine("Reports", 20, 2000),)
        )
        report = reconciler.reconcile(estimate, starter_budget)

        assert [s.cumulative_cost for s in report.lines] == [1500, 3500, 5500]
        assert [s.over_budget for s in report.lines] == [False, False, True]
        assert report.first_over_budget_index == 2
        assert report.total_over_budget is True
        assert report.overage_amount == 500
        assert report.to_dict()["lines"][2]["cumulativeCost"] == 5500

    def test_reconcile_without_budget(self, reconciler, breakdown):
        estimate = GeneratedEstimate.from_lines(100, breakdown)
        report = reconciler.reconcile(estimate, BudgetParser().parse("TBD"))
        assert report.first_over_budget_index is None
        assert report.total_over_budget is False


class TestFormatCurrency:
    """Test USD formatting"""

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (5500, "$5,500"),
            (1234.5, "$1,235"),
            (0, "$0"),
            (999.4, "$999"),
            (-250, "-$250"),
            (1_250_000, "$1,250,000"),
        ],
    )
    def test_format(self, amount, expected):
        assert format_currency(amount) == expected
