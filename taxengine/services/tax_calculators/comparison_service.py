"""
Nigeria Tax Engine - Year Comparison

Percentage change in expenses and turnover between two fiscal periods.
A zero (or negative) baseline is reported as 0% change.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict

from taxengine.services.tax_calculators.pit_service import ZERO, to_decimal

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class MetricComparison:
    """One metric across two periods."""
    this_year: Decimal
    last_year: Decimal
    percent_change: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "this_year": self.this_year,
            "last_year": self.last_year,
            "percent_change": self.percent_change,
        }


@dataclass(frozen=True)
class ComparisonResult:
    expenses: MetricComparison
    turnover: MetricComparison

    def to_dict(self) -> Dict[str, Any]:
        return {
            "expenses": self.expenses.to_dict(),
            "turnover": self.turnover.to_dict(),
        }


def percent_change(current: Any, last: Any) -> Decimal:
    """(current - last) / last * 100, or 0 when last is not positive."""
    current, last = to_decimal(current), to_decimal(last)
    if last > 0:
        return (current - last) / last * HUNDRED
    return ZERO


def compare_metric(current: Any, last: Any) -> MetricComparison:
    return MetricComparison(
        this_year=to_decimal(current),
        last_year=to_decimal(last),
        percent_change=percent_change(current, last),
    )


class YearComparisonCalculator:
    """Year-over-year comparison of expenses and turnover."""

    @staticmethod
    def compare(
        current_expenses: Any,
        last_year_expenses: Any,
        current_turnover: Any,
        last_year_turnover: Any,
    ) -> ComparisonResult:
        return ComparisonResult(
            expenses=compare_metric(current_expenses, last_year_expenses),
            turnover=compare_metric(current_turnover, last_year_turnover),
        )
