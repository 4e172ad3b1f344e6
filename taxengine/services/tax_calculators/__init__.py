"""
Nigeria Tax Engine - Tax Calculators Package

Pure, deterministic tax calculations.

Modules:
- pit_service: Personal Income Tax with CRA and rent relief (7%-24% bands)
- cgt_service: Capital Gains Tax (small company exempt / 30% flat / PIT bands)
- cit_service: Company Income Tax (0%/30%) with 4% Development Levy
- wht_service: Withholding Tax by payment type (2%-10%)
- comparison_service: Year-over-year expenses and turnover comparison
"""

from typing import Any, Mapping, Union

from taxengine.services.tax_calculators.pit_service import (
    PITBand,
    PITBandTable,
    PITCalculator,
    TaxInput,
    TaxResult,
    BandApplied,
    NIGERIA_PIT_BANDS,
    NIGERIA_PIT_TABLE,
)
from taxengine.services.tax_calculators.cgt_service import (
    CGTCalculator,
    CgtInput,
    CgtResult,
    EntityType,
    SMALL_COMPANY_TURNOVER,
)
from taxengine.services.tax_calculators.cit_service import (
    CITCalculator,
    CitInput,
    CitResult,
    CompanySize,
)
from taxengine.services.tax_calculators.wht_service import (
    WHTCalculator,
    WHTResult,
    WHTType,
    WHT_RATES,
)
from taxengine.services.tax_calculators.comparison_service import (
    YearComparisonCalculator,
    ComparisonResult,
    MetricComparison,
)


_pit_calculator = PITCalculator()
_cgt_calculator = CGTCalculator(pit_calculator=_pit_calculator)


# ===========================================
# CONVENIENCE FUNCTIONS
# ===========================================

def compute_pit(tax_input: Union[TaxInput, Mapping[str, Any], None] = None, **fields: Any) -> TaxResult:
    """
    Calculate Personal Income Tax.

    Accepts a TaxInput, a mapping of its fields, or the fields as keywords:

        compute_pit(TaxInput(gross_income=5_000_000))
        compute_pit(gross_income=5_000_000, actual_rent_paid=600_000)

    Returns:
        TaxResult with taxable income, tax payable and the bands applied
    """
    if tax_input is None:
        tax_input = TaxInput(**fields)
    elif isinstance(tax_input, Mapping):
        tax_input = TaxInput(**tax_input)
    return _pit_calculator.compute(tax_input)


def compute_cgt(cgt_input: Union[CgtInput, Mapping[str, Any], None] = None, **fields: Any) -> CgtResult:
    """
    Calculate Capital Gains Tax.

    Companies with turnover <= ₦100M are exempt, larger companies pay 30%
    flat, individuals pay PIT rates on the gain.
    """
    if cgt_input is None:
        cgt_input = CgtInput(**fields)
    elif isinstance(cgt_input, Mapping):
        cgt_input = CgtInput(**cgt_input)
    return _cgt_calculator.compute(cgt_input)


def compute_cit(turnover: Any, assessable_profit: Any) -> CitResult:
    """
    Calculate Company Income Tax and Development Levy.

    Args:
        turnover: Annual turnover
        assessable_profit: Assessable profit

    Returns:
        CitResult (0% for small companies, 30% + 4% levy for large)
    """
    return CITCalculator.compute(CitInput(turnover=turnover, assessable_profit=assessable_profit))


def compute_wht(amount: Any, wht_type: Union[WHTType, str]) -> WHTResult:
    """Calculate Withholding Tax on a payment."""
    return WHTCalculator.compute(amount, wht_type)


def compare_years(
    current_expenses: Any,
    last_year_expenses: Any,
    current_turnover: Any,
    last_year_turnover: Any,
) -> ComparisonResult:
    """Percentage change in expenses and turnover against last year."""
    return YearComparisonCalculator.compare(
        current_expenses, last_year_expenses, current_turnover, last_year_turnover
    )


def get_pit_band(taxable_income: Any) -> str:
    """
    Get the marginal PIT band for a level of taxable income.

    Returns:
        Band description (Nil, 7%, 11%, 15%, 19%, 21%, 24%)
    """
    return _pit_calculator.get_band_label(taxable_income)


__all__ = [
    # PIT
    "PITBand",
    "PITBandTable",
    "PITCalculator",
    "TaxInput",
    "TaxResult",
    "BandApplied",
    "NIGERIA_PIT_BANDS",
    "NIGERIA_PIT_TABLE",
    # CGT
    "CGTCalculator",
    "CgtInput",
    "CgtResult",
    "EntityType",
    "SMALL_COMPANY_TURNOVER",
    # CIT
    "CITCalculator",
    "CitInput",
    "CitResult",
    "CompanySize",
    # WHT
    "WHTCalculator",
    "WHTResult",
    "WHTType",
    "WHT_RATES",
    # Comparison
    "YearComparisonCalculator",
    "ComparisonResult",
    "MetricComparison",
    # Convenience functions
    "compute_pit",
    "compute_cgt",
    "compute_cit",
    "compute_wht",
    "compare_years",
    "get_pit_band",
]
