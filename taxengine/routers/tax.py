"""
Nigeria Tax Engine - Tax Router

Stateless calculation endpoints for PIT, CGT, CIT, WHT and the
year-over-year comparison. Nothing is stored.
"""

from typing import List

from fastapi import APIRouter

from taxengine.schemas.tax import (
    PITCalculationRequest,
    PITCalculationResponse,
    BandAppliedResponse,
    CGTCalculationRequest,
    CGTCalculationResponse,
    CITCalculationRequest,
    CITCalculationResponse,
    WHTCalculationRequest,
    WHTCalculationResponse,
    WHTRateResponse,
    YearComparisonRequest,
    YearComparisonResponse,
    MetricComparisonResponse,
)
from taxengine.services.tax_calculators import (
    CgtInput,
    TaxInput,
    WHTCalculator,
    compare_years,
    compute_cgt,
    compute_cit,
    compute_pit,
    compute_wht,
)
from taxengine.services.tax_calculators.comparison_service import MetricComparison


router = APIRouter()


# ===========================================
# PIT
# ===========================================

@router.post(
    "/pit/calculate",
    response_model=PITCalculationResponse,
    summary="Calculate Personal Income Tax",
    tags=["Tax - PIT"],
)
async def calculate_pit(request: PITCalculationRequest):
    """
    Calculate PIT for given income.

    Relief: CRA (higher of ₦200,000 or 1% of gross, plus 20% of gross),
    rent relief (capped at 20% of gross and ₦500,000) and non-taxable income.

    Bands: 7%, 11%, 15%, 19%, 21%, 24%.
    """
    result = compute_pit(TaxInput(
        gross_income=request.gross_income,
        allowable_deductions=request.allowable_deductions,
        non_taxable_income=request.non_taxable_income,
        actual_rent_paid=request.actual_rent_paid,
    ))

    return PITCalculationResponse(
        gross_income=float(result.gross_income),
        cra=float(result.cra),
        rent_relief=float(result.rent_relief),
        total_reliefs=float(result.total_reliefs),
        taxable_income=float(result.taxable_income),
        tax_payable=float(result.tax_payable),
        effective_rate=float(result.effective_rate),
        is_exempt=result.is_exempt,
        bands_applied=[
            BandAppliedResponse(
                rate=float(band.rate),
                amount_in_band=float(band.amount_in_band),
                tax_in_band=float(band.tax_in_band),
            )
            for band in result.bands_applied
        ],
    )


# ===========================================
# CGT
# ===========================================

@router.post(
    "/cgt/calculate",
    response_model=CGTCalculationResponse,
    summary="Calculate Capital Gains Tax",
    tags=["Tax - CGT"],
)
async def calculate_cgt(request: CGTCalculationRequest):
    """
    Calculate CGT.

    - Company, turnover ≤ ₦100M: exempt
    - Company, turnover > ₦100M: 30% flat
    - Individual: progressive PIT bands on the gain
    """
    result = compute_cgt(CgtInput(
        entity_type=request.entity_type,
        gain_amount=request.gain_amount,
        turnover=request.turnover,
    ))

    return CGTCalculationResponse(
        gain_amount=float(result.gain_amount),
        tax_payable=float(result.tax_payable),
        rate_description=result.rate_description,
    )


# ===========================================
# CIT
# ===========================================

@router.post(
    "/cit/calculate",
    response_model=CITCalculationResponse,
    summary="Calculate Company Income Tax",
    tags=["Tax - CIT"],
)
async def calculate_cit(request: CITCalculationRequest):
    """Calculate CIT and the 4% Development Levy."""
    result = compute_cit(request.turnover, request.assessable_profit)

    return CITCalculationResponse(
        category=result.category.value,
        assessable_profit=float(result.assessable_profit),
        tax_rate=float(result.tax_rate),
        tax_payable=float(result.tax_payable),
        development_levy=float(result.development_levy),
    )


# ===========================================
# WHT
# ===========================================

@router.post(
    "/wht/calculate",
    response_model=WHTCalculationResponse,
    summary="Calculate Withholding Tax",
    tags=["Tax - WHT"],
)
async def calculate_wht(request: WHTCalculationRequest):
    result = compute_wht(request.amount, request.wht_type)

    return WHTCalculationResponse(
        amount=float(result.amount),
        rate=float(result.rate),
        tax_payable=float(result.tax_payable),
        wht_type=result.wht_type.value,
    )


@router.get(
    "/wht/rates",
    response_model=List[WHTRateResponse],
    summary="List WHT rates",
    tags=["Tax - WHT"],
)
async def get_wht_rates():
    return [
        WHTRateResponse(wht_type=row["wht_type"], rate=float(row["rate"]))
        for row in WHTCalculator.get_all_wht_rates()
    ]


# ===========================================
# YEAR COMPARISON
# ===========================================

def _metric_response(metric: MetricComparison) -> MetricComparisonResponse:
    return MetricComparisonResponse(
        this_year=float(metric.this_year),
        last_year=float(metric.last_year),
        percent_change=float(metric.percent_change),
    )


@router.post(
    "/comparison",
    response_model=YearComparisonResponse,
    summary="Compare expenses and turnover with last year",
    tags=["Tax - Comparison"],
)
async def year_comparison(request: YearComparisonRequest):
    """Percentage change; a zero baseline is reported as 0%."""
    result = compare_years(
        request.current_expenses,
        request.last_year_expenses,
        request.current_turnover,
        request.last_year_turnover,
    )

    return YearComparisonResponse(
        expenses=_metric_response(result.expenses),
        turnover=_metric_response(result.turnover),
    )
