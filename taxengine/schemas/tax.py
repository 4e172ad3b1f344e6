"""
Nigeria Tax Engine - Tax Schemas

Pydantic schemas for the tax calculation endpoints. Every amount is
constrained to be non-negative, so bad figures are rejected here and never
reach a calculator.
"""

from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field

from taxengine.services.tax_calculators import EntityType, WHTType


# ===========================================
# PIT SCHEMAS
# ===========================================

class PITCalculationRequest(BaseModel):
    """Schema for PIT calculation request."""
    gross_income: Decimal = Field(..., ge=0)
    allowable_deductions: Decimal = Field(Decimal("0"), ge=0, description="Business expenses")
    non_taxable_income: Decimal = Field(Decimal("0"), ge=0, description="Pension, NHF, NHIS")
    actual_rent_paid: Decimal = Field(Decimal("0"), ge=0, description="Annual rent for rent relief")


class BandAppliedResponse(BaseModel):
    """One band of the PIT walk."""
    rate: float
    amount_in_band: float
    tax_in_band: float


class PITCalculationResponse(BaseModel):
    """Schema for PIT calculation response."""
    gross_income: float
    cra: float
    rent_relief: float
    total_reliefs: float
    taxable_income: float
    tax_payable: float
    effective_rate: float
    is_exempt: bool
    bands_applied: List[BandAppliedResponse]


# ===========================================
# CGT SCHEMAS
# ===========================================

class CGTCalculationRequest(BaseModel):
    """Schema for CGT calculation request."""
    entity_type: EntityType
    gain_amount: Decimal = Field(..., ge=0)
    turnover: Decimal = Field(Decimal("0"), ge=0, description="Annual turnover (companies only)")


class CGTCalculationResponse(BaseModel):
    """Schema for CGT calculation response."""
    gain_amount: float
    tax_payable: float
    rate_description: str


# ===========================================
# CIT SCHEMAS
# ===========================================

class CITCalculationRequest(BaseModel):
    """Schema for CIT calculation request."""
    turnover: Decimal = Field(..., ge=0)
    assessable_profit: Decimal = Field(..., ge=0)


class CITCalculationResponse(BaseModel):
    """Schema for CIT calculation response."""
    category: str
    assessable_profit: float
    tax_rate: float
    tax_payable: float
    development_levy: float


# ===========================================
# WHT SCHEMAS
# ===========================================

class WHTCalculationRequest(BaseModel):
    """Schema for WHT calculation request."""
    amount: Decimal = Field(..., ge=0)
    wht_type: WHTType


class WHTCalculationResponse(BaseModel):
    """Schema for WHT calculation response."""
    amount: float
    rate: float
    tax_payable: float
    wht_type: str


class WHTRateResponse(BaseModel):
    wht_type: str
    rate: float


# ===========================================
# YEAR COMPARISON SCHEMAS
# ===========================================

class YearComparisonRequest(BaseModel):
    """Schema for year-over-year comparison request."""
    current_expenses: Decimal = Field(..., ge=0)
    last_year_expenses: Decimal = Field(..., ge=0)
    current_turnover: Decimal = Field(..., ge=0)
    last_year_turnover: Decimal = Field(..., ge=0)


class MetricComparisonResponse(BaseModel):
    this_year: float
    last_year: float
    percent_change: float


class YearComparisonResponse(BaseModel):
    """Schema for year-over-year comparison response."""
    expenses: MetricComparisonResponse
    turnover: MetricComparisonResponse
