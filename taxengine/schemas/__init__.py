"""
Nigeria Tax Engine - Schemas Package

Pydantic schemas for request/response validation.
"""

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
from taxengine.schemas.category import (
    CategoryRuleResponse,
    CategoryListResponse,
    CategoryRulesResponse,
    ClassifyRequest,
    ClassifyResponse,
    ClassificationResult,
    TransactionIn,
    AutoCategorizeRequest,
    AutoCategorizeResponse,
)
from taxengine.schemas.permissions import (
    SectionAccessResponse,
    SettingsPermissionsResponse,
    TeamCapabilitiesResponse,
    AccessCheckResponse,
)
