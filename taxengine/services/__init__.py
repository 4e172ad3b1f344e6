"""
Nigeria Tax Engine - Services Package

Business logic services. Everything here is pure: no I/O, no shared
mutable state.
"""

from taxengine.services.category_service import (
    CategoryMatcher,
    CategoryRuleSet,
    AutoCategorizationResult,
    DEFAULT_CATEGORY_RULES,
    DEFAULT_RULE_SET,
    classify,
    auto_categorize,
    get_category_names,
)
from taxengine.services.tax_calculators import (
    PITCalculator,
    CGTCalculator,
    CITCalculator,
    WHTCalculator,
    YearComparisonCalculator,
    compute_pit,
    compute_cgt,
    compute_cit,
    compute_wht,
    compare_years,
)

__all__ = [
    # Categories
    "CategoryMatcher",
    "CategoryRuleSet",
    "AutoCategorizationResult",
    "DEFAULT_CATEGORY_RULES",
    "DEFAULT_RULE_SET",
    "classify",
    "auto_categorize",
    "get_category_names",
    # Tax calculators
    "PITCalculator",
    "CGTCalculator",
    "CITCalculator",
    "WHTCalculator",
    "YearComparisonCalculator",
    "compute_pit",
    "compute_cgt",
    "compute_cit",
    "compute_wht",
    "compare_years",
]
