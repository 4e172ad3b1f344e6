"""
Nigeria Tax Engine - Categories Router

Transaction category taxonomy and keyword classification.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from taxengine.dependencies import require_settings_access
from taxengine.models.roles import AccessAction, SettingsSection
from taxengine.schemas.category import (
    AutoCategorizeRequest,
    AutoCategorizeResponse,
    CategoryListResponse,
    CategoryRuleResponse,
    CategoryRulesResponse,
    ClassificationResult,
    ClassifyRequest,
    ClassifyResponse,
)
from taxengine.services.category_service import CategoryMatcher


router = APIRouter()

matcher = CategoryMatcher()


@router.get(
    "",
    response_model=CategoryListResponse,
    summary="List transaction categories",
)
async def list_categories():
    """Canonical category names, in match order."""
    return CategoryListResponse(categories=list(matcher.category_names()))


@router.get(
    "/rules",
    response_model=CategoryRulesResponse,
    summary="List category keyword rules",
)
async def list_category_rules(
    role: Optional[str] = Depends(require_settings_access(SettingsSection.CATEGORIES, AccessAction.READ)),
):
    return CategoryRulesResponse(
        rules=[
            CategoryRuleResponse(name=name, keywords=list(keywords))
            for name, keywords in matcher.rule_set.items()
        ]
    )


@router.post(
    "/classify",
    response_model=ClassifyResponse,
    summary="Classify transaction descriptions",
)
async def classify_descriptions(request: ClassifyRequest):
    """Unmatched descriptions come back with no category and needs_review set."""
    results = []
    for description in request.descriptions:
        category = matcher.classify(description)
        results.append(ClassificationResult(
            description=description,
            category=category,
            needs_review=category is None,
        ))

    return ClassifyResponse(
        results=results,
        unclassified_count=sum(1 for item in results if item.needs_review),
    )


@router.post(
    "/auto-categorize",
    response_model=AutoCategorizeResponse,
    summary="Auto-categorise uncategorised transactions",
)
async def auto_categorize_transactions(
    request: AutoCategorizeRequest,
    role: Optional[str] = Depends(
        require_settings_access(SettingsSection.AUTO_CATEGORISATION, AccessAction.WRITE)
    ),
):
    """
    Fill in categories for transactions that have none (or an
    "Uncategorized ..." placeholder). Existing categories are kept.
    """
    result = matcher.auto_categorize(
        transaction.model_dump() for transaction in request.transactions
    )

    return AutoCategorizeResponse(
        transactions=result.transactions,
        changed=result.changed,
        unclassified=result.unclassified,
        changed_count=result.changed_count,
    )
