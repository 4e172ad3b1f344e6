"""
Nigeria Tax Engine - Category Schemas

Pydantic schemas for transaction classification.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CategoryRuleResponse(BaseModel):
    """A category and the keywords that select it."""
    name: str
    keywords: List[str]


class CategoryListResponse(BaseModel):
    """Canonical category taxonomy in match order."""
    categories: List[str]


class CategoryRulesResponse(BaseModel):
    rules: List[CategoryRuleResponse]


class ClassifyRequest(BaseModel):
    """Descriptions to classify."""
    descriptions: List[str] = Field(..., min_length=1)


class ClassificationResult(BaseModel):
    description: str
    category: Optional[str] = None
    needs_review: bool


class ClassifyResponse(BaseModel):
    results: List[ClassificationResult]
    unclassified_count: int


class TransactionIn(BaseModel):
    """A transaction as held by the ledger. Unknown fields pass through."""
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    description: str = ""
    category_name: Optional[str] = None
    amount: Optional[float] = None


class AutoCategorizeRequest(BaseModel):
    transactions: List[TransactionIn] = Field(..., min_length=1)


class AutoCategorizeResponse(BaseModel):
    """Updated batch plus the records that changed or still need review."""
    transactions: List[Dict[str, Any]]
    changed: List[Dict[str, Any]]
    unclassified: List[Dict[str, Any]]
    changed_count: int
