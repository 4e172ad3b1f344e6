"""
Nigeria Tax Engine - Category Service

Keyword rules that assign a transaction description to an expense category.

Matching is first-hit-wins in category declaration order: the description is
lowercased and the first category with any keyword contained in it is
returned. There is no scoring. When two categories could match the same
description, the one declared first wins, so reordering the table changes
results.

A description that matches nothing is unclassified (None) and goes to manual
review; that is a normal outcome, not an error.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from taxengine.utils.error_handling import RuleSetConfigurationException

logger = logging.getLogger(__name__)


UNCATEGORIZED_PREFIX = "Uncategorized"


# Default expense categories for Nigerian bank statements (order is significant)
DEFAULT_CATEGORY_RULES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "Transport & Travel": (
        "uber", "bolt", "fuel", "diesel", "petrol", "total", "shell", "oando",
        "air peace", "flight", "ticket", "transport", "parking",
    ),
    "Utilities": (
        "nepa", "phcn", "ekedc", "ikedc", "aedc", "electricity", "water", "waste", "lawma",
    ),
    "Telephone & Internet": (
        "mtn", "glo", "airtel", "9mobile", "spectranet", "starlink", "data", "recharge", "internet",
    ),
    "Bank Charges": (
        "bank charges", "sms alert", "maintenance fee", "cot", "transfer fee", "stamp duty", "fgn",
    ),
    "Salaries & Wages": (
        "salary", "wages", "stipend", "allowance", "payroll", "consultant",
    ),
    "Rent": (
        "rent", "lease", "tenancy",
    ),
    "Professional Fees": (
        "legal", "audit", "accounting", "tax", "consulting", "firs", "lirs",
    ),
    "Meals & Entertainment": (
        "restaurant", "food", "kfc", "chicken", "dominion", "pizza", "lunch", "dinner",
    ),
    "Store Supplies": (
        "paper", "ink", "stationery", "printer", "office",
    ),
    "Software & Subscriptions": (
        "google", "aws", "azure", "digital ocean", "hosting", "domain", "zoom", "slack",
        "microsoft", "adobe",
    ),
})


class CategoryRuleSet:
    """
    Ordered, read-only mapping of category name -> lowercase keywords.

    Built once and shared; nothing mutates it after construction.
    """

    def __init__(self, rules: Mapping[str, Iterable[str]]):
        ordered: Dict[str, Tuple[str, ...]] = {}
        for name, keywords in rules.items():
            if not isinstance(name, str) or not name.strip():
                raise RuleSetConfigurationException(str(name), "category name must be a non-empty string")
            if isinstance(keywords, str):
                raise RuleSetConfigurationException(name, "keywords must be a collection, not a single string")
            normalized = []
            for keyword in keywords:
                text = str(keyword).strip().lower()
                if not text:
                    raise RuleSetConfigurationException(name, "empty keyword")
                normalized.append(text)
            if not normalized:
                raise RuleSetConfigurationException(name, "category has no keywords")
            ordered[name] = tuple(dict.fromkeys(normalized))
        self._rules: Mapping[str, Tuple[str, ...]] = MappingProxyType(ordered)

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, category: object) -> bool:
        return category in self._rules

    def items(self):
        return self._rules.items()

    def keywords(self, category: str) -> Tuple[str, ...]:
        return self._rules.get(category, ())

    def category_names(self) -> Tuple[str, ...]:
        """Canonical category taxonomy, in declaration order."""
        return tuple(self._rules)

    def match(self, description: Optional[str]) -> Optional[str]:
        """First category whose keyword appears in the description, else None."""
        if not description:
            return None
        text = str(description).lower()
        for category, keywords in self._rules.items():
            if any(keyword in text for keyword in keywords):
                return category
        return None


DEFAULT_RULE_SET = CategoryRuleSet(DEFAULT_CATEGORY_RULES)


@dataclass
class AutoCategorizationResult:
    """Outcome of categorising a batch of transactions."""
    transactions: List[Dict[str, Any]] = field(default_factory=list)
    changed: List[Dict[str, Any]] = field(default_factory=list)
    unclassified: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def changed_count(self) -> int:
        return len(self.changed)


def is_uncategorized(category_name: Optional[str]) -> bool:
    """Transactions with no category, or an "Uncategorized ..." placeholder."""
    return not category_name or str(category_name).startswith(UNCATEGORIZED_PREFIX)


class CategoryMatcher:
    """Service for keyword classification of transactions."""

    def __init__(self, rule_set: CategoryRuleSet = DEFAULT_RULE_SET):
        self.rule_set = rule_set

    def classify(self, description: Optional[str]) -> Optional[str]:
        """Category for a description, or None when nothing matches."""
        return self.rule_set.match(description)

    def classify_many(self, descriptions: Iterable[Optional[str]]) -> List[Optional[str]]:
        return [self.classify(description) for description in descriptions]

    def category_names(self) -> Tuple[str, ...]:
        return self.rule_set.category_names()

    def auto_categorize(self, transactions: Iterable[Mapping[str, Any]]) -> AutoCategorizationResult:
        """
        Categorise a batch of transactions.

        Only uncategorised transactions are touched; an existing category is
        never overwritten and a miss never replaces anything. Records are
        copied, not mutated.
        """
        result = AutoCategorizationResult()

        for transaction in transactions:
            record = dict(transaction)
            if is_uncategorized(record.get("category_name")):
                category = self.classify(record.get("description"))
                if category:
                    record["category_name"] = category
                    result.changed.append(record)
                else:
                    result.unclassified.append(record)
            result.transactions.append(record)

        logger.info(
            f"Auto-categorised {result.changed_count} of {len(result.transactions)} transactions, "
            f"{len(result.unclassified)} need manual review"
        )
        return result


_default_matcher = CategoryMatcher()


def classify(description: Optional[str]) -> Optional[str]:
    """Classify a description against the default rule set."""
    return _default_matcher.classify(description)


def auto_categorize(transactions: Iterable[Mapping[str, Any]]) -> AutoCategorizationResult:
    """Auto-categorise transactions against the default rule set."""
    return _default_matcher.auto_categorize(transactions)


def get_category_names() -> Tuple[str, ...]:
    """Canonical transaction category names."""
    return DEFAULT_RULE_SET.category_names()
