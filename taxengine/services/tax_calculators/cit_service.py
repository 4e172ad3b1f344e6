"""
Nigeria Tax Engine - CIT Calculator

Company Income Tax (CIT) groundwork.

CIT Rates:
- Turnover ≤ ₦100,000,000: 0% (Small companies exempt)
- Turnover > ₦100,000,000: 30% (Large companies)

Development Levy: 4% of assessable profit for large companies, replacing
Tertiary Education Tax. Small companies pay no levy.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict

from taxengine.services.tax_calculators.pit_service import ZERO, to_decimal

logger = logging.getLogger(__name__)


class CompanySize(str, Enum):
    """Company size classification for CIT purposes."""
    SMALL = "Small"  # ≤ ₦100M turnover
    LARGE = "Large"  # > ₦100M turnover


SMALL_COMPANY_THRESHOLD = Decimal("100000000")
CIT_RATE_LARGE = Decimal("0.30")
DEVELOPMENT_LEVY_RATE = Decimal("0.04")


@dataclass(frozen=True)
class CitInput:
    """Figures for one CIT calculation."""
    turnover: Decimal
    assessable_profit: Decimal

    def __post_init__(self):
        object.__setattr__(self, "turnover", to_decimal(self.turnover))
        object.__setattr__(self, "assessable_profit", to_decimal(self.assessable_profit))


@dataclass(frozen=True)
class CitResult:
    """Result of a CIT calculation."""
    category: CompanySize
    assessable_profit: Decimal
    tax_rate: Decimal
    tax_payable: Decimal
    development_levy: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "assessable_profit": self.assessable_profit,
            "tax_rate": self.tax_rate,
            "tax_payable": self.tax_payable,
            "development_levy": self.development_levy,
        }


class CITCalculator:
    """Company Income Tax calculator."""

    @staticmethod
    def get_company_size(turnover: Decimal) -> CompanySize:
        if to_decimal(turnover) <= SMALL_COMPANY_THRESHOLD:
            return CompanySize.SMALL
        return CompanySize.LARGE

    @classmethod
    def compute(cls, cit_input: CitInput) -> CitResult:
        """Calculate CIT and Development Levy. Loss years pay nothing."""
        size = cls.get_company_size(cit_input.turnover)

        if size == CompanySize.SMALL:
            tax_rate, levy_rate = ZERO, ZERO
        else:
            tax_rate, levy_rate = CIT_RATE_LARGE, DEVELOPMENT_LEVY_RATE

        profit = max(ZERO, cit_input.assessable_profit)
        result = CitResult(
            category=size,
            assessable_profit=cit_input.assessable_profit,
            tax_rate=tax_rate,
            tax_payable=profit * tax_rate,
            development_levy=profit * levy_rate,
        )

        logger.debug(f"CIT computed: size={size.value} tax={result.tax_payable} levy={result.development_levy}")
        return result
