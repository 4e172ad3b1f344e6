"""
Nigeria Tax Engine - Capital Gains Tax Calculator

Capital Gains Tax (CGT), entity-aware:
- Companies with turnover <= ₦100M are exempt (small company)
- Other companies pay a flat 30%, harmonised with the CIT rate
- Individuals pay at the progressive PIT rates, with the gain treated as
  the only income for the sub-calculation

The partial exemption threshold for individuals is not applied here.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from taxengine.services.tax_calculators.pit_service import (
    PITCalculator,
    TaxInput,
    ZERO,
    to_decimal,
)
from taxengine.utils.error_handling import InvalidEntityTypeException

logger = logging.getLogger(__name__)


# Threshold constants
SMALL_COMPANY_TURNOVER = Decimal("100000000")  # ₦100 million
CGT_RATE_COMPANY = Decimal("0.30")              # 30%

# Labels surfaced to the UI and audit trail
SMALL_COMPANY_EXEMPT_LABEL = "Small Company Exempt"
PROGRESSIVE_LABEL = "Progressive (Same as PIT)"


class EntityType(str, Enum):
    """Taxpayer entity for CGT purposes."""
    INDIVIDUAL = "individual"
    COMPANY = "company"


@dataclass(frozen=True)
class CgtInput:
    """Figures for one CGT calculation."""
    entity_type: EntityType
    gain_amount: Decimal = ZERO
    turnover: Decimal = ZERO  # Only relevant for companies

    def __post_init__(self):
        try:
            entity_type = EntityType(self.entity_type)
        except ValueError:
            raise InvalidEntityTypeException(self.entity_type)
        object.__setattr__(self, "entity_type", entity_type)
        object.__setattr__(self, "gain_amount", to_decimal(self.gain_amount))
        object.__setattr__(self, "turnover", to_decimal(self.turnover))


@dataclass(frozen=True)
class CgtResult:
    """Result of a Capital Gains Tax calculation."""
    gain_amount: Decimal
    tax_payable: Decimal
    rate_description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gain_amount": self.gain_amount,
            "tax_payable": self.tax_payable,
            "rate_description": self.rate_description,
        }


class CGTCalculator:
    """
    Capital Gains Tax calculator.

    Individuals are delegated to the PIT calculator so the two never drift
    apart when the band table changes.
    """

    def __init__(
        self,
        pit_calculator: Optional[PITCalculator] = None,
        small_company_turnover: Decimal = SMALL_COMPANY_TURNOVER,
        company_rate: Decimal = CGT_RATE_COMPANY,
    ):
        self.pit_calculator = pit_calculator or PITCalculator()
        self.small_company_turnover = small_company_turnover
        self.company_rate = company_rate

    @property
    def flat_rate_label(self) -> str:
        return f"{self.company_rate * 100:.0f}% Flat"

    def is_small_company(self, turnover: Decimal) -> bool:
        """Small company exemption: turnover at or below the threshold."""
        return to_decimal(turnover) <= self.small_company_turnover

    def compute(self, cgt_input: CgtInput) -> CgtResult:
        """Calculate CGT for an individual or a company."""
        gain = cgt_input.gain_amount

        if cgt_input.entity_type == EntityType.COMPANY:
            if self.is_small_company(cgt_input.turnover):
                result = CgtResult(gain, ZERO, SMALL_COMPANY_EXEMPT_LABEL)
            else:
                tax_payable = max(ZERO, gain) * self.company_rate
                result = CgtResult(gain, tax_payable, self.flat_rate_label)
        else:
            pit_result = self.pit_calculator.compute(TaxInput(gross_income=gain))
            result = CgtResult(gain, pit_result.tax_payable, PROGRESSIVE_LABEL)

        logger.debug(
            f"CGT computed: entity={cgt_input.entity_type.value} gain={gain} "
            f"tax={result.tax_payable} rule={result.rate_description}"
        )
        return result
