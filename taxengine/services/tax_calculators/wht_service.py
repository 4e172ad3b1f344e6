"""
Nigeria Tax Engine - WHT Calculator

Withholding Tax (WHT) rates by payment type:
- Dividend, Interest, Royalty, Rent, Director's fees: 10%
- Contracts, Professional, Consultancy, Commission: 5%
- Sales of goods: 2%
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Union

from taxengine.services.tax_calculators.pit_service import ZERO, to_decimal
from taxengine.utils.error_handling import InvalidWHTTypeException


class WHTType(str, Enum):
    """Payment types subject to withholding."""
    DIVIDEND = "Dividend"
    INTEREST = "Interest"
    ROYALTY = "Royalty"
    RENT = "Rent"
    CONTRACT = "Contract"
    PROFESSIONAL = "Professional"
    CONSULTANCY = "Consultancy"
    COMMISSION = "Commission"
    DIRECTOR_FEE = "DirectorFee"
    SALES_OF_GOODS = "SalesOfGoods"


WHT_RATES: Mapping[WHTType, Decimal] = MappingProxyType({
    WHTType.DIVIDEND: Decimal("0.10"),
    WHTType.INTEREST: Decimal("0.10"),
    WHTType.ROYALTY: Decimal("0.10"),
    WHTType.RENT: Decimal("0.10"),
    WHTType.CONTRACT: Decimal("0.05"),
    WHTType.PROFESSIONAL: Decimal("0.05"),
    WHTType.CONSULTANCY: Decimal("0.05"),
    WHTType.COMMISSION: Decimal("0.05"),
    WHTType.DIRECTOR_FEE: Decimal("0.10"),
    WHTType.SALES_OF_GOODS: Decimal("0.02"),
})


@dataclass(frozen=True)
class WHTResult:
    """Result of a WHT calculation."""
    amount: Decimal
    rate: Decimal
    tax_payable: Decimal
    wht_type: WHTType

    def to_dict(self) -> Dict[str, Any]:
        return {
            "amount": self.amount,
            "rate": self.rate,
            "tax_payable": self.tax_payable,
            "wht_type": self.wht_type.value,
        }


class WHTCalculator:
    """Withholding Tax calculator."""

    @staticmethod
    def parse_type(wht_type: Union[WHTType, str]) -> WHTType:
        """Accept the enum, its value, or its value in any case."""
        if isinstance(wht_type, WHTType):
            return wht_type
        text = str(wht_type).strip().lower()
        for member in WHTType:
            if member.value.lower() == text or member.name.lower() == text:
                return member
        raise InvalidWHTTypeException(wht_type, [member.value for member in WHTType])

    @classmethod
    def compute(cls, amount: Any, wht_type: Union[WHTType, str]) -> WHTResult:
        resolved = cls.parse_type(wht_type)
        base = to_decimal(amount)
        rate = WHT_RATES.get(resolved, ZERO)
        return WHTResult(
            amount=base,
            rate=rate,
            tax_payable=max(ZERO, base) * rate,
            wht_type=resolved,
        )

    @staticmethod
    def get_all_wht_rates() -> List[Dict[str, Any]]:
        """Rate table for display."""
        return [
            {"wht_type": wht_type.value, "rate": rate}
            for wht_type, rate in WHT_RATES.items()
        ]
