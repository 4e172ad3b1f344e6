"""
Nigeria Tax Engine - Personal Income Tax Calculator

Personal Income Tax (PIT) computed over graduated bands.

Nigeria PIT Bands (width of each slice of chargeable income):
- First ₦300,000: 7%
- Next ₦300,000: 11%
- Next ₦500,000: 15%
- Next ₦500,000: 19%
- Next ₦1,600,000: 21%
- Above ₦3,200,000: 24%

Reliefs:
- Consolidated Relief Allowance (CRA): higher of ₦200,000 or 1% of gross
  income, plus 20% of gross income
- Rent relief: actual rent paid, capped at the lower of 20% of gross income
  and ₦500,000
- Non-taxable income (pension, NHF, NHIS) is deducted as a relief

The band table is reference data. Pass a different PITBandTable to
PITCalculator when legislation changes; the band walk does not change.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from taxengine.utils.error_handling import ConfigurationException

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """Coerce an amount to Decimal; None counts as zero."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class PITBand:
    """A slice of chargeable income taxed at one rate. width=None is unbounded."""
    width: Optional[Decimal]
    rate: Decimal

    def taxable_slice(self, remaining: Decimal) -> Decimal:
        """Portion of the remaining income that falls inside this band."""
        if remaining <= 0:
            return ZERO
        if self.width is None:
            return remaining
        return min(remaining, self.width)


@dataclass(frozen=True)
class PITBandTable:
    """Legislative reference data for PIT: bands plus relief parameters."""
    bands: Tuple[PITBand, ...]
    cra_floor: Decimal = Decimal("200000")
    cra_floor_rate: Decimal = Decimal("0.01")
    cra_rate: Decimal = Decimal("0.20")
    rent_relief_rate: Decimal = Decimal("0.20")
    rent_relief_cap: Decimal = Decimal("500000")
    # Gross income at or below this is exempt outright. None disables it.
    exemption_threshold: Optional[Decimal] = None

    def __post_init__(self):
        if not self.bands:
            raise ConfigurationException("PIT band table has no bands")
        for index, band in enumerate(self.bands):
            is_last = index == len(self.bands) - 1
            if band.width is None and not is_last:
                raise ConfigurationException(
                    "Only the final PIT band may be unbounded",
                    details={"band_index": index},
                )
            if band.width is not None and band.width <= 0:
                raise ConfigurationException(
                    "PIT band width must be positive",
                    details={"band_index": index, "width": str(band.width)},
                )
            if not ZERO <= band.rate <= 1:
                raise ConfigurationException(
                    "PIT band rate must be a fraction between 0 and 1",
                    details={"band_index": index, "rate": str(band.rate)},
                )
        if self.bands[-1].width is not None:
            raise ConfigurationException("Final PIT band must be unbounded")


NIGERIA_PIT_BANDS: Tuple[PITBand, ...] = (
    PITBand(Decimal("300000"), Decimal("0.07")),
    PITBand(Decimal("300000"), Decimal("0.11")),
    PITBand(Decimal("500000"), Decimal("0.15")),
    PITBand(Decimal("500000"), Decimal("0.19")),
    PITBand(Decimal("1600000"), Decimal("0.21")),
    PITBand(None, Decimal("0.24")),
)

NIGERIA_PIT_TABLE = PITBandTable(bands=NIGERIA_PIT_BANDS)


@dataclass(frozen=True)
class TaxInput:
    """Figures for one PIT calculation. All amounts in Naira."""
    gross_income: Decimal
    allowable_deductions: Decimal = ZERO
    non_taxable_income: Decimal = ZERO
    actual_rent_paid: Decimal = ZERO

    def __post_init__(self):
        for name in ("gross_income", "allowable_deductions", "non_taxable_income", "actual_rent_paid"):
            object.__setattr__(self, name, to_decimal(getattr(self, name)))


@dataclass(frozen=True)
class BandApplied:
    """One step of the band walk, kept for audit."""
    rate: Decimal
    amount_in_band: Decimal
    tax_in_band: Decimal


@dataclass(frozen=True)
class TaxResult:
    """Result of a PIT calculation."""
    taxable_income: Decimal
    tax_payable: Decimal
    bands_applied: Tuple[BandApplied, ...] = ()
    gross_income: Decimal = ZERO
    cra: Decimal = ZERO
    rent_relief: Decimal = ZERO
    total_reliefs: Decimal = ZERO
    effective_rate: Decimal = ZERO
    is_exempt: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gross_income": self.gross_income,
            "cra": self.cra,
            "rent_relief": self.rent_relief,
            "total_reliefs": self.total_reliefs,
            "taxable_income": self.taxable_income,
            "tax_payable": self.tax_payable,
            "effective_rate": self.effective_rate,
            "is_exempt": self.is_exempt,
            "bands_applied": [
                {
                    "rate": band.rate,
                    "amount_in_band": band.amount_in_band,
                    "tax_in_band": band.tax_in_band,
                }
                for band in self.bands_applied
            ],
        }


class PITCalculator:
    """
    Personal Income Tax calculator for the Nigerian tax system.

    Stateless apart from the injected band table, so one instance can be
    shared by every caller.
    """

    def __init__(self, table: PITBandTable = NIGERIA_PIT_TABLE):
        self.table = table

    def calculate_cra(self, gross_income: Decimal) -> Decimal:
        """
        Calculate Consolidated Relief Allowance (CRA).

        CRA = higher of ₦200,000 or 1% of gross income, plus 20% of gross income
        """
        base = max(ZERO, to_decimal(gross_income))
        fixed_relief = max(self.table.cra_floor, base * self.table.cra_floor_rate)
        return fixed_relief + base * self.table.cra_rate

    def calculate_rent_relief(self, gross_income: Decimal, actual_rent_paid: Decimal) -> Decimal:
        """Rent actually paid, capped at min(20% of gross, ₦500,000)."""
        base = max(ZERO, to_decimal(gross_income))
        cap = min(base * self.table.rent_relief_rate, self.table.rent_relief_cap)
        return max(ZERO, min(to_decimal(actual_rent_paid), cap))

    def calculate_taxable_income(self, tax_input: TaxInput) -> Tuple[Decimal, Dict[str, Decimal]]:
        """
        Calculate taxable income after deductions and reliefs.

        Returns:
            Tuple of (taxable_income, relief_breakdown)
        """
        # Negative deductions or reliefs would raise taxable income above gross
        deductions = max(ZERO, tax_input.allowable_deductions)
        non_taxable_income = max(ZERO, tax_input.non_taxable_income)

        cra = self.calculate_cra(tax_input.gross_income)
        rent_relief = self.calculate_rent_relief(tax_input.gross_income, tax_input.actual_rent_paid)
        total_reliefs = cra + rent_relief + non_taxable_income

        taxable_income = max(
            ZERO,
            tax_input.gross_income - deductions - total_reliefs,
        )

        relief_breakdown = {
            "consolidated_relief": cra,
            "rent_relief": rent_relief,
            "non_taxable_income": non_taxable_income,
            "total_reliefs": total_reliefs,
        }
        return taxable_income, relief_breakdown

    def calculate_tax(self, taxable_income: Decimal) -> Tuple[Decimal, Tuple[BandApplied, ...]]:
        """
        Walk the bands, taxing each slice at its own rate.

        Returns:
            Tuple of (total_tax, bands_applied)
        """
        remaining = max(ZERO, to_decimal(taxable_income))
        total_tax = ZERO
        applied = []

        for band in self.table.bands:
            if remaining <= 0:
                break
            amount_in_band = band.taxable_slice(remaining)
            tax_in_band = amount_in_band * band.rate
            applied.append(BandApplied(band.rate, amount_in_band, tax_in_band))
            total_tax += tax_in_band
            remaining -= amount_in_band

        return total_tax, tuple(applied)

    def compute(self, tax_input: TaxInput) -> TaxResult:
        """Complete PIT calculation with reliefs and band breakdown."""
        gross = tax_input.gross_income
        threshold = self.table.exemption_threshold

        if threshold is not None and gross <= threshold:
            logger.debug(f"PIT exempt: gross {gross} <= threshold {threshold}")
            return TaxResult(
                taxable_income=ZERO,
                tax_payable=ZERO,
                gross_income=gross,
                is_exempt=True,
            )

        taxable_income, reliefs = self.calculate_taxable_income(tax_input)
        tax_payable, bands_applied = self.calculate_tax(taxable_income)
        effective_rate = (tax_payable / gross) if gross > 0 else ZERO

        logger.debug(
            f"PIT computed: gross={gross} taxable={taxable_income} tax={tax_payable}"
        )

        return TaxResult(
            taxable_income=taxable_income,
            tax_payable=tax_payable,
            bands_applied=bands_applied,
            gross_income=gross,
            cra=reliefs["consolidated_relief"],
            rent_relief=reliefs["rent_relief"],
            total_reliefs=reliefs["total_reliefs"],
            effective_rate=effective_rate,
        )

    def get_band_label(self, taxable_income: Decimal) -> str:
        """Marginal rate label for a level of taxable income."""
        remaining = to_decimal(taxable_income)
        if remaining <= 0:
            return "Nil"
        for band in self.table.bands:
            if band.width is None or remaining <= band.width:
                return f"{band.rate * 100:.0f}%"
            remaining -= band.width
        return f"{self.table.bands[-1].rate * 100:.0f}%"
