"""
Nigeria Tax Engine - Tax Calculator Tests

Unit tests for PIT reliefs and the graduated band walk.
"""

import pytest
from decimal import Decimal

from taxengine.services.tax_calculators import (
    NIGERIA_PIT_BANDS,
    PITBand,
    PITBandTable,
    PITCalculator,
    TaxInput,
    compute_pit,
    get_pit_band,
)
from taxengine.utils.error_handling import ConfigurationException


class TestConsolidatedRelief:
    """Test Consolidated Relief Allowance (CRA)."""

    def test_cra_floor_applies_to_low_income(self, pit_calculator):
        """₦200,000 floor beats 1% of a ₦1M income."""
        cra = pit_calculator.calculate_cra(Decimal("1000000"))

        # max(200,000, 10,000) + 200,000
        assert cra == Decimal("400000")

    def test_cra_one_percent_beats_floor(self, pit_calculator):
        """1% of ₦30M (₦300,000) is above the floor."""
        cra = pit_calculator.calculate_cra(Decimal("30000000"))

        # 300,000 + 6,000,000
        assert cra == Decimal("6300000")

    def test_cra_on_zero_income(self, pit_calculator):
        """Floor still applies when gross income is zero."""
        assert pit_calculator.calculate_cra(Decimal("0")) == Decimal("200000")

    def test_cra_on_negative_income_uses_floor(self, pit_calculator):
        assert pit_calculator.calculate_cra(Decimal("-500000")) == Decimal("200000")


class TestRentRelief:
    """Test rent relief caps."""

    def test_rent_below_cap(self, pit_calculator):
        """Cap is 20% of ₦2M = ₦400,000, rent paid is lower."""
        relief = pit_calculator.calculate_rent_relief(Decimal("2000000"), Decimal("300000"))

        assert relief == Decimal("300000")

    def test_rent_capped_at_twenty_percent(self, pit_calculator):
        relief = pit_calculator.calculate_rent_relief(Decimal("1000000"), Decimal("900000"))

        assert relief == Decimal("200000")

    def test_rent_capped_at_500k(self, pit_calculator):
        """20% of ₦5M is ₦1M, the absolute cap of ₦500,000 wins."""
        relief = pit_calculator.calculate_rent_relief(Decimal("5000000"), Decimal("600000"))

        assert relief == Decimal("500000")

    def test_no_rent_no_relief(self, pit_calculator):
        assert pit_calculator.calculate_rent_relief(Decimal("5000000"), Decimal("0")) == Decimal("0")


class TestPITCalculation:
    """Test PIT band walk."""

    def test_pit_one_million(self):
        """₦1M gross: taxable ₦600,000 across the first two bands."""
        result = compute_pit(gross_income=Decimal("1000000"))

        # CRA = 400,000, taxable = 600,000
        # 300,000 at 7% = 21,000
        # 300,000 at 11% = 33,000
        assert result.taxable_income == Decimal("600000")
        assert result.tax_payable == Decimal("54000")
        assert len(result.bands_applied) == 2
        assert result.effective_rate == Decimal("0.054")

    def test_pit_reaches_top_band(self, salary_income):
        """₦5M gross: taxable ₦3.8M touches every band."""
        result = compute_pit(gross_income=salary_income)

        # CRA = 200,000 + 1,000,000 = 1,200,000, taxable = 3,800,000
        # 21,000 + 33,000 + 75,000 + 95,000 + 336,000 + 144,000
        assert result.cra == Decimal("1200000")
        assert result.taxable_income == Decimal("3800000")
        assert result.tax_payable == Decimal("704000")
        assert [band.rate for band in result.bands_applied] == [
            Decimal("0.07"), Decimal("0.11"), Decimal("0.15"),
            Decimal("0.19"), Decimal("0.21"), Decimal("0.24"),
        ]
        assert result.bands_applied[-1].amount_in_band == Decimal("600000")

    def test_pit_with_rent_relief(self, salary_income):
        result = compute_pit(gross_income=salary_income, actual_rent_paid=Decimal("600000"))

        # Rent relief capped at 500,000, taxable = 3,300,000
        # 560,000 through the first five bands + 100,000 at 24%
        assert result.rent_relief == Decimal("500000")
        assert result.taxable_income == Decimal("3300000")
        assert result.tax_payable == Decimal("584000")

    def test_pit_with_deductions(self):
        result = compute_pit(
            gross_income=Decimal("1000000"),
            allowable_deductions=Decimal("100000"),
        )

        # taxable = 500,000: 21,000 + 200,000 at 11%
        assert result.tax_payable == Decimal("43000")

    def test_pit_with_non_taxable_income(self):
        result = compute_pit({
            "gross_income": Decimal("1000000"),
            "non_taxable_income": Decimal("50000"),
        })

        # taxable = 550,000: 21,000 + 250,000 at 11%
        assert result.total_reliefs == Decimal("450000")
        assert result.tax_payable == Decimal("48500")

    def test_zero_income(self):
        """Gross 0: CRA floor applies, taxable 0, tax 0."""
        result = compute_pit(TaxInput(gross_income=Decimal("0")))

        assert result.cra == Decimal("200000")
        assert result.taxable_income == Decimal("0")
        assert result.tax_payable == Decimal("0")
        assert result.bands_applied == ()
        assert result.effective_rate == Decimal("0")

    def test_negative_income_is_not_taxed(self):
        result = compute_pit(gross_income=Decimal("-250000"))

        assert result.taxable_income == Decimal("0")
        assert result.tax_payable == Decimal("0")

    def test_reliefs_exceeding_income(self):
        """Income below the CRA floor is never taxed."""
        result = compute_pit(gross_income=Decimal("150000"))

        assert result.taxable_income == Decimal("0")
        assert result.tax_payable == Decimal("0")

    def test_numeric_inputs_are_coerced(self):
        result = compute_pit(gross_income=1000000, actual_rent_paid=None)

        assert result.tax_payable == Decimal("54000")

    def test_tax_is_monotonic_in_income(self):
        """Higher gross income never produces lower tax."""
        incomes = [Decimal(step) * Decimal("250000") for step in range(0, 80)]
        taxes = [compute_pit(gross_income=income).tax_payable for income in incomes]

        assert taxes == sorted(taxes)

    @pytest.mark.parametrize("rent,deductions", [
        (Decimal("600000"), Decimal("0")),
        (Decimal("0"), Decimal("100000")),
        (Decimal("450000"), Decimal("250000")),
    ])
    def test_tax_is_monotonic_with_other_fields_fixed(self, rent, deductions):
        """The rent cap moves with gross income; tax still never falls."""
        incomes = [Decimal(step) * Decimal("125000") for step in range(0, 120)]
        taxes = [
            compute_pit(
                gross_income=income,
                actual_rent_paid=rent,
                allowable_deductions=deductions,
            ).tax_payable
            for income in incomes
        ]

        assert taxes == sorted(taxes)

    def test_negative_relief_does_not_create_tax(self):
        """A negative non-taxable amount is treated as none."""
        result = compute_pit(gross_income=Decimal("0"), non_taxable_income=Decimal("-5000000"))

        assert result.total_reliefs == Decimal("200000")
        assert result.taxable_income == Decimal("0")
        assert result.tax_payable == Decimal("0")

    def test_negative_deduction_is_ignored(self):
        result = compute_pit(
            gross_income=Decimal("1000000"),
            allowable_deductions=Decimal("-1000000"),
        )

        assert result.taxable_income == Decimal("600000")
        assert result.tax_payable == Decimal("54000")

    def test_negative_gross_with_negative_reliefs(self):
        result = compute_pit(
            gross_income=Decimal("-100000"),
            allowable_deductions=Decimal("-300000"),
            non_taxable_income=Decimal("-300000"),
            actual_rent_paid=Decimal("-50000"),
        )

        assert result.tax_payable == Decimal("0")

    def test_calculation_is_repeatable(self, pit_calculator):
        tax_input = TaxInput(gross_income=Decimal("7250000"), actual_rent_paid=Decimal("400000"))

        assert pit_calculator.compute(tax_input) == pit_calculator.compute(tax_input)

    def test_band_sum_matches_total(self, pit_calculator):
        result = pit_calculator.compute(TaxInput(gross_income=Decimal("12345678")))

        assert sum(band.tax_in_band for band in result.bands_applied) == result.tax_payable
        assert sum(band.amount_in_band for band in result.bands_applied) == result.taxable_income

    def test_result_to_dict(self):
        data = compute_pit(gross_income=Decimal("1000000")).to_dict()

        assert data["tax_payable"] == Decimal("54000")
        assert len(data["bands_applied"]) == 2
        assert data["is_exempt"] is False


class TestPITBand:
    """Test marginal band labels."""

    @pytest.mark.parametrize("taxable,expected", [
        (Decimal("0"), "Nil"),
        (Decimal("300000"), "7%"),
        (Decimal("300001"), "11%"),
        (Decimal("1100000"), "15%"),
        (Decimal("1600000"), "19%"),
        (Decimal("3200000"), "21%"),
        (Decimal("5000000"), "24%"),
    ])
    def test_band_labels(self, taxable, expected):
        assert get_pit_band(taxable) == expected


class TestPITBandTable:
    """Test band table injection and validation."""

    def test_custom_table(self):
        """The band walk follows whatever table it is given."""
        table = PITBandTable(
            bands=(
                PITBand(Decimal("100000"), Decimal("0.10")),
                PITBand(None, Decimal("0.20")),
            ),
            cra_floor=Decimal("0"),
            cra_floor_rate=Decimal("0"),
            cra_rate=Decimal("0"),
        )
        result = PITCalculator(table).compute(TaxInput(gross_income=Decimal("300000")))

        # 100,000 at 10% + 200,000 at 20%
        assert result.tax_payable == Decimal("50000")

    def test_exemption_threshold(self):
        """Optional outright exemption for low earners."""
        calculator = PITCalculator(PITBandTable(
            bands=NIGERIA_PIT_BANDS,
            exemption_threshold=Decimal("800000"),
        ))

        exempt = calculator.compute(TaxInput(gross_income=Decimal("800000")))
        taxed = calculator.compute(TaxInput(gross_income=Decimal("1000000")))

        assert exempt.is_exempt is True
        assert exempt.tax_payable == Decimal("0")
        assert taxed.is_exempt is False
        assert taxed.tax_payable == Decimal("54000")

    def test_default_table_has_no_exemption(self, pit_calculator):
        result = pit_calculator.compute(TaxInput(gross_income=Decimal("700000")))

        assert result.is_exempt is False

    def test_empty_table_rejected(self):
        with pytest.raises(ConfigurationException):
            PITBandTable(bands=())

    def test_unbounded_band_must_be_last(self):
        with pytest.raises(ConfigurationException):
            PITBandTable(bands=(
                PITBand(None, Decimal("0.10")),
                PITBand(Decimal("100000"), Decimal("0.20")),
            ))

    def test_final_band_must_be_unbounded(self):
        with pytest.raises(ConfigurationException):
            PITBandTable(bands=(PITBand(Decimal("100000"), Decimal("0.10")),))

    def test_rate_must_be_fraction(self):
        """Percentages like 7 instead of 0.07 are rejected."""
        with pytest.raises(ConfigurationException):
            PITBandTable(bands=(PITBand(None, Decimal("7")),))
