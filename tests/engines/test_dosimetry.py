"""
Tests for the three-phase sentence calculator.

Covers:
- Phase 2 circumstances and the legal-range clamp
- Phase 3 causes escaping the legal range
- Regime classification at the thresholds
- Fraction coercion and validation
- Years-to-text rendering
"""

from decimal import Decimal
from fractions import Fraction

import pytest

from juris_engines.dosimetry import (
    CrimeRecord,
    DosimetryCalculator,
    DosimetryInput,
    PenaltyFraction,
    PrisonRegime,
    classify_regime,
    format_years,
    to_decimal,
)
from juris_kernel.exceptions import (
    DisallowedValueError,
    InvalidPenaltyRangeError,
    NegativeValueError,
    PenaltyOutOfRangeError,
)

THEFT = CrimeRecord(penalty_min=1, penalty_max=4, article="Art. 155, caput", name="Furto")
HOMICIDE = CrimeRecord(penalty_min=6, penalty_max=20, article="Art. 121, caput")


class TestPhases:
    """Tests for the phase pipeline."""

    def setup_method(self):
        self.calculator = DosimetryCalculator()

    def test_base_only(self):
        result = self.calculator.compute(DosimetryInput(crime=THEFT, base_penalty=2))

        assert result.phase1 == result.phase2 == result.phase3 == Fraction(2)
        assert result.regime is PrisonRegime.OPEN

    def test_aggravating_sixths(self):
        """Two aggravating circumstances add 2/6 of the base."""
        result = self.calculator.compute(
            DosimetryInput(crime=HOMICIDE, base_penalty=6, aggravating_count=2),
        )

        assert result.phase2 == Fraction(8)

    def test_mitigating_clamped_at_minimum(self):
        result = self.calculator.compute(
            DosimetryInput(crime=HOMICIDE, base_penalty=6, mitigating_count=1),
        )

        assert result.phase2 == Fraction(6)

    def test_aggravating_clamped_at_maximum(self):
        result = self.calculator.compute(
            DosimetryInput(crime=THEFT, base_penalty=4, aggravating_count=3),
        )

        assert result.phase2 == Fraction(4)

    def test_circumstances_cancel(self):
        result = self.calculator.compute(
            DosimetryInput(crime=THEFT, base_penalty=3, aggravating_count=2, mitigating_count=2),
        )

        assert result.phase2 == Fraction(3)

    def test_increase_escapes_maximum(self):
        """
        [1, 4] with base 4 doubled reaches 8, above the legal maximum.

        The closed regime needs a penalty strictly above 8 years, so exactly 8
        stays semi-open even though a commonly cited worked example labels it
        closed.
        """
        result = self.calculator.compute(
            DosimetryInput(crime=THEFT, base_penalty=4, increase_fraction="1"),
        )

        assert result.phase2 == Fraction(4)
        assert result.phase3 == Fraction(8)
        assert result.phase3 > THEFT.penalty_max
        # Exactly 8 years is not above the closed-regime threshold.
        assert result.regime is PrisonRegime.SEMI_OPEN

    def test_increase_then_decrease(self):
        """8 * 4/3 * 1/2 = 16/3."""
        result = self.calculator.compute(
            DosimetryInput(
                crime=HOMICIDE,
                base_penalty=6,
                aggravating_count=2,
                increase_fraction=PenaltyFraction.ONE_THIRD,
                decrease_fraction=PenaltyFraction.HALF,
            ),
        )

        assert result.phase3 == Fraction(16, 3)
        assert result.final_penalty == result.phase3
        assert result.regime is PrisonRegime.SEMI_OPEN

    def test_decrease_escapes_minimum(self):
        result = self.calculator.compute(
            DosimetryInput(crime=THEFT, base_penalty=1, decrease_fraction="2/3"),
        )

        assert result.phase3 == Fraction(1, 3)
        assert result.phase3 < THEFT.penalty_min

    def test_closed_regime(self):
        crime = CrimeRecord(penalty_min=1, penalty_max=5)
        result = self.calculator.compute(
            DosimetryInput(crime=crime, base_penalty=5, increase_fraction="1"),
        )

        assert result.phase3 == Fraction(10)
        assert result.regime is PrisonRegime.CLOSED

    def test_fractional_range(self):
        """Bodily harm ranges from three months to one year."""
        crime = CrimeRecord(penalty_min=Decimal("0.25"), penalty_max=1)
        result = self.calculator.compute(DosimetryInput(crime=crime, base_penalty="0.25"))

        assert result.phase1 == Fraction(1, 4)


class TestMonotonicity:
    """Circumstance counts move phase 2 in one direction only."""

    def setup_method(self):
        self.calculator = DosimetryCalculator()

    def test_more_aggravating_never_lowers_phase2(self):
        phases = [
            self.calculator.compute(
                DosimetryInput(crime=HOMICIDE, base_penalty=9, aggravating_count=n),
            ).phase2
            for n in range(0, 12)
        ]

        assert phases == sorted(phases)
        assert phases[-1] == HOMICIDE.penalty_max

    def test_more_mitigating_never_below_minimum(self):
        phases = [
            self.calculator.compute(
                DosimetryInput(crime=HOMICIDE, base_penalty=9, mitigating_count=n),
            ).phase2
            for n in range(0, 12)
        ]

        assert phases == sorted(phases, reverse=True)
        assert min(phases) == HOMICIDE.penalty_min


class TestRegime:
    """Tests for the regime thresholds."""

    def test_four_years_is_open(self):
        assert classify_regime(Fraction(4)) is PrisonRegime.OPEN

    def test_just_above_four_is_semi_open(self):
        assert classify_regime(Fraction(25, 6)) is PrisonRegime.SEMI_OPEN

    def test_eight_years_is_semi_open(self):
        assert classify_regime(Fraction(8)) is PrisonRegime.SEMI_OPEN

    def test_just_above_eight_is_closed(self):
        assert classify_regime(Fraction(49, 6)) is PrisonRegime.CLOSED


class TestValidation:
    """Invalid requests are rejected before any phase runs."""

    def setup_method(self):
        self.calculator = DosimetryCalculator()

    def test_base_above_maximum(self):
        with pytest.raises(PenaltyOutOfRangeError) as exc_info:
            self.calculator.compute(DosimetryInput(crime=THEFT, base_penalty=5))

        assert exc_info.value.penalty_max == "4"

    def test_base_below_minimum(self):
        with pytest.raises(PenaltyOutOfRangeError):
            self.calculator.compute(DosimetryInput(crime=THEFT, base_penalty="0.5"))

    def test_inverted_range(self):
        crime = CrimeRecord(penalty_min=5, penalty_max=2)
        with pytest.raises(InvalidPenaltyRangeError):
            self.calculator.compute(DosimetryInput(crime=crime, base_penalty=3))

    def test_negative_counts(self):
        with pytest.raises(NegativeValueError):
            self.calculator.compute(
                DosimetryInput(crime=THEFT, base_penalty=2, aggravating_count=-1),
            )
        with pytest.raises(NegativeValueError):
            self.calculator.compute(
                DosimetryInput(crime=THEFT, base_penalty=2, mitigating_count=-1),
            )

    def test_full_decrease_rejected(self):
        """A decrease of the whole penalty is not a legal fraction."""
        with pytest.raises(DisallowedValueError) as exc_info:
            self.calculator.compute(
                DosimetryInput(crime=THEFT, base_penalty=2, decrease_fraction="1"),
            )

        assert exc_info.value.field_name == "decrease_fraction"
        assert "1" not in exc_info.value.allowed

    def test_unlisted_fraction_rejected(self):
        with pytest.raises(DisallowedValueError):
            DosimetryInput(crime=THEFT, base_penalty=2, increase_fraction="3/4")


class TestPenaltyFraction:
    """Tests for fraction coercion."""

    def test_coerce_literal(self):
        assert PenaltyFraction.coerce("1/6", "f") is PenaltyFraction.ONE_SIXTH

    def test_coerce_rational(self):
        assert PenaltyFraction.coerce(Fraction(2, 3), "f") is PenaltyFraction.TWO_THIRDS

    def test_coerce_integer(self):
        assert PenaltyFraction.coerce(0, "f") is PenaltyFraction.NONE

    def test_ratio(self):
        assert PenaltyFraction.HALF.ratio == Fraction(1, 2)

    def test_boolean_rejected(self):
        with pytest.raises(DisallowedValueError):
            PenaltyFraction.coerce(True, "f")


class TestFormatting:
    """Tests for the display helpers."""

    def test_years_and_months(self):
        assert format_years(Fraction(7, 2)) == "3 ano(s) e 6 mês(es)"

    def test_whole_years(self):
        assert format_years(2) == "2 ano(s)"

    def test_months_only(self):
        assert format_years(Fraction(1, 4)) == "3 mês(es)"

    def test_zero(self):
        assert format_years(0) == "0"

    def test_thirds(self):
        assert format_years(Fraction(16, 3)) == "5 ano(s) e 4 mês(es)"

    def test_to_decimal(self):
        assert to_decimal(Fraction(16, 3)) == Decimal("5.3333")
