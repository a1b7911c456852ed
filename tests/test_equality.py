"""Tests for indicator equality, validity and immutability."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from indicator_engine import (
    BB,
    CCI,
    CD,
    DEMA,
    EMA,
    HMA,
    RSI,
    SMA,
    SRSI,
    WMA,
    Aroon,
    InvalidIndicatorError,
    InvalidLengthError,
    InvalidOffsetError,
)


class TestEquality:
    """Tests for structural equality and hashing."""

    def test_reflexive(self):
        """Test an indicator equals itself."""
        sma = SMA(length=3)
        assert sma.equal(sma)
        assert sma == sma

    def test_same_configuration(self):
        """Test separately built indicators with one configuration are equal."""
        assert SMA(length=3, offset=1) == SMA(length=3, offset=1)

    def test_different_length(self):
        """Test a different length breaks equality."""
        assert SMA(length=3) != SMA(length=4)

    def test_different_offset(self):
        """Test a different offset breaks equality."""
        assert not SMA(length=3).equal(SMA(length=3, offset=1))

    def test_different_variant(self):
        """Variants with identical fields are never equal."""
        assert not SMA(length=3).equal(EMA(length=3))
        assert not EMA(length=3).equal(WMA(length=3))
        assert SMA(length=3) != EMA(length=3)

    def test_different_trend(self):
        """Test Aroon trends take part in equality."""
        assert Aroon(trend="up", length=5) != Aroon(trend="down", length=5)

    def test_equivalent_decimals(self):
        """Test numerically equal decimals compare and hash alike."""
        a = BB(band="upper", length=5, standard_deviations=Decimal("2"))
        b = BB(band="upper", length=5, standard_deviations=Decimal("2.0"))
        assert a == b
        assert hash(a) == hash(b)

    def test_nested_sources(self):
        """Test nested sources are compared recursively."""
        a = CD(source1=DEMA(ema=EMA(length=3)), source2=HMA(wma=WMA(length=4)))
        b = CD(source1=DEMA(ema=EMA(length=3)), source2=HMA(wma=WMA(length=4)))
        c = CD(source1=DEMA(ema=EMA(length=3)), source2=HMA(wma=WMA(length=5)))

        assert a == b
        assert a != c

    def test_swapped_sources(self):
        """Test CD sources are compared by position."""
        a = CD(source1=SMA(length=2), source2=SMA(length=3))
        b = CD(source1=SMA(length=3), source2=SMA(length=2))
        assert a != b

    def test_different_factor(self):
        """Test the CCI factor takes part in equality."""
        a = CCI(source=SMA(length=3))
        b = CCI(source=SMA(length=3), factor=Decimal("0.02"))
        assert a != b

    def test_default_factor_matches_explicit(self):
        """Test a defaulted CCI factor equals the same explicit factor."""
        a = CCI(source=SMA(length=3))
        b = CCI(source=SMA(length=3), factor=Decimal("0.015"))
        assert a == b

    def test_not_equal_to_other_types(self):
        """Test comparing with non-indicators is false, not an error."""
        assert SMA(length=3) != "sma"
        assert SMA(length=3) != {"name": "sma", "length": 3, "offset": 0}

    def test_set_deduplication(self):
        """Test equal configurations collapse in a set."""
        indicators = {SMA(length=3), SMA(length=3), EMA(length=3), SMA(length=4)}
        assert len(indicators) == 3


class TestValidity:
    """Tests for the validity flag set by construction."""

    def test_constructed_indicator_is_valid(self):
        """Test validated construction marks the indicator valid."""
        assert SMA(length=3).valid

    def test_unvalidated_indicator_refuses_calc(self):
        """Test an indicator built without validation cannot calculate."""
        sma = SMA.model_construct(length=3)

        assert not sma.valid
        with pytest.raises(InvalidIndicatorError):
            sma.calc([Decimal(1)] * 3)

    def test_unvalidated_composite_refuses_calc(self):
        """Test a composite built without validation cannot calculate."""
        dema = DEMA.model_construct(ema=EMA(length=3))

        with pytest.raises(InvalidIndicatorError):
            dema.calc([Decimal(1)] * 5)

    def test_validity_checked_before_data(self):
        """Test validity is checked before the amount of data."""
        with pytest.raises(InvalidIndicatorError):
            SMA.model_construct(length=3).calc([])

    def test_unvalidated_not_equal_to_valid(self):
        """Test an unvalidated instance never equals a validated one."""
        assert SMA.model_construct(length=3, offset=0) != SMA(length=3)
        assert SMA(length=3) != SMA.model_construct(length=3, offset=0)

    def test_compare_with_empty_unvalidated(self):
        """Test comparing with an instance missing its fields is false."""
        assert SMA(length=3) != SMA.model_construct()
        assert not SMA(length=3).equal(SMA.model_construct())

    def test_unvalidated_equals_itself(self):
        """Test an unvalidated instance is still equal to itself."""
        sma = SMA.model_construct()
        assert sma.equal(sma)

    def test_copy_with_invalid_update(self):
        """Test updated copies are validated like new instances."""
        with pytest.raises(InvalidLengthError):
            SMA(length=3).model_copy(update={"length": 0})

        with pytest.raises(InvalidOffsetError):
            EMA(length=3).model_copy(update={"offset": -1})

    def test_copy_with_valid_update(self):
        """Test a valid update yields a usable copy."""
        sma = SMA(length=3).model_copy(update={"length": 2})

        assert sma.valid
        assert sma == SMA(length=2)
        assert sma.calc([Decimal(v) for v in (1, 2, 3)]) == Decimal("2.5")

    def test_copy_without_update(self):
        """Test a plain copy keeps configuration and validity."""
        original = SRSI(rsi=RSI(length=3))
        copied = original.model_copy()

        assert copied.valid
        assert copied == original
        assert not SMA.model_construct(length=3).model_copy().valid

    def test_nested_source_left_untouched(self):
        """Test building a composite does not validate the caller's source."""
        ema = EMA.model_construct(length=3, offset=0)
        dema = DEMA(ema=ema)

        assert not ema.valid
        assert dema.ema.valid
        assert dema.ema is not ema

    def test_nested_source_still_validated(self):
        """Test an invalid unvalidated source fails composite construction."""
        with pytest.raises(InvalidLengthError):
            HMA(wma=WMA.model_construct(length=0, offset=0))

    def test_immutable(self):
        """Test indicators cannot be modified after construction."""
        sma = SMA(length=3)

        with pytest.raises(ValidationError):
            sma.length = 4

        assert sma.length == 3
