"""Test the Integer/Float value model."""
import pytest

from linebasic.errors import BasicRuntimeError, ErrorCode
from linebasic.language.values import Float, Integer, Number, format_float


class TestArithmetic:
    """Tests for promotion rules."""

    def test_integer_arithmetic_stays_integer(self):
        """Test that Integer op Integer gives an Integer."""
        result = Integer(7) + Integer(5)
        assert isinstance(result, Integer)
        assert result.value == 12
        assert isinstance(Integer(7) * Integer(5), Integer)
        assert isinstance(Integer(7) - Integer(5), Integer)

    def test_float_operand_promotes(self):
        """Test that any Float operand promotes the result to Float."""
        assert isinstance(Integer(1) + Float(0.5), Float)
        assert isinstance(Float(0.5) * Integer(2), Float)
        assert (Float(0.5) * Integer(2)).value == 1.0

    def test_integer_division_truncates_toward_zero(self):
        """Test integer division."""
        assert (Integer(7) / Integer(2)).value == 3
        assert (Integer(-7) / Integer(2)).value == -3
        assert (Integer(7) / Integer(-2)).value == -3
        assert (Integer(-7) / Integer(-2)).value == 3
        assert isinstance(Integer(7) / Integer(2), Integer)

    def test_float_division(self):
        """Test division with a Float operand."""
        result = Integer(7) / Float(2.0)
        assert isinstance(result, Float)
        assert result.value == 3.5

    def test_division_by_zero(self):
        """Test that division by zero is a runtime error."""
        with pytest.raises(BasicRuntimeError) as exc_info:
            Integer(1) / Integer(0)
        assert exc_info.value.code == ErrorCode.DIVIDE_BY_ZERO

        with pytest.raises(BasicRuntimeError):
            Float(1.5) / Float(0.0)

    def test_negation_keeps_variant(self):
        """Test unary negation."""
        assert -Integer(3) == Integer(-3)
        assert isinstance(-Float(1.5), Float)


class TestComparison:
    """Tests for equality and ordering across variants."""

    def test_equal_across_variants(self):
        """Test that equality compares the promoted value."""
        assert Integer(3) == Float(3.0)
        assert Integer(3) != Float(3.5)

    def test_ordering_across_variants(self):
        """Test ordering between Integer and Float."""
        assert Integer(2) < Float(2.5)
        assert Float(2.5) <= Integer(3)
        assert Integer(3) > Float(2.5)
        assert Integer(3) >= Float(3.0)

    def test_hash_consistent_with_eq(self):
        """Test that equal numbers hash alike."""
        assert hash(Integer(3)) == hash(Float(3.0))


class TestConversion:
    """Tests for conversion helpers."""

    def test_of(self):
        """Test wrapping Python numbers."""
        assert isinstance(Number.of(3), Integer)
        assert isinstance(Number.of(3.0), Float)

    def test_int_value(self):
        """Test int_value on each variant."""
        assert Integer(4).int_value() == 4
        with pytest.raises(BasicRuntimeError):
            Float(4.0).int_value()

    def test_truncate(self):
        """Test truncation toward zero."""
        assert Float(2.7).truncate() == Integer(2)
        assert isinstance(Float(-2.7).truncate(), Integer)
        assert Float(-2.7).truncate().value == -2
        assert Integer(5).truncate() is not None

    def test_str(self):
        """Test rendering of each variant."""
        assert str(Integer(42)) == "42"
        assert str(Float(3.0)) == "3.0"
        assert str(Float(0.25)) == "0.25"

    def test_format_float_positional(self):
        """Test that floats never render in exponent form."""
        assert format_float(1e16) == "10000000000000000.0"
        assert format_float(1e-7) == "0.0000001"


class TestOverflow:
    """Tests for values that don't fit the target representation."""

    def test_truncate_infinity(self):
        """Test that INT of an infinite Float is a runtime error."""
        with pytest.raises(BasicRuntimeError) as exc_info:
            Float(float("inf")).truncate()
        assert exc_info.value.code == ErrorCode.OVERFLOW

    def test_truncate_nan(self):
        """Test that INT of NaN is a runtime error."""
        with pytest.raises(BasicRuntimeError):
            Float(float("nan")).truncate()

    def test_huge_integer_with_float(self):
        """Test promoting an Integer too large for a float."""
        huge = Integer(int("1" * 400))
        with pytest.raises(BasicRuntimeError) as exc_info:
            huge * Float(1.0)
        assert exc_info.value.code == ErrorCode.OVERFLOW

        with pytest.raises(BasicRuntimeError):
            Float(1.0) / huge

    def test_huge_integer_arithmetic_stays_exact(self):
        """Test that Integer-only arithmetic has no overflow."""
        huge = Integer(int("1" * 400))
        assert (huge * Integer(2)).value == int("2" * 400)
