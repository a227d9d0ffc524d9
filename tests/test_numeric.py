"""
Test suite for std_numeric() and std_quantity() - stdlib types, duck-typed numerics and NumPy.
"""

import math
from decimal import Decimal
from fractions import Fraction

import pytest

# Local ----------------------------------------------------------------------------------------------------------------

from datasize.numeric import std_numeric, std_quantity


class TestStdNumericBasicTypes:
    """Test standard Python numeric types."""

    @pytest.mark.parametrize(
        "value, expected, expected_type",
        [
            pytest.param(42, 42, int, id="int"),
            pytest.param(3.25, 3.25, float, id="float"),
            pytest.param(10 ** 400, 10 ** 400, int, id="huge-int"),
            pytest.param(-123, -123, int, id="negative-int"),
            pytest.param(math.inf, math.inf, float, id="inf"),
            pytest.param(Decimal("3.5"), 3.5, float, id="decimal"),
            pytest.param(Fraction(1, 4), 0.25, float, id="fraction"),
        ],
    )
    def test_preserve_value_type(self, value, expected, expected_type):
        """Preserve values and types for supported numerics."""
        res = std_numeric(value)
        assert res == expected
        assert isinstance(res, expected_type)

    def test_nan_preserved(self):
        assert math.isnan(std_numeric(math.nan))


class TestStdNumericErrorHandling:
    """Unsupported types raise or return None depending on on_error."""

    @pytest.mark.parametrize(
        "invalid_value",
        [
            pytest.param(True, id="bool-true"),
            pytest.param(False, id="bool-false"),
            pytest.param(None, id="none"),
            pytest.param("42", id="str"),
            pytest.param(b"42", id="bytes"),
            pytest.param([1], id="list"),
            pytest.param({"a": 1}, id="dict"),
            pytest.param(object(), id="object"),
        ],
    )
    def test_invalid_type(self, invalid_value):
        with pytest.raises(TypeError, match=r"unsupported numeric type"):
            std_numeric(invalid_value)
        assert std_numeric(invalid_value, on_error="none") is None


# Sentinel classes to validate duck-typing priority without third-party deps
class _IndexOnly:
    def __index__(self):
        return 7


class _ItemReturningFloat:
    def __init__(self, v): self._v = v

    def item(self): return self._v


class _FloatOnly:
    def __float__(self): return 2.5


class _BrokenFloat:
    def __float__(self): raise ValueError("broken")


class TestStdNumericDuckTypingPriority:
    """Ensure duck-typing order (__index__, .item(), __float__)."""

    def test_index_precedence_over_float(self):
        class _Both:
            def __index__(self): return 11

            def __float__(self): return 3.0

        res = std_numeric(_Both())
        assert res == 11 and isinstance(res, int)

    def test_item_used_when_present(self):
        res = std_numeric(_ItemReturningFloat(4.75))
        assert isinstance(res, float) and res == 4.75

    def test_item_returning_bool_ignored(self):
        assert std_numeric(_ItemReturningFloat(True), on_error="none") is None

    def test_index_only(self):
        res = std_numeric(_IndexOnly())
        assert res == 7 and isinstance(res, int)

    def test_float_only(self):
        res = std_numeric(_FloatOnly())
        assert isinstance(res, float) and res == 2.5

    def test_broken_float(self):
        with pytest.raises(TypeError, match=r"cannot convert"):
            std_numeric(_BrokenFloat())
        assert std_numeric(_BrokenFloat(), on_error="none") is None


class TestStdQuantity:
    """Finite float quantities for DataSize."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(1024, 1024.0, id="int"),
            pytest.param(-1.5, -1.5, id="negative-float"),
            pytest.param(Decimal("0.125"), 0.125, id="decimal"),
            pytest.param(Fraction(1, 2), 0.5, id="fraction"),
            pytest.param(_IndexOnly(), 7.0, id="index"),
        ],
    )
    def test_convert(self, value, expected):
        res = std_quantity(value)
        assert res == expected
        assert isinstance(res, float)

    @pytest.mark.parametrize(
        "value, match",
        [
            pytest.param(math.nan, r"must not be NaN", id="nan"),
            pytest.param(math.inf, r"must be finite", id="inf"),
            pytest.param(-math.inf, r"must be finite", id="-inf"),
            pytest.param(Decimal("1e400"), r"must be finite", id="decimal-overflow"),
            pytest.param(10 ** 400, r"out of float range", id="int-overflow"),
        ],
    )
    def test_non_finite(self, value, match):
        with pytest.raises(ValueError, match=match):
            std_quantity(value)

    @pytest.mark.parametrize("value", [True, None, "1", [1.0]])
    def test_non_numeric(self, value):
        with pytest.raises(TypeError, match=r"size must be"):
            std_quantity(value, name="size")


# Integration Tests ----------------------------------------------------------------------------------------------------

class TestStdNumericNumpy:
    """
    NumPy scalar support in std_numeric.
    """

    @pytest.fixture(autouse=True)
    def np(self):
        return pytest.importorskip("numpy")

    def test_integers(self, np):
        for scalar, expected in [(np.int8(-5), -5), (np.uint16(65530), 65530), (np.int64(2 ** 40), 2 ** 40)]:
            res = std_numeric(scalar)
            assert res == expected and isinstance(res, int)

    def test_floats(self, np):
        res = std_numeric(np.float64(1.5))
        assert res == 1.5 and isinstance(res, float)
        res = std_numeric(np.float32(0.5))
        assert res == 0.5 and isinstance(res, float)

    def test_zero_dim_arrays(self, np):
        assert std_numeric(np.array(3.5)) == 3.5
        assert std_numeric(np.array(7, dtype=np.int32)) == 7

    def test_multi_element_array(self, np):
        assert std_numeric(np.array([1.0, 2.0]), on_error="none") is None
