"""
Standardize numeric quantities from Python stdlib and third-party libraries.

Data sizes store their quantity as a plain float. This module converts the numeric
types callers commonly hold (int, Decimal, Fraction, NumPy scalars, tensors) into
standard Python numbers before they reach DataSize.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
import operator
from typing import Literal, Protocol, runtime_checkable

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_type, fmt_value


@runtime_checkable
class SupportsFloat(Protocol):
    """Protocol for duck-typed numeric conversion."""

    def __float__(self) -> float: ...


def std_numeric(
        value,
        *,
        on_error: Literal["raise", "none"] = "raise",
) -> int | float | None:
    """
    Convert a numeric-like value to standard Python int or float.

    Parameters
    ----------
    value : various
        Numeric value to convert. Supports Python int/float, Decimal, Fraction,
        and third-party types via __index__, .item() or __float__.

    on_error : {"raise", "none"}, default "raise"
        How to handle unsupported types (None, bool, str, list, ...):

        - "raise": Raise TypeError
        - "none": Return None

    Returns
    -------
    int
        For Python int and types implementing __index__ (NumPy integers).

    float
        For floats and float-like types, including inf and nan.

    Behavior Notes
    --------------
    Booleans are rejected even though bool is a subclass of int: a data size of
    `True` bytes is almost certainly a bug at the call site.

    Detection Priority:
    1. __index__() → int (NumPy integers)
    2. .item() → int or float (array and tensor scalars)
    3. __float__() → float (Decimal, Fraction, NumPy floats)

    Examples
    --------
    >>> std_numeric(42)
    42
    >>> std_numeric(Decimal("1.5"))
    1.5
    >>> std_numeric("42", on_error="none") is None
    True
    """
    if isinstance(value, bool) or value is None or isinstance(value, (str, bytes, bytearray)):
        return _on_error(value, on_error)

    # Fast path
    if isinstance(value, (int, float)):
        return value

    # Priority 1: true integers
    # Non-integer arrays expose __index__ but refuse it, these go on to .item()
    if hasattr(value, '__index__'):
        try:
            return operator.index(value)
        except (TypeError, ValueError):
            pass

    # Priority 2: array/tensor scalars
    if hasattr(value, 'item') and callable(value.item):
        try:
            result = value.item()
        except (TypeError, ValueError, AttributeError):
            result = None
        if isinstance(result, bool):
            return _on_error(value, on_error)
        if isinstance(result, (int, float)):
            return result

    # Priority 3: duck typing via __float__
    if isinstance(value, SupportsFloat):
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            if on_error == "raise":
                raise TypeError(f"cannot convert {fmt_type(value)} to float: {e}") from e
            return None

    return _on_error(value, on_error)


def std_quantity(value, *, name: str = "quantity") -> float:
    """
    Convert a numeric-like value to a finite float suitable for DataSize.quantity.

    Raises:
        TypeError: If value is not numeric-like.
        ValueError: If value is NaN or infinite.

    Examples:
        >>> std_quantity(1024)
        1024.0
        >>> std_quantity(Fraction(1, 2))
        0.5
    """
    number = std_numeric(value, on_error="none")
    if number is None:
        raise TypeError(f"{name} must be int | float or a numeric-like type, but got {fmt_type(value)}")

    try:
        number = float(number)
    except OverflowError as e:
        raise ValueError(f"{name} is out of float range: {fmt_value(value)}") from e

    if math.isnan(number):
        raise ValueError(f"{name} must not be NaN")
    if math.isinf(number):
        raise ValueError(f"{name} must be finite, but got {fmt_value(number)}")
    return number


# Private Methods ------------------------------------------------------------------------------------------------------

def _on_error(value, on_error: str) -> None:
    if on_error == "raise":
        raise TypeError(
            f"unsupported numeric type: {fmt_type(value)}. "
            f"Expected int, float, or types implementing __index__, .item() or __float__"
        )
    return None
