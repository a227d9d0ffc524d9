"""
DataSize value type: a quantity of digital information coupled with its unit.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
import operator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_type, fmt_value
from .numeric import std_numeric, std_quantity
from .units import MAX_ORDER, Unit, as_unit, bit_weight, unit_for_order

if TYPE_CHECKING:
    from .formatter import FormatOptions


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class DataSize:
    """
    An immutable amount of digital information: a float quantity of a Unit.

    The unit is kept exactly as assigned until an explicit conversion is requested, so
    DataSize(1, Unit.KILOBYTE) and DataSize(1024) are equal but display differently.
    Comparison, equality and hashing use the total number of bits, never the raw quantity.

    Arithmetic returns new instances:
        - addition and subtraction keep the unit of the left operand
        - multiplication and division by a scalar keep the unit
        - division by another DataSize returns a unitless float ratio

    Attributes:
        quantity: Amount of units, stored as float. Numeric-like inputs (int, Decimal, Fraction,
            NumPy scalars) are converted; NaN and infinity are rejected.
        unit: Unit of the quantity, bytes by default. Integer ordinals are accepted.

    Examples:
        >>> size = DataSize(1_474_560)
        >>> str(size)
        '1,474,560.00 B'
        >>> str(size.normalize())
        '1.41 MB'
        >>> f"{size:KB0}"
        '1,440 KB'
        >>> DataSize(1, Unit.KILOBYTE) == DataSize(1024)
        True
        >>> DataSize(150, Unit.MEGABIT).convert_to_unit(Unit.MEGABYTE).quantity
        17.881393432617188
    """

    quantity: float
    unit: Unit = Unit.BYTE

    def __post_init__(self):
        object.__setattr__(self, 'quantity', std_quantity(self.quantity))
        object.__setattr__(self, 'unit', as_unit(self.unit))
        # Comparison and conversion run on total bits, which must stay in float range
        if not math.isfinite(self.quantity * bit_weight(self.unit)):
            raise ValueError(f"quantity must be finite in bits, but {fmt_value(self.quantity)} "
                             f"{self.unit.name.lower()}s overflows")

    @classmethod
    def from_bytes(cls, count: int) -> Self:
        """
        Create a data size from an integer byte count.

        Raises:
            TypeError: If count is not an integer (floats are rejected, use DataSize(quantity) instead).
        """
        if isinstance(count, bool):
            raise TypeError(f"byte count must be int, but got {fmt_type(count)}")
        try:
            count = operator.index(count)
        except TypeError:
            raise TypeError(f"byte count must be int, but got {fmt_type(count)}") from None
        return cls(count, Unit.BYTE)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """
        Create a data size from its serialized form {"quantity": float, "unit": int}.

        Raises:
            TypeError: If data is not a dict.
            ValueError: If a field is missing.
            InvalidUnitError: If unit is not a valid Unit ordinal.
        """
        if not isinstance(data, dict):
            raise TypeError(f"dict expected, but got {fmt_type(data)}")
        missing = [key for key in ("quantity", "unit") if key not in data]
        if missing:
            raise ValueError(f"serialized data size is missing {', '.join(missing)}: {fmt_value(data)}")
        return cls(data["quantity"], data["unit"])

    def to_dict(self) -> dict[str, Any]:
        """Serializable form of the data size, the unit as its stable integer ordinal."""
        return {"quantity": self.quantity, "unit": int(self.unit)}

    # ----- Projections -----

    @property
    def total_bits(self) -> float:
        """Amount of information in bits: quantity × bit weight of the unit."""
        return self.quantity * bit_weight(self.unit)

    @property
    def total_bytes(self) -> float:
        """Amount of information in bytes."""
        return self.total_bits / 8

    def to_bytes_truncated(self) -> int:
        """
        Whole number of bytes, truncated toward zero.

        Examples:
            >>> DataSize(1.5, Unit.KILOBYTE).to_bytes_truncated()
            1536
            >>> DataSize(-12, Unit.BIT).to_bytes_truncated()
            -1
        """
        return math.trunc(self.total_bytes)

    # ----- Conversion -----

    def convert_to_unit(self, unit: Unit | int) -> Self:
        """
        Same amount of information expressed in another unit.

        No rounding happens here; precision is reduced only when the value is displayed.

        Raises:
            InvalidUnitError: If unit is not a member of Unit.
        """
        unit = as_unit(unit)
        return type(self)(self.total_bits / bit_weight(unit), unit)

    def normalize(self, prefer_bits: bool = False) -> Self:
        """
        Convert to the largest unit in which the quantity is at least 1.

        The order of magnitude is floor(log_base(|bytes|)), where base is 1024 for byte units
        and 1000 for bit units. It is clamped to [0, MAX_ORDER]: values below one byte stay in
        bytes (or bits), and values beyond the largest unit stay in exabytes (or exabits)
        with a quantity that may exceed 1024.

        Args:
            prefer_bits: Normalize to bit units (kb, mb, ...) instead of byte units (KB, MB, ...).

        Examples:
            >>> DataSize(1536).normalize()
            DataSize(quantity=1.5, unit=<Unit.KILOBYTE: 3>)
            >>> DataSize(1000).normalize(prefer_bits=True)
            DataSize(quantity=8.0, unit=<Unit.KILOBIT: 2>)
            >>> DataSize(0, Unit.GIGABYTE).normalize()
            DataSize(quantity=0.0, unit=<Unit.BYTE: 1>)
        """
        order = _order_of_magnitude(abs(self.total_bytes), base=1000 if prefer_bits else 1024)
        order = max(0, min(order, MAX_ORDER))
        return self.convert_to_unit(unit_for_order(order, bits=prefer_bits))

    # ----- Comparison -----

    def compare(self, other: "DataSize") -> int:
        """
        Compare total bits with another data size: -1 if smaller, 0 if equal, 1 if larger.

        Raises:
            TypeError: If other is not a DataSize.
        """
        if not isinstance(other, DataSize):
            raise TypeError(f"DataSize expected, but got {fmt_type(other)}")
        return (self.total_bits > other.total_bits) - (self.total_bits < other.total_bits)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DataSize):
            return self.total_bits == other.total_bits
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.total_bits)

    def __lt__(self, other: object) -> bool:
        if isinstance(other, DataSize):
            return self.total_bits < other.total_bits
        return NotImplemented

    def __le__(self, other: object) -> bool:
        if isinstance(other, DataSize):
            return self.total_bits <= other.total_bits
        return NotImplemented

    def __gt__(self, other: object) -> bool:
        if isinstance(other, DataSize):
            return self.total_bits > other.total_bits
        return NotImplemented

    def __ge__(self, other: object) -> bool:
        if isinstance(other, DataSize):
            return self.total_bits >= other.total_bits
        return NotImplemented

    # ----- Arithmetic -----

    def add(self, other: "DataSize") -> Self:
        """Sum in the unit of this data size."""
        other = _require_size(other)
        return type(self)(self.quantity + other.convert_to_unit(self.unit).quantity, self.unit)

    def subtract(self, other: "DataSize") -> Self:
        """Difference in the unit of this data size."""
        other = _require_size(other)
        return type(self)(self.quantity - other.convert_to_unit(self.unit).quantity, self.unit)

    def multiply_by_scalar(self, factor: int | float) -> Self:
        return type(self)(self.quantity * _require_scalar(factor), self.unit)

    def divide_by_scalar(self, divisor: int | float) -> Self:
        """
        Raises:
            ZeroDivisionError: If divisor is zero.
        """
        divisor = _require_scalar(divisor)
        if divisor == 0:
            raise ZeroDivisionError(f"cannot divide {self!r} by zero")
        return type(self)(self.quantity / divisor, self.unit)

    def divide_by_value(self, other: "DataSize") -> float:
        """
        Unitless ratio of total bits.

        Raises:
            ZeroDivisionError: If other holds zero bits.
        """
        other = _require_size(other)
        if other.total_bits == 0:
            raise ZeroDivisionError(f"cannot divide {self!r} by zero-sized {other!r}")
        return self.total_bits / other.total_bits

    def __add__(self, other: object) -> Self:
        if isinstance(other, DataSize):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other: object) -> Self:
        if isinstance(other, DataSize):
            return self.subtract(other)
        return NotImplemented

    def __mul__(self, other: object) -> Self:
        if _is_scalar(other):
            return self.multiply_by_scalar(other)
        return NotImplemented

    def __rmul__(self, other: object) -> Self:
        return self.__mul__(other)

    def __truediv__(self, other: object) -> "Self | float":
        if isinstance(other, DataSize):
            return self.divide_by_value(other)
        if _is_scalar(other):
            return self.divide_by_scalar(other)
        return NotImplemented

    def __neg__(self) -> Self:
        return type(self)(-self.quantity, self.unit)

    def __abs__(self) -> Self:
        return type(self)(abs(self.quantity), self.unit)

    # ----- Display -----

    def to_str(self,
               precision: int | None = None,
               normalize: bool = False,
               prefer_bits: bool = False,
               options: "FormatOptions | None" = None) -> str:
        """
        Render as '<quantity> <abbreviation>', e.g. '1,474,560.00 B'.

        Args:
            precision: Fractional digits; options.precision when None.
            normalize: Convert to the best-fit unit first (see normalize()).
            prefer_bits: Normalize to bit units; ignored unless normalize is set.
            options: Formatting options, FormatOptions() when None.
        """
        from .formatter import DataSizeFormatter
        size = self.normalize(prefer_bits=prefer_bits) if normalize else self
        return DataSizeFormatter(options).render(size, precision=precision)

    def __str__(self) -> str:
        return self.to_str()

    def __format__(self, format_spec: str) -> str:
        """
        Format with a directive: f"{size:A1}", f"{size:MB0}", f"{size:a}".

        An empty spec renders the data size in its own unit, same as str().
        """
        if not format_spec:
            return str(self)
        from .formatter import DataSizeFormatter
        return DataSizeFormatter().format(self, format_spec)


# Private Methods ------------------------------------------------------------------------------------------------------

def _order_of_magnitude(value: float, base: int) -> int:
    """
    Integer floor of log_base(value) for value >= 0, and 0 for zero.

    math.log() may land a hair off at exact powers of base (math.log(1000, 10) == 2.9999999999999996),
    so the result is corrected against integer powers.
    """
    if value == 0:
        return 0
    order = math.floor(math.log(value, base))
    if value < base ** order:
        order -= 1
    elif value >= base ** (order + 1):
        order += 1
    return order


def _is_scalar(value: Any) -> bool:
    return not isinstance(value, DataSize) and std_numeric(value, on_error="none") is not None


def _require_scalar(value: Any) -> float:
    number = std_numeric(value, on_error="none")
    if number is None or isinstance(value, DataSize):
        raise TypeError(f"scalar int | float expected, but got {fmt_type(value)}")
    return number


def _require_size(value: Any) -> DataSize:
    if not isinstance(value, DataSize):
        raise TypeError(f"DataSize expected, but got {fmt_type(value)}")
    return value
