"""
Format directives: the short strings that pick a unit and a precision for display.

A directive has a left side (unit) and a right side (precision), both optional, e.g. 'MB0' or 'A2'.

The left side is case-sensitive to tell bits from bytes. It is either:
    - 'A' to normalize to the best-fit byte unit, the default when omitted
    - 'a' to normalize to the best-fit bit unit
    - any unit abbreviation or name accepted by parse_unit(): 'B', 'KB', 'kb', 'K', 'megabyte', 'petabit', ...

The right side is the number of fractional digits. When omitted, the formatter's default precision applies.

In the below examples, the data size is 1,048,576 bytes:

| Directive | Output       | Description                                  |
|-----------|--------------|----------------------------------------------|
| A         | 1.00 MB      | normalize to bytes                           |
| A0        | 1 MB         | normalize to bytes with 0 precision          |
| a         | 8.39 mb      | normalize to bits                            |
| B0        | 1,048,576 B  | convert to bytes with 0 precision            |
| b0        | 8,388,608 b  | convert to bits with 0 precision             |
| KB        | 1,024.00 KB  | convert to kilobytes                         |
| kb1       | 8,388.6 kb   | convert to kilobits with 1 digit precision   |
| mb        | 8.39 mb      | convert to megabits                          |
"""

# Standard library -----------------------------------------------------------------------------------------------------
import re
from dataclasses import dataclass
from enum import StrEnum, unique

# Local ----------------------------------------------------------------------------------------------------------------
from .exceptions import UnrecognizedUnitError
from .formatters import fmt_type, fmt_value
from .size import DataSize
from .units import Unit, parse_unit

_DIRECTIVE_PATTERN = re.compile(r"(?P<unit>[A-Za-z]*)(?P<precision>[0-9]*)")


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class AutoUnit(StrEnum):
    """Directive targets that normalize to the best-fit unit instead of a fixed one."""
    AUTO_BYTES = "A"
    AUTO_BITS = "a"


@dataclass(frozen=True)
class FormatDirective:
    """
    Parsed format directive.

    Attributes:
        target: Fixed Unit to convert to, or AutoUnit to normalize.
        precision: Number of fractional digits, None to use the formatter default.
    """
    target: Unit | AutoUnit = AutoUnit.AUTO_BYTES
    precision: int | None = None

    def __post_init__(self):
        if not isinstance(self.target, (Unit, AutoUnit)):
            raise TypeError(f"target must be Unit | AutoUnit, but got {fmt_type(self.target)}")
        if self.precision is not None:
            if not isinstance(self.precision, int) or isinstance(self.precision, bool):
                raise TypeError(f"precision must be int | None, but got {fmt_type(self.precision)}")
            if self.precision < 0:
                raise ValueError(f"precision must be >= 0, got {self.precision}")

    @property
    def is_auto(self) -> bool:
        return isinstance(self.target, AutoUnit)

    def resolve(self, size: DataSize) -> DataSize:
        """Normalize or convert a data size to the directive target."""
        if self.target is AutoUnit.AUTO_BYTES:
            return size.normalize()
        if self.target is AutoUnit.AUTO_BITS:
            return size.normalize(prefer_bits=True)
        return size.convert_to_unit(self.target)


# Methods --------------------------------------------------------------------------------------------------------------

def parse_directive(text: str | None) -> FormatDirective:
    """
    Parse a directive string like 'A', 'a1', 'MB0' or 'petabyte2'.

    Raises:
        TypeError: If text is neither str nor None.
        UnrecognizedUnitError: If the unit side names no known unit, or the directive is not
            a run of letters followed by a run of digits.

    Examples:
        >>> parse_directive("MB0")
        FormatDirective(target=<Unit.MEGABYTE: 5>, precision=0)
        >>> parse_directive("a")
        FormatDirective(target=<AutoUnit.AUTO_BITS: 'a'>, precision=None)
        >>> parse_directive("2")
        FormatDirective(target=<AutoUnit.AUTO_BYTES: 'A'>, precision=2)
    """
    if text is None:
        return FormatDirective()
    if not isinstance(text, str):
        raise TypeError(f"directive must be str | None, but got {fmt_type(text)}")

    match = _DIRECTIVE_PATTERN.fullmatch(text)
    if match is None:
        raise UnrecognizedUnitError(f"invalid data size format directive: {fmt_value(text)}", text=text)

    token, digits = match.group("unit"), match.group("precision")
    precision = int(digits) if digits else None

    if not token or token == AutoUnit.AUTO_BYTES:
        return FormatDirective(AutoUnit.AUTO_BYTES, precision)
    if token == AutoUnit.AUTO_BITS:
        return FormatDirective(AutoUnit.AUTO_BITS, precision)
    return FormatDirective(parse_unit(token), precision)
