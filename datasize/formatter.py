"""
Render data sizes and numeric byte counts as text using format directives.

Directives are described in datasize.directive. The formatter accepts any value: data sizes and
numeric byte counts are rendered as '<number><separator><abbreviation>', everything else falls back
to its own formatting so the formatter can serve every replacement field of a template:

    >>> format_size(9_995_326_316_544, "GB0")
    '9,309 GB'
    >>> format_size(1024, "x")
    '400'
    >>> DataSizeStringFormatter().format("{0:A1} of {1:A0}", 1_474_560, 9_995_326_316_544)
    '1.4 MB of 9 TB'
"""

# Standard library -----------------------------------------------------------------------------------------------------
import locale
import string
from dataclasses import dataclass
from typing import Any, Callable

# Local ----------------------------------------------------------------------------------------------------------------
from .directive import parse_directive
from .exceptions import DataSizeFormatError, UnrecognizedUnitError
from .formatters import fmt_type, fmt_value
from .numeric import std_numeric
from .sentinels import UNSET, UnsetType, ifnotunset
from .size import DataSize
from .units import abbreviation

NumberFormat = Callable[[float, int], str]


# Methods --------------------------------------------------------------------------------------------------------------

def grouped_number(value: float, precision: int) -> str:
    """
    Fixed-point number with comma thousands separators.

    Examples:
        >>> grouped_number(9308.873039245605, 0)
        '9,309'
        >>> grouped_number(-1, 2)
        '-1.00'
    """
    return f"{value:,.{precision}f}"


def locale_number(value: float, precision: int) -> str:
    """
    Fixed-point number with the grouping and decimal point of the current LC_NUMERIC locale.

    The locale is whatever the process has set via locale.setlocale(); under the default
    C locale no grouping is applied.
    """
    return locale.format_string(f"%.{precision}f", value, grouping=True)


# Classes --------------------------------------------------------------------------------------------------------------

# @formatter:off

class DataSizeConf:
    """
    Default constants for data size formatting.

    Attributes:
        DIRECTIVE: Directive applied when none is given, normalize to byte units.
        PRECISION: Default number of fractional digits.
        PRECISION_FALLBACK: Fractional digits used when FormatOptions.precision is None.
        SEPARATOR: Text between the number and the unit abbreviation.
    """
    DIRECTIVE = "A"
    PRECISION = 2
    PRECISION_FALLBACK = 0
    SEPARATOR = " "

# @formatter:on


@dataclass(frozen=True)
class FormatOptions:
    """
    Formatting options for DataSizeFormatter.

    Attributes:
        precision: Fractional digits when the directive carries none. None selects
            DataSizeConf.PRECISION_FALLBACK.
        iec: Render IEC abbreviations for byte multiples (KiB, MiB, ...).
        separator: Text between the number and the unit abbreviation.
        number_format: Callable (value, precision) -> str that renders the number.

    Examples:
        >>> options = FormatOptions(precision=1, iec=True)
        >>> format_size(1536, options=options)
        '1.5 KiB'
    """
    precision: int | None = DataSizeConf.PRECISION
    iec: bool = False
    separator: str = DataSizeConf.SEPARATOR
    number_format: NumberFormat = grouped_number

    def __post_init__(self):
        if self.precision is not None:
            if not isinstance(self.precision, int) or isinstance(self.precision, bool):
                raise TypeError(f"precision must be int | None, but got {fmt_type(self.precision)}")
            if self.precision < 0:
                raise ValueError(f"precision must be >= 0, got {self.precision}")
        if not isinstance(self.iec, bool):
            raise TypeError(f"iec must be bool, but got {fmt_type(self.iec)}")
        if not isinstance(self.separator, str):
            raise TypeError(f"separator must be str, but got {fmt_type(self.separator)}")
        if not callable(self.number_format):
            raise TypeError(f"number_format must be callable, but got {fmt_type(self.number_format)}")

    def merge(self,
              precision: int | None | UnsetType = UNSET,
              iec: bool | UnsetType = UNSET,
              separator: str | UnsetType = UNSET,
              number_format: NumberFormat | UnsetType = UNSET,
              ) -> "FormatOptions":
        """
        Create new FormatOptions with merged configuration.

        Parameters not provided (UNSET) are inherited from the current instance.
        """
        return FormatOptions(precision=ifnotunset(precision, default=self.precision),
                             iec=ifnotunset(iec, default=self.iec),
                             separator=ifnotunset(separator, default=self.separator),
                             number_format=ifnotunset(number_format, default=self.number_format))

    def precision_for(self, directive_precision: int | None) -> int:
        """Effective precision: the directive's, else the configured one, else the fallback."""
        if directive_precision is not None:
            return directive_precision
        if self.precision is not None:
            return self.precision
        return DataSizeConf.PRECISION_FALLBACK


class DataSizeFormatter:
    """
    Format data sizes, numeric byte counts and arbitrary values with directives.

    Format flow for a value and a directive:
        1. DataSize is used as is, numeric-like values (int, float, Decimal, NumPy scalars)
           are taken as byte counts. Other values go to the fallback.
        2. The directive is parsed, empty means DataSizeConf.DIRECTIVE. Directives naming
           no known unit go to the fallback.
        3. The size is normalized or converted to the directive unit and rendered.

    Fallback:
        - None renders as an empty string
        - types without their own __format__ render as str(value)
        - bool is never a byte count and renders as str(value) whatever the directive
        - other values render as format(value, directive), e.g. 1024 with 'x' gives '400'
        - a DataSize with an unrecognized directive raises DataSizeFormatError

    Errors raised by the fallback are re-raised as DataSizeFormatError carrying the directive.

    Examples:
        >>> formatter = DataSizeFormatter()
        >>> formatter.format(1024)
        '1.00 KB'
        >>> formatter.format(9_995_326_316_544, "A3")
        '9.091 TB'
        >>> formatter.format(1000, "a")
        '8.00 kb'
    """

    def __init__(self, options: FormatOptions | None = None):
        if options is not None and not isinstance(options, FormatOptions):
            raise TypeError(f"options must be FormatOptions | None, but got {fmt_type(options)}")
        self.options = options if options is not None else FormatOptions()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(options={self.options!r})"

    def format(self, value: Any, directive: str | None = None) -> str:
        """
        Format a value with a directive like 'A', 'a1', 'MB0' or 'kilobit2'.

        Raises:
            TypeError: If directive is neither str nor None.
            DataSizeFormatError: If the fallback formatting of value fails for the directive.
        """
        if directive is not None and not isinstance(directive, str):
            raise TypeError(f"directive must be str | None, but got {fmt_type(directive)}")

        size = _as_data_size(value)
        if size is None:
            return self._format_other(value, directive)

        try:
            parsed = parse_directive(directive or DataSizeConf.DIRECTIVE)
        except UnrecognizedUnitError as e:
            return self._format_other(value, directive, cause=e)

        return self.render(parsed.resolve(size), precision=parsed.precision)

    def render(self, size: DataSize, precision: int | None = None) -> str:
        """
        Render a data size in its own unit, without any conversion.

        Args:
            size: Data size to render.
            precision: Fractional digits; options precision when None.
        """
        if not isinstance(size, DataSize):
            raise TypeError(f"DataSize expected, but got {fmt_type(size)}")
        precision = self.options.precision_for(precision)
        number = self.options.number_format(size.quantity, precision)
        return f"{number}{self.options.separator}{abbreviation(size.unit, iec=self.options.iec)}"

    @staticmethod
    def _format_other(value: Any, directive: str | None, cause: Exception | None = None) -> str:
        if value is None:
            return ""

        if isinstance(value, DataSize):
            raise DataSizeFormatError(
                f"invalid format directive {fmt_value(directive)} for {fmt_type(value)}",
                directive=directive) from cause

        try:
            if isinstance(value, bool) or type(value).__format__ is object.__format__:
                return str(value)
            return format(value, directive or "")
        except (TypeError, ValueError) as e:
            raise DataSizeFormatError(
                f"invalid format directive {fmt_value(directive)} for {fmt_type(value)}: {e}",
                directive=directive) from e


class DataSizeStringFormatter(string.Formatter):
    """
    string.Formatter that renders every replacement field through DataSizeFormatter.

    Numeric arguments are treated as byte counts, other arguments keep their own formatting.

    Examples:
        >>> DataSizeStringFormatter().format("{0:A1}", 1_474_560)
        '1.4 MB'
        >>> DataSizeStringFormatter().format("{name}: {size:MB0}", name="disk", size=1_474_560)
        'disk: 1 MB'
    """

    def __init__(self, options: FormatOptions | None = None):
        super().__init__()
        self.formatter = DataSizeFormatter(options)

    def format_field(self, value: Any, format_spec: str) -> str:
        return self.formatter.format(value, format_spec)


def format_size(value: Any, directive: str | None = None, *, options: FormatOptions | None = None) -> str:
    """
    Format a data size or numeric byte count with a directive.

    Shortcut for DataSizeFormatter(options).format(value, directive).

    Examples:
        >>> format_size(1_474_560)
        '1.41 MB'
        >>> format_size(-1024, "K0")
        '-1 KB'
    """
    return DataSizeFormatter(options).format(value, directive)


# Private Methods ------------------------------------------------------------------------------------------------------

def _as_data_size(value: Any) -> DataSize | None:
    """DataSize as is, numeric-like values as a byte count, None for anything else."""
    if isinstance(value, DataSize):
        return value
    if std_numeric(value, on_error="none") is None:
        return None
    try:
        return DataSize(value)
    except (TypeError, ValueError):
        # NaN, infinity, out of float range
        return None
