#
# DataSize Units of Measurement
#

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass
from enum import IntEnum, unique
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Final, Literal

# Third-party ----------------------------------------------------------------------------------------------------------
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .exceptions import InvalidUnitError, UnrecognizedUnitError
from .formatters import fmt_type, fmt_value

if TYPE_CHECKING:
    from .size import DataSize

Base = Literal["binary", "decimal"]


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class Unit(IntEnum):
    """
    Orders of magnitude of digital information, from bit and byte to exabit and exabyte.

    Kilobit and other *bit units are multiples of 1000 of the next smaller unit,
    a megabit is 1,000,000 bits. Kilobyte and other *byte units are multiples of 1024
    of the next smaller unit, a megabyte is 1,048,576 bytes.

    Member values are the ordinals written by serialization. Never reorder or renumber them.
    """
    BIT = 0
    BYTE = 1
    KILOBIT = 2
    KILOBYTE = 3
    MEGABIT = 4
    MEGABYTE = 5
    GIGABIT = 6
    GIGABYTE = 7
    TERABIT = 8
    TERABYTE = 9
    PETABIT = 10
    PETABYTE = 11
    EXABIT = 12
    EXABYTE = 13

    @property
    def base(self) -> Base:
        """Scale base of the unit family: 'decimal' for bits, 'binary' for bytes."""
        return _UNITS[self].base

    @property
    def bit_weight(self) -> int:
        """Number of bits one unit represents."""
        return _UNITS[self].bit_weight

    @property
    def is_bit_multiple(self) -> bool:
        return _UNITS[self].is_bit_multiple

    @property
    def order(self) -> int:
        """Order of magnitude within the unit family, 0 for bit and byte up to MAX_ORDER for exa-."""
        return _UNITS[self].order

    def to_abbreviation(self, iec: bool = False) -> str:
        """
        Abbreviation of the unit.

        Byte units are uppercase: B, KB, MB, GB, TB, PB, EB (or KiB, MiB, ... with iec=True).
        Bit units are lowercase: b, kb, mb, gb, tb, pb, eb.
        """
        return abbreviation(self, iec=iec)

    def to_name(self, iec: bool = False) -> str:
        """Long name of the unit: kilobyte, or kibibyte with iec=True."""
        return unit_name(self, iec=iec)

    def quantity(self, value: int | float) -> "DataSize":
        """
        Create a data size of the given quantity in this unit.

        Example:
            >>> Unit.MEGABYTE.quantity(4)
            DataSize(quantity=4.0, unit=<Unit.MEGABYTE: 5>)
        """
        from .size import DataSize
        return DataSize(value, self)


@dataclass(frozen=True)
class UnitInfo:
    """
    Catalog record of a single unit.

    Attributes:
        unit: The unit tag.
        base: 'decimal' (multiplier 1000) for bit multiples, 'binary' (multiplier 1024) for byte multiples.
        order: Order of magnitude within the family, 0 for bit and byte.
        bit_weight: Number of bits one unit represents.
        abbreviation: JEDEC abbreviation, case-significant (KB vs kb).
        iec_abbreviation: IEC abbreviation (KiB); same as abbreviation for bit units.
        name: JEDEC long name (kilobyte).
        iec_name: IEC long name (kibibyte); same as name for bit units.
    """
    unit: Unit
    base: Base
    order: int
    bit_weight: int
    abbreviation: str
    iec_abbreviation: str
    name: str
    iec_name: str

    @property
    def is_bit_multiple(self) -> bool:
        return self.base == "decimal"

    @property
    def multiplier(self) -> int:
        """Ratio between this unit and the next smaller unit of the same family."""
        return 1000 if self.base == "decimal" else 1024


class UnitsConf:
    """
    Unit name synonyms and abbreviation aliases accepted by parse_unit().

    Attributes:
        NAME_SYNONYMS: Case-insensitive synonyms, in addition to every unit name, IEC name
            and IEC abbreviation. IEC names exist for byte units only: 'kibibit' is not a unit.
        ABBREVIATION_ALIASES: Case-sensitive aliases, in addition to every unit abbreviation.
            Case tells bits from bytes: 'M' and 'MB' are megabytes, 'm', 'mb' and 'Mb' are megabits.
    """
    # @formatter:off
    NAME_SYNONYMS = {
        Unit.KILOBIT: ("kbit",),   Unit.KILOBYTE: ("kbyte",),
        Unit.MEGABIT: ("mbit",),   Unit.MEGABYTE: ("mbyte",),
        Unit.GIGABIT: ("gbit",),   Unit.GIGABYTE: ("gbyte",),
        Unit.TERABIT: ("tbit",),   Unit.TERABYTE: ("tbyte",),
        Unit.PETABIT: ("pbit",),   Unit.PETABYTE: ("pbyte",),
        Unit.EXABIT:  ("ebit",),   Unit.EXABYTE:  ("ebyte",),
    }

    ABBREVIATION_ALIASES = {
        Unit.KILOBIT: ("k", "Kb"), Unit.KILOBYTE: ("K", "kB"),
        Unit.MEGABIT: ("m", "Mb"), Unit.MEGABYTE: ("M",),
        Unit.GIGABIT: ("g", "Gb"), Unit.GIGABYTE: ("G",),
        Unit.TERABIT: ("t", "Tb"), Unit.TERABYTE: ("T",),
        Unit.PETABIT: ("p", "Pb"), Unit.PETABYTE: ("P",),
        Unit.EXABIT:  ("e", "Eb"), Unit.EXABYTE:  ("E",),
    }
    # @formatter:on


# @formatter:off
UNITS: Final[tuple[UnitInfo, ...]] = (
    #        unit           base       order  bit_weight       abbr  iec    name        iec_name
    UnitInfo(Unit.BIT,      "decimal", 0,     1,               "b",  "b",   "bit",      "bit"),
    UnitInfo(Unit.BYTE,     "binary",  0,     8,               "B",  "B",   "byte",     "byte"),
    UnitInfo(Unit.KILOBIT,  "decimal", 1,     1000,            "kb", "kb",  "kilobit",  "kilobit"),
    UnitInfo(Unit.KILOBYTE, "binary",  1,     8 * 1024,        "KB", "KiB", "kilobyte", "kibibyte"),
    UnitInfo(Unit.MEGABIT,  "decimal", 2,     1000 ** 2,       "mb", "mb",  "megabit",  "megabit"),
    UnitInfo(Unit.MEGABYTE, "binary",  2,     8 * 1024 ** 2,   "MB", "MiB", "megabyte", "mebibyte"),
    UnitInfo(Unit.GIGABIT,  "decimal", 3,     1000 ** 3,       "gb", "gb",  "gigabit",  "gigabit"),
    UnitInfo(Unit.GIGABYTE, "binary",  3,     8 * 1024 ** 3,   "GB", "GiB", "gigabyte", "gibibyte"),
    UnitInfo(Unit.TERABIT,  "decimal", 4,     1000 ** 4,       "tb", "tb",  "terabit",  "terabit"),
    UnitInfo(Unit.TERABYTE, "binary",  4,     8 * 1024 ** 4,   "TB", "TiB", "terabyte", "tebibyte"),
    UnitInfo(Unit.PETABIT,  "decimal", 5,     1000 ** 5,       "pb", "pb",  "petabit",  "petabit"),
    UnitInfo(Unit.PETABYTE, "binary",  5,     8 * 1024 ** 5,   "PB", "PiB", "petabyte", "pebibyte"),
    UnitInfo(Unit.EXABIT,   "decimal", 6,     1000 ** 6,       "eb", "eb",  "exabit",   "exabit"),
    UnitInfo(Unit.EXABYTE,  "binary",  6,     8 * 1024 ** 6,   "EB", "EiB", "exabyte",  "exbibyte"),
)
# @formatter:on

MAX_ORDER: Final[int] = max(info.order for info in UNITS)

_UNITS: Mapping[Unit, UnitInfo] = frozendict((info.unit, info) for info in UNITS)

_UNITS_BY_ORDER: Mapping[tuple[Base, int], Unit] = frozendict(
    ((info.base, info.order), info.unit) for info in UNITS
)


# Methods --------------------------------------------------------------------------------------------------------------

def as_unit(value: Any) -> Unit:
    """
    Return value as a Unit member.

    Accepts Unit members and their integer ordinals (as read back from serialized data).

    Raises:
        InvalidUnitError: If value is not a member of the Unit enumeration.

    Examples:
        >>> as_unit(3)
        <Unit.KILOBYTE: 3>
        >>> as_unit(9999)
        Traceback (most recent call last):
            ...
        datasize.exceptions.InvalidUnitError: invalid data size unit <int: 9999>, ...
    """
    if isinstance(value, Unit):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return Unit(value)
        except ValueError:
            pass
    raise InvalidUnitError(
        f"invalid data size unit {fmt_value(value, label_primitives=True)}, "
        f"expected a Unit member or an ordinal in range [0, {len(UNITS) - 1}]",
        unit=value,
    )


def unit_info(unit: Unit | int) -> UnitInfo:
    """Catalog record of a unit. Raises InvalidUnitError for values outside the Unit enumeration."""
    return _UNITS[as_unit(unit)]


def bit_weight(unit: Unit | int) -> int:
    """
    Number of bits one unit represents.

    Examples:
        >>> bit_weight(Unit.KILOBIT)
        1000
        >>> bit_weight(Unit.KILOBYTE)
        8192
    """
    return unit_info(unit).bit_weight


def abbreviation(unit: Unit | int, iec: bool = False) -> str:
    """
    Unit abbreviation, uppercase for bytes and lowercase for bits.

    Examples:
        >>> abbreviation(Unit.MEGABYTE)
        'MB'
        >>> abbreviation(Unit.MEGABYTE, iec=True)
        'MiB'
        >>> abbreviation(Unit.MEGABIT)
        'mb'
    """
    info = unit_info(unit)
    return info.iec_abbreviation if iec else info.abbreviation


def unit_name(unit: Unit | int, iec: bool = False) -> str:
    """
    Unit long name.

    Examples:
        >>> unit_name(Unit.GIGABYTE)
        'gigabyte'
        >>> unit_name(Unit.GIGABYTE, iec=True)
        'gibibyte'
    """
    info = unit_info(unit)
    return info.iec_name if iec else info.name


def is_bit_multiple(unit: Unit | int) -> bool:
    """True for bit, kilobit, ..., exabit; False for byte, kilobyte, ..., exabyte."""
    return unit_info(unit).is_bit_multiple


def unit_for_order(order: int, bits: bool = False) -> Unit:
    """
    Unit of the given order of magnitude in the bit or byte family.

    Raises:
        ValueError: If order is outside [0, MAX_ORDER].

    Examples:
        >>> unit_for_order(2)
        <Unit.MEGABYTE: 5>
        >>> unit_for_order(2, bits=True)
        <Unit.MEGABIT: 4>
    """
    base: Base = "decimal" if bits else "binary"
    try:
        return _UNITS_BY_ORDER[(base, order)]
    except (KeyError, TypeError):
        raise ValueError(f"order of magnitude must be in range [0, {MAX_ORDER}], but got {fmt_value(order)}") from None


def parse_unit(text: str) -> Unit:
    """
    Parse a unit from its name, synonym or abbreviation.

    Lookup runs in two phases:
        1. Case-insensitive match against long names, IEC names and synonyms:
           'Kilobyte', 'kibibyte', 'KiB', 'kbyte', 'megabit', 'mbit'.
        2. Case-sensitive match against abbreviations, where case tells bits from bytes:
           'MB' and 'M' are megabytes, 'mb', 'Mb' and 'm' are megabits.

    Raises:
        TypeError: If text is not a str.
        UnrecognizedUnitError: If text matches no unit in either phase.

    Examples:
        >>> parse_unit("kibibyte")
        <Unit.KILOBYTE: 3>
        >>> parse_unit("MB")
        <Unit.MEGABYTE: 5>
        >>> parse_unit("mb")
        <Unit.MEGABIT: 4>
    """
    if not isinstance(text, str):
        raise TypeError(f"unit text must be str, but got {fmt_type(text)}")

    token = text.strip()

    unit = _UNIT_NAMES.get(token.lower())
    if unit is not None:
        return unit

    unit = _UNIT_ABBREVIATIONS.get(token)
    if unit is not None:
        return unit

    raise UnrecognizedUnitError(f"unrecognized data size unit: {fmt_value(text)}", text=text)


# Lookup Tables --------------------------------------------------------------------------------------------------------

def _build_lookup(pairs: list[tuple[str, Unit]], table_name: str) -> Mapping[str, Unit]:
    """Build a lookup table, rejecting tokens that would resolve to two different units."""
    lookup: dict[str, Unit] = {}
    for token, unit in pairs:
        if lookup.get(token, unit) is not unit:
            raise AssertionError(
                f"Configuration Error: {table_name} token {token!r} maps to both {lookup[token]!r} and {unit!r}."
            )
        lookup[token] = unit
    return frozendict(lookup)


_UNIT_NAMES: Mapping[str, Unit] = _build_lookup(
    [(info.name, info.unit) for info in UNITS]
    + [(info.iec_name, info.unit) for info in UNITS]
    + [(info.iec_abbreviation.lower(), info.unit) for info in UNITS if info.iec_abbreviation != info.abbreviation]
    + [(synonym, unit) for unit, synonyms in UnitsConf.NAME_SYNONYMS.items() for synonym in synonyms],
    "unit name",
)

_UNIT_ABBREVIATIONS: Mapping[str, Unit] = _build_lookup(
    [(info.abbreviation, info.unit) for info in UNITS]
    + [(alias, unit) for unit, aliases in UnitsConf.ABBREVIATION_ALIASES.items() for alias in aliases],
    "unit abbreviation",
)


# Module Sanity Checks -------------------------------------------------------------------------------------------------

# Ensure every unit has exactly one catalog record.
if set(_UNITS) != set(Unit) or len(UNITS) != len(Unit):
    raise AssertionError("Configuration Error: UNITS must hold exactly one record per Unit member.")

# Ensure bit weights strictly increase with order within each family.
for _base in ("binary", "decimal"):
    _weights = [info.bit_weight for info in sorted(UNITS, key=lambda i: i.order) if info.base == _base]
    if _weights != sorted(set(_weights)):
        raise AssertionError(f"Configuration Error: {_base} unit bit weights must strictly increase with order.")
