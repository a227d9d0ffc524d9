#
# DataSize - Units Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import copy
import pickle

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest
from pytest import raises

# Local ----------------------------------------------------------------------------------------------------------------
from datasize.exceptions import InvalidUnitError, UnrecognizedUnitError
from datasize.size import DataSize
from datasize.units import (
    MAX_ORDER, UNITS, Unit, UnitInfo, UnitsConf,
    abbreviation, as_unit, bit_weight, is_bit_multiple, parse_unit, unit_for_order, unit_info, unit_name,
)


# Tests ----------------------------------------------------------------------------------------------------------------

class TestUnitCatalog:
    """Catalog records, ordinals and invariants of the unit table."""

    def test_ordinals_are_stable(self):
        """Ordinals are part of the serialization contract."""
        assert [int(unit) for unit in Unit] == list(range(14))
        assert Unit.BIT == 0
        assert Unit.BYTE == 1
        assert Unit.KILOBYTE == 3
        assert Unit.EXABYTE == 13

    def test_one_record_per_unit(self):
        assert [info.unit for info in UNITS] == list(Unit)
        assert all(isinstance(info, UnitInfo) for info in UNITS)

    def test_max_order(self):
        assert MAX_ORDER == 6

    @pytest.mark.parametrize("base", ["binary", "decimal"])
    def test_bit_weight_increases_with_order(self, base):
        family = sorted((info for info in UNITS if info.base == base), key=lambda info: info.order)
        weights = [info.bit_weight for info in family]
        assert weights == sorted(weights)
        assert len(set(weights)) == len(weights)

    @pytest.mark.parametrize(
        "unit, expected",
        [
            pytest.param(Unit.BIT, 1, id="bit"),
            pytest.param(Unit.BYTE, 8, id="byte"),
            pytest.param(Unit.KILOBIT, 1000, id="kilobit"),
            pytest.param(Unit.KILOBYTE, 8 * 1024, id="kilobyte"),
            pytest.param(Unit.MEGABIT, 1000 ** 2, id="megabit"),
            pytest.param(Unit.MEGABYTE, 8 * 1024 ** 2, id="megabyte"),
            pytest.param(Unit.TERABYTE, 8 * 1024 ** 4, id="terabyte"),
            pytest.param(Unit.EXABIT, 1000 ** 6, id="exabit"),
            pytest.param(Unit.EXABYTE, 8 * 1024 ** 6, id="exabyte"),
        ],
    )
    def test_bit_weight(self, unit, expected):
        assert bit_weight(unit) == expected
        assert unit.bit_weight == expected

    def test_multiplier(self):
        assert unit_info(Unit.GIGABIT).multiplier == 1000
        assert unit_info(Unit.GIGABYTE).multiplier == 1024

    def test_records_are_frozen(self):
        with raises(AttributeError):
            unit_info(Unit.BYTE).abbreviation = "By"


class TestUnitLookups:
    """Abbreviations, names and family checks."""

    @pytest.mark.parametrize(
        "unit, abbr, iec_abbr",
        [
            pytest.param(Unit.BIT, "b", "b", id="bit"),
            pytest.param(Unit.BYTE, "B", "B", id="byte"),
            pytest.param(Unit.KILOBIT, "kb", "kb", id="kilobit"),
            pytest.param(Unit.KILOBYTE, "KB", "KiB", id="kilobyte"),
            pytest.param(Unit.MEGABYTE, "MB", "MiB", id="megabyte"),
            pytest.param(Unit.GIGABYTE, "GB", "GiB", id="gigabyte"),
            pytest.param(Unit.TERABYTE, "TB", "TiB", id="terabyte"),
            pytest.param(Unit.PETABIT, "pb", "pb", id="petabit"),
            pytest.param(Unit.PETABYTE, "PB", "PiB", id="petabyte"),
            pytest.param(Unit.EXABYTE, "EB", "EiB", id="exabyte"),
        ],
    )
    def test_abbreviation(self, unit, abbr, iec_abbr):
        assert abbreviation(unit) == abbr
        assert abbreviation(unit, iec=True) == iec_abbr
        assert unit.to_abbreviation() == abbr
        assert unit.to_abbreviation(iec=True) == iec_abbr

    @pytest.mark.parametrize(
        "unit, name, iec_name",
        [
            pytest.param(Unit.BIT, "bit", "bit", id="bit"),
            pytest.param(Unit.BYTE, "byte", "byte", id="byte"),
            pytest.param(Unit.KILOBIT, "kilobit", "kilobit", id="kilobit"),
            pytest.param(Unit.KILOBYTE, "kilobyte", "kibibyte", id="kilobyte"),
            pytest.param(Unit.MEGABYTE, "megabyte", "mebibyte", id="megabyte"),
            pytest.param(Unit.GIGABYTE, "gigabyte", "gibibyte", id="gigabyte"),
            pytest.param(Unit.TERABYTE, "terabyte", "tebibyte", id="terabyte"),
            pytest.param(Unit.PETABYTE, "petabyte", "pebibyte", id="petabyte"),
            pytest.param(Unit.EXABIT, "exabit", "exabit", id="exabit"),
            pytest.param(Unit.EXABYTE, "exabyte", "exbibyte", id="exabyte"),
        ],
    )
    def test_name(self, unit, name, iec_name):
        assert unit_name(unit) == name
        assert unit_name(unit, iec=True) == iec_name
        assert unit.to_name() == name
        assert unit.to_name(iec=True) == iec_name

    def test_is_bit_multiple(self):
        bits = [unit for unit in Unit if unit.name.endswith("BIT")]
        assert len(bits) == 7
        for unit in Unit:
            assert is_bit_multiple(unit) is (unit in bits)
            assert unit.is_bit_multiple is (unit in bits)

    def test_base_and_order(self):
        assert Unit.MEGABIT.base == "decimal"
        assert Unit.MEGABYTE.base == "binary"
        assert Unit.BYTE.order == 0
        assert Unit.PETABYTE.order == 5

    def test_ordinal_lookup(self):
        assert abbreviation(3) == "KB"
        assert as_unit(13) is Unit.EXABYTE

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param(9999, id="out-of-range"),
            pytest.param(-1, id="negative"),
            pytest.param(14, id="one-past-last"),
            pytest.param("MB", id="str"),
            pytest.param(True, id="bool"),
            pytest.param(None, id="none"),
            pytest.param(3.0, id="float"),
        ],
    )
    def test_invalid_unit(self, value):
        with raises(InvalidUnitError) as exc_info:
            bit_weight(value)
        assert exc_info.value.unit is value
        for func in (abbreviation, unit_name, is_bit_multiple, unit_info):
            with raises(InvalidUnitError):
                func(value)

    def test_invalid_unit_is_value_error(self):
        with raises(ValueError, match=r"invalid data size unit"):
            as_unit(9999)

    def test_quantity(self):
        size = Unit.MEGABYTE.quantity(4)
        assert isinstance(size, DataSize)
        assert size.quantity == 4.0
        assert size.unit is Unit.MEGABYTE

    def test_pickle_and_copy(self):
        assert pickle.loads(pickle.dumps(Unit.GIGABIT)) is Unit.GIGABIT
        assert copy.deepcopy(Unit.GIGABIT) is Unit.GIGABIT


class TestUnitForOrder:

    @pytest.mark.parametrize(
        "order, bits, expected",
        [
            pytest.param(0, False, Unit.BYTE, id="0-bytes"),
            pytest.param(0, True, Unit.BIT, id="0-bits"),
            pytest.param(3, False, Unit.GIGABYTE, id="3-bytes"),
            pytest.param(3, True, Unit.GIGABIT, id="3-bits"),
            pytest.param(6, False, Unit.EXABYTE, id="6-bytes"),
            pytest.param(6, True, Unit.EXABIT, id="6-bits"),
        ],
    )
    def test_unit_for_order(self, order, bits, expected):
        assert unit_for_order(order, bits=bits) is expected

    @pytest.mark.parametrize("order", [-1, 7, 100, "1"])
    def test_out_of_range(self, order):
        with raises(ValueError, match=r"order of magnitude"):
            unit_for_order(order)


class TestParseUnit:
    """Two-phase parsing: case-insensitive names first, then case-sensitive abbreviations."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            # Long names, any case
            pytest.param("byte", Unit.BYTE, id="byte"),
            pytest.param("BIT", Unit.BIT, id="BIT"),
            pytest.param("Kilobyte", Unit.KILOBYTE, id="Kilobyte"),
            pytest.param("kilobit", Unit.KILOBIT, id="kilobit"),
            pytest.param("MEGABYTE", Unit.MEGABYTE, id="MEGABYTE"),
            pytest.param("petabit", Unit.PETABIT, id="petabit"),
            pytest.param("exabyte", Unit.EXABYTE, id="exabyte"),
            # Short names
            pytest.param("kbyte", Unit.KILOBYTE, id="kbyte"),
            pytest.param("KBit", Unit.KILOBIT, id="KBit"),
            pytest.param("gbyte", Unit.GIGABYTE, id="gbyte"),
            pytest.param("tbit", Unit.TERABIT, id="tbit"),
            # IEC names and abbreviations, any case
            pytest.param("kibibyte", Unit.KILOBYTE, id="kibibyte"),
            pytest.param("Mebibyte", Unit.MEGABYTE, id="Mebibyte"),
            pytest.param("exbibyte", Unit.EXABYTE, id="exbibyte"),
            pytest.param("KiB", Unit.KILOBYTE, id="KiB"),
            pytest.param("mib", Unit.MEGABYTE, id="mib"),
            pytest.param("TIB", Unit.TERABYTE, id="TIB"),
            # Abbreviations, case-sensitive
            pytest.param("B", Unit.BYTE, id="B"),
            pytest.param("b", Unit.BIT, id="b"),
            pytest.param("KB", Unit.KILOBYTE, id="KB"),
            pytest.param("kB", Unit.KILOBYTE, id="kB"),
            pytest.param("K", Unit.KILOBYTE, id="K"),
            pytest.param("kb", Unit.KILOBIT, id="kb"),
            pytest.param("Kb", Unit.KILOBIT, id="Kb"),
            pytest.param("k", Unit.KILOBIT, id="k"),
            pytest.param("MB", Unit.MEGABYTE, id="MB"),
            pytest.param("M", Unit.MEGABYTE, id="M"),
            pytest.param("mb", Unit.MEGABIT, id="mb"),
            pytest.param("Mb", Unit.MEGABIT, id="Mb"),
            pytest.param("m", Unit.MEGABIT, id="m"),
            pytest.param("GB", Unit.GIGABYTE, id="GB"),
            pytest.param("gb", Unit.GIGABIT, id="gb"),
            pytest.param("TB", Unit.TERABYTE, id="TB"),
            pytest.param("tb", Unit.TERABIT, id="tb"),
            pytest.param("PB", Unit.PETABYTE, id="PB"),
            pytest.param("Pb", Unit.PETABIT, id="Pb"),
            pytest.param("EB", Unit.EXABYTE, id="EB"),
            pytest.param("e", Unit.EXABIT, id="e"),
            # Surrounding whitespace
            pytest.param("  MB ", Unit.MEGABYTE, id="padded-MB"),
            pytest.param("\tkilobyte\n", Unit.KILOBYTE, id="padded-kilobyte"),
        ],
    )
    def test_parse(self, text, expected):
        assert parse_unit(text) is expected

    @pytest.mark.parametrize(
        "text",
        [
            pytest.param("", id="empty"),
            pytest.param("   ", id="blank"),
            pytest.param("kibibit", id="iec-bit-name"),
            pytest.param("kibit", id="iec-bit-abbr"),
            pytest.param("mB", id="mB"),
            pytest.param("gB", id="gB"),
            pytest.param("bytes", id="plural"),
            pytest.param("zettabyte", id="zettabyte"),
            pytest.param("ZB", id="ZB"),
            pytest.param("A", id="auto-is-not-a-unit"),
            pytest.param("K B", id="inner-space"),
        ],
    )
    def test_unrecognized(self, text):
        with raises(UnrecognizedUnitError) as exc_info:
            parse_unit(text)
        assert exc_info.value.text == text

    @pytest.mark.parametrize("value", [None, 3, Unit.BYTE, b"MB"])
    def test_non_str(self, value):
        with raises(TypeError, match=r"unit text must be str"):
            parse_unit(value)

    def test_every_name_and_abbreviation_parses(self):
        for info in UNITS:
            assert parse_unit(info.name) is info.unit
            assert parse_unit(info.name.upper()) is info.unit
            assert parse_unit(info.abbreviation) is info.unit
            assert parse_unit(info.iec_abbreviation) is info.unit

    def test_aliases_and_synonyms_parse(self):
        for unit, aliases in UnitsConf.ABBREVIATION_ALIASES.items():
            for alias in aliases:
                assert parse_unit(alias) is unit
        for unit, synonyms in UnitsConf.NAME_SYNONYMS.items():
            for synonym in synonyms:
                assert parse_unit(synonym.upper()) is unit
