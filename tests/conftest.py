#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import locale

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from datasize.size import DataSize

# A data size just above 9 TB, used across formatter tables
BIG_BYTES = 9_995_326_316_544


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def big_size() -> DataSize:
    """DataSize of BIG_BYTES bytes."""
    return DataSize.from_bytes(BIG_BYTES)


@pytest.fixture
def c_locale():
    """Switch LC_NUMERIC to the C locale for the duration of a test."""
    saved = locale.setlocale(locale.LC_NUMERIC)
    locale.setlocale(locale.LC_NUMERIC, "C")
    try:
        yield
    finally:
        locale.setlocale(locale.LC_NUMERIC, saved)
