#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from floatfmt.formatter import FloatFormatter
from floatfmt.locales import LocaleCache


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def locale_cache() -> LocaleCache:
    """Fresh locale cache, isolated from the process-wide one."""
    return LocaleCache()


@pytest.fixture
def formatter(locale_cache) -> FloatFormatter:
    """Default-locale formatter backed by a fresh cache."""
    return FloatFormatter(cache=locale_cache)


@pytest.fixture
def fmt(formatter):
    """Format to str with the fixture formatter: fmt(conv, width, precision, value, flags)."""

    def _fmt(conversion, width, precision, value, flags=None) -> str:
        return formatter.format(conversion, width, precision, value, flags).decode("utf-8")

    return _fmt
