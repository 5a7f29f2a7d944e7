#
# floatfmt - Digit Extraction & Rounding Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from floatfmt.digits import Significand, extract_digits, round_digits


# Local Classes & Methods ----------------------------------------------------------------------------------------------

class TestExtractDigits:
    @pytest.mark.parametrize(
        ("text", "digits", "exponent"),
        [
            pytest.param("3.14159", b"314159", -5, id="plain"),
            pytest.param("1200.0", b"12", 2, id="integer-trailing-zeroes"),
            pytest.param("100", b"1", 2, id="no-point"),
            pytest.param("1005.0", b"1005", 0, id="inner-zeroes-flushed"),
            pytest.param("0.0001234", b"1234", -7, id="fraction-leading-zeroes"),
            pytest.param("0.105", b"105", -3, id="fraction-inner-zero"),
            pytest.param("1.234E-05", b"1234", -8, id="exponent-negative"),
            pytest.param("1e+16", b"1", 16, id="exponent-lowercase-plus"),
            pytest.param("1.5E+300", b"15", 299, id="exponent-large"),
            pytest.param("-12,345.678", b"12345678", -3, id="sign-and-grouping-ignored"),
            pytest.param("0.0", b"0", 0, id="zero"),
            pytest.param("-0.0", b"0", 0, id="negative-zero"),
        ],
    )
    def test_significand(self, text, digits, exponent):
        assert extract_digits(text) == Significand(digits, exponent)

    def test_locale_separator(self):
        """With ',' as separator, '.' is just a grouping character."""
        assert extract_digits("-12.345,678", separator=",") == Significand(b"12345678", -3)

    @pytest.mark.parametrize(
        ("text", "separator", "marker", "digits", "exponent"),
        [
            pytest.param("1.5x10^-07", ".", "x10^", b"15", -8, id="multi-char"),
            pytest.param("2,5D3", ",", "d", b"25", 2, id="ignores-case"),
            pytest.param("12.5", ".", "x10^", b"125", -1, id="absent"),
        ],
    )
    def test_exponent_marker(self, text, separator, marker, digits, exponent):
        sig = extract_digits(text, separator=separator, exponent_marker=marker)
        assert sig == Significand(digits, exponent)

    def test_malformed_exponent_propagates(self):
        with pytest.raises(ValueError):
            extract_digits("1.5Ex")

    def test_derived_properties(self):
        sig = extract_digits("0.0001234")
        assert sig.n_digits == 4
        assert sig.adjusted_exponent == -4


class TestRoundDigits:
    @pytest.mark.parametrize(
        ("digits", "round_pos", "half_down", "expected", "count"),
        [
            pytest.param(b"314159", 2, False, b"314159", 6, id="below-five"),
            pytest.param(b"125", 1, True, b"125", 3, id="exact-tie-half-down"),
            pytest.param(b"125", 1, False, b"135", 3, id="exact-tie-half-up"),
            pytest.param(b"1251", 1, True, b"1351", 4, id="five-not-last-rounds-up"),
            pytest.param(b"1995", 2, False, b"2005", 4, id="carry-stops"),
            pytest.param(b"9995", 2, False, b"10005", 5, id="all-nines-grows"),
            pytest.param(b"99", -1, False, b"199", 3, id="round-to-nothing-carry"),
            pytest.param(b"49", -1, False, b"49", 2, id="round-to-nothing-drop"),
            pytest.param(b"123", 2, False, b"123", 3, id="nothing-after-position"),
        ],
    )
    def test_round(self, digits, round_pos, half_down, expected, count):
        buf = bytearray(digits)
        assert round_digits(buf, round_pos, half_down) == count
        assert bytes(buf) == expected

    def test_returns_buffer_length(self):
        buf = bytearray(b"96")
        n = round_digits(buf, -1, half_down=False)
        assert n == len(buf) == 3
