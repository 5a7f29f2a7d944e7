#
# floatfmt - Hexadecimal Float Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import math

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from floatfmt.hexfloat import hex_float


# Local Classes & Methods ----------------------------------------------------------------------------------------------

class TestHexFloat:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            pytest.param(1.0, "0x1p+0", id="one"),
            pytest.param(0.5, "0x1p-1", id="half"),
            pytest.param(-3.0, "-0x1.8p+1", id="negative"),
            pytest.param(0.0, "0x0p+0", id="zero"),
            pytest.param(-0.0, "-0x0p+0", id="negative-zero"),
            pytest.param(0.1, "0x1.999999999999ap-4", id="full-precision"),
            pytest.param(5e-324, "0x0.0000000000001p-1022", id="subnormal"),
        ],
    )
    def test_shortest(self, value, expected):
        assert hex_float(value) == expected

    @pytest.mark.parametrize(
        ("value", "precision", "expected"),
        [
            pytest.param(0.1, 3, "0x1.99ap-4", id="round-up"),
            pytest.param(1.0, 2, "0x1.00p+0", id="zero-filled"),
            pytest.param(1.0, 15, "0x1.000000000000000p+0", id="beyond-mantissa"),
            pytest.param(1.25, 0, "0x1p+0", id="below-half"),
            pytest.param(1.5, 0, "0x1p+1", id="tie-to-even-carries"),
            pytest.param(float.fromhex("0x1.fffp+0"), 2, "0x1.00p+1", id="carry-renormalizes"),
            pytest.param(5e-324, 1, "0x0.0p-1022", id="subnormal-rounds-away"),
        ],
    )
    def test_precision(self, value, precision, expected):
        assert hex_float(value, precision) == expected

    def test_upper(self):
        assert hex_float(255.5, upper=True) == "0X1.FFP+7"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            pytest.param(math.nan, "nan", id="nan"),
            pytest.param(math.inf, "inf", id="inf"),
            pytest.param(-math.inf, "-inf", id="negative-inf"),
        ],
    )
    def test_non_finite(self, value, expected):
        assert hex_float(value) == expected

    @pytest.mark.parametrize("value", [0.1, -2.0 / 3.0, 1e300, 5e-324, 123.456])
    def test_shortest_reads_back(self, value):
        assert float.fromhex(hex_float(value)) == value

    def test_negative_precision_rejected(self):
        with pytest.raises(ValueError):
            hex_float(1.0, -1)
