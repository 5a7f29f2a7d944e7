"""
Coerce numeric values from Python stdlib and third-party libraries to a double.

The formatter works on IEEE 754 binary64 values only. This module turns ints,
Decimals, Fractions, NumPy scalars and other float-like objects into a Python
float before any digit logic runs.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
import operator
from typing import Protocol, runtime_checkable

# Local ----------------------------------------------------------------------------------------------------------------
from .tools import fmt_type, fmt_value


@runtime_checkable
class SupportsFloat(Protocol):
    """Protocol for duck-typed numeric conversion."""

    def __float__(self) -> float: ...


def std_double(value) -> float:
    """
    Convert a numeric value to a Python float for formatting.

    Parameters
    ----------
    value : int, float, Decimal, Fraction or float-like
        Value to convert. Third-party scalars are supported via __index__
        (NumPy integers) and __float__ (NumPy floats, Decimal, Fraction).

    Returns
    -------
    float
        The value as a double. Special IEEE 754 values pass through unchanged,
        including the sign of -0.0.

    Raises
    ------
    TypeError
        For bool, None, str, bytes and any type without a numeric protocol,
        and for float-likes whose __float__ refuses the value (Decimal('sNaN')).

    Behavior Notes
    --------------
    **Overflow:** integers too large for a double become +/-inf, the same
    way Ruby converts a Bignum argument for %f.

        >>> std_double(10**400)
        inf
        >>> std_double(-10**400)
        -inf

    **Underflow:** values below ~5e-324 become 0.0 or -0.0 (sign preserved).

    Examples
    --------
    >>> std_double(3)
    3.0
    >>> std_double(Decimal('2.5'))
    2.5
    >>> std_double(Fraction(1, 4))
    0.25
    >>> std_double("1.5")
    Traceback (most recent call last):
        ...
    TypeError: cannot format <str: '1.5'> as a float
    """
    # bool is an int subclass, %f of true/false is a caller bug
    if isinstance(value, bool):
        raise TypeError(f"boolean values not supported, got {fmt_value(value)}")

    # Fast path, covers numpy.float64 (a float subclass)
    if isinstance(value, float):
        return float(value)

    if isinstance(value, (str, bytes, bytearray)) or value is None:
        raise TypeError(f"cannot format {fmt_value(value)} as a float")

    # True integers: Python int and NumPy integer types
    if isinstance(value, int) or hasattr(value, '__index__'):
        try:
            integer = operator.index(value)
        except (TypeError, ValueError) as e:
            raise TypeError(f"cannot convert {fmt_type(value)} to int via __index__: {e}") from e
        return _int_to_double(integer)

    if isinstance(value, SupportsFloat):
        try:
            return float(value)
        except OverflowError:
            # Fraction with a huge numerator/denominator ratio
            return math.inf if value > 0 else -math.inf
        except ValueError as e:
            # Decimal('sNaN') refuses float()
            raise TypeError(f"cannot format {fmt_value(value)} as a float: {e}") from e

    raise TypeError(f"cannot format {fmt_value(value)} as a float")


# Private Methods ------------------------------------------------------------------------------------------------------

def _int_to_double(integer: int) -> float:
    try:
        return float(integer)
    except OverflowError:
        return math.inf if integer > 0 else -math.inf
