"""
Per-conversion layout of a rounded significand into printf output bytes.

One pure function per conversion character. Each takes the same immutable
LayoutSpec, rounds a private copy of the digit buffer as its precision requires,
and returns the padded bytes. Width handling is shared by all of them:

    [spaces] [sign] [zeros] body [spaces]

Leading spaces are used unless the zero flag or left-justify is set; zeros only
with the zero flag on finite values; trailing spaces only when left-justified.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import re
from dataclasses import dataclass
from typing import Callable

# Local ----------------------------------------------------------------------------------------------------------------
from .digits import Significand, round_digits, ZERO

__all__ = [
    'FormatFlags',
    'LayoutSpec',
    'LAYOUTS',
    'layout_fixed',
    'layout_exponential',
    'layout_general',
    'layout_hex',
    'layout_special',
    'sign_of',
]

# Exponent marker followed directly by a digit, i.e. missing its sign
_UNSIGNED_HEX_EXPONENT = re.compile(rb"([pP])(\d)")

_FLAG_CHARS = {" ": "space", "0": "zero", "+": "plus", "-": "minus", "#": "alternate"}


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class FormatFlags:
    """
    printf flags of one directive.

    Attributes:
        space: ' ' - a space in place of the sign of non-negative values.
        zero: '0' - pad with zeros between sign and digits.
        plus: '+' - always show a sign.
        minus: '-' - left-justify, pad with trailing spaces.
        alternate: '#' - keep the decimal point (and %g trailing zeros).

    Examples:
        >>> FormatFlags.from_chars("-#")
        FormatFlags(space=False, zero=False, plus=False, minus=True, alternate=True)
    """
    space: bool = False
    zero: bool = False
    plus: bool = False
    minus: bool = False
    alternate: bool = False

    @classmethod
    def from_chars(cls, chars: str) -> "FormatFlags":
        """Build flags from printf flag characters; repeats are allowed."""
        unknown = set(chars) - set(_FLAG_CHARS)
        if unknown:
            raise ValueError(f"unknown flag characters {''.join(sorted(unknown))!r} in {chars!r}")
        return cls(**{name: ch in chars for ch, name in _FLAG_CHARS.items()})


@dataclass(frozen=True)
class LayoutSpec:
    """
    Immutable inputs shared by the decimal layout policies.

    Attributes:
        significand: Digits and exponent of the absolute value.
        sign: Sign bytes, empty or one of b"-", b"+", b" ".
        width: Minimum field width including the sign; may be negative.
        precision: Resolved precision, never negative.
        flags: printf flags.
        separator: Decimal separator bytes of the locale.
        upper: Uppercase exponent marker (%E, %G).
    """
    significand: Significand
    sign: bytes
    width: int
    precision: int
    flags: FormatFlags
    separator: bytes = b"."
    upper: bool = False

    @property
    def exp_char(self) -> bytes:
        return b"E" if self.upper else b"e"


# Methods --------------------------------------------------------------------------------------------------------------

def sign_of(negative: bool, flags: FormatFlags) -> bytes:
    """Sign bytes for a value: '-' if negative, else '+' or ' ' per flags, else none."""
    if negative:
        return b"-"
    if flags.plus:
        return b"+"
    if flags.space:
        return b" "
    return b""


def layout_special(literal: bytes, sign: bytes, width: int, flags: FormatFlags) -> bytes:
    """Pad NaN/Inf literals. The zero flag does not apply to them."""
    return _pad(sign, literal, width, flags, zero_pad=False)


def layout_fixed(spec: LayoutSpec) -> bytes:
    """
    %f: every integer digit, then exactly `precision` fraction digits.

    Rounds half up; '#' keeps the decimal point at precision 0.

    Examples:
        3.14159, precision 2 -> b"3.14"
        9.995, precision 2   -> b"10.00"
        0.99, precision 0    -> b"1"
    """
    digits = bytearray(spec.significand.digits)
    exponent = spec.significand.exponent
    precision = spec.precision

    int_zeroes = max(0, exponent)
    int_digits, dec_digits, dec_zeroes = _split(len(digits), exponent)

    if precision < dec_zeroes + dec_digits:
        if precision < dec_zeroes:
            # Everything significant is below the last shown place
            dec_zeroes, dec_digits = precision, 0
        else:
            n_digits = len(digits)
            if round_digits(digits, int_digits + precision - dec_zeroes - 1, half_down=False) > n_digits:
                int_digits, dec_digits, dec_zeroes = _split(len(digits), exponent)
            dec_digits = precision - dec_zeroes

    body = _integer_part(digits, int_digits, int_zeroes)
    if precision > 0 or spec.flags.alternate:
        body += spec.separator
    if precision > 0:
        fraction = b"0" * dec_zeroes + digits[int_digits:int_digits + dec_digits]
        body += fraction + b"0" * (precision - len(fraction))
    return _pad(spec.sign, bytes(body), spec.width, spec.flags)


def layout_exponential(spec: LayoutSpec) -> bytes:
    """
    %e: one integer digit, `precision` fraction digits and a signed exponent.

    Exact ties at precision > 0 round down (see round_digits). The exponent has
    two digits, three when its magnitude exceeds 99.

    Examples:
        12345.0, precision 2 -> b"1.23e+04"
        1e-300, precision 0  -> b"1e-300"
    """
    digits = bytearray(spec.significand.digits)
    precision = spec.precision

    dec_digits = len(digits) - 1
    if precision < dec_digits:
        round_digits(digits, precision, half_down=precision != 0)
        dec_digits = min(len(digits) - 1, precision)
    exponent = spec.significand.exponent + len(digits) - 1

    body = digits[:1]
    if precision > 0:
        fraction = digits[1:1 + dec_digits]
        body += spec.separator + fraction + b"0" * (precision - len(fraction))
    elif spec.flags.alternate:
        body += spec.separator
    body += _exponent_suffix(exponent, spec.exp_char)
    return _pad(spec.sign, bytes(body), spec.width, spec.flags)


def layout_general(spec: LayoutSpec) -> bytes:
    """
    %g: `precision` significant digits in %e or %f style.

    Exponential style is chosen when the leading digit's exponent is below -4
    or the digit count before the point exceeds the precision, judged on the
    unrounded significand. Precision 0 counts as 1. Without '#', trailing
    fraction zeros are stripped together with a bare decimal point; with '#'
    the fraction is zero-filled to `precision` significant digits.

    Examples:
        0.0001234, precision 3 -> b"0.000123"
        123456.0, precision 3  -> b"1.23e+05"
        1.5, precision 6       -> b"1.5"
    """
    precision = spec.precision or 1
    significand = spec.significand
    if (significand.adjusted_exponent < -4
            or significand.exponent + significand.n_digits > precision):
        body = _general_exponential(spec, precision)
    else:
        body = _general_decimal(spec, precision)
    return _pad(spec.sign, body, spec.width, spec.flags)


def layout_hex(literal: str, sign: bytes, width: int, flags: FormatFlags, upper: bool = False) -> bytes:
    """
    %a: pad the text of an external hexadecimal-float renderer.

    The renderer's text carries its own '-', so only '+' or ' ' signs are
    prepended. An unsigned binary exponent gets an explicit '+'. Zero padding
    goes between the 0x/0X prefix and the significand.

    Examples:
        "0x1.8p1", width 0          -> b"0x1.8p+1"
        "0x1.8p+1", width 10, zero  -> b"0x0001.8p+1"
    """
    text = _UNSIGNED_HEX_EXPONENT.sub(rb"\1+\2", literal.encode("ascii"))
    if sign == b"-":
        sign = b""

    fill = width - len(sign) - len(text)
    if fill <= 0:
        return sign + text
    if flags.minus:
        return sign + text + b" " * fill
    if flags.zero:
        prefix = b"0X" if upper else b"0x"
        return sign + text.replace(prefix, prefix + b"0" * fill, 1)
    return b" " * fill + sign + text


# Private Methods ------------------------------------------------------------------------------------------------------

def _general_exponential(spec: LayoutSpec, precision: int) -> bytes:
    digits = bytearray(spec.significand.digits)
    # Precision counts the integer digit too
    precision -= 1

    dec_digits = len(digits) - 1
    if precision < dec_digits:
        round_digits(digits, precision, half_down=precision != 0)
        dec_digits = min(len(digits) - 1, precision)
    exponent = spec.significand.exponent + len(digits) - 1

    body = digits[:1]
    if spec.flags.alternate:
        fraction = digits[1:1 + dec_digits]
        body += spec.separator + fraction + b"0" * (precision - len(fraction))
    else:
        while dec_digits > 0 and digits[dec_digits] == ZERO:
            dec_digits -= 1
        if dec_digits > 0:
            body += spec.separator + digits[1:1 + dec_digits]
    body += _exponent_suffix(exponent, spec.exp_char)
    return bytes(body)


def _general_decimal(spec: LayoutSpec, precision: int) -> bytes:
    digits = bytearray(spec.significand.digits)
    exponent = spec.significand.exponent

    int_zeroes = max(0, exponent)
    int_digits, dec_digits, dec_zeroes = _split(len(digits), exponent)
    frac_precision = max(0, precision - (int_digits + int_zeroes))

    if frac_precision < dec_digits:
        n_digits = len(digits)
        if round_digits(digits, int_digits + frac_precision - 1, half_down=frac_precision != 0) > n_digits:
            old_int_digits = int_digits
            int_digits, dec_digits, dec_zeroes = _split(len(digits), exponent)
            # A carry into the integer part costs one fraction place; one that
            # only eats a leading fraction zero does not
            if int_digits > old_int_digits:
                frac_precision = max(0, frac_precision - 1)
        dec_digits = min(dec_digits, frac_precision)

    body = _integer_part(digits, int_digits, int_zeroes)
    if spec.flags.alternate:
        # Fraction places needed for `precision` significant digits
        wanted = precision - 1 - (exponent + len(digits) - 1)
        fraction = b"0" * dec_zeroes + digits[int_digits:int_digits + dec_digits]
        body += spec.separator + fraction + b"0" * (wanted - len(fraction))
    else:
        while dec_digits > 0 and digits[int_digits + dec_digits - 1] == ZERO:
            dec_digits -= 1
        if dec_digits > 0:
            body += spec.separator + b"0" * dec_zeroes + digits[int_digits:int_digits + dec_digits]
    return bytes(body)


def _split(n_digits: int, exponent: int) -> tuple[int, int, int]:
    """Return (int_digits, dec_digits, dec_zeroes) of a significand."""
    int_digits = max(0, min(n_digits + exponent, n_digits))
    dec_digits = n_digits - int_digits
    dec_zeroes = max(0, -(dec_digits + exponent))
    return int_digits, dec_digits, dec_zeroes


def _integer_part(digits: bytearray, int_digits: int, int_zeroes: int) -> bytearray:
    """Integer digits followed by their trailing zeros; at least one '0'."""
    if int_digits + int_zeroes == 0:
        return bytearray(b"0")
    return digits[:int_digits] + b"0" * int_zeroes


def _exponent_suffix(exponent: int, exp_char: bytes) -> bytes:
    """Marker, sign and at least two exponent digits: e+05, E-123."""
    sign = b"+" if exponent >= 0 else b"-"
    return exp_char + sign + b"%02d" % abs(exponent)


def _pad(sign: bytes, body: bytes, width: int, flags: FormatFlags, zero_pad: bool = True) -> bytes:
    fill = width - len(sign) - len(body)
    if fill <= 0:
        return sign + body
    if flags.minus:
        return sign + body + b" " * fill
    if flags.zero and zero_pad:
        return sign + b"0" * fill + body
    return b" " * fill + sign + body


LAYOUTS: dict[str, Callable[[LayoutSpec], bytes]] = {
    "f": layout_fixed,
    "F": layout_fixed,
    "e": layout_exponential,
    "E": layout_exponential,
    "g": layout_general,
    "G": layout_general,
}
