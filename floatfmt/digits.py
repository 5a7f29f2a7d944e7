"""
Decimal significand extraction and printf-style digit rounding.

A finite double is formatted from its shortest round-trip decimal text. That text
is reparsed into a compact significand: the significant ASCII digits plus a power
of ten locating the decimal point, with leading and trailing zeros elided. The
layout policies then round the digit buffer at the position their precision asks
for, using Ruby sprintf's tie-break rules.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass

__all__ = [
    'Significand',
    'extract_digits',
    'round_digits',
]

ZERO = ord("0")
FIVE = ord("5")
NINE = ord("9")
ONE = ord("1")


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class Significand:
    """
    Exact decimal form of a finite value: int(digits) * 10**exponent.

    Attributes:
        digits: ASCII digits without leading or trailing zeros, b"0" for zero.
        exponent: Power of ten of the last digit. Appending `exponent` zeros
            (or moving the point left by -exponent places) gives the magnitude.

    Examples:
        >>> Significand(b"314159", -5).adjusted_exponent    # 3.14159
        0
        >>> Significand(b"12", 2).adjusted_exponent         # 1200
        3
    """
    digits: bytes
    exponent: int

    @property
    def n_digits(self) -> int:
        return len(self.digits)

    @property
    def adjusted_exponent(self) -> int:
        """Exponent of the leading digit, as shown by %e."""
        return self.exponent + len(self.digits) - 1


# Methods --------------------------------------------------------------------------------------------------------------

def extract_digits(text: str, *, separator: str = ".", exponent_marker: str = "E") -> Significand:
    """
    Reparse a rendered decimal number into a Significand.

    Args:
        text: Decimal text such as '-12,345.678', '0.0001234' or '1.5E-07'.
            Sign and grouping characters are ignored; the exponent marker
            is followed by a signed integer.
        separator: The locale decimal separator splitting integer and fraction.
        exponent_marker: Marker before the power of ten, matched ignoring case.

    Returns:
        Significand with all leading and trailing zeros moved into the exponent.
        Text without any nonzero digit yields Significand(b"0", 0).

    Raises:
        ValueError: If the exponent part is not an integer. The text comes from
            a decimal renderer, so this is a contract violation upstream.

    Examples:
        >>> extract_digits("1200.0")
        Significand(digits=b'12', exponent=2)
        >>> extract_digits("0.0001234")
        Significand(digits=b'1234', exponent=-7)
        >>> extract_digits("1.234E-05")
        Significand(digits=b'1234', exponent=-8)
    """
    mantissa, exp_text = _split_exponent(text, exponent_marker)
    int_part, _, frac_part = mantissa.partition(separator)

    digits = bytearray()
    exponent = 0
    pending_zeroes = 0

    for ch in int_part:
        if ch == "0":
            if digits:
                pending_zeroes += 1
        elif "1" <= ch <= "9":
            digits += b"0" * pending_zeroes
            pending_zeroes = 0
            digits.append(ord(ch))

    # Position of the decimal point, counted in digits from the first significant one
    point_position = len(digits) + pending_zeroes

    for ch in frac_part:
        if ch == "0":
            if digits:
                pending_zeroes += 1
            else:
                exponent -= 1
        elif "1" <= ch <= "9":
            digits += b"0" * pending_zeroes
            pending_zeroes = 0
            digits.append(ord(ch))

    if exp_text is not None:
        exponent += int(exp_text)
    exponent += point_position - len(digits)

    if not digits:
        return Significand(b"0", 0)
    return Significand(bytes(digits), exponent)


def round_digits(digits: bytearray, round_pos: int, half_down: bool) -> int:
    """
    Round a digit buffer in place so that digits[round_pos] is the last kept digit.

    The decision digit is the one right after round_pos. Digits below '5' round
    down. A '5' rounds up, except when half_down is set and that '5' is the very
    last digit of the buffer: an exact tie then rounds down. This reproduces
    Ruby float formatting, which rounds nnn5nnn up but not nnn5 for %e and %g.

    A carry out of the leftmost digit (all nines, or round_pos < 0 as in "%.0f" of
    0.99) prepends a '1' and grows the buffer by one. Digits after round_pos are
    left untouched and the exponent is not adjusted: callers re-derive their
    integer/fraction split from the returned length.

    Args:
        digits: Mutable ASCII digit buffer, changed in place.
        round_pos: Index of the last digit to keep; may be -1.
        half_down: Round an exact trailing '5' down instead of up.

    Returns:
        The new digit count, len(digits).

    Examples:
        >>> buf = bytearray(b"9995")
        >>> round_digits(buf, 2, half_down=False), bytes(buf)
        (5, b'10005')
        >>> buf = bytearray(b"125")
        >>> round_digits(buf, 1, half_down=True), bytes(buf)
        (3, b'125')
    """
    n_digits = len(digits)
    nxt = round_pos + 1
    if (nxt >= n_digits
            or digits[nxt] < FIVE
            or (half_down and digits[nxt] == FIVE and nxt == n_digits - 1)):
        return n_digits

    if round_pos < 0:
        digits.insert(0, ONE)
        return len(digits)

    pos = round_pos
    while pos >= 0 and digits[pos] == NINE:
        digits[pos] = ZERO
        pos -= 1
    if pos < 0:
        digits.insert(0, ONE)
    else:
        digits[pos] += 1
    return len(digits)


# Private Methods ------------------------------------------------------------------------------------------------------

def _split_exponent(text: str, exponent_marker: str) -> tuple[str, str | None]:
    """Split text at the first exponent marker into (mantissa, exponent text or None)."""
    pos = text.upper().find(exponent_marker.upper())
    if pos < 0:
        return text, None
    return text[:pos], text[pos + len(exponent_marker):]
