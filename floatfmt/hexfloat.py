"""
Hexadecimal floating-point rendering compatible with C's %a conversion.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math

# Hex digits after the point in a normalized binary64 significand (52 bits)
FRACTION_HEX_DIGITS = 13


# Methods --------------------------------------------------------------------------------------------------------------

def hex_float(value: float, precision: int | None = None, upper: bool = False) -> str:
    """
    Render a double the way C printf("%a") does.

    Normal values print as 0x1.<hex>p<exp>, subnormals keep float.hex()'s
    0x0.<hex>p-1022 form. Without precision, trailing zero hex digits (and a
    bare point) are dropped. With precision, the significand is rounded half to
    even to that many hex digits; a carry out of 0x1.fff... renormalizes to
    0x1.000... with the binary exponent bumped by one.

    Args:
        value: Any double.
        precision: Number of hex digits after the point, or None for the
            shortest exact form.
        upper: Render as %A (0X prefix, uppercase digits, P marker).

    Returns:
        Text with an optional leading '-', for example '-0x1.8p+1'.

    Examples:
        >>> hex_float(1.0)
        '0x1p+0'
        >>> hex_float(-3.0)
        '-0x1.8p+1'
        >>> hex_float(0.1, 3)
        '0x1.99ap-4'
        >>> hex_float(255.5, upper=True)
        '0X1.FFP+7'
    """
    if precision is not None and precision < 0:
        raise ValueError(f"precision must be non-negative, got {precision}")

    if not math.isfinite(value):
        text = "nan" if math.isnan(value) else ("-inf" if value < 0 else "inf")
        return text.upper() if upper else text

    sign = "-" if math.copysign(1.0, value) < 0 else ""
    head, _, exp_text = float.hex(abs(value)).partition("p")
    lead_text, _, frac_text = head[2:].partition(".")
    lead = int(lead_text)
    exponent = int(exp_text)
    frac_text = frac_text.ljust(FRACTION_HEX_DIGITS, "0")

    if precision is None:
        fraction = frac_text.rstrip("0")
    elif precision >= FRACTION_HEX_DIGITS:
        fraction = frac_text.ljust(precision, "0")
    else:
        mantissa = (lead << (4 * FRACTION_HEX_DIGITS)) | int(frac_text, 16)
        shift = 4 * (FRACTION_HEX_DIGITS - precision)
        kept, dropped = divmod(mantissa, 1 << shift)
        half = 1 << (shift - 1)
        if dropped > half or (dropped == half and kept & 1):
            kept += 1
        lead, frac_bits = divmod(kept, 1 << (4 * precision))
        if lead > 1:
            lead = 1
            exponent += 1
        fraction = f"{frac_bits:0{precision}x}" if precision else ""

    text = f"{sign}0x{lead}" + (f".{fraction}" if fraction else "") + f"p{exponent:+d}"
    return text.upper() if upper else text
