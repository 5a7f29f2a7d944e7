"""
printf-style formatting of one double for %f, %e, %g and %a directives.

Reproduces Ruby's sprintf float semantics byte for byte:
its own digit extraction and rounding instead of the platform formatter, an
asymmetric half-down tie-break for %e and %g, 2-or-3 digit exponents and %g
trailing-zero suppression. A directive parser upstream supplies conversion,
width, precision and flags; this module returns the bytes for that directive.

Examples:
    >>> format_float("f", 0, 2, 3.14159)
    b'3.14'
    >>> format_float("e", 12, 2, -12345.0, "0")
    b'-0001.23e+04'
    >>> format_float_str("g", -8, UNSET, 0.0001234)
    '0.0001234'
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
from typing import Callable, Final

# Local ----------------------------------------------------------------------------------------------------------------
from .digits import extract_digits
from .hexfloat import hex_float
from .layout import LAYOUTS, FormatFlags, LayoutSpec, layout_hex, layout_special, sign_of
from .locales import LocaleCache, LocaleSymbols, render_decimal as _render_decimal
from .numeric import std_double
from .sentinels import DEFAULT, UNSET, DefaultType, UnsetType, ifnotdefault, ifunset
from .tools import fmt_type, fmt_value

__all__ = [
    'FloatConf',
    'FloatFormatter',
    'FormatFlags',
    'LOCALE_CACHE',
    'format_float',
    'format_float_str',
]


# @formatter:off

class FloatConf:
    """
    Default configuration constants for float formatting.

    Attributes:
        CONVERSIONS: Supported conversion characters.
        DEFAULT_LOCALE: Locale used for the decimal separator unless configured.
        DEFAULT_PRECISION: Precision of %f, %e and %g when none is given.
        INF_LITERAL: Digits printed for +/-Infinity.
        NAN_LITERAL: Digits printed for NaN.
    """
    CONVERSIONS = "fFeEgGaA"
    DEFAULT_LOCALE = "en"
    DEFAULT_PRECISION = 6
    INF_LITERAL = b"Inf"
    NAN_LITERAL = b"NaN"

# @formatter:on

LOCALE_CACHE: Final[LocaleCache] = LocaleCache()
"""Process-wide locale cache shared by formatters that are not given their own."""


# Classes --------------------------------------------------------------------------------------------------------------

class FloatFormatter:
    """
    Formats doubles for printf directives in one locale.

    Instances hold no mutable state of their own and can be shared between
    threads; the only shared mutable state is the injected LocaleCache.

    Args:
        locale: Locale name for the decimal separator, DEFAULT for FloatConf.DEFAULT_LOCALE.
        cache: Locale cache to resolve symbols through, LOCALE_CACHE if None.
        render_decimal: Decimal rendering service, (value, symbols) -> text.
            Must produce round-tripping digits in the locale's notation.
        render_hex: Hexadecimal float renderer, (value, precision, upper) -> text,
            equivalent to C's %a. precision is None when not given.

    Examples:
        >>> FloatFormatter().format("f", 10, 2, -3.1, FormatFlags(zero=True))
        b'-000003.10'
        >>> FloatFormatter("de_DE").format("g", 0, UNSET, 1.5)
        b'1,5'
    """

    def __init__(
            self,
            locale: str | DefaultType = DEFAULT,
            *,
            cache: LocaleCache | None = None,
            render_decimal: Callable[[float, LocaleSymbols], str] | None = None,
            render_hex: Callable[[float, int | None, bool], str] | None = None,
    ):
        self._locale = ifnotdefault(locale, default=FloatConf.DEFAULT_LOCALE)
        if not isinstance(self._locale, str):
            raise TypeError(f"locale must be str or DEFAULT, got {fmt_type(self._locale)}")
        self._cache = LOCALE_CACHE if cache is None else cache
        self._render_decimal = render_decimal or _render_decimal
        self._render_hex = render_hex or hex_float

    def __repr__(self) -> str:
        return f"{type(self).__name__}(locale={self._locale!r})"

    @property
    def locale(self) -> str:
        return self._locale

    def format(
            self,
            conversion: str,
            width: int,
            precision: int | UnsetType,
            value,
            flags: FormatFlags | str | None = None,
    ) -> bytes:
        """
        Format value for one %-directive.

        Args:
            conversion: One of 'f', 'F', 'e', 'E', 'g', 'G', 'a', 'A'.
            width: Minimum field width; 0 or negative for none.
            precision: Digits after the point (%f, %e, %a) or significant digits
                (%g); UNSET for the default.
            value: float, or any value std_double() accepts.
            flags: FormatFlags, printf flag characters like "-#", or None.

        Returns:
            The formatted bytes, exactly max(width, natural length) long.

        Raises:
            ValueError: For an unknown conversion, a negative precision, unknown
                flag characters, or %a/%A with an explicit precision of 0.
            TypeError: For non-int width/precision, unsupported flags or values.
        """
        _check_conversion(conversion)
        _check_width(width)
        _check_precision(precision)
        flags = _coerce_flags(flags)
        value = std_double(value)

        # NaN compares false both ways and is never negative
        negative = value < 0.0 or (value == 0.0 and math.copysign(1.0, value) < 0)
        sign = sign_of(negative, flags)

        if math.isnan(value):
            return layout_special(FloatConf.NAN_LITERAL, sign, width, flags)
        if math.isinf(value):
            return layout_special(FloatConf.INF_LITERAL, sign, width, flags)

        if conversion in "aA":
            return self._format_hex(conversion, width, precision, value, sign, flags)

        symbols = self._cache.get(self._locale)
        significand = extract_digits(
            self._render_decimal(value, symbols),
            separator=symbols.decimal_separator,
            exponent_marker=symbols.exponent_marker,
        )
        spec = LayoutSpec(
            significand=significand,
            sign=sign,
            width=width,
            precision=ifunset(precision, default=FloatConf.DEFAULT_PRECISION),
            flags=flags,
            separator=symbols.decimal_separator.encode("utf-8"),
            upper=conversion.isupper(),
        )
        return LAYOUTS[conversion](spec)

    def _format_hex(self, conversion, width, precision, value, sign, flags) -> bytes:
        if precision is not UNSET and precision == 0:
            raise ValueError(f"format flags a/A do not support precision 0, got %.0{conversion}")
        upper = conversion == "A"
        literal = self._render_hex(value, None if precision is UNSET else precision, upper)
        return layout_hex(literal, sign, width, flags, upper=upper)


# Methods --------------------------------------------------------------------------------------------------------------

_DEFAULT_FORMATTER = FloatFormatter()


def format_float(
        conversion: str,
        width: int,
        precision: int | UnsetType,
        value,
        flags: FormatFlags | str | None = None,
) -> bytes:
    """
    Format value for one %-directive in the default locale.

    See FloatFormatter.format() for arguments and errors.

    Examples:
        >>> format_float("f", 0, 2, 9.995)
        b'10.00'
        >>> format_float("g", 0, 3, 123456.0)
        b'1.23e+05'
        >>> format_float("f", 6, 0, float("-inf"))
        b'  -Inf'
    """
    return _DEFAULT_FORMATTER.format(conversion, width, precision, value, flags)


def format_float_str(
        conversion: str,
        width: int,
        precision: int | UnsetType,
        value,
        flags: FormatFlags | str | None = None,
) -> str:
    """Same as format_float(), decoded to str."""
    return format_float(conversion, width, precision, value, flags).decode("utf-8")


# Private Methods ------------------------------------------------------------------------------------------------------

def _check_conversion(conversion: str) -> None:
    if not isinstance(conversion, str):
        raise TypeError(f"conversion must be str, got {fmt_type(conversion)}")
    if len(conversion) != 1 or conversion not in FloatConf.CONVERSIONS:
        raise ValueError(
            f"conversion must be one of {FloatConf.CONVERSIONS!r}, got {fmt_value(conversion)}"
        )


def _check_width(width: int) -> None:
    if isinstance(width, bool) or not isinstance(width, int):
        raise TypeError(f"width must be int, got {fmt_type(width)}")


def _check_precision(precision: int | UnsetType) -> None:
    if precision is UNSET:
        return
    if isinstance(precision, bool) or not isinstance(precision, int):
        raise TypeError(f"precision must be int or UNSET, got {fmt_type(precision)}")
    if precision < 0:
        raise ValueError(f"precision must be non-negative, got {fmt_value(precision)}")


def _coerce_flags(flags: FormatFlags | str | None) -> FormatFlags:
    if flags is None:
        return FormatFlags()
    if isinstance(flags, FormatFlags):
        return flags
    if isinstance(flags, str):
        return FormatFlags.from_chars(flags)
    raise TypeError(f"flags must be FormatFlags, str or None, got {fmt_type(flags)}")
