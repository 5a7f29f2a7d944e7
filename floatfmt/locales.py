"""
Locale number symbols, the process-wide locale cache and the decimal renderer.

The formatter never converts a double to decimal digits itself. It asks a decimal
rendering service for a locale-formatted, round-tripping string and reparses it.
Both the rendering and the decimal separator depend on locale symbols, which are
resolved once per locale and cached for the life of the process.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Mapping

# Local ----------------------------------------------------------------------------------------------------------------
from .tools import fmt_value

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class LocaleSymbols:
    """
    Number formatting symbols of one locale.

    Attributes:
        name: Normalized locale name the symbols were resolved for.
        decimal_separator: Separator between integer and fraction digits.
        grouping_separator: Thousands separator in the integer part.
        exponent_marker: Marker before the power of ten in rendered text.
    """
    name: str
    decimal_separator: str = "."
    grouping_separator: str = ","
    exponent_marker: str = "E"

    def __post_init__(self):
        if len(self.decimal_separator) != 1:
            raise ValueError(f"decimal_separator must be a single character, got {fmt_value(self.decimal_separator)}")
        if self.decimal_separator.isdigit() or self.decimal_separator == self.grouping_separator:
            raise ValueError(
                f"decimal_separator {fmt_value(self.decimal_separator)} clashes with digits or grouping separator"
            )
        if not self.exponent_marker or self.exponent_marker[0].isdigit():
            raise ValueError(
                f"exponent_marker must be non-empty and not start with a digit, got {fmt_value(self.exponent_marker)}"
            )


# @formatter:off

class LocaleConf:
    """
    Built-in locale symbol table.

    Attributes:
        ROOT: Fallback symbols for locales missing from SYMBOLS.
        SYMBOLS: Symbols keyed by normalized name, either a language ('de')
            or a language with region ('de_ch'). Lookup tries the full name
            first, then the language.
    """

    ROOT = LocaleSymbols("root", ".", ",")

    SYMBOLS = {
        "en":    LocaleSymbols("en", ".", ","),
        "de":    LocaleSymbols("de", ",", "."),
        "de_ch": LocaleSymbols("de_ch", ".", "'"),
        "es":    LocaleSymbols("es", ",", "."),
        "fr":    LocaleSymbols("fr", ",", " "),
        "it":    LocaleSymbols("it", ",", "."),
    }

# @formatter:on


class LocaleCache:
    """
    Process-wide cache of resolved LocaleSymbols keyed by locale name.

    Entries are resolved lazily on first access and never invalidated. Reads of
    a populated entry take no lock; first-time population is serialized by a
    lock scoped to this cache, so concurrent first lookups resolve once.

    Args:
        resolver: Callable mapping a normalized locale name to LocaleSymbols.
            Defaults to resolve_locale() over LocaleConf.SYMBOLS.

    Examples:
        >>> cache = LocaleCache()
        >>> cache.get("de_DE.UTF-8").decimal_separator
        ','
        >>> cache.decimal_separator("en")
        b'.'
    """

    def __init__(self, resolver: Callable[[str], LocaleSymbols] | None = None):
        self._resolver = resolver or resolve_locale
        self._entries: dict[str, LocaleSymbols] = {}
        self._lock = threading.Lock()

    def __contains__(self, locale: str) -> bool:
        return normalize_locale(locale) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, locale: str) -> LocaleSymbols:
        """Return symbols for locale, resolving and caching them on first use."""
        key = normalize_locale(locale)
        symbols = self._entries.get(key)
        if symbols is not None:
            return symbols

        with self._lock:
            symbols = self._entries.get(key)
            if symbols is None:
                symbols = self._resolver(key)
                if not isinstance(symbols, LocaleSymbols):
                    raise TypeError(f"locale resolver must return LocaleSymbols, got {fmt_value(symbols)}")
                self._entries[key] = symbols
                logger.debug("Resolved locale %r to %r", key, symbols)
            return symbols

    def decimal_separator(self, locale: str) -> bytes:
        """Return the decimal separator of locale as UTF-8 bytes."""
        return self.get(locale).decimal_separator.encode("utf-8")


# Methods --------------------------------------------------------------------------------------------------------------

def normalize_locale(locale: str) -> str:
    """
    Normalize a locale name to the lowercase 'language[_region]' form.

    Encoding and modifier suffixes are dropped and '-' is treated like '_'.

    Examples:
        >>> normalize_locale("en_US.UTF-8")
        'en_us'
        >>> normalize_locale("de-CH")
        'de_ch'
        >>> normalize_locale("sr_RS@latin")
        'sr_rs'
    """
    if not isinstance(locale, str):
        raise TypeError(f"locale must be str, got {fmt_value(locale)}")
    name = locale.split(".", 1)[0].split("@", 1)[0]
    name = name.strip().replace("-", "_").lower()
    if not name:
        raise ValueError(f"locale name cannot be empty, got {fmt_value(locale)}")
    return name


def resolve_locale(locale: str, table: Mapping[str, LocaleSymbols] | None = None) -> LocaleSymbols:
    """
    Look up symbols for a normalized locale name, falling back to the language, then ROOT.

    Examples:
        >>> resolve_locale("de_at").decimal_separator
        ','
        >>> resolve_locale("xx").name
        'root'
    """
    table = LocaleConf.SYMBOLS if table is None else table
    if locale in table:
        return table[locale]
    language = locale.split("_", 1)[0]
    if language in table:
        return table[language]
    return LocaleConf.ROOT


def render_decimal(value: float, symbols: LocaleSymbols) -> str:
    """
    Render a double as locale-formatted, round-tripping decimal text.

    Digits are the shortest ones that read back as the same double (Python's
    repr). The integer part is grouped and the fraction is introduced by the
    locale decimal separator. Values repr shows in exponent form keep it, with
    the locale exponent marker.

    Examples:
        >>> render_decimal(-12345.678, LocaleConf.SYMBOLS["de"])
        '-12.345,678'
        >>> render_decimal(1.5e-07, LocaleConf.SYMBOLS["en"])
        '1.5E-07'
    """
    text = repr(float(value))
    mantissa, marker, exp_text = text.partition("e")
    sign = "-" if mantissa.startswith("-") else ""
    int_part, _, frac_part = mantissa.lstrip("-").partition(".")

    rendered = sign + _group_digits(int_part, symbols.grouping_separator)
    if frac_part:
        rendered += symbols.decimal_separator + frac_part
    if marker:
        rendered += symbols.exponent_marker + exp_text
    return rendered


# Private Methods ------------------------------------------------------------------------------------------------------

def _group_digits(int_part: str, grouping_separator: str) -> str:
    """Insert the grouping separator between groups of three digits, from the right."""
    head = len(int_part) % 3 or 3
    groups = [int_part[:head]] + [int_part[i:i + 3] for i in range(head, len(int_part), 3)]
    return grouping_separator.join(groups)
