"""
Formatting helpers for exception messages.

Values passed to the formatter by callers can be anything; these helpers render
them as short, safe type-value pairs so error messages stay readable.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_type(obj: Any, *, max_repr: int = 120) -> str:
    """Format the type of an object (or a type itself) as '<type: name>'.

    Examples:
        >>> fmt_type(42)
        '<type: int>'
        >>> fmt_type(float)
        '<type: float>'
    """
    target_type = obj if isinstance(obj, type) else type(obj)
    type_name = getattr(target_type, "__name__", None) or str(target_type)
    return f"<type: {_fmt_truncate(type_name, max_repr)}>"


def fmt_value(x: Any, *, max_repr: int = 120) -> str:
    """
    Format a single value as a type-value pair like '<int: 42>'.

    Broken __repr__ implementations are reported instead of raised, and
    long reprs are truncated with '...'. Inner '>' is escaped so the
    wrapper brackets stay unambiguous.

    Examples:
        >>> fmt_value(3.5)
        '<float: 3.5>'
        >>> fmt_value("abc")
        "<str: 'abc'>"
    """
    t = type(x).__name__
    try:
        base_repr = repr(x)
    except Exception as e:
        base_repr = f"<{t} object (repr failed: {type(e).__name__})>"

    base_repr = base_repr.replace(">", "\\>")
    return f"<{t}: {_fmt_truncate(base_repr, max_repr)}>"


# Private Methods ------------------------------------------------------------------------------------------------------

def _fmt_truncate(s: str, max_len: int, ellipsis: str = "...") -> str:
    """Truncate s to at most max_len characters, ending with the ellipsis."""
    if max_len <= 0 or len(s) <= max_len:
        return s
    if max_len <= len(ellipsis):
        return ellipsis[:max_len]
    return s[:max_len - len(ellipsis)] + ellipsis
