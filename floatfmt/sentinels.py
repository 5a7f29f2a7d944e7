"""
Sentinel objects for arguments where None is not a good "not given" marker.

Sentinels:
    UNSET: Optional argument was not provided (e.g. precision of a directive)
    DEFAULT: Use the configured or calculated default (e.g. formatter locale)

Helper Functions:
    ifunset: Return default if value is UNSET, otherwise return value
    ifnotdefault: Return default if value is DEFAULT, otherwise return value

Example:
    >>> def fmt(value: float, precision: int | UnsetType = UNSET) -> str:
    ...     precision = ifunset(precision, default=6)
"""

from typing import Any, Callable, Final

__all__ = [
    'UNSET',
    'DEFAULT',
    'UnsetType',
    'DefaultType',
    'ifunset',
    'ifnotdefault',
]


# Base Sentinel --------------------------------------------------------------------------------------------------------

class _SentinelBase:
    """
    Base class for singleton sentinels compared by identity.

    Every subclass has exactly one instance, created on first call.
    """
    __slots__ = ('_name',)

    _name: str
    _instances: dict = {}

    def __new__(cls) -> '_SentinelBase':
        instance = _SentinelBase._instances.get(cls)
        if instance is None:
            instance = super().__new__(cls)
            instance._name = cls.__name__.removesuffix("Type").upper()
            _SentinelBase._instances[cls] = instance
        return instance

    def __repr__(self) -> str:
        return f'<{self._name}>'

    def __eq__(self, other: Any) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple:
        """Unpickle to the singleton instance."""
        return (self.__class__, ())


# Sentinel Types -------------------------------------------------------------------------------------------------------

class UnsetType(_SentinelBase):
    """
    Sentinel type for UNSET.

    Distinguishes 'not provided' from a provided value, including 0.
    A printf precision of 0 and a missing precision format differently.
    """
    __slots__ = ()


class DefaultType(_SentinelBase):
    """
    Sentinel type for DEFAULT.

    Signals that the callee should use its configured default value.
    """
    __slots__ = ()

    def __bool__(self) -> bool:
        """DEFAULT stands for a present value, so it is truthy."""
        return True


# Sentinel Objects -----------------------------------------------------------------------------------------------------

UNSET: Final[UnsetType] = UnsetType()
"""Sentinel representing an unprovided optional argument. Check with `is UNSET`."""

DEFAULT: Final[DefaultType] = DefaultType()
"""Sentinel signaling use of a configured default value."""


# Helper Functions -----------------------------------------------------------------------------------------------------

def _if_sentinel(
        value: Any,
        sentinel: Any,
        *,
        default: Any = None,
        default_factory: Callable[[], Any] | None = None
) -> Any:
    """
    Return value unless it is the sentinel, otherwise the default.

    Raises:
        ValueError: If both default and default_factory are provided.
    """
    if value is not sentinel:
        return value

    if default_factory is not None and default is not None:
        raise ValueError("Cannot specify both default and default_factory")

    if default_factory is not None:
        return default_factory()

    return default


def ifunset(value: Any, *, default: Any = None, default_factory: Callable[[], Any] | None = None) -> Any:
    """
    Return value if it's not UNSET, otherwise return default.

    Example:
        >>> ifunset(UNSET, default=6)
        6
        >>> ifunset(0, default=6)
        0
    """
    return _if_sentinel(value, UNSET, default=default, default_factory=default_factory)


def ifnotdefault(value: Any, *, default: Any = None, default_factory: Callable[[], Any] | None = None) -> Any:
    """
    Return value if it's not DEFAULT, otherwise return default.

    Example:
        >>> ifnotdefault(DEFAULT, default="en")
        'en'
        >>> ifnotdefault("de", default="en")
        'de'
    """
    return _if_sentinel(value, DEFAULT, default=default, default_factory=default_factory)
