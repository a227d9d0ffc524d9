"""
Sentinel object for distinguishing an unprovided argument from an explicit None.

Option classes use UNSET in their merge() methods: a parameter left UNSET is inherited
from the current instance, while None is a legitimate value (e.g. precision=None).

Example:
    >>> options = FormatOptions(precision=2)
    >>> options.merge(precision=None).precision is None
    True
    >>> options.merge().precision
    2
"""

from typing import Any, Final

__all__ = [
    'UNSET',
    'UnsetType',
    'ifnotunset',
]


class UnsetType:
    """
    Sentinel type for UNSET.

    Singleton optimized for identity checks, falsy, and pickled back to the same instance.
    """
    __slots__ = ()

    _instance: 'UnsetType | None' = None

    def __new__(cls) -> 'UnsetType':
        """Ensures singleton behavior."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return '<UNSET>'

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple:
        """Ensure pickling returns the singleton instance."""
        return (self.__class__, ())


UNSET: Final[UnsetType] = UnsetType()
"""
Sentinel representing an unprovided optional argument.

Use with identity check: `if arg is UNSET:`
"""


def ifnotunset(value: Any, *, default: Any = None) -> Any:
    """
    Return value if it's not UNSET, otherwise return default.

    Examples:
        >>> ifnotunset(UNSET, default=2)
        2
        >>> ifnotunset(None, default=2) is None
        True
    """
    return default if value is UNSET else value
