"""
UNSET sentinel for keyword overrides of abbreviation options.

UNSET marks an argument that was not provided, so that None stays a valid
explicit value meaning "use the documented default".

Example:
    >>> opts = Options(precision=2)
    >>> opts.merge(precision=UNSET).precision   # inherited
    2
    >>> opts.merge(precision=None).precision    # reset to default
"""

from typing import Any, Final

__all__ = [
    'UNSET',
    'UnsetType',
    'ifnotunset',
]


# Sentinel Types -------------------------------------------------------------------------------------------------------

class UnsetType:
    """
    Sentinel type for UNSET.

    Singleton, falsy, compared by identity and preserved through pickling.
    """
    __slots__ = ()

    _instance: 'UnsetType | None' = None

    def __new__(cls) -> 'UnsetType':
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


# Sentinel Objects -----------------------------------------------------------------------------------------------------

UNSET: Final[UnsetType] = UnsetType()
"""
Sentinel representing an unprovided optional argument.

Use with identity check: `if arg is UNSET:`
"""


# Helper Functions -----------------------------------------------------------------------------------------------------

def ifnotunset(value: Any, *, default: Any = None) -> Any:
    """
    Return value if it's not UNSET, otherwise return default.

    Example:
        >>> ifnotunset(UNSET, default=1)
        1
        >>> ifnotunset(None, default=1) is None
        True
    """
    return default if value is UNSET else value
