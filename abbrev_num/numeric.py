"""
Standardize numeric types from Python stdlib and third-party libraries as Decimal.

Abbreviation scales values by powers of 1000 and rounds them to a fixed number of
decimal places, so inputs are normalized to exact decimal.Decimal first. Floats are
taken by their shortest repr (1.4 → Decimal('1.4')), not by their binary expansion.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import operator
from decimal import Decimal
from fractions import Fraction
from typing import Literal

# Local ----------------------------------------------------------------------------------------------------------------
from .tools import fmt_type, fmt_value

OnError = Literal["raise", "none"]

_NAN = Decimal("NaN")


# Methods --------------------------------------------------------------------------------------------------------------

def std_decimal(
        value,
        *,
        on_error: OnError = "raise",
) -> Decimal | None:
    """
    Convert a real number of any common type to decimal.Decimal or None.

    Parameters
    ----------
    value : various
        Numeric value to convert. Supports Python int/float/None, Decimal,
        Fraction, and third-party scalars via __index__, .item(), .value or
        __float__ protocols (NumPy, PyTorch, Astropy Quantity, etc.).

    on_error : {"raise", "none"}, default "raise"
        How to handle TYPE ERRORS (str, list, complex, bool, etc.):

        - "raise": Raise TypeError
        - "none": Return None

        Special values (inf, -inf, nan) are ALWAYS preserved as Decimal
        Infinity/NaN, regardless of this setting.

    Returns
    -------
    Decimal
        Exact value for int, Decimal and integer-valued types; shortest-repr
        value for floats; 28-digit quotient for Fraction.

    None
        For None input, or type errors when on_error="none".

    Detection Priority
    ------------------
    1. int / float / Decimal / Fraction fast path
    2. pandas.NA, numpy.ma.masked → NaN
    3. __index__() → exact int (NumPy integers)
    4. .item() → Python scalar (array scalars)
    5. .value with .unit (Astropy Quantity)
    6. __float__() → float (general fallback)

    Examples
    --------
    >>> std_decimal(1400)
    Decimal('1400')
    >>> std_decimal(1.4)
    Decimal('1.4')
    >>> std_decimal(Fraction(3, 2))
    Decimal('1.5')
    >>> std_decimal(float('inf'))
    Decimal('Infinity')
    >>> std_decimal("1.4", on_error="none") is None
    True
    """
    if on_error not in ("raise", "none"):
        raise ValueError(f"on_error must be 'raise' or 'none', but got {fmt_value(on_error)}")

    if value is None:
        return None

    # bool is a subclass of int, but True is not a magnitude
    if isinstance(value, bool):
        return _type_error(f"boolean values not supported, got {value}", on_error)

    # Fast path for stdlib types
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return _from_float(value)
    if isinstance(value, Fraction):
        return Decimal(value.numerator) / Decimal(value.denominator)

    # pandas.NA and numpy.ma.masked, detected without importing either library
    cls = type(value)
    cls_name = getattr(cls, "__name__", "")
    cls_module = getattr(cls, "__module__", "") or ""
    if cls_name == "NAType" and "pandas" in cls_module:
        return _NAN
    if cls_name == "MaskedConstant" and cls_module.startswith("numpy.ma"):
        return _NAN

    # NumPy integer types and other exact integers
    if hasattr(value, '__index__'):
        try:
            return Decimal(operator.index(value))
        except (TypeError, ValueError) as e:
            return _type_error(f"cannot convert {fmt_type(value)} to int via __index__: {e}", on_error, e)

    # Array and tensor scalars
    if hasattr(value, 'item') and callable(value.item):
        try:
            result = value.item()
        except (TypeError, ValueError, AttributeError):
            result = None
        if isinstance(result, (int, float)):
            return std_decimal(result, on_error=on_error)

    # Quantity-like objects carry their magnitude in .value
    if hasattr(value, 'value') and hasattr(value, 'unit'):
        magnitude = getattr(value, 'value', None)
        if magnitude is not None and magnitude is not value:
            return std_decimal(magnitude, on_error=on_error)

    if hasattr(value, '__float__'):
        try:
            return _from_float(float(value))
        except (TypeError, ValueError) as e:
            return _type_error(f"cannot convert {fmt_type(value)} to float: {e}", on_error, e)

    return _type_error(
        f"unsupported numeric type: {fmt_type(value)}. "
        f"Expected int, float, Decimal, Fraction, None, or types implementing "
        f"__index__, __float__, .item(), or having .value attribute",
        on_error
    )


# Private Methods ------------------------------------------------------------------------------------------------------

def _from_float(value: float) -> Decimal:
    # float.__repr__ bypasses subclass reprs such as numpy.float64's "np.float64(1.4)"
    return Decimal(float.__repr__(value))


def _type_error(message: str, on_error: OnError, cause: Exception | None = None) -> Decimal | None:
    if on_error == "raise":
        raise TypeError(message) from cause
    return None
