"""
Number abbreviation for terminal UI, dashboards and status displays.

Converts a numeric magnitude into a short label scaled by powers of 1000,
e.g. 1400 → "1.4k", -1_500 → "-1.5k", 4_500_000 → "4.5M".

`abbrev_num()` never raises on bad input by default: it returns None when no
abbreviation can be produced (invalid options, non-numeric or non-finite value,
magnitude beyond the last configured unit) and leaves the fallback display to
the caller. Pass on_error="warn" or on_error="raise" to find out why.
"""

# ## Scope
#
# Formatting is one-way (number → str). Abbreviated strings are not meant to be
# parsed back; store the original number if you need it later.

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import warnings
from dataclasses import dataclass
from decimal import (
    Decimal,
    localcontext,
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
)
from enum import StrEnum, unique
from typing import Literal, Self, Sequence

# Local ----------------------------------------------------------------------------------------------------------------
from .numeric import std_decimal
from .sentinels import UNSET, UnsetType, ifnotunset
from .tools import fmt_type, fmt_value

# @formatter:off

ABBREVIATIONS: tuple[str, ...] = ("", "k", "M", "B", "T", "P", "E")
"""Default short-scale units, indexed by power-of-1000 tier."""

SI_ABBREVIATIONS: tuple[str, ...] = ("", "k", "M", "G", "T", "P", "E")
"""SI prefixes for the same tiers."""

TIER_COUNT = 7
TIER_BASE = 1000

DEFAULT_PRECISION = 1

# @formatter:on


# Enums ----------------------------------------------------------------------------------------------------------------

@unique
class RoundingStrategy(StrEnum):
    """
    Rounding applied to the scaled value at the requested precision.

    Attributes:
        NEAREST (str)             : Round half away from zero - 1.25 → 1.3, -1.25 → -1.3
        UP (str)                  : Ceiling toward +infinity - 1.21 → 1.3, -1.29 → -1.2
        TO_ZERO (str)             : Truncate toward zero - 1.29 → 1.2, -1.29 → -1.2
        NEAREST_EVEN (str)        : Round half to even - 1.25 → 1.2, 1.35 → 1.4
        DOWN (str)                : Floor toward -infinity - 1.29 → 1.2, -1.21 → -1.3
        AWAY_FROM_ZERO (str)      : Round away from zero - 1.21 → 1.3, -1.21 → -1.3
        NEAREST_TOWARD_ZERO (str) : Round half toward zero - 1.25 → 1.2, -1.25 → -1.2, 1.26 → 1.3
    """
    NEAREST = "nearest"
    UP = "up"
    TO_ZERO = "to_zero"
    NEAREST_EVEN = "nearest_even"
    DOWN = "down"
    AWAY_FROM_ZERO = "away_from_zero"
    NEAREST_TOWARD_ZERO = "nearest_toward_zero"

    @property
    def decimal_rounding(self) -> str:
        """The decimal module rounding mode implementing this strategy."""
        if self is RoundingStrategy.NEAREST:
            return ROUND_HALF_UP
        elif self is RoundingStrategy.UP:
            return ROUND_CEILING
        elif self is RoundingStrategy.TO_ZERO:
            return ROUND_DOWN
        elif self is RoundingStrategy.NEAREST_EVEN:
            return ROUND_HALF_EVEN
        elif self is RoundingStrategy.DOWN:
            return ROUND_FLOOR
        elif self is RoundingStrategy.AWAY_FROM_ZERO:
            return ROUND_UP
        elif self is RoundingStrategy.NEAREST_TOWARD_ZERO:
            return ROUND_HALF_DOWN
        else:
            raise NotImplementedError(f"unknown rounding strategy {self!r}")


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class Options:
    """
    Options for abbreviating a number.

    Construction never raises: fields are checked when options are consumed
    by abbrev_num(), which returns None for invalid ones. Use `problems()` or
    `is_valid` to inspect an instance up front.

    Attributes:
        precision: Decimal places kept after scaling. None means 1.
        abbreviations: Exactly 7 unit labels for tiers 1000**0 .. 1000**6.
            None means ABBREVIATIONS. Sequences are stored as a tuple.
        rounding_strategy: RoundingStrategy member or its string value.
            None means RoundingStrategy.NEAREST.

    Example:
        >>> abbrev_num(1420, Options(precision=2))
        '1.42k'
        >>> Options.si().merge(precision=0).abbreviations
        ('', 'k', 'M', 'G', 'T', 'P', 'E')
    """
    precision: int | None = None
    abbreviations: Sequence[str] | None = None
    rounding_strategy: RoundingStrategy | str | None = None

    def __post_init__(self):
        # Snapshot label lists so later changes by the caller do not leak in
        abbreviations = self.abbreviations
        if isinstance(abbreviations, abc.Sequence) and not isinstance(abbreviations, (str, bytes, tuple)):
            object.__setattr__(self, "abbreviations", tuple(abbreviations))

    @classmethod
    def short_scale(cls, precision: int | None = None) -> Self:
        """Short-scale units k, M, B, T, P, E (thousand, million, billion, ...)."""
        return cls(precision=precision, abbreviations=ABBREVIATIONS)

    @classmethod
    def si(cls, precision: int | None = None) -> Self:
        """SI prefixes k, M, G, T, P, E for byte counts and physical quantities."""
        return cls(precision=precision, abbreviations=SI_ABBREVIATIONS)

    def merge(self,
              precision: int | None | UnsetType = UNSET,
              abbreviations: Sequence[str] | None | UnsetType = UNSET,
              rounding_strategy: RoundingStrategy | str | None | UnsetType = UNSET,
              ) -> "Options":
        """
        Create a new Options instance with merged configuration.

        Parameters not provided (UNSET) are inherited from the current instance,
        an explicit None resets a field to its default.
        """
        return Options(
            precision=ifnotunset(precision, default=self.precision),
            abbreviations=ifnotunset(abbreviations, default=self.abbreviations),
            rounding_strategy=ifnotunset(rounding_strategy, default=self.rounding_strategy),
        )

    @property
    def is_valid(self) -> bool:
        return not self.problems()

    def problems(self) -> list[Exception]:
        """
        Validation errors of this instance, empty when the options are usable.

        TypeError is reported for wrong field types, ValueError for values out
        of range.
        """
        errors: list[Exception] = []

        precision = self.precision
        if precision is not None:
            if isinstance(precision, bool) or not isinstance(precision, int):
                errors.append(TypeError(f"precision must be int or None, but got {fmt_type(precision)}"))
            elif precision < 0:
                errors.append(ValueError(f"precision must be int >= 0 or None, but got {fmt_value(precision)}"))

        abbreviations = self.abbreviations
        if abbreviations is not None:
            if isinstance(abbreviations, (str, bytes)) or not isinstance(abbreviations, abc.Sequence):
                errors.append(TypeError(
                    f"abbreviations must be a sequence of str or None, but got {fmt_type(abbreviations)}"))
            elif len(abbreviations) != TIER_COUNT:
                errors.append(ValueError(
                    f"abbreviations must hold exactly {TIER_COUNT} labels, but got {len(abbreviations)}"))
            else:
                for label in abbreviations:
                    if not isinstance(label, str):
                        errors.append(TypeError(f"abbreviation labels must be str, but got {fmt_value(label)}"))
                        break

        strategy = self.rounding_strategy
        if strategy is not None and not isinstance(strategy, RoundingStrategy):
            if not isinstance(strategy, str):
                errors.append(TypeError(
                    f"rounding_strategy must be RoundingStrategy, str or None, but got {fmt_type(strategy)}"))
            elif strategy not in {s.value for s in RoundingStrategy}:
                errors.append(ValueError(
                    f"rounding_strategy expected one of {[s.value for s in RoundingStrategy]}, "
                    f"but found {fmt_value(strategy)}"))

        return errors

    @property
    def resolved_precision(self) -> int:
        return DEFAULT_PRECISION if self.precision is None else self.precision

    @property
    def resolved_abbreviations(self) -> tuple[str, ...]:
        return ABBREVIATIONS if self.abbreviations is None else tuple(self.abbreviations)

    @property
    def resolved_rounding(self) -> RoundingStrategy:
        if self.rounding_strategy is None:
            return RoundingStrategy.NEAREST
        return RoundingStrategy(self.rounding_strategy)


# Methods --------------------------------------------------------------------------------------------------------------

def abbrev_num(
        value,
        options: Options | None = None,
        *,
        precision: int | None | UnsetType = UNSET,
        abbreviations: Sequence[str] | None | UnsetType = UNSET,
        rounding_strategy: RoundingStrategy | str | None | UnsetType = UNSET,
        on_error: Literal["none", "warn", "raise"] = "none",
) -> str | None:
    """
    Abbreviate a number into a human-friendly string like "1.4k" or "-2M".

    The value is scaled by the largest power of 1000 not exceeding its magnitude,
    rounded to `precision` decimal places with the rounding strategy, stripped of
    trailing fractional zeros and suffixed with the label of its tier.

    Args:
        value: Any real number - int, float, Decimal, Fraction, or third-party
            scalars such as numpy.int64.
        options: Options instance, defaults are used if None.
        precision: Override of options.precision.
        abbreviations: Override of options.abbreviations.
        rounding_strategy: Override of options.rounding_strategy.
        on_error: What to do when no abbreviation can be produced:
            - "none": return None (default)
            - "warn": emit a RuntimeWarning and return None
            - "raise": raise TypeError or ValueError

    Returns:
        The abbreviated string, or None if the options are invalid, the value
        is not a finite real number, or its tier exceeds the configured labels.

    Raises:
        ValueError: If on_error is not one of the supported literals.
        TypeError, ValueError: Only when on_error="raise".

    Examples:
        >>> abbrev_num(1400)
        '1.4k'
        >>> abbrev_num(-1400)
        '-1.4k'
        >>> abbrev_num(1_566_450, precision=0, rounding_strategy="to_zero")
        '1M'
        >>> abbrev_num(1400, abbreviations=["mm", "cm", "m", "km", "", "", ""])
        '1.4cm'
        >>> abbrev_num(10 ** 21) is None
        True
    """
    if on_error not in ("none", "warn", "raise"):
        raise ValueError(f"on_error must be 'none', 'warn' or 'raise', but got {fmt_value(on_error)}")

    if not isinstance(options, (Options, type(None))):
        return _fail(TypeError(f"options must be Options or None, but got {fmt_type(options)}"), on_error)

    options = (options or Options()).merge(
        precision=precision,
        abbreviations=abbreviations,
        rounding_strategy=rounding_strategy,
    )

    problems = options.problems()
    if problems:
        return _fail(problems[0], on_error)

    number = std_decimal(value, on_error="none")
    if number is None:
        return _fail(TypeError(f"value must be a real number, but got {fmt_type(value)}"), on_error)
    if not number.is_finite():
        return _fail(ValueError(f"value must be finite, but got {fmt_value(value)}"), on_error)

    if number.is_zero():
        return "0"

    labels = options.resolved_abbreviations
    tier = _tier(number)
    if tier >= len(labels):
        return _fail(ValueError(
            f"value {fmt_value(value)} exceeds the largest tier {TIER_BASE}**{len(labels) - 1}"), on_error)

    precision_ = options.resolved_precision
    with localcontext() as ctx:
        # Scaling and rounding stay exact for long Decimal inputs and large precisions
        ctx.prec = max(ctx.prec, len(number.as_tuple().digits), precision_ + 4)
        scaled = number.scaleb(-3 * tier)
        rounded = _round(scaled, precision_, options.resolved_rounding)
        number_str = _number_str(rounded)

    return f"{number_str}{labels[tier]}"


# Private Methods ------------------------------------------------------------------------------------------------------

def _tier(number: Decimal) -> int:
    """
    Power-of-1000 tier of a finite non-zero Decimal, 0 for magnitudes below 1000.

    Decimal.adjusted() is the exact floor(log10(abs(number))).
    """
    return max(number.adjusted() // 3, 0)


def _round(number: Decimal, precision: int, strategy: RoundingStrategy) -> Decimal:
    """Round number to precision decimal places, no-op when it already has fewer."""
    if number.as_tuple().exponent >= -precision:
        return number
    return number.quantize(Decimal(1).scaleb(-precision), rounding=strategy.decimal_rounding)


def _number_str(number: Decimal) -> str:
    """
    Plain positional notation without trailing fractional zeros.

    Examples:
        Decimal('1.50') → '1.5'
        Decimal('2.0') → '2'
        Decimal('-0.0') → '0'
        Decimal('1.4E+3') → '1400'
    """
    if number.is_zero():
        return "0"
    return f"{number.normalize():f}"


def _fail(error: Exception, on_error: str) -> None:
    if on_error == "raise":
        raise error
    elif on_error == "warn":
        warnings.warn(f"cannot abbreviate number: {error}", RuntimeWarning, stacklevel=3)
    return None
