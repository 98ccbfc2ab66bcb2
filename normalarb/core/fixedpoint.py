# normalarb/core/fixedpoint.py

import math
from decimal import Decimal, ROUND_DOWN, localcontext
from typing import Union

from .errors import DomainError, FixedPointOverflowError

WAD = 10 ** 18
HALF_WAD = WAD // 2

MAX_UINT256 = 2 ** 256 - 1
MAX_INT256 = 2 ** 255 - 1
MIN_INT256 = -(2 ** 255)

# Significant digits used when a fixed-point value passes through Decimal.
PRECISION = 80

Numeric = Union[int, float, str, Decimal]


def _div_toward_zero(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


def mul_wad(a: int, b: int) -> int:
    """
    Multiply two fixed-point numbers.

    Args:
        a: WAD scaled value
        b: WAD scaled value

    Returns:
        a * b / 1e18, truncated toward zero
    """
    return _div_toward_zero(a * b, WAD)


def div_wad(a: int, b: int) -> int:
    """
    Divide two fixed-point numbers.

    Args:
        a: WAD scaled numerator
        b: WAD scaled denominator

    Returns:
        a * 1e18 / b, truncated toward zero
    """
    if b == 0:
        raise ZeroDivisionError("fixed-point division by zero")
    return _div_toward_zero(a * WAD, b)


def sqrt_wad(x: int) -> int:
    """Floor square root of a non-negative fixed-point number."""
    if x < 0:
        raise DomainError(f"sqrt of negative value: {x}")
    return math.isqrt(x * WAD)


def to_decimal(x: int) -> Decimal:
    """Convert a WAD scaled integer to an exact Decimal."""
    with localcontext() as ctx:
        ctx.prec = PRECISION
        return Decimal(x).scaleb(-18)


def from_decimal(value: Decimal) -> int:
    """Convert a Decimal to a WAD scaled integer, truncating toward zero."""
    with localcontext() as ctx:
        ctx.prec = PRECISION
        return int(value.scaleb(18).to_integral_value(rounding=ROUND_DOWN))


def to_wad(value: Numeric) -> int:
    """
    Convert a human readable amount (whole units) into a WAD scaled integer.

    Floats go through their string form so 0.1 becomes exactly 1e17.
    """
    return from_decimal(Decimal(str(value)))


def from_wad(x: int) -> Decimal:
    """Convert a WAD scaled integer into whole units."""
    return to_decimal(x)


def ln_wad(x: int) -> int:
    """
    Natural logarithm of a fixed-point number.

    Raises:
        DomainError: if x <= 0
    """
    if x <= 0:
        raise DomainError(f"ln undefined for non-positive value: {x}")
    with localcontext() as ctx:
        ctx.prec = PRECISION
        return from_decimal(to_decimal(x).ln())


def exp_wad(x: int) -> int:
    """
    Natural exponent of a fixed-point number.

    Raises:
        FixedPointOverflowError: if the result does not fit in an int256
    """
    with localcontext() as ctx:
        ctx.prec = PRECISION
        result = from_decimal(to_decimal(x).exp())
    return to_int(result)


def to_uint(x: int) -> int:
    """Cast a signed value to unsigned, failing on negatives and overflow."""
    if x < 0 or x > MAX_UINT256:
        raise FixedPointOverflowError(f"value out of uint256 range: {x}")
    return x


def to_int(x: int) -> int:
    """Cast a value to signed, failing when it leaves the int256 range."""
    if x < MIN_INT256 or x > MAX_INT256:
        raise FixedPointOverflowError(f"value out of int256 range: {x}")
    return x


def clamp_to_uint(x: int) -> int:
    """Cast to unsigned, treating negative values as zero."""
    if x < 0:
        return 0
    return to_uint(x)
