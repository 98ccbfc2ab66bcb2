# normalarb/core/gaussian.py
"""
Standard normal distribution primitives over WAD fixed-point numbers.

Values come from scipy's normal distribution in double precision and are
truncated back to 18 decimals. The upper half of the distribution is taken
from the complement of the lower tail, so probabilities close to 1 keep
their precision.
"""

from scipy.stats import norm

from .errors import DomainError
from .fixedpoint import WAD, to_wad

# Φ(-10) < 1e-23, so beyond this bound the cdf rounds to 0 or 1.
CDF_BOUND = 10 * WAD


def _to_float(x: int) -> float:
    return x / WAD


def cdf_wad(x: int) -> int:
    """
    Standard normal cumulative distribution function Φ.

    Args:
        x: WAD scaled point, any real value

    Returns:
        Φ(x) as a WAD scaled value in [0, 1e18]
    """
    if x >= CDF_BOUND:
        return WAD
    if x <= -CDF_BOUND:
        return 0
    if x > 0:
        return WAD - to_wad(float(norm.cdf(-_to_float(x))))
    return to_wad(float(norm.cdf(_to_float(x))))


def pdf_wad(x: int) -> int:
    """Standard normal probability density at x."""
    return to_wad(float(norm.pdf(_to_float(x))))


def ppf_wad(p: int) -> int:
    """
    Inverse of the standard normal cdf, Φ⁻¹.

    Args:
        p: WAD scaled probability, strictly between 0 and 1e18

    Returns:
        x such that Φ(x) = p, WAD scaled

    Raises:
        DomainError: if p is outside the open interval (0, 1e18)
    """
    if p <= 0 or p >= WAD:
        raise DomainError(f"ppf undefined outside (0, 1): {p}")
    if p > WAD // 2:
        return -to_wad(float(norm.ppf(_to_float(WAD - p))))
    return to_wad(float(norm.ppf(_to_float(p))))
