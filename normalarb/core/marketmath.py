# normalarb/core/marketmath.py
"""
Floating point model of the normal strategy curve.

Uses scipy's normal distribution, so results carry floating point error.
These functions are sanity checks for the fixed point implementation and
are never used to size real orders.
"""

from typing import Tuple
import numpy as np
from scipy.stats import norm
from scipy.optimize import bisect

SECONDS_PER_YEAR = 31556953.0


def std_dev_sqrt_tau(std_dev: float, time_remaining_sec: float) -> float:
    """
    Calculate σ√τ.

    Args:
        std_dev: Annualized standard deviation, e.g. 0.1 for 10%
        time_remaining_sec: Seconds until maturity

    Returns:
        std_dev * sqrt(time remaining in years)
    """
    return std_dev * np.sqrt(time_remaining_sec / SECONDS_PER_YEAR)


def trading_function(x: float, y: float, strike: float, std_dev: float,
                     time_remaining_sec: float) -> float:
    """
    Calculate the invariant k = y - KΦ(Φ⁻¹(1-x) - σ√τ).

    Args:
        x: x reserve per liquidity, in (0, 1)
        y: y reserve per liquidity, in (0, strike)
        strike: Strike price
        std_dev: Annualized standard deviation
        time_remaining_sec: Seconds until maturity

    Returns:
        The invariant k
    """
    s = std_dev_sqrt_tau(std_dev, time_remaining_sec)
    return y - strike * norm.cdf(norm.ppf(1 - x) - s)


def approximate_y_given_x(x: float, strike: float, std_dev: float,
                          time_remaining_sec: float, invariant: float = 0.0) -> float:
    """y = KΦ(Φ⁻¹(1-x) - σ√τ) + k"""
    s = std_dev_sqrt_tau(std_dev, time_remaining_sec)
    return strike * norm.cdf(norm.ppf(1 - x) - s) + invariant


def approximate_x_given_y(y: float, strike: float, std_dev: float,
                          time_remaining_sec: float, invariant: float = 0.0) -> float:
    """x = 1 - Φ(Φ⁻¹((y - k)/K) + σ√τ)"""
    s = std_dev_sqrt_tau(std_dev, time_remaining_sec)
    return 1 - norm.cdf(norm.ppf((y - invariant) / strike) + s)


def marginal_price(x: float, strike: float, std_dev: float,
                   time_remaining_sec: float) -> float:
    """Price of x in y at reserve x: K·exp(Φ⁻¹(1-x)σ√τ - ½σ²τ)"""
    s = std_dev_sqrt_tau(std_dev, time_remaining_sec)
    return strike * np.exp(norm.ppf(1 - x) * s - s * s / 2)


def reserves_given_price(price: float, strike: float, std_dev: float,
                         time_remaining_sec: float) -> Tuple[float, float]:
    """
    Reserves per liquidity of a fresh curve quoting `price`.

    Returns:
        Tuple of (x, y)
    """
    s = std_dev_sqrt_tau(std_dev, time_remaining_sec)
    d = np.log(price / strike) / s
    return 1 - norm.cdf(d + s / 2), strike * norm.cdf(d - s / 2)


def x_input_given_marginal_price(x: float, target_price: float, strike: float,
                                 std_dev: float, time_remaining_sec: float,
                                 gamma: float = 1.0) -> float:
    """Float counterpart of the fixed point x solver, clamped at zero."""
    s = std_dev_sqrt_tau(std_dev, time_remaining_sec)
    d = np.log(target_price / (gamma * strike)) / s + s / 2
    return max(0.0, (1 - x - norm.cdf(d)) / gamma)


def y_input_given_marginal_price(y: float, target_price: float, strike: float,
                                 std_dev: float, time_remaining_sec: float,
                                 gamma: float = 1.0, invariant: float = 0.0) -> float:
    """Float counterpart of the fixed point y solver, clamped at zero."""
    s = std_dev_sqrt_tau(std_dev, time_remaining_sec)
    d = np.log(target_price / strike) / s - s / 2
    return max(0.0, (strike * norm.cdf(d) + invariant - y) / gamma)


def approximate_other_reserve(sell_asset: bool, reserve_in: float, x: float, y: float,
                              strike: float, std_dev: float, time_remaining_sec: float,
                              invariant: float = 0.0, xtol: float = 1e-12) -> float:
    """
    Find the reserve of the other asset that keeps the invariant unchanged,
    by bisection on the trading function.

    Args:
        sell_asset: True if x is being sold into the pool (reserve_in is the new x)
        reserve_in: New reserve of the asset being sold
        x: Current x reserve per liquidity
        y: Current y reserve per liquidity
        strike: Strike price
        std_dev: Annualized standard deviation
        time_remaining_sec: Seconds until maturity
        invariant: Invariant to preserve
        xtol: Absolute tolerance of the root

    Returns:
        New reserve of the asset being bought
    """
    eps = 1e-12
    if sell_asset:
        def root(other):
            return trading_function(reserve_in, other, strike, std_dev, time_remaining_sec) - invariant
        return bisect(root, eps, y, xtol=xtol)

    def root(other):
        return trading_function(other, reserve_in, strike, std_dev, time_remaining_sec) - invariant
    return bisect(root, eps, x, xtol=xtol)


def approximate_amount_out(sell_asset: bool, amount_in: float, x: float, y: float,
                           strike: float, std_dev: float, time_remaining_sec: float,
                           invariant: float = 0.0) -> float:
    """Output per liquidity of a trade of `amount_in`, ignoring fees."""
    if sell_asset:
        new_y = approximate_other_reserve(True, x + amount_in, x, y, strike, std_dev,
                                          time_remaining_sec, invariant)
        return y - new_y
    new_x = approximate_other_reserve(False, y + amount_in, x, y, strike, std_dev,
                                      time_remaining_sec, invariant)
    return x - new_x


def trading_function_coordinates(strike: float, std_dev: float, time_remaining_sec: float,
                                 num: int = 100) -> Tuple[np.ndarray, np.ndarray]:
    """
    Points of the curve y(x) over the open interval (0, 1).

    Returns:
        Tuple of (x values, y values)
    """
    x = np.linspace(0, 1, num + 2)[1:-1]
    return x, approximate_y_given_x(x, strike, std_dev, time_remaining_sec)
