# normalarb/core/solver.py
"""
Closed form trade sizes for the normal strategy curve.

Each function answers "how much x (or y) per unit of liquidity must be
deposited so the curve quotes a given price". The curve family makes this
an analytic inverse, so there is no root finding here. Every result is an
unsigned WAD amount; 0 means no deposit of that asset is needed.
"""

from .curve import NormalCurve
from .errors import DomainError, InvalidGammaError, InvalidReportedPriceError
from .fixedpoint import WAD, clamp_to_uint, div_wad, ln_wad, mul_wad
from .gaussian import cdf_wad, ppf_wad


def _std_dev_sqrt_tau(curve: NormalCurve) -> int:
    std_dev_sqrt_tau = curve.std_dev_sqrt_tau()
    if std_dev_sqrt_tau == 0:
        raise DomainError("curve has no time remaining")
    return std_dev_sqrt_tau


def _check_gamma(gamma: int):
    if gamma == 0:
        raise InvalidGammaError("gamma must be non-zero")


def compute_x_input_given_marginal_price(curve: NormalCurve, target_price: int,
                                         gamma: int) -> int:
    """
    Amount of x to deposit so the curve's marginal price becomes `target_price`.

    Δx = γ⁻¹(1 - Rx - Φ(ln(m/γK)/σ√τ + ½σ√τ))

    Args:
        curve: Curve with per-liquidity reserves
        target_price: Desired marginal price, WAD
        gamma: Fee multiplier, WAD

    Returns:
        Δx per unit of liquidity, 0 if the price cannot be reached by selling x

    Raises:
        InvalidGammaError: if gamma is zero
    """
    _check_gamma(gamma)
    std_dev_sqrt_tau = _std_dev_sqrt_tau(curve)

    ln_price_over_strike = ln_wad(
        div_wad(target_price, mul_wad(gamma, curve.strike_price_wad)))
    cdf_input = div_wad(ln_price_over_strike, std_dev_sqrt_tau) + std_dev_sqrt_tau // 2

    delta = WAD - curve.reserve_x_per_wad - cdf_wad(cdf_input)
    return clamp_to_uint(div_wad(delta, gamma))


def compute_y_input_given_marginal_price(curve: NormalCurve, target_price: int,
                                         gamma: int, invariant: int) -> int:
    """
    Amount of y to deposit so the curve's marginal price becomes `target_price`.

    Δy = γ⁻¹(KΦ(ln(m/K)/σ√τ - ½σ√τ) + k - Ry)

    Args:
        curve: Curve with per-liquidity reserves
        target_price: Desired marginal price, WAD
        gamma: Fee multiplier, WAD
        invariant: Current trading function value k, signed WAD

    Returns:
        Δy per unit of liquidity, 0 if the price cannot be reached by selling y
    """
    _check_gamma(gamma)
    std_dev_sqrt_tau = _std_dev_sqrt_tau(curve)

    ln_price_over_strike = ln_wad(div_wad(target_price, curve.strike_price_wad))
    cdf_input = div_wad(ln_price_over_strike, std_dev_sqrt_tau) - std_dev_sqrt_tau // 2

    delta = (mul_wad(curve.strike_price_wad, cdf_wad(cdf_input))
             + invariant - curve.reserve_y_per_wad)
    return clamp_to_uint(div_wad(delta, gamma))


def compute_x_in_to_match_reported_price(curve: NormalCurve, current_reported_price: int,
                                         desired_price: int, gamma: int) -> int:
    """
    Amount of x to deposit to move a reported price to `desired_price`.

    The fee is folded into the price ratio here, 1 + ε = desired·γ/current:

    Δx = γ⁻¹(1 - Rx - Φ(Φ⁻¹(1 - Rx) + ln(1 + ε)/σ√τ))

    Raises:
        InvalidReportedPriceError: if the reported price is not positive
    """
    if current_reported_price <= 0:
        raise InvalidReportedPriceError(
            f"reported price must be positive: {current_reported_price}")
    _check_gamma(gamma)
    std_dev_sqrt_tau = _std_dev_sqrt_tau(curve)

    ratio = div_wad(mul_wad(desired_price, gamma), current_reported_price)
    shift = div_wad(ln_wad(ratio), std_dev_sqrt_tau)
    cdf_input = ppf_wad(WAD - curve.reserve_x_per_wad) + shift

    delta = WAD - curve.reserve_x_per_wad - cdf_wad(cdf_input)
    return clamp_to_uint(div_wad(delta, gamma))


def compute_y_in_to_match_reported_price(curve: NormalCurve, current_reported_price: int,
                                         desired_price: int, gamma: int) -> int:
    """
    Amount of y to deposit to move a reported price to `desired_price`.

    Unlike the x side, gamma stays out of the ratio, 1 + ε = desired/current:

    Δy = γ⁻¹(KΦ(Φ⁻¹(1 - Rx) - σ√τ + ln(1 + ε)/σ√τ) + k - Ry)

    The result is divided by gamma, not multiplied: the deposit is grossed
    up so that the part left after the fee moves the curve. k is the
    curve's own invariant.

    Raises:
        InvalidReportedPriceError: if the reported price is not positive
    """
    if current_reported_price <= 0:
        raise InvalidReportedPriceError(
            f"reported price must be positive: {current_reported_price}")
    _check_gamma(gamma)
    std_dev_sqrt_tau = _std_dev_sqrt_tau(curve)

    ratio = div_wad(desired_price, current_reported_price)
    shift = div_wad(ln_wad(ratio), std_dev_sqrt_tau)
    cdf_input = ppf_wad(WAD - curve.reserve_x_per_wad) - std_dev_sqrt_tau + shift

    delta = (mul_wad(curve.strike_price_wad, cdf_wad(cdf_input))
             + curve.invariant - curve.reserve_y_per_wad)
    return clamp_to_uint(div_wad(delta, gamma))
