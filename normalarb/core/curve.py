# normalarb/core/curve.py
"""
Normal strategy trading curve.

    y = KΦ(Φ⁻¹(1-x) - σ√τ) + k
    x = 1 - Φ(Φ⁻¹((y - k)/K) + σ√τ)
    k = y - KΦ(Φ⁻¹(1-x) - σ√τ)

x and y are reserves per unit of liquidity, so x lives in (0, 1) and y in
(0, K). All values are WAD scaled integers.
"""

from dataclasses import dataclass, replace

from .errors import DomainError
from .fixedpoint import WAD, div_wad, exp_wad, ln_wad, mul_wad, sqrt_wad
from .gaussian import cdf_wad, ppf_wad
from .models import PoolConfig, PoolState

SECONDS_PER_YEAR = 31556953
BASIS_POINT_DIVISOR = 10_000


def volatility_to_wad(volatility_basis_points: int) -> int:
    """Convert a volatility in basis points into a WAD scaled fraction."""
    return volatility_basis_points * WAD // BASIS_POINT_DIVISOR


@dataclass(frozen=True)
class NormalCurve:
    reserve_x_per_wad: int
    reserve_y_per_wad: int
    strike_price_wad: int
    standard_deviation_wad: int
    time_remaining_seconds: int
    invariant: int = 0

    @classmethod
    def from_pool(cls, state: PoolState, config: PoolConfig, timestamp: int) -> "NormalCurve":
        """
        Build the curve of a live pool.

        Perpetual pools always quote with one year remaining. The substitution
        happens right after construction, before the reserves are scaled down
        to per-liquidity values and before the invariant is computed.

        Args:
            state: Pool reserves and liquidity
            config: Pool economic parameters
            timestamp: Current time in seconds

        Returns:
            Curve with per-liquidity reserves and its current invariant
        """
        curve = cls(
            reserve_x_per_wad=state.virtual_x,
            reserve_y_per_wad=state.virtual_y,
            strike_price_wad=config.strike_price_wad,
            standard_deviation_wad=volatility_to_wad(config.volatility_basis_points),
            time_remaining_seconds=config.time_remaining(timestamp),
        )
        if config.is_perpetual:
            curve = replace(curve, time_remaining_seconds=SECONDS_PER_YEAR)

        curve = curve.with_reserves(
            div_wad(state.virtual_x, state.liquidity),
            div_wad(state.virtual_y, state.liquidity),
        )
        return replace(curve, invariant=curve.trading_function())

    @classmethod
    def at_price(cls, price: int, strike_price_wad: int, standard_deviation_wad: int,
                 time_remaining_seconds: int) -> "NormalCurve":
        """
        Reserves of a fresh curve (k = 0) whose marginal price is `price`.

        x = 1 - Φ(ln(P/K)/σ√τ + ½σ√τ)
        y = KΦ(ln(P/K)/σ√τ - ½σ√τ)
        """
        curve = cls(0, 0, strike_price_wad, standard_deviation_wad, time_remaining_seconds)
        std_dev_sqrt_tau = curve.std_dev_sqrt_tau()
        if std_dev_sqrt_tau == 0:
            raise DomainError("curve has no time remaining")

        d = div_wad(ln_wad(div_wad(price, strike_price_wad)), std_dev_sqrt_tau)
        half = std_dev_sqrt_tau // 2
        return curve.with_reserves(
            WAD - cdf_wad(d + half),
            mul_wad(strike_price_wad, cdf_wad(d - half)),
        )

    def with_reserves(self, reserve_x_per_wad: int, reserve_y_per_wad: int) -> "NormalCurve":
        return replace(self, reserve_x_per_wad=reserve_x_per_wad,
                       reserve_y_per_wad=reserve_y_per_wad)

    def std_dev_sqrt_tau(self) -> int:
        """σ√τ, with τ measured in years."""
        tau = self.time_remaining_seconds * WAD // SECONDS_PER_YEAR
        return mul_wad(self.standard_deviation_wad, sqrt_wad(tau))

    def trading_function(self) -> int:
        """
        Invariant of the curve, k = y - KΦ(Φ⁻¹(1-x) - σ√τ).

        Zero for a freshly initialized curve; grows only as fees accrue.

        Raises:
            DomainError: if the x reserve is not strictly inside (0, 1)
        """
        _check_reserve_x(self.reserve_x_per_wad)
        expected_y = mul_wad(
            self.strike_price_wad,
            cdf_wad(ppf_wad(WAD - self.reserve_x_per_wad) - self.std_dev_sqrt_tau()),
        )
        return self.reserve_y_per_wad - expected_y

    def marginal_price(self) -> int:
        """Price of x in y implied by the reserves: K·e^(Φ⁻¹(1-x)σ√τ - ½σ²τ)."""
        _check_reserve_x(self.reserve_x_per_wad)
        std_dev_sqrt_tau = self.std_dev_sqrt_tau()
        exponent = (mul_wad(ppf_wad(WAD - self.reserve_x_per_wad), std_dev_sqrt_tau)
                    - mul_wad(std_dev_sqrt_tau, std_dev_sqrt_tau) // 2)
        return mul_wad(self.strike_price_wad, exp_wad(exponent))

    def approximate_y_given_x(self, reserve_x_per_wad: int) -> int:
        """y = KΦ(Φ⁻¹(1-x) - σ√τ) + k"""
        _check_reserve_x(reserve_x_per_wad)
        return mul_wad(
            self.strike_price_wad,
            cdf_wad(ppf_wad(WAD - reserve_x_per_wad) - self.std_dev_sqrt_tau()),
        ) + self.invariant

    def approximate_x_given_y(self, reserve_y_per_wad: int) -> int:
        """x = 1 - Φ(Φ⁻¹((y - k)/K) + σ√τ)"""
        ratio = div_wad(reserve_y_per_wad - self.invariant, self.strike_price_wad)
        return WAD - cdf_wad(ppf_wad(ratio) + self.std_dev_sqrt_tau())


def _check_reserve_x(reserve_x_per_wad: int):
    if not 0 < reserve_x_per_wad < WAD:
        raise DomainError(f"x reserve per liquidity outside (0, 1): {reserve_x_per_wad}")
