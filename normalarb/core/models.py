# normalarb/core/models.py

from dataclasses import dataclass


@dataclass(frozen=True)
class PoolConfig:
    """
    Economic parameters of a normal strategy pool.
    Set once when the pool is created; only the derived time remaining
    changes as the clock moves.
    """
    strike_price_wad: int
    volatility_basis_points: int
    duration_seconds: int
    creation_timestamp: int
    is_perpetual: bool = False

    def __post_init__(self):
        if self.strike_price_wad <= 0:
            raise ValueError("Strike price must be positive")
        if self.volatility_basis_points <= 0:
            raise ValueError("Volatility must be positive")
        if not 0 <= self.duration_seconds < 2 ** 32:
            raise ValueError("Duration must fit in a u32")
        if self.duration_seconds == 0 and not self.is_perpetual:
            raise ValueError("Duration must be positive unless the pool is perpetual")

    def time_remaining(self, timestamp: int) -> int:
        """Seconds left until maturity at `timestamp`, never negative."""
        maturity = self.creation_timestamp + self.duration_seconds
        return max(0, maturity - timestamp)


@dataclass(frozen=True)
class PoolState:
    """Snapshot of a pool's reserves as reported by the settlement layer."""
    liquidity: int
    virtual_x: int
    virtual_y: int
    fee_basis_points: int


@dataclass(frozen=True)
class Order:
    """A swap the arbitrageur wants settled. Amounts are WAD scaled totals."""
    pool_id: int
    input_amount: int
    output_amount: int
    sell_asset: bool
    use_max: bool = False
