import pytest
from dataclasses import replace
from typing import Dict, List, Tuple

from normalarb.core.arbitrage import compute_gamma
from normalarb.core.curve import SECONDS_PER_YEAR, NormalCurve, volatility_to_wad
from normalarb.core.events import EventLog
from normalarb.core.fixedpoint import WAD, div_wad, mul_wad, to_wad
from normalarb.core.models import Order, PoolConfig, PoolState
from normalarb.core.roles import OrderExecutor, PoolStateSource, SimpleOracle


class InMemoryPortfolio(PoolStateSource, OrderExecutor):
    """Settles swaps on the fixed point curve, keeping the fee in the pool."""
    def __init__(self, timestamp: int = 0):
        self.timestamp = timestamp
        self.pools: Dict[int, Tuple[PoolState, PoolConfig]] = {}
        self.swaps: List[Order] = []
        self.rejections_left = 0
        self.amount_out_calls = 0

    def create_pool(self, pool_id: int, price: str, liquidity: int = 10 * WAD,
                    fee_basis_points: int = 100, config: PoolConfig = None) -> PoolState:
        if config is None:
            config = PoolConfig(
                strike_price_wad=WAD,
                volatility_basis_points=1_000,
                duration_seconds=SECONDS_PER_YEAR,
                creation_timestamp=self.timestamp,
                is_perpetual=True
            )
        curve = NormalCurve.at_price(
            to_wad(price),
            config.strike_price_wad,
            volatility_to_wad(config.volatility_basis_points),
            SECONDS_PER_YEAR if config.is_perpetual else config.time_remaining(self.timestamp)
        )
        state = PoolState(
            liquidity=liquidity,
            virtual_x=mul_wad(curve.reserve_x_per_wad, liquidity),
            virtual_y=mul_wad(curve.reserve_y_per_wad, liquidity),
            fee_basis_points=fee_basis_points
        )
        self.pools[pool_id] = (state, config)
        return state

    def curve(self, pool_id: int) -> NormalCurve:
        state, config = self.pools[pool_id]
        return NormalCurve.from_pool(state, config, self.timestamp)

    def get_pool_state(self, pool_id: int) -> PoolState:
        return self.pools[pool_id][0]

    def get_pool_config(self, pool_id: int) -> PoolConfig:
        return self.pools[pool_id][1]

    def get_amount_out(self, pool_id: int, sell_asset: bool, amount_in: int,
                       caller: str) -> int:
        self.amount_out_calls += 1
        state = self.get_pool_state(pool_id)
        curve = self.curve(pool_id)
        effective = mul_wad(div_wad(amount_in, state.liquidity),
                            compute_gamma(state.fee_basis_points))
        if sell_asset:
            new_x = curve.reserve_x_per_wad + effective
            if new_x >= WAD:
                return 0
            out = curve.reserve_y_per_wad - curve.approximate_y_given_x(new_x)
        else:
            new_y = curve.reserve_y_per_wad + effective
            if new_y - curve.invariant >= curve.strike_price_wad:
                return 0
            out = curve.reserve_x_per_wad - curve.approximate_x_given_y(new_y)
        return max(0, mul_wad(out, state.liquidity))

    def swap(self, order: Order, caller: str) -> bool:
        if self.rejections_left > 0:
            self.rejections_left -= 1
            return False
        quote = self.get_amount_out(order.pool_id, order.sell_asset, order.input_amount, caller)
        if order.output_amount > quote:
            return False

        state, config = self.pools[order.pool_id]
        if order.sell_asset:
            state = replace(state, virtual_x=state.virtual_x + order.input_amount,
                            virtual_y=state.virtual_y - order.output_amount)
        else:
            state = replace(state, virtual_y=state.virtual_y + order.input_amount,
                            virtual_x=state.virtual_x - order.output_amount)
        self.pools[order.pool_id] = (state, config)
        self.swaps.append(order)
        return True


@pytest.fixture
def portfolio():
    return InMemoryPortfolio(timestamp=1_700_000_000)


@pytest.fixture
def event_log():
    return EventLog()


@pytest.fixture
def oracle():
    return SimpleOracle("1.0")


@pytest.fixture
def unit_curve():
    """Perpetual curve with K = 1, σ = 10%, quoting a price of 1.0."""
    return NormalCurve.at_price(WAD, WAD, volatility_to_wad(1_000), SECONDS_PER_YEAR)
