# normalarb/core/arbitrage.py

import logging
from enum import Enum
from typing import Optional, Tuple

from .curve import BASIS_POINT_DIVISOR, NormalCurve
from .errors import InvalidGammaError, PoolUnavailableError, ZeroOutputError
from .fixedpoint import WAD, mul_wad, to_uint
from .models import Order, PoolState
from .roles import PoolStateSource
from .solver import compute_x_input_given_marginal_price, compute_y_input_given_marginal_price

logger = logging.getLogger(__name__)


class SwapDirection(Enum):
    """Which asset an arbitrageur should sell into the pool"""
    SWAP_X_TO_Y = "x_to_y"
    SWAP_Y_TO_X = "y_to_x"
    NONE = "none"


def compute_gamma(fee_basis_points: int) -> int:
    """
    Fee multiplier γ = (10000 - fee)/10000 as a WAD.

    Raises:
        InvalidGammaError: if the fee is outside [0, 10000] basis points
    """
    if not 0 <= fee_basis_points <= BASIS_POINT_DIVISOR:
        raise InvalidGammaError(f"fee out of range: {fee_basis_points} bps")
    return (BASIS_POINT_DIVISOR - fee_basis_points) * WAD // BASIS_POINT_DIVISOR


def check_no_arb_bounds(current_price: int, target_price: int, fee_basis_points: int,
                        fee_multiplier: int = 2) -> SwapDirection:
    """
    Check whether the target price lies outside the band where trading
    against the pool cannot be profitable.

    The band is the current price divided and multiplied by
    1 - fee_multiplier * fee.

    Args:
        current_price: Pool's marginal price, WAD
        target_price: Reference price, WAD
        fee_basis_points: Pool fee
        fee_multiplier: How many times the fee must be paid to close the arb

    Returns:
        Direction of the profitable trade, or SwapDirection.NONE
    """
    fee = ((BASIS_POINT_DIVISOR - fee_basis_points * fee_multiplier) * WAD
           // BASIS_POINT_DIVISOR)
    if fee <= 0:
        raise InvalidGammaError(
            f"fee of {fee_basis_points} bps x{fee_multiplier} leaves no retained value")

    upper_arb_bound = current_price * WAD // fee
    lower_arb_bound = current_price * fee // WAD

    if target_price > upper_arb_bound:
        return SwapDirection.SWAP_Y_TO_X
    if target_price < lower_arb_bound:
        return SwapDirection.SWAP_X_TO_Y
    return SwapDirection.NONE


def _checked_pool_state(source: PoolStateSource, pool_id: int) -> PoolState:
    state = source.get_pool_state(pool_id)
    if state.liquidity <= 0 or state.virtual_x <= 0 or state.virtual_y <= 0:
        raise PoolUnavailableError(
            f"Pool {pool_id} has no liquidity: liquidity={state.liquidity}, "
            f"x={state.virtual_x}, y={state.virtual_y}")
    return state


def load_pool(source: PoolStateSource, pool_id: int,
              timestamp: int) -> Tuple[PoolState, NormalCurve]:
    """
    Read a pool once and build its curve from that same snapshot.

    Raises:
        PoolUnavailableError: if the pool has no liquidity or reserves
    """
    state = _checked_pool_state(source, pool_id)
    config = source.get_pool_config(pool_id)
    return state, NormalCurve.from_pool(state, config, timestamp)


def load_curve(source: PoolStateSource, pool_id: int, timestamp: int) -> NormalCurve:
    """Build the current curve of a pool from the settlement layer."""
    return load_pool(source, pool_id, timestamp)[1]


def compute_spot_price(source: PoolStateSource, pool_id: int, timestamp: int) -> int:
    """Marginal price the pool currently quotes."""
    return load_curve(source, pool_id, timestamp).marginal_price()


def compute_arbitrage_order(
    source: PoolStateSource,
    pool_id: int,
    target_price: int,
    timestamp: int,
    caller: str
) -> Optional[Order]:
    """
    Find the single sided trade that moves the pool's marginal price to
    `target_price`, net of fees.

    The solver works per unit of liquidity; the order is sized here by
    multiplying with the pool's liquidity and quoted by the settlement layer.

    Args:
        source: Settlement layer queried for state, config and quotes
        pool_id: Pool to arbitrage
        target_price: Reference price, WAD
        timestamp: Current time in seconds
        caller: Address the quote is requested for

    Returns:
        A complete Order, or None when the pool is already within the
        no-arbitrage band

    Raises:
        PoolUnavailableError: if the pool has no liquidity or reserves
        ZeroOutputError: if settlement quotes no output for the trade
    """
    state, curve = load_pool(source, pool_id, timestamp)
    gamma = compute_gamma(state.fee_basis_points)

    delta_x = compute_x_input_given_marginal_price(curve, target_price, gamma)
    if delta_x > 0:
        return _size_order(source, pool_id, state.liquidity, True, delta_x, caller)

    delta_y = compute_y_input_given_marginal_price(curve, target_price, gamma, curve.invariant)
    if delta_y > 0:
        return _size_order(source, pool_id, state.liquidity, False, delta_y, caller)

    logger.debug("Pool %s: no arbitrage at target price %s", pool_id, target_price)
    return None


def _size_order(source: PoolStateSource, pool_id: int, liquidity: int, sell_asset: bool,
                delta_per_liquidity: int, caller: str) -> Optional[Order]:
    input_amount = to_uint(mul_wad(delta_per_liquidity, liquidity))
    if input_amount == 0:
        logger.debug("Pool %s: trade rounds to zero at liquidity %s", pool_id, liquidity)
        return None

    output_amount = source.get_amount_out(pool_id, sell_asset, input_amount, caller)
    if output_amount <= 0:
        raise ZeroOutputError(
            f"Pool {pool_id} quotes no output for input {input_amount} "
            f"(sell_asset={sell_asset})")

    order = Order(
        pool_id=pool_id,
        input_amount=input_amount,
        output_amount=to_uint(output_amount),
        sell_asset=sell_asset,
        use_max=False
    )
    logger.debug("Pool %s: arbitrage order %s", pool_id, order)
    return order
