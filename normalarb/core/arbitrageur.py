# normalarb/core/arbitrageur.py

import logging
from dataclasses import replace
from typing import Optional

from .arbitrage import (
    SwapDirection,
    check_no_arb_bounds,
    compute_arbitrage_order,
    load_pool,
)
from .config import ArbitrageSettings
from .curve import BASIS_POINT_DIVISOR
from .errors import TradeFailedError
from .events import (
    EventLog,
    create_arbitrage_order_event,
    create_hedge_event,
    create_no_arbitrage_event,
    create_swap_event,
    create_swap_failed_event,
    create_swap_retried_event,
)
from .models import Order
from .roles import Exchange, OrderExecutor, PoolStateSource, PriceOracle

logger = logging.getLogger(__name__)


class Arbitrageur:
    """
    Agent that trades a normal strategy pool towards the oracle price.

    Each call to `run` is one independent cycle. Unlike the decision core,
    the agent owns a retry policy: a rejected swap is resubmitted asking for
    slightly less output.
    """
    def __init__(
        self,
        source: PoolStateSource,
        executor: OrderExecutor,
        oracle: PriceOracle,
        event_log: EventLog,
        settings: Optional[ArbitrageSettings] = None,
        exchange: Optional[Exchange] = None
    ):
        self.source = source
        self.executor = executor
        self.oracle = oracle
        self.event_log = event_log
        self.settings = settings or ArbitrageSettings()
        self.exchange = exchange

    @property
    def address(self) -> str:
        return self.settings.caller

    def run(self, pool_id: int, timestamp: int) -> Optional[Order]:
        """
        Run one arbitrage cycle against a pool.

        Args:
            pool_id: Pool to arbitrage
            timestamp: Current time in seconds

        Returns:
            The order that was settled, or None if nothing was traded
        """
        target_price = self.oracle.get_price()

        current_price = None
        if self.settings.check_arb_bounds:
            state, curve = load_pool(self.source, pool_id, timestamp)
            current_price = curve.marginal_price()
            direction = check_no_arb_bounds(
                current_price,
                target_price,
                state.fee_basis_points,
                self.settings.no_arb_fee_multiplier
            )
            logger.debug("Pool %s: reported price %s, reference price %s, direction %s",
                         pool_id, current_price, target_price, direction.value)
            if direction is SwapDirection.NONE:
                self.event_log.emit(create_no_arbitrage_event(pool_id, current_price, target_price))
                return None

        order = compute_arbitrage_order(self.source, pool_id, target_price, timestamp, self.address)
        if order is None:
            self.event_log.emit(create_no_arbitrage_event(pool_id, current_price, target_price))
            return None

        self.event_log.emit(create_arbitrage_order_event(self.address, order, target_price))

        settled = self._execute(order)
        if settled is not None and self.exchange is not None:
            self._hedge(settled)
        return settled

    def _execute(self, order: Order) -> Optional[Order]:
        keep = BASIS_POINT_DIVISOR - self.settings.retry_output_haircut_basis_points
        max_attempts = self.settings.max_swap_attempts
        for attempt in range(1, max_attempts + 1):
            if self.executor.swap(order, self.address):
                logger.info("Swap settled on pool %s after %s attempt(s): in %s, out %s",
                            order.pool_id, attempt, order.input_amount, order.output_amount)
                self.event_log.emit(create_swap_event(self.address, order, attempt))
                return order
            if attempt == max_attempts:
                break

            order = replace(order, output_amount=order.output_amount * keep // BASIS_POINT_DIVISOR)
            logger.warning("Swap rejected on pool %s, retrying with output %s",
                           order.pool_id, order.output_amount)
            self.event_log.emit(create_swap_retried_event(order, attempt))

        logger.warning("Giving up on pool %s after %s rejected swaps", order.pool_id, max_attempts)
        self.event_log.emit(create_swap_failed_event(order, max_attempts))
        return None

    def _hedge(self, order: Order):
        # close out on the reference exchange by selling what the pool paid out
        sell_asset = not order.sell_asset
        if not self.exchange.trade(sell_asset, order.output_amount, self.address):
            raise TradeFailedError(
                f"Hedge of {order.output_amount} (sell_asset={sell_asset}) failed")
        self.event_log.emit(create_hedge_event(self.address, sell_asset, order.output_amount))
