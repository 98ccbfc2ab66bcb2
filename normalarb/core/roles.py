# normalarb/core/roles.py

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Union

from .fixedpoint import to_wad
from .models import Order, PoolConfig, PoolState


class PriceOracle(ABC):
    """
    Abstract base class for sources of the reference price the arbitrageur
    pushes the pool towards.
    """
    @abstractmethod
    def get_price(self) -> int:
        """
        Get the reference price of x in terms of y, WAD scaled.
        """
        pass


class SimpleOracle(PriceOracle):
    """
    Basic oracle holding a price that simulation operators can move.
    """
    def __init__(self, price: Union[int, float, str, Decimal]):
        self._price = to_wad(price)

    def get_price(self) -> int:
        return self._price

    def set_price(self, price: Union[int, float, str, Decimal]) -> None:
        """Move the reference price, given in whole units."""
        self._price = to_wad(price)


class PoolStateSource(ABC):
    """
    Read access to the settlement layer that owns the pools.
    """
    @abstractmethod
    def get_pool_state(self, pool_id: int) -> PoolState:
        """Current liquidity, virtual reserves and fee of a pool."""
        pass

    @abstractmethod
    def get_pool_config(self, pool_id: int) -> PoolConfig:
        """Economic parameters the pool was created with."""
        pass

    @abstractmethod
    def get_amount_out(self, pool_id: int, sell_asset: bool, amount_in: int,
                       caller: str) -> int:
        """
        Output the pool would pay for `amount_in`. Treated as ground truth
        and never recomputed locally.
        """
        pass


class OrderExecutor(ABC):
    """
    Settlement entry point that executes swap orders.
    """
    @abstractmethod
    def swap(self, order: Order, caller: str) -> bool:
        """Execute the order. Returns False if settlement rejected it."""
        pass


class Exchange(ABC):
    """
    Liquid reference exchange used to close out the arbitrage.
    """
    @abstractmethod
    def trade(self, sell_asset: bool, amount: int, caller: str) -> bool:
        """Sell `amount` of x (or y if sell_asset is False)."""
        pass
