# normalarb/core/events.py

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from datetime import datetime

from .models import Order


@dataclass
class Event:
    """Base class for all events in the system."""
    name: str
    params: Dict[str, Any]
    timestamp: datetime = None

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.now()


class EventLog:
    """Maintains a log of all events in the system."""
    def __init__(self):
        self._events: List[Event] = []

    def emit(self, event: Event):
        """Add an event to the log."""
        self._events.append(event)

    def get_events(self, event_name: Optional[str] = None) -> List[Event]:
        """
        Retrieve events from the log.
        If event_name is provided, only returns events with that name.
        """
        if event_name is None:
            return self._events.copy()
        return [e for e in self._events if e.name == event_name]

    def clear(self):
        """Clear all events from the log."""
        self._events = []


# Common event factories
def _order_params(order: Order) -> Dict[str, Any]:
    return {
        "pool_id": order.pool_id,
        "input": order.input_amount,
        "output": order.output_amount,
        "sell_asset": order.sell_asset
    }


def create_arbitrage_order_event(caller: str, order: Order, target_price: int) -> Event:
    return Event(
        name="ArbitrageOrder",
        params={
            "caller": caller,
            "target_price": target_price,
            **_order_params(order)
        }
    )


def create_no_arbitrage_event(pool_id: int, current_price: Optional[int],
                              target_price: int) -> Event:
    return Event(
        name="NoArbitrage",
        params={
            "pool_id": pool_id,
            "current_price": current_price,
            "target_price": target_price
        }
    )


def create_swap_event(caller: str, order: Order, attempts: int) -> Event:
    return Event(
        name="Swap",
        params={
            "caller": caller,
            "attempts": attempts,
            **_order_params(order)
        }
    )


def create_swap_retried_event(order: Order, attempt: int) -> Event:
    return Event(
        name="SwapRetried",
        params={
            "attempt": attempt,
            **_order_params(order)
        }
    )


def create_swap_failed_event(order: Order, attempts: int) -> Event:
    return Event(
        name="SwapFailed",
        params={
            "attempts": attempts,
            **_order_params(order)
        }
    )


def create_hedge_event(caller: str, sell_asset: bool, amount: int) -> Event:
    return Event(
        name="Hedge",
        params={
            "caller": caller,
            "sell_asset": sell_asset,
            "amount": amount
        }
    )
