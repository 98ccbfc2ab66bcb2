# normalarb/tests/test_events.py

import pytest
from datetime import datetime
from normalarb.core.events import (
    Event,
    EventLog,
    create_arbitrage_order_event,
    create_hedge_event,
    create_no_arbitrage_event,
    create_swap_event,
    create_swap_failed_event,
    create_swap_retried_event,
)
from normalarb.core.models import Order

@pytest.fixture
def order():
    return Order(pool_id=7, input_amount=1_000, output_amount=990, sell_asset=True)

def test_event_creation():
    """Test basic event creation."""
    event = Event("TestEvent", {"param1": "value1"})
    assert event.name == "TestEvent"
    assert event.params["param1"] == "value1"
    assert isinstance(event.timestamp, datetime)

def test_event_log():
    """Test EventLog basic functionality."""
    log = EventLog()
    event1 = Event("Event1", {"param1": "value1"})
    event2 = Event("Event2", {"param2": "value2"})

    log.emit(event1)
    log.emit(event2)

    events = log.get_events()
    assert len(events) == 2
    assert events[0].name == "Event1"
    assert events[1].name == "Event2"

def test_event_filtering():
    """Test filtering events by name."""
    log = EventLog()
    log.emit(Event("TypeA", {"value": 1}))
    log.emit(Event("TypeB", {"value": 2}))
    log.emit(Event("TypeA", {"value": 3}))

    type_a_events = log.get_events("TypeA")
    assert len(type_a_events) == 2
    assert all(e.name == "TypeA" for e in type_a_events)

def test_arbitrage_order_event_creation(order):
    """Test arbitrage order event factory function."""
    event = create_arbitrage_order_event("arb1", order, target_price=10 ** 18)

    assert event.name == "ArbitrageOrder"
    assert event.params["caller"] == "arb1"
    assert event.params["pool_id"] == 7
    assert event.params["input"] == 1_000
    assert event.params["output"] == 990
    assert event.params["sell_asset"] is True
    assert event.params["target_price"] == 10 ** 18

def test_no_arbitrage_event_creation():
    """Test no arbitrage event factory function."""
    event = create_no_arbitrage_event(3, None, 5)

    assert event.name == "NoArbitrage"
    assert event.params["pool_id"] == 3
    assert event.params["current_price"] is None
    assert event.params["target_price"] == 5

def test_swap_events_creation(order):
    """Test the swap lifecycle event factories."""
    swap = create_swap_event("arb1", order, attempts=2)
    assert swap.name == "Swap"
    assert swap.params["attempts"] == 2
    assert swap.params["caller"] == "arb1"

    retried = create_swap_retried_event(order, attempt=1)
    assert retried.name == "SwapRetried"
    assert retried.params["attempt"] == 1
    assert retried.params["output"] == 990

    failed = create_swap_failed_event(order, attempts=100)
    assert failed.name == "SwapFailed"
    assert failed.params["attempts"] == 100

def test_hedge_event_creation():
    """Test hedge event factory function."""
    event = create_hedge_event("arb1", False, 42)

    assert event.name == "Hedge"
    assert event.params["sell_asset"] is False
    assert event.params["amount"] == 42

def test_event_log_clear():
    """Test clearing the event log."""
    log = EventLog()
    log.emit(Event("Event1", {"param1": "value1"}))
    log.emit(Event("Event2", {"param2": "value2"}))

    assert len(log.get_events()) == 2
    log.clear()
    assert len(log.get_events()) == 0
