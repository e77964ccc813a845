"""
Tests for the in-memory order book.

Tests cover:
- Order creation (queued status, ISO timestamp, estimated minutes)
- Time-derived ids and same-millisecond bumping
- Lookup of known and unknown ids
- Eviction of the oldest orders
- Concurrent creation yields unique ids
"""
import threading

import pytest

from naijavoice.services.orders import STATUS_QUEUED, OrderBook, estimate_minutes
from naijavoice.services.validators import SynthesisRequest


def _req(text="Hello Lagos", voice="lagos-female"):
    return SynthesisRequest(text=text, voice=voice, speed=1.0)


class FixedClock:
    """Clock that returns a settable time."""

    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now


class TestEstimateMinutes:

    def test_short_text(self):
        assert estimate_minutes("Hello Lagos") == 1

    def test_rounds_up(self):
        assert estimate_minutes(" ".join(["word"] * 151)) == 2

    def test_custom_rate(self):
        assert estimate_minutes("a b c d", words_per_minute=2) == 2


class TestOrderBook:

    def test_create_queued_order(self):
        book = OrderBook(clock=FixedClock())
        order = book.create(_req())
        assert order.status == STATUS_QUEUED
        assert order.text == "Hello Lagos"
        assert order.voice == "lagos-female"
        assert order.estimated_minutes == 1
        assert order.timestamp.startswith("2023-11-14T22:13:20")

    def test_id_is_milliseconds(self):
        book = OrderBook(clock=FixedClock(1_700_000_000.5))
        assert book.create(_req()).id == 1_700_000_000_500

    def test_same_millisecond_ids_bumped(self):
        book = OrderBook(clock=FixedClock())
        first = book.create(_req())
        second = book.create(_req())
        assert second.id == first.id + 1

    def test_clock_going_backwards(self):
        clock = FixedClock()
        book = OrderBook(clock=clock)
        first = book.create(_req())
        clock.now -= 10
        assert book.create(_req()).id > first.id

    def test_get(self):
        book = OrderBook()
        order = book.create(_req())
        assert book.get(order.id) == order
        assert book.get(12345) is None

    def test_to_dict(self):
        order = OrderBook(clock=FixedClock()).create(_req())
        d = order.to_dict()
        assert d["status"] == "queued"
        assert d["estimatedMinutes"] == 1
        assert d["id"] == order.id

    def test_eviction(self):
        clock = FixedClock()
        book = OrderBook(max_items=2, clock=clock)
        first = book.create(_req())
        book.create(_req())
        book.create(_req())
        assert len(book) == 2
        assert book.get(first.id) is None
        assert book.stats() == {"tracked": 2, "max_items": 2, "evictions": 1}

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            OrderBook(max_items=0)


class TestOrderBookConcurrency:

    def test_unique_ids_across_threads(self):
        book = OrderBook(max_items=10_000)
        ids = []
        lock = threading.Lock()

        def worker():
            local = [book.create(_req()).id for _ in range(100)]
            with lock:
                ids.extend(local)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(ids) == 800
        assert len(set(ids)) == 800
