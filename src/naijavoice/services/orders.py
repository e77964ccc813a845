"""
In-Memory Order Book.

Every accepted synthesis request becomes an order. Orders live only in
process memory and the oldest are evicted once max_items is exceeded.

Order ids are millisecond timestamps. When two orders arrive within the
same millisecond the later one gets last_id + 1, so ids stay unique and
increasing within a process (they are not unique across restarts).

Status is set to "queued" on creation and nothing moves it forward:
there is no synthesis worker yet.

Example:
    >>> book = OrderBook(max_items=100)
    >>> order = book.create(SynthesisRequest(text="Hello Lagos", voice="lagos-female"))
    >>> book.get(order.id).status
    'queued'
"""
from __future__ import annotations

import math
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from naijavoice.core.config import Defaults
from naijavoice.services.validators import SynthesisRequest

STATUS_QUEUED = "queued"


@dataclass(frozen=True)
class OrderRecord:
    """
    One accepted synthesis order.

    Attributes:
        id: Time-derived order id (milliseconds since the epoch).
        text: Validated text.
        voice: Voice id as requested.
        speed: Speed multiplier as requested.
        timestamp: Creation time, ISO-8601 UTC.
        status: Order status ("queued").
        estimated_minutes: ceil(word_count / words_per_minute).
    """
    id: int
    text: str
    voice: str
    speed: float
    timestamp: str
    status: str = STATUS_QUEUED
    estimated_minutes: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "voice": self.voice,
            "speed": self.speed,
            "timestamp": self.timestamp,
            "status": self.status,
            "estimatedMinutes": self.estimated_minutes,
        }


def estimate_minutes(text: str, words_per_minute: int = Defaults.ORDERS_WORDS_PER_MINUTE) -> int:
    """Rough delivery estimate in minutes: ceil(words / words_per_minute)."""
    words = len(text.split(" "))
    return math.ceil(words / words_per_minute)


class OrderBook:
    """
    Thread-safe, bounded, insertion-ordered store of OrderRecords.

    Args:
        max_items: Orders kept before the oldest are evicted.
        words_per_minute: Used for estimated_minutes.
        clock: Returns seconds since the epoch. Injectable for tests.
    """

    def __init__(
        self,
        max_items: int = Defaults.ORDERS_MAX_TRACKED,
        words_per_minute: int = Defaults.ORDERS_WORDS_PER_MINUTE,
        clock: Callable[[], float] = time.time,
    ):
        if max_items <= 0:
            raise ValueError(f"max_items must be positive, got {max_items}")
        self.max_items = int(max_items)
        self.words_per_minute = int(words_per_minute)
        self._clock = clock

        self._orders: "OrderedDict[int, OrderRecord]" = OrderedDict()
        self._lock = threading.Lock()
        self._last_id = 0
        self._evictions = 0

    def _next_id(self, now: float) -> int:
        # Caller holds the lock
        candidate = int(now * 1000)
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate

    def create(self, request: SynthesisRequest) -> OrderRecord:
        """Record a new queued order for a validated request."""
        with self._lock:
            now = self._clock()
            order = OrderRecord(
                id=self._next_id(now),
                text=request.text,
                voice=request.voice,
                speed=request.speed,
                timestamp=datetime.fromtimestamp(now, tz=timezone.utc).isoformat(),
                status=STATUS_QUEUED,
                estimated_minutes=estimate_minutes(request.text, self.words_per_minute),
            )
            self._orders[order.id] = order

            while len(self._orders) > self.max_items:
                self._orders.popitem(last=False)
                self._evictions += 1

            return order

    def get(self, order_id: int) -> Optional[OrderRecord]:
        with self._lock:
            return self._orders.get(order_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._orders)

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "tracked": len(self._orders),
                "max_items": self.max_items,
                "evictions": self._evictions,
            }
