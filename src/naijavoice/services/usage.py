"""
Usage Aggregation.

Process-lifetime counters behind /api/analytics. One UsageAggregator is
owned by the SynthesisService and shared by reference with every request
handler; nothing is persisted, so a restart starts again from zero.

FastAPI runs sync handlers on a thread pool, so every update and read
happens under a single lock.

Invariants:
    - total_requests and total_characters never decrease
    - each accepted request adds exactly 1 and len(text) respectively
"""
from __future__ import annotations

import threading
from dataclasses import asdict, dataclass
from typing import Dict, Set


@dataclass(frozen=True)
class UsageSnapshot:
    """
    Point-in-time copy of the counters.

    average_length is total_characters / max(total_requests, 1), so it is
    0.0 before any request was accepted.
    """
    total_requests: int
    total_characters: int
    average_length: float
    unique_users: int

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


class UsageAggregator:
    """
    Thread-safe counters of accepted synthesis requests.

    The unique-user set is part of the analytics contract but nothing
    identifies users yet, so it stays empty and unique_users reports 0.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._total_requests = 0
        self._total_characters = 0
        self._unique_users: Set[str] = set()

    def record_accepted(self, character_count: int) -> None:
        """
        Count one accepted request of character_count characters.

        Raises:
            ValueError: If character_count is negative.
        """
        if character_count < 0:
            raise ValueError(f"character_count must be non-negative, got {character_count}")
        with self._lock:
            self._total_requests += 1
            self._total_characters += character_count

    def snapshot(self) -> UsageSnapshot:
        with self._lock:
            requests = self._total_requests
            characters = self._total_characters
            users = len(self._unique_users)
        return UsageSnapshot(
            total_requests=requests,
            total_characters=characters,
            average_length=characters / max(requests, 1),
            unique_users=users,
        )

    @property
    def total_requests(self) -> int:
        with self._lock:
            return self._total_requests

    def reset(self) -> None:
        """Zero all counters. Intended for tests."""
        with self._lock:
            self._total_requests = 0
            self._total_characters = 0
            self._unique_users.clear()
