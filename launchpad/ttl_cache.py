#===============================================================================
#  Launchpad | ttl_cache.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Single-value time-to-live cache with a serialized refresh section, plus
#  the millisecond wall clock used across the launcher.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import threading
import time
from typing import Callable, Generic, Optional, TypeVar

from .constants import CACHE_TTL_MS

T = TypeVar("T")

Clock = Callable[[], int]


def now_ms() -> int:
    return int(time.time() * 1000)


class TtlCache(Generic[T]):
    """Holds ``(value, fetched_at_ms)``; valid while ``now - fetched_at < ttl``.

    ``get(loader)`` runs the loader under the lock, so overlapping callers
    observe at most one load per expiry.
    """

    def __init__(self, ttl_ms: int = CACHE_TTL_MS, clock: Clock = now_ms):
        self.ttl_ms = ttl_ms
        self.clock = clock
        self._lock = threading.Lock()
        self._value: Optional[T] = None
        self._fetched_at = 0

    def _fresh(self, now: int) -> bool:
        return self._value is not None and (now - self._fetched_at) < self.ttl_ms

    def get(self, loader: Callable[[], T]) -> T:
        with self._lock:
            now = self.clock()
            if self._fresh(now):
                return self._value  # type: ignore[return-value]
            value = loader()
            self._value = value
            self._fetched_at = now
            return value

    def invalidate(self) -> None:
        with self._lock:
            self._value = None
            self._fetched_at = 0
