#===============================================================================
#  Launchpad | usage_ledger.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Per-target launch counts and last-used timestamps, persisted in the
#  key/value store. Reads go through a short TTL cache; usage scores prefer
#  the system usage-time source when it is available and permitted.
#
#  Key encoding
#  ------------
#  Identifiers may contain "/". Stored keys escape "%" as "%25" and "/" as
#  "%2F", then append "_count" / "_timestamp".
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import re
import threading
from typing import Any, Dict, List, Optional

from .constants import CACHE_TTL_MS, RECENT_LOOKUP_COUNT, USAGE_STATS_WINDOW_MS
from .kv_store import KeyValueStore
from .models import UsageRecord
from .ttl_cache import Clock, TtlCache, now_ms
from .usage_stats import UsageStatsSource

logger = logging.getLogger(__name__)

COUNT_SUFFIX = "_count"
TIMESTAMP_SUFFIX = "_timestamp"

_ESCAPE_TOKEN_RE = re.compile(r"%(25|2F)")
_UNESCAPE = {"25": "%", "2F": "/"}


def escape_identifier(identifier: str) -> str:
    return identifier.replace("%", "%25").replace("/", "%2F")


def unescape_identifier(key: str) -> str:
    return _ESCAPE_TOKEN_RE.sub(lambda m: _UNESCAPE[m.group(1)], key)


def count_key(identifier: str) -> str:
    return escape_identifier(identifier) + COUNT_SUFFIX


def timestamp_key(identifier: str) -> str:
    return escape_identifier(identifier) + TIMESTAMP_SUFFIX


class UsageLedger:
    def __init__(
        self,
        store: KeyValueStore,
        system_source: Optional[UsageStatsSource] = None,
        ttl_ms: int = CACHE_TTL_MS,
        clock: Clock = now_ms,
    ):
        self.store = store
        self.system_source = system_source
        self.clock = clock
        self._write_lock = threading.Lock()
        self._cache: TtlCache[Dict[str, Any]] = TtlCache(ttl_ms=ttl_ms, clock=clock)

    def _snapshot(self) -> Dict[str, Any]:
        return self._cache.get(self.store.snapshot)

    def invalidate(self) -> None:
        self._cache.invalidate()

    # ----------------------------
    # Writes
    # ----------------------------
    def record_launch(self, identifier: str) -> None:
        ck, tk = count_key(identifier), timestamp_key(identifier)
        with self._write_lock:
            current = self.store.get_int(ck, 0)
            self.store.put_many({ck: current + 1, tk: self.clock()})
        self.invalidate()
        logger.debug("Recorded launch of %s (count=%d)", identifier, current + 1)

    # ----------------------------
    # Reads
    # ----------------------------
    def usage_info(self, identifier: str) -> UsageRecord:
        snap = self._snapshot()
        return UsageRecord(
            identifier=identifier,
            launch_count=int(snap.get(count_key(identifier), 0)),
            last_used_ms=int(snap.get(timestamp_key(identifier), 0)),
        )

    def all_records(self) -> List[UsageRecord]:
        snap = self._snapshot()
        records = []
        for key, value in snap.items():
            if not key.endswith(COUNT_SUFFIX) or not isinstance(value, int):
                continue
            escaped = key[: -len(COUNT_SUFFIX)]
            records.append(UsageRecord(
                identifier=unescape_identifier(escaped),
                launch_count=value,
                last_used_ms=int(snap.get(escaped + TIMESTAMP_SUFFIX, 0)),
            ))
        return records

    def has_been_opened(self, identifier: str) -> bool:
        return self.usage_info(identifier).launch_count > 0

    def recently_used(self, n: int = RECENT_LOOKUP_COUNT) -> List[str]:
        records = [r for r in self.all_records() if r.last_used_ms > 0]
        records.sort(key=lambda r: r.last_used_ms, reverse=True)
        return [r.identifier for r in records[:n]]

    def most_used(self, n: int = RECENT_LOOKUP_COUNT) -> List[str]:
        records = [r for r in self.all_records() if r.launch_count > 0]
        records.sort(key=lambda r: r.launch_count, reverse=True)
        return [r.identifier for r in records[:n]]

    def has_usage_permission(self) -> bool:
        if self.system_source is None:
            return False
        try:
            return bool(self.system_source.has_permission())
        except Exception as e:
            logger.debug("Usage permission probe failed: %s", e)
            return False

    def usage_map(self) -> Dict[str, int]:
        """identifier -> score.

        System foreground seconds when the source is permitted, else local
        launch counts.
        """
        if self.has_usage_permission():
            end = self.clock()
            try:
                return dict(self.system_source.usage_seconds(end - USAGE_STATS_WINDOW_MS, end))
            except Exception as e:
                logger.debug("System usage stats unavailable, using local counts: %s", e)
        return {r.identifier: r.launch_count for r in self.all_records()}
