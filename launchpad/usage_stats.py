#===============================================================================
#  Launchpad | usage_stats.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  System usage-time source backed by psutil. Tracks processes started by
#  the launcher and reports their running time per launch target inside a
#  time window. Sessions persist in the usage store across restarts.
#  Access problems or an empty window surface as "no permission".
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import threading
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Protocol

import psutil

from .constants import USAGE_STATS_WINDOW_MS
from .kv_store import KeyValueStore
from .ttl_cache import Clock, now_ms

logger = logging.getLogger(__name__)

SESSIONS_KEY = "process_sessions"


class UsageStatsSource(Protocol):
    def has_permission(self) -> bool:
        ...

    def usage_seconds(self, window_start_ms: int, window_end_ms: int) -> Dict[str, int]:
        ...


@dataclass
class _Session:
    identifier: str
    pid: int
    started_ms: int
    seen_ms: int
    ended_ms: Optional[int] = None

    def end_or(self, now: int) -> int:
        return self.ended_ms if self.ended_ms is not None else now


def _session_from_row(row: Any) -> Optional[_Session]:
    if not isinstance(row, dict):
        return None
    try:
        started = int(row["started_ms"])
        seen = int(row.get("seen_ms", started))
        ended = row.get("ended_ms")
        # Sessions left open by an earlier run end where they were last seen.
        return _Session(
            identifier=str(row["identifier"]),
            pid=int(row.get("pid", 0)),
            started_ms=started,
            seen_ms=seen,
            ended_ms=int(ended) if ended is not None else seen,
        )
    except (KeyError, TypeError, ValueError):
        return None


class ProcessUsageSource:
    """Running time of launcher-started processes, per identifier.

    Sessions are kept in ``store`` (when given) so totals survive restarts.
    Permission is only reported once there is tracked time inside the usage
    window; before that, callers keep using their own launch counts.
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        clock: Clock = now_ms,
        window_ms: int = USAGE_STATS_WINDOW_MS,
    ):
        self.store = store
        self.clock = clock
        self.window_ms = window_ms
        self._lock = threading.Lock()
        self._sessions: List[_Session] = self._load()

    def _load(self) -> List[_Session]:
        if self.store is None:
            return []
        sessions = [_session_from_row(r) for r in self.store.get_list(SESSIONS_KEY)]
        return [s for s in sessions if s is not None]

    def _persist(self, now: int) -> None:
        if self.store is None:
            return
        cutoff = now - self.window_ms
        with self._lock:
            self._sessions = [s for s in self._sessions if s.end_or(now) > cutoff]
            rows = [asdict(s) for s in self._sessions]
        self.store.put_list(SESSIONS_KEY, rows)

    def track(self, pid: int, identifier: str) -> None:
        now = self.clock()
        try:
            started = int(psutil.Process(pid).create_time() * 1000)
        except psutil.Error:
            started = now
        with self._lock:
            self._sessions.append(_Session(identifier=identifier, pid=pid, started_ms=started, seen_ms=now))
        self._persist(now)

    def _refresh(self, now: int) -> None:
        for s in self._open_sessions():
            try:
                alive = psutil.Process(s.pid).is_running()
            except psutil.NoSuchProcess:
                alive = False
            s.seen_ms = now
            if not alive:
                s.ended_ms = now

    def _open_sessions(self) -> List[_Session]:
        with self._lock:
            return [s for s in self._sessions if s.ended_ms is None]

    def _totals(self, window_start_ms: int, window_end_ms: int, now: int) -> Dict[str, int]:
        totals: Dict[str, int] = {}
        with self._lock:
            for s in self._sessions:
                overlap = min(s.end_or(now), window_end_ms) - max(s.started_ms, window_start_ms)
                if overlap > 0:
                    totals[s.identifier] = totals.get(s.identifier, 0) + overlap // 1000
        return {k: v for k, v in totals.items() if v > 0}

    def has_permission(self) -> bool:
        now = self.clock()
        self._refresh(now)
        if not self._totals(now - self.window_ms, now, now):
            return False
        try:
            psutil.Process().create_time()
            for s in self._open_sessions():
                psutil.Process(s.pid).create_time()
        except psutil.AccessDenied:
            logger.debug("Process usage time is not readable")
            return False
        except psutil.NoSuchProcess:
            return True
        return True

    def usage_seconds(self, window_start_ms: int, window_end_ms: int) -> Dict[str, int]:
        now = self.clock()
        self._refresh(now)
        self._persist(now)
        return self._totals(window_start_ms, window_end_ms, now)

    def flush(self) -> None:
        """Record how long still-running processes have been up so far."""
        now = self.clock()
        self._refresh(now)
        self._persist(now)
