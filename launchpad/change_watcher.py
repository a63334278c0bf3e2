#===============================================================================
#  Launchpad | change_watcher.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Poll-based install/uninstall detection for ./applications. Emits
#  Installed / Uninstalled events to registered callbacks.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional, Set, Union

from .constants import CHANGE_POLL_INTERVAL_S
from .entity_cache import EntitySource
from .models import Installed, Uninstalled

logger = logging.getLogger(__name__)

ChangeEvent = Union[Installed, Uninstalled]


class AppChangeWatcher:
    """
    Poll-based watcher for robustness.
    Calls every listener with one event per added/removed identifier.
    """

    def __init__(self, source: EntitySource, poll_interval: float = CHANGE_POLL_INTERVAL_S):
        self.source = source
        self._poll_interval = poll_interval
        self._listeners: List[Callable[[ChangeEvent], None]] = []
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._known: Optional[Set[str]] = None

    def add_listener(self, listener: Callable[[ChangeEvent], None]) -> None:
        self._listeners.append(listener)

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()

    def poll_once(self) -> List[ChangeEvent]:
        """Scan once and emit the differences against the previous scan.

        The first scan only records a baseline.
        """
        try:
            current = {t.identifier for t in self.source.query_installed_entities()}
        except Exception as e:
            logger.warning("Change scan failed: %s", e)
            return []

        if self._known is None:
            self._known = current
            return []

        events: List[ChangeEvent] = [Installed(i) for i in sorted(current - self._known)]
        events += [Uninstalled(i) for i in sorted(self._known - current)]
        self._known = current

        for event in events:
            for listener in list(self._listeners):
                listener(event)
        return events

    def _run(self) -> None:
        while not self._stop.is_set():
            self.poll_once()
            self._stop.wait(self._poll_interval)
