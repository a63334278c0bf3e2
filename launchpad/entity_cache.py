#===============================================================================
#  Launchpad | entity_cache.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Short-lived cache of the installed launch targets, sorted by name and
#  invalidated on install/uninstall events.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from typing import List, Protocol, Union

from .constants import CACHE_TTL_MS
from .models import Installed, LaunchTarget, Uninstalled
from .ttl_cache import Clock, TtlCache, now_ms

logger = logging.getLogger(__name__)


class EntitySource(Protocol):
    def query_installed_entities(self) -> List[LaunchTarget]:
        ...


class _SourceFailed(Exception):
    pass


class EntityCache:
    """Read-through cache over an entity source.

    A failed source query is logged and yields an empty list; the failure is
    not cached, so the next call queries again.
    """

    def __init__(self, source: EntitySource, ttl_ms: int = CACHE_TTL_MS, clock: Clock = now_ms):
        self.source = source
        self._cache: TtlCache[List[LaunchTarget]] = TtlCache(ttl_ms=ttl_ms, clock=clock)

    def _load(self) -> List[LaunchTarget]:
        try:
            targets = self.source.query_installed_entities()
        except Exception as e:
            logger.error("Entity source query failed: %s", e)
            raise _SourceFailed() from e
        snapshot = sorted(targets, key=lambda t: t.display_name.lower())
        logger.debug("Loaded %d launch targets", len(snapshot))
        return snapshot

    def list(self) -> List[LaunchTarget]:
        try:
            return list(self._cache.get(self._load))
        except _SourceFailed:
            return []

    def invalidate(self) -> None:
        self._cache.invalidate()

    def on_change(self, event: Union[Installed, Uninstalled]) -> None:
        logger.info("%s: %s", type(event).__name__, event.identifier)
        self.invalidate()
