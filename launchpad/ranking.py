#===============================================================================
#  Launchpad | ranking.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Smart list ranking (new install, recently used, most used) and the sort
#  orders offered for the full target list.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .constants import NEW_INSTALL_WINDOW_MS, RECENT_LOOKUP_COUNT
from .models import Category, LaunchTarget, SortOrder
from .ttl_cache import Clock, now_ms
from .usage_ledger import UsageLedger


def usage_score(target: LaunchTarget, usage_map: Dict[str, int]) -> int:
    """Score by full identifier, falling back to the bare container id."""
    if target.identifier in usage_map:
        return usage_map[target.identifier]
    return usage_map.get(target.container_id, 0)


def newest_unopened(targets: Sequence[LaunchTarget], ledger: UsageLedger, now: int) -> Optional[LaunchTarget]:
    cutoff = now - NEW_INSTALL_WINDOW_MS
    best: Optional[LaunchTarget] = None
    for t in targets:
        if t.install_time_ms <= cutoff:
            continue
        if ledger.has_been_opened(t.identifier):
            continue
        if best is None or t.install_time_ms > best.install_time_ms:
            best = t
    return best


def smart_list(
    all_targets: Sequence[LaunchTarget],
    limit: int,
    ledger: UsageLedger,
    clock: Clock = now_ms,
) -> List[LaunchTarget]:
    """Ranked shortlist of at most ``limit`` targets, no duplicates.

    Order: newest unopened install (last 24h), then up to half the remaining
    slots (at least one) of recently used, then most used by score. Ties keep
    the input order. No alphabetic fill happens here.
    """
    if not all_targets or limit <= 0:
        return []

    by_id = {t.identifier: t for t in all_targets}
    result: List[LaunchTarget] = []
    added = set()

    def add(t: LaunchTarget) -> None:
        if len(result) < limit and t.identifier not in added:
            added.add(t.identifier)
            result.append(t)

    fresh = newest_unopened(all_targets, ledger, clock())
    if fresh is not None:
        add(fresh)

    remaining = limit - len(result)
    recent_limit = max(1, remaining // 2)
    for identifier in ledger.recently_used(RECENT_LOOKUP_COUNT)[:recent_limit]:
        t = by_id.get(identifier)
        if t is not None:
            add(t)

    usage_map = ledger.usage_map()
    scored = [t for t in all_targets if usage_score(t, usage_map) > 0]
    scored.sort(key=lambda t: usage_score(t, usage_map), reverse=True)
    for t in scored:
        if len(result) >= limit:
            break
        add(t)

    return result[:limit]


def newly_installed_identifier(
    smart: Sequence[LaunchTarget],
    ledger: UsageLedger,
    clock: Clock = now_ms,
) -> Optional[str]:
    """Identifier for the "new" badge: the first smart entry if still unopened and recent."""
    if not smart:
        return None
    first = smart[0]
    if first.install_time_ms > clock() - NEW_INSTALL_WINDOW_MS and not ledger.has_been_opened(first.identifier):
        return first.identifier
    return None


def sort_targets(
    targets: Sequence[LaunchTarget],
    order: SortOrder,
    usage_map: Optional[Dict[str, int]] = None,
) -> List[LaunchTarget]:
    if order == SortOrder.USAGE:
        scores = usage_map or {}
        return sorted(targets, key=lambda t: usage_score(t, scores), reverse=True)
    if order == SortOrder.CATEGORY:
        return sorted(targets, key=lambda t: (category_sort_key(t.category), t.display_name.lower()))
    return sorted(targets, key=lambda t: t.display_name.lower())


def category_sort_key(category: Category) -> str:
    # "Other" always last
    return "zzz" if category == Category.OTHER else category.value
