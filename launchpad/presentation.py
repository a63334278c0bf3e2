#===============================================================================
#  Launchpad | presentation.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-13
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Builds the flat row list the tile grid renders: smart list first, the
#  first row filled alphabetically when the smart list is short, then the
#  rest grouped by category or sorted by name.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Union

from .models import Category, LaunchTarget, SortOrder
from .ranking import category_sort_key


@dataclass(frozen=True)
class AppItem:
    target: LaunchTarget
    smart: bool = False


@dataclass(frozen=True)
class Divider:
    pass


@dataclass(frozen=True)
class CategoryHeader:
    category: Category


Row = Union[AppItem, Divider, CategoryHeader]


def _by_name(targets: Sequence[LaunchTarget]) -> List[LaunchTarget]:
    return sorted(targets, key=lambda t: t.display_name.lower())


def combine_with_fill(
    smart: Sequence[LaunchTarget],
    all_targets: Sequence[LaunchTarget],
    sort_order: SortOrder,
    searching: bool,
    grid_size: int,
) -> List[Row]:
    rows: List[Row] = [AppItem(t, smart=True) for t in smart]
    placed = {t.identifier for t in smart}
    rest = [t for t in all_targets if t.identifier not in placed]

    if len(smart) < grid_size:
        fill = _by_name(rest)[: grid_size - len(smart)]
        rows.extend(AppItem(t) for t in fill)
        placed.update(t.identifier for t in fill)
        rest = [t for t in rest if t.identifier not in placed]

    if not rest:
        return rows
    if rows:
        rows.append(Divider())

    if sort_order == SortOrder.CATEGORY and not searching:
        groups: Dict[Category, List[LaunchTarget]] = {}
        for t in rest:
            groups.setdefault(t.category, []).append(t)
        for category in sorted(groups, key=category_sort_key):
            rows.append(CategoryHeader(category))
            rows.extend(AppItem(t) for t in _by_name(groups[category]))
    elif sort_order == SortOrder.NAME or searching:
        rows.extend(AppItem(t) for t in _by_name(rest))
    else:
        rows.extend(AppItem(t) for t in rest)
    return rows
