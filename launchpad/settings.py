#===============================================================================
#  Launchpad | settings.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Typed access to persistent launcher settings (grid size, sort order,
#  selected/enabled modes, hidden targets, prompts) with defaults.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from typing import List, Set

from .constants import DEFAULT_GRID_SIZE
from .kv_store import KeyValueStore
from .models import SearchMode, SortOrder

KEY_SELECTED_MODE = "selected_mode"
KEY_ENABLED_MODES = "enabled_modes"
KEY_HIDDEN_APPS = "hidden_apps"
KEY_GRID_SIZE = "grid_size"
KEY_AUTO_OPEN_SINGLE_RESULT = "auto_open_single_result"
KEY_APP_SORT_ORDER = "app_sort_order"
KEY_USAGE_STATS_PERMISSION_PROMPTED = "usage_stats_permission_prompted"


class LauncherSettings:
    def __init__(self, store: KeyValueStore):
        self.store = store

    # --- mode ---
    def selected_mode(self) -> SearchMode:
        raw = self.store.get_str(KEY_SELECTED_MODE, SearchMode.HANDWRITING.value)
        try:
            return SearchMode(raw)
        except ValueError:
            return SearchMode.HANDWRITING

    def set_selected_mode(self, mode: SearchMode) -> None:
        self.store.put_str(KEY_SELECTED_MODE, mode.value)

    def enabled_modes(self) -> List[SearchMode]:
        saved = self.store.get_str(KEY_ENABLED_MODES)
        if saved is None:
            return list(SearchMode)
        modes = []
        for part in saved.split(","):
            try:
                modes.append(SearchMode(part))
            except ValueError:
                continue
        return modes

    def set_enabled_modes(self, modes: List[SearchMode]) -> None:
        self.store.put_str(KEY_ENABLED_MODES, ",".join(m.value for m in modes))

    # --- hidden set ---
    def hidden(self) -> Set[str]:
        return self.store.get_string_set(KEY_HIDDEN_APPS)

    def add_hidden(self, identifier: str) -> None:
        current = self.hidden()
        current.add(identifier)
        self.store.put_string_set(KEY_HIDDEN_APPS, current)

    def remove_hidden(self, identifier: str) -> None:
        current = self.hidden()
        current.discard(identifier)
        self.store.put_string_set(KEY_HIDDEN_APPS, current)

    # --- grid / sort ---
    def grid_size(self) -> int:
        size = self.store.get_int(KEY_GRID_SIZE, DEFAULT_GRID_SIZE)
        return size if size > 0 else DEFAULT_GRID_SIZE

    def set_grid_size(self, size: int) -> None:
        self.store.put_int(KEY_GRID_SIZE, size)

    def sort_order(self) -> SortOrder:
        raw = self.store.get_str(KEY_APP_SORT_ORDER, SortOrder.NAME.value)
        try:
            return SortOrder(raw)
        except ValueError:
            return SortOrder.NAME

    def set_sort_order(self, order: SortOrder) -> None:
        self.store.put_str(KEY_APP_SORT_ORDER, order.value)

    # --- behavior ---
    def auto_open_single_result(self) -> bool:
        return self.store.get_bool(KEY_AUTO_OPEN_SINGLE_RESULT, False)

    def set_auto_open_single_result(self, enabled: bool) -> None:
        self.store.put_bool(KEY_AUTO_OPEN_SINGLE_RESULT, enabled)

    def usage_stats_prompted(self) -> bool:
        return self.store.get_bool(KEY_USAGE_STATS_PERMISSION_PROMPTED, False)

    def set_usage_stats_prompted(self) -> None:
        self.store.put_bool(KEY_USAGE_STATS_PERMISSION_PROMPTED, True)
