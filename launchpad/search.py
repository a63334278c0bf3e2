#===============================================================================
#  Launchpad | search.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Search coordinator: four independent per-mode pipelines (handwriting,
#  keyboard, voice, index) over the cached target list, each with its own
#  query, filtered list, smart list and calculator result.
#
#  Notes
#  -----
#  - Every mode is recomputed by one routine parameterized by the mode's
#    match rule.
#  - A computation commits only if it is still the newest one for its mode.
#  - Hiding patches the non-active modes in place (see apply_hide).
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, List, Mapping, Optional, Set, Tuple

from .calculator import ArithmeticResult, classify
from .constants import SEARCH_WORKERS
from .entity_cache import EntityCache
from .launcher import LaunchError, launch_target
from .models import Installed, LaunchResult, LaunchTarget, SearchMode, SortOrder, Uninstalled, first_letter_of
from .ranking import newly_installed_identifier, smart_list, sort_targets
from .settings import LauncherSettings
from .shortcut_store import ShortcutStore
from .ttl_cache import Clock, now_ms
from .usage_ledger import UsageLedger

logger = logging.getLogger(__name__)

Launcher = Callable[[LaunchTarget], None]
Listener = Callable[[SearchMode], None]
Ranker = Callable[[List[LaunchTarget]], Tuple[List[LaunchTarget], Optional[str]]]


@dataclass(frozen=True)
class ModeState:
    query: str = ""
    filtered: List[LaunchTarget] = field(default_factory=list)
    smart: List[LaunchTarget] = field(default_factory=list)
    calculator_result: Optional[str] = None
    newly_installed: Optional[str] = None


SearchState = Dict[SearchMode, ModeState]


def matches(
    target: LaunchTarget,
    query: str,
    mode: SearchMode,
    shortcuts: Optional[Mapping[str, Set[str]]] = None,
) -> bool:
    """Match rule per mode. A blank query matches everything."""
    if not query or not query.strip():
        return True

    if mode == SearchMode.INDEX:
        return target.first_letter == first_letter_of(query)

    needle = query.lower()
    for alias, ids in (shortcuts or {}).items():
        if alias.lower() == needle and target.identifier in ids:
            return True

    name = target.display_name.lower()
    if mode == SearchMode.HANDWRITING:
        return name.startswith(needle)
    return needle in name


def filter_targets(
    targets: List[LaunchTarget],
    query: str,
    mode: SearchMode,
    shortcuts: Optional[Mapping[str, Set[str]]] = None,
) -> List[LaunchTarget]:
    return [t for t in targets if matches(t, query, mode, shortcuts)]


def apply_hide(
    state: SearchState,
    identifier: str,
    active_mode: SearchMode,
    visible: List[LaunchTarget],
    shortcuts: Mapping[str, Set[str]],
    rank: Ranker,
) -> SearchState:
    """New state after ``identifier`` was hidden while ``active_mode`` was shown.

    ``visible`` is the fresh target list (hidden targets already removed).
    The active mode is re-filtered from it with its own query. Every other
    mode keeps its query and only loses ``identifier`` from its filtered list.
    Calculator results are left as they are.
    """
    out: SearchState = {}
    for mode, st in state.items():
        if mode == active_mode and st.calculator_result is None:
            filtered = filter_targets(visible, st.query, mode, shortcuts)
        else:
            filtered = [t for t in st.filtered if t.identifier != identifier]
        smart, newly = rank(filtered)
        out[mode] = replace(st, filtered=filtered, smart=smart, newly_installed=newly)
    return out


class SearchCoordinator:
    def __init__(
        self,
        cache: EntityCache,
        ledger: UsageLedger,
        settings: LauncherSettings,
        shortcuts: ShortcutStore,
        launcher: Optional[Launcher] = None,
        clock: Clock = now_ms,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self.cache = cache
        self.ledger = ledger
        self.settings = settings
        self.shortcuts = shortcuts
        self.launcher = launcher or launch_target
        self.clock = clock

        self._lock = threading.RLock()
        # Held from the hidden-set read or write through the install of _visible.
        self._structure_lock = threading.RLock()
        self._executor = executor
        self._visible: List[LaunchTarget] = []
        self._states: SearchState = {m: ModeState() for m in SearchMode}
        self._generations: Dict[SearchMode, int] = {m: 0 for m in SearchMode}
        self._queries: Dict[SearchMode, str] = {m: "" for m in SearchMode}
        self._listeners: List[Listener] = []

        self.show_hide_tooltip = False
        self.last_error: Optional[str] = None

    # ----------------------------
    # Read side
    # ----------------------------
    def state(self, mode: SearchMode) -> ModeState:
        with self._lock:
            return self._states[mode]

    def snapshot(self) -> SearchState:
        with self._lock:
            return dict(self._states)

    def visible_targets(self) -> List[LaunchTarget]:
        with self._lock:
            return list(self._visible)

    def hidden_targets(self) -> List[LaunchTarget]:
        hidden = self.settings.hidden()
        return [t for t in self.cache.list() if t.identifier in hidden]

    def available_letters(self) -> List[str]:
        with self._lock:
            return sorted({t.first_letter for t in self._visible})

    def single_result(self, mode: SearchMode) -> Optional[LaunchTarget]:
        st = self.state(mode)
        if st.query.strip() and st.calculator_result is None and len(st.filtered) == 1:
            return st.filtered[0]
        return None

    def should_prompt_usage_permission(self) -> bool:
        return not self.settings.usage_stats_prompted() and not self.ledger.has_usage_permission()

    # ----------------------------
    # Listeners
    # ----------------------------
    def add_listener(self, callback: Listener) -> None:
        with self._lock:
            self._listeners.append(callback)

    def _notify(self, mode: SearchMode) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for cb in listeners:
            try:
                cb(mode)
            except Exception:
                logger.exception("Search listener failed for %s", mode.value)

    # ----------------------------
    # Pipeline
    # ----------------------------
    def _rank(self, filtered: List[LaunchTarget]) -> Tuple[List[LaunchTarget], Optional[str]]:
        # Ranking ties follow name order regardless of the display sort.
        by_name = sorted(filtered, key=lambda t: t.display_name.lower())
        smart = smart_list(by_name, self.settings.grid_size(), self.ledger, self.clock)
        return smart, newly_installed_identifier(smart, self.ledger, self.clock)

    def _load_visible(self) -> List[LaunchTarget]:
        hidden = self.settings.hidden()
        targets = [t for t in self.cache.list() if t.identifier not in hidden]
        order = self.settings.sort_order()
        usage = self.ledger.usage_map() if order == SortOrder.USAGE else None
        return sort_targets(targets, order, usage)

    def _compute(self, mode: SearchMode, query: str, visible: List[LaunchTarget], previous: ModeState) -> ModeState:
        if mode != SearchMode.INDEX:
            result = classify(query)
            if isinstance(result, ArithmeticResult):
                ids = {t.identifier for t in visible}
                return replace(
                    previous,
                    query=query,
                    filtered=[t for t in previous.filtered if t.identifier in ids],
                    smart=[t for t in previous.smart if t.identifier in ids],
                    calculator_result=result.value,
                )

        filtered = filter_targets(visible, query, mode, self.shortcuts.get())
        smart, newly = self._rank(filtered)
        return ModeState(query=query, filtered=filtered, smart=smart, newly_installed=newly)

    def _begin(self, mode: SearchMode, query: Optional[str] = None) -> Tuple[int, List[LaunchTarget], ModeState, str]:
        with self._lock:
            self._generations[mode] += 1
            if query is not None:
                self._queries[mode] = query
            return self._generations[mode], self._visible, self._states[mode], self._queries[mode]

    def _commit(self, mode: SearchMode, generation: int, state: ModeState) -> bool:
        with self._lock:
            if generation != self._generations[mode]:
                logger.debug("Discarded stale %s result for %r", mode.value, state.query)
                return False
            self._states[mode] = state
        self._notify(mode)
        return True

    def _run(self, mode: SearchMode, generation: int, visible: List[LaunchTarget], previous: ModeState, query: str) -> bool:
        return self._commit(mode, generation, self._compute(mode, query, visible, previous))

    def set_query(self, mode: SearchMode, text: str) -> bool:
        """Filter ``mode`` by ``text``. Returns False if a newer query superseded it."""
        return self._run(mode, *self._begin(mode, text or ""))

    def _recompute(self, mode: SearchMode) -> bool:
        # Uses the latest requested query, which may not be committed yet.
        return self._run(mode, *self._begin(mode))

    def select_letter(self, letter: Optional[str]) -> bool:
        if not letter:
            return self.reset(SearchMode.INDEX)
        return self.set_query(SearchMode.INDEX, first_letter_of(letter))

    def reset(self, mode: SearchMode) -> bool:
        generation, visible, _, _ = self._begin(mode, "")
        smart, newly = self._rank(visible)
        state = ModeState(filtered=list(visible), smart=smart, newly_installed=newly)
        return self._commit(mode, generation, state)

    def submit_query(self, mode: SearchMode, text: str) -> "Future[bool]":
        """Run the query on the worker pool.

        The generation is taken at submission, so a later submission always
        wins over an earlier one regardless of which worker finishes first.
        """
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=SEARCH_WORKERS, thread_name_prefix="search")
            executor = self._executor
            ticket = self._begin(mode, text or "")
        return executor.submit(self._run, mode, *ticket)

    def shutdown(self) -> None:
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=False)

    # ----------------------------
    # Structural changes
    # ----------------------------
    def reload(self, invalidate: bool = False) -> None:
        """Recompute every mode from its current query over a fresh target list."""
        if invalidate:
            self.cache.invalidate()
        with self._structure_lock:
            visible = self._load_visible()
            with self._lock:
                self._visible = visible
        for mode in SearchMode:
            self._recompute(mode)
        logger.debug("Reloaded %d visible targets", len(visible))

    def on_change(self, event) -> None:
        if isinstance(event, (Installed, Uninstalled)):
            self.cache.on_change(event)
        else:
            self.cache.invalidate()
        self.reload()

    def set_sort_order(self, order: SortOrder) -> None:
        self.settings.set_sort_order(order)
        self.reload()

    def set_grid_size(self, size: int) -> None:
        self.settings.set_grid_size(size)
        self.reload()

    # ----------------------------
    # Hide / unhide
    # ----------------------------
    def hide(self, identifier: str, active_mode: SearchMode) -> None:
        shortcuts = self.shortcuts.get()
        with self._structure_lock:
            self.settings.add_hidden(identifier)
            visible = self._load_visible()
            with self._lock:
                self._visible = visible
                for mode in SearchMode:
                    self._generations[mode] += 1
                self._states = apply_hide(self._states, identifier, active_mode, visible, shortcuts, self._rank)
                self.show_hide_tooltip = True
                superseded = [m for m in SearchMode if self._queries[m] != self._states[m].query]
        logger.info("Hid %s", identifier)
        for mode in SearchMode:
            if mode in superseded:
                self._recompute(mode)
            else:
                self._notify(mode)

    def dismiss_hide_tooltip(self) -> None:
        with self._lock:
            self.show_hide_tooltip = False

    def unhide(self, identifier: str) -> None:
        with self._structure_lock:
            self.settings.remove_hidden(identifier)
        logger.info("Unhid %s", identifier)
        self.reload()

    # ----------------------------
    # Launch
    # ----------------------------
    def _find(self, identifier: str) -> Optional[LaunchTarget]:
        for t in self.cache.list():
            if t.identifier == identifier:
                return t
        return None

    def launch(self, identifier: str) -> LaunchResult:
        target = self._find(identifier)
        if target is None:
            result = LaunchResult.failure(identifier, f"Unknown target: {identifier}")
        else:
            try:
                self.launcher(target)
            except LaunchError as e:
                result = LaunchResult.failure(identifier, str(e))
            else:
                self.ledger.record_launch(identifier)
                result = LaunchResult.success(identifier)

        if not result.ok:
            logger.warning("Launch failed for %s: %s", identifier, result.error)
            with self._lock:
                self.last_error = result.error
            return result

        self._refresh_smart_lists()
        return result

    def clear_error(self) -> None:
        with self._lock:
            self.last_error = None

    def _refresh_smart_lists(self) -> None:
        for mode in SearchMode:
            generation, _, previous, query = self._begin(mode)
            if query != previous.query:
                self._recompute(mode)
                continue
            smart, newly = self._rank(previous.filtered)
            self._commit(mode, generation, replace(previous, smart=smart, newly_installed=newly))
