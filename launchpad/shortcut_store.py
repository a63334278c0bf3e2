#===============================================================================
#  Launchpad | shortcut_store.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  User-defined search aliases ("call" -> {dialer, contacts}) persisted as a
#  single string: entries joined by "|", alias and comma-joined identifiers
#  joined by ":".
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from typing import Dict, Iterable, Optional, Set

from .constants import MIN_SHORTCUT_LENGTH
from .kv_store import KeyValueStore

KEY_APP_SHORTCUTS = "app_shortcuts"


def encode_shortcuts(shortcuts: Dict[str, Iterable[str]]) -> str:
    return "|".join(f"{alias}:{','.join(ids)}" for alias, ids in shortcuts.items())


def decode_shortcuts(raw: Optional[str]) -> Dict[str, Set[str]]:
    """Parse the persisted form; blank or malformed entries are dropped."""
    out: Dict[str, Set[str]] = {}
    if not raw:
        return out
    for entry in raw.split("|"):
        if not entry.strip():
            continue
        parts = entry.split(":")
        if len(parts) != 2 or not parts[0]:
            continue
        out[parts[0]] = set(parts[1].split(","))
    return out


def validate_alias(alias: str, existing: Iterable[str] = (), original: str = "") -> Optional[str]:
    """Editor rules for a new/renamed alias. Returns an error message or None."""
    if not alias:
        return "Shortcut name is required"
    if len(alias) < MIN_SHORTCUT_LENGTH:
        return f"Shortcut name must be at least {MIN_SHORTCUT_LENGTH} characters"
    if alias != original and alias in set(existing):
        return f'A shortcut with the name "{alias}" already exists'
    return None


class ShortcutStore:
    def __init__(self, store: KeyValueStore):
        self.store = store

    def get(self) -> Dict[str, Set[str]]:
        return decode_shortcuts(self.store.get_str(KEY_APP_SHORTCUTS))

    def set(self, shortcuts: Dict[str, Iterable[str]]) -> None:
        self.store.put_str(KEY_APP_SHORTCUTS, encode_shortcuts(shortcuts))

    def aliases(self) -> Set[str]:
        return set(self.get())

    def put(self, alias: str, identifiers: Iterable[str]) -> None:
        """Create or replace one alias."""
        current = self.get()
        current[alias] = set(identifiers)
        self.set(current)

    def remove(self, alias: str) -> None:
        current = self.get()
        if current.pop(alias, None) is not None:
            self.set(current)

    def lookup(self, query: str) -> Set[str]:
        """Identifiers of every alias equal to ``query`` ignoring case."""
        needle = (query or "").lower()
        found: Set[str] = set()
        for alias, ids in self.get().items():
            if alias.lower() == needle:
                found |= ids
        return found
