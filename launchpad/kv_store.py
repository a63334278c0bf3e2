#===============================================================================
#  Launchpad | kv_store.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Flat key/value persistence (string, bool, int, float, string set) stored as
#  a single JSON document. Used by settings, the usage ledger, the hidden set
#  and the shortcut store. Synchronous get/put, no transactions.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set

logger = logging.getLogger(__name__)


class KeyValueStore:
    """JSON-file backed key/value store.

    Pass ``path=None`` for a purely in-memory store.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else None
        self._lock = threading.RLock()
        self._data: Dict[str, Any] = self._load()

    def _load(self) -> Dict[str, Any]:
        if self.path is None or not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Could not read %s, starting empty: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring non-object content in %s", self.path)
            return {}
        return data

    def _save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(self._data, indent=2, sort_keys=True), encoding="utf-8")
        os.replace(tmp, self.path)

    # ----------------------------
    # Raw access
    # ----------------------------
    def snapshot(self) -> Dict[str, Any]:
        """Shallow copy of every stored key."""
        with self._lock:
            return dict(self._data)

    def contains(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    def remove(self, key: str) -> None:
        with self._lock:
            if self._data.pop(key, None) is not None:
                self._save()

    def put_many(self, values: Dict[str, Any]) -> None:
        """Write several keys with a single flush."""
        with self._lock:
            self._data.update(values)
            self._save()

    def _put(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value
            self._save()

    def _get(self, key: str, default: Any, kind: type) -> Any:
        with self._lock:
            value = self._data.get(key, default)
        if kind is float and isinstance(value, int) and not isinstance(value, bool):
            return float(value)
        if kind is int and isinstance(value, bool):
            return default
        return value if isinstance(value, kind) else default

    # ----------------------------
    # Typed accessors
    # ----------------------------
    def get_str(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._get(key, default, str)

    def put_str(self, key: str, value: str) -> None:
        self._put(key, str(value))

    def get_bool(self, key: str, default: bool = False) -> bool:
        return self._get(key, default, bool)

    def put_bool(self, key: str, value: bool) -> None:
        self._put(key, bool(value))

    def get_int(self, key: str, default: int = 0) -> int:
        return self._get(key, default, int)

    def put_int(self, key: str, value: int) -> None:
        self._put(key, int(value))

    def get_float(self, key: str, default: float = 0.0) -> float:
        return self._get(key, default, float)

    def put_float(self, key: str, value: float) -> None:
        self._put(key, float(value))

    def get_string_set(self, key: str) -> Set[str]:
        values = self._get(key, [], list)
        return {v for v in values if isinstance(v, str)}

    def put_string_set(self, key: str, values: Iterable[str]) -> None:
        self._put(key, sorted(set(values)))

    def get_list(self, key: str) -> List[Any]:
        return list(self._get(key, [], list))

    def put_list(self, key: str, values: Iterable[Any]) -> None:
        self._put(key, list(values))
