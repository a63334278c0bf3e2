#===============================================================================
#  Launchpad | capture.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-13
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Voice / handwriting capture session. Recognizers push partial and final
#  text; finals are appended to the transcript and committed to the search
#  coordinator.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from typing import Optional

from .models import SearchMode
from .search import SearchCoordinator

logger = logging.getLogger(__name__)


class CaptureSession:
    """Accumulates recognized text for one search mode.

    ``stop()`` only closes the session to new input. Work already submitted
    for the last committed text keeps running and still commits.
    """

    def __init__(self, coordinator: SearchCoordinator, mode: SearchMode = SearchMode.VOICE):
        self.coordinator = coordinator
        self.mode = mode
        self._lock = threading.Lock()
        self._base = ""
        self._partial = ""
        self._active = True
        self.last_future: Optional[Future] = None

    @property
    def active(self) -> bool:
        return self._active

    @property
    def transcript(self) -> str:
        with self._lock:
            return self._join(self._base, self._partial)

    @staticmethod
    def _join(base: str, text: str) -> str:
        text = (text or "").strip()
        if not base:
            return text
        return f"{base} {text}" if text else base

    def start(self) -> None:
        with self._lock:
            self._active = True
            self._partial = ""

    def partial(self, text: str) -> str:
        """Live preview; nothing is committed."""
        with self._lock:
            if not self._active:
                return self._base
            self._partial = text or ""
            return self._join(self._base, self._partial)

    def final(self, text: str) -> Optional[Future]:
        with self._lock:
            if not self._active:
                logger.debug("Ignored final text after stop: %r", text)
                return None
            self._base = self._join(self._base, text)
            self._partial = ""
            committed = self._base
        self.last_future = self.coordinator.submit_query(self.mode, committed)
        return self.last_future

    def stop(self) -> None:
        with self._lock:
            self._active = False
            self._partial = ""

    def clear(self) -> None:
        with self._lock:
            self._base = ""
            self._partial = ""
        self.coordinator.reset(self.mode)
