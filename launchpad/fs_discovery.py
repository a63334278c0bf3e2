#===============================================================================
#  Launchpad | fs_discovery.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Filesystem discovery of launch targets (executables, shortcuts, website
#  shortcuts and Python folder apps) plus per-target enrichment: install
#  time and category.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

from .constants import CATEGORY_FILE_NAME, DEFAULT_ICON_DENSITY
from .models import Category, LaunchTarget, first_letter_of, make_identifier

logger = logging.getLogger(__name__)

_WINDOWS = os.name == "nt"

FILE_KINDS = {
    ".exe": "exe",
    ".lnk": "lnk",
    ".url": "urlfile",
}

# Keyword heuristics, checked in order; first hit wins.
CATEGORY_KEYWORDS = [
    (Category.GAMES, ("game", "steam", "chess", "solitaire", "minecraft", "puzzle")),
    (Category.AUDIO, ("music", "audio", "spotify", "podcast", "sound", "radio")),
    (Category.VIDEO, ("video", "vlc", "player", "movie", "youtube", "netflix", "obs")),
    (Category.IMAGE, ("photo", "image", "paint", "gimp", "camera", "gallery")),
    (Category.SOCIAL, ("chat", "slack", "teams", "discord", "whatsapp", "telegram", "zoom")),
    (Category.NEWS, ("news", "rss", "reader", "feed")),
    (Category.MAPS, ("map", "navigation", "earth", "gps")),
    (Category.PRODUCTIVITY, ("excel", "word", "sheet", "docs", "note", "mail", "calendar",
                             "office", "todo", "task", "pomodoro", "tomato")),
]


def container_key(p: Path) -> str:
    """Stable container id for state: the entry's file/folder name, lowercased."""
    return p.name.lower()


def find_python_mains(folder: Path) -> List[Path]:
    """Launchable python entrypoints within *one* folder level.

    Rules:
    - ./main.py alone when present
    - otherwise every top-level main*.py, sorted
    - no recursion into subfolders
    """
    if not folder.is_dir():
        return []

    main_py = folder / "main.py"
    if main_py.exists() and main_py.is_file():
        return [main_py]

    return sorted([
        p for p in folder.iterdir()
        if p.is_file()
        and p.suffix.lower() == ".py"
        and p.name.lower().startswith("main")
    ])


def guess_category(name: str) -> Category:
    lower = (name or "").lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(kw in lower for kw in keywords):
            return category
    return Category.OTHER


def read_category(item: Path, display_name: str) -> Category:
    """Category from <folder>/category.txt when present, else by name."""
    if item.is_dir():
        cat_file = item / CATEGORY_FILE_NAME
        if cat_file.exists():
            raw = cat_file.read_text(encoding="utf-8").strip()
            for category in Category:
                if category.value.lower() == raw.lower():
                    return category
            raise ValueError(f"Unknown category {raw!r} in {cat_file}")
    return guess_category(display_name)


def install_time_ms(item: Path) -> int:
    """Creation time where the platform records one, else last modification.

    On Windows st_ctime is the creation time. Linux exposes no birth time via
    os.stat, so the mtime fallback means rewriting an app there makes it look
    newly installed.
    """
    st = item.stat()
    created = getattr(st, "st_birthtime", None)
    if not created:
        created = st.st_ctime if _WINDOWS else st.st_mtime
    return int(created * 1000)


def _enrich(item: Path, display_name: str, kind: str, launch: Path,
            sub_target: Optional[str] = None) -> LaunchTarget:
    return LaunchTarget(
        identifier=make_identifier(container_key(item), sub_target),
        display_name=display_name,
        first_letter=first_letter_of(display_name),
        install_time_ms=install_time_ms(item),
        category=read_category(item, display_name),
        icon_density_hint=DEFAULT_ICON_DENSITY,
        kind=kind,
        path=str(item),
        launch_target=str(launch),
    )


def _targets_for(item: Path) -> List[LaunchTarget]:
    if item.is_file():
        kind = FILE_KINDS.get(item.suffix.lower())
        if not kind:
            return []
        return [_enrich(item, item.stem, kind, item)]

    if item.is_dir():
        mains = find_python_mains(item)
        if len(mains) == 1:
            return [_enrich(item, item.name, "py", mains[0])]
        # Several entry points: one target per script, like multi-activity apps.
        return [
            _enrich(item, f"{item.name} ({m.stem})", "py", m, sub_target=m.name)
            for m in mains
        ]

    return []


class FolderEntitySource:
    """Queries ./applications for launch targets.

    Targets whose enrichment fails (unreadable stat, bad category file) are
    dropped instead of failing the whole scan.
    """

    def __init__(self, apps_dir: Path):
        self.apps_dir = Path(apps_dir)

    def query_installed_entities(self) -> List[LaunchTarget]:
        if not self.apps_dir.exists():
            self.apps_dir.mkdir(parents=True, exist_ok=True)

        targets: List[LaunchTarget] = []
        for item in sorted(self.apps_dir.iterdir(), key=lambda p: p.name.lower()):
            if item.name.startswith("."):
                continue
            try:
                targets.extend(_targets_for(item))
            except (OSError, ValueError) as e:
                logger.debug("Dropping %s: %s", item, e)
        return targets
