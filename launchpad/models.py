#===============================================================================
#  Launchpad | models.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Shared data models used across the launcher: launch targets, usage
#  records, change events, launch results and the search/sort enums.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .constants import DEFAULT_ICON_DENSITY

IDENTIFIER_SEPARATOR = "/"


class Category(str, Enum):
    GAMES = "Games"
    AUDIO = "Audio"
    VIDEO = "Video"
    IMAGE = "Image"
    SOCIAL = "Social"
    NEWS = "News"
    MAPS = "Maps"
    PRODUCTIVITY = "Productivity"
    OTHER = "Other"


class SearchMode(str, Enum):
    HANDWRITING = "handwriting"  # prefix match
    KEYBOARD = "keyboard"        # substring match
    VOICE = "voice"              # substring match
    INDEX = "index"              # first letter


class SortOrder(str, Enum):
    NAME = "NAME"
    USAGE = "USAGE"
    CATEGORY = "CATEGORY"


def make_identifier(container_id: str, sub_target_id: Optional[str] = None) -> str:
    """Compose "<container>" or "<container>/<sub-target>"."""
    if sub_target_id:
        return f"{container_id}{IDENTIFIER_SEPARATOR}{sub_target_id}"
    return container_id


_ZWJ = "\u200d"


def _extends_cluster(ch: str) -> bool:
    code = ord(ch)
    return (
        unicodedata.category(ch) in ("Mn", "Mc", "Me")
        or 0xFE00 <= code <= 0xFE0F          # variation selectors
        or 0x1F3FB <= code <= 0x1F3FF        # skin tone modifiers
    )


def first_letter_of(name: str) -> str:
    """First user-perceived character of ``name``, upper-cased.

    Keeps combining marks, variation selectors and ZWJ-joined emoji with
    their base. Other grapheme rules (regional-indicator flags, Hangul
    jamo) are not handled.
    """
    name = (name or "").strip()
    if not name:
        return "#"
    end = 1
    while end < len(name):
        if _extends_cluster(name[end]):
            end += 1
        elif name[end] == _ZWJ and end + 1 < len(name):
            end += 2
        else:
            break
    return unicodedata.normalize("NFC", name[:end].upper())


@dataclass(frozen=True)
class LaunchTarget:
    """An installed, launchable entry discovered under ./applications."""
    identifier: str          # "<container>" or "<container>/<sub-target>"
    display_name: str
    first_letter: str
    install_time_ms: int = 0
    category: Category = Category.OTHER
    icon_density_hint: int = DEFAULT_ICON_DENSITY
    kind: str = "py"         # "py" | "exe" | "lnk" | "urlfile" | "url"
    path: str = ""           # exe path OR folder path
    launch_target: str = ""  # exe path OR script path OR url

    @property
    def container_id(self) -> str:
        return self.identifier.split(IDENTIFIER_SEPARATOR, 1)[0]

    @property
    def sub_target_id(self) -> Optional[str]:
        parts = self.identifier.split(IDENTIFIER_SEPARATOR, 1)
        return parts[1] if len(parts) == 2 else None


@dataclass(frozen=True)
class UsageRecord:
    identifier: str
    launch_count: int = 0
    last_used_ms: int = 0


@dataclass(frozen=True)
class Installed:
    identifier: str


@dataclass(frozen=True)
class Uninstalled:
    identifier: str


@dataclass(frozen=True)
class LaunchResult:
    identifier: str
    ok: bool
    error: Optional[str] = None

    @staticmethod
    def success(identifier: str) -> "LaunchResult":
        return LaunchResult(identifier=identifier, ok=True)

    @staticmethod
    def failure(identifier: str, message: str) -> "LaunchResult":
        return LaunchResult(identifier=identifier, ok=False, error=message)
