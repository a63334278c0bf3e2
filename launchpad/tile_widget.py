#===============================================================================
#  Launchpad | tile_widget.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-14
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Metro/Windows-Phone style tiles for launch targets, plus the section
#  labels used for dividers and category headers in the grid.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from PySide6.QtCore import Qt, QSize
from PySide6.QtGui import QFont
from PySide6.QtWidgets import QFrame, QLabel, QVBoxLayout

from .constants import METRO_TILE_COLORS
from .models import LaunchTarget

KIND_SUBTITLES = {
    "url": "Open in browser",
    "urlfile": "Website",
    "exe": "Executable",
    "lnk": "Shortcut",
    "py": "Python",
}


def tile_color_for(identifier: str) -> str:
    h = hashlib.sha1(identifier.encode("utf-8")).hexdigest()
    return METRO_TILE_COLORS[int(h[:2], 16) % len(METRO_TILE_COLORS)]


@dataclass
class TileVisual:
    bg_color: str
    title: str
    subtitle: str = ""
    badge: str = ""
    highlighted: bool = False

    @staticmethod
    def for_target(target: LaunchTarget, smart: bool = False, is_new: bool = False) -> "TileVisual":
        subtitle = KIND_SUBTITLES.get(target.kind, target.kind)
        return TileVisual(
            bg_color=tile_color_for(target.identifier),
            title=target.display_name,
            subtitle=f"{subtitle} • {target.category.value}",
            badge="NEW" if is_new else "",
            highlighted=smart,
        )


class TileWidget(QFrame):
    """A flat, Metro-style tile used inside a QListWidget item."""

    def __init__(self, visual: TileVisual, size: QSize, parent=None):
        super().__init__(parent)
        self.setObjectName("MetroTile")
        self.setFixedSize(size)

        border = "2px solid white" if visual.highlighted else "none"
        self.setStyleSheet(f"""
        QFrame#MetroTile {{
            background: {visual.bg_color};
            border: {border};
        }}
        """)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.setSpacing(6)

        badge_label = QLabel(visual.badge)
        badge_label.setAlignment(Qt.AlignRight | Qt.AlignTop)
        badge_font = QFont("Segoe UI", 8)
        badge_font.setBold(True)
        badge_label.setFont(badge_font)
        badge_label.setStyleSheet("color: white;")
        badge_label.setVisible(bool(visual.badge))
        layout.addWidget(badge_label)

        layout.addStretch(1)

        title_label = QLabel(visual.title)
        title_label.setAlignment(Qt.AlignLeft | Qt.AlignBottom)
        title_font = QFont("Segoe UI", 11)
        title_font.setBold(True)
        title_label.setFont(title_font)
        title_label.setStyleSheet("color: white;")
        title_label.setWordWrap(True)
        layout.addWidget(title_label)

        subtitle_label = QLabel(visual.subtitle)
        subtitle_label.setAlignment(Qt.AlignLeft | Qt.AlignBottom)
        subtitle_label.setFont(QFont("Segoe UI", 9))
        subtitle_label.setStyleSheet("color: rgba(255,255,255,0.85);")
        subtitle_label.setWordWrap(True)
        subtitle_label.setVisible(bool(visual.subtitle.strip()))
        layout.addWidget(subtitle_label)


class SectionLabel(QLabel):
    """Divider / category header cell in the tile grid."""

    def __init__(self, text: str, size: QSize, parent=None):
        super().__init__(text, parent)
        self.setFixedSize(size)
        self.setAlignment(Qt.AlignLeft | Qt.AlignBottom)
        font = QFont("Segoe UI", 12)
        font.setBold(True)
        self.setFont(font)
        self.setStyleSheet("color: rgba(255,255,255,0.6); border-bottom: 1px solid #2a2a2a;")
