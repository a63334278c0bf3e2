#===============================================================================
#  Launchpad | ui_widgets.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-14
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Reusable UI widgets (tile list, letter index bar, shortcut editor).
#  Keeps the main window/controller smaller.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from typing import Iterable, List, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from .constants import ICON_SIZE, TILE_SIZE
from .models import LaunchTarget
from .shortcut_store import validate_alias


class TileList(QListWidget):
    """A grid-ish tile view. Order comes from the search pipeline, not the user."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setViewMode(QListWidget.IconMode)
        self.setMovement(QListWidget.Static)
        self.setResizeMode(QListWidget.Adjust)
        self.setUniformItemSizes(True)
        self.setIconSize(ICON_SIZE)
        self.setGridSize(TILE_SIZE)
        self.setSpacing(10)
        self.setSelectionMode(QListWidget.SingleSelection)


class LetterBar(QWidget):
    """One button per available first letter (index mode)."""

    letter_selected = Signal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._layout = QHBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setSpacing(2)
        self._buttons: List[QToolButton] = []

    def set_letters(self, letters: Iterable[str], selected: Optional[str] = None) -> None:
        for b in self._buttons:
            self._layout.removeWidget(b)
            b.deleteLater()
        self._buttons = []
        for letter in letters:
            b = QToolButton()
            b.setText(letter)
            b.setCheckable(True)
            b.setChecked(letter == selected)
            b.clicked.connect(lambda checked, l=letter: self.letter_selected.emit(l if checked else ""))
            self._layout.addWidget(b)
            self._buttons.append(b)
        self._layout.addStretch(1)


class ShortcutDialog(QDialog):
    """Create or rename a search alias for a set of targets."""

    def __init__(
        self,
        targets: List[LaunchTarget],
        existing: Iterable[str],
        selected: Iterable[str] = (),
        original: str = "",
        parent=None,
    ):
        super().__init__(parent)
        self.setWindowTitle("Edit shortcut" if original else "New shortcut")
        self._existing = set(existing)
        self._original = original

        layout = QVBoxLayout(self)
        layout.addWidget(QLabel("Shortcut name:"))
        self.alias_edit = QLineEdit(original)
        layout.addWidget(self.alias_edit)

        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #E81123;")
        layout.addWidget(self.error_label)

        layout.addWidget(QLabel("Opens:"))
        self.target_list = QListWidget()
        chosen = set(selected)
        for t in targets:
            item = QListWidgetItem(t.display_name)
            item.setData(Qt.UserRole, t.identifier)
            item.setFlags(item.flags() | Qt.ItemIsUserCheckable)
            item.setCheckState(Qt.Checked if t.identifier in chosen else Qt.Unchecked)
            self.target_list.addItem(item)
        layout.addWidget(self.target_list)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self._accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def alias(self) -> str:
        return self.alias_edit.text().strip()

    def identifiers(self) -> List[str]:
        out = []
        for i in range(self.target_list.count()):
            item = self.target_list.item(i)
            if item.checkState() == Qt.Checked:
                out.append(item.data(Qt.UserRole))
        return out

    def _accept(self):
        error = validate_alias(self.alias(), self._existing, self._original)
        if error is None and not self.identifiers():
            error = "Select at least one app"
        if error:
            self.error_label.setText(error)
            return
        self.accept()
