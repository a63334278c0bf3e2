#===============================================================================
#  Launchpad | launchpad/main_window.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Created     : 2026-10-14
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Main Metro/Windows-Phone style UI for the launcher:
#    - Search box with four modes (handwriting, keyboard, voice, index)
#    - Inline calculator result for arithmetic queries
#    - Smart list tiles followed by the full list (name/usage/category)
#    - Hidden section (collapsible) with unhide
#    - Right-click actions: hide/unhide, add search shortcut, open location
#    - Background watcher of ./applications feeding install/uninstall events
#===============================================================================

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QObject, Qt, QTimer, Signal
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidgetItem,
    QMainWindow,
    QMenu,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QSplitter,
    QToolButton,
    QToolTip,
    QVBoxLayout,
    QWidget,
)

from .calculator import normalize_for_display
from .capture import CaptureSession
from .change_watcher import AppChangeWatcher
from .constants import (
    APP_FOLDER_NAME,
    APP_TITLE,
    DATA_DIR_NAME,
    KEYBOARD_DEBOUNCE_MS,
    METRO_BG,
    SETTINGS_FILE_NAME,
    TILE_SIZE,
    USAGE_FILE_NAME,
)
from .entity_cache import EntityCache
from .fs_discovery import FolderEntitySource
from .kv_store import KeyValueStore
from .launcher import launch_target
from .models import SearchMode, SortOrder
from .presentation import AppItem, CategoryHeader, Divider, combine_with_fill
from .search import SearchCoordinator
from .settings import LauncherSettings
from .shortcut_store import ShortcutStore
from .tile_widget import SectionLabel, TileVisual, TileWidget
from .ui_widgets import LetterBar, ShortcutDialog, TileList
from .usage_ledger import UsageLedger
from .usage_stats import ProcessUsageSource

logger = logging.getLogger(__name__)

MODE_LABELS = {
    SearchMode.HANDWRITING: "Handwriting (prefix)",
    SearchMode.KEYBOARD: "Keyboard",
    SearchMode.VOICE: "Voice (dictation)",
    SearchMode.INDEX: "Index (A-Z)",
}


class SearchBridge(QObject):
    """Carries coordinator/watcher callbacks from worker threads to the UI thread."""

    mode_updated = Signal(str)
    apps_changed = Signal()


class MainWindow(QMainWindow):
    def __init__(self, base_dir: Optional[Path] = None):
        super().__init__()
        self.setWindowTitle(APP_TITLE)

        self.base_dir = base_dir or Path(__file__).resolve().parent.parent
        self.apps_dir = self.base_dir / APP_FOLDER_NAME
        self.apps_dir.mkdir(parents=True, exist_ok=True)
        data_dir = self.base_dir / DATA_DIR_NAME

        self.settings_store = KeyValueStore(data_dir / SETTINGS_FILE_NAME)
        self.settings = LauncherSettings(self.settings_store)
        self.shortcuts = ShortcutStore(self.settings_store)

        self.source = FolderEntitySource(self.apps_dir)
        self.cache = EntityCache(self.source)
        usage_store = KeyValueStore(data_dir / USAGE_FILE_NAME)
        self.tracker = ProcessUsageSource(usage_store)
        self.ledger = UsageLedger(usage_store, system_source=self.tracker)
        self.coordinator = SearchCoordinator(
            self.cache,
            self.ledger,
            self.settings,
            self.shortcuts,
            launcher=lambda t: launch_target(t, self.tracker),
        )

        self.bridge = SearchBridge()
        self.bridge.mode_updated.connect(self._on_mode_updated)
        self.bridge.apps_changed.connect(self._on_apps_changed)
        self.coordinator.add_listener(lambda mode: self.bridge.mode_updated.emit(mode.value))

        self.voice = CaptureSession(self.coordinator, SearchMode.VOICE)
        self.mode = self.settings.selected_mode()

        self.setStyleSheet(f"""
        QMainWindow {{ background: {METRO_BG}; }}
        QLabel, QCheckBox {{ color: white; font-family: "Segoe UI"; }}
        QLineEdit, QComboBox, QSpinBox {{
            font-family: "Segoe UI";
            color: white;
            background: #1a1a1a;
            border: 1px solid #2a2a2a;
            padding: 6px;
        }}
        QToolButton, QPushButton {{
            font-family: "Segoe UI";
            color: white;
            background: #1a1a1a;
            border: 1px solid #2a2a2a;
            padding: 6px 10px;
        }}
        QToolButton:hover, QPushButton:hover {{ background: #222; }}
        QToolButton:pressed, QPushButton:pressed {{ background: #2a2a2a; }}
        QToolButton:checked {{ background: #0078D7; }}
        """)

        root = QWidget()
        self.setCentralWidget(root)
        layout = QVBoxLayout(root)
        layout.setContentsMargins(14, 14, 14, 14)
        layout.setSpacing(10)

        header = QHBoxLayout()
        header.addWidget(QLabel(f"<b>{APP_TITLE}</b> · apps from <code>./{APP_FOLDER_NAME}</code>"))
        header.addStretch(1)

        self.mode_combo = QComboBox()
        for m in self.settings.enabled_modes() or list(SearchMode):
            self.mode_combo.addItem(MODE_LABELS[m], m.value)
        idx = self.mode_combo.findData(self.mode.value)
        self.mode_combo.setCurrentIndex(idx if idx >= 0 else 0)
        self.mode = SearchMode(self.mode_combo.currentData())
        self.mode_combo.currentIndexChanged.connect(self._on_mode_selected)
        header.addWidget(self.mode_combo)

        self.sort_combo = QComboBox()
        for order in SortOrder:
            self.sort_combo.addItem(order.value.title(), order.value)
        self.sort_combo.setCurrentIndex(self.sort_combo.findData(self.settings.sort_order().value))
        self.sort_combo.currentIndexChanged.connect(self._on_sort_selected)
        header.addWidget(self.sort_combo)

        self.grid_spin = QSpinBox()
        self.grid_spin.setRange(1, 12)
        self.grid_spin.setPrefix("Smart: ")
        self.grid_spin.setValue(self.settings.grid_size())
        self.grid_spin.valueChanged.connect(self.coordinator.set_grid_size)
        header.addWidget(self.grid_spin)

        self.auto_open = QCheckBox("Auto-open single result")
        self.auto_open.setChecked(self.settings.auto_open_single_result())
        self.auto_open.toggled.connect(self.settings.set_auto_open_single_result)
        header.addWidget(self.auto_open)

        self.btn_open_folder = QPushButton("Open apps folder")
        self.btn_open_folder.clicked.connect(lambda: self.open_in_explorer(self.apps_dir))
        header.addWidget(self.btn_open_folder)

        self.btn_refresh = QPushButton("Refresh")
        self.btn_refresh.clicked.connect(lambda: self.coordinator.reload(invalidate=True))
        header.addWidget(self.btn_refresh)
        layout.addLayout(header)

        search_row = QHBoxLayout()
        self.search_edit = QLineEdit()
        self.search_edit.setClearButtonEnabled(True)
        self.search_edit.textEdited.connect(self._on_text_edited)
        self.search_edit.returnPressed.connect(self._on_return_pressed)
        search_row.addWidget(self.search_edit, 1)

        self.calc_label = QLabel("")
        self.calc_label.setStyleSheet("color: #FFB900; font-size: 16px;")
        search_row.addWidget(self.calc_label)
        layout.addLayout(search_row)

        self.letter_bar = LetterBar()
        self.letter_bar.letter_selected.connect(lambda l: self.coordinator.select_letter(l or None))
        layout.addWidget(self.letter_bar)

        self.main_list = TileList()
        self.main_list.itemDoubleClicked.connect(self.launch_item)
        self.main_list.setContextMenuPolicy(Qt.CustomContextMenu)
        self.main_list.customContextMenuRequested.connect(lambda pos: self.open_context_menu(self.main_list, pos))

        hidden_header = QHBoxLayout()
        self.hidden_toggle = QToolButton()
        self.hidden_toggle.setText("Hidden")
        self.hidden_toggle.setCheckable(True)
        self.hidden_toggle.setChecked(False)
        self.hidden_toggle.setToolButtonStyle(Qt.ToolButtonTextBesideIcon)
        self.hidden_toggle.setArrowType(Qt.RightArrow)
        self.hidden_toggle.toggled.connect(self.toggle_hidden)
        hidden_header.addWidget(self.hidden_toggle)
        hidden_header.addStretch(1)

        self.hidden_list = TileList()
        self.hidden_list.itemDoubleClicked.connect(self.launch_item)
        self.hidden_list.setContextMenuPolicy(Qt.CustomContextMenu)
        self.hidden_list.customContextMenuRequested.connect(lambda pos: self.open_context_menu(self.hidden_list, pos))
        self.hidden_list.setVisible(False)

        splitter = QSplitter(Qt.Vertical)
        splitter.addWidget(self.main_list)
        splitter.addWidget(self.hidden_list)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 1)
        layout.addLayout(hidden_header)
        layout.addWidget(splitter)

        self.debounce = QTimer(self)
        self.debounce.setSingleShot(True)
        self.debounce.setInterval(KEYBOARD_DEBOUNCE_MS)
        self.debounce.timeout.connect(self._submit_keyboard_query)

        self.watcher = AppChangeWatcher(self.source)
        self.watcher.add_listener(self._on_app_event)
        self.watcher.poll_once()
        self.watcher.start()

        self._apply_mode_chrome()
        self.coordinator.reload()
        QTimer.singleShot(0, self._maybe_prompt_usage_permission)

    # ----------------------------
    # Search input
    # ----------------------------
    def _on_text_edited(self, text: str):
        if self.mode == SearchMode.KEYBOARD:
            self.debounce.start()
        elif self.mode == SearchMode.HANDWRITING:
            self.coordinator.submit_query(SearchMode.HANDWRITING, text)
        elif self.mode == SearchMode.VOICE:
            self.calc_label.setText(f"… {self.voice.partial(text)}")

    def _submit_keyboard_query(self):
        self.coordinator.submit_query(SearchMode.KEYBOARD, self.search_edit.text())

    def _on_return_pressed(self):
        if self.mode == SearchMode.VOICE:
            self.voice.final(self.search_edit.text())
            self.search_edit.setText(self.voice.transcript)
            return
        st = self.coordinator.state(self.mode)
        if st.calculator_result is not None:
            return
        if st.filtered:
            self._launch(st.filtered[0].identifier)

    def _on_mode_selected(self, _index: int):
        if self.mode == SearchMode.VOICE:
            self.voice.stop()
        self.mode = SearchMode(self.mode_combo.currentData())
        self.settings.set_selected_mode(self.mode)
        if self.mode == SearchMode.VOICE:
            self.voice.start()
        self.search_edit.setText(self.coordinator.state(self.mode).query if self.mode != SearchMode.INDEX else "")
        self._apply_mode_chrome()
        self.rebuild_lists()

    def _on_sort_selected(self, _index: int):
        self.coordinator.set_sort_order(SortOrder(self.sort_combo.currentData()))

    def _apply_mode_chrome(self):
        index_mode = self.mode == SearchMode.INDEX
        self.search_edit.setVisible(not index_mode)
        self.letter_bar.setVisible(index_mode)
        placeholders = {
            SearchMode.HANDWRITING: "Start writing an app name…",
            SearchMode.KEYBOARD: "Search apps or type a calculation…",
            SearchMode.VOICE: "Dictate, then press Enter to commit…",
        }
        self.search_edit.setPlaceholderText(placeholders.get(self.mode, ""))

    # ----------------------------
    # Coordinator / watcher callbacks
    # ----------------------------
    def _on_app_event(self, event):
        # watcher thread
        self.coordinator.on_change(event)
        self.bridge.apps_changed.emit()

    def _on_apps_changed(self):
        self.rebuild_hidden()

    def _on_mode_updated(self, mode_value: str):
        if mode_value != self.mode.value:
            return
        self.rebuild_lists()
        self._maybe_auto_open()

    def _maybe_auto_open(self):
        if not self.settings.auto_open_single_result():
            return
        single = self.coordinator.single_result(self.mode)
        if single is not None:
            self._launch(single.identifier)
            self.coordinator.reset(self.mode)
            self.search_edit.clear()

    def _maybe_prompt_usage_permission(self):
        if not self.coordinator.should_prompt_usage_permission():
            return
        self.settings.set_usage_stats_prompted()
        QMessageBox.information(
            self,
            "Usage statistics",
            "Process usage time is not readable on this system.\n\n"
            "Smart suggestions will use launch counts instead.",
        )

    # ----------------------------
    # Rebuild
    # ----------------------------
    def rebuild_lists(self):
        st = self.coordinator.state(self.mode)
        if st.calculator_result is not None:
            expression = normalize_for_display(st.query)
            self.calc_label.setText(f"{expression} = {st.calculator_result}")
        elif self.mode != SearchMode.VOICE:
            self.calc_label.setText("")

        if self.mode == SearchMode.INDEX:
            selected = st.query or None
            self.letter_bar.set_letters(self.coordinator.available_letters(), selected)

        searching = bool(st.query.strip())
        rows = combine_with_fill(
            st.smart,
            st.filtered,
            self.settings.sort_order(),
            searching,
            self.settings.grid_size(),
        )

        self.main_list.clear()
        for row in rows:
            if isinstance(row, AppItem):
                self._add_tile(self.main_list, row.target, smart=row.smart, is_new=row.target.identifier == st.newly_installed)
            elif isinstance(row, CategoryHeader):
                self._add_section(self.main_list, row.category.value)
            elif isinstance(row, Divider):
                self._add_section(self.main_list, "All apps")

    def rebuild_hidden(self):
        self.hidden_list.clear()
        for t in self.coordinator.hidden_targets():
            self._add_tile(self.hidden_list, t)

    def _add_tile(self, list_widget: TileList, target, smart: bool = False, is_new: bool = False):
        item = QListWidgetItem()
        item.setData(Qt.UserRole, target.identifier)
        item.setSizeHint(TILE_SIZE)
        list_widget.addItem(item)
        list_widget.setItemWidget(item, TileWidget(TileVisual.for_target(target, smart, is_new), size=TILE_SIZE))

    def _add_section(self, list_widget: TileList, text: str):
        item = QListWidgetItem()
        item.setFlags(Qt.NoItemFlags)
        item.setSizeHint(TILE_SIZE)
        list_widget.addItem(item)
        list_widget.setItemWidget(item, SectionLabel(text, TILE_SIZE))

    # ----------------------------
    # Launch behavior
    # ----------------------------
    def launch_item(self, item: QListWidgetItem):
        identifier = item.data(Qt.UserRole)
        if identifier:
            self._launch(identifier)

    def _launch(self, identifier: str):
        result = self.coordinator.launch(identifier)
        if not result.ok:
            QMessageBox.critical(self, "Launch failed", result.error or "Unknown error")
            self.coordinator.clear_error()

    # ----------------------------
    # Context menu
    # ----------------------------
    def open_context_menu(self, which_list: TileList, pos):
        item = which_list.itemAt(pos)
        if not item or not item.data(Qt.UserRole):
            return
        identifier = item.data(Qt.UserRole)
        is_hidden = identifier in self.settings.hidden()

        menu = QMenu(self)
        act_hide = QAction("Unhide" if is_hidden else "Hide", self)
        act_shortcut = QAction("Add search shortcut…", self)
        act_open = QAction("Open location…", self)
        menu.addAction(act_hide)
        menu.addSeparator()
        menu.addAction(act_shortcut)
        menu.addSeparator()
        menu.addAction(act_open)

        chosen = menu.exec(which_list.mapToGlobal(pos))
        if not chosen:
            return

        if chosen == act_hide:
            if is_hidden:
                self.coordinator.unhide(identifier)
            else:
                self.coordinator.hide(identifier, self.mode)
                if self.coordinator.show_hide_tooltip:
                    QToolTip.showText(
                        self.hidden_toggle.mapToGlobal(self.hidden_toggle.rect().bottomLeft()),
                        "Hidden apps are listed here. Right-click to unhide.",
                        self.hidden_toggle,
                    )
                    self.coordinator.dismiss_hide_tooltip()
            self.rebuild_hidden()
        elif chosen == act_shortcut:
            self.edit_shortcut(selected=[identifier])
        elif chosen == act_open:
            target = next((t for t in self.cache.list() if t.identifier == identifier), None)
            if target is not None and target.path:
                p = Path(target.path)
                self.open_in_explorer(p.parent if p.is_file() else p)

    def edit_shortcut(self, selected=(), original: str = ""):
        current = self.shortcuts.get()
        if original:
            selected = current.get(original, set())
        dlg = ShortcutDialog(
            self.coordinator.visible_targets(),
            existing=current.keys(),
            selected=selected,
            original=original,
            parent=self,
        )
        if not dlg.exec():
            return
        if original and dlg.alias() != original:
            self.shortcuts.remove(original)
        self.shortcuts.put(dlg.alias(), dlg.identifiers())
        self.coordinator.reload()

    def toggle_hidden(self, checked: bool):
        self.hidden_list.setVisible(checked)
        self.hidden_toggle.setArrowType(Qt.DownArrow if checked else Qt.RightArrow)
        if checked:
            self.rebuild_hidden()

    # ----------------------------
    # Explorer helpers
    # ----------------------------
    def open_in_explorer(self, folder: Path):
        try:
            if sys.platform.startswith("win"):
                subprocess.Popen(["explorer", str(folder)])
            elif sys.platform == "darwin":
                subprocess.Popen(["open", str(folder)])
            else:
                subprocess.Popen(["xdg-open", str(folder)])
        except OSError as e:
            QMessageBox.critical(self, "Open failed", str(e))

    def closeEvent(self, event):
        self.watcher.stop()
        self.voice.stop()
        self.coordinator.shutdown()
        self.tracker.flush()
        super().closeEvent(event)
