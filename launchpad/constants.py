#===============================================================================
#  Launchpad | constants.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Central place for cache timings, ranking windows, UI sizing, theme, and
#  file/folder naming conventions.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from PySide6.QtCore import QSize

APP_TITLE = "Launchpad"
APP_FOLDER_NAME = "applications"
SETTINGS_FILE_NAME = "launchpad_settings.json"
USAGE_FILE_NAME = "launchpad_usage.json"
DATA_DIR_NAME = ".launchpad"
LOGS_DIR_NAME = "logs"
LOG_FILE_NAME = "launchpad.log"
CATEGORY_FILE_NAME = "category.txt"

# --- Caches ---
CACHE_TTL_MS = 5000

# --- Ranking ---
NEW_INSTALL_WINDOW_MS = 24 * 60 * 60 * 1000
RECENT_LOOKUP_COUNT = 2
USAGE_STATS_WINDOW_MS = 30 * 24 * 60 * 60 * 1000

# --- Defaults (see settings.py) ---
DEFAULT_GRID_SIZE = 4
DEFAULT_ICON_DENSITY = 480
MIN_SHORTCUT_LENGTH = 2

# --- Boundary timings ---
KEYBOARD_DEBOUNCE_MS = 200
CHANGE_POLL_INTERVAL_S = 1.5
SEARCH_WORKERS = 4

# --- Metro / Windows Phone style theme ---
METRO_BG = "#101010"

METRO_TILE_COLORS = [
    "#0078D7",  # blue
    "#00B294",  # teal
    "#E81123",  # red
    "#FFB900",  # yellow
    "#8764B8",  # purple
    "#2D7D9A",  # steel
    "#107C10",  # green
    "#5C2D91",  # deep purple
]

TILE_SIZE = QSize(150, 110)
ICON_SIZE = QSize(28, 28)
