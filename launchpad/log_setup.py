#===============================================================================
#  Launchpad | log_setup.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-13
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Process-wide logging: stderr plus .launchpad/logs/launchpad.log next to
#  the launcher.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from pathlib import Path

from .constants import DATA_DIR_NAME, LOG_FILE_NAME, LOGS_DIR_NAME

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def logs_dir(base_dir: Path) -> Path:
    path = base_dir / DATA_DIR_NAME / LOGS_DIR_NAME
    path.mkdir(parents=True, exist_ok=True)
    return path


def configure_logging(base_dir: Path, level: int = logging.INFO) -> Path:
    """Configure the root logger once; returns the log file path."""
    log_file = logs_dir(base_dir) / LOG_FILE_NAME
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_file, encoding="utf-8"),
        ],
    )
    return log_file
