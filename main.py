#===============================================================================
#  Launchpad  |  Application Search Launcher
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  A launcher that discovers applications placed under the ./applications
#  folder and finds them fast:
#    - Smart list: newest install, recently used, most used
#    - Four search modes: handwriting (prefix), keyboard (substring),
#      voice (dictation, substring) and index (first letter)
#    - Arithmetic typed into the search box is evaluated inline
#    - User search shortcuts ("mail" -> Outlook, Thunderbird)
#    - Hidden apps section with unhide
#
#  Folder Conventions
#  ------------------
#    ./applications/
#      - *.exe / *.lnk / *.url              -> shown as launchable tile
#      - <PythonAppFolder>/main.py          -> shown as launchable tile
#      - <PythonAppFolder>/main_*.py        -> one tile per entry script
#      - <PythonAppFolder>/category.txt     -> optional category override
#    ./.launchpad/
#      - launchpad_settings.json            -> settings, hidden apps, shortcuts
#      - launchpad_usage.json               -> launch counts / last used
#      - logs/launchpad.log
#
#  Copyright & License Notes
#  -------------------------
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#
#  This source code is provided "AS IS", without warranty of any kind, express
#  or implied, including but not limited to the warranties of merchantability,
#  fitness for a particular purpose, and noninfringement.
#
#  Permission Notice (Personal/Internal Use)
#  -----------------------------------------
#  You may use, copy, and modify this software for personal or internal use.
#  Redistribution or public release should include this header and credit the
#  author. If you plan to open-source this project, consider replacing this
#  section with an OSI-approved license (e.g., MIT) for clarity.
#
#  Third-Party Components
#  ----------------------
#  This project may use third-party libraries (e.g., PySide6, psutil) which
#  are licensed separately by their respective authors. Ensure compliance with
#  their license terms when distributing this software.
#===============================================================================

import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from launchpad.log_setup import configure_logging
from launchpad.main_window import MainWindow


def main() -> int:
    base_dir = Path(__file__).resolve().parent
    log_file = configure_logging(base_dir)
    logging.getLogger(__name__).info("Launchpad starting (log: %s)", log_file)

    app = QApplication(sys.argv)
    w = MainWindow(base_dir)
    w.resize(1000, 720)
    w.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
