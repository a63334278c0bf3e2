#===============================================================================
#  Launchpad | launcher.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Starts a launch target (EXE/LNK/URL/Python app). Any failure to start is
#  raised as LaunchError so the search coordinator can label it.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import os
import subprocess
import sys
import webbrowser
from pathlib import Path
from typing import Optional

from .models import LaunchTarget
from .usage_stats import ProcessUsageSource

logger = logging.getLogger(__name__)


class LaunchError(RuntimeError):
    pass


def _startfile(path: str) -> None:
    # Windows shortcut (.lnk) support uses os.startfile
    if hasattr(os, "startfile"):
        os.startfile(path)  # type: ignore[attr-defined]
    else:
        subprocess.Popen([path])


def _open_url_file(path: str) -> None:
    if sys.platform.startswith("win"):
        subprocess.Popen(["cmd", "/c", "start", "", path], shell=False)
    elif not webbrowser.open(Path(path).as_uri()):
        raise LaunchError(f"No browser available for {path}")


def _spawn(target: LaunchTarget) -> Optional[subprocess.Popen]:
    if target.kind == "url":
        if not webbrowser.open(target.launch_target):
            raise LaunchError(f"No browser available for {target.launch_target}")
        return None

    if target.kind == "urlfile":
        _open_url_file(target.launch_target)
        return None

    if target.kind == "lnk":
        _startfile(target.launch_target)
        return None

    if target.kind == "exe":
        return subprocess.Popen([target.launch_target], cwd=str(Path(target.launch_target).parent))

    if target.kind == "py":
        script = Path(target.launch_target)
        if not script.is_file():
            raise LaunchError(f"Entry point not found: {script}")
        return subprocess.Popen([sys.executable, str(script)], cwd=str(Path(target.path) if target.path else script.parent))

    raise LaunchError(f"Unsupported target kind: {target.kind}")


def launch_target(target: LaunchTarget, tracker: Optional[ProcessUsageSource] = None) -> None:
    """Launch a target.

    kinds:
      - exe    : run directly
      - lnk    : open via OS (Windows shortcut)
      - urlfile: Windows Internet Shortcut (.url)
      - url    : open in browser
      - py     : run the entry script with the current interpreter

    Started processes are handed to ``tracker`` for usage-time accounting.
    """
    try:
        proc = _spawn(target)
    except LaunchError:
        raise
    except OSError as e:
        raise LaunchError(f"Could not start {target.display_name}: {e}") from e

    logger.info("Launched %s (%s)", target.identifier, target.kind)
    if proc is not None and tracker is not None:
        tracker.track(proc.pid, target.identifier)
