"""
Pytest Configuration and Fixtures

Shared fixtures for all tests: a controllable clock, stub collaborators and
a key/value store under a temporary directory.
"""

from pathlib import Path
from typing import Dict, List, Optional

import pytest

from launchpad.entity_cache import EntityCache
from launchpad.kv_store import KeyValueStore
from launchpad.models import Category, LaunchTarget, first_letter_of
from launchpad.search import SearchCoordinator
from launchpad.settings import LauncherSettings
from launchpad.shortcut_store import ShortcutStore
from launchpad.usage_ledger import UsageLedger

HOUR_MS = 60 * 60 * 1000
DAY_MS = 24 * HOUR_MS
NOW_MS = 1_700_000_000_000


class FakeClock:
    def __init__(self, now: int = NOW_MS):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class StubEntitySource:
    """Entity source with a call counter."""

    def __init__(self, targets: Optional[List[LaunchTarget]] = None):
        self.targets = list(targets or [])
        self.calls = 0
        self.fail = False

    def query_installed_entities(self) -> List[LaunchTarget]:
        self.calls += 1
        if self.fail:
            raise OSError("source unavailable")
        return list(self.targets)


class StubUsageSource:
    def __init__(self, seconds: Optional[Dict[str, int]] = None, permitted: bool = True):
        self.seconds = dict(seconds or {})
        self.permitted = permitted
        self.windows = []

    def has_permission(self) -> bool:
        return self.permitted

    def usage_seconds(self, window_start_ms: int, window_end_ms: int) -> Dict[str, int]:
        self.windows.append((window_start_ms, window_end_ms))
        return dict(self.seconds)


class RecordingLauncher:
    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.launched: List[str] = []

    def __call__(self, target: LaunchTarget) -> None:
        if self.error is not None:
            raise self.error
        self.launched.append(target.identifier)


def make_target(
    name: str,
    identifier: Optional[str] = None,
    installed_ms: int = NOW_MS - 30 * DAY_MS,
    category: Category = Category.OTHER,
) -> LaunchTarget:
    return LaunchTarget(
        identifier=identifier or name.lower(),
        display_name=name,
        first_letter=first_letter_of(name),
        install_time_ms=installed_ms,
        category=category,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def temp_dir(tmp_path) -> Path:
    return tmp_path


@pytest.fixture
def kv_store(tmp_path) -> KeyValueStore:
    return KeyValueStore(tmp_path / "store.json")


@pytest.fixture
def settings(kv_store) -> LauncherSettings:
    return LauncherSettings(kv_store)


@pytest.fixture
def shortcut_store(kv_store) -> ShortcutStore:
    return ShortcutStore(kv_store)


@pytest.fixture
def ledger(tmp_path, clock) -> UsageLedger:
    return UsageLedger(KeyValueStore(tmp_path / "usage.json"), clock=clock)


@pytest.fixture
def sample_targets() -> List[LaunchTarget]:
    return [
        make_target("Calculator", category=Category.PRODUCTIVITY),
        make_target("Calendar", category=Category.PRODUCTIVITY),
        make_target("Camera", category=Category.IMAGE),
        make_target("Chess", category=Category.GAMES),
        make_target("Mail"),
        make_target("Maps", category=Category.MAPS),
        make_target("Music", category=Category.AUDIO),
        make_target("Notes"),
    ]


@pytest.fixture
def entity_source(sample_targets) -> StubEntitySource:
    return StubEntitySource(sample_targets)


@pytest.fixture
def launcher() -> RecordingLauncher:
    return RecordingLauncher()


@pytest.fixture
def coordinator(entity_source, ledger, settings, shortcut_store, launcher, clock) -> SearchCoordinator:
    cache = EntityCache(entity_source, clock=clock)
    c = SearchCoordinator(cache, ledger, settings, shortcut_store, launcher=launcher, clock=clock)
    c.reload()
    yield c
    c.shutdown()
