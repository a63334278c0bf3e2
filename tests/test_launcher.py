"""
Tests for the launch collaborator and the psutil usage source.
"""

import sys

import psutil
import pytest

from conftest import NOW_MS

from launchpad import launcher as launcher_mod
from launchpad.launcher import LaunchError, launch_target
from launchpad.kv_store import KeyValueStore
from launchpad.models import LaunchTarget
from launchpad.usage_ledger import UsageLedger
from launchpad.usage_stats import SESSIONS_KEY, ProcessUsageSource


class FakePopen:
    calls = []

    def __init__(self, args, cwd=None, **kwargs):
        self.args = args
        self.cwd = cwd
        self.pid = 4242
        FakePopen.calls.append(self)


@pytest.fixture
def fake_popen(monkeypatch):
    FakePopen.calls = []
    monkeypatch.setattr(launcher_mod.subprocess, "Popen", FakePopen)
    return FakePopen


class TestLaunchTarget:
    def test_python_app_runs_with_current_interpreter(self, temp_dir, fake_popen):
        script = temp_dir / "main.py"
        script.write_text("", encoding="utf-8")
        target = LaunchTarget("tool", "Tool", "T", kind="py", path=str(temp_dir), launch_target=str(script))

        launch_target(target)

        assert fake_popen.calls[0].args == [sys.executable, str(script)]
        assert fake_popen.calls[0].cwd == str(temp_dir)

    def test_missing_script_fails(self, temp_dir, fake_popen):
        target = LaunchTarget("tool", "Tool", "T", kind="py", launch_target=str(temp_dir / "gone.py"))
        with pytest.raises(LaunchError):
            launch_target(target)
        assert fake_popen.calls == []

    def test_exe_os_error_is_wrapped(self, monkeypatch, temp_dir):
        def boom(*args, **kwargs):
            raise FileNotFoundError("no such file")

        monkeypatch.setattr(launcher_mod.subprocess, "Popen", boom)
        target = LaunchTarget("x.exe", "X", "X", kind="exe", launch_target=str(temp_dir / "x.exe"))

        with pytest.raises(LaunchError, match="Could not start X"):
            launch_target(target)

    def test_url_opens_browser(self, monkeypatch):
        opened = []
        monkeypatch.setattr(launcher_mod.webbrowser, "open", lambda url: opened.append(url) or True)
        target = LaunchTarget("site", "Site", "S", kind="url", launch_target="https://example.com")

        launch_target(target)

        assert opened == ["https://example.com"]

    def test_unknown_kind(self):
        with pytest.raises(LaunchError):
            launch_target(LaunchTarget("odd", "Odd", "O", kind="git"))

    def test_started_process_is_tracked(self, temp_dir, fake_popen):
        script = temp_dir / "main.py"
        script.write_text("", encoding="utf-8")
        tracked = []

        class Tracker:
            def track(self, pid, identifier):
                tracked.append((pid, identifier))

        target = LaunchTarget("tool", "Tool", "T", kind="py", launch_target=str(script))
        launch_target(target, Tracker())

        assert tracked == [(4242, "tool")]


class TestProcessUsageSource:
    def test_no_tracked_time_means_no_permission(self):
        assert ProcessUsageSource().has_permission() is False

    def test_usage_seconds_overlap(self, monkeypatch):
        clock_now = [NOW_MS]
        source = ProcessUsageSource(clock=lambda: clock_now[0])

        class FakeProcess:
            def __init__(self, pid=None):
                self.pid = pid

            def create_time(self):
                return (NOW_MS - 120_000) / 1000

            def is_running(self):
                return True

        monkeypatch.setattr(psutil, "Process", FakeProcess)
        source.track(1, "tool")

        assert source.usage_seconds(NOW_MS - 60_000, NOW_MS) == {"tool": 60}
        assert source.usage_seconds(NOW_MS - 600_000, NOW_MS) == {"tool": 120}
        assert source.usage_seconds(NOW_MS - 600_000, NOW_MS - 300_000) == {}

    def test_finished_process_stops_counting(self, monkeypatch):
        clock_now = [NOW_MS]
        source = ProcessUsageSource(clock=lambda: clock_now[0])

        class GoneProcess:
            def __init__(self, pid=None):
                pass

            def create_time(self):
                return (NOW_MS - 10_000) / 1000

            def is_running(self):
                return False

        monkeypatch.setattr(psutil, "Process", GoneProcess)
        source.track(1, "tool")
        source.usage_seconds(0, NOW_MS)
        clock_now[0] += 60_000

        assert source.usage_seconds(0, clock_now[0]) == {"tool": 10}

    def test_tracked_time_grants_permission(self, monkeypatch):
        class FakeProcess:
            def __init__(self, pid=None):
                pass

            def create_time(self):
                return (NOW_MS - 120_000) / 1000

            def is_running(self):
                return True

        monkeypatch.setattr(psutil, "Process", FakeProcess)
        source = ProcessUsageSource(clock=lambda: NOW_MS)
        source.track(1, "tool")

        assert source.has_permission() is True

    def test_sessions_survive_restart(self, monkeypatch, temp_dir):
        clock_now = [NOW_MS]

        class ShortLived:
            def __init__(self, pid=None):
                pass

            def create_time(self):
                return (NOW_MS - 90_000) / 1000

            def is_running(self):
                return False

        monkeypatch.setattr(psutil, "Process", ShortLived)
        store = KeyValueStore(temp_dir / "usage.json")
        first = ProcessUsageSource(store, clock=lambda: clock_now[0])
        first.track(7, "tool")
        first.flush()

        clock_now[0] += 3_600_000
        second = ProcessUsageSource(KeyValueStore(temp_dir / "usage.json"), clock=lambda: clock_now[0])

        assert second.usage_seconds(0, clock_now[0]) == {"tool": 90}
        assert second.has_permission() is True

    def test_open_session_from_earlier_run_ends_where_last_seen(self, temp_dir):
        store = KeyValueStore(temp_dir / "usage.json")
        store.put_list(SESSIONS_KEY, [
            {"identifier": "tool", "pid": 99, "started_ms": NOW_MS - 60_000, "seen_ms": NOW_MS - 30_000, "ended_ms": None},
            {"identifier": "broken"},
        ])

        source = ProcessUsageSource(store, clock=lambda: NOW_MS + 3_600_000)

        assert source.usage_seconds(0, NOW_MS + 3_600_000) == {"tool": 30}

    def test_old_sessions_are_pruned(self, temp_dir):
        store = KeyValueStore(temp_dir / "usage.json")
        store.put_list(SESSIONS_KEY, [
            {"identifier": "old", "pid": 1, "started_ms": 0, "seen_ms": 10_000, "ended_ms": 10_000},
        ])

        source = ProcessUsageSource(store, clock=lambda: NOW_MS)

        assert source.usage_seconds(0, NOW_MS) == {}
        assert store.get_list(SESSIONS_KEY) == []


class TestLedgerWithProcessUsage:
    def test_persisted_counts_rank_after_restart(self, temp_dir):
        path = temp_dir / "usage.json"
        ledger = UsageLedger(KeyValueStore(path), clock=lambda: NOW_MS)
        for _ in range(5):
            ledger.record_launch("gamma")
        ledger.record_launch("beta")

        store = KeyValueStore(path)
        reopened = UsageLedger(store, system_source=ProcessUsageSource(store, clock=lambda: NOW_MS), clock=lambda: NOW_MS)

        assert reopened.has_usage_permission() is False
        assert reopened.usage_map() == {"gamma": 5, "beta": 1}
        assert reopened.most_used(2) == ["gamma", "beta"]
