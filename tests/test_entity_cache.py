"""
Tests for the TTL entity cache and the change watcher that invalidates it.
"""

import threading

from conftest import StubEntitySource, make_target

from launchpad.change_watcher import AppChangeWatcher
from launchpad.entity_cache import EntityCache
from launchpad.models import Installed, Uninstalled


class TestEntityCache:
    """TTL, invalidation and failure policy."""

    def test_two_reads_within_ttl_query_once(self, entity_source, clock):
        cache = EntityCache(entity_source, clock=clock)

        cache.list()
        clock.advance(4999)
        cache.list()

        assert entity_source.calls == 1

    def test_expired_envelope_requeries(self, entity_source, clock):
        cache = EntityCache(entity_source, clock=clock)

        cache.list()
        clock.advance(5000)
        cache.list()

        assert entity_source.calls == 2

    def test_sorted_case_insensitively(self, clock):
        source = StubEntitySource([make_target("banana"), make_target("Apple"), make_target("cherry")])
        names = [t.display_name for t in EntityCache(source, clock=clock).list()]
        assert names == ["Apple", "banana", "cherry"]

    def test_invalidate_forces_requery_and_is_idempotent(self, entity_source, clock):
        cache = EntityCache(entity_source, clock=clock)
        cache.invalidate()
        cache.list()
        cache.invalidate()
        cache.invalidate()
        cache.list()

        assert entity_source.calls == 2

    def test_change_event_invalidates(self, entity_source, clock):
        cache = EntityCache(entity_source, clock=clock)
        cache.list()
        entity_source.targets.append(make_target("Zoom"))

        cache.on_change(Installed("zoom"))

        assert "zoom" in [t.identifier for t in cache.list()]

    def test_source_failure_returns_empty_and_is_not_cached(self, entity_source, clock):
        cache = EntityCache(entity_source, clock=clock)
        entity_source.fail = True
        assert cache.list() == []

        entity_source.fail = False
        assert len(cache.list()) == len(entity_source.targets)
        assert entity_source.calls == 2

    def test_concurrent_readers_share_one_refresh(self, clock):
        gate = threading.Event()

        class SlowSource(StubEntitySource):
            def query_installed_entities(self):
                gate.wait(2)
                return super().query_installed_entities()

        source = SlowSource([make_target("Mail")])
        cache = EntityCache(source, clock=clock)
        results = []
        threads = [threading.Thread(target=lambda: results.append(cache.list())) for _ in range(5)]
        for t in threads:
            t.start()
        gate.set()
        for t in threads:
            t.join(5)

        assert source.calls == 1
        assert len(results) == 5


class TestAppChangeWatcher:
    """Install/uninstall diffing."""

    def test_first_scan_is_baseline(self, entity_source):
        watcher = AppChangeWatcher(entity_source)
        assert watcher.poll_once() == []

    def test_emits_installed_and_uninstalled(self, entity_source):
        watcher = AppChangeWatcher(entity_source)
        seen = []
        watcher.add_listener(seen.append)
        watcher.poll_once()

        entity_source.targets = [t for t in entity_source.targets if t.identifier != "mail"]
        entity_source.targets.append(make_target("Zoom"))
        events = watcher.poll_once()

        assert events == [Installed("zoom"), Uninstalled("mail")]
        assert seen == events

    def test_scan_failure_emits_nothing(self, entity_source):
        watcher = AppChangeWatcher(entity_source)
        watcher.poll_once()
        entity_source.fail = True
        assert watcher.poll_once() == []
