"""
Tests for smart list ranking and list sort orders.
"""

import random

import pytest

from conftest import DAY_MS, HOUR_MS, NOW_MS, make_target

from launchpad.models import Category, SortOrder
from launchpad.ranking import newly_installed_identifier, smart_list, sort_targets, usage_score


def _launch(ledger, clock, identifier, times=1):
    for _ in range(times):
        ledger.record_launch(identifier)
        clock.advance(1)


class TestSmartList:
    """Ordering rules."""

    def test_empty_input(self, ledger, clock):
        assert smart_list([], 4, ledger, clock) == []

    def test_no_usage_and_no_new_install_is_empty(self, sample_targets, ledger, clock):
        assert smart_list(sample_targets, 4, ledger, clock) == []

    def test_newest_unopened_install_comes_first(self, sample_targets, ledger, clock):
        older = make_target("Older", installed_ms=NOW_MS - 5 * HOUR_MS)
        newest = make_target("Newest", installed_ms=NOW_MS - HOUR_MS)
        targets = sample_targets + [older, newest]
        _launch(ledger, clock, "mail", 5)

        result = smart_list(targets, 4, ledger, clock)

        assert result[0].identifier == "newest"
        assert "older" not in [t.identifier for t in result]

    def test_opened_or_old_installs_are_not_new(self, sample_targets, ledger, clock):
        opened = make_target("Opened", installed_ms=NOW_MS - HOUR_MS)
        stale = make_target("Stale", installed_ms=NOW_MS - DAY_MS - 1)
        _launch(ledger, clock, "opened")

        result = smart_list(sample_targets + [opened, stale], 4, ledger, clock)

        assert "stale" not in [t.identifier for t in result]
        assert newly_installed_identifier(result, ledger, clock) is None

    def test_recent_then_most_used(self, sample_targets, ledger, clock):
        _launch(ledger, clock, "music", 10)
        _launch(ledger, clock, "chess", 5)
        _launch(ledger, clock, "notes", 1)
        _launch(ledger, clock, "maps", 1)

        result = [t.identifier for t in smart_list(sample_targets, 4, ledger, clock)]

        # two recent slots (4 // 2), then by count
        assert result[:2] == ["maps", "notes"]
        assert result[2:] == ["music", "chess"]

    def test_recent_limit_is_at_least_one(self, sample_targets, ledger, clock):
        _launch(ledger, clock, "music", 10)
        _launch(ledger, clock, "maps", 1)

        result = [t.identifier for t in smart_list(sample_targets, 1, ledger, clock)]
        assert result == ["maps"]

    def test_ties_follow_input_order(self, sample_targets, ledger, clock):
        for identifier in ("notes", "camera", "mail", "calendar"):
            _launch(ledger, clock, identifier, 2)
        clock.advance(1)
        _launch(ledger, clock, "chess", 3)
        _launch(ledger, clock, "music", 3)

        result = [t.identifier for t in smart_list(sample_targets, 5, ledger, clock)]

        assert result[:2] == ["music", "chess"]
        assert result[2:] == ["calendar", "camera", "mail"]

    def test_container_id_fallback(self, ledger, clock):
        target = make_target("Suite (a)", identifier="suite/main_a.py")
        assert usage_score(target, {"suite": 4}) == 4
        assert usage_score(target, {"suite": 4, "suite/main_a.py": 1}) == 1

    @pytest.mark.parametrize("limit", [1, 2, 3, 4, 6, 20])
    def test_no_duplicates_and_bounded(self, sample_targets, ledger, clock, limit):
        rng = random.Random(limit)
        fresh = [make_target(f"New{i}", installed_ms=NOW_MS - i * HOUR_MS) for i in range(3)]
        targets = sample_targets + fresh
        for t in targets:
            _launch(ledger, clock, t.identifier, rng.randint(0, 3))

        result = smart_list(targets, limit, ledger, clock)
        ids = [t.identifier for t in result]

        assert len(ids) <= limit
        assert len(ids) == len(set(ids))


class TestSortTargets:
    def test_name(self):
        targets = [make_target("beta"), make_target("Alpha")]
        assert [t.display_name for t in sort_targets(targets, SortOrder.NAME)] == ["Alpha", "beta"]

    def test_usage(self):
        targets = [make_target("A"), make_target("B"), make_target("C")]
        order = sort_targets(targets, SortOrder.USAGE, {"b": 9, "c": 1})
        assert [t.identifier for t in order] == ["b", "c", "a"]

    def test_category_puts_other_last(self):
        targets = [
            make_target("Zed"),
            make_target("Tunes", category=Category.AUDIO),
            make_target("Atlas", category=Category.MAPS),
        ]
        order = sort_targets(targets, SortOrder.CATEGORY)
        assert [t.display_name for t in order] == ["Tunes", "Atlas", "Zed"]
