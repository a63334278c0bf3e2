"""
Tests for grid row composition.
"""

from conftest import make_target

from launchpad.models import Category, SortOrder
from launchpad.presentation import AppItem, CategoryHeader, Divider, combine_with_fill


def _describe(rows):
    out = []
    for r in rows:
        if isinstance(r, AppItem):
            out.append(("*" if r.smart else "") + r.target.identifier)
        elif isinstance(r, CategoryHeader):
            out.append(f"[{r.category.value}]")
        elif isinstance(r, Divider):
            out.append("--")
    return out


class TestCombineWithFill:
    def test_short_smart_list_fills_first_row_alphabetically(self, sample_targets):
        smart = [t for t in sample_targets if t.identifier == "notes"]

        rows = combine_with_fill(smart, sample_targets, SortOrder.NAME, searching=False, grid_size=4)

        assert _describe(rows)[:5] == ["*notes", "calculator", "calendar", "camera", "--"]
        assert _describe(rows)[5:] == ["chess", "mail", "maps", "music"]

    def test_full_smart_list_then_divider(self, sample_targets):
        smart = sample_targets[4:6]

        rows = combine_with_fill(smart, sample_targets, SortOrder.NAME, searching=False, grid_size=2)

        assert _describe(rows)[:3] == ["*mail", "*maps", "--"]
        assert len(rows) == 3 + 6

    def test_category_groups_when_idle(self):
        targets = [
            make_target("Zed"),
            make_target("Tunes", category=Category.AUDIO),
            make_target("Beats", category=Category.AUDIO),
            make_target("Atlas", category=Category.MAPS),
        ]

        rows = combine_with_fill([], targets, SortOrder.CATEGORY, searching=False, grid_size=1)

        assert _describe(rows) == ["atlas", "--", "[Audio]", "beats", "tunes", "[Other]", "zed"]

    def test_searching_sorts_by_name(self):
        targets = [make_target("Zed", category=Category.AUDIO), make_target("Abe"), make_target("Max")]

        rows = combine_with_fill([], targets, SortOrder.CATEGORY, searching=True, grid_size=1)

        assert _describe(rows) == ["abe", "--", "max", "zed"]

    def test_usage_order_is_kept(self):
        targets = [make_target("Zed"), make_target("Abe"), make_target("Max")]

        rows = combine_with_fill([], targets, SortOrder.USAGE, searching=False, grid_size=0)

        assert _describe(rows) == ["zed", "abe", "max"]

    def test_everything_fits(self, sample_targets):
        rows = combine_with_fill([], sample_targets[:2], SortOrder.NAME, searching=False, grid_size=4)
        assert _describe(rows) == ["calculator", "calendar"]
