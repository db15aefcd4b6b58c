"""Tests for ccs.tui.options: item adapter and option layout."""

from __future__ import annotations

import itertools

import pytest

from ccs.tui.config import SelectorConfig
from ccs.tui.options import OptionSpace, SelectableItem, Slot, SlotKind, StringItem


def _items(*names: str) -> list[StringItem]:
    return [StringItem(name) for name in names]


def _names(items) -> list[str]:
    return [item.display_name() for item in items]


class TestStringItem:
    def test_all_views_return_the_string(self) -> None:
        item = StringItem("alpha")
        assert item.display_name() == "alpha"
        assert item.format_for_list() == "alpha"
        assert item.id() == "alpha"

    def test_satisfies_protocol(self) -> None:
        assert isinstance(StringItem("x"), SelectableItem)


class TestTotalCount:
    @pytest.mark.parametrize(
        "show_filter,allow_create,allow_custom,n",
        list(itertools.product([False, True], [False, True], [False, True], [0, 1, 5])),
    )
    def test_matches_formula(self, show_filter, allow_create, allow_custom, n) -> None:
        config = SelectorConfig(
            show_filter=show_filter, allow_create=allow_create, allow_custom=allow_custom
        )
        space = OptionSpace(_items(*[f"item{i}" for i in range(n)]), config)
        expected = int(show_filter) + n + int(allow_create) + int(allow_custom)
        assert space.total_count() == expected

    def test_counts_filtered_items_only(self) -> None:
        space = OptionSpace(_items("alpha", "beta", "gamma"), SelectorConfig())
        space.apply_filter("ph")
        assert space.total_count() == 2


class TestResolve:
    def test_row_order_with_all_optional_rows(self) -> None:
        config = SelectorConfig(allow_create=True, allow_custom=True)
        space = OptionSpace(_items("a", "b"), config)
        slots = [space.resolve(i) for i in range(space.total_count())]
        assert slots == [
            Slot(SlotKind.FILTER),
            Slot(SlotKind.ITEM, 0),
            Slot(SlotKind.ITEM, 1),
            Slot(SlotKind.CREATE),
            Slot(SlotKind.CUSTOM),
        ]

    def test_without_filter_row_items_start_at_zero(self) -> None:
        space = OptionSpace(_items("a", "b"), SelectorConfig(show_filter=False))
        assert space.resolve(0) == Slot(SlotKind.ITEM, 0)

    def test_custom_row_without_create_row(self) -> None:
        space = OptionSpace(_items("a"), SelectorConfig(allow_custom=True))
        assert space.resolve(2) == Slot(SlotKind.CUSTOM)

    def test_out_of_range_raises(self) -> None:
        space = OptionSpace(_items("a"), SelectorConfig())
        with pytest.raises(IndexError):
            space.resolve(2)
        with pytest.raises(IndexError):
            space.resolve(-1)

    def test_item_at(self) -> None:
        space = OptionSpace(_items("a", "b"), SelectorConfig(allow_create=True))
        assert space.item_at(0) is None
        assert space.item_at(2) == StringItem("b")
        assert space.item_at(3) is None
        assert space.item_at(10) is None


class TestApplyFilter:
    def test_case_insensitive_substring(self) -> None:
        space = OptionSpace(_items("Work", "personal", "NETWORK"), SelectorConfig())
        assert _names(space.apply_filter("work")) == ["Work", "NETWORK"]

    def test_keeps_original_order(self) -> None:
        space = OptionSpace(_items("cab", "abc", "bca"), SelectorConfig())
        assert _names(space.apply_filter("a")) == ["cab", "abc", "bca"]

    def test_empty_filter_restores_everything(self) -> None:
        space = OptionSpace(_items("b", "a", "c"), SelectorConfig())
        space.apply_filter("a")
        assert _names(space.apply_filter("")) == ["b", "a", "c"]

    def test_idempotent(self) -> None:
        space = OptionSpace(_items("alpha", "beta", "gamma"), SelectorConfig())
        first = list(space.apply_filter("a"))
        second = list(space.apply_filter("a"))
        assert first == second

    def test_no_match(self) -> None:
        space = OptionSpace(_items("alpha"), SelectorConfig())
        assert space.apply_filter("zzz") == []
        assert space.total_count() == 1

    def test_set_items_reapplies_filter(self) -> None:
        space = OptionSpace(_items("alpha", "beta"), SelectorConfig())
        space.apply_filter("al")
        space.set_items(_items("alpine", "beta", "gala"))
        assert space.filter_text == "al"
        assert _names(space.filtered_items) == ["alpine", "gala"]


class TestClamp:
    def test_clamps_into_range(self) -> None:
        space = OptionSpace(_items("a", "b"), SelectorConfig())
        assert space.clamp(-3) == 0
        assert space.clamp(1) == 1
        assert space.clamp(99) == 2

    def test_zero_when_empty(self) -> None:
        space = OptionSpace([], SelectorConfig(show_filter=False))
        assert space.clamp(5) == 0
