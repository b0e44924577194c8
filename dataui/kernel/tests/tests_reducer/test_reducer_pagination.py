"""
DataUI Reducer -- Pagination Tests

Covers:
  - Page slice bounds and page count
  - Empty record sets: empty slice, one page
  - set_page clamps into [1, total_pages]
  - next/prev page stop at the ends
  - Page size changes always reset to page 1
  - Actions that shrink the filtered set pull current_page back into range
  - derive() clamps a stale state without modifying it
"""

import pytest

from dataui.kernel import actions
from dataui.kernel.reducer import clamp_page, derive, empty_view_state, page_count, reduce, replay
from dataui.kernel.types import ViewState


def ids(rows):
    return [r["id"] for r in rows]


# ============================================================================
# 1. Slicing
# ============================================================================


class TestDerive:
    def test_first_page_is_first_page_size_records(self, many_records):
        d = derive(many_records, empty_view_state())
        assert ids(d.page_rows) == list(range(1, 11))
        assert d.total == 25
        assert d.total_pages == 3

    def test_last_partial_page(self, many_records):
        state = replay([actions.page(3)], many_records)
        d = derive(many_records, state)
        assert ids(d.page_rows) == [21, 22, 23, 24, 25]
        assert d.page == 3

    def test_result_unpacks_in_order(self, many_records):
        rows, page_rows, total, total_pages, page = derive(many_records, empty_view_state(page_size=5))
        assert len(rows) == 25
        assert len(page_rows) == 5
        assert (total, total_pages, page) == (25, 5, 1)

    def test_empty_records(self):
        d = derive([], empty_view_state())
        assert d.rows == []
        assert d.page_rows == []
        assert d.total == 0
        assert d.total_pages == 1

    def test_fewer_records_than_page_size(self, students):
        d = derive(students, empty_view_state())
        assert ids(d.page_rows) == [1, 2, 3, 4, 5]
        assert d.total_pages == 1

    def test_stale_page_is_clamped_for_slicing(self, many_records):
        stale = ViewState(current_page=9, page_size=10)
        d = derive(many_records, stale)
        assert d.page == 3
        assert ids(d.page_rows) == [21, 22, 23, 24, 25]
        assert stale.current_page == 9

    @pytest.mark.parametrize("total,size,expected", [(0, 10, 1), (1, 10, 1), (10, 10, 1), (11, 10, 2), (50, 25, 2)])
    def test_page_count(self, total, size, expected):
        assert page_count(total, size) == expected

    def test_clamp_page(self):
        assert clamp_page(0, 25, 10) == 1
        assert clamp_page(-3, 25, 10) == 1
        assert clamp_page(4, 25, 10) == 3
        assert clamp_page(2, 25, 10) == 2


# ============================================================================
# 2. Page navigation
# ============================================================================


class TestSetPage:
    def test_set_page_within_range(self, many_records):
        state = replay([actions.page(2)], many_records)
        assert state.current_page == 2

    def test_set_page_beyond_last_clamps(self, many_records):
        state = replay([actions.page(99)], many_records)
        assert state.current_page == 3

    def test_set_page_below_one_clamps(self, many_records):
        state = replay([actions.page(0)], many_records)
        assert state.current_page == 1

    def test_set_page_accepts_digit_string(self, many_records):
        state = replay([actions.page("2")], many_records)
        assert state.current_page == 2

    @pytest.mark.parametrize("page", ["two", "--5", "-", "²", "٣", "1.5", ""])
    def test_set_page_rejects_non_integer(self, many_records, page):
        result = reduce(empty_view_state(), actions.page(page), many_records)
        assert not result.applied
        assert "INVALID_PAGE" in result.error

    @pytest.mark.parametrize("size", ["--5", "²"])
    def test_set_page_size_rejects_malformed_strings(self, many_records, size):
        result = reduce(empty_view_state(), actions.page_size(size), many_records)
        assert not result.applied
        assert "INVALID_PAGE_SIZE" in result.error

    def test_set_page_accepts_digit_strings(self, many_records):
        assert reduce(empty_view_state(), actions.page(" 2 "), many_records).state.current_page == 2
        assert reduce(empty_view_state(), actions.page("-3"), many_records).state.current_page == 1

    def test_next_and_prev_stop_at_ends(self, many_records):
        state = replay([actions.next_page()] * 5, many_records)
        assert state.current_page == 3
        state = replay([actions.prev_page()] * 5, many_records, state=state)
        assert state.current_page == 1


# ============================================================================
# 3. Page size
# ============================================================================


class TestSetPageSize:
    def test_page_size_change_resets_to_first_page(self, many_records):
        state = replay([actions.page(3)], many_records)
        assert state.current_page == 3
        state = replay([actions.page_size(5)], many_records, state=state)
        assert state.page_size == 5
        assert state.current_page == 1

    def test_page_size_change_from_ten_to_five_on_page_three(self):
        records = [{"id": i} for i in range(40)]
        state = ViewState(current_page=3, page_size=10)
        result = reduce(state, actions.page_size(5), records)
        assert result.applied
        assert result.state.current_page == 1

    def test_same_page_size_still_resets(self, many_records):
        state = replay([actions.page(2), actions.page_size(10)], many_records)
        assert state.current_page == 1

    @pytest.mark.parametrize("bad", [0, -5, "many", None, 2.5, True])
    def test_invalid_page_size_rejected(self, many_records, bad):
        result = reduce(empty_view_state(), actions.page_size(bad), many_records)
        assert not result.applied
        assert "INVALID_PAGE_SIZE" in result.error
        assert result.state.page_size == 10


# ============================================================================
# 4. Clamping after the filtered set shrinks
# ============================================================================


class TestClampAfterFilter:
    def test_search_pulls_page_back(self, many_records):
        state = replay([actions.page(3), actions.search("Student 0")], many_records)
        # Student 01..09 → one page
        assert state.current_page == 1

    def test_filter_pulls_page_back(self, many_records):
        state = replay([actions.page(3), actions.column_filter("name", "1")], many_records)
        # ids containing "1": 1, 10-19, 21 → 12 records → 2 pages
        assert state.current_page == 2

    def test_filter_matching_nothing_leaves_page_one(self, many_records):
        state = replay([actions.page(2), actions.column_filter("name", "zzz")], many_records)
        assert state.current_page == 1
        d = derive(many_records, state)
        assert d.page_rows == []
        assert d.total_pages == 1

    def test_invariant_holds_after_every_action(self, many_records):
        sequence = [
            actions.page(3),
            actions.search("2"),
            actions.next_page(),
            actions.column_filter("name", "Student"),
            actions.page_size(25),
            actions.page(7),
            actions.search("nothing"),
        ]
        state = empty_view_state()
        for action in sequence:
            state = reduce(state, action, many_records).state
            d = derive(many_records, state)
            assert 1 <= state.current_page <= d.total_pages
