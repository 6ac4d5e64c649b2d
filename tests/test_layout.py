import pendulum
import pytest

from kioskcal.service.layout import (
    MIN_HEIGHT_PERCENT,
    column_geometry,
    layout_lane,
    layout_overlaps,
)
from kioskcal.service.window import resolve_window

DAY = "2024-01-15"


@pytest.fixture
def window():
    # 06:00-22:00, 960 minutes
    now = pendulum.datetime(2024, 1, 15, 12, tz="UTC")
    return resolve_window(now, {"mode": "fixed", "start_hour": 6, "end_hour": 21})


@pytest.fixture
def timed(make_event):
    def _timed(event_id: str, start: str, end: str, **kwargs):
        return make_event(event_id, f"{DAY}T{start}", f"{DAY}T{end}", **kwargs)

    return _timed


def _by_id(items):
    return {item["event_id"]: item for item in items}


def test_single_event_position(window, timed):
    items = layout_lane(window, [timed("a", "09:00", "09:30")])

    assert len(items) == 1
    item = items[0]
    assert item["top"] == pytest.approx(18.75)
    assert item["height"] == pytest.approx(3.125)
    assert item["end_position"] == pytest.approx(21.875)
    assert item["column"] == 0
    assert item["total_columns"] == 1


def test_two_overlapping_events_share_the_width(window, timed):
    items = _by_id(
        layout_lane(
            window, [timed("a", "10:00", "11:00"), timed("b", "10:30", "11:30")]
        )
    )

    assert items["a"]["column"] == 0
    assert items["b"]["column"] == 1
    assert items["a"]["total_columns"] == 2
    assert items["b"]["total_columns"] == 2


def test_cluster_reports_one_column_count(window, timed):
    # B and C do not overlap each other, only A
    items = _by_id(
        layout_lane(
            window,
            [
                timed("a", "09:00", "10:00"),
                timed("b", "09:30", "09:45"),
                timed("c", "09:50", "10:30"),
            ],
        )
    )

    assert [items[key]["column"] for key in "abc"] == [0, 1, 1]
    assert {items[key]["total_columns"] for key in "abc"} == {2}


def test_chained_cluster_propagates_widest_column_count(window, timed):
    # E only overlaps D, yet belongs to the cluster that needs three columns
    items = _by_id(
        layout_lane(
            window,
            [
                timed("a", "09:00", "09:30"),
                timed("b", "09:00", "09:30"),
                timed("c", "09:00", "10:00"),
                timed("d", "09:45", "10:30"),
                timed("e", "10:15", "11:00"),
            ],
        )
    )

    assert [items[key]["column"] for key in "abcde"] == [0, 1, 2, 0, 1]
    assert {items[key]["total_columns"] for key in "abcde"} == {3}


def test_event_before_window_is_excluded(window, timed):
    assert layout_lane(window, [timed("early", "04:00", "05:00")]) == []


def test_event_is_clipped_to_window(window, make_event):
    event = make_event("late", f"{DAY}T21:00", "2024-01-16T01:00")
    item = layout_lane(window, [event])[0]

    assert item["start"] == pendulum.datetime(2024, 1, 15, 21, tz="UTC")
    assert item["end"] == pendulum.datetime(2024, 1, 15, 22, tz="UTC")
    assert item["top"] + item["height"] == pytest.approx(100)


def test_rolling_window_clips_event_start(make_event):
    now = pendulum.datetime(2024, 1, 15, 14, tz="UTC")
    window = resolve_window(
        now, {"mode": "rolling", "look_back_minutes": 0, "duration_hours": 8}
    )
    item = layout_lane(window, [make_event("a", f"{DAY}T13:00", f"{DAY}T15:00")])[0]

    assert item["start"] == pendulum.datetime(2024, 1, 15, 14, tz="UTC")
    assert item["end"] == pendulum.datetime(2024, 1, 15, 15, tz="UTC")
    assert item["top"] == pytest.approx(0)
    assert item["height"] == pytest.approx(12.5)


def test_short_event_gets_minimum_height(window, timed):
    item = layout_lane(window, [timed("blip", "12:00", "12:05")])[0]

    assert item["height"] == pytest.approx(MIN_HEIGHT_PERCENT)
    assert item["end_position"] == pytest.approx(item["top"] + MIN_HEIGHT_PERCENT)


def test_minimum_height_can_run_past_window_end(window, timed):
    item = layout_lane(window, [timed("last", "21:59", "22:00")])[0]

    assert item["end_position"] > 100


def test_custom_minimum_height(window, timed):
    item = layout_lane(window, [timed("blip", "12:00", "12:05")], 5.0)[0]

    assert item["height"] == pytest.approx(5.0)


def test_minimum_height_creates_overlap(window, timed):
    # 12:00-12:05 is stretched to 2% (19.2 minutes), so 12:10 collides with it
    items = _by_id(
        layout_lane(
            window, [timed("a", "12:00", "12:05"), timed("b", "12:10", "12:40")]
        )
    )

    assert items["b"]["column"] == 1
    assert items["a"]["total_columns"] == 2


def test_touching_events_reuse_a_column(window, timed):
    items = layout_lane(
        window, [timed("a", "09:00", "10:00"), timed("b", "10:00", "11:00")]
    )

    assert [item["column"] for item in items] == [0, 0]
    assert [item["total_columns"] for item in items] == [1, 1]


def test_zero_length_and_inverted_events_are_excluded(window, timed):
    items = layout_lane(
        window, [timed("zero", "09:00", "09:00"), timed("inverted", "10:00", "09:00")]
    )

    assert items == []


def test_all_day_events_are_skipped(window, make_event):
    event = make_event("holiday", DAY, "2024-01-16", all_day=True)

    assert layout_lane(window, [event]) == []


def test_items_are_sorted_by_top_and_stable(window, timed):
    items = layout_lane(
        window,
        [
            timed("late", "15:00", "16:00"),
            timed("first", "09:00", "10:00"),
            timed("second", "09:00", "09:30"),
        ],
    )

    assert [item["event_id"] for item in items] == ["first", "second", "late"]
    assert [item["column"] for item in items] == [0, 1, 0]
    assert [item["total_columns"] for item in items] == [2, 2, 1]


def test_layout_invariants_hold(window, timed):
    events = [
        timed("a", "08:00", "09:15"),
        timed("b", "08:30", "08:45"),
        timed("c", "08:40", "10:00"),
        timed("d", "09:00", "09:30"),
        timed("e", "09:20", "11:00"),
        timed("f", "12:00", "12:30"),
        timed("g", "12:15", "13:00"),
        timed("h", "18:00", "19:00"),
    ]
    items = layout_lane(window, events)

    for index, item in enumerate(items):
        assert 0 <= item["column"] < item["total_columns"]
        assert item["height"] >= MIN_HEIGHT_PERCENT
        earlier = items[:index]
        for other in earlier:
            if layout_overlaps(item, other):
                assert item["column"] != other["column"]
        # Every lower column is blocked by an earlier overlapping item
        for column in range(item["column"]):
            assert any(
                other["column"] == column and layout_overlaps(item, other)
                for other in earlier
            )

    for a in items:
        for b in items:
            if layout_overlaps(a, b):
                assert a["total_columns"] == b["total_columns"]


def test_layout_is_idempotent(window, timed):
    events = [
        timed("a", "10:00", "11:00"),
        timed("b", "10:30", "11:30"),
        timed("c", "11:15", "12:00"),
    ]

    assert layout_lane(window, events) == layout_lane(window, events)


def test_layout_does_not_modify_events(window, timed):
    event = timed("a", "05:00", "07:00")
    start = event["start"]

    layout_lane(window, [event])

    assert event["start"] == start


def test_column_geometry(window, timed):
    items = _by_id(
        layout_lane(
            window, [timed("a", "10:00", "11:00"), timed("b", "10:30", "11:30")]
        )
    )

    assert column_geometry(items["a"]) == pytest.approx((0, 50))
    assert column_geometry(items["b"]) == pytest.approx((50, 50))


def _max_overlap_depth(items):
    # Ends sort before starts at the same position, touching items do not overlap
    boundaries = sorted(
        [(item["top"], 1) for item in items]
        + [(item["end_position"], -1) for item in items],
        key=lambda boundary: (boundary[0], boundary[1]),
    )
    depth = max_depth = 0
    for _, change in boundaries:
        depth += change
        max_depth = max(max_depth, depth)
    return max_depth


def test_column_count_matches_peak_concurrency(window, timed):
    event_sets = [
        [timed("a", "09:00", "10:00"), timed("b", "10:00", "11:00")],
        [
            timed("a", "09:00", "09:30"),
            timed("b", "09:00", "09:30"),
            timed("c", "09:00", "10:00"),
            timed("d", "09:45", "10:30"),
            timed("e", "10:15", "11:00"),
        ],
        [
            timed("a", "08:00", "12:00"),
            timed("b", "08:30", "09:00"),
            timed("c", "09:00", "09:30"),
            timed("d", "09:15", "10:45"),
            timed("e", "10:00", "10:05"),
            timed("f", "11:00", "13:00"),
            timed("g", "11:30", "11:45"),
        ],
    ]

    for events in event_sets:
        items = layout_lane(window, events)
        used_columns = max(item["column"] for item in items) + 1
        assert used_columns == _max_overlap_depth(items)
