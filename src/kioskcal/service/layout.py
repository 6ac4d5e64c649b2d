# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import pendulum

from kioskcal.model.event import Event
from kioskcal.model.layout import LayoutItem
from kioskcal.model.window import ScheduleWindow
from kioskcal.time import minutes_between

logger = logging.getLogger(__name__)

# Floor for the rendered height of short events
MIN_HEIGHT_PERCENT = 2.0


def layout_lane(
    window: ScheduleWindow,
    events: list[Event],
    min_height_percent: float = MIN_HEIGHT_PERCENT,
) -> list[LayoutItem]:
    """
    Lay out the timed events of one lane inside a resolved window.

    Events are clipped to the window, mapped to vertical percentages and
    packed into columns so that overlapping events never share a column.
    All items of one overlap cluster report the same total column count.

    The cluster pass compares every pair of items, so the cost is
    O(n^2) in the number of visible events. A lane holds tens of events
    at most.

    Args:
        window: The resolved window for this lane
        events: Events to place; all-day and out-of-window events are skipped
        min_height_percent: Minimum height of any item, in percent of the window

    Returns:
        Layout items ordered by their top position
    """
    items: list[LayoutItem] = []
    for event in events:
        if event["all_day"]:
            continue
        item = _position_event(window, event, min_height_percent)
        if item is not None:
            items.append(item)

    # sorted() is stable, equal tops keep the input order
    items = sorted(items, key=lambda item: item["top"])

    _assign_columns(items)
    cluster_count = _assign_total_columns(items)

    logger.debug(
        "Laid out %d of %d events in %d overlap clusters",
        len(items),
        len(events),
        cluster_count,
    )
    return items


def layout_overlaps(a: LayoutItem, b: LayoutItem) -> bool:
    return a["top"] < b["end_position"] and b["top"] < a["end_position"]


def column_geometry(item: LayoutItem) -> tuple[float, float]:
    """Return (left, width) of the item in percent of the lane width."""
    width = 100 / item["total_columns"]
    return item["column"] * width, width


def _position_event(
    window: ScheduleWindow, event: Event, min_height_percent: float
) -> Optional[LayoutItem]:
    clipped_start: pendulum.DateTime = max(event["start"], window["start"])
    clipped_end: pendulum.DateTime = min(event["end"], window["end"])

    # Entirely outside the window, or inverted input
    if clipped_start >= clipped_end:
        return None

    total_minutes = window["total_minutes"]
    top = minutes_between(window["start"], clipped_start) / total_minutes * 100
    raw_height = minutes_between(clipped_start, clipped_end) / total_minutes * 100
    height = max(raw_height, min_height_percent)
    if height <= 0:
        return None

    return {
        "event_id": event["id"],
        "title": event["title"],
        "calendar_id": event["calendar_id"],
        "start": clipped_start,
        "end": clipped_end,
        "top": top,
        "height": height,
        "end_position": top + height,
        "column": 0,
        "total_columns": 1,
    }


def _assign_columns(items: list[LayoutItem]) -> None:
    # End position of the last item placed in each open column
    column_ends: list[float] = []

    for item in items:
        for index, column_end in enumerate(column_ends):
            if column_end <= item["top"]:
                item["column"] = index
                column_ends[index] = item["end_position"]
                break
        else:
            item["column"] = len(column_ends)
            column_ends.append(item["end_position"])


def _assign_total_columns(items: list[LayoutItem]) -> int:
    clusters = _DisjointSet(len(items))
    for i, item in enumerate(items):
        for j in range(i + 1, len(items)):
            other = items[j]
            # Items are sorted by top, nothing further down can overlap
            if other["top"] >= item["end_position"]:
                break
            if layout_overlaps(item, other):
                clusters.union(i, j)

    max_column_by_root: dict[int, int] = {}
    for index, item in enumerate(items):
        root = clusters.find(index)
        max_column_by_root[root] = max(
            max_column_by_root.get(root, 0), item["column"]
        )

    for index, item in enumerate(items):
        item["total_columns"] = max_column_by_root[clusters.find(index)] + 1

    return len(max_column_by_root)


class _DisjointSet:
    def __init__(self, size: int) -> None:
        self._parent = list(range(size))

    def find(self, index: int) -> int:
        root = index
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[index] != root:
            self._parent[index], index = root, self._parent[index]
        return root

    def union(self, a: int, b: int) -> None:
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a != root_b:
            self._parent[root_b] = root_a
