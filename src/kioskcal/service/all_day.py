# SPDX-License-Identifier: MIT

import pendulum

from kioskcal.model.event import Event
from kioskcal.time import date_key


def group_all_day_events(
    days: list[pendulum.Date],
    events: list[Event],
    deduplicate: bool = True,
) -> dict[str, list[Event]]:
    """
    Bucket all-day events by the days they cover.

    All-day boundaries are calendar dates, so only the date part of the
    stored start and end is used; the end date is exclusive.

    Args:
        days: The days of the view, in display order
        events: Events to group; timed events are ignored
        deduplicate: Show events with the same title on the same day only once

    Returns:
        Dictionary mapping date strings (YYYY-MM-DD) to lists of all-day
        events. Every requested day has an entry, possibly empty.
    """
    events_by_day: dict[str, list[Event]] = {date_key(day): [] for day in days}
    all_day_events = [event for event in events if event["all_day"]]

    for day in days:
        key = date_key(day)
        seen_titles: set[str] = set()

        for event in all_day_events:
            if not all_day_event_covers(event, day):
                continue

            if deduplicate:
                title = (event["title"] or "").strip().lower()
                if title in seen_titles:
                    continue
                seen_titles.add(title)

            events_by_day[key].append(event)

    return events_by_day


def all_day_event_covers(event: Event, day: pendulum.Date) -> bool:
    start_date = event["start"].date()
    end_date = event["end"].date()
    # A zero-length all-day event still occupies its start day
    if end_date <= start_date:
        end_date = start_date.add(days=1)
    return start_date <= day < end_date
