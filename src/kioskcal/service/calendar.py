# SPDX-License-Identifier: MIT

from typing import Optional

from kioskcal.model.event import Event


def filter_events_by_calendar(
    events: list[Event], calendar_ids: Optional[list[str]]
) -> list[Event]:
    """Keep events of the selected calendars. No selection keeps every event."""
    if not calendar_ids:
        return list(events)
    selected = set(calendar_ids)
    return [event for event in events if event["calendar_id"] in selected]
