# SPDX-License-Identifier: MIT

import logging

import pendulum

from kioskcal.model.event import Event
from kioskcal.model.layout import DayLane, DaySchedule, WeekSchedule
from kioskcal.model.widget import DayScheduleConfig, StartDay, WeekScheduleConfig
from kioskcal.service.all_day import group_all_day_events
from kioskcal.service.calendar import filter_events_by_calendar
from kioskcal.service.layout import layout_lane
from kioskcal.service.window import (
    current_time_position,
    resolve_window,
    shift_window,
    window_config_for,
)

logger = logging.getLogger(__name__)

MIN_NUMBER_OF_DAYS = 3
MAX_NUMBER_OF_DAYS = 7


def resolve_day_range(
    now: pendulum.DateTime, number_of_days: int, start_day: StartDay
) -> list[pendulum.Date]:
    """
    Dates of the lanes of a multi-day view.

    Args:
        now: The reference instant
        number_of_days: Lane count, clamped to 3..7
        start_day: "today", or "week_start" for the most recent Monday

    Returns:
        Consecutive dates, first lane first
    """
    number_of_days = max(MIN_NUMBER_OF_DAYS, min(MAX_NUMBER_OF_DAYS, number_of_days))
    first_day = now.start_of("day")
    if start_day == "week_start":
        first_day = now.start_of("week")
    first_date = first_day.date()
    return [first_date.add(days=offset) for offset in range(number_of_days)]


def build_day_schedule(
    now: pendulum.DateTime, config: DayScheduleConfig, events: list[Event]
) -> DaySchedule:
    """Resolve the window for now and lay out today's timed events in it."""
    window = resolve_window(now, window_config_for(config))
    if not config["show_hour_labels"]:
        window = {**window, "hour_labels": []}

    selected_events = filter_events_by_calendar(events, config["calendar_ids"])
    return {
        "window": window,
        "items": layout_lane(window, selected_events),
        "current_time_position": (
            current_time_position(window, now) if config["show_current_time"] else None
        ),
    }


def build_week_schedule(
    now: pendulum.DateTime, config: WeekScheduleConfig, events: list[Event]
) -> WeekSchedule:
    """
    Lay out one independent lane per day of the configured range.

    Fixed windows are placed on each lane's own date. Rolling windows are
    resolved once from now, and every lane shows that same clock range on
    its date. Lanes never share column packing.
    """
    days = resolve_day_range(now, config["number_of_days"], config["start_day"])
    window_config = window_config_for(config)
    selected_events = filter_events_by_calendar(events, config["calendar_ids"])
    timed_events = [event for event in selected_events if not event["all_day"]]

    rolling_window = None
    if window_config["mode"] == "rolling":
        rolling_window = resolve_window(now, window_config)

    today = now.date()
    lanes: list[DayLane] = []
    for day in days:
        if rolling_window is not None:
            window = shift_window(rolling_window, today.diff(day, False).in_days())
        else:
            window = resolve_window(now, window_config, date=day)
        if not config["show_hour_labels"]:
            window = {**window, "hour_labels": []}

        lanes.append(
            {
                "date": day,
                "window": window,
                "items": layout_lane(window, timed_events),
                "current_time_position": (
                    current_time_position(window, now)
                    if config["show_current_time"]
                    else None
                ),
            }
        )

    all_day_events: dict[str, list[Event]] = {}
    if config["show_all_day_events"]:
        all_day_events = group_all_day_events(
            days, selected_events, deduplicate=config["hide_duplicates"]
        )

    logger.debug(
        "Built %d lanes from %s with %d timed events",
        len(lanes),
        days[0],
        len(timed_events),
    )
    return {
        "today": today,
        "days": days,
        "lanes": lanes,
        "hour_labels": lanes[0]["window"]["hour_labels"] if lanes else [],
        "all_day_events": all_day_events,
    }
