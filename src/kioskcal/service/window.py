# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import pendulum

from kioskcal.model.widget import DayScheduleConfig
from kioskcal.model.window import (
    FixedWindowConfig,
    HourLabel,
    RollingWindowConfig,
    ScheduleWindow,
    WindowConfig,
)
from kioskcal.time import minutes_between, truncate_to_minute

logger = logging.getLogger(__name__)

FALLBACK_WINDOW_HOURS = 1


def window_config_for(widget_config: DayScheduleConfig) -> WindowConfig:
    """Build the tagged window configuration a schedule widget describes."""
    if widget_config["view_mode"] == "rolling":
        rolling: RollingWindowConfig = {
            "mode": "rolling",
            "look_back_minutes": widget_config["rolling_offset_minutes"],
            "duration_hours": widget_config["rolling_duration_hours"],
        }
        return rolling

    fixed: FixedWindowConfig = {
        "mode": "fixed",
        "start_hour": widget_config["start_hour"],
        "end_hour": widget_config["end_hour"],
    }
    return fixed


def resolve_window(
    now: pendulum.DateTime,
    config: WindowConfig,
    date: Optional[pendulum.Date] = None,
) -> ScheduleWindow:
    """
    Resolve the visible interval [start, end) and its hour gridlines.

    Args:
        now: The reference instant (wall-clock time of the render tick)
        config: Fixed or rolling window configuration
        date: Calendar day a fixed window is placed on (defaults to the date of now)

    Returns:
        The resolved window. A non-positive window is replaced by a
        one-hour window starting at the resolved start.
    """
    if config["mode"] == "rolling":
        start, end = _rolling_bounds(now, config)
    else:
        start, end = _fixed_bounds(now, config, date)

    total_minutes = minutes_between(start, end)
    if total_minutes <= 0:
        logger.warning(
            "Window %s..%s is empty for %s, falling back to %d hour",
            start,
            end,
            config,
            FALLBACK_WINDOW_HOURS,
        )
        end = start.add(hours=FALLBACK_WINDOW_HOURS)
        total_minutes = minutes_between(start, end)

    # A fixed window labels the hours it starts, a rolling window also
    # labels a whole hour landing exactly on its end.
    include_end = config["mode"] == "rolling"
    return {
        "start": start,
        "end": end,
        "total_minutes": total_minutes,
        "hour_labels": _hour_labels(start, end, total_minutes, include_end),
    }


def shift_window(window: ScheduleWindow, days: int) -> ScheduleWindow:
    """
    Place the same clock interval the given number of days later.

    Used for rolling windows in multi-day views, where every lane shows
    the clock range resolved from the shared reference instant.
    """
    if days == 0:
        return window

    shifted_start = window["start"].add(days=days)
    shifted_end = window["end"].add(days=days)
    total_minutes = minutes_between(shifted_start, shifted_end)
    return {
        "start": shifted_start,
        "end": shifted_end,
        "total_minutes": total_minutes,
        "hour_labels": _hour_labels(
            shifted_start, shifted_end, total_minutes, include_end=True
        ),
    }


def position_in_window(window: ScheduleWindow, instant: pendulum.DateTime) -> float:
    """Percentage of the window height at which the instant falls (unclamped)."""
    return minutes_between(window["start"], instant) / window["total_minutes"] * 100


def current_time_position(
    window: ScheduleWindow, now: pendulum.DateTime
) -> Optional[float]:
    """
    Position of the current-time marker, or None when now is outside the window.
    """
    if now < window["start"] or now > window["end"]:
        return None
    return max(0.0, min(100.0, position_in_window(window, now)))


def _fixed_bounds(
    now: pendulum.DateTime,
    config: FixedWindowConfig,
    date: Optional[pendulum.Date],
) -> tuple[pendulum.DateTime, pendulum.DateTime]:
    day = now.start_of("day")
    if date is not None:
        day = day.set(year=date.year, month=date.month, day=date.day)

    start = day.set(hour=config["start_hour"])
    end = day.set(hour=config["end_hour"]).add(hours=1)
    return start, end


def _rolling_bounds(
    now: pendulum.DateTime, config: RollingWindowConfig
) -> tuple[pendulum.DateTime, pendulum.DateTime]:
    # Rolling windows start on a whole minute
    start = truncate_to_minute(now).subtract(minutes=config["look_back_minutes"])
    end = start.add(hours=config["duration_hours"])
    return start, end


def _hour_labels(
    start: pendulum.DateTime,
    end: pendulum.DateTime,
    total_minutes: float,
    include_end: bool,
) -> list[HourLabel]:
    labels: list[HourLabel] = []

    hour_instant = start.set(minute=0, second=0, microsecond=0)
    if hour_instant < start:
        hour_instant = hour_instant.add(hours=1)

    while hour_instant < end or (include_end and hour_instant == end):
        position = minutes_between(start, hour_instant) / total_minutes * 100
        labels.append({"hour": hour_instant.hour, "position": position})
        hour_instant = hour_instant.add(hours=1)

    return labels
