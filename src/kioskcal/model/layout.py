# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from kioskcal.model.event import Event
from kioskcal.model.window import HourLabel, ScheduleWindow


class LayoutItem(TypedDict):
    event_id: str
    title: Optional[str]
    calendar_id: Optional[str]
    start: pendulum.DateTime
    end: pendulum.DateTime
    top: float
    height: float
    end_position: float
    column: int
    total_columns: int


class DayLane(TypedDict):
    date: pendulum.Date
    window: ScheduleWindow
    items: list[LayoutItem]
    current_time_position: Optional[float]


class DaySchedule(TypedDict):
    window: ScheduleWindow
    items: list[LayoutItem]
    current_time_position: Optional[float]


class WeekSchedule(TypedDict):
    today: pendulum.Date
    days: list[pendulum.Date]
    lanes: list[DayLane]
    hour_labels: list[HourLabel]
    all_day_events: dict[str, list[Event]]
