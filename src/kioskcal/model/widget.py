# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

from kioskcal.model.window import WindowMode

StartDay = Literal["today", "week_start"]


class DayScheduleConfig(TypedDict):
    calendar_ids: Optional[list[str]]
    view_mode: WindowMode
    start_hour: int
    end_hour: int
    rolling_offset_minutes: int
    rolling_duration_hours: int
    show_current_time: bool
    show_hour_labels: bool


class WeekScheduleConfig(DayScheduleConfig):
    number_of_days: int
    start_day: StartDay
    show_all_day_events: bool
    hide_duplicates: bool
