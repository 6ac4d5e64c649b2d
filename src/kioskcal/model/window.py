# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict, Union

import pendulum

WindowMode = Literal["fixed", "rolling"]


class FixedWindowConfig(TypedDict):
    mode: Literal["fixed"]
    start_hour: int
    end_hour: int


class RollingWindowConfig(TypedDict):
    mode: Literal["rolling"]
    look_back_minutes: int
    duration_hours: int


WindowConfig = Union[FixedWindowConfig, RollingWindowConfig]


class HourLabel(TypedDict):
    hour: int
    position: float


class ScheduleWindow(TypedDict):
    start: pendulum.DateTime
    end: pendulum.DateTime
    total_minutes: float
    hour_labels: list[HourLabel]
