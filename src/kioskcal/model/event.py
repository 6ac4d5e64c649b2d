# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum


class Event(TypedDict):
    id: str
    title: Optional[str]
    start: pendulum.DateTime
    end: pendulum.DateTime
    all_day: bool
    calendar_id: Optional[str]
