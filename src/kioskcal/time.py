# SPDX-License-Identifier: MIT

from typing import cast

import pendulum


def now_local() -> pendulum.DateTime:
    return pendulum.now("local")


def truncate_to_minute(datetime: pendulum.DateTime) -> pendulum.DateTime:
    return datetime.set(second=0, microsecond=0)


def minutes_between(start: pendulum.DateTime, end: pendulum.DateTime) -> float:
    """Signed number of minutes from start to end, including fractions."""
    return (end - start).total_seconds() / 60


def date_key(date: pendulum.Date) -> str:
    return date.to_date_string()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime, tz="local"))


def datetime_to_display_time_str(datetime: pendulum.DateTime) -> str:
    return datetime.format("HH:mm")


def datetime_to_display_local_date_str(datetime: pendulum.DateTime) -> str:
    return datetime.format("YYYY-MM-DD ddd")
