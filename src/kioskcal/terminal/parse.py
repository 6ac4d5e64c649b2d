# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from kioskcal.time import datetime_from_str


def parse_datetime(datetime_param: Optional[str | int]) -> Optional[pendulum.DateTime]:
    """
    Parse a local date/time for the schedule commands.

    Accepts YYYY-MM-DD (optionally with a time), (H)H:mm for today,
    a day offset like 1 or -1, now, today, yesterday and tomorrow.
    """
    if datetime_param is None:
        return None

    datetime = str(datetime_param)

    # Match YYYY-MM-DD format (with optional time component)
    if re.match(r"\d{4}-\d{2}-\d{2}", datetime):
        try:
            return datetime_from_str(datetime)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date: {e}")

    # Match (H)H:mm format (time only, use today's date)
    time_match = re.match(r"^(\d{1,2}):(\d{2})$", datetime)
    if time_match:
        hour = int(time_match.group(1))
        minute = int(time_match.group(2))

        if hour < 0 or hour > 23:
            raise typer.BadParameter(f"Hour must be between 0 and 23, got {hour}")
        if minute < 0 or minute > 59:
            raise typer.BadParameter(f"Minute must be between 0 and 59, got {minute}")

        return pendulum.today("local").set(
            hour=hour, minute=minute, second=0, microsecond=0
        )

    # Match numeric input for relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", datetime):
        return pendulum.today("local").add(days=int(datetime)).start_of("day")

    if datetime == "now" or datetime == "n":
        return pendulum.now("local")
    if datetime == "today" or datetime == "t":
        return pendulum.today("local").start_of("day")
    if datetime == "yesterday" or datetime == "y":
        return pendulum.yesterday("local").start_of("day")
    if datetime == "tomorrow" or datetime == "o":
        return pendulum.tomorrow("local").start_of("day")
    raise typer.BadParameter("Incorrect datetime format")


def validate_hour(hour: Optional[int]) -> Optional[int]:
    if hour is None:
        return None
    if not (0 <= hour <= 23):
        raise typer.BadParameter(f"Hour must be between 0 and 23, got {hour}")
    return hour


def validate_number_of_days(number_of_days: Optional[int]) -> Optional[int]:
    if number_of_days is None:
        return None
    if not (3 <= number_of_days <= 7):
        raise typer.BadParameter(
            f"Number of days must be between 3 and 7, got {number_of_days}"
        )
    return number_of_days
