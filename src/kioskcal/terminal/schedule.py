# SPDX-License-Identifier: MIT

from enum import Enum
from typing import Annotated, Any, Optional, cast

import pendulum
import typer
from rich.console import Console, RenderableType

from kioskcal.configuration import Configuration
from kioskcal.model.event import Event
from kioskcal.model.widget import DayScheduleConfig, WeekScheduleConfig
from kioskcal.repository.configuration import (
    CONFIGURATION_REPO,
    validate_day_schedule_config,
    validate_week_schedule_config,
)
from kioskcal.repository.event import EVENT_REPO
from kioskcal.service.schedule import build_day_schedule, build_week_schedule
from kioskcal.service.window import resolve_window, window_config_for
from kioskcal.terminal.parse import (
    parse_datetime,
    validate_hour,
    validate_number_of_days,
)
from kioskcal.terminal.watch import watch
from kioskcal.time import now_local
from kioskcal.view.schedule import (
    day_schedule_view,
    render_day_schedule,
    render_week_schedule,
    week_schedule_view,
    window_view,
)

console = Console()

NOW_HELP = "Reference time: YYYY-MM-DD HH:mm, YYYY-MM-DD, (H)H:mm, now, today, tomorrow, or day offset like 1, -1"


class ViewMode(str, Enum):
    fixed = "fixed"
    rolling = "rolling"


class StartDay(str, Enum):
    today = "today"
    week_start = "week_start"


def day(
    now: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--now", "-n", parser=parse_datetime, help=NOW_HELP),
    ] = None,
    mode: Annotated[
        Optional[ViewMode], typer.Option("--mode", "-m", help="Window mode")
    ] = None,
    start_hour: Annotated[
        Optional[int],
        typer.Option("--start-hour", "-sh", callback=validate_hour),
    ] = None,
    end_hour: Annotated[
        Optional[int],
        typer.Option("--end-hour", "-eh", callback=validate_hour),
    ] = None,
    offset: Annotated[
        Optional[int],
        typer.Option("--offset", "-o", help="Rolling mode: minutes to look back"),
    ] = None,
    duration: Annotated[
        Optional[int],
        typer.Option("--duration", "-du", help="Rolling mode: hours to show"),
    ] = None,
    calendars: Annotated[
        Optional[list[str]],
        typer.Option("--calendar", "-c", help="Only show these calendars"),
    ] = None,
    live: Annotated[
        bool, typer.Option("--watch", "-w", help="Refresh every minute")
    ] = False,
) -> None:
    """Lay out a single-day schedule."""
    config = CONFIGURATION_REPO.get_config()
    day_config = cast(
        DayScheduleConfig,
        _with_overrides(
            config["day_schedule"],
            view_mode=mode.value if mode is not None else None,
            start_hour=start_hour,
            end_hour=end_hour,
            rolling_offset_minutes=offset,
            rolling_duration_hours=duration,
            calendar_ids=calendars or None,
        ),
    )
    _validate(validate_day_schedule_config, day_config)

    if live:
        if now is not None:
            raise typer.BadParameter("--watch always follows the current time")

        def render(tick: pendulum.DateTime) -> RenderableType:
            events = _load_events(config, tick, reload=True)
            return render_day_schedule(build_day_schedule(tick, day_config, events))

        watch(render)
        return

    now = now if now is not None else now_local()
    schedule = build_day_schedule(now, day_config, _load_events(config, now))
    day_schedule_view("day schedule", schedule)


def week(
    now: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--now", "-n", parser=parse_datetime, help=NOW_HELP),
    ] = None,
    number_of_days: Annotated[
        Optional[int],
        typer.Option(
            "--days", "-d", callback=validate_number_of_days, help="3 to 7 days"
        ),
    ] = None,
    start_day: Annotated[
        Optional[StartDay],
        typer.Option("--start-day", "-s", help="Start today or on the week's Monday"),
    ] = None,
    mode: Annotated[
        Optional[ViewMode], typer.Option("--mode", "-m", help="Window mode")
    ] = None,
    start_hour: Annotated[
        Optional[int],
        typer.Option("--start-hour", "-sh", callback=validate_hour),
    ] = None,
    end_hour: Annotated[
        Optional[int],
        typer.Option("--end-hour", "-eh", callback=validate_hour),
    ] = None,
    offset: Annotated[
        Optional[int],
        typer.Option("--offset", "-o", help="Rolling mode: minutes to look back"),
    ] = None,
    duration: Annotated[
        Optional[int],
        typer.Option("--duration", "-du", help="Rolling mode: hours to show"),
    ] = None,
    calendars: Annotated[
        Optional[list[str]],
        typer.Option("--calendar", "-c", help="Only show these calendars"),
    ] = None,
    no_all_day: Annotated[
        bool, typer.Option("--no-all-day", help="Hide all-day events")
    ] = False,
    keep_duplicates: Annotated[
        bool,
        typer.Option(
            "--keep-duplicates", help="Show same-titled all-day events every time"
        ),
    ] = False,
    live: Annotated[
        bool, typer.Option("--watch", "-w", help="Refresh every minute")
    ] = False,
) -> None:
    """Lay out a multi-day schedule, one lane per day."""
    config = CONFIGURATION_REPO.get_config()
    week_config = cast(
        WeekScheduleConfig,
        _with_overrides(
            config["week_schedule"],
            number_of_days=number_of_days,
            start_day=start_day.value if start_day is not None else None,
            view_mode=mode.value if mode is not None else None,
            start_hour=start_hour,
            end_hour=end_hour,
            rolling_offset_minutes=offset,
            rolling_duration_hours=duration,
            calendar_ids=calendars or None,
            show_all_day_events=False if no_all_day else None,
            hide_duplicates=False if keep_duplicates else None,
        ),
    )
    _validate(validate_week_schedule_config, week_config)

    if live:
        if now is not None:
            raise typer.BadParameter("--watch always follows the current time")

        def render(tick: pendulum.DateTime) -> RenderableType:
            events = _load_events(config, tick, reload=True)
            return render_week_schedule(build_week_schedule(tick, week_config, events))

        watch(render)
        return

    now = now if now is not None else now_local()
    schedule = build_week_schedule(now, week_config, _load_events(config, now))
    week_schedule_view("week schedule", schedule)


def window(
    now: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--now", "-n", parser=parse_datetime, help=NOW_HELP),
    ] = None,
    mode: Annotated[
        Optional[ViewMode], typer.Option("--mode", "-m", help="Window mode")
    ] = None,
    start_hour: Annotated[
        Optional[int],
        typer.Option("--start-hour", "-sh", callback=validate_hour),
    ] = None,
    end_hour: Annotated[
        Optional[int],
        typer.Option("--end-hour", "-eh", callback=validate_hour),
    ] = None,
    offset: Annotated[
        Optional[int],
        typer.Option("--offset", "-o", help="Rolling mode: minutes to look back"),
    ] = None,
    duration: Annotated[
        Optional[int],
        typer.Option("--duration", "-du", help="Rolling mode: hours to show"),
    ] = None,
) -> None:
    """Show the visible window and hour labels of the day schedule."""
    config = CONFIGURATION_REPO.get_config()
    day_config = cast(
        DayScheduleConfig,
        _with_overrides(
            config["day_schedule"],
            view_mode=mode.value if mode is not None else None,
            start_hour=start_hour,
            end_hour=end_hour,
            rolling_offset_minutes=offset,
            rolling_duration_hours=duration,
        ),
    )
    _validate(validate_day_schedule_config, day_config)

    now = now if now is not None else now_local()
    window_view("window", resolve_window(now, window_config_for(day_config)))


def _with_overrides(base: Any, **overrides: Any) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    return merged


def _validate(validator: Any, widget_config: Any) -> None:
    try:
        validator(widget_config)
    except ValueError as e:
        raise typer.BadParameter(str(e))


def _load_events(
    config: Configuration, now: pendulum.DateTime, reload: bool = False
) -> list[Event]:
    if reload:
        EVENT_REPO.reload()
    events = EVENT_REPO.get_all_events()

    ics_paths = config["ics_paths"]
    if ics_paths:
        # Cover a week view that starts on Monday as well as one that starts today
        range_start = now.start_of("week")
        range_end = now.start_of("day").add(days=config.get("ical_sync_days", 7) + 1)
        events += EVENT_REPO.get_ical_events(ics_paths, range_start, range_end, console)

    return events
