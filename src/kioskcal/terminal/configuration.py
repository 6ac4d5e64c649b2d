# SPDX-License-Identifier: MIT

from enum import Enum
from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from kioskcal import configuration
from kioskcal.repository.configuration import CONFIGURATION_REPO
from kioskcal.terminal.custom_typer import AlphabeticalTyperGroup
from kioskcal.terminal.parse import validate_hour, validate_number_of_days
from kioskcal.terminal.schedule import StartDay, ViewMode

app = typer.Typer(cls=AlphabeticalTyperGroup, no_args_is_help=True)


class Widget(str, Enum):
    day = "day"
    week = "week"


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("config_path", str(configuration.APP_CONFIG_PATH))
    table.add_row("events_path", str(configuration.DATA_EVENTS_PATH))
    table.add_row(
        "ics_paths",
        ", ".join(config["ics_paths"]) if config["ics_paths"] else "None",
    )
    table.add_row("ical_sync_days", str(config.get("ical_sync_days", 7)))
    table.add_row("log_level", config.get("log_level", "WARNING"))

    for widget_key in ("day_schedule", "week_schedule"):
        widget_config: dict[str, Any] = config[widget_key]  # type: ignore[literal-required]
        for key, value in widget_config.items():
            table.add_row(f"{widget_key}.{key}", _display_value(value))

    console.print(table)


@app.command("set, s")
def set(
    widget: Annotated[
        Optional[Widget],
        typer.Option("--widget", "-w", help="Schedule widget to change"),
    ] = None,
    mode: Annotated[
        Optional[ViewMode], typer.Option("--mode", "-m", help="Window mode")
    ] = None,
    start_hour: Annotated[
        Optional[int], typer.Option("--start-hour", "-sh", callback=validate_hour)
    ] = None,
    end_hour: Annotated[
        Optional[int], typer.Option("--end-hour", "-eh", callback=validate_hour)
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
        typer.Option("--calendar", "-c", help="Calendars to show (accepts multiple)"),
    ] = None,
    all_calendars: Annotated[
        bool, typer.Option("--all-calendars", help="Show every calendar")
    ] = False,
    show_current_time: Annotated[
        Optional[bool],
        typer.Option(
            "--current-time/--no-current-time",
            help="Enable/disable the current-time marker",
        ),
    ] = None,
    show_hour_labels: Annotated[
        Optional[bool],
        typer.Option(
            "--hour-labels/--no-hour-labels", help="Enable/disable hour gridlines"
        ),
    ] = None,
    number_of_days: Annotated[
        Optional[int],
        typer.Option("--days", "-d", callback=validate_number_of_days),
    ] = None,
    start_day: Annotated[
        Optional[StartDay], typer.Option("--start-day", "-s")
    ] = None,
    show_all_day_events: Annotated[
        Optional[bool],
        typer.Option("--all-day/--no-all-day", help="Enable/disable all-day events"),
    ] = None,
    hide_duplicates: Annotated[
        Optional[bool],
        typer.Option(
            "--hide-duplicates/--keep-duplicates",
            help="Collapse same-titled all-day events on a day",
        ),
    ] = None,
    events_path: Annotated[
        Optional[str],
        typer.Option("--events-path", help="YAML file with events"),
    ] = None,
    remove_events_path: Annotated[
        bool,
        typer.Option("--remove-events-path", help="Use the default event file"),
    ] = False,
    ics_paths: Annotated[
        Optional[list[str]],
        typer.Option("--ics-path", help="ICS files or URLs (accepts multiple)"),
    ] = None,
    remove_ics_paths: Annotated[
        bool, typer.Option("--remove-ics-paths", help="Remove all ICS paths")
    ] = False,
    ical_sync_days: Annotated[
        Optional[int],
        typer.Option("--ical-sync-days", help="Days ahead to read from iCal"),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL"),
    ] = None,
) -> None:
    """
    Update configuration settings.

    Window and layout options need --widget to pick the schedule they change.
    """
    widget_settings: dict[str, Any] = {
        "view_mode": mode.value if mode is not None else None,
        "start_hour": start_hour,
        "end_hour": end_hour,
        "rolling_offset_minutes": offset,
        "rolling_duration_hours": duration,
        "calendar_ids": [] if all_calendars else (list(calendars) if calendars else None),
        "show_current_time": show_current_time,
        "show_hour_labels": show_hour_labels,
        "number_of_days": number_of_days,
        "start_day": start_day.value if start_day is not None else None,
        "show_all_day_events": show_all_day_events,
        "hide_duplicates": hide_duplicates,
    }
    has_widget_settings = any(value is not None for value in widget_settings.values())
    if has_widget_settings and widget is None:
        raise typer.BadParameter("Choose the schedule to change with --widget")

    try:
        if widget is not None and has_widget_settings:
            CONFIGURATION_REPO.update_widget_config(
                f"{widget.value}_schedule", **widget_settings
            )
        CONFIGURATION_REPO.update_config(
            events_path=events_path,
            remove_events_path=remove_events_path,
            ics_paths=list(ics_paths) if ics_paths else None,
            remove_ics_paths=remove_ics_paths,
            ical_sync_days=ical_sync_days,
            log_level=log_level,
        )
    except ValueError as e:
        raise typer.BadParameter(str(e))

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    view()


def _display_value(value: Any) -> str:
    if isinstance(value, bool):
        return "✓ Enabled" if value else "✗ Disabled"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value) if value else "All"
    return str(value)
