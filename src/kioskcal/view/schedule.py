# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.columns import Columns
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from kioskcal.model.event import Event
from kioskcal.model.layout import DayLane, DaySchedule, LayoutItem, WeekSchedule
from kioskcal.model.window import HourLabel, ScheduleWindow
from kioskcal.service.layout import column_geometry
from kioskcal.time import (
    date_key,
    datetime_to_display_local_date_str,
    datetime_to_display_time_str,
)
from kioskcal.view.header import header


def window_view(report_name: str, window: ScheduleWindow) -> None:
    """Print a resolved window and its hour gridlines."""
    header(report_name)

    console = Console()
    console.print()
    console.print(render_window_summary(window))
    console.print(render_hour_labels(window["hour_labels"]))
    console.print()


def day_schedule_view(report_name: str, schedule: DaySchedule) -> None:
    header(report_name, datetime_to_display_local_date_str(schedule["window"]["start"]))

    console = Console()
    console.print()
    console.print(render_day_schedule(schedule))
    console.print()


def week_schedule_view(report_name: str, schedule: WeekSchedule) -> None:
    header(report_name)

    console = Console()
    console.print()
    console.print(render_week_schedule(schedule))
    console.print()


def render_window_summary(window: ScheduleWindow) -> RenderableType:
    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")
    table.add_row("start", window["start"].format("YYYY-MM-DD HH:mm"))
    table.add_row("end", window["end"].format("YYYY-MM-DD HH:mm"))
    table.add_row("minutes", f"{window['total_minutes']:g}")
    return table


def render_hour_labels(hour_labels: list[HourLabel]) -> RenderableType:
    table = Table(box=box.SIMPLE, title="Hour labels")
    table.add_column("Hour", justify="right")
    table.add_column("Position %", justify="right")
    for label in hour_labels:
        table.add_row(f"{label['hour']:02d}:00", f"{label['position']:.2f}")
    return table


def render_day_schedule(schedule: DaySchedule) -> RenderableType:
    parts: list[RenderableType] = [render_window_summary(schedule["window"])]
    if schedule["window"]["hour_labels"]:
        parts.append(render_hour_labels(schedule["window"]["hour_labels"]))
    parts.append(render_layout_items(schedule["items"]))
    parts.append(_current_time_line(schedule["current_time_position"]))
    return Group(*parts)


def render_week_schedule(schedule: WeekSchedule) -> RenderableType:
    lane_panels: list[RenderableType] = []
    for lane in schedule["lanes"]:
        all_day_events = schedule["all_day_events"].get(date_key(lane["date"]), [])
        is_today = lane["date"] == schedule["today"]
        lane_panels.append(_render_lane(lane, all_day_events, is_today))

    parts: list[RenderableType] = []
    if schedule["hour_labels"]:
        parts.append(render_hour_labels(schedule["hour_labels"]))
    parts.append(Columns(lane_panels, equal=False, expand=False, padding=(0, 0)))
    return Group(*parts)


def render_layout_items(
    items: list[LayoutItem], compact: bool = False
) -> RenderableType:
    if not items:
        return Text("No events in window", style="dim")

    table = Table(box=box.SIMPLE)
    table.add_column("Time")
    table.add_column("Title")
    table.add_column("Top %", justify="right")
    table.add_column("Height %", justify="right")
    table.add_column("Col", justify="right")
    if not compact:
        table.add_column("Left %", justify="right")
        table.add_column("Width %", justify="right")

    for item in items:
        title = item["title"] if item["title"] is not None else "[no title]"
        time_range = (
            f"{datetime_to_display_time_str(item['start'])}"
            f"-{datetime_to_display_time_str(item['end'])}"
        )
        row = [
            time_range,
            title,
            f"{item['top']:.2f}",
            f"{item['height']:.2f}",
            f"{item['column'] + 1}/{item['total_columns']}",
        ]
        if not compact:
            left, width = column_geometry(item)
            row += [f"{left:.1f}", f"{width:.1f}"]
        table.add_row(*row)

    return table


def _render_lane(
    lane: DayLane, all_day_events: list[Event], is_today: bool = False
) -> Panel:
    content: list[RenderableType] = []

    if all_day_events:
        for event in all_day_events:
            title = event["title"] if event["title"] is not None else "[no title]"
            line = Text()
            line.append("■ ", style="bright_cyan")
            line.append(title)
            content.append(line)
        content.append(Text("─" * 20, style="dim"))

    content.append(render_layout_items(lane["items"], compact=True))
    content.append(_current_time_line(lane["current_time_position"]))

    title_style = "bold black on bright_cyan" if is_today else "bold"
    return Panel(
        Group(*content),
        title=Text(lane["date"].format("ddd MM-DD"), style=title_style),
        border_style="bright_black",
    )


def _current_time_line(position: Optional[float]) -> Text:
    if position is None:
        return Text("")
    return Text(f"now at {position:.2f}%", style="bold bright_cyan")
