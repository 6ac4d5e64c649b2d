# SPDX-License-Identifier: MIT

import datetime
import logging
from pathlib import Path
from typing import Any, Optional

import icalevents.icalevents
import pendulum
from rich.console import Console
from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]

from kioskcal import configuration
from kioskcal.model.event import Event
from kioskcal.time import datetime_from_str

logger = logging.getLogger(__name__)


class EventRepository:
    """
    Read-only source of events for the command line.

    Events come from the YAML event file and from any configured iCal
    sources. They are handed to the layout services as-is.
    """

    def __init__(self) -> None:
        self._events: Optional[list[Event]] = None

    @property
    def events(self) -> list[Event]:
        if self._events is None:
            self.__load_data()
        if self._events is None:
            raise ValueError()
        return self._events

    def __load_data(self) -> None:
        self._events = []
        events_path = configuration.DATA_EVENTS_PATH
        if not events_path.is_file():
            logger.debug("No event file at %s", events_path)
            return

        raw_data = load(events_path.read_text(), Loader=Loader)
        if raw_data is None:
            return

        for index, raw_event in enumerate(raw_data.get("events") or []):
            event = convert_event_for_deserialization(raw_event, index)
            if event is not None:
                self._events.append(event)

    def get_all_events(self) -> list[Event]:
        return list(self.events)

    def reload(self) -> None:
        """Drop loaded events so the next read picks up file changes."""
        self._events = None

    def get_ical_events(
        self,
        ics_paths: list[str],
        start: pendulum.DateTime,
        end: pendulum.DateTime,
        console: Optional[Console] = None,
    ) -> list[Event]:
        """
        Read events between start and end from iCal files or URLs.

        A source that fails to load is reported and skipped.
        """
        events: list[Event] = []
        for ics_path in ics_paths:
            try:
                is_url = ics_path.startswith("http://") or ics_path.startswith(
                    "https://"
                )
                if is_url:
                    ical_events = icalevents.icalevents.events(
                        url=ics_path, start=start, end=end, fix_apple=True
                    )
                else:
                    ical_events = icalevents.icalevents.events(
                        file=Path(ics_path).expanduser(), start=start, end=end
                    )
            except Exception as e:
                logger.warning("Could not read iCal source %s: %s", ics_path, e)
                if console is not None:
                    console.print(f"[red]Could not read {ics_path}: {e}[/red]")
                continue

            for ical_event in ical_events:
                if ical_event.start is None:
                    continue
                events.append(convert_ical_event(ical_event, ics_path))

        return events


def convert_event_for_deserialization(
    raw_event: dict[str, Any], index: int
) -> Optional[Event]:
    """
    Convert one YAML record to an Event, or None if it has no usable times.
    """
    try:
        start = _datetime_from_yaml(raw_event.get("start"))
        end = _datetime_from_yaml(raw_event.get("end"))
    except ValueError as e:
        logger.warning("Skipping event %s: %s", raw_event.get("id", index), e)
        return None
    all_day = bool(raw_event.get("all_day", False))

    if start is None:
        logger.warning("Skipping event %s without a start", raw_event.get("id", index))
        return None
    if end is None:
        if not all_day:
            logger.warning(
                "Skipping event %s without an end", raw_event.get("id", index)
            )
            return None
        end = start.add(days=1)

    raw_id = raw_event.get("id")
    calendar_id = raw_event.get("calendar_id")
    return {
        "id": str(raw_id) if raw_id is not None else str(index),
        "title": raw_event.get("title"),
        "start": start,
        "end": end,
        "all_day": all_day,
        "calendar_id": str(calendar_id) if calendar_id is not None else None,
    }


def convert_ical_event(ical_event: Any, ics_path: str) -> Event:
    all_day = bool(getattr(ical_event, "all_day", False))
    if all_day:
        # Keep the calendar date as written, no timezone shift
        start = pendulum.instance(ical_event.start)
    else:
        start = pendulum.instance(ical_event.start).in_tz("local")

    if ical_event.end is None:
        end = start.add(days=1) if all_day else start.add(hours=1)
    elif all_day:
        end = pendulum.instance(ical_event.end)
    else:
        end = pendulum.instance(ical_event.end).in_tz("local")

    return {
        "id": f"{ical_event.uid}@{start.isoformat()}",
        "title": ical_event.summary,
        "start": start,
        "end": end,
        "all_day": all_day,
        "calendar_id": ics_path,
    }


def _datetime_from_yaml(value: Any) -> Optional[pendulum.DateTime]:
    # PyYAML already turns unquoted timestamps into datetime/date objects
    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        return pendulum.instance(value, tz="local")
    if isinstance(value, datetime.date):
        return pendulum.datetime(value.year, value.month, value.day, tz="local")
    return datetime_from_str(str(value))


EVENT_REPO = EventRepository()
