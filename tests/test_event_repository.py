from types import SimpleNamespace

import pendulum
import pytest

from kioskcal import configuration
from kioskcal.repository.event import (
    EventRepository,
    convert_event_for_deserialization,
    convert_ical_event,
)

EVENTS_YAML = """\
events:
  - id: standup
    title: Standup
    start: 2024-01-15 09:00:00
    end: 2024-01-15 09:15:00
    calendar_id: work
  - title: Holiday
    start: 2024-01-16
    all_day: true
  - title: No end
    start: "2024-01-15T10:00:00"
  - title: Broken
    start: not a date
    end: also not a date
"""


@pytest.fixture
def events_path(tmp_path, monkeypatch):
    path = tmp_path / "events.yaml"
    monkeypatch.setattr(configuration, "DATA_EVENTS_PATH", path)
    return path


def test_events_are_read_from_yaml(events_path):
    events_path.write_text(EVENTS_YAML)
    events = EventRepository().get_all_events()

    assert [event["id"] for event in events] == ["standup", "1"]

    standup, holiday = events
    assert standup["title"] == "Standup"
    assert standup["calendar_id"] == "work"
    assert standup["start"].hour == 9
    assert standup["end"].minute == 15
    assert not standup["all_day"]

    assert holiday["all_day"]
    assert holiday["calendar_id"] is None
    assert holiday["end"].date() == pendulum.date(2024, 1, 17)


def test_missing_event_file_has_no_events(events_path):
    assert EventRepository().get_all_events() == []


def test_reload_picks_up_changes(events_path):
    events_path.write_text("events: []\n")
    repo = EventRepository()
    assert repo.get_all_events() == []

    events_path.write_text(EVENTS_YAML)
    assert repo.get_all_events() == []

    repo.reload()
    assert len(repo.get_all_events()) == 2


def test_event_without_start_is_skipped():
    assert convert_event_for_deserialization({"title": "Nothing"}, 0) is None


def test_timed_event_without_end_is_skipped():
    raw_event = {"title": "Open", "start": "2024-01-15T10:00:00"}

    assert convert_event_for_deserialization(raw_event, 3) is None


def test_convert_ical_event():
    ical_event = SimpleNamespace(
        uid="abc",
        summary="Review",
        start=pendulum.datetime(2024, 1, 15, 9, tz="UTC"),
        end=pendulum.datetime(2024, 1, 15, 10, tz="UTC"),
        all_day=False,
    )
    event = convert_ical_event(ical_event, "work.ics")

    assert event["title"] == "Review"
    assert event["calendar_id"] == "work.ics"
    assert event["id"].startswith("abc@")
    assert event["end"] - event["start"] == pendulum.duration(hours=1)


def test_convert_ical_event_without_end():
    ical_event = SimpleNamespace(
        uid="day",
        summary="Offsite",
        start=pendulum.datetime(2024, 1, 15, tz="UTC"),
        end=None,
        all_day=True,
    )
    event = convert_ical_event(ical_event, "team.ics")

    assert event["all_day"]
    assert event["start"].date() == pendulum.date(2024, 1, 15)
    assert event["end"].date() == pendulum.date(2024, 1, 16)


def test_unreadable_ical_source_is_skipped(tmp_path):
    missing = str(tmp_path / "missing.ics")
    start = pendulum.datetime(2024, 1, 15, tz="UTC")

    assert EventRepository().get_ical_events([missing], start, start.add(days=7)) == []
