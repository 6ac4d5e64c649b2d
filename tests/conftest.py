import pendulum
import pytest

from kioskcal.model.event import Event


@pytest.fixture
def make_event():
    def _make_event(
        event_id: str,
        start: str,
        end: str,
        all_day: bool = False,
        title=None,
        calendar_id=None,
    ) -> Event:
        return {
            "id": event_id,
            "title": title if title is not None else event_id,
            "start": pendulum.parse(start, tz="UTC"),
            "end": pendulum.parse(end, tz="UTC"),
            "all_day": all_day,
            "calendar_id": calendar_id,
        }

    return _make_event
