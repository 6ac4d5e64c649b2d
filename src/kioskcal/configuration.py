# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import NotRequired, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

from kioskcal.model.widget import DayScheduleConfig, WeekScheduleConfig

APP_NAME = "kioskcal"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_EVENTS_PATH: Path = DATA_PATH / "events.yaml"


class Configuration(TypedDict):
    day_schedule: DayScheduleConfig
    week_schedule: WeekScheduleConfig
    events_path: Optional[str]
    ics_paths: Optional[list[str]]
    ical_sync_days: NotRequired[int]
    log_level: NotRequired[str]


def default_day_schedule_config() -> DayScheduleConfig:
    return {
        "calendar_ids": None,
        "view_mode": "fixed",
        "start_hour": 6,
        "end_hour": 22,
        "rolling_offset_minutes": 60,
        "rolling_duration_hours": 8,
        "show_current_time": True,
        "show_hour_labels": True,
    }


def default_week_schedule_config() -> WeekScheduleConfig:
    return {
        **default_day_schedule_config(),
        "number_of_days": 5,
        "start_day": "today",
        "show_all_day_events": True,
        "hide_duplicates": True,
    }


def default_configuration() -> Configuration:
    return {
        "day_schedule": default_day_schedule_config(),
        "week_schedule": default_week_schedule_config(),
        "events_path": None,
        "ics_paths": None,
        "ical_sync_days": 7,
        "log_level": "WARNING",
    }


def load_data_path_configuration() -> None:
    """
    Point DATA_EVENTS_PATH at the event file named in the config, if any.

    This must be called after the config file exists and before the
    event repository is used.
    """
    global DATA_EVENTS_PATH

    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return

    events_path_setting = config.get("events_path")
    if events_path_setting is not None:
        DATA_EVENTS_PATH = Path(events_path_setting).expanduser()
