# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from kioskcal import configuration
from kioskcal.model.widget import DayScheduleConfig, WeekScheduleConfig

VIEW_MODES = ("fixed", "rolling")
START_DAYS = ("today", "week_start")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        self._config = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)

        if self._config is None:
            raise ValueError(f"Empty configuration: {configuration.APP_CONFIG_PATH}")

        defaults = configuration.default_configuration()

        # Migration: add top-level fields missing from older files
        for key, value in defaults.items():
            if key not in self._config:
                self._config[key] = value  # type: ignore[literal-required]

        # Migration: add widget fields missing from older files
        for widget_key in ("day_schedule", "week_schedule"):
            widget_defaults: dict[str, Any] = defaults[widget_key]  # type: ignore[literal-required]
            if self._config.get(widget_key) is None:
                # An empty block in the YAML file loads as None
                self._config[widget_key] = deepcopy(widget_defaults)  # type: ignore[literal-required]
            widget_config: dict[str, Any] = self._config[widget_key]  # type: ignore[literal-required]
            for key, value in widget_defaults.items():
                widget_config.setdefault(key, value)

        validate_day_schedule_config(self._config["day_schedule"])
        validate_week_schedule_config(self._config["week_schedule"])
        validate_log_level(self._config.get("log_level", "WARNING"))

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))

    def flush(self) -> None:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        events_path: Optional[str] = None,
        remove_events_path: bool = False,
        ics_paths: Optional[list[str]] = None,
        remove_ics_paths: bool = False,
        ical_sync_days: Optional[int] = None,
        log_level: Optional[str] = None,
    ) -> None:
        if log_level is not None:
            validate_log_level(log_level)

        self.is_dirty = True

        if events_path is not None:
            self.config["events_path"] = events_path
        if remove_events_path:
            self.config["events_path"] = None
        if ics_paths is not None:
            self.config["ics_paths"] = ics_paths
        if remove_ics_paths:
            self.config["ics_paths"] = None
        if ical_sync_days is not None:
            self.config["ical_sync_days"] = ical_sync_days
        if log_level is not None:
            self.config["log_level"] = log_level.upper()

    def update_widget_config(self, widget: str, **settings: Any) -> None:
        """
        Update settings of the "day_schedule" or "week_schedule" widget.

        Settings left as None are not changed. The result is validated
        before it replaces the stored widget configuration.
        """
        if widget not in ("day_schedule", "week_schedule"):
            raise ValueError(f"Unknown widget '{widget}'")

        widget_config: dict[str, Any] = deepcopy(self.config[widget])  # type: ignore[literal-required]
        for key, value in settings.items():
            if value is None:
                continue
            if key not in widget_config:
                raise ValueError(f"Unknown setting '{key}' for {widget}")
            widget_config[key] = value

        if widget == "week_schedule":
            validate_week_schedule_config(widget_config)  # type: ignore[arg-type]
        else:
            validate_day_schedule_config(widget_config)  # type: ignore[arg-type]

        self.is_dirty = True
        self.config[widget] = widget_config  # type: ignore[literal-required]


def validate_day_schedule_config(config: DayScheduleConfig) -> None:
    """
    Raises:
        ValueError: If a setting is outside its allowed range
    """
    if config["view_mode"] not in VIEW_MODES:
        raise ValueError(
            f"view_mode must be one of {', '.join(VIEW_MODES)}, got '{config['view_mode']}'"
        )
    for key in ("start_hour", "end_hour"):
        hour = config[key]  # type: ignore[literal-required]
        if not isinstance(hour, int) or not (0 <= hour <= 23):
            raise ValueError(f"{key} must be between 0 and 23, got {hour}")
    if config["start_hour"] > config["end_hour"]:
        raise ValueError(
            f"start_hour ({config['start_hour']}) must not be after end_hour ({config['end_hour']})"
        )
    if config["rolling_offset_minutes"] < 0:
        raise ValueError(
            f"rolling_offset_minutes must be 0 or more, got {config['rolling_offset_minutes']}"
        )
    if config["rolling_duration_hours"] <= 0:
        raise ValueError(
            f"rolling_duration_hours must be more than 0, got {config['rolling_duration_hours']}"
        )


def validate_week_schedule_config(config: WeekScheduleConfig) -> None:
    """
    Raises:
        ValueError: If a setting is outside its allowed range
    """
    validate_day_schedule_config(config)
    if not (3 <= config["number_of_days"] <= 7):
        raise ValueError(
            f"number_of_days must be between 3 and 7, got {config['number_of_days']}"
        )
    if config["start_day"] not in START_DAYS:
        raise ValueError(
            f"start_day must be one of {', '.join(START_DAYS)}, got '{config['start_day']}'"
        )


def validate_log_level(log_level: str) -> None:
    if log_level.upper() not in LOG_LEVELS:
        raise ValueError(
            f"log_level must be one of {', '.join(LOG_LEVELS)}, got '{log_level}'"
        )


CONFIGURATION_REPO = ConfigurationRepository()
