import pytest
import yaml
from typer.testing import CliRunner

from kioskcal import configuration
from kioskcal.repository.configuration import CONFIGURATION_REPO
from kioskcal.repository.event import EVENT_REPO
from kioskcal.terminal.app import app

runner = CliRunner(env={"COLUMNS": "200"})

EVENTS_YAML = """\
events:
  - id: standup
    title: Standup
    start: 2024-01-15 09:00:00
    end: 2024-01-15 09:15:00
  - id: review
    title: Review
    start: 2024-01-16 14:00:00
    end: 2024-01-16 15:00:00
  - id: holiday
    title: Holiday
    start: 2024-01-16
    all_day: true
"""


@pytest.fixture(autouse=True)
def workspace(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump(configuration.default_configuration()))
    events_path = tmp_path / "events.yaml"
    events_path.write_text(EVENTS_YAML)

    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_path)
    monkeypatch.setattr(configuration, "DATA_EVENTS_PATH", events_path)
    monkeypatch.setattr(CONFIGURATION_REPO, "_config", None)
    monkeypatch.setattr(CONFIGURATION_REPO, "is_dirty", False)
    monkeypatch.setattr(EVENT_REPO, "_events", None)
    return tmp_path


def test_day_command():
    result = runner.invoke(app, ["--no-header", "day", "--now", "2024-01-15T12:00"])

    assert result.exit_code == 0, result.output
    assert "Standup" in result.output
    assert "Review" not in result.output


def test_day_alias_and_rolling_override():
    result = runner.invoke(
        app,
        ["-nh", "d", "-n", "2024-01-16T14:30", "-m", "rolling", "-o", "60", "-du", "2"],
    )

    assert result.exit_code == 0, result.output
    assert "Review" in result.output
    assert "13:30" in result.output


def test_week_command():
    result = runner.invoke(
        app, ["--no-header", "week", "--now", "2024-01-15T12:00", "--days", "3"]
    )

    assert result.exit_code == 0, result.output
    assert "Standup" in result.output
    assert "Review" in result.output
    assert "Holiday" in result.output


def test_week_command_hides_all_day_events():
    result = runner.invoke(
        app, ["-nh", "w", "-n", "2024-01-15T12:00", "--days", "3", "--no-all-day"]
    )

    assert result.exit_code == 0, result.output
    assert "Holiday" not in result.output


def test_week_rejects_out_of_range_days():
    result = runner.invoke(app, ["week", "--days", "9"])

    assert result.exit_code == 2


def test_window_command():
    result = runner.invoke(
        app,
        ["-nh", "window", "-n", "2024-01-15T12:00", "-sh", "8", "-eh", "9"],
    )

    assert result.exit_code == 0, result.output
    assert "2024-01-15 08:00" in result.output
    assert "2024-01-15 10:00" in result.output


def test_watch_cannot_be_combined_with_now():
    result = runner.invoke(app, ["day", "--watch", "--now", "2024-01-15T12:00"])

    assert result.exit_code == 2


def test_invalid_window_override_is_rejected():
    result = runner.invoke(app, ["day", "--start-hour", "20", "--end-hour", "8"])

    assert result.exit_code == 2


def test_config_view():
    result = runner.invoke(app, ["config", "view"])

    assert result.exit_code == 0, result.output
    assert "week_schedule.number_of_days" in result.output


def test_config_set_widget():
    result = runner.invoke(
        app, ["c", "s", "--widget", "week", "--days", "4", "--start-day", "week_start"]
    )

    assert result.exit_code == 0, result.output
    config = CONFIGURATION_REPO.get_config()
    assert config["week_schedule"]["number_of_days"] == 4
    assert config["week_schedule"]["start_day"] == "week_start"


def test_config_set_needs_widget_for_schedule_settings():
    result = runner.invoke(app, ["config", "set", "--start-hour", "7"])

    assert result.exit_code == 2


def test_config_set_rejects_week_settings_for_day_widget():
    result = runner.invoke(app, ["config", "set", "--widget", "day", "--days", "4"])

    assert result.exit_code == 2


def test_config_set_log_level():
    result = runner.invoke(app, ["config", "set", "--log-level", "info"])

    assert result.exit_code == 0, result.output
    assert CONFIGURATION_REPO.get_config()["log_level"] == "INFO"


def test_global_log_level_is_validated():
    result = runner.invoke(app, ["--log-level", "loud", "version"])

    assert result.exit_code == 2


def test_version_command():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0, result.output
    assert "kioskcal" in result.output
