import pytest

from timetable.config import TimetableConfig, get_config, reset_config
from timetable.models import ViewMode


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path):
    # Keep a developer's .env out of the tests
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


def test_defaults():
    config = TimetableConfig()

    assert config.upcoming_only is True
    assert config.view_mode is ViewMode.GRID
    assert config.log_json is False
    assert config.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("TIMETABLE_VIEW_MODE", "list")
    monkeypatch.setenv("TIMETABLE_UPCOMING_ONLY", "false")
    monkeypatch.setenv("TIMETABLE_LOG_JSON", "true")

    config = get_config()

    assert config.view_mode is ViewMode.LIST
    assert config.upcoming_only is False
    assert config.log_json is True


def test_get_config_is_cached(monkeypatch):
    first = get_config()
    monkeypatch.setenv("TIMETABLE_LOG_LEVEL", "DEBUG")

    assert get_config() is first
    reset_config()
    assert get_config().log_level == "DEBUG"
