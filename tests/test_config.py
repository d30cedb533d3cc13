from pathlib import Path

import pytest
from pydantic import ValidationError

from tracky.config import APP_DIR_NAME, TrackySettings, default_data_dir, get_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    monkeypatch.delenv("TRACKY_DATA_DIR", raising=False)
    monkeypatch.chdir(tmp_path)

    settings = TrackySettings()

    assert settings.data_dir == tmp_path / APP_DIR_NAME
    assert settings.data_path == tmp_path / APP_DIR_NAME / "data.json"
    assert settings.log_level == "WARNING"
    assert settings.status_log_count == 3


def test_default_data_dir_falls_back_to_home(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.setattr("sys.platform", "linux")

    assert default_data_dir() == Path.home() / ".config" / APP_DIR_NAME


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TRACKY_DATA_DIR", str(tmp_path / "state"))
    monkeypatch.setenv("TRACKY_DATA_FILE", "trackers.json")
    monkeypatch.setenv("TRACKY_LOG_LEVEL", " debug ")
    monkeypatch.setenv("TRACKY_STATUS_LOGS", "5")

    settings = TrackySettings()

    assert settings.data_path == tmp_path / "state" / "trackers.json"
    assert settings.log_level == "DEBUG"
    assert settings.status_log_count == 5


@pytest.mark.parametrize(
    "env",
    [
        {"TRACKY_LOG_LEVEL": "LOUD"},
        {"TRACKY_STATUS_LOGS": "0"},
        {"TRACKY_DATA_FILE": "../data.json"},
    ],
)
def test_invalid_values_rejected(monkeypatch: pytest.MonkeyPatch, env: dict[str, str]) -> None:
    for key, value in env.items():
        monkeypatch.setenv(key, value)

    with pytest.raises(ValidationError):
        TrackySettings()


def test_get_settings_resolves_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TRACKY_DATA_DIR", "relative")
    get_settings.cache_clear()
    try:
        settings = get_settings()
    finally:
        get_settings.cache_clear()

    assert settings.data_dir == (tmp_path / "relative").resolve()
