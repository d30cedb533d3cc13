from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from tracky import cli
from tracky.config import TrackySettings
from tracky.errors import TrackerError

T0 = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings(tmp_path: Path) -> TrackySettings:
    return TrackySettings(TRACKY_DATA_DIR=tmp_path, TRACKY_LOG_LEVEL="WARNING")


def _run(settings: TrackySettings, *argv: str, now: datetime = T0) -> int:
    return cli.run(list(argv), settings=settings, clock=lambda: now)


def test_every_error_has_a_message() -> None:
    def subclasses(cls):
        for sub in cls.__subclasses__():
            yield sub
            yield from subclasses(sub)

    for error_type in subclasses(TrackerError):
        assert error_type in cli.ERROR_MESSAGES
        assert cli.describe_error(error_type("x"))


def test_new_and_list(settings: TrackySettings, capsys) -> None:
    assert _run(settings, "new", "b") == 0
    assert _run(settings, "new", "a") == 0
    capsys.readouterr()

    assert _run(settings, "list") == 0

    assert capsys.readouterr().out.splitlines() == ["  a", "> b"]


def test_list_without_trackers(settings: TrackySettings, capsys) -> None:
    assert _run(settings, "list") == 0
    assert capsys.readouterr().out.strip() == cli.NO_TRACKERS_MESSAGE


def test_duplicate_new_reports_error(settings: TrackySettings, capsys) -> None:
    _run(settings, "new", "alpha")
    capsys.readouterr()

    assert _run(settings, "new", "alpha") == 1

    assert capsys.readouterr().err.strip() == "alpha already exists"


def test_start_stop_persists_between_invocations(settings: TrackySettings, capsys) -> None:
    _run(settings, "new", "work")
    assert _run(settings, "start", "-n", "writing") == 0
    assert _run(settings, "stop", now=T0 + timedelta(minutes=2, seconds=5)) == 0

    output = capsys.readouterr().out.splitlines()
    assert output[-2:] == ["Timer started", "Stopped writing after 2:05"]

    document = json.loads(settings.data_path.read_text(encoding="utf-8"))
    log = document["trackers"]["work"]["logs"][0]
    assert log["end_time"] - log["start_time"] == 125


def test_stop_without_logs(settings: TrackySettings, capsys) -> None:
    _run(settings, "new", "work")

    assert _run(settings, "stop") == 1
    assert "no logs" in capsys.readouterr().err


def test_switch_to_missing_tracker(settings: TrackySettings, capsys) -> None:
    _run(settings, "new", "a")

    assert _run(settings, "switch", "ghost") == 1
    assert capsys.readouterr().err.strip() == "ghost does not exist"

    _run(settings, "current")
    assert capsys.readouterr().out.strip() == "Current tracker: a"


def test_stale_current_is_healed_and_saved(settings: TrackySettings, capsys) -> None:
    settings.data_path.write_text(
        json.dumps({"trackers": {}, "current": "gone"}), encoding="utf-8"
    )

    assert _run(settings, "current") == 1
    assert capsys.readouterr().err.strip() == "No tracker selected"

    document = json.loads(settings.data_path.read_text(encoding="utf-8"))
    assert document["current"] is None


def test_status_and_logs(settings: TrackySettings, capsys) -> None:
    _run(settings, "new", "work")
    _run(settings, "start", "work")
    capsys.readouterr()

    assert _run(settings, "status", now=T0 + timedelta(seconds=30)) == 0
    status = capsys.readouterr().out.splitlines()
    assert status == ["work (running)", "  30s untitled"]

    assert _run(settings, "logs") == 0
    assert capsys.readouterr().out.strip().endswith("->")


def test_delete(settings: TrackySettings, capsys) -> None:
    _run(settings, "new", "work")
    assert _run(settings, "delete") == 0
    assert _run(settings, "list") == 0

    assert capsys.readouterr().out.splitlines()[-2:] == ["Deleted work", cli.NO_TRACKERS_MESSAGE]


def test_corrupt_state_is_not_overwritten(settings: TrackySettings, capsys) -> None:
    settings.data_path.write_text("{broken", encoding="utf-8")

    assert _run(settings, "new", "work") == 1

    assert "Could not load trackers" in capsys.readouterr().err
    assert settings.data_path.read_text(encoding="utf-8") == "{broken"


def test_no_command_prints_help(settings: TrackySettings, capsys) -> None:
    assert cli.run([], settings=settings) == 0
    assert "usage:" in capsys.readouterr().out


def test_main_exits_with_error_code(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TRACKY_DATA_DIR", str(tmp_path))
    cli.get_settings.cache_clear()
    try:
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["stop"])
    finally:
        cli.get_settings.cache_clear()

    assert excinfo.value.code == 1
