import pytest

from tilescan.logger import (
    LogLevel,
    level_from_string,
    level_to_string,
    log,
    set_log_level,
)


@pytest.fixture(autouse=True)
def reset_level():
    yield
    set_log_level(LogLevel.OFF)


@pytest.mark.parametrize(
    "level,name",
    [
        (LogLevel.OFF, "off"),
        (LogLevel.INFO, "info"),
        (LogLevel.WARNING, "warning"),
        (LogLevel.ERROR, "error"),
    ],
)
def test_names_round_trip(level, name):
    assert level_to_string(level) == name
    assert level_from_string(name) is level


def test_unknown_level_value():
    assert level_to_string(42) == "UNKNOWN"


def test_unknown_name_maps_to_off():
    assert level_from_string("verbose") is LogLevel.OFF


def test_levels_are_ordered():
    off = level_from_string("off")
    info = level_from_string("info")
    warning = level_from_string("warning")
    error = level_from_string("error")
    assert off < info < warning < error


def test_off_suppresses_everything(capsys):
    set_log_level(LogLevel.OFF)
    log(LogLevel.ERROR, "hidden")
    captured = capsys.readouterr()
    assert captured.out == "" and captured.err == ""


def test_info_goes_to_stdout(capsys):
    set_log_level(LogLevel.INFO)
    log(LogLevel.INFO, "hello")
    captured = capsys.readouterr()
    assert captured.out == "[info] hello\n"
    assert captured.err == ""


def test_below_threshold_is_dropped(capsys):
    set_log_level(LogLevel.WARNING)
    log(LogLevel.INFO, "quiet")
    log(LogLevel.WARNING, "loud")
    captured = capsys.readouterr()
    assert captured.out == "[warning] loud\n"


def test_error_goes_to_stderr(capsys):
    set_log_level(LogLevel.INFO)
    log(LogLevel.ERROR, "bad")
    captured = capsys.readouterr()
    assert captured.err == "[error] bad\n"
    assert captured.out == ""