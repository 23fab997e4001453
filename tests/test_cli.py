"""Tests for the command-line interface."""

import io
import logging

import pytest
from click.testing import CliRunner

from calcpad.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.mark.parametrize("args, expected", [
    (["7+3="], "10"),
    (["5/0="], "Error"),
    (["1234.5", "Enter"], "1,234.5"),
    (["9", "-", "4", "="], "5"),
    (["50+10%="], "50.1"),
])
def test_keys(runner, args, expected):
    result = runner.invoke(cli, ["keys", *args])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == expected


@pytest.fixture
def root_log():
    """Root logger already set up at INFO, as an imported library might do."""
    root = logging.getLogger()
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    previous_level = root.level
    root.addHandler(handler)
    root.setLevel(logging.INFO)
    yield stream
    root.removeHandler(handler)
    root.setLevel(previous_level)
    logging.getLogger("calcpad").setLevel(logging.NOTSET)


def test_keys_log_level_holds_over_configured_root(runner, root_log):
    result = runner.invoke(cli, ["keys", "5/0="])
    assert result.stdout.strip() == "Error"
    assert "Calculator error" not in root_log.getvalue()

    result = runner.invoke(cli, ["--log-level", "INFO", "keys", "5/0="])
    assert result.stdout.strip().splitlines()[-1] == "Error"
    assert "Calculator error: division by zero" in root_log.getvalue()


def test_keys_trace(runner):
    result = runner.invoke(cli, ["keys", "--trace", "2*3="])
    assert result.exit_code == 0, result.output
    lines = [line.split() for line in result.output.strip().splitlines()]
    assert lines == [["2", "2"], ["*", "0"], ["3", "3"], ["=", "6"]]


def test_keys_max_digits(runner):
    result = runner.invoke(cli, ["keys", "--max-digits", "3", "12345"])
    assert result.output.strip() == "123"


def test_keys_reports_unknown_keys(runner):
    result = runner.invoke(cli, ["keys", "12q"])
    assert result.exit_code == 0
    assert "Ignoring unknown key: q" in result.output
    assert result.output.strip().splitlines()[-1] == "12"


def test_list_apps(runner):
    result = runner.invoke(cli, ["list-apps"])
    assert result.exit_code == 0
    assert "calculator" in result.output


def test_info(runner):
    result = runner.invoke(cli, ["info", "calculator"])
    assert result.exit_code == 0
    assert "Application: calculator" in result.output
    assert "q: Quit" in result.output


@pytest.mark.parametrize("command", ["info", "run"])
def test_unknown_app(runner, command):
    result = runner.invoke(cli, [command, "nope"])
    assert result.exit_code == 1
    assert "Unknown application: nope" in result.output


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_run_has_no_web_mode(runner):
    result = runner.invoke(cli, ["run", "--web"])
    assert result.exit_code == 2
    assert "No such option: --web" in result.output
