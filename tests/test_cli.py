"""Tests for the command-line interface."""

import pytest
from click.testing import CliRunner

from meterbill.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "readings.csv"
    path.write_text("CUPS;Fecha;Hora;AE_kWh\n")
    return str(path)


def test_show_default_windows(runner, csv_file):
    result = runner.invoke(cli, ["show", csv_file])
    assert result.exit_code == 0, result.output
    assert "Period Times" in result.output
    assert "22:00 - 24:00" in result.output
    assert "No bank holidays" in result.output


def test_show_with_holidays_and_counters(runner, csv_file):
    result = runner.invoke(
        cli,
        [
            "show",
            csv_file,
            "-d",
            "2022-12-25,26",
            "-d",
            "2022-12-25;2023-01-06",
            "-c",
            "p1=60,p2=3876",
            "-c",
            "p1=89",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "2022-12-25, 2022-12-26, 2023-01-06" in result.output
    assert "3876" in result.output
    assert "89" in result.output


def test_show_with_time_windows(runner, csv_file):
    result = runner.invoke(cli, ["show", csv_file, "-w", "p1:0-12", "-w", "p2:12-0"])
    assert result.exit_code == 0, result.output
    assert "00:00 - 12:00" in result.output
    assert "12:00 - 24:00" in result.output


@pytest.mark.parametrize(
    "args",
    [
        ["-d", "2022-09-31"],
        ["-d", "2022-12-25;26"],
        ["-d", "2022-12-25,"],
        ["-c", "p1="],
        ["-c", "p=187"],
        ["-c", "a1=187"],
        ["-c", "p1=18,15"],
        ["-w", "p1:10"],
        ["--holiday-period", "10"],
    ],
)
def test_show_rejects_invalid_options(runner, csv_file, args):
    result = runner.invoke(cli, ["show", csv_file, *args])
    assert result.exit_code == 2
    assert "Invalid value" in result.output


def test_show_requires_existing_csv(runner, tmp_path):
    result = runner.invoke(cli, ["show", str(tmp_path / "missing.csv")])
    assert result.exit_code == 2


def test_show_invalid_config(runner, csv_file, tmp_path):
    config_path = tmp_path / "bad.yaml"
    config_path.write_text("bank_holiday_period: 12\n")
    result = runner.invoke(cli, ["--config", str(config_path), "show", csv_file])
    assert result.exit_code == 1
    assert "single digit" in result.output


def test_period_on_regular_day(runner):
    result = runner.invoke(cli, ["period", "2022-12-24 13:00"])
    assert result.exit_code == 0, result.output
    assert "p1" in result.output


def test_period_on_bank_holiday(runner):
    result = runner.invoke(
        cli, ["period", "2022-12-25 13:00", "-d", "2022-12-25", "--holiday-period", "3"]
    )
    assert result.exit_code == 0, result.output
    assert "p3" in result.output
    assert "bank holiday" in result.output


def test_period_uses_config_holiday_period(runner, tmp_path):
    config_path = tmp_path / "tariff.yaml"
    config_path.write_text("bank_holiday_period: 2\n")
    result = runner.invoke(
        cli, ["--config", str(config_path), "period", "2022-12-25 03:00", "-d", "2022-12-25"]
    )
    assert result.exit_code == 0, result.output
    assert "p2" in result.output


def test_group_options_go_before_the_command(runner, csv_file, tmp_path):
    config_path = tmp_path / "tariff.yaml"
    config_path.write_text("time_windows: ['p4:0-24']\n")
    result = runner.invoke(cli, ["--config", str(config_path), "-v", "show", csv_file])
    assert result.exit_code == 0, result.output
    assert "p4" in result.output


def test_csv_path_requires_a_command(runner, csv_file):
    result = runner.invoke(cli, [csv_file])
    assert result.exit_code == 2
    assert "No such command" in result.output


def test_show_error_names_whole_option_value(runner, csv_file):
    result = runner.invoke(cli, ["show", csv_file, "-d", "2022-12-25;2022-09-31"])
    assert result.exit_code == 2
    assert "2022-12-25;2022-09-31" in result.output
