"""Configuration loading for the tariff time windows."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import yaml
from dotenv import load_dotenv

from .models import DEFAULT_BANK_HOLIDAY_PERIOD, DEFAULT_TIME_WINDOWS, TimeWindow
from .periods import parse_time_window

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "METERBILL_CONFIG"


class ConfigError(Exception):
    """Invalid configuration file contents."""
    pass


@dataclass
class Settings:
    """Tariff settings used to build the registry."""

    time_windows: tuple[TimeWindow, ...] = DEFAULT_TIME_WINDOWS
    bank_holiday_period: int = DEFAULT_BANK_HOLIDAY_PERIOD
    source: Path | None = None  # None = built-in defaults


def get_config_path() -> Path | None:
    """Find the meterbill.yaml config file, if there's any."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        if not path.exists():
            raise ConfigError(f"{CONFIG_ENV_VAR} points to a missing file: {path}")
        return path

    candidates = [
        Path.cwd() / "config" / "meterbill.yaml",
        Path.home() / ".config" / "meterbill" / "meterbill.yaml",
    ]
    for path in candidates:
        if path.exists():
            return path
    return None


def _parse_window(entry, index: int) -> TimeWindow:
    if isinstance(entry, str):
        return parse_time_window(entry)
    if not isinstance(entry, dict):
        raise ConfigError(
            f"time_windows[{index}] must be a mapping or a 'p<digit>:<start>-<end>' string"
        )

    values = []
    for key in ("period", "start", "end"):
        if key not in entry:
            raise ConfigError(f"time_windows[{index}] is missing '{key}'")
        value = entry[key]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(
                f"time_windows[{index}] {key} must be an integer, got {value!r}"
            )
        values.append(value)

    try:
        return TimeWindow(*values)
    except ValueError as e:
        raise ConfigError(f"time_windows[{index}] is invalid: {e}") from e


def parse_settings(data: dict | None, source: Path | None = None) -> Settings:
    """Build the settings from the loaded YAML document."""
    data = data or {}
    if not isinstance(data, dict):
        raise ConfigError(f"config {source} must be a mapping")

    settings = Settings(source=source)

    if data.get("time_windows") is not None:
        windows = data["time_windows"]
        if not isinstance(windows, list):
            raise ConfigError("time_windows must be a list")
        settings.time_windows = tuple(
            _parse_window(entry, i) for i, entry in enumerate(windows)
        )

    if data.get("bank_holiday_period") is not None:
        period = data["bank_holiday_period"]
        if isinstance(period, bool) or not isinstance(period, int) or not 0 <= period <= 9:
            raise ConfigError(
                f"bank_holiday_period must be a single digit number, got {period!r}"
            )
        settings.bank_holiday_period = period

    return settings


def load_settings(config_path: Path | None = None) -> Settings:
    """Load the settings from a YAML config file, or the defaults if there isn't any."""
    path = config_path or get_config_path()
    if path is None:
        logger.debug("No config file found, using the default time windows")
        return Settings()

    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in {path}: {e}") from e

    logger.debug("Loaded config from %s", path)
    return parse_settings(data, path)
