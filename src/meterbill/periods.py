"""Hour to tariff period indexing."""

from typing import Iterable

from .models import HOURS_PER_DAY, TimeWindow
from .parsers import (
    EmptyUnitError,
    InvalidHourError,
    MalformedShapeError,
    parse_period_name,
)

# Period of the hours not covered by any time window
UNASSIGNED_PERIOD = 0

WindowLike = TimeWindow | tuple[int, int, int]


def to_time_window(window: WindowLike) -> TimeWindow:
    if isinstance(window, TimeWindow):
        return window
    period, start, end = window
    return TimeWindow(period, start, end)


def build_period_time_table(windows: Iterable[WindowLike]) -> tuple[int, ...]:
    """Index the period applied on each hour of the day.

    Windows are applied in order, so when they overlap the last one wins.
    A window whose end is lower than its start is split into [start, 24)
    and [0, end). Hours not covered by any window get UNASSIGNED_PERIOD.
    """
    table = [UNASSIGNED_PERIOD] * HOURS_PER_DAY
    for window in windows:
        window = to_time_window(window)
        for hour in window.hours():
            table[hour] = window.period
    return tuple(table)


def _parse_hour(value: str, s: str) -> int:
    value = value.strip()
    if not (value.isascii() and value.isdigit()) or int(value) > HOURS_PER_DAY:
        raise InvalidHourError(
            f'invalid time window "{s}", hour "{value}" isn\'t an integer between '
            f"0 and {HOURS_PER_DAY}",
            value,
            s,
        )
    return int(value)


def parse_time_window(s: str) -> TimeWindow:
    """Parse a time window of the format 'p<digit>:<start hour>-<end hour>'.

    Examples:

    - p1:10-14
    - p2:22-0 (wraps past midnight)
    """
    s = s.strip()
    if not s:
        raise EmptyUnitError("invalid time window, it's empty", s, s)

    name, sep, hours = s.partition(":")
    if not sep:
        raise MalformedShapeError(
            f'invalid time window "{s}", it doesn\'t have a \':\'', s, s
        )

    period = parse_period_name(name.strip(), s)

    start, sep, end = hours.partition("-")
    if not sep:
        raise MalformedShapeError(
            f'invalid time window "{s}", hours "{hours}" don\'t have a \'-\'', hours, s
        )

    start_hour = _parse_hour(start, s)
    if start_hour == HOURS_PER_DAY:
        raise InvalidHourError(
            f'invalid time window "{s}", start hour must be lower than {HOURS_PER_DAY}',
            start.strip(),
            s,
        )
    return TimeWindow(period, start_hour, _parse_hour(end, s))


def format_period_time_table(table: Iterable[int]) -> list[tuple[int, int, int]]:
    """Collapse a period table into (period, start, end) runs of consecutive hours."""
    runs: list[tuple[int, int, int]] = []
    for hour, period in enumerate(table):
        if runs and runs[-1][0] == period and runs[-1][2] == hour:
            runs[-1] = (period, runs[-1][1], hour + 1)
        else:
            runs.append((period, hour, hour + 1))
    return runs
