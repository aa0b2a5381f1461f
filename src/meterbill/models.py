"""Data models for tariff periods and time windows."""

from dataclasses import dataclass

HOURS_PER_DAY = 24

# Period used for every hour of a bank holiday unless configured otherwise
DEFAULT_BANK_HOLIDAY_PERIOD = 3


@dataclass(frozen=True)
class TimeWindow:
    """An hourly range during which a tariff period applies.

    ``end`` is exclusive. An ``end`` lower than ``start`` wraps past midnight,
    e.g. ``TimeWindow(2, 22, 0)`` covers 22:00 to 00:00.
    """

    period: int
    start: int  # hour 0-23
    end: int  # hour 0-24, 24 = end of day

    def __post_init__(self):
        for name, hour, last in (
            ("start", self.start, HOURS_PER_DAY - 1),
            ("end", self.end, HOURS_PER_DAY),
        ):
            if not 0 <= hour <= last:
                raise ValueError(
                    f"time window {self.period}:{self.start}-{self.end} has an invalid "
                    f"{name} hour {hour}, it must be between 0 and {last}"
                )

    @property
    def wraps(self) -> bool:
        return self.end < self.start

    def hours(self) -> list[int]:
        """Hours covered by the window, in order, splitting it at midnight if it wraps."""
        if self.wraps:
            return list(range(self.start, HOURS_PER_DAY)) + list(range(0, self.end))
        return list(range(self.start, self.end))

    def __str__(self) -> str:
        return f"p{self.period}:{self.start}-{self.end}"


# Windows used by the electric companies for the three-period tariff
DEFAULT_TIME_WINDOWS: tuple[TimeWindow, ...] = (
    TimeWindow(1, 10, 14),
    TimeWindow(1, 18, 22),
    TimeWindow(2, 8, 10),
    TimeWindow(2, 14, 18),
    TimeWindow(2, 22, 0),
    TimeWindow(3, 0, 8),
)
