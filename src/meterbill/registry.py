"""Registry of the bank holidays, base meter counters and period times of a tariff."""

import logging
from datetime import date, datetime
from types import MappingProxyType
from typing import Iterable, Mapping

from .models import DEFAULT_BANK_HOLIDAY_PERIOD, DEFAULT_TIME_WINDOWS, HOURS_PER_DAY
from .parsers import parse_counter_list, parse_date_list
from .periods import UNASSIGNED_PERIOD, WindowLike, build_period_time_table

logger = logging.getLogger(__name__)


class TariffRegistry:
    """Lookup structures used to allocate meter readings to tariff periods.

    The period times are indexed once from ``time_windows``; bank holidays and
    base counters are added afterwards through ``add_bank_holidays`` and
    ``add_counters``.
    """

    def __init__(
        self,
        time_windows: Iterable[WindowLike] = DEFAULT_TIME_WINDOWS,
        bank_holiday_period: int = DEFAULT_BANK_HOLIDAY_PERIOD,
    ):
        self._bank_holidays: set[date] = set()
        self._bank_holiday_period = bank_holiday_period
        self._counters: dict[int, int] = {}
        self._period_times = build_period_time_table(time_windows)

    @property
    def bank_holidays(self) -> frozenset[date]:
        return frozenset(self._bank_holidays)

    @property
    def bank_holiday_period(self) -> int:
        return self._bank_holiday_period

    @property
    def counters(self) -> Mapping[int, int]:
        return MappingProxyType(self._counters)

    @property
    def period_times(self) -> tuple[int, ...]:
        return self._period_times

    @property
    def periods(self) -> list[int]:
        """Distinct periods assigned to at least one hour, unassigned hours excluded."""
        return sorted(set(self._period_times) - {UNASSIGNED_PERIOD})

    def add_bank_holidays(self, dates: str | Iterable[str | date]) -> None:
        """Register the dates to apply the bank holidays period on them.

        Elements are date lists such as "2022-12-25,26;2023-01-06" or already
        parsed dates; a single date list string is accepted too. Duplicated
        dates, or dates already registered, are ignored. An invalid element
        raises its ParseError; the elements before it stay registered.
        """
        if isinstance(dates, str):
            dates = [dates]
        for raw in dates:
            if isinstance(raw, str):
                days = parse_date_list(raw)
            elif isinstance(raw, datetime):
                days = [raw.date()]
            elif isinstance(raw, date):
                days = [raw]
            else:
                raise TypeError(
                    f"bank holidays must be date list strings or dates, got {raw!r}"
                )
            self._bank_holidays.update(days)
            logger.debug("Registered bank holidays %s from %r", days, raw)

    def add_counters(self, counters: str | Iterable[str | tuple[int, int]]) -> None:
        """Register the base meter counter of each period.

        Elements are counter lists such as "p1=97,p3=23" or already parsed
        (period, counter) pairs; a single counter list string is accepted too.
        If a period appears more than once, or is already registered, the last
        value is kept.
        """
        if isinstance(counters, str):
            counters = [counters]
        for raw in counters:
            pairs = parse_counter_list(raw) if isinstance(raw, str) else [raw]
            for period, counter in pairs:
                if counter < 0:
                    raise ValueError(
                        f"invalid counter {counter} for period {period}, "
                        "it isn't an unsigned integer"
                    )
                previous = self._counters.get(period)
                self._counters[period] = counter
                if previous is not None and previous != counter:
                    logger.debug(
                        "Base counter of period p%d updated from %d to %d",
                        period,
                        previous,
                        counter,
                    )

    def is_bank_holiday(self, day: date) -> bool:
        if isinstance(day, datetime):
            day = day.date()
        return day in self._bank_holidays

    def counter_for(self, period: int) -> int:
        """Base counter of a period; periods without one start from 0."""
        return self._counters.get(period, 0)

    def period_for(self, day: date, hour: int) -> int:
        """Period applied at an hour of a day."""
        if not 0 <= hour < HOURS_PER_DAY:
            raise ValueError(f"invalid hour {hour}, it must be between 0 and 23")
        if self.is_bank_holiday(day):
            return self._bank_holiday_period
        return self._period_times[hour]
