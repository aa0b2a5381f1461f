"""Parsers for the bank holiday and meter counter command-line notations.

Bank holidays are one or more dates separated by ``;``. A date may list more
days of the same year and month separated by ``,``:

    2022-12-25
    2022-12-25,26
    2022-12-25,26;2023-01-06

Meter counters are ``p<digit>=<unsigned integer>`` pairs separated by ``,``:

    p1=97
    p1=97,p3=23

Repeated dates or periods don't produce an error; they are returned as many
times as they appear and it's up to the caller to deduplicate them.
"""

from datetime import date, datetime

DATE_SEPARATOR = ";"
DAY_SEPARATOR = ","
COUNTER_SEPARATOR = ","
PERIOD_PREFIX = "p"


class ParseError(ValueError):
    """Base exception for invalid bank holiday, counter or time window notations.

    ``raw`` is the offending part of ``text``, the whole input that was parsed.
    """

    def __init__(self, message: str, raw: str, text: str | None = None):
        super().__init__(message)
        self.raw = raw
        self.text = raw if text is None else text


class MalformedShapeError(ParseError):
    """A unit doesn't have the expected number of separators."""


class InvalidCalendarDateError(ParseError):
    """A date isn't of the format yyyy-mm-dd or doesn't exist."""


class InvalidPeriodNameError(ParseError):
    """A period name isn't of the format p<digit>."""


class InvalidCounterValueError(ParseError):
    """A counter value isn't an unsigned integer."""


class InvalidHourError(ParseError):
    """An hour isn't an integer between 0 and 24."""


class EmptyUnitError(ParseError):
    """A list contains an empty element, e.g. a double or trailing separator."""


def _is_number(s: str, width: int | None = None) -> bool:
    if not (s.isascii() and s.isdigit()):
        return False
    return width is None or len(s) == width


def _validate_date(raw: str, text: str) -> date:
    year, month, day = raw.split("-")
    if not (_is_number(year, 4) and _is_number(month, 2) and _is_number(day, 2)):
        raise InvalidCalendarDateError(
            f'invalid date "{raw}" in "{text}", it isn\'t of the format "yyyy-mm-dd"',
            raw,
            text,
        )

    try:
        return datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError as e:
        raise InvalidCalendarDateError(
            f'invalid date "{raw}" in "{text}", it isn\'t a valid calendar date: {e}',
            raw,
            text,
        ) from e


def parse_date_multiple_days(s: str, text: str | None = None) -> list[date]:
    """Parse a date that may contain more than one day of the same year and month.

    Format expressed in a regular expression is:
    ^[\\d]{4}-[\\d]{2}-[\\d]{2}(,[\\d]{2})*$

    ``text`` is the whole input ``s`` was taken from, reported in the errors.
    Returns the dates in the same order as they appear, repeated ones included.
    """
    text = s if text is None else text
    fields = [f.strip() for f in s.split(DAY_SEPARATOR)]
    for field in fields:
        if not field:
            raise EmptyUnitError(
                f'invalid date "{s}" in "{text}", it contains an empty day', field, text
            )

    first = fields[0]
    parts = first.split("-")
    if len(parts) != 3:
        raise MalformedShapeError(
            f'invalid date "{s}" in "{text}", part "{first}" contains an invalid '
            "number of '-'",
            first,
            text,
        )

    year_month = f"{parts[0]}-{parts[1]}"
    dates = [_validate_date(first, text)]
    for day in fields[1:]:
        if "-" in day:
            raise MalformedShapeError(
                f'invalid date "{s}" in "{text}", day "{day}" must be only the day of '
                f'the month "{year_month}"',
                day,
                text,
            )
        dates.append(_validate_date(f"{year_month}-{day}", text))

    return dates


def parse_date_list(s: str) -> list[date]:
    """Parse one or more dates separated by ';', each one with optional extra days.

    Examples:

    - 2022-12-25
    - 2022-12-25,26
    - 2022-12-25,26;2023-01-06
    """
    dates = []
    for unit in s.split(DATE_SEPARATOR):
        if not unit.strip():
            raise EmptyUnitError(
                f'invalid dates "{s}", it contains an empty date', unit, s
            )
        dates.extend(parse_date_multiple_days(unit.strip(), s))
    return dates


def parse_period_name(name: str, s: str | None = None, text: str | None = None) -> int:
    """Parse a period's name of the format 'p<single digit number>'.

    ``s`` is the unit the name belongs to and ``text`` the whole input, both
    reported in the errors.
    """
    s = name if s is None else s
    text = s if text is None else text
    where = f'"{s}"' if s == text else f'"{s}" in "{text}"'
    if len(name) != 2:
        raise InvalidPeriodNameError(
            f"invalid period {where}, it doesn't have a valid period's name \"{name}\". "
            "It isn't of the format 'p<single digit number>'",
            name,
            text,
        )
    if not name.startswith(PERIOD_PREFIX):
        raise InvalidPeriodNameError(
            f"invalid period {where}, it doesn't have a valid period's name \"{name}\". "
            f"It doesn't start with '{PERIOD_PREFIX}'",
            name,
            text,
        )
    if not _is_number(name[1]):
        raise InvalidPeriodNameError(
            f"invalid period {where}, it doesn't have a valid period's name \"{name}\". "
            f"It doesn't have a digit after '{PERIOD_PREFIX}'",
            name,
            text,
        )
    return int(name[1])


def parse_meter_counter(s: str, text: str | None = None) -> tuple[int, int]:
    """Parse a meter counter.

    Format expressed in a regular expression is: ^p[\\d]=[\\d]+$

    ``text`` is the whole input ``s`` was taken from, reported in the errors.

    Example: p1=97 -> (1, 97)
    """
    text = s if text is None else text
    where = f'"{s}"' if s == text else f'"{s}" in "{text}"'
    name, sep, value = s.partition("=")
    if not sep:
        raise MalformedShapeError(
            f"invalid period {where}, it doesn't have an '='", s, text
        )

    period = parse_period_name(name, s, text)

    if not _is_number(value):
        raise InvalidCounterValueError(
            f"invalid period {where}, it doesn't have a valid period's value \"{value}\". "
            "It isn't an unsigned integer",
            value,
            text,
        )

    return period, int(value)


def parse_counter_list(s: str) -> list[tuple[int, int]]:
    """Parse meter counters separated by ','.

    Examples:

    - p1=97
    - p3=10,p1=9 -> [(3, 10), (1, 9)]
    """
    counters = []
    for pair in s.split(COUNTER_SEPARATOR):
        pair = pair.strip()
        if not pair:
            raise EmptyUnitError(
                f'invalid periods "{s}", it contains an empty period', pair, s
            )
        counters.append(parse_meter_counter(pair, s))
    return counters
