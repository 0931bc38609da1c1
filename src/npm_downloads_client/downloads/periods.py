"""Period descriptors and their resolution into concrete dates.

A period is exactly one of a server-side keyword (``last-day``, ...), a single
calendar day, or an inclusive date range. Week and month tokens resolve to a
:class:`DateRange`.
"""

from __future__ import annotations

import calendar
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum

from ..core.errors import FieldIssue, NpmInvalidPeriodError

_WEEK_TOKEN = re.compile(r"^(?:(?P<year>\d{4})-?W|W?)(?P<week>\d{1,2})$", re.IGNORECASE)
_MONTH_TOKEN = re.compile(r"^(?:(?P<year>\d{4})-)?(?P<month>\d{1,2})$")

DateLike = date | datetime | str


class PeriodKeyword(str, Enum):
    LAST_DAY = "last-day"
    LAST_WEEK = "last-week"
    LAST_MONTH = "last-month"


class StartOfWeek(str, Enum):
    MONDAY = "monday"
    SUNDAY = "sunday"

    @classmethod
    def coerce(cls, value: "StartOfWeek | str | None") -> "StartOfWeek":
        if value is None:
            return cls.MONDAY
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise _invalid("start_of_week", value, "'monday' or 'sunday'") from None


@dataclass(slots=True, frozen=True)
class SingleDate:
    day: date


@dataclass(slots=True, frozen=True)
class DateRange:
    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise NpmInvalidPeriodError(
                "end date must not precede start date",
                issues=[
                    FieldIssue(
                        path=("end",),
                        message="end date must not precede start date",
                        expected=f">= {self.start.isoformat()}",
                        received=self.end.isoformat(),
                    )
                ],
            )

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


Period = PeriodKeyword | SingleDate | DateRange


def _invalid(name: str, value: object, expected: str) -> NpmInvalidPeriodError:
    message = f"{name} {value!r} cannot be resolved to a date"
    return NpmInvalidPeriodError(
        message,
        issues=[FieldIssue(path=(name,), message=message, expected=expected, received=repr(value))],
    )


def parse_calendar_date(value: DateLike, *, name: str = "date") -> date:
    """Return the calendar day for a ``date``, ``datetime`` or ISO 8601 string."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            raise _invalid(name, value, "ISO 8601 date") from None
    raise _invalid(name, value, "date, datetime or ISO 8601 string")


def start_of_week(day: date, *, week_start: StartOfWeek = StartOfWeek.MONDAY) -> date:
    # date.weekday(): Monday == 0 ... Sunday == 6
    offset = day.weekday() if week_start is StartOfWeek.MONDAY else (day.weekday() + 1) % 7
    return day - timedelta(days=offset)


def resolve_week(
    token: DateLike,
    *,
    week_start: StartOfWeek | str | None = None,
    today: Callable[[], date] | None = None,
) -> DateRange:
    """Resolve a week token into the 7-day range that contains it.

    ``token`` is a date, an ISO date string, or a week number such as ``W20``,
    ``20``, ``2023W20`` or ``2023-W20``. Year-less week numbers use the current
    year. Week numbers are ISO weeks, whose Monday anchors the range.
    """

    boundary = StartOfWeek.coerce(week_start)
    if isinstance(token, str):
        match = _WEEK_TOKEN.match(token.strip())
        if match is not None:
            year = int(match["year"]) if match["year"] else (today or date.today)().year
            try:
                anchor = date.fromisocalendar(year, int(match["week"]), 1)
            except ValueError:
                raise _invalid("week", token, "week number 1-53 valid for the year") from None
        else:
            anchor = parse_calendar_date(token, name="week")
    else:
        anchor = parse_calendar_date(token, name="week")

    first = start_of_week(anchor, week_start=boundary)
    return DateRange(start=first, end=first + timedelta(days=6))


def resolve_month(
    token: DateLike,
    *,
    today: Callable[[], date] | None = None,
) -> DateRange:
    """Resolve ``YYYY-MM``, ``MM``, ``M`` or a date into that whole month."""

    if isinstance(token, (date, datetime)):
        year, month = token.year, token.month
    elif isinstance(token, str):
        match = _MONTH_TOKEN.match(token.strip())
        if match is None:
            raise _invalid("month", token, "YYYY-MM, MM or M")
        year = int(match["year"]) if match["year"] else (today or date.today)().year
        month = int(match["month"])
        if not 1 <= month <= 12 or year < 1:
            raise _invalid("month", token, "month number 1-12 in year 1 or later")
    else:
        raise _invalid("month", token, "YYYY-MM, MM, M or a date")

    last_day = calendar.monthrange(year, month)[1]
    return DateRange(start=date(year, month, 1), end=date(year, month, last_day))


def resolve_date_range(start: DateLike, end: DateLike) -> DateRange:
    return DateRange(
        start=parse_calendar_date(start, name="start"),
        end=parse_calendar_date(end, name="end"),
    )


def format_path_date(day: date) -> str:
    """Format a day the way the downloads API paths expect it (no zero padding)."""

    return f"{day.year}-{day.month}-{day.day}"


def format_period(period: Period) -> str:
    if isinstance(period, PeriodKeyword):
        return period.value
    if isinstance(period, SingleDate):
        return format_path_date(period.day)
    if isinstance(period, DateRange):
        return f"{format_path_date(period.start)}:{format_path_date(period.end)}"
    raise TypeError(f"unsupported period type: {type(period).__name__}")


__all__ = [
    "DateLike",
    "PeriodKeyword",
    "StartOfWeek",
    "SingleDate",
    "DateRange",
    "Period",
    "parse_calendar_date",
    "start_of_week",
    "resolve_week",
    "resolve_month",
    "resolve_date_range",
    "format_path_date",
    "format_period",
]
