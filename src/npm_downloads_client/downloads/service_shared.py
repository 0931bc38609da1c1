"""Shared query construction for sync/async download services."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import date

from .periods import (
    DateLike,
    PeriodKeyword,
    SingleDate,
    StartOfWeek,
    parse_calendar_date,
    resolve_date_range,
    resolve_month,
    resolve_week,
)
from .queries import DownloadsQuery


def day_query(packages: Sequence[str], day: DateLike) -> DownloadsQuery:
    return DownloadsQuery(packages=packages, period=SingleDate(parse_calendar_date(day)))


def week_query(
    packages: Sequence[str],
    week: DateLike,
    *,
    start_of_week: StartOfWeek | str | None,
    today: Callable[[], date] | None,
) -> DownloadsQuery:
    return DownloadsQuery(
        packages=packages,
        period=resolve_week(week, week_start=start_of_week, today=today),
    )


def month_query(
    packages: Sequence[str],
    month: DateLike,
    *,
    today: Callable[[], date] | None,
) -> DownloadsQuery:
    return DownloadsQuery(packages=packages, period=resolve_month(month, today=today))


def between_dates_query(packages: Sequence[str], start: DateLike, end: DateLike) -> DownloadsQuery:
    return DownloadsQuery(packages=packages, period=resolve_date_range(start, end))


def keyword_query(packages: Sequence[str], keyword: PeriodKeyword) -> DownloadsQuery:
    return DownloadsQuery(packages=packages, period=keyword)


__all__ = [
    "day_query",
    "week_query",
    "month_query",
    "between_dates_query",
    "keyword_query",
]
