"""Downloads service package."""

from .models import DailyDownloads, PointRecord, RangeRecord
from .periods import DateRange, PeriodKeyword, SingleDate, StartOfWeek
from .queries import DownloadsQuery, RequestKind

__all__ = [
    "DownloadsQuery",
    "RequestKind",
    "PeriodKeyword",
    "SingleDate",
    "DateRange",
    "StartOfWeek",
    "PointRecord",
    "RangeRecord",
    "DailyDownloads",
]
