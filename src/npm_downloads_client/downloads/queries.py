"""Query models."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum

from .periods import DateRange, Period, PeriodKeyword, SingleDate


class RequestKind(str, Enum):
    """Which downloads endpoint to call: a total (point) or per-day (range)."""

    POINT = "point"
    RANGE = "range"


@dataclass(slots=True, frozen=True)
class DownloadsQuery:
    packages: Sequence[str]
    period: Period

    def __post_init__(self) -> None:
        if isinstance(self.packages, str):
            raise TypeError("packages must be a sequence of str, not str")
        if not isinstance(self.packages, Sequence):
            raise TypeError("packages must be Sequence[str]")
        normalized: list[str] = []
        for package in self.packages:
            if not isinstance(package, str):
                raise TypeError("packages entries must be str")
            normalized.append(package)
        object.__setattr__(self, "packages", tuple(normalized))
        if not isinstance(self.period, (PeriodKeyword, SingleDate, DateRange)):
            raise TypeError("period must be PeriodKeyword | SingleDate | DateRange")

    def with_packages(self, packages: Sequence[str]) -> "DownloadsQuery":
        return replace(self, packages=tuple(packages))


__all__ = [
    "RequestKind",
    "DownloadsQuery",
]
