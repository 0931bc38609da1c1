"""Downloads response models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class PointRecord:
    """Total downloads of one package over a period."""

    package: str
    downloads: int
    start: str
    end: str


@dataclass(slots=True, frozen=True)
class DailyDownloads:
    downloads: int
    day: str


@dataclass(slots=True, frozen=True)
class RangeRecord:
    """Per-day downloads of one package over a period."""

    package: str
    start: str
    end: str
    downloads: tuple[DailyDownloads, ...] | list[DailyDownloads] = ()

    def __post_init__(self) -> None:
        if isinstance(self.downloads, tuple):
            return
        object.__setattr__(self, "downloads", tuple(self.downloads))

    @property
    def total(self) -> int:
        return sum(item.downloads for item in self.downloads)


__all__ = [
    "PointRecord",
    "DailyDownloads",
    "RangeRecord",
]
