"""Public client entrypoint."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import date
from types import TracebackType

from .client_shared import validate_client_config
from .config import NpmDownloadsClientConfig
from .core.errors import NpmClientClosedError
from .core.transport import SyncTransport
from .downloads.models import PointRecord, RangeRecord
from .downloads.periods import DateLike, PeriodKeyword, StartOfWeek
from .downloads.queries import DownloadsQuery
from .downloads.service import DownloadsService
from .downloads.service_shared import (
    between_dates_query,
    day_query,
    keyword_query,
    month_query,
    week_query,
)


class DownloadsFacade:
    """Download count lookups, one record per requested package.

    Point lookups return the total for the period, the ``get_daily_downloads_*``
    lookups return per-day counts. Any failure while fetching or validating
    surfaces as :class:`~npm_downloads_client.core.errors.NpmDownloadsError`
    with the original error as ``__cause__``. Unresolvable dates and bad
    package names raise a validation error before any request is sent.
    """

    def __init__(
        self,
        owner: "NpmDownloadsClient",
        delegate: DownloadsService,
        *,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._owner = owner
        self._delegate = delegate
        self._today = today

    def get_point(self, query: DownloadsQuery) -> tuple[PointRecord, ...]:
        self._owner._ensure_open()
        return self._delegate.get_point(query)

    def get_range(self, query: DownloadsQuery) -> tuple[RangeRecord, ...]:
        self._owner._ensure_open()
        return self._delegate.get_range(query)

    def get_day(self, packages: Sequence[str], day: DateLike) -> tuple[PointRecord, ...]:
        return self.get_point(day_query(packages, day))

    def get_week(
        self,
        packages: Sequence[str],
        week: DateLike,
        *,
        start_of_week: StartOfWeek | str = StartOfWeek.MONDAY,
    ) -> tuple[PointRecord, ...]:
        return self.get_point(
            week_query(packages, week, start_of_week=start_of_week, today=self._today)
        )

    def get_month(self, packages: Sequence[str], month: DateLike) -> tuple[PointRecord, ...]:
        return self.get_point(month_query(packages, month, today=self._today))

    def get_between_dates(
        self,
        packages: Sequence[str],
        start: DateLike,
        end: DateLike,
    ) -> tuple[PointRecord, ...]:
        return self.get_point(between_dates_query(packages, start, end))

    def get_last_day(self, packages: Sequence[str]) -> tuple[PointRecord, ...]:
        return self.get_point(keyword_query(packages, PeriodKeyword.LAST_DAY))

    def get_last_week(self, packages: Sequence[str]) -> tuple[PointRecord, ...]:
        return self.get_point(keyword_query(packages, PeriodKeyword.LAST_WEEK))

    def get_last_month(self, packages: Sequence[str]) -> tuple[PointRecord, ...]:
        return self.get_point(keyword_query(packages, PeriodKeyword.LAST_MONTH))

    def get_daily_downloads_for_week(
        self,
        packages: Sequence[str],
        week: DateLike,
        *,
        start_of_week: StartOfWeek | str = StartOfWeek.MONDAY,
    ) -> tuple[RangeRecord, ...]:
        return self.get_range(
            week_query(packages, week, start_of_week=start_of_week, today=self._today)
        )

    def get_daily_downloads_for_month(
        self,
        packages: Sequence[str],
        month: DateLike,
    ) -> tuple[RangeRecord, ...]:
        return self.get_range(month_query(packages, month, today=self._today))

    def get_daily_downloads_between_dates(
        self,
        packages: Sequence[str],
        start: DateLike,
        end: DateLike,
    ) -> tuple[RangeRecord, ...]:
        return self.get_range(between_dates_query(packages, start, end))

    def get_daily_downloads_for_last_week(self, packages: Sequence[str]) -> tuple[RangeRecord, ...]:
        return self.get_range(keyword_query(packages, PeriodKeyword.LAST_WEEK))

    def get_daily_downloads_for_last_month(self, packages: Sequence[str]) -> tuple[RangeRecord, ...]:
        return self.get_range(keyword_query(packages, PeriodKeyword.LAST_MONTH))


class NpmDownloadsClient:
    """Public npm downloads API client.

    >>> with NpmDownloadsClient() as client:
    ...     client.downloads.get_week(["left-pad"], "2023W20")  # doctest: +SKIP
    """

    def __init__(
        self,
        *,
        config: NpmDownloadsClientConfig | None = None,
        transport: SyncTransport | None = None,
        downloads_service: DownloadsService | None = None,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._config = config or NpmDownloadsClientConfig()
        validate_client_config(self._config)

        self._transport = transport or SyncTransport(self._config)
        internal_downloads = downloads_service or DownloadsService(
            self._transport,
            max_workers=self._config.transport.max_workers,
        )
        self._closed = False
        self.downloads = DownloadsFacade(self, internal_downloads, today=today)

    def _ensure_open(self) -> None:
        if self._closed:
            raise NpmClientClosedError("NpmDownloadsClient is already closed")

    def close(self) -> None:
        if self._closed:
            return
        self._transport.close()
        self._closed = True

    def __enter__(self) -> "NpmDownloadsClient":
        self._ensure_open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.close()
        return False


__all__ = [
    "DownloadsFacade",
    "NpmDownloadsClient",
]
