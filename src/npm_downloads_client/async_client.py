"""Public async client entrypoint."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import date
from types import TracebackType

from .client_shared import validate_client_config
from .config import NpmDownloadsClientConfig
from .core.async_transport import AsyncTransport
from .core.errors import NpmClientClosedError
from .downloads.async_service import AsyncDownloadsService
from .downloads.models import PointRecord, RangeRecord
from .downloads.periods import DateLike, PeriodKeyword, StartOfWeek
from .downloads.queries import DownloadsQuery
from .downloads.service_shared import (
    between_dates_query,
    day_query,
    keyword_query,
    month_query,
    week_query,
)


class AsyncDownloadsFacade:
    """Async counterpart of :class:`~npm_downloads_client.client.DownloadsFacade`."""

    def __init__(
        self,
        owner: "AsyncNpmDownloadsClient",
        delegate: AsyncDownloadsService,
        *,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._owner = owner
        self._delegate = delegate
        self._today = today

    async def get_point(self, query: DownloadsQuery) -> tuple[PointRecord, ...]:
        self._owner._ensure_open()
        return await self._delegate.get_point(query)

    async def get_range(self, query: DownloadsQuery) -> tuple[RangeRecord, ...]:
        self._owner._ensure_open()
        return await self._delegate.get_range(query)

    async def get_day(self, packages: Sequence[str], day: DateLike) -> tuple[PointRecord, ...]:
        return await self.get_point(day_query(packages, day))

    async def get_week(
        self,
        packages: Sequence[str],
        week: DateLike,
        *,
        start_of_week: StartOfWeek | str = StartOfWeek.MONDAY,
    ) -> tuple[PointRecord, ...]:
        return await self.get_point(
            week_query(packages, week, start_of_week=start_of_week, today=self._today)
        )

    async def get_month(self, packages: Sequence[str], month: DateLike) -> tuple[PointRecord, ...]:
        return await self.get_point(month_query(packages, month, today=self._today))

    async def get_between_dates(
        self,
        packages: Sequence[str],
        start: DateLike,
        end: DateLike,
    ) -> tuple[PointRecord, ...]:
        return await self.get_point(between_dates_query(packages, start, end))

    async def get_last_day(self, packages: Sequence[str]) -> tuple[PointRecord, ...]:
        return await self.get_point(keyword_query(packages, PeriodKeyword.LAST_DAY))

    async def get_last_week(self, packages: Sequence[str]) -> tuple[PointRecord, ...]:
        return await self.get_point(keyword_query(packages, PeriodKeyword.LAST_WEEK))

    async def get_last_month(self, packages: Sequence[str]) -> tuple[PointRecord, ...]:
        return await self.get_point(keyword_query(packages, PeriodKeyword.LAST_MONTH))

    async def get_daily_downloads_for_week(
        self,
        packages: Sequence[str],
        week: DateLike,
        *,
        start_of_week: StartOfWeek | str = StartOfWeek.MONDAY,
    ) -> tuple[RangeRecord, ...]:
        return await self.get_range(
            week_query(packages, week, start_of_week=start_of_week, today=self._today)
        )

    async def get_daily_downloads_for_month(
        self,
        packages: Sequence[str],
        month: DateLike,
    ) -> tuple[RangeRecord, ...]:
        return await self.get_range(month_query(packages, month, today=self._today))

    async def get_daily_downloads_between_dates(
        self,
        packages: Sequence[str],
        start: DateLike,
        end: DateLike,
    ) -> tuple[RangeRecord, ...]:
        return await self.get_range(between_dates_query(packages, start, end))

    async def get_daily_downloads_for_last_week(
        self,
        packages: Sequence[str],
    ) -> tuple[RangeRecord, ...]:
        return await self.get_range(keyword_query(packages, PeriodKeyword.LAST_WEEK))

    async def get_daily_downloads_for_last_month(
        self,
        packages: Sequence[str],
    ) -> tuple[RangeRecord, ...]:
        return await self.get_range(keyword_query(packages, PeriodKeyword.LAST_MONTH))


class AsyncNpmDownloadsClient:
    """Public async npm downloads API client."""

    def __init__(
        self,
        *,
        config: NpmDownloadsClientConfig | None = None,
        transport: AsyncTransport | None = None,
        downloads_service: AsyncDownloadsService | None = None,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._config = config or NpmDownloadsClientConfig()
        validate_client_config(self._config)

        self._transport = transport or AsyncTransport(self._config)
        internal_downloads = downloads_service or AsyncDownloadsService(self._transport)
        self._closed = False
        self.downloads = AsyncDownloadsFacade(self, internal_downloads, today=today)

    def _ensure_open(self) -> None:
        if self._closed:
            raise NpmClientClosedError("AsyncNpmDownloadsClient is already closed")

    async def close(self) -> None:
        if self._closed:
            return
        await self._transport.close()
        self._closed = True

    async def __aenter__(self) -> "AsyncNpmDownloadsClient":
        self._ensure_open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        await self.close()
        return False


__all__ = [
    "AsyncDownloadsFacade",
    "AsyncNpmDownloadsClient",
]
