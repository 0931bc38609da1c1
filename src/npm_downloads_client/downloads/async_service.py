"""Async fan-out of downloads requests across packages."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TypeVar

from ..core.async_transport import AsyncTransport
from ..core.errors import NpmDownloadsError
from ..core.models import ApiRequest
from .models import PointRecord, RangeRecord
from .parser import parse_point_record, parse_range_record
from .paths import build_request_paths
from .queries import DownloadsQuery, RequestKind
from .validators import normalize_downloads_query

logger = logging.getLogger("npm_downloads_client")

RecordT = TypeVar("RecordT", PointRecord, RangeRecord)


class AsyncDownloadsService:
    """Fetch one record per package in a task group; the first failure cancels the rest."""

    def __init__(self, transport: AsyncTransport) -> None:
        self._transport = transport

    async def get_point(self, query: DownloadsQuery) -> tuple[PointRecord, ...]:
        return await self._fetch_all(query, RequestKind.POINT, parse_point_record)

    async def get_range(self, query: DownloadsQuery) -> tuple[RangeRecord, ...]:
        return await self._fetch_all(query, RequestKind.RANGE, parse_range_record)

    async def _fetch_one(self, path: str, parse: Callable[[object], RecordT]) -> RecordT:
        payload = await self._transport.request(ApiRequest(path=path))
        return parse(payload)

    async def _fetch_all(
        self,
        query: DownloadsQuery,
        kind: RequestKind,
        parse: Callable[[object], RecordT],
    ) -> tuple[RecordT, ...]:
        normalized = normalize_downloads_query(query)
        paths = build_request_paths(normalized, kind)
        logger.info("downloads start kind=%s packages=%s", kind.value, len(paths))

        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(self._fetch_one(path, parse)) for path in paths]
        except ExceptionGroup as group_error:
            error = group_error.exceptions[0]
            logger.error(
                "downloads failed kind=%s error=%s",
                kind.value,
                error.__class__.__name__,
            )
            raise NpmDownloadsError(error) from error

        logger.info("downloads success kind=%s packages=%s", kind.value, len(paths))
        return tuple(task.result() for task in tasks)


__all__ = [
    "AsyncDownloadsService",
]
