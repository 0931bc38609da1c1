"""Sync fan-out of downloads requests across packages."""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import TypeVar

from ..core.errors import NpmDownloadsError
from ..core.models import ApiRequest
from ..core.transport import SyncTransport
from .models import PointRecord, RangeRecord
from .parser import parse_point_record, parse_range_record
from .paths import build_request_paths
from .queries import DownloadsQuery, RequestKind
from .validators import normalize_downloads_query

logger = logging.getLogger("npm_downloads_client")

RecordT = TypeVar("RecordT", PointRecord, RangeRecord)


def _first_failure(futures: list[Future]) -> BaseException | None:
    for future in futures:
        if future.done() and not future.cancelled() and future.exception() is not None:
            return future.exception()
    return None


class DownloadsService:
    """Fetch one record per package on a thread pool; the first failure fails the call."""

    def __init__(self, transport: SyncTransport, *, max_workers: int = 8) -> None:
        self._transport = transport
        self._max_workers = max_workers

    def get_point(self, query: DownloadsQuery) -> tuple[PointRecord, ...]:
        return self._fetch_all(query, RequestKind.POINT, parse_point_record)

    def get_range(self, query: DownloadsQuery) -> tuple[RangeRecord, ...]:
        return self._fetch_all(query, RequestKind.RANGE, parse_range_record)

    def _fetch_one(self, path: str, parse: Callable[[object], RecordT]) -> RecordT:
        payload = self._transport.request(ApiRequest(path=path))
        return parse(payload)

    def _fetch_all(
        self,
        query: DownloadsQuery,
        kind: RequestKind,
        parse: Callable[[object], RecordT],
    ) -> tuple[RecordT, ...]:
        normalized = normalize_downloads_query(query)
        paths = build_request_paths(normalized, kind)
        logger.info("downloads start kind=%s packages=%s", kind.value, len(paths))

        pool = ThreadPoolExecutor(
            max_workers=min(self._max_workers, len(paths)),
            thread_name_prefix="npm-downloads",
        )
        try:
            futures = [pool.submit(self._fetch_one, path, parse) for path in paths]
            wait(futures, return_when=FIRST_EXCEPTION)
            error = _first_failure(futures)
        except BaseException:
            pool.shutdown(wait=False, cancel_futures=True)
            raise

        if error is not None:
            # Siblings still in flight are abandoned; their results are discarded.
            pool.shutdown(wait=False, cancel_futures=True)
            logger.error(
                "downloads failed kind=%s error=%s",
                kind.value,
                error.__class__.__name__,
            )
            raise NpmDownloadsError(error) from error

        pool.shutdown(wait=True)
        logger.info("downloads success kind=%s packages=%s", kind.value, len(paths))
        return tuple(future.result() for future in futures)


__all__ = [
    "DownloadsService",
]
