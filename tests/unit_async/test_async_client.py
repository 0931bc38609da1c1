from __future__ import annotations

import asyncio
from datetime import date

import pytest

from npm_downloads_client.async_client import AsyncNpmDownloadsClient
from npm_downloads_client.core.errors import (
    NpmClientClosedError,
    NpmDownloadsError,
    NpmInvalidPeriodError,
    NpmMaxRetriesExceededError,
    NpmResponseValidationError,
)
from npm_downloads_client.downloads.models import PointRecord, RangeRecord
from tests.shared.client_fakes import RecordingAsyncTransport, point_responder, range_responder
from tests.shared.payloads import make_point_payload, package_from_path

LOGGER = "@aws-lambda-powertools/logger"
TRACER = "@aws-lambda-powertools/tracer"
METRICS = "@aws-lambda-powertools/metrics"


@pytest.mark.asyncio
async def test_async_client_context_manager_closes_transport():
    transport = RecordingAsyncTransport()
    async with AsyncNpmDownloadsClient(transport=transport) as client:
        assert client is not None
    assert transport.closed is True


@pytest.mark.asyncio
async def test_async_client_raises_when_used_after_close():
    transport = RecordingAsyncTransport()
    client = AsyncNpmDownloadsClient(transport=transport)
    await client.close()
    with pytest.raises(NpmClientClosedError):
        await client.downloads.get_last_week([LOGGER])


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("method", "kwargs", "expected_path"),
    [
        ("get_day", {"day": "2023-05-15"}, f"/point/2023-5-15/{LOGGER}"),
        ("get_week", {"week": "W20"}, f"/point/2023-5-15:2023-5-21/{LOGGER}"),
        ("get_week", {"week": "2023W20", "start_of_week": "sunday"}, f"/point/2023-5-14:2023-5-20/{LOGGER}"),
        ("get_month", {"month": "2023-01"}, f"/point/2023-1-1:2023-1-31/{LOGGER}"),
        ("get_between_dates", {"start": "2023-05-01", "end": "2023-05-15"}, f"/point/2023-5-1:2023-5-15/{LOGGER}"),
        ("get_last_day", {}, f"/point/last-day/{LOGGER}"),
        ("get_last_week", {}, f"/point/last-week/{LOGGER}"),
        ("get_last_month", {}, f"/point/last-month/{LOGGER}"),
    ],
)
async def test_async_point_operations(method, kwargs, expected_path, today_2023):
    transport = RecordingAsyncTransport(point_responder)
    async with AsyncNpmDownloadsClient(transport=transport, today=today_2023) as client:
        records = await getattr(client.downloads, method)([LOGGER], **kwargs)

    assert transport.paths == [expected_path]
    assert isinstance(records[0], PointRecord)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("method", "kwargs", "expected_path"),
    [
        ("get_daily_downloads_for_week", {"week": date(2023, 5, 15)}, f"/range/2023-5-15:2023-5-21/{LOGGER}"),
        ("get_daily_downloads_for_month", {"month": "1"}, f"/range/2023-1-1:2023-1-31/{LOGGER}"),
        ("get_daily_downloads_between_dates", {"start": "2023-05-01", "end": "2023-05-03"}, f"/range/2023-5-1:2023-5-3/{LOGGER}"),
        ("get_daily_downloads_for_last_week", {}, f"/range/last-week/{LOGGER}"),
        ("get_daily_downloads_for_last_month", {}, f"/range/last-month/{LOGGER}"),
    ],
)
async def test_async_range_operations(method, kwargs, expected_path, today_2023):
    transport = RecordingAsyncTransport(range_responder)
    async with AsyncNpmDownloadsClient(transport=transport, today=today_2023) as client:
        records = await getattr(client.downloads, method)([LOGGER], **kwargs)

    assert transport.paths == [expected_path]
    assert isinstance(records[0], RangeRecord)


@pytest.mark.asyncio
async def test_async_multiple_packages_are_fetched_concurrently():
    transport = RecordingAsyncTransport(point_responder)
    async with AsyncNpmDownloadsClient(transport=transport) as client:
        records = await client.downloads.get_last_day([LOGGER, TRACER, METRICS])

    assert transport.max_in_flight == 3
    assert {record.package for record in records} == {LOGGER, TRACER, METRICS}
    assert [record.package for record in records] == [LOGGER, TRACER, METRICS]


@pytest.mark.asyncio
async def test_async_validation_failure_is_wrapped():
    def responder(path: str) -> object:
        payload = make_point_payload(package_from_path(path))
        del payload["package"]
        return payload

    async with AsyncNpmDownloadsClient(transport=RecordingAsyncTransport(responder)) as client:
        with pytest.raises(NpmDownloadsError, match="Unable to get downloads stats from the npm API") as excinfo:
            await client.downloads.get_day([LOGGER], date(2023, 5, 15))

    assert isinstance(excinfo.value.__cause__, NpmResponseValidationError)


@pytest.mark.asyncio
async def test_async_one_failure_fails_whole_call():
    def responder(path: str) -> object:
        if path.endswith(TRACER):
            return NpmMaxRetriesExceededError(attempts=4, http_status=503)
        return make_point_payload(package_from_path(path))

    async with AsyncNpmDownloadsClient(transport=RecordingAsyncTransport(responder)) as client:
        with pytest.raises(NpmDownloadsError) as excinfo:
            await client.downloads.get_last_month([LOGGER, TRACER])

    assert isinstance(excinfo.value.__cause__, NpmMaxRetriesExceededError)
    assert excinfo.value.cause == "retries_exhausted"


@pytest.mark.asyncio
async def test_async_failure_cancels_pending_requests():
    finished: list[str] = []

    class _SlowTransport(RecordingAsyncTransport):
        async def request(self, request):
            if request.path.endswith(LOGGER):
                raise NpmResponseValidationError([])
            await asyncio.sleep(10)
            finished.append(request.path)
            return make_point_payload(package_from_path(request.path))

    async with AsyncNpmDownloadsClient(transport=_SlowTransport()) as client:
        with pytest.raises(NpmDownloadsError):
            await asyncio.wait_for(client.downloads.get_last_day([LOGGER, TRACER]), timeout=5)

    assert finished == []


@pytest.mark.asyncio
async def test_async_invalid_month_is_not_wrapped():
    transport = RecordingAsyncTransport()
    async with AsyncNpmDownloadsClient(transport=transport) as client:
        with pytest.raises(NpmInvalidPeriodError):
            await client.downloads.get_month([LOGGER], "2023-13")
    assert transport.requests == []
