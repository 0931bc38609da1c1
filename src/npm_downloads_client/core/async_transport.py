"""Async HTTP transport with bounded retry and status evaluation."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

import httpx

from ..config import NpmDownloadsClientConfig
from .errors import NpmMaxRetriesExceededError, NpmStatusError, NpmTransportError
from .models import ApiRequest
from .response_parsing import parse_json_payload
from .retry import RetryState, is_retryable_status, is_success_status
from .transport_shared import (
    build_default_headers,
    build_default_timeout,
    build_target,
    make_server_error,
)

logger = logging.getLogger("npm_downloads_client")


class AsyncTransportClient(Protocol):
    async def request(self, method: str, url: str, *, content: bytes | str | None = None) -> object: ...
    async def aclose(self) -> None: ...


class AsyncTransport:
    """Asynchronous transport for the npm downloads API."""

    def __init__(
        self,
        config: NpmDownloadsClientConfig,
        *,
        client: AsyncTransportClient | None = None,
        sleeper: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        self._config = config
        self._sleep = sleeper or _default_sleep
        self._closed = False

        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=config.origin,
            headers=build_default_headers(config),
            timeout=build_default_timeout(config),
        )

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client and hasattr(self._client, "aclose"):
            await self._client.aclose()

    async def request(self, request: ApiRequest | None = None) -> object:
        if self._closed:
            raise NpmTransportError("transport is already closed")

        request = request or ApiRequest()
        target = build_target(self._config, request)
        state = RetryState.start(self._config.retry)

        while True:
            logger.debug("request start target=%s attempt=%s", target, state.attempts)
            try:
                response = await self._client.request(
                    request.method,
                    target,
                    content=request.body,
                )
            except httpx.HTTPError as exc:
                logger.error(
                    "request network error target=%s attempt=%s error=%s",
                    target,
                    state.attempts,
                    exc.__class__.__name__,
                )
                raise NpmTransportError("network/transport error", cause="network") from exc

            http_status = getattr(response, "status_code", None)
            logger.debug(
                "response received target=%s attempt=%s http_status=%s",
                target,
                state.attempts,
                http_status,
            )
            if is_success_status(http_status):
                payload = parse_json_payload(response, http_status=http_status)
                logger.info("request success target=%s attempt=%s", target, state.attempts)
                return payload

            if is_retryable_status(http_status):
                transient = make_server_error(http_status)
                if state.can_retry():
                    logger.warning(
                        "request transient failure; retrying target=%s attempt=%s status=%s",
                        target,
                        state.attempts,
                        http_status,
                    )
                    await self._sleep(state.delay_seconds)
                    state = state.next_attempt()
                    continue
                logger.error(
                    "request failed; max retries exceeded target=%s attempts=%s status=%s",
                    target,
                    state.attempts,
                    http_status,
                )
                raise NpmMaxRetriesExceededError(
                    attempts=state.attempts,
                    http_status=http_status,
                ) from transient

            logger.error(
                "request failed target=%s attempt=%s status=%s",
                target,
                state.attempts,
                http_status,
            )
            raise NpmStatusError(http_status)


async def _default_sleep(seconds: float) -> None:
    await asyncio.sleep(seconds)


__all__ = [
    "AsyncTransport",
]
