"""Sync HTTP transport with bounded retry and status evaluation."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
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


class SyncTransportClient(Protocol):
    def request(self, method: str, url: str, *, content: bytes | str | None = None) -> object: ...
    def close(self) -> None: ...


class SyncTransport:
    """Synchronous transport for the npm downloads API.

    A single instance may be shared by several threads: retry state lives on
    the stack of each :meth:`request` call.
    """

    def __init__(
        self,
        config: NpmDownloadsClientConfig,
        *,
        client: SyncTransportClient | None = None,
        sleeper: Callable[[float], None] | None = None,
    ) -> None:
        self._config = config
        self._sleep = sleeper or time.sleep
        self._closed = False

        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=config.origin,
            headers=build_default_headers(config),
            timeout=build_default_timeout(config),
        )

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client and hasattr(self._client, "close"):
            self._client.close()

    def request(self, request: ApiRequest | None = None) -> object:
        if self._closed:
            raise NpmTransportError("transport is already closed")

        request = request or ApiRequest()
        target = build_target(self._config, request)
        state = RetryState.start(self._config.retry)

        while True:
            logger.debug("request start target=%s attempt=%s", target, state.attempts)
            try:
                response = self._client.request(
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
                    self._sleep(state.delay_seconds)
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


__all__ = [
    "SyncTransport",
]
