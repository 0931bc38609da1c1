"""Shared helpers for sync/async transport implementations."""

from __future__ import annotations

from collections.abc import Mapping

import httpx

from ..config import NpmDownloadsClientConfig
from .errors import NpmServerError
from .models import ApiRequest
from .query import build_request_target


def build_default_headers(config: NpmDownloadsClientConfig) -> Mapping[str, str]:
    return {
        "Accept": "application/json",
        "User-Agent": config.user_agent,
    }


def build_default_timeout(config: NpmDownloadsClientConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.transport.timeout_connect_seconds,
        read=config.transport.timeout_read_seconds,
        write=config.transport.timeout_write_seconds,
        pool=config.transport.timeout_pool_seconds,
    )


def build_target(config: NpmDownloadsClientConfig, request: ApiRequest) -> str:
    return build_request_target(config.base_path, request.path, request.query_params)


def make_server_error(http_status: int) -> NpmServerError:
    return NpmServerError(
        f"API endpoint returned status code {http_status}",
        http_status=http_status,
        cause="server_transient",
    )


__all__ = [
    "build_default_headers",
    "build_default_timeout",
    "build_target",
    "make_server_error",
]
