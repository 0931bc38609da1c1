"""Shared response parsing helpers for sync/async transports."""

from __future__ import annotations

from typing import Protocol

from .errors import NpmNonJSONResponseError


class JsonPayloadResponse(Protocol):
    def json(self) -> object: ...


def parse_json_payload(
    response: JsonPayloadResponse,
    *,
    http_status: int | None,
) -> object:
    """Parse response JSON payload and map parse failures to domain errors."""

    try:
        return response.json()
    except ValueError as exc:
        raise NpmNonJSONResponseError(http_status=http_status) from exc


__all__ = [
    "parse_json_payload",
]
