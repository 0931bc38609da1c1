"""Shared helpers for sync/async client bootstrap."""

from __future__ import annotations

from .config import NpmDownloadsClientConfig
from .core.errors import NpmValidationError


def validate_client_config(config: NpmDownloadsClientConfig) -> None:
    try:
        config.validate()
    except ValueError as exc:
        raise NpmValidationError(str(exc), cause="validation") from exc


__all__ = [
    "validate_client_config",
]
