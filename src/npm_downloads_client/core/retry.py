"""Retry helpers."""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..config import RetryConfig

RETRYABLE_STATUS_CODES = frozenset({500, 502, 503, 504})


def is_retryable_status(status: int | None) -> bool:
    return status in RETRYABLE_STATUS_CODES


def is_success_status(status: int | None) -> bool:
    return status is not None and 200 <= status < 300


@dataclass(slots=True, frozen=True)
class RetryState:
    """Retry bookkeeping for one logical request.

    A fresh state is created per call and replaced (never mutated) after each
    retry, so concurrent requests never share a counter.
    """

    retries_so_far: int
    max_retries: int
    delay_seconds: float

    @classmethod
    def start(cls, config: RetryConfig) -> "RetryState":
        return cls(
            retries_so_far=0,
            max_retries=config.max_retries,
            delay_seconds=config.delay_seconds,
        )

    @property
    def attempts(self) -> int:
        return self.retries_so_far + 1

    def can_retry(self) -> bool:
        return self.retries_so_far < self.max_retries

    def next_attempt(self) -> "RetryState":
        return replace(self, retries_so_far=self.retries_so_far + 1)


__all__ = [
    "RETRYABLE_STATUS_CODES",
    "is_retryable_status",
    "is_success_status",
    "RetryState",
]
