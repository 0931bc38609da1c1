"""Client configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

_SUPPORTED_PROTOCOLS = ("http", "https")


@dataclass(slots=True, frozen=True)
class TransportConfig:
    """Transport-related settings."""

    timeout_connect_seconds: float = 5.0
    timeout_read_seconds: float = 30.0
    timeout_write_seconds: float = 30.0
    timeout_pool_seconds: float = 5.0
    max_workers: int = 8

    def validate(self) -> None:
        for field_name in (
            "timeout_connect_seconds",
            "timeout_read_seconds",
            "timeout_write_seconds",
            "timeout_pool_seconds",
        ):
            if getattr(self, field_name) <= 0:
                raise ValueError(f"transport.{field_name} must be > 0")
        if self.max_workers < 1:
            raise ValueError("transport.max_workers must be >= 1")


@dataclass(slots=True, frozen=True)
class RetryConfig:
    """Retry-related settings.

    ``max_retries`` counts retries after the first attempt, so a request is
    sent at most ``max_retries + 1`` times.
    """

    max_retries: int = 3
    delay_seconds: float = 1.0

    def validate(self) -> None:
        if isinstance(self.max_retries, bool) or not isinstance(self.max_retries, int):
            raise ValueError("retry.max_retries must be int")
        if self.max_retries < 0:
            raise ValueError("retry.max_retries must be >= 0")
        if self.delay_seconds < 0:
            raise ValueError("retry.delay_seconds must be >= 0")


@dataclass(slots=True, frozen=True)
class NpmDownloadsClientConfig:
    """Runtime configuration for the npm downloads client."""

    protocol: str = "https"
    hostname: str = "api.npmjs.org"
    base_path: str = "/downloads"
    user_agent: str = "npm-downloads-client/0.1.0"

    transport: TransportConfig = field(default_factory=TransportConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)

    @property
    def origin(self) -> str:
        return f"{self.protocol}://{self.hostname}"

    def validate(self) -> None:
        if self.protocol not in _SUPPORTED_PROTOCOLS:
            raise ValueError("protocol must be 'http' or 'https'")
        if not self.hostname:
            raise ValueError("hostname must not be empty")
        if self.base_path and not self.base_path.startswith("/"):
            raise ValueError("base_path must be empty or start with '/'")
        if self.base_path.endswith("/"):
            raise ValueError("base_path must not end with '/'")
        self.transport.validate()
        self.retry.validate()


__all__ = [
    "TransportConfig",
    "RetryConfig",
    "NpmDownloadsClientConfig",
]
