"""Public package exports for the npm downloads API client."""

from .async_client import AsyncNpmDownloadsClient
from .client import NpmDownloadsClient
from .config import NpmDownloadsClientConfig

__all__ = ["NpmDownloadsClient", "AsyncNpmDownloadsClient", "NpmDownloadsClientConfig"]
