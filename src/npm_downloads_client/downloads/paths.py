"""Request path builders for the downloads endpoints."""

from __future__ import annotations

from .periods import format_period
from .queries import DownloadsQuery, RequestKind


def build_request_path(kind: RequestKind, when: str, package: str) -> str:
    return f"/{kind.value}/{when}/{package}"


def build_request_paths(query: DownloadsQuery, kind: RequestKind) -> tuple[str, ...]:
    """One path per package, all sharing the period segment."""

    when = format_period(query.period)
    return tuple(build_request_path(kind, when, package) for package in query.packages)


__all__ = [
    "build_request_path",
    "build_request_paths",
]
