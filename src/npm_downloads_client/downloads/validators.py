"""Input validation and normalization."""

from __future__ import annotations

from collections.abc import Iterable

from ..core.errors import FieldIssue, NpmValidationError
from .queries import DownloadsQuery

_FORBIDDEN_CHARS = set(' <>"\\?#%')


def _dedupe_keep_order(values: Iterable[str]) -> tuple[str, ...]:
    seen: set[str] = set()
    out: list[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            out.append(value)
    return tuple(out)


def _package_issue(index: int, value: str) -> FieldIssue | None:
    if value == "":
        return FieldIssue(
            path=("packages", index),
            message="package name is required",
            expected="non-empty string",
            received=repr(value),
        )
    if any(ch in _FORBIDDEN_CHARS for ch in value):
        return FieldIssue(
            path=("packages", index),
            message="package name contains forbidden characters",
            expected="npm package name",
            received=repr(value),
        )
    return None


def normalize_downloads_query(query: DownloadsQuery) -> DownloadsQuery:
    if not query.packages:
        raise NpmValidationError(
            "packages must not be empty",
            issues=[FieldIssue(path=("packages",), message="packages must not be empty")],
            cause="validation",
        )
    cleaned = [package.strip() for package in query.packages]
    issues = [
        issue
        for index, package in enumerate(cleaned)
        if (issue := _package_issue(index, package)) is not None
    ]
    if issues:
        raise NpmValidationError("packages contain invalid names", issues=issues, cause="validation")
    return query.with_packages(_dedupe_keep_order(cleaned))


__all__ = [
    "normalize_downloads_query",
]
