"""Parsers from downloads API JSON payloads into typed records.

Every field is checked before failing so that the raised
:class:`NpmResponseValidationError` lists all offending fields at once.
Unknown keys are ignored.
"""

from __future__ import annotations

from collections.abc import Mapping

from ..core.errors import FieldIssue, NpmResponseValidationError
from .models import DailyDownloads, PointRecord, RangeRecord
from .queries import RequestKind

Path = tuple[str | int, ...]

_MISSING = object()


def _json_type_name(value: object) -> str:
    if value is _MISSING:
        return "missing"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _type_issue(path: Path, expected: str, value: object) -> FieldIssue:
    received = _json_type_name(value)
    if value is _MISSING:
        message = "Required"
    else:
        message = f"Expected {expected}, received {received}"
    return FieldIssue(path=path, message=message, expected=expected, received=received)


def _as_object(raw: object, path: Path, issues: list[FieldIssue]) -> Mapping[str, object] | None:
    if isinstance(raw, Mapping):
        return raw
    issues.append(_type_issue(path, "object", raw))
    return None


def _read_string(obj: Mapping[str, object], key: str, path: Path, issues: list[FieldIssue]) -> str:
    value = obj.get(key, _MISSING)
    if isinstance(value, str):
        return value
    issues.append(_type_issue((*path, key), "string", value))
    return ""


def _read_count(obj: Mapping[str, object], key: str, path: Path, issues: list[FieldIssue]) -> int:
    value = obj.get(key, _MISSING)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, float):
        issues.append(
            FieldIssue(
                path=(*path, key),
                message="Expected integer, received float",
                expected="integer",
                received="number",
            )
        )
        return 0
    issues.append(_type_issue((*path, key), "number", value))
    return 0


def _parse_daily(raw: object, path: Path, issues: list[FieldIssue]) -> DailyDownloads | None:
    obj = _as_object(raw, path, issues)
    if obj is None:
        return None
    return DailyDownloads(
        downloads=_read_count(obj, "downloads", path, issues),
        day=_read_string(obj, "day", path, issues),
    )


def parse_point_record(raw: object) -> PointRecord:
    issues: list[FieldIssue] = []
    obj = _as_object(raw, (), issues)
    if obj is None:
        raise NpmResponseValidationError(issues)

    record = PointRecord(
        package=_read_string(obj, "package", (), issues),
        downloads=_read_count(obj, "downloads", (), issues),
        start=_read_string(obj, "start", (), issues),
        end=_read_string(obj, "end", (), issues),
    )
    if issues:
        raise NpmResponseValidationError(issues)
    return record


def parse_range_record(raw: object) -> RangeRecord:
    issues: list[FieldIssue] = []
    obj = _as_object(raw, (), issues)
    if obj is None:
        raise NpmResponseValidationError(issues)

    package = _read_string(obj, "package", (), issues)
    start = _read_string(obj, "start", (), issues)
    end = _read_string(obj, "end", (), issues)

    daily: list[DailyDownloads] = []
    raw_downloads = obj.get("downloads", _MISSING)
    if isinstance(raw_downloads, list):
        for index, item in enumerate(raw_downloads):
            parsed = _parse_daily(item, ("downloads", index), issues)
            if parsed is not None:
                daily.append(parsed)
    else:
        issues.append(_type_issue(("downloads",), "array", raw_downloads))

    if issues:
        raise NpmResponseValidationError(issues)
    return RangeRecord(package=package, start=start, end=end, downloads=daily)


def parse_record(raw: object, kind: RequestKind) -> PointRecord | RangeRecord:
    if kind is RequestKind.POINT:
        return parse_point_record(raw)
    return parse_range_record(raw)


__all__ = [
    "parse_point_record",
    "parse_range_record",
    "parse_record",
]
