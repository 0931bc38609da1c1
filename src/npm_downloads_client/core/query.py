"""Query string serialization."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime, timezone
from urllib.parse import quote


def _serialize_value(key: str, value: object) -> str:
    # bool is an int subclass and has no agreed wire form.
    if isinstance(value, bool):
        raise TypeError(f"query parameter {key!r} has unsupported type bool")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        # 1e16 -> "10000000000000000", not "1e+16"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, str):
        return quote(value, safe="")
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"query parameter {key!r} has unsupported type {type(value).__name__}")


def serialize_query_params(params: Mapping[str, object]) -> str:
    """Serialize ``params`` into a query string without the leading ``?``.

    ``None`` values are skipped, ints keep full precision, integral floats are
    written as plain integers and other floats in ``repr`` form. Strings are
    percent-encoded and dates become ``YYYY-MM-DD``.
    """

    pairs: list[str] = []
    for key, value in params.items():
        if value is None:
            continue
        pairs.append(f"{quote(str(key), safe='')}={_serialize_value(key, value)}")
    return "&".join(pairs)


def build_request_target(base_path: str, path: str, params: Mapping[str, object]) -> str:
    query = serialize_query_params(params)
    target = f"{base_path}{path}"
    if query:
        return f"{target}?{query}"
    return target


__all__ = [
    "serialize_query_params",
    "build_request_target",
]
