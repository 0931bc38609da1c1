from __future__ import annotations

from collections.abc import Sequence


def make_point_payload(
    package: str,
    *,
    downloads: int = 1234,
    start: str = "2023-05-15",
    end: str = "2023-05-21",
) -> dict[str, object]:
    return {
        "package": package,
        "downloads": downloads,
        "start": start,
        "end": end,
    }


def make_range_payload(
    package: str,
    *,
    days: Sequence[tuple[str, int]] | None = None,
    start: str = "2023-05-15",
    end: str = "2023-05-16",
) -> dict[str, object]:
    resolved_days = list(days) if days is not None else [("2023-05-15", 10), ("2023-05-16", 12)]
    return {
        "package": package,
        "start": start,
        "end": end,
        "downloads": [{"downloads": count, "day": day} for day, count in resolved_days],
    }


def package_from_path(path: str) -> str:
    # /{kind}/{when}/{package}; scoped packages contain one more slash
    return path.split("/", 3)[3]
