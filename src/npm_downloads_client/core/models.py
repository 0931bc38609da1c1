"""Core request models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(slots=True, frozen=True)
class ApiRequest:
    path: str = ""
    method: str = "GET"
    query_params: Mapping[str, object] = field(default_factory=dict)
    body: bytes | str | None = None

    def __post_init__(self) -> None:
        if self.path and not self.path.startswith("/"):
            raise ValueError("path must be empty or start with '/'")
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "query_params", MappingProxyType(dict(self.query_params)))


__all__ = [
    "ApiRequest",
]
