"""Request and response shapes shared by every transport."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

Body = str | bytes


@dataclass(frozen=True)
class RequestParams:
    method: str
    url: str
    headers: Mapping[str, str] | None = None
    body: Body | None = None
    proxy: str | None = None

    @property
    def has_body(self) -> bool:
        # An empty string is still a body; only None means "no body".
        return self.body is not None

    @classmethod
    def coerce(cls, params: "RequestParams | Mapping[str, Any]") -> "RequestParams":
        if isinstance(params, RequestParams):
            return params
        return cls(
            method=str(params.get("method", "GET")),
            url=str(params["url"]),
            headers=params.get("headers"),
            body=params.get("body"),
            proxy=params.get("proxy"),
        )


@dataclass
class ResponseResult:
    headers: Mapping[str, str]
    status_code: int
    body: Any = field(default=None)


__all__ = ["Body", "RequestParams", "ResponseResult"]
