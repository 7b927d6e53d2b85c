"""Interfaces a request mechanism has to satisfy."""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from ..types import RequestParams


@runtime_checkable
class RawResponse(Protocol):
    """The subset of ``httpx.Response`` the dispatcher relies on."""

    @property
    def status_code(self) -> int: ...

    @property
    def headers(self) -> Mapping[str, str]: ...

    @property
    def reason_phrase(self) -> str: ...

    @property
    def is_success(self) -> bool: ...

    @property
    def text(self) -> str: ...

    def json(self, **kwargs: Any) -> Any: ...

    async def aread(self) -> bytes: ...


@runtime_checkable
class HttpRequestModule(Protocol):
    async def __call__(self, params: RequestParams) -> RawResponse: ...


__all__ = ["HttpRequestModule", "RawResponse"]
