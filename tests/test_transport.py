import asyncio

import httpx
import pytest

from force_transport import (
    BaseTransport,
    ConnectionError,
    HttpError,
    ParseError,
    RequestCancelledError,
    RequestParams,
    ResponseResult,
    Transport,
)
from force_transport.transport.base import dispatch_request


@pytest.mark.asyncio
async def test_json_body_is_parsed(recorder) -> None:
    recorder.responder = lambda request: httpx.Response(200, json={"records": [1, 2]})
    transport = BaseTransport(http_transport=recorder.transport)

    result = await transport.http_request(RequestParams("GET", "https://api.example.com/data"))

    assert isinstance(result, ResponseResult)
    assert result.status_code == 200
    assert result.body == {"records": [1, 2]}
    assert result.headers["content-type"] == "application/json"


@pytest.mark.asyncio
async def test_non_json_body_is_returned_as_text(recorder) -> None:
    recorder.responder = lambda request: httpx.Response(
        200, text='{"looks": "like json"}', headers={"content-type": "text/plain"}
    )
    transport = BaseTransport(http_transport=recorder.transport)

    result = await transport.http_request({"method": "GET", "url": "https://api.example.com/plain"})

    assert result.body == '{"looks": "like json"}'


@pytest.mark.asyncio
async def test_error_status_rejects_without_parsing(recorder) -> None:
    recorder.responder = lambda request: httpx.Response(
        500, content=b"not json at all", headers={"content-type": "application/json"}
    )
    transport = BaseTransport(http_transport=recorder.transport)

    with pytest.raises(HttpError) as info:
        await transport.http_request(RequestParams("GET", "https://api.example.com/broken"))

    assert info.value.status_code == 500
    assert "Internal Server Error" in str(info.value)


@pytest.mark.asyncio
async def test_invalid_json_rejects_with_parse_error(recorder) -> None:
    recorder.responder = lambda request: httpx.Response(
        200, content=b"{oops", headers={"content-type": "application/json; charset=utf-8"}
    )
    transport = BaseTransport(http_transport=recorder.transport)

    with pytest.raises(ParseError):
        await transport.http_request(RequestParams("GET", "https://api.example.com/bad"))


@pytest.mark.asyncio
async def test_network_failure_rejects_with_connection_error(recorder) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    recorder.responder = refuse
    transport = BaseTransport(http_transport=recorder.transport)

    with pytest.raises(ConnectionError) as info:
        await transport.http_request(RequestParams("GET", "https://api.example.com/down"))

    assert isinstance(info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_request_is_sent_exactly_once(recorder) -> None:
    transport = BaseTransport(http_transport=recorder.transport)
    promise = transport.http_request(RequestParams("GET", "https://api.example.com/once"))

    task = promise.stream()
    first = promise.then(lambda result: result.status_code)
    second = promise.then(lambda result: result.body).then(lambda body: body["ok"])

    assert isinstance(task, asyncio.Task)
    assert first.stream() is task
    assert second.stream() is task
    assert await first == 200
    assert await second is True
    assert (await promise).status_code == 200
    assert len(recorder.requests) == 1


@pytest.mark.asyncio
async def test_nothing_is_sent_until_consumed(recorder) -> None:
    transport = BaseTransport(http_transport=recorder.transport)
    promise = transport.http_request(RequestParams("GET", "https://api.example.com/lazy"))

    await asyncio.sleep(0.01)
    assert recorder.requests == []

    await promise
    assert len(recorder.requests) == 1


@pytest.mark.asyncio
async def test_callback_receives_result(recorder) -> None:
    transport = BaseTransport(http_transport=recorder.transport)
    seen: asyncio.Future = asyncio.get_running_loop().create_future()

    promise = transport.http_request(
        RequestParams("GET", "https://api.example.com/cb"),
        lambda err, result: seen.set_result((err, result)),
    )

    err, result = await seen
    assert err is None
    assert result.body == {"ok": True}
    assert (await promise) is result


@pytest.mark.asyncio
async def test_callback_receives_error(recorder) -> None:
    recorder.responder = lambda request: httpx.Response(404)
    transport = BaseTransport(http_transport=recorder.transport)
    seen: asyncio.Future = asyncio.get_running_loop().create_future()

    transport.http_request(
        RequestParams("GET", "https://api.example.com/missing"),
        lambda err, result: seen.set_result((err, result)),
    )

    err, result = await seen
    assert isinstance(err, HttpError)
    assert err.status_code == 404
    assert result is None


@pytest.mark.asyncio
async def test_cancelling_the_stream_rejects_the_promise(recorder) -> None:
    transport = BaseTransport(http_transport=recorder.transport)
    promise = transport.http_request(RequestParams("GET", "https://api.example.com/slow"))

    promise.stream().cancel()

    with pytest.raises(RequestCancelledError):
        await promise
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_method_headers_and_empty_body_are_forwarded(recorder) -> None:
    transport = BaseTransport(http_transport=recorder.transport)

    await transport.http_request(
        RequestParams(
            "POST",
            "https://api.example.com/items",
            headers={"X-Test": "1"},
            body="",
        )
    )

    sent = recorder.requests[0]
    assert sent.method == "POST"
    assert sent.headers["x-test"] == "1"
    assert sent.content == b""


@pytest.mark.asyncio
async def test_dispatch_request_uses_the_given_request_module() -> None:
    sent: list[RequestParams] = []

    async def request_module(params: RequestParams) -> httpx.Response:
        sent.append(params)
        return httpx.Response(201, text="created")

    params = RequestParams("PUT", "https://api.example.com/thing", body=b"data")
    result = await dispatch_request(params, request_module)

    assert sent == [params]
    assert result.status_code == 201
    assert result.body == "created"


def test_base_transport_kind() -> None:
    transport: Transport = BaseTransport()
    assert transport.kind == "base"
