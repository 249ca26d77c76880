"""Tests for the httpx transport facade."""

import asyncio
import json

import httpx
import pytest

from macro_hunt.adapters.http_transport import HttpRequest, HttpxTransport
from macro_hunt.errors import (
    InvalidResponseError,
    InvalidURLError,
    NetworkError,
    RequestCancelledError,
)


def _transport(handler, **kwargs) -> HttpxTransport:  # type: ignore[no-untyped-def]
    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpxTransport(http_client=async_client, **kwargs)


def test_send_forwards_request_and_returns_raw_response() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(418, content=b"teapot")

    transport = _transport(handler)
    response = asyncio.run(
        transport.send(
            HttpRequest(
                method="POST",
                url="https://api.test/things",
                headers={"Authorization": "Bearer t"},
                body=json.dumps({"a": 1}).encode(),
                params={"pageId": "doc-1"},
            )
        )
    )

    assert response.status_code == 418
    assert response.body == b"teapot"
    assert seen[0].method == "POST"
    assert seen[0].headers["Authorization"] == "Bearer t"
    assert seen[0].url.params["pageId"] == "doc-1"
    assert json.loads(seen[0].content) == {"a": 1}


def test_send_waits_for_connectivity() -> None:
    attempts: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(1)
        if len(attempts) < 3:
            raise httpx.ConnectError("offline", request=request)
        return httpx.Response(200, content=b"back online")

    transport = _transport(handler, connectivity_poll_interval=0)
    response = asyncio.run(
        transport.send(HttpRequest(method="GET", url="https://api.test/"))
    )

    assert response.text == "back online"
    assert len(attempts) == 3


def test_send_gives_up_when_resource_deadline_passes() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    transport = _transport(
        handler, resource_timeout=0.05, connectivity_poll_interval=0.01
    )

    with pytest.raises(NetworkError) as excinfo:
        asyncio.run(transport.send(HttpRequest(method="GET", url="https://api.test/")))

    assert isinstance(excinfo.value.underlying, TimeoutError)


def test_read_timeout_is_a_network_error() -> None:
    calls: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        raise httpx.ReadTimeout("too slow", request=request)

    transport = _transport(handler)

    with pytest.raises(NetworkError) as excinfo:
        asyncio.run(transport.send(HttpRequest(method="GET", url="https://api.test/")))

    assert isinstance(excinfo.value.underlying, httpx.ReadTimeout)
    assert excinfo.value.is_retryable
    assert len(calls) == 1


def test_invalid_url_is_classified() -> None:
    transport = _transport(lambda request: httpx.Response(200))

    with pytest.raises(InvalidURLError):
        asyncio.run(
            transport.send(HttpRequest(method="GET", url="https://api.test/\x01"))
        )


def test_closed_transport_cancels_requests() -> None:
    transport = _transport(lambda request: httpx.Response(200))
    asyncio.run(transport.close())

    with pytest.raises(RequestCancelledError) as excinfo:
        asyncio.run(transport.send(HttpRequest(method="GET", url="https://api.test/")))

    assert not excinfo.value.is_retryable


def test_create_configures_request_timeout() -> None:
    transport = HttpxTransport.create(request_timeout=12, resource_timeout=34)

    assert transport.http_client.timeout.read == 12
    assert transport.resource_timeout == 34
    asyncio.run(transport.close())


def test_corrupt_encoded_body_is_invalid_response() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200, headers={"Content-Encoding": "gzip"}, content=b"not-gzip"
        )

    transport = _transport(handler)

    with pytest.raises(InvalidResponseError) as excinfo:
        asyncio.run(transport.send(HttpRequest(method="GET", url="https://api.test/")))

    assert isinstance(excinfo.value.__cause__, httpx.DecodingError)
    assert not excinfo.value.is_retryable


def test_too_many_redirects_is_a_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(302, headers={"Location": "https://api.test/loop"})

    transport = HttpxTransport(
        http_client=httpx.AsyncClient(
            transport=httpx.MockTransport(handler),
            follow_redirects=True,
            max_redirects=2,
        )
    )

    with pytest.raises(NetworkError) as excinfo:
        asyncio.run(transport.send(HttpRequest(method="GET", url="https://api.test/")))

    assert isinstance(excinfo.value.underlying, httpx.TooManyRedirects)
