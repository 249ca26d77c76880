"""Shared HTTP transport facade."""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from macro_hunt.errors import (
    InvalidResponseError,
    InvalidURLError,
    NetworkError,
    RequestCancelledError,
)

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpRequest:
    """Outbound request description."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None
    params: dict[str, str] | None = None


@dataclass(frozen=True)
class HttpResponse:
    """Raw status and body of a completed exchange."""

    status_code: int
    body: bytes

    @property
    def text(self) -> str:
        """Return the body decoded as UTF-8."""
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> object:
        """Parse the body as JSON."""
        return json.loads(self.body)


class Transport(Protocol):
    """Interface for sending a single HTTP request."""

    async def send(self, request: HttpRequest) -> HttpResponse:
        """Send the request and return the raw response."""


@dataclass
class HttpxTransport(Transport):
    """Transport backed by a shared httpx session.

    Every exchange is bounded by ``resource_timeout``. Connection failures are
    treated as a temporary loss of connectivity: the transport keeps trying to
    connect until the resource deadline passes instead of failing at once.
    """

    http_client: httpx.AsyncClient
    resource_timeout: float = 60.0
    connectivity_poll_interval: float = 1.0

    @classmethod
    def create(
        cls,
        request_timeout: float = 30.0,
        resource_timeout: float = 60.0,
        connectivity_poll_interval: float = 1.0,
    ) -> "HttpxTransport":
        """Create a transport with a managed httpx session."""
        return cls(
            http_client=httpx.AsyncClient(timeout=httpx.Timeout(request_timeout)),
            resource_timeout=resource_timeout,
            connectivity_poll_interval=connectivity_poll_interval,
        )

    async def send(self, request: HttpRequest) -> HttpResponse:
        """Send a request, waiting for connectivity within the deadline."""
        if self.http_client.is_closed:
            raise RequestCancelledError()
        try:
            async with asyncio.timeout(self.resource_timeout):
                return await self._send_when_connected(request)
        except TimeoutError as exc:
            raise NetworkError(
                TimeoutError(
                    f"No response within {self.resource_timeout:g}s for {request.url}"
                )
            ) from exc

    async def _send_when_connected(self, request: HttpRequest) -> HttpResponse:
        while True:
            try:
                response = await self.http_client.request(
                    request.method,
                    request.url,
                    headers=request.headers,
                    content=request.body,
                    params=request.params,
                )
            except httpx.ConnectError:
                _logger.info("Waiting for connectivity: %s", request.url)
                await asyncio.sleep(self.connectivity_poll_interval)
                continue
            except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
                raise InvalidURLError(request.url) from exc
            except httpx.DecodingError as exc:
                raise InvalidResponseError() from exc
            except httpx.RequestError as exc:
                raise NetworkError(exc) from exc
            return HttpResponse(status_code=response.status_code, body=response.content)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
