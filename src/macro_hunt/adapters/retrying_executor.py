"""Bounded retry with exponential backoff around the HTTP transport."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from macro_hunt.adapters.http_transport import HttpRequest, HttpResponse, Transport
from macro_hunt.errors import (
    APIError,
    HTTPStatusError,
    NetworkError,
    RateLimitedError,
    ServerError,
)

_logger = logging.getLogger(__name__)

HTTP_TOO_MANY_REQUESTS = 429


@dataclass
class RetryingExecutor:
    """Execute requests, retrying rate limits, server errors and network errors.

    Attempt ``n`` (zero based) that fails with a retryable condition is followed
    by a sleep of ``base_delay * 2**n`` seconds, unless it was the last attempt.
    Every other status fails on the first response.
    """

    transport: Transport
    max_attempts: int = 3
    base_delay: float = 1.0
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep)

    async def execute(self, request: HttpRequest) -> HttpResponse:
        """Send a request and return the first 2xx response."""
        for attempt in range(self.max_attempts):
            is_last = attempt == self.max_attempts - 1
            try:
                response = await self.transport.send(request)
            except NetworkError as exc:
                if is_last:
                    raise
                await self._backoff(request, attempt, exc)
                continue

            error = classify_status(response)
            if error is None:
                return response
            if not error.is_retryable or is_last:
                raise error
            await self._backoff(request, attempt, error)

        raise ValueError("max_attempts must be at least 1")

    async def _backoff(
        self, request: HttpRequest, attempt: int, error: APIError
    ) -> None:
        delay = self.base_delay * (2**attempt)
        _logger.warning(
            "Retrying %s %s in %.1fs (attempt %s/%s): %s",
            request.method,
            request.url,
            delay,
            attempt + 1,
            self.max_attempts,
            error.description,
        )
        await self.sleep(delay)


def classify_status(response: HttpResponse) -> APIError | None:
    """Map a response status to an error, or None for 2xx."""
    status = response.status_code
    if 200 <= status < 300:  # noqa: PLR2004
        return None
    if status == HTTP_TOO_MANY_REQUESTS:
        return RateLimitedError(response.text)
    if 500 <= status < 600:  # noqa: PLR2004
        return ServerError(status, response.text)
    return HTTPStatusError(status, response.text)
