"""Error taxonomy shared by the HTTP clients and the sync orchestrator."""


class APIError(Exception):
    """Base class for classified request failures."""

    retryable = False

    @property
    def description(self) -> str:
        """Short human-readable description of the failure."""
        return "Request failed"

    @property
    def is_retryable(self) -> bool:
        """Return True when repeating the request may succeed."""
        return self.retryable

    def __str__(self) -> str:
        return self.description


class InvalidURLError(APIError):
    """The request URL could not be built or is not supported."""

    def __init__(self, url: str) -> None:
        super().__init__(url)
        self.url = url

    @property
    def description(self) -> str:
        return f"Invalid URL: {self.url}"


class InvalidResponseError(APIError):
    """The server answered with something that is not a usable response."""

    @property
    def description(self) -> str:
        return "Invalid response from server"


class HTTPStatusError(APIError):
    """Non-retryable HTTP status with the response body attached."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(status_code, body)
        self.status_code = status_code
        self.body = body

    @property
    def description(self) -> str:
        return f"HTTP {self.status_code}: {self.body[:100]}"


class NetworkError(APIError):
    """Transport-level failure such as DNS, connect, TLS or timeout."""

    retryable = True

    def __init__(self, underlying: BaseException) -> None:
        super().__init__(underlying)
        self.underlying = underlying

    @property
    def description(self) -> str:
        detail = str(self.underlying) or type(self.underlying).__name__
        return f"Network error: {detail}"


class DecodingError(APIError):
    """A response body could not be parsed into the expected shape."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    @property
    def description(self) -> str:
        return f"Failed to parse response: {self.detail}"


class NoDataError(APIError):
    """The server returned success without a body."""

    @property
    def description(self) -> str:
        return "No data received"


class EmptyResponseError(APIError):
    """The response parsed but did not contain the expected identifier."""

    @property
    def description(self) -> str:
        return "Empty response from server"


class RateLimitedError(APIError):
    """HTTP 429 from the upstream service."""

    retryable = True

    def __init__(self, body: str = "") -> None:
        super().__init__(body)
        self.status_code = 429
        self.body = body

    @property
    def description(self) -> str:
        return "Rate limited. Please try again later."


class ServerError(APIError):
    """HTTP 5xx from the upstream service."""

    retryable = True

    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(status_code, body)
        self.status_code = status_code
        self.body = body

    @property
    def description(self) -> str:
        return f"Server error ({self.status_code}). Please try again."


class RequestCancelledError(APIError):
    """The request was abandoned before it completed."""

    @property
    def description(self) -> str:
        return "Request was cancelled"
