"""HTTP transport for the release API.

This module provides:
- HttpClient: Protocol for the two POST shapes the API needs (injectable for tests)
- RealHttpClient: Real implementation using httpx
- MockHttpClient: Recording implementation for testing
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import httpx

from grel import __version__
from grel.core.config import DEFAULT_HTTP_TIMEOUT_SECONDS
from grel.core.result import Err, Ok, Result

__all__ = [
    "ApiResponse",
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
    "RecordedRequest",
    "UploadFile",
]


@dataclass(frozen=True, slots=True)
class ApiResponse:
    """Any HTTP answer, successful or not.

    Attributes:
        status: HTTP status code
        reason: Reason phrase (e.g. "Unauthorized")
        text: Response body decoded as text
    """

    status: int
    reason: str
    text: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    @property
    def status_line(self) -> str:
        return f"{self.status} {self.reason}".rstrip()


@dataclass(frozen=True, slots=True)
class HttpError:
    """No usable HTTP answer: connection, timeout, or body read failure.

    Attributes:
        url: The URL that failed
        message: Human-readable error message
    """

    url: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} ({self.url})"


@dataclass(frozen=True, slots=True)
class UploadFile:
    """A file part of a multipart body."""

    field_name: str
    filename: str
    content: bytes = field(repr=False)
    content_type: str = "application/octet-stream"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for release API requests.

    Injecting a client keeps publisher tests free of real network calls.
    """

    def post_json(
        self,
        url: str,
        payload: dict[str, object],
        headers: dict[str, str],
    ) -> Result[ApiResponse, HttpError]:
        """POST a JSON body."""
        ...

    def post_multipart(
        self,
        url: str,
        fields: dict[str, str],
        file: UploadFile,
        headers: dict[str, str],
    ) -> Result[ApiResponse, HttpError]:
        """POST a multipart form with text fields and one file."""
        ...


class RealHttpClient:
    """HTTP client backed by ``httpx.Client``.

    Handles:
    - HTTPS with system certificates
    - Timeout handling
    - Mapping every transport failure onto HttpError
    """

    def __init__(
        self,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        user_agent: str = f"grel/{__version__}",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize HTTP client.

        Args:
            timeout: Request timeout in seconds
            user_agent: User-Agent header value
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self._client = httpx.Client(
            timeout=timeout,
            headers={"User-Agent": user_agent},
            transport=transport,
        )

    def __enter__(self) -> RealHttpClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def post_json(
        self,
        url: str,
        payload: dict[str, object],
        headers: dict[str, str],
    ) -> Result[ApiResponse, HttpError]:
        try:
            response = self._client.post(url, json=payload, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return Err(HttpError(url=url, message=_describe(e)))
        return Ok(_to_api_response(response))

    def post_multipart(
        self,
        url: str,
        fields: dict[str, str],
        file: UploadFile,
        headers: dict[str, str],
    ) -> Result[ApiResponse, HttpError]:
        files = {file.field_name: (file.filename, file.content, file.content_type)}
        try:
            response = self._client.post(url, data=fields, files=files, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return Err(HttpError(url=url, message=_describe(e)))
        return Ok(_to_api_response(response))


def _describe(e: Exception) -> str:
    if isinstance(e, httpx.TimeoutException):
        return "Request timed out"
    return str(e) or type(e).__name__


def _to_api_response(response: httpx.Response) -> ApiResponse:
    return ApiResponse(
        status=response.status_code,
        reason=response.reason_phrase,
        text=response.text,
    )


@dataclass(frozen=True, slots=True)
class RecordedRequest:
    """A request seen by MockHttpClient."""

    method: str
    url: str
    headers: dict[str, str]
    json: dict[str, object] | None = None
    fields: dict[str, str] | None = None
    file: UploadFile | None = None


class MockHttpClient:
    """Mock HTTP client for testing.

    Responses are queued per URL and consumed in order; an unqueued URL
    answers 404.

    Usage:
        client = MockHttpClient()
        client.queue(url, ApiResponse(201, "Created", '{"id": 1}'))
        result = client.post_json(url, {}, {})
        assert client.requests[0].url == url
    """

    def __init__(self) -> None:
        self._responses: dict[str, list[ApiResponse | HttpError]] = {}
        self.requests: list[RecordedRequest] = []

    def queue(self, url: str, response: ApiResponse | HttpError) -> None:
        self._responses.setdefault(url, []).append(response)

    def requests_to(self, url: str) -> list[RecordedRequest]:
        return [r for r in self.requests if r.url == url]

    def post_json(
        self,
        url: str,
        payload: dict[str, object],
        headers: dict[str, str],
    ) -> Result[ApiResponse, HttpError]:
        self.requests.append(
            RecordedRequest(method="POST", url=url, headers=dict(headers), json=dict(payload))
        )
        return self._next(url)

    def post_multipart(
        self,
        url: str,
        fields: dict[str, str],
        file: UploadFile,
        headers: dict[str, str],
    ) -> Result[ApiResponse, HttpError]:
        self.requests.append(
            RecordedRequest(
                method="POST",
                url=url,
                headers=dict(headers),
                fields=dict(fields),
                file=file,
            )
        )
        return self._next(url)

    def _next(self, url: str) -> Result[ApiResponse, HttpError]:
        pending = self._responses.get(url)
        if not pending:
            return Ok(ApiResponse(status=404, reason="Not Found", text="not found (mock)"))
        response = pending.pop(0)
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)
