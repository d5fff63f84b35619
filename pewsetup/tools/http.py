"""HTTP client abstraction for the release API.

This module provides:
- HttpClient: Protocol for HTTP operations (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import http.client
import json
import ssl
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Any, Protocol, cast, runtime_checkable

from pewsetup import __version__
from pewsetup.core.result import Err, Ok, Result
from pewsetup.core.structured import as_str_dict

__all__ = [
    "ACCEPT_JSON",
    "ACCEPT_OCTET_STREAM",
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
]

ACCEPT_JSON = "application/vnd.github+json"
ACCEPT_OCTET_STREAM = "application/octet-stream"


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations.

    This abstraction allows injecting mock clients for testing,
    avoiding real network calls in unit tests.
    """

    def get_json(self, url: str) -> Result[dict[str, Any], HttpError]:
        """Fetch URL and parse the body as a JSON object."""
        ...

    def get_text(self, url: str) -> Result[str, HttpError]:
        """Fetch URL and return the body as text."""
        ...

    def get_bytes(self, url: str, *, accept: str = ACCEPT_OCTET_STREAM) -> Result[bytes, HttpError]:
        """Fetch URL as an opaque byte stream.

        Args:
            url: URL to fetch
            accept: Accept header; binary by default

        Returns:
            Ok with the raw body, or Err with HttpError
        """
        ...


class _DropAuthOnHostChange(urllib.request.HTTPRedirectHandler):
    """Redirect handler that never forwards credentials to another host.

    Release assets redirect to pre-signed storage URLs which reject
    requests carrying a second authorization mechanism.
    """

    def redirect_request(self, req, fp, code, msg, headers, newurl):  # type: ignore[no-untyped-def]
        new = super().redirect_request(req, fp, code, msg, headers, newurl)
        if new is None:
            return None
        old_host = urllib.parse.urlsplit(req.full_url).netloc
        new_host = urllib.parse.urlsplit(new.full_url).netloc
        if old_host != new_host:
            new.remove_header("Authorization")
        return new


class RealHttpClient:
    """Real HTTP client using urllib.

    Handles:
    - HTTPS with system certificates
    - Bearer token authentication
    - Per-request Accept negotiation (JSON API vs binary asset)
    - Timeout handling
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        timeout: float = 30.0,
        user_agent: str = f"setup-pewbuild/{__version__}",
    ) -> None:
        """Initialize HTTP client.

        Args:
            token: Credential sent as a bearer token, if any
            timeout: Request timeout in seconds
            user_agent: User-Agent header value
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self._token = token
        self._opener = urllib.request.build_opener(
            urllib.request.HTTPSHandler(context=ssl.create_default_context()),
            _DropAuthOnHostChange(),
        )

    def _headers(self, accept: str) -> dict[str, str]:
        headers = {"User-Agent": self.user_agent, "Accept": accept}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _request(self, url: str, accept: str) -> Result[bytes, HttpError]:
        try:
            req = urllib.request.Request(url, headers=self._headers(accept))
            with self._opener.open(req, timeout=self.timeout) as response:
                return Ok(response.read())
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except http.client.HTTPException as e:
            # Truncated body (IncompleteRead) or a malformed status line.
            return Err(HttpError(url=url, status=0, message=str(e)))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

    def get_json(self, url: str) -> Result[dict[str, Any], HttpError]:
        result = self.get_text(url)
        if isinstance(result, Err):
            return result

        try:
            data = as_str_dict(json.loads(result.value))
        except json.JSONDecodeError as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))
        if data is None:
            return Err(HttpError(url=url, status=0, message="Expected JSON object"))
        return Ok(cast(dict[str, Any], data))

    def get_text(self, url: str) -> Result[str, HttpError]:
        result = self._request(url, ACCEPT_JSON)
        if isinstance(result, Err):
            return result

        try:
            return Ok(result.value.decode("utf-8"))
        except UnicodeDecodeError as e:
            return Err(HttpError(url=url, status=0, message=f"Decode error: {e}"))

    def get_bytes(self, url: str, *, accept: str = ACCEPT_OCTET_STREAM) -> Result[bytes, HttpError]:
        return self._request(url, accept)


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_json("https://api.example.com/data", {"key": "value"})
        result = client.get_json("https://api.example.com/data")
        assert result == Ok({"key": "value"})
    """

    def __init__(self) -> None:
        self._json_responses: dict[str, dict[str, Any] | HttpError] = {}
        self._text_responses: dict[str, str | HttpError] = {}
        self._bytes_responses: dict[str, bytes | HttpError] = {}
        self.calls: list[tuple[str, str]] = []

    def set_json(self, url: str, response: dict[str, Any] | HttpError) -> None:
        self._json_responses[url] = response

    def set_text(self, url: str, response: str | HttpError) -> None:
        self._text_responses[url] = response

    def set_bytes(self, url: str, response: bytes | HttpError) -> None:
        self._bytes_responses[url] = response

    def _lookup[T](self, table: dict[str, T | HttpError], url: str) -> Result[T, HttpError]:
        if url not in table:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))
        response = table[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def get_json(self, url: str) -> Result[dict[str, Any], HttpError]:
        self.calls.append(("get_json", url))
        return self._lookup(self._json_responses, url)

    def get_text(self, url: str) -> Result[str, HttpError]:
        self.calls.append(("get_text", url))
        return self._lookup(self._text_responses, url)

    def get_bytes(self, url: str, *, accept: str = ACCEPT_OCTET_STREAM) -> Result[bytes, HttpError]:
        self.calls.append(("get_bytes", url))
        return self._lookup(self._bytes_responses, url)
