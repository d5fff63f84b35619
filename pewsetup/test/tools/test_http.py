"""Tests for tools/http.py - HTTP client abstraction."""

import http.client
import urllib.request
from email.message import Message
from typing import Self

import pytest

from pewsetup.core.result import Err, Ok
from pewsetup.tools.http import (
    ACCEPT_JSON,
    ACCEPT_OCTET_STREAM,
    HttpClient,
    HttpError,
    MockHttpClient,
    RealHttpClient,
    _DropAuthOnHostChange,
)


class TestHttpError:
    def test_str_with_status(self) -> None:
        error = HttpError(url="https://example.com/api", status=500, message="Internal Error")
        assert str(error) == "HTTP 500: Internal Error (https://example.com/api)"

    def test_str_without_status(self) -> None:
        error = HttpError(url="https://example.com", status=0, message="Timeout")
        assert str(error) == "Timeout (https://example.com)"

    def test_is_frozen(self) -> None:
        error = HttpError(url="https://example.com", status=404, message="Not Found")
        with pytest.raises(AttributeError):
            error.status = 500  # type: ignore[misc]


class TestMockHttpClient:
    def test_isinstance_check(self) -> None:
        assert isinstance(MockHttpClient(), HttpClient)

    def test_get_json_success(self) -> None:
        client = MockHttpClient()
        client.set_json("https://api.example.com/data", {"key": "value"})

        assert client.get_json("https://api.example.com/data") == Ok({"key": "value"})

    def test_unknown_url_is_404(self) -> None:
        client = MockHttpClient()

        result = client.get_text("https://api.example.com/unknown")

        assert isinstance(result, Err)
        assert result.error.status == 404

    def test_get_bytes_error_response(self) -> None:
        client = MockHttpClient()
        client.set_bytes(
            "https://example.com/asset",
            HttpError(url="https://example.com/asset", status=500, message="Server Error"),
        )

        result = client.get_bytes("https://example.com/asset")

        assert isinstance(result, Err)
        assert result.error.status == 500

    def test_records_calls(self) -> None:
        client = MockHttpClient()
        client.set_bytes("https://example.com/a", b"abc")

        client.get_bytes("https://example.com/a")
        client.get_json("https://example.com/b")

        assert client.calls == [
            ("get_bytes", "https://example.com/a"),
            ("get_json", "https://example.com/b"),
        ]


class TestRealHttpClientHeaders:
    def test_isinstance_check(self) -> None:
        assert isinstance(RealHttpClient(), HttpClient)

    def test_bearer_token(self) -> None:
        client = RealHttpClient("secret")

        headers = client._headers(ACCEPT_JSON)

        assert headers["Authorization"] == "Bearer secret"
        assert headers["Accept"] == ACCEPT_JSON
        assert headers["User-Agent"].startswith("setup-pewbuild/")

    def test_no_token_no_authorization(self) -> None:
        headers = RealHttpClient()._headers(ACCEPT_OCTET_STREAM)

        assert "Authorization" not in headers
        assert headers["Accept"] == ACCEPT_OCTET_STREAM

    def test_invalid_url_is_error(self) -> None:
        result = RealHttpClient(timeout=1.0).get_bytes("not a url")

        assert isinstance(result, Err)
        assert result.error.status == 0


class _TruncatedResponse:
    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None

    def read(self) -> bytes:
        raise http.client.IncompleteRead(b"MZ", 1024)


class _TruncatingOpener:
    def __init__(self) -> None:
        self.requests: list[urllib.request.Request] = []

    def open(self, req: urllib.request.Request, timeout: float) -> _TruncatedResponse:
        self.requests.append(req)
        return _TruncatedResponse()


class TestRealHttpClientTransport:
    def test_truncated_download_is_error(self) -> None:
        client = RealHttpClient("secret")
        opener = _TruncatingOpener()
        client._opener = opener  # type: ignore[assignment]

        result = client.get_bytes("https://api.github.com/repos/o/r/releases/assets/1")

        assert isinstance(result, Err)
        assert result.error.status == 0
        assert result.error.url == "https://api.github.com/repos/o/r/releases/assets/1"
        assert "IncompleteRead" in result.error.message
        assert len(opener.requests) == 1

    def test_truncated_json_is_error(self) -> None:
        client = RealHttpClient()
        client._opener = _TruncatingOpener()  # type: ignore[assignment]

        result = client.get_json("https://api.github.com/repos/o/r/releases/latest")

        assert isinstance(result, Err)


class TestRedirectHandler:
    def _redirect(self, old: str, new: str) -> urllib.request.Request | None:
        req = urllib.request.Request(old, headers={"Authorization": "Bearer t", "Accept": "x"})
        handler = _DropAuthOnHostChange()
        return handler.redirect_request(req, None, 302, "Found", Message(), new)

    def test_drops_auth_on_host_change(self) -> None:
        new = self._redirect(
            "https://api.github.com/repos/o/r/releases/assets/1",
            "https://objects.githubusercontent.com/signed?sig=abc",
        )

        assert new is not None
        assert not new.has_header("Authorization")
        assert new.get_header("Accept") == "x"

    def test_keeps_auth_on_same_host(self) -> None:
        new = self._redirect(
            "https://api.github.com/repos/o/r/releases/assets/1",
            "https://api.github.com/repos/o/r/releases/assets/2",
        )

        assert new is not None
        assert new.get_header("Authorization") == "Bearer t"
